# tests/conftest.py
import pytest
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient
from pymongo.errors import ServerSelectionTimeoutError

from bloodlink.core.config import Settings
from bloodlink.db import get_db
from bloodlink.main import create_app


@pytest.fixture(scope="session")
def anyio_backend():
    # keep AnyIO on asyncio for the whole test session
    return "asyncio"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        mongo_uri="mongodb://localhost:27017/bloodlink_test",
        environment="development",
        frontend_dir=tmp_path / "frontend",
    )


@pytest.fixture
def mock_db():
    return AsyncMongoMockClient()["bloodlink_test"]


def _open_client(app, db):
    # the lifespan is not run here; the database comes in through the dependency
    app.dependency_overrides[get_db] = lambda: db
    transport = ASGITransport(app=app, raise_app_exceptions=True)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def open_client():
    return _open_client


@pytest.fixture
async def test_client(settings, mock_db):
    app = create_app(settings)
    async with _open_client(app, mock_db) as ac:
        yield ac


# --------------------------
# Store doubles
# --------------------------
class BrokenCollection:
    async def insert_one(self, doc):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")

    def find(self, *args, **kwargs):
        raise ServerSelectionTimeoutError("localhost:27017: connection refused")


class BrokenDb:
    def __getitem__(self, name):
        return BrokenCollection()


@pytest.fixture
async def broken_client(settings):
    app = create_app(settings)
    async with _open_client(app, BrokenDb()) as ac:
        yield ac
