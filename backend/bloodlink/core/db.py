# bloodlink/core/db.py
import logging
from typing import Tuple

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from bloodlink.core.config import Settings

logger = logging.getLogger(__name__)

# collection names match the ones the site has always written to
DONORS = "donors"
REQUESTS = "requests"
CONTACT_MESSAGES = "contactmessages"
COLLECTIONS = (DONORS, REQUESTS, CONTACT_MESSAGES)


class DatabaseUnavailable(RuntimeError):
    """Raised when the store cannot be reached at startup."""


def create_client(settings: Settings) -> AsyncIOMotorClient:
    return AsyncIOMotorClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=5000,
        socketTimeoutMS=45000,
        tz_aware=True,
    )


async def connect(settings: Settings, client=None) -> Tuple[AsyncIOMotorClient, AsyncIOMotorDatabase]:
    """Open the store and make sure it answers before any traffic is accepted.

    The database named in the URI wins; ``settings.mongo_db`` is used when the
    URI has none.
    """
    client = client if client is not None else create_client(settings)
    db = client.get_default_database(default=settings.mongo_db)
    try:
        await db.command("ping")
    except PyMongoError as exc:
        logger.error("MongoDB connection error: %s", exc)
        client.close()
        raise DatabaseUnavailable(str(exc)) from exc
    logger.info("MongoDB connected successfully (database %r)", db.name)
    return client, db


async def ensure_indexes(db: AsyncIOMotorDatabase) -> None:
    """Create the createdAt index listings sort on, where it is missing.

    Failures are logged and skipped; the service runs without the index.
    """
    for name in COLLECTIONS:
        try:
            existing = [ix["name"] async for ix in db[name].list_indexes()]
            if "createdAt_-1" in existing:
                continue
            await db[name].create_index([("createdAt", DESCENDING)], name="createdAt_-1")
        except PyMongoError as exc:
            logger.warning("Could not create createdAt index on %s: %s", name, exc)
            continue
        logger.info("Created createdAt index on %s", name)
