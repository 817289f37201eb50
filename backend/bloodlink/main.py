# bloodlink/main.py
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from bloodlink.core.config import ConfigError, Settings, load_settings
from bloodlink.core.db import connect, ensure_indexes
from bloodlink.core.logger import setup_logger
from bloodlink.errors import install_error_handlers
from bloodlink.frontend import mount_frontend
from bloodlink.routers import contact as contact_router
from bloodlink.routers import donors as donors_router
from bloodlink.routers import requests as requests_router

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, client=None) -> FastAPI:
    """Build the API.

    ``client`` replaces the Motor client the lifespan would otherwise create
    from ``settings.mongo_uri``.
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # one connection for the life of the process; failure here stops startup
        mongo_client, db = await connect(settings, client=client)
        app.state.mongo_client = mongo_client
        app.state.db = db
        try:
            await ensure_indexes(db)
            yield
        finally:
            mongo_client.close()

    app = FastAPI(lifespan=lifespan, title="BloodLink API")
    app.state.settings = settings

    install_error_handlers(app)

    # CORS: open to everyone unless a single origin is configured
    if settings.cors_origin:
        origins, credentials = [settings.cors_origin], True
    else:
        origins, credentials = ["*"], False
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ---------------- Include routers ----------------
    app.include_router(donors_router.router)      # /api/donors
    app.include_router(requests_router.router)    # /api/requests
    app.include_router(contact_router.router)     # /api/contact

    # Health
    @app.get("/api/health")
    def health():
        return {"status": "ok"}

    if settings.is_production:
        # must stay last: catches every non-/api path
        mount_frontend(app, settings.frontend_dir)
    else:
        @app.get("/", response_class=PlainTextResponse)
        def root():
            return "Blood donation API is running"

    return app


def run() -> None:
    """Console entry point: load config, then serve until interrupted."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        setup_logger()
        logger.error("%s", exc)
        sys.exit(1)

    setup_logger(settings.log_level)
    app = create_app(settings)
    logger.info("Server running at http://localhost:%s (%s)", settings.port, settings.environment)
    # uvicorn exits non-zero if the lifespan cannot reach the store
    uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    run()
