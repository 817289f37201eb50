# bloodlink/frontend.py
import logging
import os
from pathlib import Path

from fastapi import FastAPI
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

API_PREFIX = "api"
ENTRY_DOCUMENT = "index.html"


class SPAStaticFiles(StaticFiles):
    """Built site files, with index.html standing in for unknown paths.

    /api paths are never served from here, and a missing index.html is a 500.
    """

    async def check_config(self) -> None:
        # a missing build directory is reported per request, not as a crash
        if self.directory is not None and not os.path.isdir(self.directory):
            return
        await super().check_config()

    async def get_response(self, path: str, scope):
        if path.startswith(API_PREFIX):
            raise HTTPException(status_code=404, detail="Not Found")
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404:
                raise

        entry = Path(self.directory) / ENTRY_DOCUMENT
        if not entry.is_file():
            logger.error("Frontend %s not found in %s. Ensure it's included in the deployment.",
                         ENTRY_DOCUMENT, self.directory)
            return PlainTextResponse("Frontend file not found.", status_code=500)
        return FileResponse(entry)


def mount_frontend(app: FastAPI, frontend_dir: Path) -> None:
    """Mount the built site at / after the API routers, so /api routes win."""
    app.mount("/", SPAStaticFiles(directory=frontend_dir, check_dir=False), name="frontend")
