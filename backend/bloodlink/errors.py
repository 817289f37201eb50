# bloodlink/errors.py
import logging
import math

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

SERVER_ERROR = "Server error"
INVALID_JSON = "Invalid JSON payload"


def is_missing(value) -> bool:
    """A required field counts as missing when it is absent or falsy.

    Falsy means None, False, "", or a number equal to zero (NaN included).
    Lists and objects are present even when empty. Zero being "missing" is
    deliberate: a blood request for 0 units is rejected.
    """
    if value is None or value is False:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, float):
        return value == 0 or math.isnan(value)
    if isinstance(value, int):
        return value == 0
    return False


def bad_request(message: str) -> HTTPException:
    return HTTPException(status_code=400, detail=message)


def server_error(exc: Exception, what: str) -> HTTPException:
    """Log the real cause and hand back an opaque 500 for the caller."""
    logger.error("%s failed: %s", what, exc, exc_info=exc)
    return HTTPException(status_code=500, detail=SERVER_ERROR)


async def _http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def _validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": INVALID_JSON}, status_code=400)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
