# bloodlink/asgi.py
"""ASGI entry point, for ``uvicorn bloodlink.asgi:app``.

Settings are read at import time, so MONGO_URI must be set before the server
imports this module.
"""
import logging
import sys

from bloodlink.core.config import ConfigError, load_settings
from bloodlink.core.logger import setup_logger
from bloodlink.main import create_app

try:
    settings = load_settings()
except ConfigError as exc:
    setup_logger()
    logging.getLogger(__name__).error("%s", exc)
    sys.exit(1)

setup_logger(settings.log_level)
app = create_app(settings)
