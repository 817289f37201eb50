# bloodlink/core/logger.py
import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def setup_logger(level: str = "INFO") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
    # quiet the driver's own topology chatter
    logging.getLogger("pymongo").setLevel(logging.WARNING)
