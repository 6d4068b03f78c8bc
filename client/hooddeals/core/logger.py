# client/hooddeals/core/logger.py

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from hooddeals.core.config_loader import settings


# -------------------------------------------------------------------
# Where the device log lives
# -------------------------------------------------------------------
LOG_DIR = Path(settings.LOG_DIR)
LOG_DIR.mkdir(parents=True, exist_ok=True)
LOG_FILE = LOG_DIR / "hooddeals.log"

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"

# bodies echoed into the log are cut to this many characters
BODY_EXCERPT_CHARS = 300


def _file_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=5 * 1024 * 1024,   # 5 MB
        backupCount=5,
        encoding="utf-8",
    )
    handler.setFormatter(formatter)
    handler.setLevel(settings.LOG_LEVEL)
    return handler


def _console_handler(formatter: logging.Formatter) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    # chatty on a dev box, quiet on a device
    handler.setLevel(logging.DEBUG if settings.environment == "development" else logging.WARNING)
    return handler


# -------------------------------------------------------------------
# GLOBAL LOGGER
# -------------------------------------------------------------------
logger = logging.getLogger("hood_deals")
logger.setLevel(logging.DEBUG)
logger.propagate = False

if not logger.handlers:
    _formatter = logging.Formatter(LOG_FORMAT)
    logger.addHandler(_file_handler(_formatter))
    logger.addHandler(_console_handler(_formatter))


def get_logger(name: str) -> logging.Logger:
    """Child logger sharing the hood_deals handlers."""
    return logger.getChild(name)


def excerpt(body, limit: int = BODY_EXCERPT_CHARS) -> str:
    text = body if isinstance(body, str) else repr(body)
    if len(text) <= limit:
        return text
    return text[:limit] + "..."
