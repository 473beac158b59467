import logging

from guestbook.config import settings

LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logger(level: str = None) -> logging.Logger:
    """Configure the root logger once and return the package logger."""
    level = level or settings.LOG_LEVEL
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(
            level=getattr(logging, level, logging.INFO),
            format=LOG_FORMAT,
            datefmt=DATE_FORMAT,
        )
    else:
        root.setLevel(getattr(logging, level, logging.INFO))
    return logging.getLogger("guestbook")
