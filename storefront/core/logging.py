import logging
import sys
import time
from contextlib import contextmanager
from typing import Optional
from storefront.core.config import settings

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

COLOR_GREEN = "\x1b[32m"
COLOR_ORANGE = "\x1b[38;5;208m"
COLOR_BLUE = "\x1b[34m"
COLOR_RED = "\x1b[31m"
COLOR_YELLOW = "\x1b[33m"
COLOR_RESET = "\x1b[0m"
BOLD = "\x1b[1m"

LEVEL_COLORS = {
    logging.DEBUG: COLOR_BLUE,
    logging.INFO: COLOR_RESET,
    SUCCESS: COLOR_GREEN,
    logging.WARNING: COLOR_ORANGE,
    logging.ERROR: COLOR_RED,
    logging.CRITICAL: COLOR_RED,
}


class LocationFormatter(logging.Formatter):
    """Prefixes every message with the calling file, line and a millisecond timestamp."""

    def __init__(self, colors: bool = True):
        super().__init__(datefmt="%Y-%m-%d %H:%M:%S")
        self.colors = colors

    def format(self, record: logging.LogRecord) -> str:
        timestamp = f"{self.formatTime(record, self.datefmt)}.{int(record.msecs):03d}"
        message = record.getMessage()
        if record.exc_info:
            message = f"{message}\n{self.formatException(record.exc_info)}"
        if not self.colors:
            return f"--- {record.filename}:{record.lineno}, :{timestamp}:\n    [{record.levelname}]: {message}"
        color = LEVEL_COLORS.get(record.levelno, COLOR_RESET)
        return (
            f"{COLOR_GREEN}--- {record.filename}{COLOR_RESET}:{COLOR_ORANGE}{record.lineno}, "
            f"{COLOR_BLUE}:{timestamp}:\n {color}{BOLD}   [{record.levelname}]: "
            f"{COLOR_RESET}{color}{message}{COLOR_RESET}"
        )


def setup_logging(level: Optional[str] = None, colors: Optional[bool] = None):
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(LocationFormatter(settings.LOG_COLORS if colors is None else colors))

    root = logging.getLogger("storefront")
    root.handlers = [handler]
    root.setLevel((level or settings.LOG_LEVEL).upper())
    root.propagate = False
    return root


def log_success(logger: logging.Logger, message: str, *args):
    logger.log(SUCCESS, message, *args, stacklevel=2)


@contextmanager
def log_performance(logger: logging.Logger, label: str):
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("%s took %.3fms", label, elapsed)
