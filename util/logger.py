# util/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional
from config.settings import settings

logging.captureWarnings(True)

TEXT_FMT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FMT = "%Y-%m-%dT%H:%M:%S%z"

# Chatty per-request loggers from the HTTP and Redis clients
QUIET_LOGGERS = ("httpx", "httpcore", "redis", "fastapi_limiter")


class ColoredFormatter(logging.Formatter):
    COLORS = {
        "DEBUG": "\033[37m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[41m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        # Work on a copy: other handlers see the same record object
        tinted = logging.makeLogRecord(record.__dict__)
        lvl = tinted.levelname
        tinted.levelname = f"{self.COLORS.get(lvl, self.RESET)}{lvl}{self.RESET}"
        return super().format(tinted)


def _console_handler(level: int) -> logging.Handler:
    ch = logging.StreamHandler(sys.stdout)
    ch.setLevel(level)
    # Colors only on a terminal; piped output (containers, CI) stays plain
    if sys.stdout.isatty():
        ch.setFormatter(ColoredFormatter(TEXT_FMT, datefmt=DATE_FMT))
    else:
        ch.setFormatter(logging.Formatter(TEXT_FMT, datefmt=DATE_FMT))
    return ch


def _file_handler(level: int) -> Optional[logging.Handler]:
    if not settings.LOG_TO_FILE:
        return None
    os.makedirs(settings.LOG_DIR, exist_ok=True)
    fh = RotatingFileHandler(
        os.path.join(settings.LOG_DIR, settings.LOG_FILE_NAME),
        maxBytes=settings.LOG_MAX_BYTES,
        backupCount=settings.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    fh.setLevel(level)
    fh.setFormatter(logging.Formatter(TEXT_FMT, datefmt=DATE_FMT))
    return fh


def init_logger() -> logging.Logger:
    """
    Configure the root logger once per process and return the app logger.

    stdout always; a size-rotated file under LOG_DIR when LOG_TO_FILE is set.
    Client libraries are held at WARNING so verification events stay readable.
    """
    root = logging.getLogger()
    app_logger = logging.getLogger(settings.LOGGER_NAME)
    if getattr(root, "_quiz_verifier_inited", False):
        return app_logger

    level = getattr(logging, (settings.LOG_LEVEL or "INFO").upper(), logging.INFO)
    root.setLevel(level)
    for h in list(root.handlers):
        root.removeHandler(h)

    for handler in (_console_handler(level), _file_handler(level)):
        if handler is not None:
            root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    logging.getLogger("uvicorn.access").setLevel(level)

    root._quiz_verifier_inited = True  # type: ignore[attr-defined]
    app_logger.debug(
        "logger.ready level=%s file=%s", logging.getLevelName(level), settings.LOG_TO_FILE
    )
    return app_logger
