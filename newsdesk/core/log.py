from __future__ import annotations

import sys

from loguru import logger

from newsdesk.core.config import Settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} - {message}"


def configure_logger(settings: Settings):
    """Route loguru output to stdout and, when ``LOG_FILE`` is set, to a rotating file."""
    level = (settings.log_level or "INFO").upper()

    # create_app can run more than once per process (tests); start from no sinks
    logger.remove()
    logger.add(sys.stdout, level=level, colorize=True, format=CONSOLE_FORMAT)

    if settings.log_file:
        logger.add(
            f"{settings.log_file}.log",
            level=level,
            rotation="1 MB",
            retention=7,
            encoding="utf-8",
            format=FILE_FORMAT,
        )

    return logger
