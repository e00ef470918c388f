"""Console logging on stderr; stdout is reserved for tick output."""

from __future__ import annotations

import logging
import sys

from colorlog import ColoredFormatter

LOG_FORMAT = (
    "%(green)s%(asctime)s%(reset)s [%(blue)s%(name)s%(reset)s] "
    "%(log_color)s%(levelname)s%(reset)s - %(message)s"
)


def setup_logging(level: int | str = logging.WARNING) -> logging.Logger:
    """Configure the ``detimer`` logger with a coloured stderr handler."""
    logger = logging.getLogger("detimer")
    logger.setLevel(level)

    # Avoid duplicate handlers when main() runs more than once (tests).
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        ColoredFormatter(
            LOG_FORMAT,
            datefmt="%H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "white",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
        )
    )
    logger.addHandler(handler)
    return logger
