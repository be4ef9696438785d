"""Logging setup for a single backup run."""

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(debug: bool = False) -> logging.Logger:
    """
    Configure and return the package logger.

    Only the ``gist_backup`` logger is touched, never the root logger, so
    calling this twice replaces the handler instead of stacking a second one.
    """
    logger = logging.getLogger("gist_backup")
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(handler)
    return logger
