"""Structured JSON logging for the exporter."""

import logging
import sys
from typing import IO, Optional

from pythonjsonlogger.json import JsonFormatter

LOG_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


def setup_logger(
    name: str = "onlyoffice_exporter",
    level: str = "INFO",
    stream: Optional[IO[str]] = None
) -> logging.Logger:
    """
    Configure a logger writing one JSON object per record.

    Calling it again for the same name replaces the handler instead of
    adding a second one.

    Args:
        name: Logger name; component loggers are children of it
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        stream: Output stream, stdout by default

    Returns:
        logging.Logger: Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())
    logger.handlers = []

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonFormatter(
        LOG_FORMAT,
        rename_fields={"levelname": "level", "name": "logger"},
        timestamp=True,
    ))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
