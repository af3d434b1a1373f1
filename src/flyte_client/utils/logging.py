"""Logging setup for the Flyte client and its command line."""

import logging
import sys
from typing import Any

from ..models.config import LOG_LEVELS

DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers of the HTTP stack; they log every request at DEBUG/INFO.
TRANSPORT_LOGGERS = ("httpx", "httpcore")


def setup_logging(
    level: str = "INFO",
    format_string: str | None = None,
    stream: Any = None,
) -> logging.Logger:
    """Configure logging for the client.

    Records from the HTTP transport are held at WARNING unless ``level`` is
    DEBUG, so request chatter does not drown the bootstrap messages.

    Args:
        level: One of DEBUG, INFO, WARNING, ERROR, CRITICAL (any case)
        format_string: Custom format string for log messages
        stream: Output stream for logging (defaults to stderr)

    Returns:
        The ``flyte_client`` logger
    """
    name = level.upper()
    if name not in LOG_LEVELS:
        raise ValueError(f"Unknown log level: {level}")
    log_level = logging.getLevelName(name)

    if stream is None:
        stream = sys.stderr

    logging.basicConfig(
        level=log_level,
        format=format_string or DEFAULT_FORMAT,
        stream=stream,
        force=True,
    )

    transport_level = log_level if log_level == logging.DEBUG else logging.WARNING
    for transport in TRANSPORT_LOGGERS:
        logging.getLogger(transport).setLevel(transport_level)

    logger = logging.getLogger("flyte_client")
    logger.setLevel(log_level)
    return logger
