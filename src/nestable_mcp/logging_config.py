"""JSON logging for the server process."""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

DEFAULT_LEVEL = "WARNING"


def configure_logging(level: Optional[str] = None) -> None:
    """Send JSON log lines to stderr.

    stdout is reserved for the MCP stdio transport. An unknown level name
    falls back to WARNING.
    """
    requested = (level or os.environ.get("NESTABLE_LOG_LEVEL", DEFAULT_LEVEL)).upper()
    level = requested if isinstance(logging.getLevelName(requested), int) else DEFAULT_LEVEL

    logger = logging.getLogger()
    logger.setLevel(level)
    handler = logging.StreamHandler(sys.stderr)
    formatter = JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(formatter)
    logger.handlers = [handler]

    if level != requested:
        logger.warning("Unknown log level %r, using %s", requested, DEFAULT_LEVEL)
