"""Logging configuration helpers."""

import logging
import sys


def configure_logging(level: str = "INFO") -> None:
    """Configure application logging with a single stderr handler.

    stdout is reserved for the stdio MCP transport, so records never go there.
    """
    logger = logging.getLogger("jsoncut_mcp")
    logger.setLevel(level.upper())
    if logger.handlers:
        return
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
