"""Logging configuration for note-search."""

import os
import sys

from loguru import logger


def configure_logging(*, verbose: bool = False) -> None:
    """Send loguru output to stderr (stdout belongs to the CLI and the MCP stdio transport).

    NOTE_SEARCH_LOG_LEVEL overrides the level picked from ``verbose``.
    """
    logger.remove()
    level = os.environ.get("NOTE_SEARCH_LOG_LEVEL") or ("DEBUG" if verbose else "INFO")
    logger.add(sys.stderr, level=level.upper(), format="{level.icon} {message}")
