"""Logging setup shared by the bridge and the MCP server."""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

from .constants import LOG_FORMAT


def configure_logging(
    level: Union[str, int] = "INFO",
    log_file: Optional[Path] = None,
) -> None:
    """
    Configure root logging to stderr, plus an optional UTF-8 log file.

    stdout is left untouched so the MCP stdio transport stays clean.

    Args:
        level: Logging level name or number
        log_file: Optional file to append log records to
    """
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )
    logger = logging.getLogger(__name__)

    if log_file is None:
        return

    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(file_handler)
        logger.info(f"Logging to file: {log_file}")
    except OSError as e:
        logger.error(f"Failed to setup file logging at {log_file}: {e}")
