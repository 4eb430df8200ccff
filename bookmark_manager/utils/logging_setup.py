"""
Logging configuration for the Bookmark Manager.

This module sets up logging based on configuration settings.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    config=None,
    log_file: Optional[Union[str, Path]] = None,
    level: Optional[str] = None,
) -> None:
    """
    Set up logging configuration.

    Console output goes to stderr so that exported documents written to
    stdout stay clean.

    Args:
        config: BookmarkManagerConfig providing ``log_level`` and ``log_file``
        log_file: Optional log file path override
        level: Optional level name override (e.g. "DEBUG")
    """
    log_level = level or (config.log_level if config is not None else "WARNING")
    if log_file is None and config is not None:
        log_file = config.log_file

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    # Configure handlers
    handlers = []

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    # Configure root logger
    logging.basicConfig(
        level=getattr(logging, log_level.upper()), handlers=handlers, force=True
    )

    logger = logging.getLogger(__name__)
    logger.debug(f"Log level: {log_level}")
    if log_file:
        logger.debug(f"Log file: {log_file}")

    # Reduce noise from encoding detection
    logging.getLogger("chardet").setLevel(logging.WARNING)
