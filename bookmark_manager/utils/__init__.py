"""
Utility modules for the bookmark manager.

This package contains the exception hierarchy, input validation and
logging setup.
"""

from .error_handler import (
    BookmarkManagerError,
    ConfigurationError,
    DuplicateIdError,
    ExportError,
    ImportFormatError,
    StorageUnavailableError,
    StorageWriteError,
    ValidationError,
)
from .logging_setup import setup_logging

__all__ = [
    "BookmarkManagerError",
    "ConfigurationError",
    "DuplicateIdError",
    "ExportError",
    "ImportFormatError",
    "StorageUnavailableError",
    "StorageWriteError",
    "ValidationError",
    "setup_logging",
]
