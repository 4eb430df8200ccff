"""
Exception hierarchy for the Bookmark Manager.

All custom exceptions for the project are defined here. Library code
raises them; the command-line interface is the only place that catches
them and turns them into user-facing messages.
"""

from pathlib import Path
from typing import Optional


# ============================================================================
# Unified Exception Hierarchy for Bookmark Manager
# ============================================================================


class BookmarkManagerError(Exception):
    """Base exception for all bookmark manager errors."""

    pass


# ============================================================================
# Validation Errors
# ============================================================================


class ValidationError(BookmarkManagerError):
    """Invalid user input (missing fields, unusable paths)."""

    pass


# ============================================================================
# Configuration Errors
# ============================================================================


class ConfigurationError(BookmarkManagerError):
    """Configuration file missing, unreadable or invalid."""

    pass


# ============================================================================
# Storage Errors
# ============================================================================


class StorageError(BookmarkManagerError):
    """Base class for persistent slot errors."""

    def __init__(self, message: str, slot_key: Optional[str] = None):
        self.message = message
        self.slot_key = slot_key
        super().__init__(f"[{slot_key}] {message}" if slot_key else message)


class StorageUnavailableError(StorageError):
    """The slot could not be read or holds content that does not parse."""

    pass


class StorageWriteError(StorageError):
    """Writing the slot failed (disk full, permissions, quota)."""

    pass


# ============================================================================
# Data Errors
# ============================================================================


class DataError(BookmarkManagerError):
    """Base class for data-related errors."""

    pass


class DuplicateIdError(DataError):
    """A bookmark id is already present in the list."""

    def __init__(self, bookmark_id: str):
        self.bookmark_id = bookmark_id
        super().__init__(f"Duplicate bookmark id: {bookmark_id}")


# ============================================================================
# Import/Export Errors
# ============================================================================


class ImportFormatError(DataError):
    """Imported text is not valid JSON or not a JSON array."""

    pass


class ExportError(DataError):
    """
    Exception raised when export fails.

    Attributes:
        message: Error description
        format_name: Name of the export format
        path: Target path if available
        original_error: Underlying exception if any
    """

    def __init__(
        self,
        message: str,
        format_name: Optional[str] = None,
        path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.format_name = format_name
        self.path = path
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = []
        if self.format_name:
            parts.append(f"[{self.format_name}]")
        parts.append(self.message)
        if self.path:
            parts.append(f"(path: {self.path})")
        if self.original_error:
            parts.append(
                f"Caused by: {type(self.original_error).__name__}: {self.original_error}"
            )
        return " ".join(parts)
