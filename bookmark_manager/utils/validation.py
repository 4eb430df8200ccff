"""
Input validation utilities for the Bookmark Manager.

This module provides validation functions for command-line arguments
and for the fields of new bookmarks.
"""

import os
from pathlib import Path
from typing import Any, Dict, Union

from bookmark_manager.utils.error_handler import ValidationError


def validate_input_file(file_path: Union[str, Path]) -> Path:
    """
    Validate that an import file exists and is readable.

    Args:
        file_path: Path to the input file

    Returns:
        Validated absolute Path object

    Raises:
        ValidationError: If file doesn't exist or isn't readable
    """
    if not file_path:
        raise ValidationError("Input file is required")

    path = Path(file_path)

    if not path.exists():
        raise ValidationError(f"Input file does not exist: {file_path}")

    if not path.is_file():
        raise ValidationError(f"Input path is not a file: {file_path}")

    if not os.access(path, os.R_OK):
        raise ValidationError(f"Input file is not readable: {file_path}")

    return path.absolute()


def validate_output_file(file_path: Union[str, Path]) -> Path:
    """
    Validate that an export file can be written.

    Args:
        file_path: Path to the output file

    Returns:
        Validated absolute Path object

    Raises:
        ValidationError: If the path is a directory or its parent is not writable
    """
    path = Path(file_path)

    if path.is_dir():
        raise ValidationError(f"Output path is a directory: {file_path}")

    parent = path.parent if str(path.parent) else Path(".")
    if parent.exists() and not os.access(parent, os.W_OK):
        raise ValidationError(f"Output directory is not writable: {parent}")

    return path.absolute()


def validate_config_file(file_path: Union[str, Path, None]) -> Union[Path, None]:
    """
    Validate an optional configuration file path.

    Returns:
        Validated Path, or None when no path was given

    Raises:
        ValidationError: If the file is missing or has an unsupported suffix
    """
    if file_path is None:
        return None

    path = Path(file_path)

    if not path.exists():
        raise ValidationError(f"Configuration file does not exist: {file_path}")

    if path.suffix.lower() not in (".toml", ".json"):
        raise ValidationError(
            f"Configuration file must be TOML or JSON, got: {path.suffix}"
        )

    return path.absolute()


def validate_bookmark_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check and clean the fields of a new bookmark.

    Strings are stripped; ``title`` and ``url`` must be non-empty.

    Raises:
        ValidationError: If a required field is missing or a field has the
            wrong type
    """
    cleaned = dict(fields)

    for key in ("title", "url", "desc", "icon"):
        value = cleaned.get(key)
        if value is None:
            continue
        if not isinstance(value, str):
            raise ValidationError(f"Field '{key}' must be a string")
        cleaned[key] = value.strip()

    categories = cleaned.get("categories")
    if categories is not None:
        if not isinstance(categories, list) or not all(
            isinstance(c, str) for c in categories
        ):
            raise ValidationError("Field 'categories' must be a list of strings")

    if not cleaned.get("title"):
        raise ValidationError("Bookmark title is required")

    if not cleaned.get("url"):
        raise ValidationError("Bookmark URL is required")

    return cleaned
