"""
Bookmark exporters.

This module provides exporters for the JSON and OPML formats.
"""

from .base import BookmarkExporter, ExportResult
from .json_exporter import JSONExporter
from .opml_exporter import OPMLExporter
from ...utils.error_handler import ExportError

__all__ = [
    "BookmarkExporter",
    "ExportResult",
    "ExportError",
    "JSONExporter",
    "OPMLExporter",
    "get_exporter",
]


# Format registry for easy access
EXPORTERS = {
    "json": JSONExporter,
    "opml": OPMLExporter,
}


def get_exporter(format_name: str) -> type:
    """
    Get an exporter class by format name.

    Args:
        format_name: Name of the format (json, opml)

    Returns:
        Exporter class for the specified format

    Raises:
        ValueError: If format is not supported
    """
    format_lower = format_name.lower()
    if format_lower not in EXPORTERS:
        supported = ", ".join(sorted(EXPORTERS))
        raise ValueError(
            f"Unsupported export format: {format_name}. "
            f"Supported formats: {supported}"
        )
    return EXPORTERS[format_lower]
