"""
JSON bookmark exporter.

Exports the list in exactly the shape it is stored in, so the output can be
imported back or used as a backup.
"""

import json
from typing import List, Optional

from .base import BookmarkExporter
from ..data_models import Bookmark


class JSONExporter(BookmarkExporter):
    """
    Export bookmarks to a JSON array.

    Example:
        >>> exporter = JSONExporter(indent=2)
        >>> text = exporter.render(bookmarks)
    """

    def __init__(self, indent: Optional[int] = 2, ensure_ascii: bool = False):
        """
        Initialize the JSON exporter.

        Args:
            indent: Spaces per indentation level (0 or None for compact output)
            ensure_ascii: Whether to escape non-ASCII characters
        """
        super().__init__()
        self.indent = indent or None
        self.ensure_ascii = ensure_ascii

    @property
    def format_name(self) -> str:
        return "JSON"

    @property
    def file_extension(self) -> str:
        return "json"

    @property
    def media_type(self) -> str:
        return "application/json"

    def render(self, bookmarks: List[Bookmark]) -> str:
        return json.dumps(
            [b.to_dict() for b in bookmarks],
            indent=self.indent,
            ensure_ascii=self.ensure_ascii,
        )
