"""
OPML bookmark exporter.

Exports bookmarks as OPML (Outline Processor Markup Language) link
outlines, one per bookmark, wrapped in a single top-level outline.
"""

from datetime import datetime, timezone
from typing import Callable, List, Optional

from .base import BookmarkExporter
from ..data_models import Bookmark
from ..escaping import escape_xml, escape_xml_attribute


def iso_timestamp(moment: Optional[datetime] = None) -> str:
    """UTC ISO-8601 timestamp with millisecond precision and a ``Z`` suffix."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


class OPMLExporter(BookmarkExporter):
    """
    Export bookmarks to OPML format.

    Each bookmark becomes ``<outline type="link">`` with the title in
    ``text``/``title``, the URL in ``xmlUrl`` and the categories and
    description in ``_note``.

    Example:
        >>> exporter = OPMLExporter(title="My Bookmarks")
        >>> xml = exporter.render(bookmarks)
    """

    def __init__(
        self,
        title: str = "书签导出",
        category_label: str = "分类",
        description_label: str = "描述",
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the OPML exporter.

        Args:
            title: Title of the document and of the wrapping outline
            category_label: Label for the category list inside ``_note``
            description_label: Label for the description inside ``_note``
            clock: Returns the creation time; defaults to the current UTC time
        """
        super().__init__()
        self.title = title
        self.category_label = category_label
        self.description_label = description_label
        self.clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def format_name(self) -> str:
        return "OPML"

    @property
    def file_extension(self) -> str:
        return "opml"

    @property
    def media_type(self) -> str:
        return "text/xml"

    def build_note(self, bookmark: Bookmark) -> str:
        """Unescaped ``_note`` text: categories and description."""
        categories = ", ".join(bookmark.categories or [])
        return (
            f"{self.category_label}:{categories} "
            f"{self.description_label}:{bookmark.desc or ''}"
        )

    def _bookmark_outline(self, bookmark: Bookmark) -> str:
        text = escape_xml_attribute(bookmark.title)
        attrs = [
            f'text="{text}"',
            f'title="{text}"',
            'type="link"',
            f'xmlUrl="{escape_xml_attribute(bookmark.url)}"',
            f'_note="{escape_xml_attribute(self.build_note(bookmark))}"',
        ]
        return f"<outline {' '.join(attrs)} />"

    def render(self, bookmarks: List[Bookmark]) -> str:
        title = escape_xml(self.title)
        outlines = "\n    ".join(self._bookmark_outline(b) for b in bookmarks)

        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            '<opml version="1.0">',
            "  <head>",
            f"    <title>{title}</title>",
            f"    <dateCreated>{iso_timestamp(self.clock())}</dateCreated>",
            "  </head>",
            "  <body>",
            f'    <outline text="{escape_xml_attribute(self.title)}">',
            f"    {outlines}",
            "    </outline>",
            "  </body>",
            "</opml>",
        ]
        return "\n".join(lines)
