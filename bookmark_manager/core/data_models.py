"""
Data models for the Bookmark Manager.

This module defines the single entity of the system, the bookmark record,
together with identifier generation and the built-in sample data used to
seed an empty store.
"""

import secrets
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List
from urllib.parse import urlparse

FAVICON_SERVICE = "https://www.google.com/s2/favicons?domain={host}"

# Serialized field order, shared by storage and JSON export
BOOKMARK_FIELDS = ("id", "title", "url", "desc", "categories", "icon")


def generate_bookmark_id() -> str:
    """
    Generate a time-ordered random identifier.

    The id is a 12 hex digit millisecond timestamp followed by 8 hex digits
    from a cryptographic random source, so ids sort by creation time.

    Returns:
        20 character identifier string
    """
    millis = int(time.time() * 1000)
    return f"{millis:012x}{secrets.token_hex(4)}"


@dataclass
class Bookmark:
    """
    A single saved link.

    Categories are free-text labels kept in the order the user entered
    them; duplicates within one bookmark are preserved.
    """

    id: str = field(default_factory=generate_bookmark_id)
    title: str = ""
    url: str = ""
    desc: str = ""
    categories: List[str] = field(default_factory=list)
    icon: str = ""

    def get_host(self) -> str:
        """Return the lowercase host of the URL, or an empty string."""
        if not self.url:
            return ""
        try:
            return (urlparse(self.url).hostname or "").lower()
        except ValueError:
            return ""

    def get_effective_icon(self) -> str:
        """
        Get the icon URL to display for this bookmark.

        Returns:
            The stored icon, or a favicon service URL keyed by the host
        """
        if self.icon:
            return self.icon
        host = self.get_host()
        if not host:
            return ""
        return FAVICON_SERVICE.format(host=host)

    def search_text(self) -> str:
        """Text matched by free-text search: title, description, categories."""
        return " ".join(
            [self.title, self.desc or "", " ".join(self.categories or [])]
        ).lower()

    def has_category(self, category: str) -> bool:
        return category in (self.categories or [])

    def merged_with(self, fields: Dict[str, Any]) -> "Bookmark":
        """
        Return a copy with the given fields laid over this record.

        Unknown keys are ignored and the id is never replaced.
        """
        data = self.to_dict()
        for key in BOOKMARK_FIELDS:
            if key != "id" and key in fields and fields[key] is not None:
                data[key] = fields[key]
        return Bookmark.from_dict(data)

    def copy(self) -> "Bookmark":
        """Create a copy of this bookmark"""
        return Bookmark(
            id=self.id,
            title=self.title,
            url=self.url,
            desc=self.desc,
            categories=list(self.categories),
            icon=self.icon,
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert bookmark to dictionary for serialization.

        Returns:
            Dictionary in the persisted/exported shape
        """
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "desc": self.desc,
            "categories": list(self.categories),
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Bookmark":
        """
        Create a bookmark from its serialized shape.

        Args:
            data: Dictionary with the persisted fields

        Returns:
            Bookmark object

        Raises:
            ValueError: If the record has no id or malformed categories
        """
        if not isinstance(data, dict):
            raise ValueError(f"Bookmark record must be an object, got {type(data).__name__}")

        bookmark_id = data.get("id")
        if not bookmark_id:
            raise ValueError("Bookmark record has no id")

        categories = data.get("categories") or []
        if not isinstance(categories, list):
            raise ValueError(f"Bookmark {bookmark_id}: categories must be a list")

        return cls(
            id=str(bookmark_id),
            title=str(data.get("title") or ""),
            url=str(data.get("url") or ""),
            desc=str(data.get("desc") or ""),
            categories=[str(c) for c in categories],
            icon=str(data.get("icon") or ""),
        )


def default_bookmarks() -> List[Bookmark]:
    """
    Build the sample list used to seed an empty store.

    Every call returns fresh objects with freshly generated ids.
    """
    return [
        Bookmark(
            title="Google",
            url="https://www.google.com",
            desc="搜索引擎",
            categories=["工具", "搜索"],
            icon="https://www.google.com/favicon.ico",
        ),
        Bookmark(
            title="MDN Web Docs",
            url="https://developer.mozilla.org",
            desc="前端标准与文档",
            categories=["开发", "文档"],
            icon="https://developer.mozilla.org/static/img/favicon144.png",
        ),
        Bookmark(
            title="GitHub",
            url="https://github.com",
            desc="代码托管平台",
            categories=["开发", "工具"],
            icon="https://github.githubassets.com/favicons/favicon.png",
        ),
    ]


def parse_category_input(text: str) -> List[str]:
    """
    Split comma-separated category input.

    Items are trimmed and blanks dropped; order and duplicates are kept.
    """
    if not text:
        return []
    return [part.strip() for part in text.split(",") if part.strip()]
