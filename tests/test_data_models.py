"""
Unit tests for the bookmark data model.
"""

import re
import time

import pytest

from bookmark_manager.core.data_models import (
    BOOKMARK_FIELDS,
    Bookmark,
    default_bookmarks,
    generate_bookmark_id,
    parse_category_input,
)


class TestGenerateBookmarkId:
    """Test id generation."""

    def test_format(self):
        """Ids are 20 lowercase hex characters."""
        assert re.fullmatch(r"[0-9a-f]{20}", generate_bookmark_id())

    def test_unique(self):
        """A burst of ids contains no duplicates."""
        ids = {generate_bookmark_id() for _ in range(2000)}
        assert len(ids) == 2000

    def test_time_ordered(self):
        """Ids generated later sort after earlier ones."""
        first = generate_bookmark_id()
        time.sleep(0.002)
        second = generate_bookmark_id()
        assert first[:12] < second[:12]


class TestBookmark:
    """Test Bookmark behavior."""

    def test_defaults(self):
        """New bookmarks get an id and empty optional fields."""
        bookmark = Bookmark(title="T", url="https://t.com")

        assert bookmark.id
        assert bookmark.desc == ""
        assert bookmark.categories == []
        assert bookmark.icon == ""

    def test_to_dict_shape(self):
        """Serialized shape has exactly the persisted fields, in order."""
        bookmark = Bookmark(id="x", title="T", url="u", categories=["a"])
        assert tuple(bookmark.to_dict().keys()) == BOOKMARK_FIELDS

    def test_from_dict_round_trip(self):
        """to_dict/from_dict preserve every field."""
        bookmark = Bookmark(
            id="x", title="T", url="https://t.com", desc="d", categories=["a", "a"], icon="i"
        )
        assert Bookmark.from_dict(bookmark.to_dict()) == bookmark

    def test_from_dict_requires_id(self):
        with pytest.raises(ValueError, match="no id"):
            Bookmark.from_dict({"title": "T", "url": "u"})

    def test_from_dict_rejects_non_object(self):
        with pytest.raises(ValueError):
            Bookmark.from_dict(["not", "a", "dict"])

    def test_from_dict_rejects_string_categories(self):
        with pytest.raises(ValueError, match="categories"):
            Bookmark.from_dict({"id": "x", "categories": "a,b"})

    def test_effective_icon_uses_stored_icon(self):
        bookmark = Bookmark(url="https://github.com", icon="https://cdn/icon.png")
        assert bookmark.get_effective_icon() == "https://cdn/icon.png"

    def test_effective_icon_falls_back_to_favicon_service(self):
        """Missing icon is derived from the URL host."""
        bookmark = Bookmark(url="https://Docs.Python.org:8080/3/")
        assert (
            bookmark.get_effective_icon()
            == "https://www.google.com/s2/favicons?domain=docs.python.org"
        )

    def test_effective_icon_without_host(self):
        assert Bookmark(url="not a url").get_effective_icon() == ""

    def test_merged_with_keeps_unspecified_fields(self):
        """Only given fields change, and the id is never replaced."""
        bookmark = Bookmark(id="x", title="Old", url="https://o.com", desc="d", categories=["c"])
        merged = bookmark.merged_with({"title": "New", "id": "other", "unknown": 1})

        assert merged.id == "x"
        assert merged.title == "New"
        assert merged.url == "https://o.com"
        assert merged.desc == "d"
        assert merged.categories == ["c"]
        assert bookmark.title == "Old"

    def test_copy_is_independent(self):
        bookmark = Bookmark(id="x", categories=["a"])
        clone = bookmark.copy()
        clone.categories.append("b")
        assert bookmark.categories == ["a"]

    def test_search_text(self):
        bookmark = Bookmark(title="GitHub", desc="Code Hosting", categories=["Dev", "Tools"])
        assert bookmark.search_text() == "github code hosting dev tools"


class TestDefaultBookmarks:
    """Test the built-in sample list."""

    def test_sample_content(self):
        titles = [b.title for b in default_bookmarks()]
        assert titles == ["Google", "MDN Web Docs", "GitHub"]

    def test_fresh_ids_each_call(self):
        first = {b.id for b in default_bookmarks()}
        second = {b.id for b in default_bookmarks()}
        assert len(first) == 3
        assert not first & second


class TestParseCategoryInput:
    """Test comma-separated category entry."""

    def test_split_and_trim(self):
        assert parse_category_input(" dev , tools,, ") == ["dev", "tools"]

    def test_keeps_duplicates_and_order(self):
        assert parse_category_input("b, a, b") == ["b", "a", "b"]

    def test_empty(self):
        assert parse_category_input("") == []
