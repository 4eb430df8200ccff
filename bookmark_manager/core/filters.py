"""
Bookmark filters.

A filter is a predicate over a single bookmark. Filters combine with ``&``,
``|`` and ``~``. ``filter_bookmarks`` builds the listing query from an
optional category and an optional free-text search.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from .data_models import Bookmark


class BookmarkFilter(ABC):
    """Predicate over a bookmark, combinable with ``&``, ``|`` and ``~``."""

    @abstractmethod
    def matches(self, bookmark: Bookmark) -> bool:
        """Return True if ``bookmark`` passes this filter."""
        pass

    def _combine(self, other: "BookmarkFilter", operator: str) -> "CompositeFilter":
        children = [self]
        if isinstance(other, CompositeFilter) and other.operator == operator:
            children.extend(other.filters)
        else:
            children.append(other)
        return CompositeFilter(children, operator=operator)

    def __and__(self, other: "BookmarkFilter") -> "CompositeFilter":
        return self._combine(other, "and")

    def __or__(self, other: "BookmarkFilter") -> "CompositeFilter":
        return self._combine(other, "or")

    def __invert__(self) -> "NotFilter":
        return NotFilter(self)

    def filter(self, bookmarks: List[Bookmark]) -> List[Bookmark]:
        """
        Keep the bookmarks that pass, in their original order.

        Args:
            bookmarks: Bookmarks to test

        Returns:
            New list of passing bookmarks
        """
        return [b for b in bookmarks if self.matches(b)]


class CompositeFilter(BookmarkFilter):
    """All (``"and"``) or any (``"or"``) of the child filters. No children passes everything."""

    def __init__(self, filters: List[BookmarkFilter], operator: str = "and"):
        operator = operator.lower()
        if operator not in ("and", "or"):
            raise ValueError(f"Unknown filter operator {operator!r}; use 'and' or 'or'")
        self.filters = filters
        self.operator = operator

    def matches(self, bookmark: Bookmark) -> bool:
        if not self.filters:
            return True
        results = (child.matches(bookmark) for child in self.filters)
        return all(results) if self.operator == "and" else any(results)


class NotFilter(BookmarkFilter):
    """Passes exactly the bookmarks the wrapped filter rejects."""

    def __init__(self, inner: BookmarkFilter):
        self.inner = inner

    def matches(self, bookmark: Bookmark) -> bool:
        return not self.inner.matches(bookmark)


class CategoryFilter(BookmarkFilter):
    """
    Keep bookmarks carrying a category.

    Matching is an exact, case-sensitive comparison against each label.
    """

    def __init__(self, category: str):
        self.category = category

    def matches(self, bookmark: Bookmark) -> bool:
        return bookmark.has_category(self.category)


class TextSearchFilter(BookmarkFilter):
    """
    Case-insensitive substring search.

    The haystack is the title, description and space-joined categories,
    separated by single spaces.
    """

    def __init__(self, query: str):
        self.query = query
        self._needle = query.strip().lower()

    def matches(self, bookmark: Bookmark) -> bool:
        if not self._needle:
            return True
        return self._needle in bookmark.search_text()


class CustomFilter(BookmarkFilter):
    """Wraps an arbitrary predicate."""

    def __init__(self, predicate: Callable[[Bookmark], bool], name: str = "custom"):
        self.predicate = predicate
        self.name = name

    def matches(self, bookmark: Bookmark) -> bool:
        return bool(self.predicate(bookmark))


@dataclass
class FilterChain:
    """
    Ordered set of filters joined by one operator.

    An empty chain passes everything.
    """

    filters: List[BookmarkFilter] = field(default_factory=list)
    operator: str = "and"

    def add(self, filter_obj: BookmarkFilter) -> "FilterChain":
        self.filters.append(filter_obj)
        return self

    def _composite(self) -> CompositeFilter:
        return CompositeFilter(list(self.filters), operator=self.operator)

    def apply(self, bookmarks: List[Bookmark]) -> List[Bookmark]:
        return self._composite().filter(bookmarks)

    def matches(self, bookmark: Bookmark) -> bool:
        return self._composite().matches(bookmark)

    @classmethod
    def for_query(
        cls, active_category: Optional[str] = None, search_text: Optional[str] = None
    ) -> "FilterChain":
        """
        Build the listing query chain.

        Args:
            active_category: Category to restrict to; empty means all
            search_text: Free-text query; blank means no text filter

        Returns:
            FilterChain ANDing the non-empty criteria
        """
        chain = cls()
        if active_category:
            chain.add(CategoryFilter(active_category))
        if search_text and search_text.strip():
            chain.add(TextSearchFilter(search_text))
        return chain

    def __len__(self) -> int:
        return len(self.filters)

    def __bool__(self) -> bool:
        return len(self.filters) > 0


def filter_bookmarks(
    bookmarks: List[Bookmark],
    active_category: Optional[str] = "",
    search_text: Optional[str] = "",
) -> List[Bookmark]:
    """
    Filter bookmarks by category and free text.

    Args:
        bookmarks: Bookmark list
        active_category: Exact category label, or empty for all
        search_text: Case-insensitive substring, or empty for no text filter

    Returns:
        Matching bookmarks in list order; may be empty
    """
    return FilterChain.for_query(active_category, search_text).apply(bookmarks)
