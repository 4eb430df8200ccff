"""
Category index derived from the bookmark list.

Categories are not stored anywhere; they are recomputed from the union of
every bookmark's ``categories`` field whenever a listing needs them.
"""

from typing import Dict, List

from .data_models import Bookmark


def get_all_categories(bookmarks: List[Bookmark]) -> List[str]:
    """
    Collect the distinct categories across all bookmarks.

    Args:
        bookmarks: Bookmark list

    Returns:
        Lexicographically sorted list without duplicates
    """
    all_categories = set()
    for bookmark in bookmarks:
        all_categories.update(bookmark.categories or [])
    return sorted(all_categories)


def count_in_category(bookmarks: List[Bookmark], category: str) -> int:
    """Count bookmarks whose categories contain ``category`` (exact match)."""
    return sum(1 for b in bookmarks if b.has_category(category))


def category_counts(bookmarks: List[Bookmark]) -> Dict[str, int]:
    """Map every category to its bookmark count, in sorted category order."""
    return {
        category: count_in_category(bookmarks, category)
        for category in get_all_categories(bookmarks)
    }
