"""
Core bookmark management modules.

This package contains the bookmark data model, the persistent store,
category indexing, filtering, and JSON/OPML import and export.
"""

from .bookmark_store import BookmarkStore
from .data_models import Bookmark, default_bookmarks, generate_bookmark_id
from .filters import FilterChain, filter_bookmarks
from .import_module import BookmarkImporter, ImportResult
from .index import category_counts, count_in_category, get_all_categories
from .storage import FileSlot, MemorySlot, StorageSlot

__all__ = [
    'Bookmark',
    'BookmarkImporter',
    'BookmarkStore',
    'FileSlot',
    'FilterChain',
    'ImportResult',
    'MemorySlot',
    'StorageSlot',
    'category_counts',
    'count_in_category',
    'default_bookmarks',
    'filter_bookmarks',
    'generate_bookmark_id',
    'get_all_categories',
]
