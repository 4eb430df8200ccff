"""
Bookmark Manager.

A personal bookmark list kept in a single local slot, with category
indexing, filtered search and JSON/OPML export and JSON import.
"""

__version__ = "1.0.0"
