"""
Bookmark store: the in-memory list and its persistence.

A ``BookmarkStore`` is created by the application session, initialized once
with ``init()`` and then passed to whatever needs the list. Every mutation
builds the new list, persists it, and only then replaces the in-memory list,
so a failed save leaves the session state untouched.
"""

import logging
from typing import Any, Dict, List, Optional, Tuple

from ..utils.error_handler import (
    DuplicateIdError,
    StorageUnavailableError,
    StorageWriteError,
)
from ..utils.validation import validate_bookmark_fields
from .data_models import Bookmark, default_bookmarks
from .import_module import merge_bookmarks
from .storage import StorageSlot, deserialize_bookmarks, serialize_bookmarks


class BookmarkStore:
    """
    Owns the bookmark list for one session.

    Example:
        >>> store = BookmarkStore(FileSlot("~/.bookmark_manager"))
        >>> store.init()
        >>> store.add({"title": "Python", "url": "https://python.org"})
    """

    def __init__(self, slot: StorageSlot, seed_defaults: bool = True):
        """
        Initialize the store.

        Args:
            slot: Persistent slot holding the serialized list
            seed_defaults: Seed the sample list when the slot is empty
        """
        self.slot = slot
        self.seed_defaults = seed_defaults
        self.logger = logging.getLogger(__name__)
        self._bookmarks: Optional[List[Bookmark]] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self) -> List[Bookmark]:
        """Load the list (or seed it) and make it the session state."""
        self._bookmarks = self.load()
        self.logger.info(f"Store initialized with {len(self._bookmarks)} bookmarks from {self.slot}")
        return self._bookmarks

    @property
    def initialized(self) -> bool:
        return self._bookmarks is not None

    @property
    def bookmarks(self) -> List[Bookmark]:
        """The current list. Callers must not mutate it in place."""
        if self._bookmarks is None:
            raise RuntimeError("Bookmark store not initialized; call init() first")
        return self._bookmarks

    def _fallback(self) -> List[Bookmark]:
        return default_bookmarks() if self.seed_defaults else []

    def load(self) -> List[Bookmark]:
        """
        Read the list from the slot.

        A missing or empty slot is seeded with the sample list. Unreadable or
        corrupt content is logged and replaced by the sample list in memory only;
        the stored content is left as is.

        Returns:
            The loaded list (never raises)
        """
        try:
            payload = self.slot.read()
            if not payload:
                seeded = self._fallback()
                if seeded:
                    self._seed(seeded)
                return seeded
            return deserialize_bookmarks(payload, self.slot.key)
        except StorageUnavailableError as e:
            self.logger.error(f"Failed to load bookmarks, using defaults: {e}")
            return self._fallback()

    def _seed(self, bookmarks: List[Bookmark]) -> None:
        try:
            self.save(bookmarks)
            self.logger.info(f"Seeded empty store with {len(bookmarks)} sample bookmarks")
        except StorageWriteError as e:
            self.logger.error(f"Failed to seed store: {e}")

    def save(self, bookmarks: Optional[List[Bookmark]] = None) -> None:
        """
        Overwrite the slot with the whole list.

        Args:
            bookmarks: List to persist; defaults to the current list

        Raises:
            StorageWriteError: If the slot cannot be written
        """
        if bookmarks is None:
            bookmarks = self.bookmarks
        self.slot.write(serialize_bookmarks(bookmarks))

    def _commit(self, bookmarks: List[Bookmark]) -> List[Bookmark]:
        self.save(bookmarks)
        self._bookmarks = bookmarks
        return bookmarks

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, bookmark_id: str) -> Optional[Bookmark]:
        for bookmark in self.bookmarks:
            if bookmark.id == bookmark_id:
                return bookmark
        return None

    def __len__(self) -> int:
        return len(self.bookmarks)

    def __iter__(self):
        return iter(self.bookmarks)

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def insert(self, bookmark: Bookmark) -> List[Bookmark]:
        """
        Prepend a fully built bookmark and persist.

        Raises:
            DuplicateIdError: If the id is already in the list
            StorageWriteError: If persisting fails
        """
        if self.get(bookmark.id) is not None:
            raise DuplicateIdError(bookmark.id)
        return self._commit([bookmark] + self.bookmarks)

    def add(self, fields: Dict[str, Any]) -> List[Bookmark]:
        """
        Create a bookmark with a fresh id, prepend it and persist.

        Args:
            fields: title, url and optionally desc, categories, icon

        Returns:
            The new list

        Raises:
            ValidationError: If title or url is missing
            StorageWriteError: If persisting fails
        """
        cleaned = validate_bookmark_fields(fields)
        bookmark = Bookmark(
            title=cleaned["title"],
            url=cleaned["url"],
            desc=cleaned.get("desc") or "",
            categories=list(cleaned.get("categories") or []),
            icon=cleaned.get("icon") or "",
        )
        self.logger.debug(f"Adding bookmark {bookmark.id}: {bookmark.url}")
        return self.insert(bookmark)

    def update(self, bookmark_id: str, fields: Dict[str, Any]) -> List[Bookmark]:
        """
        Merge fields over an existing bookmark and persist.

        Fields not given are retained. An unknown id is a no-op.

        Returns:
            The (possibly unchanged) list
        """
        current = self.bookmarks
        for index, bookmark in enumerate(current):
            if bookmark.id == bookmark_id:
                break
        else:
            self.logger.debug(f"Update ignored, no bookmark with id {bookmark_id}")
            return current

        merged = bookmark.merged_with(fields)
        updated = Bookmark.from_dict(validate_bookmark_fields(merged.to_dict()))

        new_list = list(current)
        new_list[index] = updated
        return self._commit(new_list)

    def remove(self, bookmark_id: str) -> List[Bookmark]:
        """
        Remove a bookmark by id and persist.

        An unknown id is a no-op, but the list is still persisted.
        """
        new_list = [b for b in self.bookmarks if b.id != bookmark_id]
        if len(new_list) == len(self.bookmarks):
            self.logger.debug(f"Remove ignored, no bookmark with id {bookmark_id}")
        return self._commit(new_list)

    def merge_imported(self, imported: List[Bookmark]) -> Tuple[List[Bookmark], int]:
        """
        Merge imported bookmarks into the list and persist.

        Returns:
            Tuple of (merged list, number of bookmarks actually added)

        Raises:
            DuplicateIdError: If an imported id collides with an existing one
        """
        merged, added = merge_bookmarks(self.bookmarks, imported)
        seen = set()
        for bookmark in merged:
            if bookmark.id in seen:
                raise DuplicateIdError(bookmark.id)
            seen.add(bookmark.id)
        self._commit(merged)
        self.logger.info(f"Merged {added} imported bookmarks ({len(imported) - added} skipped)")
        return merged, added
