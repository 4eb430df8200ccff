"""
Persistent slot storage.

The whole bookmark list lives in one named slot and is rewritten on every
save. Slots only move serialized text; encoding the list and recovering from
corrupt content is the store's job.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from ..utils.error_handler import StorageUnavailableError, StorageWriteError
from .data_models import Bookmark

logger = logging.getLogger(__name__)


class StorageSlot(ABC):
    """A single named location holding one serialized blob."""

    def __init__(self, key: str):
        self.key = key

    @abstractmethod
    def read(self) -> Optional[str]:
        """
        Read the slot contents.

        Returns:
            Stored text, or None if the slot has never been written

        Raises:
            StorageUnavailableError: If the slot exists but cannot be read
        """
        pass

    @abstractmethod
    def write(self, payload: str) -> None:
        """
        Overwrite the slot contents.

        Raises:
            StorageWriteError: If the write fails
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(key={self.key!r})"


class MemorySlot(StorageSlot):
    """Dict-backed slot. Several slots may share one backing dict."""

    def __init__(self, key: str = "nav_bookmarks_v1", backend: Optional[Dict[str, str]] = None):
        super().__init__(key)
        self.backend = backend if backend is not None else {}

    def read(self) -> Optional[str]:
        return self.backend.get(self.key)

    def write(self, payload: str) -> None:
        self.backend[self.key] = payload


class FileSlot(StorageSlot):
    """
    Slot stored as ``<directory>/<key>.json``.

    Writes go to a temporary file in the same directory which then replaces
    the slot file, so readers never see a half-written list.
    """

    def __init__(self, directory: Union[str, Path], key: str = "nav_bookmarks_v1"):
        super().__init__(key)
        self.directory = Path(directory).expanduser()
        self.path = self.directory / f"{key}.json"

    def read(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailableError(
                f"Cannot read {self.path}: {e}", slot_key=self.key
            ) from e

    def write(self, payload: str) -> None:
        temp_name = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, temp_name = tempfile.mkstemp(
                dir=self.directory, prefix=f".{self.key}.", suffix=".tmp"
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
            # Atomic rename
            Path(temp_name).replace(self.path)
            logger.debug(f"Wrote {len(payload)} characters to {self.path}")
        except OSError as e:
            if temp_name and os.path.exists(temp_name):
                os.unlink(temp_name)
            raise StorageWriteError(
                f"Cannot write {self.path}: {e}", slot_key=self.key
            ) from e

    def __repr__(self) -> str:
        return f"FileSlot(path={str(self.path)!r})"


def serialize_bookmarks(bookmarks: List[Bookmark]) -> str:
    """Encode the list in the persisted shape."""
    return json.dumps([b.to_dict() for b in bookmarks], ensure_ascii=False)


def deserialize_bookmarks(payload: str, slot_key: Optional[str] = None) -> List[Bookmark]:
    """
    Decode a persisted list.

    Raises:
        StorageUnavailableError: If the payload is not a JSON array of
            bookmark records with distinct ids
    """
    try:
        data = json.loads(payload)
    except (ValueError, RecursionError) as e:
        raise StorageUnavailableError(f"Stored list is not valid JSON: {e}", slot_key) from e

    if not isinstance(data, list):
        raise StorageUnavailableError(
            f"Stored value must be a list, got {type(data).__name__}", slot_key
        )

    try:
        bookmarks = [Bookmark.from_dict(item) for item in data]
    except ValueError as e:
        raise StorageUnavailableError(f"Malformed bookmark record: {e}", slot_key) from e

    seen = set()
    for bookmark in bookmarks:
        if bookmark.id in seen:
            raise StorageUnavailableError(
                f"Stored list repeats bookmark id {bookmark.id}", slot_key
            )
        seen.add(bookmark.id)

    return bookmarks
