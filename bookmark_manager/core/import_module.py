"""
JSON import for bookmark lists.

Imported documents come from this tool's own JSON export or from other
tools with different field names. Each record is normalized through a fixed
alias table, given a fresh id, and merged into the existing list with the
URL as the deduplication key.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple, Union

import chardet

from ..utils.error_handler import ImportFormatError
from .data_models import Bookmark, generate_bookmark_id, parse_category_input

if TYPE_CHECKING:
    from .bookmark_store import BookmarkStore

UNTITLED_PLACEHOLDER = "未命名"

# Source keys tried in order for each target field
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "title": ("title", "name"),
    "url": ("url", "xmlUrl"),
    "categories": ("categories", "tags"),
    "desc": ("desc",),
    "icon": ("icon",),
}


@dataclass
class ImportResult:
    """Outcome of merging an imported document into the store."""

    added: int = 0
    total: int = 0
    source: Optional[Path] = None
    encoding: Optional[str] = None
    added_ids: List[str] = field(default_factory=list)

    @property
    def skipped(self) -> int:
        return self.total - self.added

    def __str__(self) -> str:
        return (
            f"Imported {self.added} new bookmark(s); "
            f"{self.skipped} skipped (duplicate or missing URL)"
        )


def _first_present(record: Dict[str, Any], keys: Tuple[str, ...]) -> Any:
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return None


def _normalize_categories(value: Any) -> List[str]:
    if isinstance(value, list):
        return [str(item) for item in value]
    if isinstance(value, str):
        return parse_category_input(value)
    return []


def normalize_record(record: Any, placeholder: str = UNTITLED_PLACEHOLDER) -> Bookmark:
    """
    Normalize one imported record into a Bookmark.

    Args:
        record: Parsed JSON element; non-objects yield an empty-URL bookmark
        placeholder: Title used when neither ``title`` nor ``name`` is set

    Returns:
        Bookmark with a freshly generated id
    """
    if not isinstance(record, dict):
        record = {}

    title = _first_present(record, FIELD_ALIASES["title"])
    url = _first_present(record, FIELD_ALIASES["url"])

    categories = record.get("categories")
    if not isinstance(categories, list):
        categories = _first_present(record, FIELD_ALIASES["categories"])

    return Bookmark(
        id=generate_bookmark_id(),
        title=str(title) if title else placeholder,
        url=str(url) if url else "",
        desc=str(_first_present(record, FIELD_ALIASES["desc"]) or ""),
        categories=_normalize_categories(categories),
        icon=str(_first_present(record, FIELD_ALIASES["icon"]) or ""),
    )


def merge_bookmarks(
    existing: List[Bookmark], imported: List[Bookmark]
) -> Tuple[List[Bookmark], int]:
    """
    Prepend imported bookmarks whose URL is new.

    Imported items with an empty URL, or a URL already present in
    ``existing``, are dropped.

    Returns:
        Tuple of (merged list, number added)
    """
    existing_urls = {b.url for b in existing}
    to_add = [b for b in imported if b.url and b.url not in existing_urls]
    return to_add + list(existing), len(to_add)


class BookmarkImporter:
    """
    Parse JSON bookmark documents and merge them into a store.

    Example:
        >>> importer = BookmarkImporter()
        >>> result = importer.import_file("bookmarks.json", store)
        >>> print(result)
    """

    def __init__(self, untitled_placeholder: str = UNTITLED_PLACEHOLDER):
        self.untitled_placeholder = untitled_placeholder
        self.logger = logging.getLogger(__name__)

    def from_json(self, text: str) -> List[Bookmark]:
        """
        Parse and normalize a JSON document.

        Args:
            text: JSON text whose top-level value must be an array

        Returns:
            Normalized bookmarks, each with a fresh id

        Raises:
            ImportFormatError: If the text is not JSON or not an array
        """
        try:
            data = json.loads(text)
        except (ValueError, RecursionError, TypeError) as e:
            # Bad syntax and oversized integers raise ValueError, deep nesting RecursionError
            raise ImportFormatError(f"Invalid JSON: {e}") from e

        if not isinstance(data, list):
            raise ImportFormatError(
                f"Expected a JSON array of bookmarks, got {type(data).__name__}"
            )

        bookmarks = [normalize_record(item, self.untitled_placeholder) for item in data]
        non_objects = sum(1 for item in data if not isinstance(item, dict))
        if non_objects:
            self.logger.warning(f"{non_objects} non-object element(s) will be skipped")

        return bookmarks

    def merge(
        self, existing: List[Bookmark], imported: List[Bookmark]
    ) -> Tuple[List[Bookmark], int]:
        """Merge without persisting; see ``merge_bookmarks``."""
        return merge_bookmarks(existing, imported)

    def import_text(self, text: str, store: "BookmarkStore") -> ImportResult:
        """
        Parse text and merge it into the store, persisting the result.

        Nothing is changed if parsing fails.
        """
        imported = self.from_json(text)
        before = {b.id for b in store.bookmarks}
        merged, added = store.merge_imported(imported)
        return ImportResult(
            added=added,
            total=len(imported),
            added_ids=[b.id for b in merged if b.id not in before],
        )

    def import_file(self, file_path: Union[str, Path], store: "BookmarkStore") -> ImportResult:
        """
        Read a JSON file and merge it into the store.

        Args:
            file_path: Path to the JSON document
            store: Initialized store to merge into

        Returns:
            ImportResult with counts

        Raises:
            ImportFormatError: If the file cannot be decoded or parsed
        """
        path = Path(file_path)
        self.logger.info(f"Starting JSON import: {path}")

        raw = path.read_bytes()
        text, encoding = self.decode(raw, path)

        result = self.import_text(text, store)
        result.source = path
        result.encoding = encoding

        self.logger.info(f"Import completed: {result}")
        return result

    def decode(self, raw: bytes, path: Path) -> Tuple[str, str]:
        """
        Decode file contents, trying UTF-8 before detection.

        Returns:
            Tuple of (text, encoding used)

        Raises:
            ImportFormatError: If no usable encoding decodes the bytes
        """
        try:
            return raw.decode("utf-8-sig"), "utf-8"
        except UnicodeDecodeError:
            pass

        encoding = self.detect_encoding(raw)
        try:
            return raw.decode(encoding), encoding
        except (UnicodeDecodeError, LookupError) as e:
            raise ImportFormatError(f"Cannot decode {path} as {encoding}: {e}") from e

    def detect_encoding(self, raw: bytes) -> str:
        """
        Detect the encoding of a non-UTF-8 import file.

        Falls back to utf-8 for a low-confidence guess.
        """
        result = chardet.detect(raw[:65536])
        encoding = result.get("encoding") or "utf-8"
        confidence = result.get("confidence") or 0.0

        self.logger.debug(f"Detected encoding: {encoding} (confidence: {confidence:.2f})")

        if confidence < 0.7:
            self.logger.debug(f"Low encoding confidence ({confidence:.2f}), using utf-8")
            encoding = "utf-8"

        return encoding
