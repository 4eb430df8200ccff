"""
Exporter base class.

An exporter turns the bookmark list into one text document. ``render()``
produces the text; ``export()`` writes it to a file and reports what was
written.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Union

from ...utils.error_handler import ExportError
from ..data_models import Bookmark


@dataclass
class ExportResult:
    """
    Summary of a written export file.

    Attributes:
        path: File that was written
        count: Bookmarks in the document
        format_name: Exporter format name, e.g. "OPML"
        exported_at: When the file was written
        additional_info: Format specific details such as the file size
        warnings: Problems found in the data that did not stop the export
    """

    path: Path
    count: int
    format_name: str
    exported_at: datetime = field(default_factory=datetime.now)
    additional_info: Dict[str, Any] = field(default_factory=dict)
    warnings: List[str] = field(default_factory=list)

    def __str__(self) -> str:
        return f"{self.format_name} export of {self.count} bookmarks to {self.path}"


class BookmarkExporter(ABC):
    """
    Base class for the JSON and OPML exporters.

    Example:
        >>> exporter = OPMLExporter()
        >>> print(exporter.render(store.bookmarks))
        >>> exporter.export(store.bookmarks, "bookmarks.opml")
    """

    def __init__(self):
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @abstractmethod
    def render(self, bookmarks: List[Bookmark]) -> str:
        """
        Build the complete document.

        Args:
            bookmarks: Bookmarks in list order

        Returns:
            Document text
        """
        pass

    @property
    @abstractmethod
    def format_name(self) -> str:
        """Display name, e.g. "JSON"."""
        pass

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """Extension without the dot, e.g. "json"."""
        pass

    @property
    def media_type(self) -> str:
        return "text/plain"

    def default_filename(self) -> str:
        return f"bookmarks.{self.file_extension}"

    def validate_bookmarks(self, bookmarks: List[Bookmark]) -> List[str]:
        """
        Look for data problems worth reporting alongside the export.

        Returns:
            Warning messages; empty when nothing looks wrong
        """
        if not bookmarks:
            return ["No bookmarks provided for export"]

        warnings = []
        missing_url = [b for b in bookmarks if not b.url]
        if missing_url:
            warnings.append(f"{len(missing_url)} bookmark(s) have no URL")

        missing_title = [b for b in bookmarks if not b.title]
        if missing_title:
            warnings.append(f"{len(missing_title)} bookmark(s) have no title")

        urls = [b.url for b in bookmarks if b.url]
        repeated = len(urls) - len(set(urls))
        if repeated:
            warnings.append(f"{repeated} bookmark(s) repeat an earlier URL")

        return warnings

    def prepare_output_path(self, output_path: Union[str, Path]) -> Path:
        """
        Resolve the target file, adding the format extension when missing.

        The parent directory is created if needed.

        Raises:
            ExportError: If the parent directory cannot be created
        """
        path = Path(output_path)
        if not path.suffix:
            path = path.with_suffix(f".{self.file_extension}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ExportError(
                f"Cannot create directory {path.parent}",
                format_name=self.format_name,
                path=path,
                original_error=e,
            ) from e

        return path

    def export(self, bookmarks: List[Bookmark], output_path: Union[str, Path]) -> ExportResult:
        """
        Render the list and write it to ``output_path``.

        An empty list still produces a valid, empty document.

        Raises:
            ExportError: If the file cannot be written
        """
        warnings = self.validate_bookmarks(bookmarks)
        path = self.prepare_output_path(output_path)
        content = self.render(bookmarks)

        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ExportError(
                f"Failed to write {self.format_name} export: {e}",
                format_name=self.format_name,
                path=path,
                original_error=e,
            ) from e

        self.logger.info(f"Exported {len(bookmarks)} bookmarks to {path}")

        return ExportResult(
            path=path,
            count=len(bookmarks),
            format_name=self.format_name,
            additional_info={"file_size": path.stat().st_size},
            warnings=warnings,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
