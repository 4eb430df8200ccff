"""
Configuration facade for the Bookmark Manager.

Wraps the Pydantic configuration and builds the objects the rest of the
application needs from it: the store, exporters and the importer.
"""

from pathlib import Path
from typing import Any, Dict, Optional

from ..core.bookmark_store import BookmarkStore
from ..core.exporters import BookmarkExporter, JSONExporter, OPMLExporter, get_exporter
from ..core.import_module import BookmarkImporter
from ..core.storage import FileSlot
from .pydantic_config import BookmarkManagerConfig, ConfigurationManager


class Configuration:
    """
    Application configuration.

    Example:
        >>> config = Configuration()
        >>> store = config.create_store()
        >>> store.init()
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize configuration manager.

        Args:
            config_path: Optional path to user configuration file (TOML/JSON)
        """
        self._manager = ConfigurationManager(config_path)
        self._config = self._manager.config

    @property
    def config(self) -> BookmarkManagerConfig:
        """Get the underlying Pydantic configuration."""
        return self._config

    @property
    def source(self) -> Optional[Path]:
        """File the configuration was loaded from, if any."""
        return self._manager.source

    def update_from_args(self, args: Dict[str, Any]) -> None:
        """
        Update configuration from command-line arguments.

        Args:
            args: Dictionary of validated arguments
        """
        self._manager.update_from_cli_args(args)
        self._config = self._manager.config

    def get_data_dir(self) -> Path:
        return self._config.storage.data_dir

    def get_slot_key(self) -> str:
        return self._config.storage.slot_key

    def create_store(self) -> BookmarkStore:
        """Build an uninitialized store over the configured file slot."""
        slot = FileSlot(self.get_data_dir(), self.get_slot_key())
        return BookmarkStore(slot, seed_defaults=self._config.storage.seed_defaults)

    def create_exporter(self, format_name: str) -> BookmarkExporter:
        """
        Build an exporter for a format using the configured options.

        Raises:
            ValueError: If the format is not supported
        """
        exporter_class = get_exporter(format_name)
        export = self._config.export

        if exporter_class is JSONExporter:
            return JSONExporter(indent=export.json_indent)
        if exporter_class is OPMLExporter:
            return OPMLExporter(
                title=export.opml_title,
                category_label=export.note_category_label,
                description_label=export.note_description_label,
            )
        return exporter_class()

    def create_importer(self) -> BookmarkImporter:
        return BookmarkImporter(
            untitled_placeholder=self._config.importing.untitled_placeholder
        )


def create_configuration(config_path: Optional[Path] = None) -> Configuration:
    """
    Create a new Configuration instance.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Configuration instance
    """
    return Configuration(config_path)
