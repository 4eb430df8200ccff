"""
Pydantic-based configuration system for the Bookmark Manager.

Settings are grouped into storage, export and import sections and can be
loaded from a TOML or JSON file, with an environment variable override for
the data directory.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Literal, Optional

import toml
from pydantic import BaseModel, Field, ValidationError, field_validator

from ..utils.error_handler import ConfigurationError

DATA_DIR_ENV = "BOOKMARK_MANAGER_DATA_DIR"


class StorageConfig(BaseModel):
    """Where the bookmark list is persisted."""

    data_dir: Path = Field(
        default=Path("~/.bookmark_manager"),
        validate_default=True,
        description="Directory holding the bookmark slot",
    )
    slot_key: str = Field(
        default="nav_bookmarks_v1",
        min_length=1,
        max_length=100,
        pattern=r"^[A-Za-z0-9_.-]+$",
        description="Name of the persistent slot",
    )
    seed_defaults: bool = Field(
        default=True,
        description="Seed the sample bookmarks into an empty slot",
    )

    @field_validator("data_dir", mode="before")
    @classmethod
    def expand_data_dir(cls, v):
        """Expand ``~`` so the stored path is absolute-looking."""
        if isinstance(v, str):
            v = Path(v)
        if isinstance(v, Path):
            return v.expanduser()
        return v


class ExportConfig(BaseModel):
    """Export format settings."""

    opml_title: str = Field(default="书签导出", min_length=1, description="OPML document title")
    json_indent: int = Field(
        default=2, ge=0, le=8, description="JSON indentation (0 for compact output)"
    )
    note_category_label: str = Field(default="分类", description="Category label in OPML _note")
    note_description_label: str = Field(
        default="描述", description="Description label in OPML _note"
    )


class ImportConfig(BaseModel):
    """Import normalization settings."""

    untitled_placeholder: str = Field(
        default="未命名",
        min_length=1,
        description="Title used for imported records without title or name",
    )


class BookmarkManagerConfig(BaseModel):
    """Main configuration model."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    importing: ImportConfig = Field(default_factory=ImportConfig, alias="import")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING", description="Logging level"
    )
    log_file: Optional[Path] = Field(default=None, description="Optional log file")

    model_config = {"populate_by_name": True}

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        if isinstance(v, str):
            return v.upper()
        return v


class ConfigurationManager:
    """
    Load settings from a file, the environment and the command line.

    Sources are applied in increasing priority: built-in defaults, the
    configuration file, ``BOOKMARK_MANAGER_DATA_DIR``, then CLI arguments.
    """

    def __init__(self, config_path: Optional[Path] = None):
        """
        Args:
            config_path: Explicit TOML or JSON file; when omitted the default
                locations are searched
        """
        self._config: Optional[BookmarkManagerConfig] = None
        self.source: Optional[Path] = None
        self._load(config_path)

    def _get_default_config_paths(self) -> List[Path]:
        """Locations searched, in order, when no path is given."""
        return [
            Path.cwd() / "bookmark_manager.toml",
            Path.cwd() / "bookmark_manager.json",
            Path("~/.bookmark_manager/config.toml").expanduser(),
        ]

    def _load(self, config_path: Optional[Path] = None) -> None:
        config_data: Dict = {}

        if config_path:
            self.source = Path(config_path)
        else:
            self.source = next(
                (p for p in self._get_default_config_paths() if p.exists()), None
            )
        if self.source is not None:
            config_data = self._load_config_file(self.source)

        self._apply_env_overrides(config_data)
        self._config = self._build(config_data)

    @staticmethod
    def _build(config_data: Dict) -> BookmarkManagerConfig:
        try:
            return BookmarkManagerConfig(**config_data)
        except ValidationError as e:
            raise ConfigurationError(format_config_error(e)) from e

    def _load_config_file(self, config_path: Path) -> Dict:
        """
        Parse a TOML or JSON configuration file.

        Raises:
            ConfigurationError: If the file is missing, has another suffix
                or does not parse
        """
        if not config_path.exists():
            raise ConfigurationError(f"Configuration file not found: {config_path}")

        suffix = config_path.suffix.lower()
        if suffix not in (".toml", ".json"):
            raise ConfigurationError(
                f"Unsupported configuration file format: {config_path.suffix}"
            )

        try:
            if suffix == ".toml":
                return toml.load(config_path)
            with open(config_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError, toml.TomlDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load configuration from {config_path}: {e}"
            ) from e

    def _apply_env_overrides(self, config_data: Dict) -> None:
        data_dir = os.getenv(DATA_DIR_ENV)
        if data_dir:
            config_data.setdefault("storage", {})["data_dir"] = data_dir

    def update_from_cli_args(self, args: Dict) -> None:
        """
        Apply ``verbose`` and ``data_dir`` from parsed CLI arguments.

        Raises:
            ConfigurationError: If the result fails validation
        """
        config_dict = self.config.model_dump(by_alias=True)

        if args.get("verbose"):
            config_dict["log_level"] = "DEBUG"
        if args.get("data_dir"):
            config_dict["storage"]["data_dir"] = args["data_dir"]

        self._config = self._build(config_dict)

    @property
    def config(self) -> BookmarkManagerConfig:
        if self._config is None:
            raise RuntimeError("Configuration not loaded")
        return self._config

    def create_sample_config(self, output_path: Path, format: str = "toml") -> None:
        """Write a configuration file holding every setting at its default."""
        sample_config = {
            "log_level": "WARNING",
            "storage": {
                "data_dir": "~/.bookmark_manager",
                "slot_key": "nav_bookmarks_v1",
                "seed_defaults": True,
            },
            "export": {
                "opml_title": "书签导出",
                "json_indent": 2,
                "note_category_label": "分类",
                "note_description_label": "描述",
            },
            "import": {"untitled_placeholder": "未命名"},
        }

        fmt = format.lower()
        if fmt not in ("toml", "json"):
            raise ValueError(f"Unsupported format: {format}")

        with open(output_path, "w", encoding="utf-8") as f:
            if fmt == "toml":
                toml.dump(sample_config, f)
            else:
                json.dump(sample_config, f, indent=2, ensure_ascii=False)


_COMPARISON_OPERATORS = {
    "greater_than_equal": ">=",
    "less_than_equal": "<=",
    "greater_than": ">",
    "less_than": "<",
}


class ConfigurationErrorFormatter:
    """Turns Pydantic validation errors into one line per bad setting."""

    @staticmethod
    def format_validation_error(error: ValidationError) -> str:
        """
        Describe every problem in a Pydantic ``ValidationError``.

        Args:
            error: Error raised while building a config model

        Returns:
            Multi-line message starting with a header line
        """
        lines = ["Configuration Validation Failed:"]
        for detail in error.errors():
            location = ConfigurationErrorFormatter._format_error_location(detail["loc"])
            lines.append(
                ConfigurationErrorFormatter._describe(
                    location, detail, detail.get("input", "N/A")
                )
            )
        return "\n".join(lines)

    @staticmethod
    def _format_error_location(location: tuple) -> str:
        """Dotted setting path, e.g. ``export.json_indent``."""
        if not location:
            return "Configuration"
        return ".".join(
            part if isinstance(part, str) else f"[{part}]" for part in location
        )

    @staticmethod
    def _describe(location: str, detail: dict, input_value) -> str:
        error_type = detail["type"]
        ctx = detail.get("ctx", {})

        if error_type == "missing":
            return f"- {location}: Required field is missing"
        if error_type in _COMPARISON_OPERATORS:
            limit = next(iter(ctx.values()), "limit")
            operator = _COMPARISON_OPERATORS[error_type]
            return f"- {location}: Value must be {operator} {limit} (got: {input_value})"
        if error_type == "literal_error":
            expected = ctx.get("expected", "one of the allowed values")
            return f"- {location}: Must be one of {expected} (got: {input_value})"
        if error_type == "string_pattern_mismatch":
            return (
                f"- {location}: Only letters, digits, '_', '.' and '-' are allowed "
                f"(got: {input_value})"
            )
        if error_type == "string_too_short":
            return f"- {location}: Must not be empty"

        return f"- {location}: {detail.get('msg', 'Invalid value')} (got: {input_value})"


def format_config_error(error: Exception) -> str:
    """
    Message for any error raised while loading configuration.

    Pydantic validation errors are broken down per setting; anything else is
    prefixed with ``Configuration Error:``.
    """
    if isinstance(error, ValidationError):
        return ConfigurationErrorFormatter.format_validation_error(error)

    return f"Configuration Error: {error}"
