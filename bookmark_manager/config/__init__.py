"""Configuration loading for the bookmark manager."""

from .configuration import Configuration, create_configuration
from .pydantic_config import BookmarkManagerConfig, ConfigurationManager

__all__ = [
    "BookmarkManagerConfig",
    "Configuration",
    "ConfigurationManager",
    "create_configuration",
]
