"""
Pytest configuration and shared fixtures for bookmark manager tests.

This module provides sample bookmarks and stores backed by in-memory and
on-disk slots.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List

import pytest

from bookmark_manager.core.bookmark_store import BookmarkStore
from bookmark_manager.core.data_models import Bookmark
from bookmark_manager.core.storage import FileSlot, MemorySlot, serialize_bookmarks

# ============================================================================
# Pytest Configuration
# ============================================================================


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep tests away from the user's real store and configuration."""
    monkeypatch.delenv("BOOKMARK_MANAGER_DATA_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_root_logger():
    """CLI runs reconfigure the root logger; undo that after each test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


# ============================================================================
# Bookmark Fixtures
# ============================================================================


@pytest.fixture
def sample_bookmarks() -> List[Bookmark]:
    """Create sample bookmarks for testing."""
    return [
        Bookmark(
            id="a1",
            title="Python Documentation",
            url="https://docs.python.org",
            desc="Official Python docs",
            categories=["dev", "docs"],
            icon="https://docs.python.org/favicon.ico",
        ),
        Bookmark(
            id="b2",
            title="GitHub",
            url="https://github.com",
            desc="Code hosting",
            categories=["dev", "tools"],
        ),
        Bookmark(
            id="c3",
            title="Recipe Site",
            url="https://recipes.example.com",
            desc="Great recipes here",
            categories=["Food"],
        ),
        Bookmark(
            id="d4",
            title="Uncategorized",
            url="https://example.org",
        ),
    ]


# ============================================================================
# Store Fixtures
# ============================================================================


@pytest.fixture
def memory_backend() -> Dict[str, str]:
    """Backing dict shared by memory slots in one test."""
    return {}


@pytest.fixture
def memory_slot(memory_backend) -> MemorySlot:
    return MemorySlot("nav_bookmarks_v1", backend=memory_backend)


@pytest.fixture
def store(memory_slot, sample_bookmarks) -> BookmarkStore:
    """Initialized store holding the sample bookmarks."""
    memory_slot.write(serialize_bookmarks(sample_bookmarks))
    bookmark_store = BookmarkStore(memory_slot)
    bookmark_store.init()
    return bookmark_store


@pytest.fixture
def data_dir(tmp_path) -> Path:
    path = tmp_path / "data"
    path.mkdir()
    return path


@pytest.fixture
def file_slot(data_dir) -> FileSlot:
    return FileSlot(data_dir, "nav_bookmarks_v1")


@pytest.fixture
def file_store(file_slot, sample_bookmarks) -> BookmarkStore:
    """Initialized store persisted on disk."""
    file_slot.write(serialize_bookmarks(sample_bookmarks))
    bookmark_store = BookmarkStore(file_slot)
    bookmark_store.init()
    return bookmark_store


@pytest.fixture
def read_only_dir(tmp_path):
    """A directory that cannot be written to (skipped when running as root)."""
    path = tmp_path / "readonly"
    path.mkdir()
    path.chmod(0o500)
    if os.access(path, os.W_OK):
        path.chmod(0o700)
        pytest.skip("permissions are not enforced for this user")
    yield path
    path.chmod(0o700)
