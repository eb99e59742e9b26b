"""Pytest configuration and shared fixtures."""

from pathlib import Path

import pytest

from kazi.config.schema import KaziConfig
from kazi.todos.store import TodoStore


@pytest.fixture
def default_config() -> KaziConfig:
    """Provide a default configuration for tests."""
    return KaziConfig()


@pytest.fixture
def tmp_config(tmp_path: Path) -> KaziConfig:
    """Configuration whose todo database lives in a temporary directory."""
    config = KaziConfig()
    config.storage.database = str(tmp_path / "todos.db")
    return config


@pytest.fixture
def store(tmp_path: Path) -> TodoStore:
    """Create a temporary todo store."""
    return TodoStore(tmp_path / "todos.db")
