"""Shared fixtures for CLI tests."""

from pathlib import Path

import pytest

from kazi.config.loader import save_config
from kazi.config.schema import KaziConfig


@pytest.fixture
def config_file(tmp_path: Path, tmp_config: KaziConfig) -> Path:
    """Write a config file pointing at a temporary todo database."""
    path = tmp_path / "kazi.yaml"
    save_config(tmp_config, path)
    return path


@pytest.fixture
def api_key(monkeypatch: pytest.MonkeyPatch) -> str:
    """Provide a Gemini API key through the environment."""
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    return "test-key"
