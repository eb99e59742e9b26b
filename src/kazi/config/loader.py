"""Configuration loading and validation."""

import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import ValidationError

from kazi.config.schema import KaziConfig


DEFAULT_CONFIG_PATH = Path.home() / ".kazi" / "kazi.yaml"


class ConfigError(Exception):
    """Configuration loading or validation error."""


def load_config(path: Optional[Path] = None) -> KaziConfig:
    """Load and validate kazi configuration from YAML file.

    Args:
        path: Path to config file. If None, tries default location.
              If file doesn't exist, returns default config.

    Returns:
        Validated configuration object

    Raises:
        ConfigError: If config file exists but is invalid
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH

    # Zero-config mode: if file doesn't exist, use all defaults
    if not path.exists():
        return KaziConfig()

    try:
        with open(path, "r") as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            return KaziConfig()

        return KaziConfig(**config_data)

    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}") from e
    except Exception as e:
        raise ConfigError(f"Failed to load config from {path}: {e}") from e


def save_config(config: KaziConfig, path: Optional[Union[str, Path]] = None) -> None:
    """Save configuration to YAML file.

    Args:
        config: Configuration object to save
        path: Destination path (string or Path object). If None, uses default location.
    """
    if path is None:
        path = DEFAULT_CONFIG_PATH
    elif isinstance(path, str):
        path = Path(path)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.safe_dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)


def resolve_api_key(config: KaziConfig) -> str | None:
    """Read the model provider secret named by the active backend.

    Args:
        config: Loaded configuration

    Returns:
        The API key, or None for OpenAI-compatible servers configured without auth

    Raises:
        ConfigError: If the backend needs a key and the variable is unset or empty
    """
    if config.model.backend == "gemini":
        env_name: str | None = config.gemini.api_key_env
    else:
        env_name = config.openai.api_key_env

    if env_name is None:
        return None

    api_key = os.environ.get(env_name, "").strip()
    if not api_key:
        raise ConfigError(
            f"Missing API key: set the {env_name} environment variable "
            f"(or add it to a .env file) to use the {config.model.backend} backend"
        )
    return api_key


def database_path(config: KaziConfig) -> Path:
    """Expand the configured database location to an absolute path."""
    return Path(config.storage.database).expanduser()
