"""Configuration loader module."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from batch_shell.config.settings import Settings
from batch_shell.exceptions import ConfigurationError

ENV_PREFIX = "BATCH_SHELL_"


def _merge_sections(defaults: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Overlay file values on the defaults, one section at a time.

    A mapping in ``overrides`` updates the matching section key by key so a
    file only has to name the settings it changes; anything else replaces
    the default outright.
    """
    merged = dict(defaults)
    for name, section in overrides.items():
        current = merged.get(name)
        if isinstance(current, dict) and isinstance(section, dict):
            merged[name] = _merge_sections(current, section)
        else:
            merged[name] = section
    return merged


def _read_config_file(path: Path) -> dict[str, Any]:
    """Parse a YAML configuration file into a mapping.

    An empty file yields an empty mapping.

    Raises:
        ConfigurationError: If the file cannot be read or does not hold a YAML
            mapping.
    """
    if not path.is_file():
        raise ConfigurationError(f"Configuration file not found: {path}")

    try:
        content = yaml.safe_load(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse YAML file {path}: {e}") from e

    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ConfigurationError(
            f"Configuration file must contain a mapping: {path}",
            details={"type": type(content).__name__},
        )
    return content


def _get_default_config() -> dict[str, Any]:
    """Get default configuration."""
    return Settings().model_dump()


def _coerce(original: Any, value: str) -> Any:
    """Convert an environment string to the type of the value it replaces."""
    if isinstance(original, bool):
        return value.lower() in ("true", "1", "yes")
    if isinstance(original, int):
        try:
            return int(value)
        except ValueError:
            return value
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply environment variable overrides to configuration.

    Environment variables are prefixed with BATCH_SHELL_ and use a double
    underscore (__) to separate nested keys.

    Example:
        BATCH_SHELL_SHELL__PROMPT="$ "
        BATCH_SHELL_LOGGING__LEVEL=DEBUG

    Args:
        config: Base configuration dictionary

    Returns:
        Configuration with environment overrides applied
    """
    result = config.copy()

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX) or key == f"{ENV_PREFIX}CONFIG":
            continue

        parts = key[len(ENV_PREFIX) :].lower().split("__")

        current = result
        for part in parts[:-1]:
            if part not in current:
                current[part] = {}
            elif not isinstance(current[part], dict):
                break
            current[part] = dict(current[part])
            current = current[part]
        else:
            final_key = parts[-1]
            if final_key in current:
                current[final_key] = _coerce(current[final_key], value)
            else:
                current[final_key] = value

    return result


def load_config(config_path: str | Path | None = None) -> Settings:
    """Load configuration from file with defaults and environment overrides.

    Loading order (later overrides earlier):
    1. Default configuration
    2. Configuration file (if provided)
    3. Environment variables

    Args:
        config_path: Optional path to configuration file

    Returns:
        Validated Settings object

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = _get_default_config()

    if config_path:
        file_config = _read_config_file(Path(config_path))
        config = _merge_sections(config, file_config)

    config = _apply_env_overrides(config)

    try:
        return Settings.model_validate(config)
    except Exception as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance.

    The config file is taken from BATCH_SHELL_CONFIG, or else the first
    existing default location.

    Returns:
        Cached Settings object
    """
    config_path = os.environ.get(f"{ENV_PREFIX}CONFIG")

    if not config_path:
        default_locations = [
            Path("batch_shell.yaml"),
            Path("config/batch_shell.yaml"),
            Path.home() / ".batch_shell" / "config.yaml",
        ]
        for location in default_locations:
            if location.exists():
                config_path = str(location)
                break

    return load_config(config_path)


def reset_settings() -> None:
    """Reset cached settings so the next get_settings() call reloads."""
    get_settings.cache_clear()
