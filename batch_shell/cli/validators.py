"""Input validators for CLI commands."""

from pathlib import Path

import click
import yaml


def validate_config_file(
    ctx: click.Context,
    param: click.Parameter,
    value: Path | None,
) -> Path | None:
    """Validate configuration file.

    Args:
        ctx: Click context
        param: Click parameter
        value: Path value to validate

    Returns:
        Validated path or None

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return None

    if not value.exists():
        raise click.BadParameter(f"Config file does not exist: {value}")

    if value.suffix.lower() not in {".yaml", ".yml"}:
        raise click.BadParameter(f"Config file must be YAML format: {value}")

    try:
        with open(value, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise click.BadParameter(f"Invalid YAML in config file: {e}") from None

    if config is None:
        raise click.BadParameter(f"Config file is empty: {value}")

    return value


def validate_script_file(
    ctx: click.Context,
    param: click.Parameter,
    value: Path | None,
) -> Path | None:
    """Validate a command script is a readable text file.

    Args:
        ctx: Click context
        param: Click parameter
        value: Path value to validate

    Returns:
        Validated path or None

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return None

    if not value.is_file():
        raise click.BadParameter(f"Script is not a file: {value}")

    try:
        with open(value, "rb") as f:
            head = f.read(1024)
    except OSError as e:
        raise click.BadParameter(f"Cannot read script: {e}") from None

    if b"\0" in head:
        raise click.BadParameter(f"Script looks like a binary file: {value}")

    return value
