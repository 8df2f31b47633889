"""Command line interface module."""

from batch_shell.cli.commands import cli

__all__ = ["cli"]
