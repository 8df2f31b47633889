"""Entry point for running batch_shell as a module."""

from batch_shell.cli import cli

if __name__ == "__main__":
    cli()
