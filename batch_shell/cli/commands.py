"""CLI commands for batch_shell."""

import sys
from pathlib import Path

import click

from batch_shell import __version__
from batch_shell.batch import BatchExecutor, classify, tokenize
from batch_shell.cli.validators import validate_config_file, validate_script_file
from batch_shell.config import Settings
from batch_shell.exceptions import ConfigurationError, FileOpenError, ParseError
from batch_shell.models import ExecutionMode, LineKind

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 120,
}


def _get_settings(ctx: click.Context) -> Settings:
    """Load settings from --config, or from the default locations."""
    from batch_shell.config import get_settings, load_config

    config_path = ctx.obj.get("config_path")
    try:
        return load_config(config_path) if config_path else get_settings()
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from None


def _get_executor(ctx: click.Context) -> BatchExecutor:
    return BatchExecutor(settings=ctx.obj["settings"])


@click.group(context_settings=CONTEXT_SETTINGS, invoke_without_command=True)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to configuration file",
    callback=validate_config_file,
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    default=False,
    help="Enable debug logging",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    default=False,
    help="Only log errors",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write logs to this file",
)
@click.version_option(version=__version__, prog_name="batch_shell")
@click.pass_context
def cli(
    ctx: click.Context,
    config: Path | None,
    verbose: bool,
    quiet: bool,
    log_file: Path | None,
) -> None:
    """Batch Shell - run commands serially or in parallel

    Without a subcommand, reads commands from standard input, one per line,
    and runs each one to completion before reading the next.

    \b
    Input lines:
        # comment            ignored, as are blank lines
        prog arg "a b"       run prog with arguments ("..." quotes a word)
        exit                 stop reading
        SERIAL file          run the lines of file one at a time, then stop
        PARALLEL file        launch every line of file, wait for all, then stop

    \b
    Examples:
        # Interactive session
        batch-shell

        # Run a script with all commands launched at once
        batch-shell run --parallel jobs.txt
    """
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    settings = _get_settings(ctx).model_copy(deep=True)
    if log_file is not None:
        settings.logging.file = str(log_file)
    ctx.obj["settings"] = settings

    from batch_shell.utils.logger import configure_from_settings

    log_level = "DEBUG" if verbose else "ERROR" if quiet else None
    configure_from_settings(settings, log_level=log_level)

    if ctx.invoked_subcommand is None:
        executor = _get_executor(ctx)
        executor.run(sys.stdin, sys.stdout, ExecutionMode.SERIAL, prompt=settings.shell.prompt)
        ctx.exit(0)


@cli.command()
@click.argument(
    "script",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    callback=validate_script_file,
)
@click.option(
    "--parallel",
    "-p",
    is_flag=True,
    default=False,
    help="Launch every command before waiting for any of them",
)
@click.option(
    "--prompt",
    type=str,
    default="",
    help="Prompt written before each line is read",
)
@click.pass_context
def run(ctx: click.Context, script: Path, parallel: bool, prompt: str) -> None:
    """Run the commands of SCRIPT as one batch.

    \b
    Equivalent to entering "SERIAL SCRIPT" (or "PARALLEL SCRIPT" with
    --parallel) in an interactive session.
    """
    executor = _get_executor(ctx)
    mode = ExecutionMode.PARALLEL if parallel else ExecutionMode.SERIAL
    try:
        executor.run_file(script, sys.stdout, mode, prompt=prompt)
    except FileOpenError as e:
        click.echo(f"Error: {e.message}")


@cli.command()
@click.argument(
    "script",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    callback=validate_script_file,
)
@click.pass_context
def check(ctx: click.Context, script: Path) -> None:
    """Show how each line of SCRIPT would be handled, without running it.

    Exits with status 1 if any line cannot be parsed.
    """
    shell = ctx.obj["settings"].shell
    failures = 0

    try:
        f = open(script, encoding=shell.encoding, errors=shell.decode_errors)
    except OSError as e:
        raise click.ClickException(f"cannot open '{script}': {e.strerror or e}") from None

    with f:
        for lineno, line in enumerate(f, start=1):
            try:
                action = classify(tokenize(line))
            except ParseError as e:
                failures += 1
                click.echo(click.style(f"{lineno}: error {e.message}", fg="red"))
                continue

            if action.kind == LineKind.IGNORE:
                continue
            if action.kind == LineKind.EXECUTE:
                click.echo(f"{lineno}: execute {action.argv}")
            elif action.kind == LineKind.RECURSE:
                click.echo(f"{lineno}: recurse {action.mode.value} {action.path}")
            else:
                click.echo(f"{lineno}: terminate")

    if failures:
        ctx.exit(1)
