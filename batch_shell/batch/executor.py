"""Batch executor: the read / classify / dispatch / drain loop.

Serial batches wait for each command before reading the next line. Parallel
batches launch every command as it is read and only wait once the batch has
stopped reading, reaping children in launch order so that exit codes are
reported in the order the commands appeared.
"""

from datetime import datetime
from pathlib import Path
from typing import TextIO

from batch_shell.batch.classifier import classify
from batch_shell.batch.launcher import ProcessHandle, ProcessLauncher
from batch_shell.batch.state import BatchContext, BatchPhase, BatchResult, BatchTermination
from batch_shell.batch.tokenizer import tokenize
from batch_shell.config import Settings
from batch_shell.exceptions import (
    BatchShellError,
    ErrorSeverity,
    FileOpenError,
    InputReadError,
    LaunchFailure,
    ParseError,
    WaitFailure,
)
from batch_shell.models import ExecutionMode, LineAction, LineKind
from batch_shell.utils import get_logger

logger = get_logger(__name__)

RUNNING_PREFIX = "Running: "
EXIT_CODE_PREFIX = "Exit code: "
ERROR_PREFIX = "Error: "


class BatchExecutor:
    """Runs command batches read from text streams.

    The executor keeps no per-batch state; everything a batch needs lives in
    its BatchContext, so run() may be re-entered for directive files.
    """

    def __init__(
        self,
        launcher: ProcessLauncher | None = None,
        settings: Settings | None = None,
    ):
        """Initialize executor.

        Args:
            launcher: Process launcher (defaults to one built from settings).
            settings: Application settings.
        """
        self.settings = settings or Settings()
        self.launcher = launcher or ProcessLauncher(self.settings.shell)

    def run(
        self,
        input_stream: TextIO,
        output_stream: TextIO,
        mode: ExecutionMode | str = ExecutionMode.SERIAL,
        prompt: str = "",
        *,
        depth: int = 0,
    ) -> BatchResult:
        """Process every line of a stream as one batch.

        Args:
            input_stream: Stream of command lines.
            output_stream: Stream receiving prompts and reports.
            mode: Serial or parallel execution.
            prompt: Text written before each read.
            depth: Directive nesting level (0 for a top-level session).

        Returns:
            BatchResult summarising the batch.
        """
        context = BatchContext(
            input=input_stream,
            output=output_stream,
            mode=ExecutionMode(mode),
            prompt=prompt,
            depth=depth,
        )
        context.result.start_time = datetime.now()
        logger.info(f"Starting {context.mode.value} batch at depth {depth}")

        try:
            while context.phase != BatchPhase.DONE:
                self._step(context)
        finally:
            context.result.end_time = datetime.now()

        result = context.result
        logger.info(
            f"Finished {context.mode.value} batch at depth {depth}: "
            f"{len(result.commands)} commands, ended by {result.termination.value}"
        )
        return result

    def run_file(
        self,
        path: str | Path,
        output_stream: TextIO,
        mode: ExecutionMode | str = ExecutionMode.SERIAL,
        prompt: str = "",
        *,
        depth: int = 0,
    ) -> BatchResult:
        """Run the lines of a file as one batch.

        Raises:
            FileOpenError: If the file cannot be opened.
        """
        stream = self._open(path)
        with stream:
            return self.run(stream, output_stream, mode, prompt, depth=depth)

    def _step(self, context: BatchContext) -> None:
        """Advance the batch by one phase transition."""
        if context.phase == BatchPhase.READING:
            self._read_line(context)
        elif context.phase == BatchPhase.DISPATCHING:
            self._dispatch(context)
        elif context.phase == BatchPhase.DRAINING:
            self._drain(context)

    def _read_line(self, context: BatchContext) -> None:
        if context.prompt:
            context.write(context.prompt)

        try:
            line = context.input.readline()
        except (OSError, UnicodeDecodeError) as e:
            self._report_error(
                context,
                InputReadError(f"cannot read input: {e}", details={"depth": context.depth}),
            )
            context.result.termination = BatchTermination.READ_ERROR
            context.phase = BatchPhase.DRAINING
            return

        if not line:
            context.result.termination = BatchTermination.EOF
            context.phase = BatchPhase.DRAINING
            return

        try:
            action = classify(tokenize(line))
        except ParseError as e:
            self._report_error(context, e)
            return

        if action.kind == LineKind.IGNORE:
            return
        if action.kind == LineKind.TERMINATE:
            context.result.termination = BatchTermination.EXIT
            context.phase = BatchPhase.DRAINING
        elif action.kind == LineKind.RECURSE:
            self._recurse(context, action)
            context.result.termination = BatchTermination.DIRECTIVE
            context.phase = BatchPhase.DRAINING
        else:
            context.current = action
            context.phase = BatchPhase.DISPATCHING

    def _dispatch(self, context: BatchContext) -> None:
        action = context.current
        context.current = None
        context.phase = BatchPhase.READING
        if action is None:
            return

        argv = action.argv
        context.write_line(f"{RUNNING_PREFIX}{action.command_line}")
        context.result.commands.append(argv)

        try:
            handle = self.launcher.launch(argv)
        except LaunchFailure as e:
            logger.error(f"Launch failed: {e}")
            if context.is_parallel:
                context.track(argv, None, status=e.exit_code)
            else:
                self._report_status(context, e.exit_code)
            return

        if context.is_parallel:
            context.track(argv, handle)
        else:
            self._collect(context, handle)

    def _drain(self, context: BatchContext) -> None:
        if context.is_parallel:
            logger.debug(f"Draining {len(context.pending)} pending processes")
            for record in context.pending:
                logger.debug(f"Reaping #{record.order}: {' '.join(record.argv)}")
                if record.handle is None:
                    self._report_status(context, record.status)
                else:
                    self._collect(context, record.handle)
            context.pending.clear()
        context.phase = BatchPhase.DONE

    def _recurse(self, context: BatchContext, action: LineAction) -> None:
        """Run a directive file as a nested batch with its own context."""
        depth = context.depth + 1
        max_depth = self.settings.shell.max_depth
        if depth > max_depth:
            self._report_error(
                context,
                FileOpenError(
                    f"directive nesting limit ({max_depth}) exceeded: {action.path}",
                    details={"path": action.path, "depth": depth},
                ),
            )
            return

        try:
            context.result.nested = self.run_file(
                action.path,
                context.output,
                action.mode,
                prompt="",
                depth=depth,
            )
        except FileOpenError as e:
            self._report_error(context, e)

    def _collect(self, context: BatchContext, handle: ProcessHandle) -> None:
        """Wait for one child and report its exit status."""
        try:
            status = self.launcher.wait(handle)
        except WaitFailure as e:
            self._report_error(context, e)
            return
        self._report_status(context, status)

    def _report_status(self, context: BatchContext, status: int | None) -> None:
        context.result.exit_codes.append(status)
        context.write_line(f"{EXIT_CODE_PREFIX}{status}")

    def _report_error(self, context: BatchContext, error: BatchShellError) -> None:
        if error.severity == ErrorSeverity.WARNING:
            logger.warning(str(error))
        else:
            logger.error(str(error))
        context.result.errors.append(error.message)
        context.write_line(f"{ERROR_PREFIX}{error.message}")

    def _open(self, path: str | Path) -> TextIO:
        try:
            return open(
                path,
                encoding=self.settings.shell.encoding,
                errors=self.settings.shell.decode_errors,
            )
        except OSError as e:
            raise FileOpenError(
                f"cannot open '{path}': {e.strerror or e}",
                details={"path": str(path)},
            ) from None
