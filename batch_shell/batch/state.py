"""Per-batch state: the batch context, its pending processes and its result.

Every run of the command loop owns exactly one BatchContext. A directive
creates a new context for the nested run, so pending processes are never
shared between a batch and the batch it hands off to.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import TextIO

from batch_shell.batch.launcher import ProcessHandle
from batch_shell.models import ExecutionMode, LineAction


class BatchPhase(str, Enum):
    """Phases of the command loop."""

    READING = "reading"
    DISPATCHING = "dispatching"
    DRAINING = "draining"
    DONE = "done"


class BatchTermination(str, Enum):
    """Why a batch stopped reading."""

    EOF = "eof"
    EXIT = "exit"
    DIRECTIVE = "directive"
    READ_ERROR = "read_error"


@dataclass
class ProcessRecord:
    """A command dispatched in parallel mode and not yet reported.

    ``handle`` is None when the launch failed; ``status`` then already holds
    the exit code to report.
    """

    order: int
    argv: list[str]
    handle: ProcessHandle | None = None
    status: int | None = None


@dataclass
class BatchResult:
    """Summary of one batch run."""

    mode: ExecutionMode
    depth: int = 0
    commands: list[list[str]] = field(default_factory=list)
    exit_codes: list[int] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)
    termination: BatchTermination = BatchTermination.EOF
    nested: "BatchResult | None" = None
    start_time: datetime | None = None
    end_time: datetime | None = None

    @property
    def success(self) -> bool:
        """Whether every command exited with 0 and nothing was reported as an error."""
        return not self.errors and all(code == 0 for code in self.exit_codes)

    @property
    def duration_seconds(self) -> float | None:
        """Total run duration in seconds."""
        if self.start_time is None or self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()


@dataclass
class BatchContext:
    """State of one level of command-stream processing."""

    input: TextIO
    output: TextIO
    mode: ExecutionMode = ExecutionMode.SERIAL
    prompt: str = ""
    depth: int = 0
    phase: BatchPhase = BatchPhase.READING
    pending: list[ProcessRecord] = field(default_factory=list)
    current: LineAction | None = None
    result: BatchResult = field(init=False)

    def __post_init__(self) -> None:
        self.result = BatchResult(mode=self.mode, depth=self.depth)

    @property
    def is_parallel(self) -> bool:
        return self.mode == ExecutionMode.PARALLEL

    def track(self, argv: list[str], handle: ProcessHandle | None, status: int | None = None) -> ProcessRecord:
        """Remember a dispatched command until drain time, in launch order."""
        record = ProcessRecord(order=len(self.pending), argv=argv, handle=handle, status=status)
        self.pending.append(record)
        return record

    def write(self, text: str) -> None:
        """Write to the output stream and flush so children cannot overtake it."""
        self.output.write(text)
        self.output.flush()

    def write_line(self, text: str) -> None:
        self.write(f"{text}\n")
