"""Models describing classified command lines."""

from enum import Enum

from pydantic import BaseModel, Field


class ExecutionMode(str, Enum):
    """How a batch runs its commands."""

    SERIAL = "serial"
    PARALLEL = "parallel"


class LineKind(str, Enum):
    """What a tokenized line asks the interpreter to do."""

    IGNORE = "ignore"
    TERMINATE = "terminate"
    RECURSE = "recurse"
    EXECUTE = "execute"


class LineAction(BaseModel):
    """Classification of one tokenized line."""

    kind: LineKind = Field(description="Action to take for the line")
    argv: list[str] = Field(
        default_factory=list,
        description="Program and arguments (execute only)",
    )
    mode: ExecutionMode | None = Field(
        default=None,
        description="Mode of the nested batch (recurse only)",
    )
    path: str | None = Field(
        default=None,
        description="File to read the nested batch from (recurse only)",
    )

    @property
    def command_line(self) -> str:
        """Space-joined argv, as echoed in the Running: line."""
        return " ".join(self.argv)

    @classmethod
    def ignore(cls) -> "LineAction":
        return cls(kind=LineKind.IGNORE)

    @classmethod
    def terminate(cls) -> "LineAction":
        return cls(kind=LineKind.TERMINATE)

    @classmethod
    def recurse(cls, mode: ExecutionMode, path: str) -> "LineAction":
        return cls(kind=LineKind.RECURSE, mode=mode, path=path)

    @classmethod
    def execute(cls, argv: list[str]) -> "LineAction":
        return cls(kind=LineKind.EXECUTE, argv=list(argv))
