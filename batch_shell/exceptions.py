"""Exception classes for batch_shell."""

from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    FATAL = "fatal"


class BatchShellError(Exception):
    """Base exception class for batch_shell."""

    severity: ErrorSeverity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception.

        Args:
            message: Error message
            details: Additional error details
        """
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation."""
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class ConfigurationError(BatchShellError):
    """Configuration related errors."""

    severity = ErrorSeverity.FATAL


class ParseError(BatchShellError):
    """A command line could not be interpreted (e.g. directive without a path)."""

    severity = ErrorSeverity.WARNING


class FileOpenError(BatchShellError):
    """A directive file could not be opened."""

    severity = ErrorSeverity.ERROR


class LaunchFailure(BatchShellError):
    """A child process could not be started."""

    severity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        exit_code: int,
        details: dict[str, Any] | None = None,
    ):
        """Initialize exception.

        Args:
            message: Error message
            exit_code: Exit status reported in place of the missing child's
            details: Additional error details
        """
        self.exit_code = exit_code
        super().__init__(message, details)


class WaitFailure(BatchShellError):
    """Waiting on a child failed (untracked or already reaped handle)."""

    severity = ErrorSeverity.ERROR


class InputReadError(BatchShellError):
    """A line could not be read or decoded from a command stream."""

    severity = ErrorSeverity.ERROR
