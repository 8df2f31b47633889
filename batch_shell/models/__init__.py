"""Data models module."""

from batch_shell.models.command import ExecutionMode, LineAction, LineKind

__all__ = [
    "ExecutionMode",
    "LineKind",
    "LineAction",
]
