"""Command batch processing module.

This module provides line tokenizing and classification, child process
launching, and the serial/parallel batch executor.
"""

from batch_shell.batch.classifier import classify, is_ignored
from batch_shell.batch.executor import BatchExecutor
from batch_shell.batch.launcher import ProcessHandle, ProcessLauncher
from batch_shell.batch.state import (
    BatchContext,
    BatchPhase,
    BatchResult,
    BatchTermination,
    ProcessRecord,
)
from batch_shell.batch.tokenizer import tokenize

__all__ = [
    # Parsing
    "tokenize",
    "classify",
    "is_ignored",
    # Processes
    "ProcessLauncher",
    "ProcessHandle",
    # Executor
    "BatchExecutor",
    "BatchResult",
    # State
    "BatchContext",
    "BatchPhase",
    "BatchTermination",
    "ProcessRecord",
]
