"""Batch Shell - a minimal line-oriented command interpreter

Reads commands from a stream and runs them as child processes, either one at
a time (serial) or all launched up front and reaped at the end (parallel).
"""

__version__ = "0.1.0"
__author__ = "Batch Shell Team"
