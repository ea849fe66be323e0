"""Exceptions raised by the execution core.

Only failures that happen before a process is spawned are raised.  Once a
runtime has been started, the outcome (non‑zero exit, timeout, spawn
failure) is reported as a value on :class:`~runbox.executor.ExecutionResult`.
"""

from __future__ import annotations


class ExecutionError(Exception):
    """Base class for errors raised by the execution core."""


class LanguageNotSupported(ExecutionError):
    """The requested language has no registered pipeline."""

    def __init__(self, language: str) -> None:
        super().__init__(f"Language not supported: {language}")
        self.language = language


class SetupError(ExecutionError):
    """A workspace could not be created or populated."""
