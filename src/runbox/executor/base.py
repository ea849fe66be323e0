"""
Request, result and outcome types shared by the execution core.

An :class:`ExecutionRequest` is what the HTTP layer hands to the
orchestrator once the body has been validated.  The orchestrator always
answers with an :class:`ExecutionResult`, even when the snippet failed:
the :class:`Outcome` says what happened and the captured output is kept
whenever a process actually ran.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Optional


class Outcome(str, enum.Enum):
    """Classification of one execution."""

    SUCCESS = "success"
    RUNTIME_ERROR = "runtime_error"
    TIMED_OUT = "timed_out"
    SETUP_ERROR = "setup_error"
    SPAWN_FAILED = "spawn_failed"


@dataclass(frozen=True)
class ExecutionRequest:
    """A validated ``(language, code)`` pair."""

    language: str
    code: str


@dataclass(frozen=True)
class SupervisedRun:
    """What the process supervisor observed for a single spawn."""

    stdout: bytes
    stderr: bytes
    outcome: Outcome
    exit_code: Optional[int] = None
    detail: Optional[str] = None


@dataclass(frozen=True)
class ExecutionResult:
    """Result of running a code snippet.

    Attributes
    ----------
    stdout: bytes
        Standard output captured from the execution.
    stderr: bytes
        Standard error captured from the execution.
    outcome: Outcome
        How the execution ended.
    elapsed: float
        Wall‑clock seconds spent in the runtime process.  Workspace setup
        and teardown are not included.
    exit_code: int, optional
        Exit status of the process, when it exited on its own.
    detail: str, optional
        Short human readable explanation for non‑success outcomes.  Never
        contains workspace paths.
    """

    stdout: bytes
    stderr: bytes
    outcome: Outcome
    elapsed: float
    exit_code: Optional[int] = None
    detail: Optional[str] = None

    @property
    def elapsed_ms(self) -> int:
        return int(self.elapsed * 1000)
