"""Raw shell execution for debugging a deployment.

This is deliberately separate from the execution core: it does not use
pipelines, workspaces or the orchestrator.  The text is run with
``sh -c`` in a private temporary directory and killed after a timeout.
The API only exposes it when ``RUNBOX_ENABLE_CMD_EXEC`` is set.
"""

from __future__ import annotations

import logging
import subprocess
import tempfile
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    stdout: str
    stderr: str
    exit_code: Optional[int]
    error: Optional[str] = None
    timed_out: bool = False


def run_shell_command(command: str, timeout: float) -> CommandResult:
    with tempfile.TemporaryDirectory(prefix="runbox-cmd-") as tmpdir:
        try:
            completed = subprocess.run(
                ["sh", "-c", command],
                cwd=tmpdir,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
                timeout=timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as exc:
            logger.warning("Debug command timed out after %s seconds", timeout)
            return CommandResult(
                stdout=_as_text(exc.stdout),
                stderr=_as_text(exc.stderr),
                exit_code=None,
                error=f"Command timed out after {timeout} seconds",
                timed_out=True,
            )
        except OSError as exc:
            logger.error("Failed to start debug command: %s", exc)
            return CommandResult(stdout="", stderr="", exit_code=None, error=f"Failed to start command: {exc}")

    error = None
    if completed.returncode != 0:
        error = f"exit status {completed.returncode}"
    return CommandResult(
        stdout=completed.stdout,
        stderr=completed.stderr,
        exit_code=completed.returncode,
        error=error,
    )


def _as_text(value: bytes | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value
