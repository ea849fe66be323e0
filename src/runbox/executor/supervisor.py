"""
Process supervision for a single runtime invocation.

The supervisor spawns the pipeline's runtime against the workspace entry
file and waits for it under a wall‑clock timeout.  The working directory
is passed to :class:`subprocess.Popen` for that one child; the service's
own current directory is never changed, so concurrent runs cannot
interfere.  The child is started in a new session so that on timeout the
whole process group (the runtime and anything it forked) is killed.

Containers and processes outside of Python are assumed to be configured
with additional safeguards (e.g. Docker isolation, seccomp profiles);
the supervisor only enforces the timeout.
"""

from __future__ import annotations

import logging
import os
import signal
import subprocess
from typing import Optional, Tuple

from ..pipelines import LanguagePipeline
from ..workspace import Workspace
from .base import Outcome, SupervisedRun

logger = logging.getLogger(__name__)

_DRAIN_SECONDS = 0.5


class ProcessSupervisor:
    """Run one pipeline invocation and classify how it ended."""

    def run(self, pipeline: LanguagePipeline, workspace: Workspace) -> SupervisedRun:
        """
        Spawn the runtime for ``pipeline`` inside ``workspace``.

        Parameters
        ----------
        pipeline: LanguagePipeline
            Supplies the argv template and the timeout.
        workspace: Workspace
            The child's working directory and entry file.

        Returns
        -------
        SupervisedRun
            Captured stdout/stderr and the outcome.  Never raises for
            failures of the child itself.
        """
        args = pipeline.build_argv(workspace.entry_file_path)
        try:
            process = subprocess.Popen(
                args,
                cwd=str(workspace.root_path),
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as exc:
            logger.error("Failed to start %s runtime %r: %s", pipeline.id, args[0], exc)
            return SupervisedRun(
                stdout=b"",
                stderr=b"",
                outcome=Outcome.SPAWN_FAILED,
                detail=f"Runtime unavailable for {pipeline.id}",
            )

        try:
            stdout, stderr = process.communicate(timeout=pipeline.timeout)
        except subprocess.TimeoutExpired:
            _kill_group(process)
            stdout, stderr = _drain(process)
            logger.warning("%s execution timed out after %s seconds", pipeline.id, pipeline.timeout)
            return SupervisedRun(
                stdout=stdout or b"",
                stderr=stderr or b"",
                outcome=Outcome.TIMED_OUT,
                detail=f"Execution timed out after {_format_seconds(pipeline.timeout)} seconds",
            )
        finally:
            if process.poll() is None:
                _kill_group(process)
                process.wait()

        exit_code = process.returncode
        outcome = Outcome.SUCCESS if exit_code == 0 else Outcome.RUNTIME_ERROR
        return SupervisedRun(
            stdout=stdout or b"",
            stderr=stderr or b"",
            outcome=outcome,
            exit_code=exit_code,
        )


def _drain(process: subprocess.Popen) -> Tuple[Optional[bytes], Optional[bytes]]:
    """Collect what the killed group left in the pipes, within a short bound.

    A descendant that moved to its own session survives the group kill and
    can hold the pipes open; its output is abandoned.
    """
    try:
        return process.communicate(timeout=_DRAIN_SECONDS)
    except subprocess.TimeoutExpired as exc:
        for stream in (process.stdout, process.stderr):
            if stream is not None:
                stream.close()
        process.wait()
        return exc.stdout, exc.stderr


def _kill_group(process: subprocess.Popen) -> None:
    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        pass
    except PermissionError:
        process.kill()


def _format_seconds(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)
