"""
Entry point of the execution core.

The orchestrator ties the registry, the workspace manager and the process
supervisor together.  It is invoked concurrently, once per request, and
holds no mutable state of its own.
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from ..errors import SetupError
from ..pipelines import PipelineRegistry
from ..staging import place_entry_point
from ..workspace import WorkspaceManager
from .base import ExecutionRequest, ExecutionResult, Outcome
from .supervisor import ProcessSupervisor

logger = logging.getLogger(__name__)


class ExecutionOrchestrator:
    """Turn an :class:`ExecutionRequest` into an :class:`ExecutionResult`."""

    def __init__(
        self,
        registry: PipelineRegistry,
        workspaces: WorkspaceManager,
        supervisor: Optional[ProcessSupervisor] = None,
    ) -> None:
        self.registry = registry
        self.workspaces = workspaces
        self.supervisor = supervisor or ProcessSupervisor()

    def execute(self, request: ExecutionRequest) -> ExecutionResult:
        """Run ``request.code`` with the pipeline registered for its language.

        Raises :class:`~runbox.errors.LanguageNotSupported` before touching
        the filesystem when the language is unknown.  Every other failure
        is reported through :attr:`ExecutionResult.outcome`.
        """
        pipeline = self.registry.lookup(request.language)

        try:
            with self.workspaces.session(pipeline) as workspace:
                try:
                    place_entry_point(request.code, workspace.root_path, workspace.entry_file_path.name)
                except OSError as exc:
                    logger.error("Unable to stage entry point for workspace %s: %s", workspace.id, exc)
                    return _setup_failure("Unable to stage source file")

                logger.info("Running %s snippet in workspace %s", pipeline.id, workspace.id)
                start_time = time.perf_counter()
                run = self.supervisor.run(pipeline, workspace)
                elapsed = time.perf_counter() - start_time
        except SetupError as exc:
            return _setup_failure(str(exc))

        logger.info(
            "Execution finished: language=%s, outcome=%s, exit_code=%s, duration_ms=%s",
            pipeline.id,
            run.outcome.value,
            run.exit_code,
            int(elapsed * 1000),
        )
        return ExecutionResult(
            stdout=run.stdout,
            stderr=run.stderr,
            outcome=run.outcome,
            elapsed=elapsed,
            exit_code=run.exit_code,
            detail=run.detail,
        )


def _setup_failure(detail: str) -> ExecutionResult:
    return ExecutionResult(
        stdout=b"",
        stderr=b"",
        outcome=Outcome.SETUP_ERROR,
        elapsed=0.0,
        detail=detail,
    )
