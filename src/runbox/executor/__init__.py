"""
Execution core for the runbox service.

The :class:`ExecutionOrchestrator` looks up the language pipeline,
acquires a workspace, stages the snippet, lets the
:class:`ProcessSupervisor` run it under the pipeline's timeout and
releases the workspace again.  New languages are added as pipelines in
``runbox.pipelines``; nothing in this package branches on the language.
"""

from .base import ExecutionRequest, ExecutionResult, Outcome, SupervisedRun
from .orchestrator import ExecutionOrchestrator
from .supervisor import ProcessSupervisor

__all__ = [
    "ExecutionRequest",
    "ExecutionResult",
    "ExecutionOrchestrator",
    "Outcome",
    "ProcessSupervisor",
    "SupervisedRun",
]
