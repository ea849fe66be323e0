"""Shared fixtures.

The API module builds its workspace manager from the environment at import
time, so the scratch root is pointed at a temporary directory before any
test module imports it.  Core tests run snippets with the current Python
interpreter so that they do not depend on Node being installed.
"""

from __future__ import annotations

import os
import shutil
import sys
import tempfile
import time
from pathlib import Path

import pytest

_API_SCRATCH_ROOT = None
if "RUNBOX_SCRATCH_ROOT" not in os.environ:
    _API_SCRATCH_ROOT = tempfile.mkdtemp(prefix="runbox-tests-")
    os.environ["RUNBOX_SCRATCH_ROOT"] = _API_SCRATCH_ROOT

from runbox.executor import ExecutionOrchestrator  # noqa: E402
from runbox.pipelines import LanguagePipeline, PipelineRegistry  # noqa: E402
from runbox.workspace import WorkspaceManager  # noqa: E402


TEMPLATE_GREETING = "hello from the template"


def pytest_unconfigure(config):
    if _API_SCRATCH_ROOT is not None:
        shutil.rmtree(_API_SCRATCH_ROOT, ignore_errors=True)


def is_running(pid: int) -> bool:
    """True if ``pid`` exists and is not a zombie waiting to be reaped."""
    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        return False
    try:
        with open(f"/proc/{pid}/stat", encoding="utf-8") as f:
            state = f.read().rsplit(")", 1)[1].split()[0]
    except OSError:
        return True
    return state not in {"Z", "X"}


@pytest.fixture
def scratch_root(tmp_path) -> Path:
    root = tmp_path / "scratch"
    root.mkdir()
    return root


@pytest.fixture
def template_dir(tmp_path) -> Path:
    template = tmp_path / "template"
    (template / "lib").mkdir(parents=True)
    (template / "helper.py").write_text(f"GREETING = {TEMPLATE_GREETING!r}\n", encoding="utf-8")
    (template / "lib" / "data.txt").write_text("nested\n", encoding="utf-8")
    return template


def python_pipeline(language: str = "pyscript", timeout: float = 10, **kwargs) -> LanguagePipeline:
    return LanguagePipeline(
        id=language,
        file_extension=".py",
        runtime_command=(sys.executable, "{entry}"),
        timeout=timeout,
        **kwargs,
    )


@pytest.fixture
def registry(template_dir) -> PipelineRegistry:
    return PipelineRegistry(
        [
            python_pipeline("pyscript"),
            python_pipeline(
                "pytemplate",
                needs_template_project=True,
                template_source_path=template_dir,
            ),
            python_pipeline(
                "pyslow",
                timeout=1,
                needs_template_project=True,
                template_source_path=template_dir,
            ),
        ]
    )


@pytest.fixture
def workspaces(scratch_root) -> WorkspaceManager:
    return WorkspaceManager(scratch_root)


@pytest.fixture
def orchestrator(registry, workspaces) -> ExecutionOrchestrator:
    return ExecutionOrchestrator(registry, workspaces)


def wait_until_gone(pid: int, timeout: float = 1.0) -> bool:
    """Give a killed process a moment to finish exiting."""
    deadline = time.monotonic() + timeout
    while is_running(pid):
        if time.monotonic() > deadline:
            return False
        time.sleep(0.02)
    return True
