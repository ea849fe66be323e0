"""Per‑execution workspaces on the scratch root.

Every execution gets its own directory, named by a random UUID, under a
configurable scratch root.  The directory is owned by that execution alone
and removed when it finishes.  Removal is best effort: a failure is logged
and never changes the result that was already computed.
"""

from __future__ import annotations

import logging
import shutil
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

from .errors import SetupError
from .pipelines import LanguagePipeline
from .staging import copy_tree

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Workspace:
    """A directory backing exactly one execution."""

    id: str
    root_path: Path
    entry_file_path: Path


class WorkspaceManager:
    """Allocate and tear down workspaces under ``scratch_root``."""

    def __init__(self, scratch_root: str | Path) -> None:
        self.scratch_root = Path(scratch_root).resolve()
        self.scratch_root.mkdir(parents=True, exist_ok=True)

    def acquire(self, pipeline: LanguagePipeline) -> Workspace:
        """Create a fresh workspace, seeded from the pipeline's template.

        Raises :class:`SetupError` if the directory cannot be created or the
        template cannot be copied.  Anything partially created is removed.
        """
        workspace_id = uuid.uuid4().hex
        root = self.scratch_root / workspace_id
        try:
            # exist_ok=False: a colliding id must fail rather than alias a live workspace
            root.mkdir()
        except OSError as exc:
            logger.error("Unable to create workspace %s: %s", workspace_id, exc)
            raise SetupError("Unable to create workspace") from exc

        workspace = Workspace(
            id=workspace_id,
            root_path=root,
            entry_file_path=root / pipeline.entry_name(workspace_id),
        )
        if pipeline.needs_template_project:
            try:
                copy_tree(pipeline.template_source_path, root)
            except OSError as exc:
                logger.error(
                    "Unable to copy %s template into workspace %s: %s",
                    pipeline.id,
                    workspace_id,
                    exc,
                )
                self.release(workspace)
                raise SetupError(f"Unable to copy {pipeline.id} template project") from exc
        logger.debug("Acquired workspace %s for %s", workspace_id, pipeline.id)
        return workspace

    def release(self, workspace: Workspace) -> None:
        """Remove the workspace tree.  Never raises."""
        try:
            shutil.rmtree(workspace.root_path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning("Failed to delete workspace %s: %s", workspace.id, exc)
        else:
            logger.debug("Released workspace %s", workspace.id)

    @contextmanager
    def session(self, pipeline: LanguagePipeline) -> Iterator[Workspace]:
        """Acquire a workspace and release it however the block exits."""
        workspace = self.acquire(pipeline)
        try:
            yield workspace
        finally:
            self.release(workspace)
