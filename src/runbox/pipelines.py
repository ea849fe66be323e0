"""Language pipelines and the registry that maps language ids to them.

A pipeline is the fixed recipe for one language: which extension the entry
file gets, whether a template project is cloned into the workspace first,
how the runtime is invoked and how long it may run.  Adding a language is a
new :class:`LanguagePipeline` entry; nothing else branches on the language.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional, Tuple

from .config import Config
from .errors import LanguageNotSupported

ENTRY_PLACEHOLDER = "{entry}"


@dataclass(frozen=True)
class LanguagePipeline:
    """Immutable description of how one language is staged and executed.

    Attributes
    ----------
    id: str
        Language identifier as sent by clients (``"javascript"``).
    file_extension: str
        Extension of the entry file, including the dot.
    needs_template_project: bool
        When true, ``template_source_path`` is cloned into the workspace
        before the entry file is written.
    template_source_path: Path, optional
        Root of the template project.
    runtime_command: tuple of str
        Argv template.  ``{entry}`` is replaced by the entry file path.
    timeout: float
        Wall‑clock budget in seconds.
    """

    id: str
    file_extension: str
    runtime_command: Tuple[str, ...]
    timeout: float
    needs_template_project: bool = False
    template_source_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.needs_template_project and self.template_source_path is None:
            raise ValueError(f"Pipeline {self.id!r} needs a template_source_path")
        if not any(ENTRY_PLACEHOLDER in arg for arg in self.runtime_command):
            raise ValueError(f"Pipeline {self.id!r} runtime_command has no {ENTRY_PLACEHOLDER} argument")
        if self.timeout <= 0:
            raise ValueError(f"Pipeline {self.id!r} timeout must be positive")

    def entry_name(self, workspace_id: str) -> str:
        """Canonical entry file name inside a workspace.

        Template projects expect ``index<ext>``; plain pipelines use a name
        scoped to the request.
        """
        if self.needs_template_project:
            return f"index{self.file_extension}"
        return f"{workspace_id}{self.file_extension}"

    def build_argv(self, entry_file: Path) -> List[str]:
        return [arg.replace(ENTRY_PLACEHOLDER, str(entry_file)) for arg in self.runtime_command]


class PipelineRegistry:
    """Read‑only mapping of language id to :class:`LanguagePipeline`."""

    def __init__(self, pipelines: Iterable[LanguagePipeline]) -> None:
        table = {}
        for pipeline in pipelines:
            if pipeline.id in table:
                raise ValueError(f"Duplicate pipeline for language {pipeline.id!r}")
            table[pipeline.id] = pipeline
        self._pipelines: Mapping[str, LanguagePipeline] = MappingProxyType(table)

    def lookup(self, language: str) -> LanguagePipeline:
        try:
            return self._pipelines[language]
        except KeyError:
            raise LanguageNotSupported(language) from None

    def languages(self) -> List[str]:
        return sorted(self._pipelines)

    def __contains__(self, language: object) -> bool:
        return language in self._pipelines


def default_registry(config: Config) -> PipelineRegistry:
    """Build the JavaScript/TypeScript registry from configuration."""
    return PipelineRegistry(
        [
            LanguagePipeline(
                id="javascript",
                file_extension=".js",
                runtime_command=(config.node_bin, ENTRY_PLACEHOLDER),
                timeout=config.js_timeout_seconds,
            ),
            LanguagePipeline(
                id="typescript",
                file_extension=".ts",
                runtime_command=(config.ts_node_bin, ENTRY_PLACEHOLDER),
                timeout=config.ts_timeout_seconds,
                needs_template_project=True,
                template_source_path=Path(config.ts_template_path),
            ),
        ]
    )
