"""Orchestrator: configure → resolve → order → render."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from buildorder.config import load_config
from buildorder.diagnostics import DiagnosticLog
from buildorder.model import BuildDependencyInfo
from buildorder.renderer.report import render_report
from buildorder.resolver import dependency_info

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RunResult:
    """What a pipeline run produced."""

    info: BuildDependencyInfo
    report: str
    diagnostics: DiagnosticLog


def run(
    input_files: Sequence[Path],
    *,
    exclude: Sequence[Path] = (),
    base_path: Path | None = None,
    strict: bool | None = None,
    solutions: bool = False,
    fmt: str = "text",
    verbose: bool = False,
) -> RunResult:
    """Resolve *input_files* and render their build order.

    Settings left unset fall back to ``.buildorder.toml`` (or
    ``[tool.buildorder]``) in the current directory, then the base path.
    Raises BuildOrderError subclasses on fatal conditions, including
    DependencyCycleError when no order exists.
    """
    search_dirs = [Path.cwd()]
    if base_path is not None:
        search_dirs.append(base_path)
    config = load_config(*search_dirs)

    root = base_path or config.base_path or Path.cwd()
    allow_ambiguities = config.allow_ambiguities if strict is None else not strict
    excluded = [*config.exclude, *(str(e) for e in exclude)]

    logger.debug(
        "Base path: %s, allow ambiguities: %s, excluded: %s",
        root,
        allow_ambiguities,
        excluded,
    )

    diagnostics = DiagnosticLog()
    info = dependency_info(
        input_files,
        excluded,
        root,
        verbose,
        allow_ambiguities=allow_ambiguities,
        diagnostics=diagnostics,
    )
    report = render_report(info, fmt, solutions=solutions)
    logger.debug("Resolution finished with %d diagnostics", len(diagnostics))
    return RunResult(info=info, report=report, diagnostics=diagnostics)
