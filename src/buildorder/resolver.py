"""Top-level entry point: input files in, resolved dependency graphs out."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from buildorder.diagnostics import DiagnosticLog
from buildorder.exceptions import InputValidationError
from buildorder.graph import project_dependency_graph, solution_dependency_graph
from buildorder.locator import ProjectLocator
from buildorder.model import (
    PROJECT_EXTENSION,
    SOLUTION_EXTENSION,
    BuildDependencyInfo,
    PathLike,
    Project,
    canonical_path,
    path_key,
)
from buildorder.parsers import ProjectParser, default_parser

logger = logging.getLogger(__name__)


def classify_input_files(
    input_files: Iterable[PathLike],
) -> tuple[list[Path], list[Path]]:
    """Split canonicalised *input_files* into (project files, solution files)."""
    by_extension: dict[str, list[Path]] = {}
    for input_file in input_files:
        path = canonical_path(input_file)
        by_extension.setdefault(path.suffix.lower(), []).append(path)

    project_files = by_extension.pop(PROJECT_EXTENSION, [])
    solution_files = by_extension.pop(SOLUTION_EXTENSION, [])
    for extension, paths in by_extension.items():
        raise InputValidationError(
            f"Unknown file type: '{extension}' in {', '.join(str(p) for p in paths)}"
        )
    return project_files, solution_files


def canonical_exclusions(excluded_solutions: Iterable[PathLike]) -> frozenset[str]:
    """Path keys of *excluded_solutions*; each must be a .sln file."""
    keys = set()
    for excluded in excluded_solutions:
        path = canonical_path(excluded)
        if path.suffix.lower() != SOLUTION_EXTENSION:
            raise InputValidationError(
                f"excluded files must have extension: {SOLUTION_EXTENSION} ({path})"
            )
        keys.add(path_key(path))
    return frozenset(keys)


def dependency_info(
    input_files: Iterable[PathLike],
    excluded_solutions: Iterable[PathLike],
    base_path: PathLike,
    verbose: bool = False,
    *,
    parser: ProjectParser | None = None,
    allow_ambiguities: bool = True,
    diagnostics: DiagnosticLog | None = None,
) -> BuildDependencyInfo:
    """Resolve the dependency graphs of a set of .csproj and .sln files.

    Solution files are expanded into their member projects through a
    ProjectLocator rooted at *base_path*, which is also what artifact
    references are resolved against.  Solutions may appear in the result
    even if they were not among the inputs, when something in the input
    depends on them.

    *excluded_solutions* are only recorded in the result, for callers
    breaking cycles; see BuildDependencyInfo.solution_build_order.
    """
    project_files, solution_files = classify_input_files(input_files)
    excluded = canonical_exclusions(excluded_solutions)

    parser = parser if parser is not None else default_parser()
    direct_projects = [parser.parse(f) for f in project_files]

    locator = ProjectLocator(
        base_path, allow_ambiguities, parser=parser, diagnostics=diagnostics
    )
    solution_projects: list[Project] = []
    for solution_file in solution_files:
        if locator.get_solution(solution_file) is None:
            locator.diagnostics.warning(
                "unknown-solution",
                f"Solution {solution_file} is not under base path {locator.root}",
                str(solution_file),
            )
        solution_projects.extend(locator.projects_of_solution(solution_file))

    projects: list[Project] = list(dict.fromkeys(direct_projects + solution_projects))
    if verbose:
        logger.info(
            "%s", describe_inputs(project_files, solution_files, projects, excluded)
        )

    project_graph = project_dependency_graph(locator, projects, False)
    solution_graph = solution_dependency_graph(locator, projects, False)

    project_solutions = {}
    for project in project_graph:
        solution = locator.find_solution(project)
        if solution is not None:
            project_solutions[project.key] = solution.key

    return BuildDependencyInfo(
        project_graph=project_graph,
        solution_graph=solution_graph,
        excluded_solutions=excluded,
        project_solutions=project_solutions,
    )


def describe_inputs(
    project_files: Iterable[Path],
    solution_files: Iterable[Path],
    projects: Iterable[Project],
    excluded: Iterable[str],
) -> str:
    """Human-readable summary of what a resolution run starts from."""

    def _section(title: str, items: Iterable[object]) -> str:
        return title + ":\n\t" + "\n\t".join(str(i) for i in items)

    return "\n".join(
        [
            _section("Input CSPROJ files", project_files),
            _section("Input SLN files", solution_files),
            _section("Input projects", (p.path for p in projects)),
            _section("Excluding solutions", sorted(excluded)),
        ]
    )
