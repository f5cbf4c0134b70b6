"""Discover projects and solutions under a root directory and relate them."""

from __future__ import annotations

import logging
import re
from collections import defaultdict
from pathlib import Path

from buildorder.diagnostics import DiagnosticLog
from buildorder.exceptions import (
    ArtifactAmbiguityError,
    InputValidationError,
    MissingSolutionError,
    ProjectParseError,
    SolutionAmbiguityError,
)
from buildorder.model import (
    PROJECT_EXTENSION,
    SOLUTION_EXTENSION,
    ArtifactReference,
    PathLike,
    Project,
    Solution,
    canonical_path,
    is_within,
    path_key,
)
from buildorder.parsers import ProjectParser, default_parser

logger = logging.getLogger(__name__)

# Quoted project paths inside a .sln, e.g. "src\Foo\Foo.csproj"
_PROJECT_IN_SOLUTION_RE = re.compile(r'"[^"]*\.csproj"', re.IGNORECASE)


def _discover(root: Path, extension: str) -> list[Path]:
    """Return every file under *root* whose extension matches, sorted."""
    return sorted(
        path
        for path in root.rglob("*")
        if path.suffix.lower() == extension and path.is_file()
    )


class ProjectLocator:
    """The universe of known projects and solutions below a search root.

    All discovery happens here, eagerly; afterwards the locator is read-only
    apart from the artifact-name lookup memo.
    """

    def __init__(
        self,
        root: PathLike,
        allow_ambiguities: bool,
        *,
        parser: ProjectParser | None = None,
        diagnostics: DiagnosticLog | None = None,
    ):
        self.diagnostics = diagnostics if diagnostics is not None else DiagnosticLog(logger)
        self._root = canonical_path(root)
        if not self._root.is_dir():
            message = f"Directory does not exist: {self._root}"
            self.diagnostics.error("missing-root", message, str(self._root))
            raise InputValidationError(message)

        self._parser = parser if parser is not None else default_parser()
        self._projects: dict[str, Project] = {}
        self._solutions: dict[str, Solution] = {}
        self._solution_of: dict[str, Solution] = {}
        self._by_name: dict[str, list[Project]] | None = None
        self._name_cache: dict[str, list[Project]] = {}

        solution_files = _discover(self._root, SOLUTION_EXTENSION)
        project_files = _discover(self._root, PROJECT_EXTENSION)
        logger.debug(
            "Found %d project files and %d solution files under %s",
            len(project_files),
            len(solution_files),
            self._root,
        )

        self._add_all_projects(project_files)
        self._check_name_ambiguities(allow_ambiguities)
        self._map_solutions_to_projects(solution_files)

    @property
    def root(self) -> Path:
        return self._root

    def _add_all_projects(self, project_files: list[Path]) -> None:
        for project_file in project_files:
            try:
                project = self._parser.parse(project_file)
            except ProjectParseError as e:
                self.diagnostics.warning(
                    "parse-skipped",
                    "Skipping project because there was an error while trying "
                    f"to process the .csproj file ({project_file})",
                    str(project_file),
                )
                logger.debug("Skipping project due to: %s", e)
                continue
            self._projects.setdefault(project.key, project)

    def _check_name_ambiguities(self, allow_ambiguities: bool) -> None:
        groups: dict[str, list[Project]] = defaultdict(list)
        for project in self._projects.values():
            groups[project.name.strip().casefold()].append(project)
        self._by_name = dict(groups)

        collisions = {
            name: sorted(str(p.path) for p in members)
            for name, members in groups.items()
            if len(members) > 1
        }
        if not collisions:
            return

        error = ArtifactAmbiguityError(collisions)
        if allow_ambiguities:
            self.diagnostics.warning("name-ambiguity", str(error))
        else:
            self.diagnostics.error("name-ambiguity", str(error))
            raise error

    def _map_solutions_to_projects(self, solution_files: list[Path]) -> None:
        for solution_file in solution_files:
            solution = Solution(path=canonical_path(solution_file))
            self._solutions[solution.key] = solution
            try:
                data = solution_file.read_text(encoding="utf-8-sig", errors="replace")
            except OSError as e:
                self.diagnostics.warning(
                    "solution-unreadable",
                    f"Could not read solution file {solution_file}: {e}",
                    str(solution_file),
                )
                continue

            for match in _PROJECT_IN_SOLUTION_RE.finditer(data):
                fragment = match.group(0)[1:-1]
                project = self._projects.get(path_key(canonical_path(fragment, solution.directory)))
                if project is None:
                    continue
                if not is_within(project.path, solution.directory):
                    self.diagnostics.warning(
                        "outside-solution",
                        f"Skipping potential mapping to SLN file {solution.path} because "
                        f"it is not in a parent directory of the project {project.path}",
                        str(project.path),
                    )
                    continue
                owner = self._solution_of.get(project.key)
                if owner is not None:
                    if owner == solution:
                        continue
                    error = SolutionAmbiguityError(
                        str(project.path), [str(solution.path), str(owner.path)]
                    )
                    self.diagnostics.error("solution-ambiguity", str(error), str(project.path))
                    raise error
                self._solution_of[project.key] = solution
                solution.projects.append(project)

    # ------------------------------------------------------------------
    # queries
    # ------------------------------------------------------------------

    def all_projects(self) -> list[Project]:
        return list(self._projects.values())

    def all_solutions(self) -> list[Solution]:
        return list(self._solutions.values())

    def find_project(self, path: PathLike) -> Project | None:
        return self._projects.get(path_key(path))

    def get_solution(self, path: PathLike) -> Solution | None:
        return self._solutions.get(path_key(path))

    def projects_of_solution(self, solution: Solution | PathLike) -> list[Project]:
        """Projects belonging to *solution*, given as a Solution or a path.

        An unknown solution has no projects.
        """
        key = solution.key if isinstance(solution, Solution) else path_key(solution)
        known = self._solutions.get(key)
        return list(known.projects) if known is not None else []

    def find_projects_for_artifact(self, reference: ArtifactReference) -> list[Project]:
        return self.find_projects_for_name(reference.short_name)

    def find_projects_for_name(self, name: str) -> list[Project]:
        """Every known project whose assembly name matches *name*.

        Usually zero or one; more only when ambiguities were allowed.
        """
        folded = name.strip().casefold()
        result = self._name_cache.get(folded)
        if result is None:
            result = list((self._by_name or {}).get(folded, []))
            self._name_cache[folded] = result
        return result

    def has_solution(self, project: Project) -> bool:
        return project.key in self._solution_of

    def find_solution(self, project: Project) -> Solution | None:
        """The solution owning *project*, or None if there is none."""
        return self._solution_of.get(project.key)

    def solution_of(self, project: Project) -> Solution:
        """The solution owning *project*; raises MissingSolutionError if none."""
        solution = self._solution_of.get(project.key)
        if solution is None:
            error = MissingSolutionError(str(project.path))
            self.diagnostics.warning("missing-solution", str(error), str(project.path))
            raise error
        return solution
