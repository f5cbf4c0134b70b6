"""Entity model for projects, solutions and resolved dependency graphs."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property
from pathlib import Path
from types import MappingProxyType
from typing import Union

import networkx as nx

from buildorder.analysis import topological_order

PROJECT_EXTENSION = ".csproj"
SOLUTION_EXTENSION = ".sln"

PathLike = Union[str, os.PathLike]


def canonical_path(path: PathLike, base_dir: PathLike | None = None) -> Path:
    """Return the absolute, normalised form of *path*.

    Descriptor files written on Windows use backslashes; those are treated as
    separators.  Relative paths are resolved against *base_dir* (or the
    current directory).  Symlinks are left alone.
    """
    text = os.fspath(path).strip().replace("\\", os.sep)
    if base_dir is not None and not os.path.isabs(text):
        text = os.path.join(os.fspath(base_dir), text)
    return Path(os.path.normpath(os.path.abspath(text)))


def path_key(path: PathLike) -> str:
    """Identity key of a descriptor file: canonical path, case-folded."""
    return str(canonical_path(path)).casefold()


def is_within(path: PathLike, directory: PathLike) -> bool:
    """Return True if *path* lies inside the *directory* subtree."""
    child = path_key(path)
    parent = path_key(directory).rstrip(os.sep)
    return child.startswith(parent + os.sep)


@dataclass(frozen=True)
class ArtifactReference:
    """A reference to a compiled assembly, declared by full name."""

    full_name: str
    hint_path: str | None = None

    @property
    def short_name(self) -> str:
        # "Foo.Core, Version=1.0.0.0, Culture=neutral" -> "Foo.Core"
        return self.full_name.split(",", 1)[0].strip()


@dataclass(eq=False)
class Project:
    """A buildable unit, identified by the path of its descriptor file."""

    path: Path
    name: str
    project_references: list[Project] = field(default_factory=list)
    artifact_references: list[ArtifactReference] = field(default_factory=list)

    @cached_property
    def key(self) -> str:
        return path_key(self.path)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Project):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"Project({self.name!r}, {str(self.path)!r})"

    def __str__(self) -> str:
        return str(self.path)


@dataclass(eq=False)
class Solution:
    """A grouping of projects, identified by the path of its .sln file."""

    path: Path
    projects: list[Project] = field(default_factory=list)

    @cached_property
    def key(self) -> str:
        return path_key(self.path)

    @property
    def directory(self) -> Path:
        return self.path.parent

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Solution):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"Solution({str(self.path)!r}, {len(self.projects)} projects)"

    def __str__(self) -> str:
        return str(self.path)


Edge = tuple[Project, Project]


@dataclass(frozen=True)
class BuildDependencyInfo:
    """Resolved dependency graphs plus the solutions to leave out.

    Both graphs point from dependent to dependency.  Exclusions are recorded
    here and applied by the order helpers, never to the graphs themselves.
    The graphs are frozen and the solution map is read-only.
    """

    project_graph: nx.DiGraph
    solution_graph: nx.DiGraph
    excluded_solutions: frozenset[str] = frozenset()
    # project key -> owning solution key, for projects that have one
    project_solutions: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "project_graph", nx.freeze(self.project_graph))
        object.__setattr__(self, "solution_graph", nx.freeze(self.solution_graph))
        object.__setattr__(
            self, "project_solutions", MappingProxyType(dict(self.project_solutions))
        )

    def is_excluded(self, solution: Solution | PathLike) -> bool:
        key = solution.key if isinstance(solution, Solution) else path_key(solution)
        return key in self.excluded_solutions

    def included_solution_graph(self) -> nx.DiGraph:
        """Copy of the solution graph without the excluded solutions."""
        graph = self.solution_graph.copy()
        graph.remove_nodes_from([s for s in self.solution_graph if self.is_excluded(s)])
        return graph

    def included_project_graph(self) -> nx.DiGraph:
        """Copy of the project graph without projects of excluded solutions."""
        graph = self.project_graph.copy()
        graph.remove_nodes_from(
            [
                p
                for p in self.project_graph
                if self.project_solutions.get(p.key) in self.excluded_solutions
            ]
        )
        return graph

    def solution_build_order(self) -> list[Solution]:
        """Included solutions, dependencies first."""
        return topological_order(self.included_solution_graph().reverse(copy=False))

    def project_build_order(self) -> list[Project]:
        """Projects outside excluded solutions, dependencies first."""
        return topological_order(self.included_project_graph().reverse(copy=False))
