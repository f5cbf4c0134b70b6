"""Custom exceptions for buildorder."""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import Any


class BuildOrderError(Exception):
    """Base exception for all dependency-resolution errors."""


class InputValidationError(BuildOrderError, ValueError):
    """Raised for unknown input extensions, bad exclusions or a missing root."""


class ProjectParseError(BuildOrderError):
    """Raised when a project descriptor cannot be read or parsed."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not parse project file {path}: {reason}")


class AmbiguityError(BuildOrderError):
    """Base for name- and membership-ambiguity errors."""


class ArtifactAmbiguityError(AmbiguityError):
    """Raised when several projects share an assembly name and that is not allowed."""

    def __init__(self, collisions: dict[str, list[str]]):
        self.collisions = collisions
        lines = [
            "Multiple projects with same name found - "
            "cannot reliably calculate assembly dependencies:"
        ]
        for name, paths in sorted(collisions.items()):
            lines.append(f"\t{name}:")
            lines.extend(f"\t\t{p}" for p in paths)
        super().__init__("\n".join(lines))


class SolutionAmbiguityError(AmbiguityError):
    """Raised when a project is claimed by two different solutions."""

    def __init__(self, project: str, solutions: Sequence[str]):
        self.project = project
        self.solutions = list(solutions)
        super().__init__(
            f"Project {project} has ambiguous solutions: {', '.join(self.solutions)}"
        )


class MissingSolutionError(BuildOrderError, LookupError):
    """Raised when the owning solution of a project is required but unknown."""

    def __init__(self, project: str):
        self.project = project
        super().__init__(f"No .sln found for project: {project}")


class DependencyCycleError(BuildOrderError):
    """Raised when a build order is requested for a graph with cycles."""

    def __init__(self, cycles: Sequence[Sequence[Hashable]], graph: Any = None):
        self.cycles = [list(c) for c in cycles]
        # the graph that failed to sort, when known
        self.graph = graph
        described = "; ".join(
            " <-> ".join(str(n) for n in cycle) for cycle in self.cycles
        )
        super().__init__(
            "Dependency cycle detected, no build order exists: "
            + (described or "unknown cycle")
        )
