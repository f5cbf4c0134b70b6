"""Breadth-first expansion of the transitive dependencies of seed projects."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Iterable, Iterator
from typing import TYPE_CHECKING

from buildorder.model import Edge, Project

if TYPE_CHECKING:
    from buildorder.locator import ProjectLocator

logger = logging.getLogger(__name__)


def deep_dependencies(
    locator: ProjectLocator | None,
    projects: Iterable[Project],
    include_solution_siblings: bool,
) -> Iterator[Edge]:
    """Yield every (dependent, dependency) pair reachable from *projects*.

    The queue holds (source, target) pairs.  Seeds enter as (p, p) and are
    never yielded; they only drive the walk.  Each target is expanded once,
    which keeps the walk finite on cyclic graphs.

    With *include_solution_siblings*, every project sharing a solution with
    a visited project is queued as a seed too, so a solution pulled in by
    one of its members has all of its own dependencies discovered.  Every
    visited project must then belong to a solution; MissingSolutionError
    propagates otherwise.

    Artifact references that match no known project are dropped.  Without
    a locator, neither artifact references nor siblings are followed.
    """
    queue: deque[Edge] = deque((p, p) for p in projects)
    visited: set[Project] = set()

    while queue:
        source, target = queue.popleft()
        if source != target:
            yield source, target

        if target in visited:
            continue
        visited.add(target)

        if include_solution_siblings and locator is not None:
            for sibling in locator.projects_of_solution(locator.solution_of(target)):
                if sibling not in visited:
                    queue.append((sibling, sibling))

        for reference in target.project_references:
            queue.append((target, reference))

        if locator is not None:
            for artifact in target.artifact_references:
                for resolved in locator.find_projects_for_artifact(artifact):
                    queue.append((target, resolved))

    logger.debug("Traversed %d projects", len(visited))
