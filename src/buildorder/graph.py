"""Build project- and solution-level dependency graphs from the traversal."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import TYPE_CHECKING

import networkx as nx

from buildorder.analysis import topological_order
from buildorder.model import Project, Solution
from buildorder.traversal import deep_dependencies

if TYPE_CHECKING:
    from buildorder.locator import ProjectLocator

logger = logging.getLogger(__name__)


def _unique(projects: Iterable[Project]) -> list[Project]:
    return list(dict.fromkeys(projects))


def project_dependency_graph(
    locator: ProjectLocator | None, projects: Iterable[Project], reverse: bool
) -> nx.DiGraph:
    """Graph of all dependencies reachable from *projects*.

    Edges point from dependent to dependency, unless *reverse* is True, in
    which case they point from dependency to dependent; a topological sort
    of the reversed graph is a build order.  Seeds are always nodes, even
    when they have no dependencies.
    """
    seeds = _unique(projects)
    graph = nx.DiGraph()
    graph.add_nodes_from(seeds)
    for dependent, dependency in dict.fromkeys(deep_dependencies(locator, seeds, False)):
        if reverse:
            graph.add_edge(dependency, dependent)
        else:
            graph.add_edge(dependent, dependency)

    logger.debug(
        "Project graph: %d nodes, %d edges",
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph


def solution_dependency_graph(
    locator: ProjectLocator, projects: Iterable[Project], reverse: bool
) -> nx.DiGraph:
    """Project dependencies collapsed onto their owning solutions.

    Every seed and every project reached from one must belong to a
    solution; MissingSolutionError propagates otherwise.  Dependencies
    inside a single solution vanish.  The solutions of the seeds are nodes
    even without edges.
    """
    seeds = _unique(projects)
    graph = nx.DiGraph()
    for seed in seeds:
        graph.add_node(locator.solution_of(seed))

    edges: dict[tuple[Solution, Solution], None] = {}
    for dependent, dependency in deep_dependencies(locator, seeds, True):
        source = locator.solution_of(dependent)
        target = locator.solution_of(dependency)
        if source == target:
            continue
        edges[(source, target)] = None

    for source, target in edges:
        if reverse:
            graph.add_edge(target, source)
        else:
            graph.add_edge(source, target)

    logger.debug(
        "Solution graph: %d nodes, %d edges",
        graph.number_of_nodes(),
        graph.number_of_edges(),
    )
    return graph


def build_order(
    locator: ProjectLocator | None, projects: Iterable[Project]
) -> list[Project]:
    """Projects reachable from *projects*, each after all of its dependencies.

    Raises DependencyCycleError if the dependencies are cyclic.
    """
    return topological_order(project_dependency_graph(locator, projects, True))
