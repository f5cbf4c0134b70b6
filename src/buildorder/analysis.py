"""Post-resolution graph analysis (cycle detection, ordering)."""

from __future__ import annotations

from collections.abc import Hashable

import networkx as nx

from buildorder.exceptions import DependencyCycleError


def find_cycles(graph: nx.DiGraph) -> list[list[Hashable]]:
    """Return the dependency cycles of *graph*.

    Each cycle is a strongly-connected component of size >= 2, or a single
    node with an edge to itself.  Members are sorted by their string form
    and the cycles themselves are sorted by their first member, so the
    result is stable across runs.
    """
    cycles: list[list[Hashable]] = []
    for component in nx.strongly_connected_components(graph):
        if len(component) == 1:
            (node,) = component
            if not graph.has_edge(node, node):
                continue
        cycles.append(sorted(component, key=str))
    cycles.sort(key=lambda c: str(c[0]))
    return cycles


def topological_order(graph: nx.DiGraph) -> list:
    """Topologically sort *graph*, ties broken by node path.

    Raises DependencyCycleError naming every cycle when no order exists.
    """
    try:
        return list(nx.lexicographical_topological_sort(graph, key=str))
    except nx.NetworkXUnfeasible:
        raise DependencyCycleError(find_cycles(graph), graph=graph) from None


def suggest_exclusions(solution_graph: nx.DiGraph) -> list[list[Hashable]]:
    """For every solution cycle, list the solutions that could be excluded.

    Members with the most incoming edges from inside their cycle come first.
    """
    suggestions: list[list[Hashable]] = []
    for cycle in find_cycles(solution_graph):
        members = set(cycle)
        inner = solution_graph.subgraph(members)
        ranked = sorted(cycle, key=lambda n: (-inner.in_degree(n), str(n)))
        suggestions.append(ranked)
    return suggestions
