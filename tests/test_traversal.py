"""Tests for the breadth-first deep dependency traversal."""

from __future__ import annotations

from pathlib import Path

import pytest
from conftest import write_csproj

from buildorder.exceptions import MissingSolutionError
from buildorder.locator import ProjectLocator
from buildorder.model import ArtifactReference, Project
from buildorder.traversal import deep_dependencies


def _named_edges(edges) -> set[tuple[str, str]]:
    return {(a.name, b.name) for a, b in edges}


def _project(tmp_path: Path, name: str, *refs: Project, artifacts: tuple[str, ...] = ()) -> Project:
    return Project(
        path=tmp_path / f"{name}.csproj",
        name=name,
        project_references=list(refs),
        artifact_references=[ArtifactReference(a) for a in artifacts],
    )


def test_direct_and_artifact_dependencies(abc_tree: Path):
    locator = ProjectLocator(abc_tree, False)
    a = locator.find_project(abc_tree / "A" / "A.csproj")

    edges = list(deep_dependencies(locator, [a], False))

    assert _named_edges(edges) == {("A", "B"), ("A", "C")}
    assert len(edges) == 2


def test_without_locator_artifacts_are_not_followed(tmp_path: Path):
    b = _project(tmp_path, "B")
    a = _project(tmp_path, "A", b, artifacts=("C",))
    assert _named_edges(deep_dependencies(None, [a], False)) == {("A", "B")}


def test_project_without_references_yields_nothing(tmp_path: Path):
    lone = _project(tmp_path, "Lone")
    assert list(deep_dependencies(None, [lone], False)) == []


def test_self_reference_never_yields_self_edge(tmp_path: Path):
    a = _project(tmp_path, "A")
    a.project_references.append(a)
    assert list(deep_dependencies(None, [a], False)) == []


def test_cycle_terminates(tmp_path: Path):
    a = _project(tmp_path, "A")
    b = _project(tmp_path, "B", a)
    a.project_references.append(b)

    edges = list(deep_dependencies(None, [a], False))

    assert _named_edges(edges) == {("A", "B"), ("B", "A")}


def test_transitive_chain(tmp_path: Path):
    d = _project(tmp_path, "D")
    c = _project(tmp_path, "C", d)
    b = _project(tmp_path, "B", c)
    a = _project(tmp_path, "A", b)
    assert _named_edges(deep_dependencies(None, [a], False)) == {
        ("A", "B"),
        ("B", "C"),
        ("C", "D"),
    }


def test_diamond_edges_are_all_reported(tmp_path: Path):
    d = _project(tmp_path, "D")
    b = _project(tmp_path, "B", d)
    c = _project(tmp_path, "C", d)
    a = _project(tmp_path, "A", b, c)
    edges = list(deep_dependencies(None, [a], False))
    assert _named_edges(edges) == {("A", "B"), ("A", "C"), ("B", "D"), ("C", "D")}


def test_idempotent(two_solution_tree: Path):
    locator = ProjectLocator(two_solution_tree, False)
    seeds = locator.all_projects()
    first = set(deep_dependencies(locator, seeds, True))
    second = set(deep_dependencies(locator, seeds, True))
    assert first == second


def test_solution_siblings_are_explored(two_solution_tree: Path):
    # P1 alone has no dependencies, but its sibling P2 depends on P3
    locator = ProjectLocator(two_solution_tree, False)
    p1 = locator.find_project(two_solution_tree / "s1" / "P1" / "P1.csproj")

    assert list(deep_dependencies(locator, [p1], False)) == []
    assert _named_edges(deep_dependencies(locator, [p1], True)) == {("P2", "P3")}


def test_sibling_expansion_requires_a_solution(abc_tree: Path):
    locator = ProjectLocator(abc_tree, False)
    a = locator.find_project(abc_tree / "A" / "A.csproj")
    with pytest.raises(MissingSolutionError):
        list(deep_dependencies(locator, [a], True))


def test_ambiguous_artifact_yields_all_candidates(tmp_path: Path):
    write_csproj(tmp_path / "one" / "Common.csproj")
    write_csproj(tmp_path / "two" / "Common.csproj")
    write_csproj(tmp_path / "App" / "App.csproj", references=["Common"])
    locator = ProjectLocator(tmp_path, True)
    app = locator.find_project(tmp_path / "App" / "App.csproj")

    targets = {b.path for _, b in deep_dependencies(locator, [app], False)}

    assert targets == {tmp_path / "one" / "Common.csproj", tmp_path / "two" / "Common.csproj"}
