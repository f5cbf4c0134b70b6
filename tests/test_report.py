"""Tests for rendering resolved build orders."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
import yaml

from buildorder.renderer.report import render_report
from buildorder.resolver import dependency_info


@pytest.fixture
def info(two_solution_tree: Path):
    return dependency_info([two_solution_tree / "s1" / "S1.sln"], [], two_solution_tree)


def test_text_projects(info, two_solution_tree: Path):
    lines = render_report(info).splitlines()
    assert lines == [
        str(two_solution_tree / "s1" / "P1" / "P1.csproj"),
        str(two_solution_tree / "s2" / "P3" / "P3.csproj"),
        str(two_solution_tree / "s1" / "P2" / "P2.csproj"),
    ]


def test_text_solutions(info, two_solution_tree: Path):
    assert render_report(info, "text", solutions=True) == (
        f"{two_solution_tree / 's2' / 'S2.sln'}\n{two_solution_tree / 's1' / 'S1.sln'}\n"
    )


def test_json(info, two_solution_tree: Path):
    data = json.loads(render_report(info, "json"))
    assert [p["name"] for p in data["project_order"]] == ["P1", "P3", "P2"]
    s1 = str(two_solution_tree / "s1" / "S1.sln")
    s2 = str(two_solution_tree / "s2" / "S2.sln")
    assert data["solution_dependencies"] == {s1: [s2], s2: []}
    assert data["excluded_solutions"] == []


def test_yaml_solutions(info, two_solution_tree: Path):
    data = yaml.safe_load(render_report(info, "yaml", solutions=True))
    assert data["solution_order"] == [
        str(two_solution_tree / "s2" / "S2.sln"),
        str(two_solution_tree / "s1" / "S1.sln"),
    ]
    assert "project_order" not in data


def test_unknown_format(info):
    with pytest.raises(ValueError, match="Unknown output format"):
        render_report(info, "xml")
