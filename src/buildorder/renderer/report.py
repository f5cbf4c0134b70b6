"""Render a BuildDependencyInfo as text, JSON or YAML."""

from __future__ import annotations

import json

import yaml

from buildorder.model import BuildDependencyInfo

FORMATS = ("text", "json", "yaml")


def _info_to_dict(info: BuildDependencyInfo, *, solutions: bool) -> dict:
    """Plain-data view of *info* shared by the JSON and YAML renderers."""
    data: dict = {
        "excluded_solutions": sorted(info.excluded_solutions),
        "solution_dependencies": {
            str(s): sorted(str(d) for d in info.solution_graph.successors(s))
            for s in sorted(info.solution_graph, key=str)
        },
    }
    if solutions:
        data["solution_order"] = [str(s) for s in info.solution_build_order()]
    else:
        data["project_order"] = [
            {"name": p.name, "path": str(p.path)} for p in info.project_build_order()
        ]
    return data


def render_report(
    info: BuildDependencyInfo, fmt: str = "text", *, solutions: bool = False
) -> str:
    """Render the build order of *info*.

    ``text`` is one path per line, dependencies first; ``json`` and ``yaml``
    also carry the solution edges and the exclusions.
    """
    if fmt == "text":
        order = info.solution_build_order() if solutions else info.project_build_order()
        return "\n".join(str(node) for node in order) + ("\n" if order else "")
    data = _info_to_dict(info, solutions=solutions)
    if fmt == "json":
        return json.dumps(data, indent=2) + "\n"
    if fmt == "yaml":
        return yaml.safe_dump(data, sort_keys=False)
    raise ValueError(f"Unknown output format: {fmt!r} (expected one of {', '.join(FORMATS)})")
