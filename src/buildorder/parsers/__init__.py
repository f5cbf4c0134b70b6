"""Project descriptor parsers."""

from __future__ import annotations

from buildorder.parsers.base import ProjectParser
from buildorder.parsers.csproj import CsprojParser

__all__ = [
    "CsprojParser",
    "ProjectParser",
    "default_parser",
]


def default_parser() -> ProjectParser:
    """Return a fresh parser for MSBuild .csproj files."""
    return CsprojParser()
