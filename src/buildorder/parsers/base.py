"""Parser protocol — all project descriptor parsers conform to this interface."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from buildorder.model import Project


class ProjectParser(Protocol):
    """Protocol for project descriptor parsers."""

    def can_handle(self, path: Path) -> bool:
        """Return True if this parser understands the descriptor at *path*."""
        ...

    def parse(self, path: Path) -> Project:
        """Return the populated Project for *path*, or raise ProjectParseError."""
        ...
