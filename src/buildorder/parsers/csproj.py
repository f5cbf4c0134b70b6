"""Parse MSBuild .csproj files into Project entities."""

from __future__ import annotations

import logging
import os
import xml.etree.ElementTree as ET
from pathlib import Path

from buildorder.exceptions import ProjectParseError
from buildorder.model import (
    PROJECT_EXTENSION,
    ArtifactReference,
    PathLike,
    Project,
    canonical_path,
    path_key,
)

logger = logging.getLogger(__name__)


def _local(tag: str) -> str:
    """Strip the MSBuild XML namespace, if any, from an element tag."""
    return tag.rsplit("}", 1)[-1]


def _text(element: ET.Element | None) -> str | None:
    if element is None:
        return None
    return element.text.strip() if element.text else None


def _child(element: ET.Element, name: str) -> ET.Element | None:
    for child in element:
        if _local(child.tag) == name:
            return child
    return None


def _elements(root: ET.Element, name: str) -> list[ET.Element]:
    return [el for el in root.iter() if _local(el.tag) == name]


def find_existing(path: Path) -> Path | None:
    """Locate *path* on disk, ignoring letter case if it must.

    Project files authored on Windows often reference each other with a
    casing that differs from the files on disk.
    """
    if path.exists():
        return path

    current = Path(path.anchor)
    for part in path.parts[1:]:
        candidate = current / part
        if candidate.exists():
            current = candidate
            continue
        try:
            entries = os.listdir(current)
        except OSError:
            return None
        folded = part.casefold()
        matches = sorted(e for e in entries if e.casefold() == folded)
        if not matches:
            return None
        current = current / matches[0]
    return current


class CsprojParser:
    """Build Project entities from .csproj files.

    Referenced projects are parsed recursively.  Every entity is cached by
    its path key, so a project reached twice (or through a reference cycle)
    is the same object each time.

    Entities built during one call to :meth:`parse` are staged and only
    enter the cache when the whole call succeeds.  If any project in the
    reference closure fails, every entity staged by that call is dropped,
    so no cached project ever points at a failed one.
    """

    def __init__(self) -> None:
        self._cache: dict[str, Project] = {}

    def can_handle(self, path: Path) -> bool:
        return Path(path).suffix.lower() == PROJECT_EXTENSION

    def parse(self, path: PathLike) -> Project:
        staged: dict[str, Project] = {}
        project = self._parse(path, staged)
        self._cache.update(staged)
        return project

    def _parse(self, path: PathLike, staged: dict[str, Project]) -> Project:
        canonical = canonical_path(path)
        key = path_key(canonical)
        cached = self._cache.get(key) or staged.get(key)
        if cached is not None:
            return cached

        actual = find_existing(canonical)
        if actual is None or not actual.is_file():
            raise ProjectParseError(str(canonical), "file does not exist")

        try:
            root = ET.parse(actual).getroot()
        except ET.ParseError as e:
            raise ProjectParseError(str(actual), f"malformed XML: {e}") from e
        except OSError as e:
            raise ProjectParseError(str(actual), str(e)) from e

        project = Project(
            path=actual,
            name=_assembly_name(root) or actual.stem,
            artifact_references=_artifact_references(root),
        )
        staged[key] = project

        try:
            for include in _project_reference_includes(root):
                reference = self._parse(canonical_path(include, actual.parent), staged)
                if reference not in project.project_references:
                    project.project_references.append(reference)
        except ProjectParseError as e:
            raise ProjectParseError(
                str(actual), f"referenced project {e.path} failed: {e.reason}"
            ) from e

        logger.debug(
            "Parsed %s: %d project refs, %d assembly refs",
            actual,
            len(project.project_references),
            len(project.artifact_references),
        )
        return project


def _assembly_name(root: ET.Element) -> str | None:
    for element in _elements(root, "AssemblyName"):
        name = _text(element)
        if name:
            return name
    return None


def _project_reference_includes(root: ET.Element) -> list[str]:
    includes = []
    for element in _elements(root, "ProjectReference"):
        include = (element.get("Include") or "").strip()
        if include:
            includes.append(include)
    return includes


def _artifact_references(root: ET.Element) -> list[ArtifactReference]:
    references: list[ArtifactReference] = []
    for element in _elements(root, "Reference"):
        include = (element.get("Include") or "").strip()
        if not include:
            continue
        reference = ArtifactReference(
            full_name=include, hint_path=_text(_child(element, "HintPath"))
        )
        if reference not in references:
            references.append(reference)
    return references
