"""Resolve build order across inter-referencing .csproj and .sln files."""

from buildorder.model import (
    ArtifactReference,
    BuildDependencyInfo,
    Project,
    Solution,
)
from buildorder.resolver import dependency_info

__all__ = [
    "ArtifactReference",
    "BuildDependencyInfo",
    "Project",
    "Solution",
    "dependency_info",
]
