"""Shared pytest fixtures: small trees of .csproj and .sln files."""

from __future__ import annotations

from pathlib import Path

import pytest

MSBUILD_NS = "http://schemas.microsoft.com/developer/msbuild/2003"


def write_csproj(
    path: Path,
    *,
    assembly_name: str | None = None,
    project_refs: tuple[str, ...] | list[str] = (),
    references: tuple[str, ...] | list[str] = (),
    namespaced: bool = True,
) -> Path:
    """Write a minimal .csproj; *project_refs* are Include values as written."""
    xmlns = f' xmlns="{MSBUILD_NS}"' if namespaced else ""
    lines = [f'<Project ToolsVersion="4.0"{xmlns}>', "  <PropertyGroup>"]
    if assembly_name:
        lines.append(f"    <AssemblyName>{assembly_name}</AssemblyName>")
    lines.append("  </PropertyGroup>")
    lines.append("  <ItemGroup>")
    for ref in references:
        lines.append(f'    <Reference Include="{ref}" />')
    for ref in project_refs:
        lines.append(f'    <ProjectReference Include="{ref}">')
        lines.append("      <Name>ignored</Name>")
        lines.append("    </ProjectReference>")
    lines.append("  </ItemGroup>")
    lines.append("</Project>")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n")
    return path


def write_sln(path: Path, projects: list[str]) -> Path:
    """Write a minimal .sln listing *projects* (paths as written in the file)."""
    lines = [
        "Microsoft Visual Studio Solution File, Format Version 12.00",
        "# Visual Studio 2013",
    ]
    for i, project in enumerate(projects):
        name = project.replace("\\", "/").rsplit("/", 1)[-1].rsplit(".", 1)[0]
        guid = f"{{00000000-0000-0000-0000-{i:012d}}}"
        lines.append(
            'Project("{FAE04EC0-301F-11D3-BF4B-00C04F79EFBC}") = '
            f'"{name}", "{project}", "{guid}"'
        )
        lines.append("EndProject")
    lines.append("Global")
    lines.append("EndGlobal")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\r\n".join(lines) + "\r\n")
    return path


@pytest.fixture
def abc_tree(tmp_path: Path) -> Path:
    """A references B directly and assembly "C" by name; C.csproj exists."""
    write_csproj(
        tmp_path / "A" / "A.csproj",
        project_refs=["..\\B\\B.csproj"],
        references=["C, Version=1.0.0.0, Culture=neutral, PublicKeyToken=null", "System.Xml"],
    )
    write_csproj(tmp_path / "B" / "B.csproj")
    write_csproj(tmp_path / "C" / "C.csproj")
    return tmp_path


@pytest.fixture
def two_solution_tree(tmp_path: Path) -> Path:
    """S1 = {P1, P2}, S2 = {P3}; P2 references P3."""
    write_csproj(tmp_path / "s1" / "P1" / "P1.csproj")
    write_csproj(
        tmp_path / "s1" / "P2" / "P2.csproj",
        project_refs=["..\\..\\s2\\P3\\P3.csproj"],
    )
    write_csproj(tmp_path / "s2" / "P3" / "P3.csproj")
    write_sln(tmp_path / "s1" / "S1.sln", ["P1\\P1.csproj", "P2\\P2.csproj"])
    write_sln(tmp_path / "s2" / "S2.sln", ["P3\\P3.csproj"])
    return tmp_path


@pytest.fixture
def cyclic_tree(tmp_path: Path) -> Path:
    """SA = {A}, SB = {B}; A references B, B references assembly "A"."""
    write_csproj(tmp_path / "sa" / "A" / "A.csproj", project_refs=["..\\..\\sb\\B\\B.csproj"])
    write_csproj(tmp_path / "sb" / "B" / "B.csproj", references=["A"])
    write_sln(tmp_path / "sa" / "SA.sln", ["A\\A.csproj"])
    write_sln(tmp_path / "sb" / "SB.sln", ["B\\B.csproj"])
    return tmp_path
