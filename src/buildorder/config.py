"""Optional settings from .buildorder.toml or [tool.buildorder] in pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = ".buildorder.toml"


@dataclass
class Config:
    """Resolution settings a project can check in next to its sources."""

    exclude: list[str] = field(default_factory=list)
    allow_ambiguities: bool = True
    base_path: Path | None = None


def _from_table(table: dict, origin: Path) -> Config:
    config = Config()
    exclude = table.get("exclude", [])
    if isinstance(exclude, str):
        exclude = [exclude]
    # Relative entries are relative to the file that lists them
    config.exclude = [str(origin.parent / e) for e in exclude if isinstance(e, str)]
    allow = table.get("allow_ambiguities")
    if isinstance(allow, bool):
        config.allow_ambiguities = allow
    base_path = table.get("base_path")
    if isinstance(base_path, str):
        config.base_path = origin.parent / base_path
    return config


def load_config(*search_dirs: Path) -> Config:
    """Read the first config found in *search_dirs*.

    In each directory ``.buildorder.toml`` (``[buildorder]`` table) wins
    over ``[tool.buildorder]`` in ``pyproject.toml``.  Missing or unreadable
    files are skipped.
    """
    for directory in search_dirs:
        candidates = (
            (directory / CONFIG_FILE_NAME, ("buildorder",)),
            (directory / "pyproject.toml", ("tool", "buildorder")),
        )
        for path, keys in candidates:
            if not path.exists():
                continue
            try:
                with open(path, "rb") as f:
                    data = tomllib.load(f)
            except (OSError, tomllib.TOMLDecodeError) as e:
                logger.debug("Could not read %s: %s", path, e)
                continue
            table = data
            for key in keys:
                table = table.get(key, {}) if isinstance(table, dict) else {}
            if isinstance(table, dict) and table:
                logger.debug("Using config from %s", path)
                return _from_table(table, path.resolve())
    return Config()
