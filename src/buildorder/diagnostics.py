"""Structured warnings collected during discovery and resolution."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Diagnostic:
    """A non-fatal (or about-to-be-raised) condition worth reporting."""

    level: int  # logging level, e.g. logging.WARNING
    code: str  # "parse-skipped", "name-ambiguity", "outside-solution", ...
    message: str
    path: str | None = None


@dataclass
class DiagnosticLog:
    """Collects diagnostics and forwards each one to a logger."""

    logger: logging.Logger = field(default=logger)
    entries: list[Diagnostic] = field(default_factory=list)

    def report(
        self, level: int, code: str, message: str, path: str | None = None
    ) -> Diagnostic:
        entry = Diagnostic(level=level, code=code, message=message, path=path)
        self.entries.append(entry)
        self.logger.log(level, message)
        return entry

    def warning(self, code: str, message: str, path: str | None = None) -> Diagnostic:
        return self.report(logging.WARNING, code, message, path)

    def error(self, code: str, message: str, path: str | None = None) -> Diagnostic:
        return self.report(logging.ERROR, code, message, path)

    def by_code(self, code: str) -> list[Diagnostic]:
        return [d for d in self.entries if d.code == code]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [d for d in self.entries if d.level == logging.WARNING]

    def __len__(self) -> int:
        return len(self.entries)
