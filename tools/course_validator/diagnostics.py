"""Diagnostics collector and console report.

Validators append findings to a Diagnostics log created once per run. The log
is append-only: entries keep their emission order and are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Literal

from course_validator.config import SEVERITY_GLYPHS

Severity = Literal["pass", "error", "warning"]


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Single finding.

    Attributes:
        severity: "pass" for confirmed checks, "error" for blocking issues,
            "warning" for advisories
        message: Human-readable description
    """
    severity: Severity
    message: str

    def __str__(self) -> str:
        return f"{SEVERITY_GLYPHS[self.severity]} {self.message}"


@dataclass
class Diagnostics:
    """Ordered log of findings for one validation run.

    Invariants:
        - entries are in emission order
        - is_valid is True iff no entry has severity "error"
    """
    entries: list[Diagnostic] = field(default_factory=list)

    def pass_(self, message: str) -> None:
        """Record a check that succeeded."""
        self.entries.append(Diagnostic("pass", message))

    def error(self, message: str) -> None:
        """Record a blocking issue."""
        self.entries.append(Diagnostic("error", message))

    def warn(self, message: str) -> None:
        """Record an advisory issue."""
        self.entries.append(Diagnostic("warning", message))

    def count(self, severity: Severity) -> int:
        return sum(1 for entry in self.entries if entry.severity == severity)

    @property
    def passes(self) -> int:
        return self.count("pass")

    @property
    def errors(self) -> int:
        return self.count("error")

    @property
    def warnings(self) -> int:
        return self.count("warning")

    @property
    def is_valid(self) -> bool:
        """True if no errors (warnings don't count)."""
        return self.errors == 0

    def messages(self, severity: Severity | None = None) -> list[str]:
        """Messages in emission order, optionally filtered by severity."""
        return [
            entry.message
            for entry in self.entries
            if severity is None or entry.severity == severity
        ]

    def __iter__(self) -> Iterator[Diagnostic]:
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}" if count == 1 else f"{count} {noun}s"


def summary_line(diagnostics: Diagnostics) -> str:
    """Format the final tally, e.g. ``Results: 5 passed, 1 error, 0 warnings``."""
    return (
        f"Results: {diagnostics.passes} passed, "
        f"{_plural(diagnostics.errors, 'error')}, "
        f"{_plural(diagnostics.warnings, 'warning')}"
    )


def render_report(diagnostics: Diagnostics) -> list[str]:
    """Render one line per diagnostic, a blank line, then the summary."""
    lines = [f"  {entry}" for entry in diagnostics]
    lines.append("")
    lines.append(summary_line(diagnostics))
    return lines
