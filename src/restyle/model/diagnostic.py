"""Diagnostic model: structured messages produced while transforming a module."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about the module being transformed.

    Attributes:
        code: Identifier for the kind of finding (``unresolved-style``,
            ``empty-style``, ``non-declarative-table``).
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        line: 1-based source line, if applicable.
        style_name: The style table entry involved, if applicable.
    """

    code: str
    severity: Severity
    message: str
    line: int | None = None
    style_name: str | None = None

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [line {self.line}]" if self.line else ""
        return f"{self.severity.value}{location}: {self.message}"
