"""Finding model: structured lint messages tied to a source line."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Severity(Enum):
    """Severity level for a finding."""

    ERROR = "error"
    WARNING = "warning"


# Rule identifiers that do not belong to a stylistic check.
STRUCTURAL_ERROR = "structural-error"
INTERNAL_ERROR = "internal-error"


@dataclass(frozen=True)
class Finding:
    """A single lint result about a stylesheet.

    Attributes:
        rule_id: Identifier of the check (or parser) that produced this finding.
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        line: 1-based source line; 0 for findings about the whole stylesheet.
        fix: Suggested remediation, if available.
    """

    rule_id: str
    severity: Severity
    message: str
    line: int
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "rule": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
            "line": self.line,
        }
        if self.fix:
            data["fix"] = self.fix
        return data

    def __str__(self) -> str:
        return f"{self.line}: {self.severity.value} [{self.rule_id}] {self.message}"
