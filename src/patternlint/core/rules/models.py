"""
Data models for the patternlint rules system.

This module defines the core types produced by rule validation:
- Outcome: The single classification of one validation call
- RuleViolation: A diagnostic the host surfaces for a failing file
- RuleResult: The outcome plus its optional violation
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional


class Outcome(str, Enum):
    """Result classification of a pattern category check."""

    PASS = "pass"
    MISSING_DOCBLOCK = "missing-docblock"
    MISSING_CATEGORIES = "missing-categories"
    MISSING_BASE_CATEGORY = "missing-base-category"

    @property
    def code(self) -> Optional[str]:
        """Stable machine-readable error code, ``None`` for PASS."""
        return _OUTCOME_CODES.get(self)


_OUTCOME_CODES = {
    Outcome.MISSING_DOCBLOCK: "MissingDocblock",
    Outcome.MISSING_CATEGORIES: "MissingCategories",
    Outcome.MISSING_BASE_CATEGORY: "MissingBaseCategory",
}


@dataclass(frozen=True)
class RuleViolation:
    """A rule that was violated.

    Attributes:
        rule_id: Fully-qualified rule identifier (sniff-style dotted name)
        code: Short error code (e.g. ``MissingDocblock``)
        message: Human-readable message
        severity: Always ``'error'`` for this rule
        line: 1-based line the diagnostic is attached to
        column: 1-based column the diagnostic is attached to
        path: File path when the host supplied one
    """

    rule_id: str
    code: str
    message: str
    severity: str = "error"
    line: int = 1
    column: int = 1
    path: Optional[str] = None

    @property
    def source(self) -> str:
        return f"{self.rule_id}.{self.code}"

    def with_path(self, path: Optional[str]) -> "RuleViolation":
        return replace(self, path=path)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "line": self.line,
            "column": self.column,
            "severity": self.severity,
            "code": self.code,
            "source": self.source,
            "message": self.message,
        }


@dataclass(frozen=True)
class RuleResult:
    """Outcome of validating one file."""

    outcome: Outcome
    violation: Optional[RuleViolation] = None
    path: Optional[str] = None

    def __post_init__(self):
        if (self.outcome is Outcome.PASS) != (self.violation is None):
            raise ValueError(f"{self.outcome.value}: violation must be set exactly when the check fails")

    @property
    def passed(self) -> bool:
        return self.outcome is Outcome.PASS

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "outcome": self.outcome.value,
            "violation": self.violation.to_dict() if self.violation else None,
        }


__all__ = [
    "Outcome",
    "RuleViolation",
    "RuleResult",
]
