"""
Linting models (diagnostics reported for one inspected source unit).

These models are intentionally small and stable: they are the API surface
between the rewrite engine and whoever hosts it ("report only" vs "report and
fix" modes both read them).
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


class LintSeverity(str, Enum):
    """Severity level for lint findings."""

    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


class TextEdit(BaseModel):
    """Replacement of [start, end) (character offsets in the inspected source)."""

    start: int
    end: int
    text: str


class LintIssue(BaseModel):
    """A single lint issue detected in the inspected source."""

    severity: LintSeverity
    message: str

    # Machine-readable identity (e.g., TC1002) and the cop-style name
    rule_id: Optional[str] = None
    cop_name: Optional[str] = None

    # 1-based lines / 0-based columns of the offending node
    line: Optional[int] = None
    column: Optional[int] = None
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    suggestion: Optional[str] = None
    fixable: bool = False

    # Edit that realizes the suggested rewrite (None for non-fixable issues)
    edit: Optional[TextEdit] = None


class LintReport(BaseModel):
    """Structured lint report for one pass."""

    engine: str = "tablecop"
    max_line_length: Optional[int] = None
    issues: List[LintIssue] = Field(default_factory=list)
