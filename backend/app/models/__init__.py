"""Data models for tablecop."""

from .autofix import AutofixChange, AutofixReport
from .engine import Candidate, Decision, DecisionKind, Edit, Group, PolicyKind
from .linting import LintIssue, LintReport, LintSeverity, TextEdit
from .tree import Node, Span, SyntaxTree

__all__ = [
    "AutofixChange",
    "AutofixReport",
    "Candidate",
    "Decision",
    "DecisionKind",
    "Edit",
    "Group",
    "LintIssue",
    "LintReport",
    "LintSeverity",
    "Node",
    "PolicyKind",
    "Span",
    "SyntaxTree",
    "TextEdit",
]
