"""
Pass runner: one scan-extract-group-decide-edit cycle over one Ruby source.

Design intent:
- Every enabled policy runs against the same parsed tree; their decisions are
  merged into one edit set, so rules can never undo each other within a pass.
- Nested decisions (a condensable branch inside a routine being linearized,
  padding inside a branch being joined) are resolved outer-first: the edit
  covering the wider range wins, the inner one is deferred to the next pass,
  where it is recomputed against the rewritten text.
- The report carries one issue per non-trivial decision together with the
  edit realizing it, so hosts can run in "report only" or "report and fix" mode.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ..config import TablecopSettings, config
from ..models.engine import Decision, Edit
from ..models.linting import LintIssue, LintReport, LintSeverity, TextEdit
from .edits import EditSet, build_edit
from .policies import Policy, enabled_policies
from .ruby_tree import first_error_line, parse_ruby

logger = logging.getLogger(__name__)

PARSE_ERROR_RULE = "TC0001"


@dataclass
class Inspection:
    """Result of one pass: the diagnostics and the edit set realizing them."""

    report: LintReport
    edits: EditSet = field(default_factory=EditSet)
    deferred: int = 0


def _outer_first(item: Tuple[Policy, Decision, Edit]) -> Tuple[int, int]:
    edit = item[2]
    return edit.start, -(edit.end - edit.start)


class LintingService:
    """Layout linter for Ruby source (condensation and alignment rules)."""

    def __init__(self, settings: Optional[TablecopSettings] = None):
        self.settings = settings

    def _resolve(self, settings: Optional[TablecopSettings]) -> TablecopSettings:
        return settings or self.settings or config.settings()

    def inspect(self, code: str, settings: Optional[TablecopSettings] = None) -> Inspection:
        """
        Run one pass over `code`.

        Args:
            code: Ruby source to inspect
            settings: resolved settings (defaults to the service / global configuration)

        Returns:
            Inspection with the report and the non-overlapping edit set of this pass.
        """
        settings = self._resolve(settings)
        report = LintReport(max_line_length=settings.max_line_length, issues=[])

        tree = parse_ruby(code)
        if tree.has_error:
            line = first_error_line(tree)
            report.issues.append(
                LintIssue(
                    severity=LintSeverity.ERROR,
                    rule_id=PARSE_ERROR_RULE,
                    message="Syntax error: source could not be parsed as Ruby",
                    line=line,
                    suggestion="Fix syntax error before running layout rules.",
                    fixable=False,
                )
            )
            return Inspection(report=report)

        proposals: List[Tuple[Policy, Decision, Edit]] = []
        for policy in enabled_policies(settings.disabled_policies):
            for decision in policy.run(tree, settings.max_line_length):
                edit = build_edit(decision)
                if edit is not None:
                    proposals.append((policy, decision, edit))

        inspection = Inspection(report=report)
        for policy, decision, edit in sorted(proposals, key=_outer_first):
            if inspection.edits.overlaps(edit):
                inspection.deferred += 1
                logger.debug(
                    f"{policy.rule_id} at line {decision.candidate.first_line} deferred (nested in another rewrite)"
                )
                report.issues.append(self._issue(policy, decision, None))
                continue
            inspection.edits.add(edit)
            report.issues.append(self._issue(policy, decision, edit))

        report.issues.sort(key=lambda issue: (issue.line or 0, issue.column or 0, issue.rule_id or ""))
        if report.issues:
            logger.info(
                f"Inspection found {len(report.issues)} issue(s), {len(inspection.edits)} edit(s), "
                f"{inspection.deferred} deferred"
            )
        return inspection

    def lint(self, code: str, settings: Optional[TablecopSettings] = None) -> LintReport:
        """Report-only mode: diagnostics of one pass."""
        return self.inspect(code, settings).report

    @staticmethod
    def _issue(policy: Policy, decision: Decision, edit: Optional[Edit]) -> LintIssue:
        candidate = decision.candidate
        span = candidate.node.span
        if edit is None:
            suggestion = "Nested in another rewrite; applied on a later pass."
        elif candidate.joins:
            suggestion = f"Rewrite as: {edit.text}"
        else:
            suggestion = f"Insert {decision.padding} space(s) to align at column {decision.column}."
        return LintIssue(
            severity=LintSeverity.INFO,
            message=policy.message(candidate),
            rule_id=policy.rule_id,
            cop_name=policy.cop_name,
            line=span.start_line,
            column=span.start_column,
            end_line=span.end_line,
            end_column=span.end_column,
            suggestion=suggestion,
            fixable=True,
            edit=TextEdit(start=edit.start, end=edit.end, text=edit.text) if edit is not None else None,
        )
