"""
Autocorrect engine (deterministic, offline).

One pass applies one edit set atomically. Autocorrect repeats passes until a
pass proposes nothing (the source is at its fixed point) or the configured pass
cap is reached. Every rewrite produces an explicit diff and change list.
"""

from __future__ import annotations

import difflib
import logging
from typing import List, Optional, Tuple

from ..config import TablecopSettings, config
from ..models.autofix import AutofixChange, AutofixReport
from .linting_service import Inspection, LintingService

logger = logging.getLogger(__name__)


def unified_diff(before: str, after: str) -> str:
    return "\n".join(
        difflib.unified_diff(
            before.splitlines(),
            after.splitlines(),
            fromfile="before.rb",
            tofile="after.rb",
            lineterm="",
        )
    )


class AutofixService:
    """Apply layout rewrites until the source stops changing."""

    def __init__(self, linter: Optional[LintingService] = None):
        self.linter = linter or LintingService()

    def apply_pass(self, code: str, settings: Optional[TablecopSettings] = None) -> Tuple[str, Inspection]:
        """Run one pass and apply its edit set in a single rewrite."""
        inspection = self.linter.inspect(code, settings)
        return inspection.edits.apply(code), inspection

    def autocorrect(self, code: str, settings: Optional[TablecopSettings] = None) -> AutofixReport:
        """
        Rewrite `code` to its fixed point.

        Stops at the first pass that proposes no edit, or after `max_passes`
        passes. `converged` is False only when the cap was hit while edits were
        still pending (which would point at two rules undoing each other).
        """
        settings = settings or self.linter.settings or config.settings()
        report = AutofixReport(enabled=True, applied=False, original_code=code)

        current = code
        changes: List[AutofixChange] = []
        inspection: Optional[Inspection] = None
        passes = 0

        while True:
            inspection = self.linter.inspect(current, settings)
            if report.lint_before is None:
                report.lint_before = inspection.report
            if not inspection.edits or passes >= settings.max_passes:
                break

            passes += 1
            current = inspection.edits.apply(current)
            changes.extend(
                AutofixChange(
                    rule_id=issue.rule_id or "",
                    message=issue.message,
                    line=issue.line,
                    pass_number=passes,
                )
                for issue in inspection.report.issues
                if issue.edit is not None
            )
            logger.debug(f"Autocorrect pass {passes}: {len(inspection.edits)} edit(s) applied")

        report.passes = passes
        report.converged = not inspection.edits
        report.lint_after = inspection.report
        if not report.converged:
            logger.warning(
                f"Autocorrect did not converge after {passes} pass(es); "
                f"{len(inspection.edits)} edit(s) still pending"
            )

        if current == code:
            return report

        report.applied = True
        report.fixed_code = current
        report.diff = unified_diff(code, current)
        report.changes = changes
        logger.info(f"Autocorrect applied {len(changes)} change(s) in {passes} pass(es)")
        return report
