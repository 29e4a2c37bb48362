"""
Alignment geometry under a maximum line width.

A group shares one target column: the right-most anchor among its members.
Whether every member can be padded to it without overflowing decides how the
group degrades, and that differs per policy:

- alignment policies (assignments, method definitions) are all-or-nothing;
- branch condensation falls back to unaligned condensing, then leaves any
  branch that still overflows multi-line on its own;
- linearization has no shared column, only a fit check of its chosen spelling.

Overflow is an expected outcome, never an error: affected members are left
unchanged.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from ..models.engine import Candidate, Decision, DecisionKind, Group

logger = logging.getLogger(__name__)


def alignment_column(members: Iterable[Candidate]) -> int:
    return max((m.anchor_column for m in members), default=0)


def padded_width(candidate: Candidate, column: int) -> int:
    """Width of the candidate's rendered line once its anchor is padded to `column`."""
    return candidate.width + max(0, column - candidate.anchor_column)


def _leave(members: Iterable[Candidate]) -> List[Decision]:
    return [Decision(candidate=m, kind=DecisionKind.LEAVE) for m in members]


def decide_all_or_nothing(group: Group, max_width: int) -> List[Decision]:
    if len(group) < 2:
        return _leave(group)

    column = alignment_column(group)
    overflowing = [m for m in group if padded_width(m, column) > max_width]
    if overflowing:
        logger.debug(
            "%s: alignment to column %d abandoned (line %d would exceed %d)",
            group.policy.value,
            column,
            overflowing[0].first_line,
            max_width,
        )
        return _leave(group)

    return [
        Decision(
            candidate=m,
            kind=DecisionKind.ALIGN,
            padding=column - m.anchor_column,
            column=column,
        )
        for m in group
    ]


def decide_branches(group: Group, max_width: int) -> List[Decision]:
    """
    Condense branches, aligned when every condensed branch still fits.

    Branches already on one line count toward the column but are never edited.
    """
    fitting = [m for m in group if m.width <= max_width]
    if not fitting:
        return _leave(group)

    column = alignment_column(fitting)
    pending = [m for m in fitting if not m.single_line]
    use_alignment = all(padded_width(m, column) <= max_width for m in pending)
    if pending and not use_alignment:
        logger.debug("%s: aligned form too wide, condensing unaligned", group.policy.value)

    decisions: List[Decision] = []
    for member in group:
        if member not in pending:
            decisions.append(Decision(candidate=member, kind=DecisionKind.LEAVE))
        elif use_alignment:
            decisions.append(
                Decision(
                    candidate=member,
                    kind=DecisionKind.ALIGN,
                    padding=column - member.anchor_column,
                    column=column,
                )
            )
        else:
            decisions.append(Decision(candidate=member, kind=DecisionKind.CONDENSE))
    return decisions


def decide_linearization(group: Group, max_width: int) -> List[Decision]:
    """
    Both single-line spellings were measured at extraction; the one the routine
    will actually use has to fit, otherwise it stays multi-line.
    """
    decisions: List[Decision] = []
    for member in group:
        shortest = min(member.width, member.alternate_width or member.width)
        if shortest > max_width:
            logger.debug("line %d: no single-line spelling fits in %d", member.first_line, max_width)
            decisions.append(Decision(candidate=member, kind=DecisionKind.LEAVE))
        elif member.width > max_width:
            logger.debug("line %d: %s spelling exceeds %d", member.first_line, member.spelling, max_width)
            decisions.append(Decision(candidate=member, kind=DecisionKind.LEAVE))
        else:
            decisions.append(Decision(candidate=member, kind=DecisionKind.CONDENSE))
    return decisions
