"""
Condense multi-line `when` branches onto one line, aligning their `then`.

    case foo                        case foo
    when 1                          when 1      then "one"
      "one"                  ->     when 200    then "two hundred"
    when 200                        when :other then "other"
      "two hundred"                 end
    when :other
      "other"
    end

All branches of one `case` form one group. A branch whose body cannot be
joined simply stays multi-line between its condensed siblings.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ...models.engine import Candidate, Entry, PolicyKind
from ...models.tree import Node, SyntaxTree
from ..candidates import (
    collapse_whitespace,
    comment_between,
    contains_comment,
    joinable,
    statement_children,
)
from ..geometry import decide_branches
from ..grouping import group_by_parent
from .base import Policy

logger = logging.getLogger(__name__)

MESSAGE = "Condense `when` to single line with aligned `then`"

_KEYWORD = "when "


def _conditions(tree: SyntaxTree, when: Node) -> Optional[str]:
    patterns = tree.fields(when, "pattern")
    if not patterns:
        return None
    if patterns[0].first_line != patterns[-1].last_line:
        return None
    return ", ".join(tree.text(p) for p in patterns)


def _candidate(tree: SyntaxTree, case: Node, when: Node) -> Optional[Candidate]:
    conditions = _conditions(tree, when)
    if conditions is None:
        return None

    statements = statement_children(tree, tree.field(when, "body"))
    if len(statements) != 1:
        return None
    body = statements[0]

    if comment_between(tree, when.first_line, body.first_line):
        return None
    if contains_comment(tree, body.first_line, body.last_line):
        return None
    if not joinable(tree, body):
        return None

    prefix = _KEYWORD + conditions
    rendering = f"{prefix} then {collapse_whitespace(tree.text(body))}"
    # Text after the body on its last line (a trailing comment, `;`) stays put
    suffix = tree.line(body.last_line)[body.span.end_column:]
    column = when.span.start_column

    return Candidate(
        policy=PolicyKind.CONDENSE_WHEN,
        node=when,
        indent=column,
        anchor_column=column + len(prefix),
        width=column + len(rendering) + len(suffix),
        start_offset=when.span.start_offset,
        end_offset=body.span.end_offset,
        rendering=rendering,
        pad_at=len(prefix),
        joins=not when.single_line,
        group_key=case.index,
    )


def extract(tree: SyntaxTree) -> List[Entry]:
    entries: List[Entry] = []
    for case in tree.walk("case"):
        for when in tree.named_children(case):
            if when.kind != "when":
                continue
            candidate = _candidate(tree, case, when)
            if candidate is None:
                logger.debug("line %d: `when` not condensable", when.first_line)
                continue
            entries.append(candidate)
    return entries


def message(candidate: Candidate) -> str:
    return MESSAGE


POLICY = Policy(
    kind=PolicyKind.CONDENSE_WHEN,
    rule_id="TC1001",
    description="Condense single-expression `when` branches to `when x then y`, aligning `then` across one `case`.",
    extract=extract,
    group=group_by_parent,
    decide=decide_branches,
    message=message,
)
