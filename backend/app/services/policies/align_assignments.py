"""
Align consecutive single-line assignments on their operator.

    x = 1                 x      = 1
    foo = 2        ->     foo    = 2
    barbaz = 3            barbaz = 3

Simple (`=`), compound (`+=`, `||=`, `&&=`, ...) and constant assignments are
aligned on the operator's first character. Padding is inserted right before
the operator, so the rest of the line is never re-rendered.
"""

from __future__ import annotations

from typing import List, Optional

from ...models.engine import Barrier, Candidate, Entry, PolicyKind
from ...models.tree import Node, SyntaxTree
from ..candidates import contains_error, contains_heredoc, inside_block
from ..geometry import decide_all_or_nothing
from ..grouping import group_contiguous
from .base import Policy

MESSAGE = "Align assignment with other assignments in group"

ASSIGNMENT_KINDS = ("assignment", "operator_assignment")

# Single targets only: destructuring, `obj.attr =` and `hash[:k] =` are excluded
SIMPLE_TARGET_KINDS = frozenset(
    {
        "identifier",
        "instance_variable",
        "class_variable",
        "global_variable",
        "constant",
        "scope_resolution",
    }
)


def _operator(tree: SyntaxTree, node: Node, left: Node) -> Optional[Node]:
    operator = tree.field(node, "operator")
    if operator is not None:
        return operator
    return next(
        (c for c in tree.children(node) if not c.named and c.span.start_offset >= left.span.end_offset),
        None,
    )


def _candidate(tree: SyntaxTree, node: Node) -> Optional[Candidate]:
    if not node.single_line:
        return None
    parent = tree.parent(node)
    if parent is not None and parent.kind in ASSIGNMENT_KINDS:
        return None
    if node.span.start_column != tree.line_indent(node.first_line):
        return None

    left = tree.field(node, "left")
    right = tree.field(node, "right")
    if left is None or right is None or left.kind not in SIMPLE_TARGET_KINDS:
        return None
    if right.kind == "right_assignment_list":
        return None
    if contains_error(tree, node) or contains_heredoc(tree, node) or inside_block(tree, node):
        return None

    operator = _operator(tree, node, left)
    if operator is None:
        return None

    return Candidate(
        policy=PolicyKind.ALIGN_ASSIGNMENTS,
        node=node,
        indent=tree.line_indent(node.first_line),
        anchor_column=operator.span.start_column,
        width=tree.line_length(node.first_line),
        start_offset=operator.span.start_offset,
        end_offset=operator.span.start_offset,
    )


def extract(tree: SyntaxTree) -> List[Entry]:
    entries: List[Entry] = []
    for node in tree.walk(*ASSIGNMENT_KINDS):
        candidate = _candidate(tree, node)
        entries.append(candidate if candidate is not None else Barrier(node))
    return entries


def message(candidate: Candidate) -> str:
    return MESSAGE


POLICY = Policy(
    kind=PolicyKind.ALIGN_ASSIGNMENTS,
    rule_id="TC1002",
    description="Align the operators of consecutive single-line assignments at the same indentation.",
    extract=extract,
    group=group_contiguous,
    decide=decide_all_or_nothing,
    message=message,
)
