"""
Align consecutive single-line method definitions so their bodies line up.

Endless definitions align on `=`. Traditional one-liners (`def bar() 2 end`)
align as if an invisible `=` sat two columns before the body:

    def foo = 1                def foo   = 1
    def bar() 2 end     ->     def bar()   2 end
    def quxxy = 3              def quxxy = 3
"""

from __future__ import annotations

from typing import List, Optional

from ...models.engine import Barrier, Candidate, Entry, PolicyKind
from ...models.tree import Node, SyntaxTree
from ..candidates import contains_error, statement_children
from ..geometry import decide_all_or_nothing
from ..grouping import group_contiguous
from .base import Policy

MESSAGE = "Align method body with other methods in group"

METHOD_KINDS = ("method", "singleton_method")


def endless_operator(tree: SyntaxTree, method: Node) -> Optional[Node]:
    """The `=` of `def name(args) = body`, None for traditional definitions."""
    return next((c for c in tree.children(method) if not c.named and c.kind == "="), None)


def body_start(tree: SyntaxTree, method: Node) -> Optional[Node]:
    """First node of the method body, None when the body is empty."""
    body = tree.field(method, "body")
    if body is None:
        return None
    if endless_operator(tree, method) is not None:
        return body
    statements = statement_children(tree, body)
    return statements[0] if statements else None


def _candidate(tree: SyntaxTree, method: Node) -> Optional[Candidate]:
    if not method.single_line or contains_error(tree, method):
        return None
    start = body_start(tree, method)
    if start is None:
        return None

    operator = endless_operator(tree, method)
    if operator is not None:
        anchor, insert_at = operator.span.start_column, operator.span.start_offset
    else:
        anchor, insert_at = start.span.start_column - 2, start.span.start_offset

    return Candidate(
        policy=PolicyKind.ALIGN_METHODS,
        node=method,
        indent=method.span.start_column,
        anchor_column=anchor,
        width=tree.line_length(method.first_line),
        start_offset=insert_at,
        end_offset=insert_at,
    )


def extract(tree: SyntaxTree) -> List[Entry]:
    entries: List[Entry] = []
    for method in tree.walk(*METHOD_KINDS):
        candidate = _candidate(tree, method)
        entries.append(candidate if candidate is not None else Barrier(method))
    return entries


def message(candidate: Candidate) -> str:
    return MESSAGE


POLICY = Policy(
    kind=PolicyKind.ALIGN_METHODS,
    rule_id="TC1003",
    description="Align the bodies of consecutive single-line method definitions on `=`.",
    extract=extract,
    group=group_contiguous,
    decide=decide_all_or_nothing,
    message=message,
)
