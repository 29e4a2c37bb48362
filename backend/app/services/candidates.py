"""
Structural eligibility checks shared by the rewrite policies.

Every check is a plain predicate over the arena tree: a node that fails one is
simply not a candidate. Nothing here raises on odd or partial trees; missing
structure reads as "not eligible".
"""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

from ..models.tree import Node, SyntaxTree

# Extras the grammar may attach anywhere; never statements
NON_STATEMENT_KINDS = frozenset({"comment", "heredoc_body", "empty_statement"})

# Clauses that hang off a body and cannot follow a single-line body
CLAUSE_KINDS = frozenset({"rescue", "else", "ensure"})

HEREDOC_KINDS = frozenset({"heredoc_beginning", "heredoc_body"})

STRING_KINDS = frozenset({"string", "subshell", "regex", "delimited_symbol", "character"})

BLOCK_KINDS = frozenset({"block", "do_block"})

BLOCK_BODY_KINDS = frozenset({"block_body", "body_statement"})

# Keyword-delimited constructs: spreading one over several lines relies on line
# breaks as separators, so joining it with spaces is never safe.
KEYWORD_CONSTRUCT_KINDS = frozenset(
    {
        "if",
        "unless",
        "while",
        "until",
        "for",
        "case",
        "case_match",
        "begin",
        "class",
        "module",
        "singleton_class",
        "method",
        "singleton_method",
    }
)

_LINE_JOIN_RE = re.compile(r"\s*\n\s*")


def collapse_whitespace(text: str) -> str:
    """Join a multi-line fragment into one line (interior newlines + indentation -> one space)."""
    return _LINE_JOIN_RE.sub(" ", text).strip()


def subtree(tree: SyntaxTree, node: Node) -> Iterable[Node]:
    yield node
    yield from tree.descendants(node)


def statement_children(tree: SyntaxTree, node: Optional[Node]) -> List[Node]:
    """Named children of a statement container, minus comments and heredoc bodies."""
    if node is None:
        return []
    return [child for child in tree.named_children(node) if child.kind not in NON_STATEMENT_KINDS]


def contains_error(tree: SyntaxTree, node: Node) -> bool:
    return node.has_error or any(n.kind == "ERROR" for n in tree.descendants(node))


def contains_heredoc(tree: SyntaxTree, node: Node) -> bool:
    return any(n.kind in HEREDOC_KINDS for n in subtree(tree, node))


def contains_multiline_string(tree: SyntaxTree, node: Node) -> bool:
    """A string-like literal spanning lines (joining would change its value)."""
    return any(n.kind in STRING_KINDS and not n.single_line for n in subtree(tree, node))


def contains_line_continuation(tree: SyntaxTree, first_line: int, last_line: int) -> bool:
    """A trailing backslash on any line that would be joined onto the next one."""
    return any(tree.line(number).rstrip().endswith("\\") for number in range(first_line, last_line))


def comment_between(tree: SyntaxTree, header_line: int, body_line: int) -> bool:
    """A comment from the header line up to (not including) the first body line."""
    return tree.comments_between(header_line, body_line - 1)


def contains_comment(tree: SyntaxTree, first_line: int, last_line: int) -> bool:
    """
    A comment on a line that gets joined onto the next one.

    Comments on `last_line` itself sit after the joined range and survive.
    """
    return tree.comments_between(first_line, last_line - 1)


def block_statements(tree: SyntaxTree, block: Node) -> List[Node]:
    """Statements of a `{ }` / `do end` block, including rescue/ensure clauses."""
    body = tree.field(block, "body")
    if body is None:
        body = next((c for c in tree.named_children(block) if c.kind in BLOCK_BODY_KINDS), None)
    if body is not None:
        return statement_children(tree, body)
    return [
        child
        for child in statement_children(tree, block)
        if child.kind not in ("block_parameters", "parameters")
    ]


def contains_multi_statement_block(tree: SyntaxTree, node: Node) -> bool:
    """A block whose body needs statement separators once on one line."""
    for current in subtree(tree, node):
        if current.kind not in BLOCK_KINDS:
            continue
        statements = block_statements(tree, current)
        if len(statements) > 1 or any(s.kind in CLAUSE_KINDS for s in statements):
            return True
    return False


def contains_multiline_keyword_construct(tree: SyntaxTree, node: Node) -> bool:
    for current in subtree(tree, node):
        if current.kind in KEYWORD_CONSTRUCT_KINDS and not current.single_line:
            return True
        if current.kind == "parenthesized_statements" and len(statement_children(tree, current)) > 1:
            return True
    return False


def inside_block(tree: SyntaxTree, node: Node) -> bool:
    return any(a.kind in BLOCK_KINDS or a.kind == "lambda" for a in tree.ancestors(node))


def joinable(tree: SyntaxTree, body: Node) -> bool:
    """
    Whether a (possibly multi-line) expression can be rendered on one line by
    collapsing its line breaks into single spaces.
    """
    if contains_error(tree, body):
        return False
    if contains_heredoc(tree, body):
        return False
    if contains_multiline_string(tree, body):
        return False
    if contains_line_continuation(tree, body.first_line, body.last_line):
        return False
    if contains_multi_statement_block(tree, body):
        return False
    if contains_multiline_keyword_construct(tree, body):
        return False
    return True
