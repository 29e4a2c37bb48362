"""
Linearize multi-line, single-expression methods.

    def foo                              def foo = 42
      42                       ->
    end

    def clear!                           def clear!() data_layer.clear! if data_layer.respond_to?(:clear!) end
      data_layer.clear! if data_layer.respond_to?(:clear!)
    end

The endless spelling (`def name(args) = body`) is preferred. Bodies whose top
operator binds looser than an endless `def` get the traditional one-liner
(`def name() body end`) instead: `a and b`, `a or b`, `not a` and every
trailing modifier (`if`, `unless`, `while`, `until`, `rescue`). Written endless,
those would apply to the definition rather than to its body. The one exception
is a guard that cannot fail (`42 if true`, `x unless nil`).

Known hazards that disqualify a method outright: heredocs, `rescue` / `ensure`
/ `else` clauses, multi-statement blocks, multi-line keyword constructs,
multi-line strings, line continuations, comments inside the definition, and
setter names (`name=`, `[]=`), which cannot be endless.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ...models.engine import Candidate, Entry, PolicyKind
from ...models.tree import Node, SyntaxTree
from ..candidates import (
    CLAUSE_KINDS,
    collapse_whitespace,
    contains_comment,
    contains_error,
    joinable,
    statement_children,
)
from ..geometry import decide_linearization
from ..grouping import singletons
from .align_methods import METHOD_KINDS, endless_operator
from .base import Policy

logger = logging.getLogger(__name__)

MSG_ENDLESS = "Use endless method: `{}`"
MSG_TRADITIONAL = "Use single-line method: `{}`"

ENDLESS = "endless"
TRADITIONAL = "traditional"

# Trailing modifiers bind looser than `def name = body`: in the endless
# spelling they guard (or loop over) the definition itself.
MODIFIER_KINDS = frozenset({"if_modifier", "unless_modifier", "while_modifier", "until_modifier", "rescue_modifier"})
LOOSE_OPERATORS = frozenset({"and", "or", "not"})

FALSY_LITERALS = frozenset({"nil", "false"})
TRUTHY_LITERALS = frozenset({"true", "integer", "float", "rational", "complex", "simple_symbol", "string"})

# Names ending in `=` that are comparisons, not setters
_COMPARISON_NAMES = frozenset({"==", "!=", "<=", ">=", "==="})


def is_setter_name(name: str) -> bool:
    return name.endswith("=") and name not in _COMPARISON_NAMES


def _guard_always_passes(tree: SyntaxTree, body: Node) -> bool:
    """
    `body if <truthy literal>` / `body unless <nil|false>`: the guard cannot
    fail, so wrapping the definition in it changes nothing.
    """
    condition = tree.field(body, "condition")
    if condition is None or contains_error(tree, condition):
        return False
    if body.kind == "if_modifier":
        return condition.kind in TRUTHY_LITERALS
    if body.kind == "unless_modifier":
        return condition.kind in FALSY_LITERALS
    return False


def binds_looser_than_endless(tree: SyntaxTree, body: Node) -> bool:
    """Whether `def name = body` would parse with `body` split around the definition."""
    if body.kind in MODIFIER_KINDS:
        return not _guard_always_passes(tree, body)
    if body.kind in ("binary", "unary"):
        operator = tree.field(body, "operator")
        return operator is not None and tree.text(operator) in LOOSE_OPERATORS
    return False


def _single_statement(tree: SyntaxTree, method: Node) -> Optional[Node]:
    statements = statement_children(tree, tree.field(method, "body"))
    if len(statements) != 1 or statements[0].kind in CLAUSE_KINDS:
        return None
    return statements[0]


def signature(tree: SyntaxTree, method: Node) -> Optional[str]:
    name = tree.field(method, "name")
    if name is None:
        return None
    receiver = tree.field(method, "object")
    if method.kind == "singleton_method" and receiver is not None:
        return f"{tree.text(receiver)}.{tree.text(name)}"
    return tree.text(name)


def arguments(tree: SyntaxTree, method: Node) -> str:
    parameters = tree.field(method, "parameters")
    if parameters is None:
        return ""
    text = collapse_whitespace(tree.text(parameters))
    return text if text.startswith("(") else f"({text})"


def _candidate(tree: SyntaxTree, method: Node) -> Optional[Candidate]:
    if method.single_line or endless_operator(tree, method) is not None:
        return None
    if contains_error(tree, method):
        return None

    name = tree.field(method, "name")
    if name is None or is_setter_name(tree.text(name)):
        return None

    body = _single_statement(tree, method)
    if body is None:
        return None
    if contains_comment(tree, method.first_line, method.last_line):
        return None
    if not joinable(tree, body):
        return None
    parameters = tree.field(method, "parameters")
    if parameters is not None and not joinable(tree, parameters):
        return None

    sig = signature(tree, method)
    args = arguments(tree, method)
    collapsed = collapse_whitespace(tree.text(body))
    endless = f"def {sig}{args} = {collapsed}"
    traditional = f"def {sig}{args or '()'} {collapsed} end"

    if binds_looser_than_endless(tree, body):
        spelling, rendering, alternate = TRADITIONAL, traditional, endless
    else:
        spelling, rendering, alternate = ENDLESS, endless, traditional

    column = method.span.start_column
    suffix = len(tree.line(method.last_line)[method.span.end_column:])

    return Candidate(
        policy=PolicyKind.SAFE_ENDLESS_METHOD,
        node=method,
        indent=column,
        anchor_column=column,
        width=column + len(rendering) + suffix,
        start_offset=method.span.start_offset,
        end_offset=method.span.end_offset,
        rendering=rendering,
        joins=True,
        spelling=spelling,
        alternate_width=column + len(alternate) + suffix,
    )


def extract(tree: SyntaxTree) -> List[Entry]:
    entries: List[Entry] = []
    for method in tree.walk(*METHOD_KINDS):
        candidate = _candidate(tree, method)
        if candidate is None:
            if not method.single_line:
                logger.debug("line %d: method not linearizable", method.first_line)
            continue
        entries.append(candidate)
    return entries


def message(candidate: Candidate) -> str:
    template = MSG_TRADITIONAL if candidate.spelling == TRADITIONAL else MSG_ENDLESS
    return template.format(candidate.rendering)


POLICY = Policy(
    kind=PolicyKind.SAFE_ENDLESS_METHOD,
    rule_id="TC1004",
    description="Rewrite multi-line single-expression methods as endless or traditional one-liners.",
    extract=extract,
    group=singletons,
    decide=decide_linearization,
    message=message,
)
