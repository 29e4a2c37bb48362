"""
Syntax tree arena (read-only view of one parsed source unit).

Nodes live in a flat list and refer to each other by index, so rewrite rules can
hold node handles without ever touching the tree itself. Positions are expressed
in characters of the decoded source (1-based lines, 0-based columns/offsets);
the parser adapter is responsible for converting from whatever its backend uses.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple


def line_starts(source: str) -> List[int]:
    """Character offset of the first character of every line."""
    starts = [0]
    for index, char in enumerate(source):
        if char == "\n":
            starts.append(index + 1)
    return starts


def offset_position(starts: Sequence[int], offset: int) -> Tuple[int, int]:
    """(1-based line, 0-based column) of a character offset, given `line_starts`."""
    line_index = bisect_right(starts, offset) - 1
    return line_index + 1, offset - starts[line_index]


@dataclass(frozen=True)
class Span:
    """Source extent of a node."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    start_offset: int
    end_offset: int

    @property
    def single_line(self) -> bool:
        return self.start_line == self.end_line


@dataclass
class Node:
    """One arena entry. `children` and `fields` hold indices into the arena."""

    index: int
    kind: str
    span: Span
    named: bool = True
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    fields: Dict[str, List[int]] = field(default_factory=dict)
    has_error: bool = False

    @property
    def first_line(self) -> int:
        return self.span.start_line

    @property
    def last_line(self) -> int:
        return self.span.end_line

    @property
    def single_line(self) -> bool:
        return self.span.single_line


class SyntaxTree:
    """Queryable tree for one source unit."""

    def __init__(self, source: str, nodes: List[Node], root: int = 0, comment_lines: Iterable[int] = ()):
        self.source = source
        self.nodes = nodes
        self.root = root
        self._lines = source.split("\n")
        self._line_starts = line_starts(source)
        self._comment_lines: Sequence[int] = sorted(set(comment_lines))

    # ------------------------------------------------------------------
    # Node access
    # ------------------------------------------------------------------

    @property
    def root_node(self) -> Node:
        return self.nodes[self.root]

    @property
    def has_error(self) -> bool:
        return bool(self.nodes) and self.root_node.has_error

    def node(self, index: int) -> Node:
        return self.nodes[index]

    def parent(self, node: Node) -> Optional[Node]:
        if node.parent is None:
            return None
        return self.nodes[node.parent]

    def children(self, node: Node) -> List[Node]:
        return [self.nodes[i] for i in node.children]

    def named_children(self, node: Node) -> List[Node]:
        return [self.nodes[i] for i in node.children if self.nodes[i].named]

    def fields(self, node: Node, name: str) -> List[Node]:
        return [self.nodes[i] for i in node.fields.get(name, [])]

    def field(self, node: Node, name: str) -> Optional[Node]:
        indices = node.fields.get(name)
        if not indices:
            return None
        return self.nodes[indices[0]]

    def ancestors(self, node: Node) -> Iterator[Node]:
        current = self.parent(node)
        while current is not None:
            yield current
            current = self.parent(current)

    def descendants(self, node: Node) -> Iterator[Node]:
        """Pre-order walk below `node` (the node itself excluded)."""
        stack = list(reversed(node.children))
        while stack:
            current = self.nodes[stack.pop()]
            yield current
            stack.extend(reversed(current.children))

    def walk(self, *kinds: str) -> Iterator[Node]:
        """Pre-order walk over the whole tree, optionally filtered by kind."""
        if not self.nodes:
            return
        root = self.root_node
        if not kinds or root.kind in kinds:
            yield root
        for node in self.descendants(root):
            if not kinds or node.kind in kinds:
                yield node

    def text(self, node: Node) -> str:
        return self.source[node.span.start_offset:node.span.end_offset]

    # ------------------------------------------------------------------
    # Line access
    # ------------------------------------------------------------------

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def line(self, number: int) -> str:
        """Text of 1-based line `number`, without its line terminator."""
        if number < 1 or number > len(self._lines):
            return ""
        return self._lines[number - 1].rstrip("\r")

    def line_indent(self, number: int) -> int:
        text = self.line(number)
        return len(text) - len(text.lstrip())

    def line_length(self, number: int) -> int:
        return len(self.line(number))

    def position(self, offset: int) -> Tuple[int, int]:
        """(line, column) for a character offset."""
        return offset_position(self._line_starts, offset)

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    @property
    def comment_lines(self) -> Sequence[int]:
        return self._comment_lines

    def comments_between(self, first_line: int, last_line: int) -> bool:
        """True when a comment sits on any line in [first_line, last_line]."""
        if last_line < first_line:
            return False
        index = bisect_right(self._comment_lines, first_line - 1)
        return index < len(self._comment_lines) and self._comment_lines[index] <= last_line
