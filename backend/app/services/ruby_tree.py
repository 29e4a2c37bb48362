"""
Ruby parser adapter: tree-sitter parse -> SyntaxTree arena.

Tree-sitter works on UTF-8 bytes and folds statement terminators (line breaks,
`;`) into some container nodes. The arena the rewrite rules consume is built on
characters of the decoded source and every extent is trimmed to its first/last
non-blank character, so `node.first_line` / `node.last_line` mean what a reader
of the source would expect.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from tree_sitter_language_pack import get_parser

from ..models.tree import Node, Span, SyntaxTree, line_starts, offset_position

logger = logging.getLogger(__name__)

LANGUAGE = "ruby"

_BLANK = " \t\r\n"


class _OffsetMap:
    """Byte offset -> character offset for one UTF-8 buffer."""

    def __init__(self, source: str, data: bytes):
        self._identity = len(source) == len(data)
        self._table: List[int] = []
        if self._identity:
            return
        for char_index, char in enumerate(source):
            self._table.extend([char_index] * len(char.encode("utf-8")))
        self._table.append(len(source))

    def char(self, byte_offset: int) -> int:
        if self._identity:
            return byte_offset
        return self._table[min(byte_offset, len(self._table) - 1)]


class _ArenaBuilder:
    def __init__(self, source: str, data: bytes):
        self.source = source
        self.offsets = _OffsetMap(source, data)
        self.nodes: List[Node] = []
        self.comment_lines: List[int] = []
        self._line_starts = line_starts(source)

    def _position(self, offset: int) -> Tuple[int, int]:
        return offset_position(self._line_starts, offset)

    def _span(self, ts_node) -> Span:
        start = self.offsets.char(ts_node.start_byte)
        end = self.offsets.char(ts_node.end_byte)
        while end > start and self.source[end - 1] in _BLANK:
            end -= 1
        while start < end and self.source[start] in _BLANK:
            start += 1
        start_line, start_column = self._position(start)
        end_line, end_column = self._position(end)
        return Span(
            start_line=start_line,
            start_column=start_column,
            end_line=end_line,
            end_column=end_column,
            start_offset=start,
            end_offset=end,
        )

    def _add(self, ts_node, parent: Optional[int], field_name: Optional[str]) -> int:
        index = len(self.nodes)
        node = Node(
            index=index,
            kind=ts_node.type,
            span=self._span(ts_node),
            named=ts_node.is_named,
            parent=parent,
            has_error=bool(ts_node.has_error) or ts_node.type == "ERROR" or bool(ts_node.is_missing),
        )
        self.nodes.append(node)
        if parent is not None:
            parent_node = self.nodes[parent]
            parent_node.children.append(index)
            if field_name:
                parent_node.fields.setdefault(field_name, []).append(index)
        if node.kind == "comment":
            self.comment_lines.extend(range(node.span.start_line, node.span.end_line + 1))
        return index

    def build(self, ts_tree) -> SyntaxTree:
        cursor = ts_tree.walk()
        stack: List[int] = []
        while True:
            index = self._add(cursor.node, stack[-1] if stack else None, cursor.field_name)
            if cursor.goto_first_child():
                stack.append(index)
                continue
            while not cursor.goto_next_sibling():
                if not cursor.goto_parent():
                    return SyntaxTree(self.source, self.nodes, root=0, comment_lines=self.comment_lines)
                stack.pop()


def parse_ruby(source: str) -> SyntaxTree:
    """
    Parse Ruby source into a SyntaxTree.

    Never raises on malformed input: tree-sitter recovers and marks the damaged
    region, which surfaces as `has_error` on the affected nodes (and the root).
    """
    data = source.encode("utf-8")
    ts_tree = get_parser(LANGUAGE).parse(data)
    tree = _ArenaBuilder(source, data).build(ts_tree)
    if tree.has_error:
        logger.debug("Ruby source parsed with errors (%d nodes)", len(tree.nodes))
    return tree


def first_error_line(tree: SyntaxTree) -> Optional[int]:
    """Line of the first ERROR / MISSING node, if any."""
    for node in tree.walk():
        if node.kind == "ERROR" or (node.has_error and not node.children):
            return node.first_line
    return None
