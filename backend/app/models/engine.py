"""
Per-pass engine records: candidates, groups, decisions and edits.

All of these are created fresh for one pass over one source unit and discarded
afterwards. Offsets are character offsets into the original source buffer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Union

from .tree import Node


class PolicyKind(str, Enum):
    """The closed set of rewrite rules."""

    CONDENSE_WHEN = "condense_when"
    ALIGN_ASSIGNMENTS = "align_assignments"
    ALIGN_METHODS = "align_methods"
    SAFE_ENDLESS_METHOD = "safe_endless_method"


# RuboCop-style names, as used in configuration files and reports
COP_NAMES = {
    PolicyKind.CONDENSE_WHEN: "Tablecop/CondenseWhen",
    PolicyKind.ALIGN_ASSIGNMENTS: "Tablecop/AlignAssignments",
    PolicyKind.ALIGN_METHODS: "Tablecop/AlignMethods",
    PolicyKind.SAFE_ENDLESS_METHOD: "Tablecop/SafeEndlessMethod",
}


class DecisionKind(str, Enum):
    LEAVE = "leave"
    CONDENSE = "condense"  # single line, no padding
    ALIGN = "align"  # single line, anchor padded to a shared column


@dataclass
class Candidate:
    """
    A node that passed its policy's structural checks.

    `rendering` replaces [start_offset, end_offset). Padding-only policies use an
    empty rendering over a zero-length range, so padding becomes a pure insertion.
    """

    policy: PolicyKind
    node: Node
    indent: int
    anchor_column: int
    width: int
    start_offset: int
    end_offset: int
    rendering: str = ""
    pad_at: int = 0
    joins: bool = False
    group_key: Optional[int] = None
    spelling: Optional[str] = None
    alternate_width: Optional[int] = None

    @property
    def first_line(self) -> int:
        return self.node.first_line

    @property
    def last_line(self) -> int:
        return self.node.last_line

    @property
    def single_line(self) -> bool:
        return self.node.single_line


@dataclass(frozen=True)
class Barrier:
    """Position of an ineligible node of the same family; breaks adjacency runs."""

    node: Node

    @property
    def start_offset(self) -> int:
        return self.node.span.start_offset


Entry = Union[Candidate, Barrier]


@dataclass
class Group:
    policy: PolicyKind
    members: List[Candidate] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.members)

    def __iter__(self) -> Iterator[Candidate]:
        return iter(self.members)


@dataclass
class Decision:
    candidate: Candidate
    kind: DecisionKind
    padding: int = 0
    column: Optional[int] = None

    @property
    def changes_source(self) -> bool:
        if self.kind == DecisionKind.LEAVE:
            return False
        return self.candidate.joins or self.padding > 0


@dataclass(frozen=True)
class Edit:
    """Half-open range [start, end) of the original buffer plus replacement text."""

    start: int
    end: int
    text: str

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end

    def overlaps(self, other: "Edit") -> bool:
        if self.is_insertion and other.is_insertion:
            return self.start == other.start
        if self.is_insertion:
            return other.start < self.start < other.end
        if other.is_insertion:
            return self.start < other.start < self.end
        return self.start < other.end and other.start < self.end


class TablecopError(Exception):
    """Base class for errors the engine lets propagate to its host."""
