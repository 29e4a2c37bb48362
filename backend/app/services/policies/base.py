"""
Policy record shared by the four rewrite rules.

A policy is a bundle of plain functions selected by its `PolicyKind`, not a
subclass: the pass runner only ever calls these four seams.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Sequence

from ...models.engine import Candidate, Decision, Entry, Group, PolicyKind, COP_NAMES
from ...models.tree import SyntaxTree


@dataclass(frozen=True)
class Policy:
    kind: PolicyKind
    rule_id: str
    description: str
    extract: Callable[[SyntaxTree], List[Entry]]
    group: Callable[[PolicyKind, Sequence[Entry]], List[Group]]
    decide: Callable[[Group, int], List[Decision]]
    message: Callable[[Candidate], str]

    @property
    def cop_name(self) -> str:
        return COP_NAMES[self.kind]

    def run(self, tree: SyntaxTree, max_width: int) -> List[Decision]:
        """Extract, group and decide for one tree; returns every decision, LEAVE included."""
        entries = self.extract(tree)
        decisions: List[Decision] = []
        for group in self.group(self.kind, entries):
            decisions.extend(self.decide(group, max_width))
        return decisions
