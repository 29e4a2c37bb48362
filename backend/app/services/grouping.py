"""
Contiguity grouping: which candidates share one alignment column.

Runs are built by a linear scan with two states (inside a run / between runs).
Two candidates stay in one run only when the second starts on the line right
after the first ends, both sit at the same indentation, and no barrier (an
ineligible node of the same family) lies between them.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Sequence

from ..models.engine import Barrier, Candidate, Entry, Group, PolicyKind

logger = logging.getLogger(__name__)


def _adjacent(previous: Candidate, current: Candidate) -> bool:
    return current.first_line == previous.last_line + 1 and current.indent == previous.indent


def group_contiguous(policy: PolicyKind, entries: Sequence[Entry], min_size: int = 2) -> List[Group]:
    """
    Partition position-ordered entries into maximal adjacent runs.

    Runs shorter than `min_size` are dropped (a lone line has nothing to align with).
    """
    ordered = sorted(entries, key=lambda e: e.node.span.start_offset)
    groups: List[Group] = []
    run: List[Candidate] = []

    def close() -> None:
        if len(run) >= min_size:
            groups.append(Group(policy=policy, members=list(run)))
        run.clear()

    for entry in ordered:
        if isinstance(entry, Barrier):
            # Nested inside the previous member: not between two members.
            if run and entry.start_offset < run[-1].node.span.end_offset:
                continue
            close()
            continue
        if run and not _adjacent(run[-1], entry):
            close()
        run.append(entry)
    close()

    logger.debug("%s: %d candidate(s) -> %d group(s)", policy.value, len(ordered), len(groups))
    return groups


def group_by_parent(policy: PolicyKind, entries: Sequence[Entry]) -> List[Group]:
    """
    One group per parent construct (e.g. all `when` branches of one `case`).

    Line adjacency does not matter here: a branch that cannot be condensed sits
    between its siblings without splitting them.
    """
    groups: Dict[int, Group] = {}
    for entry in sorted(entries, key=lambda e: e.node.span.start_offset):
        if isinstance(entry, Barrier) or entry.group_key is None:
            continue
        groups.setdefault(entry.group_key, Group(policy=policy)).members.append(entry)
    return list(groups.values())


def singletons(policy: PolicyKind, entries: Sequence[Entry]) -> List[Group]:
    """Each candidate on its own (policies without a shared column)."""
    return [Group(policy=policy, members=[e]) for e in entries if isinstance(e, Candidate)]
