"""
Tests for contiguity grouping (adjacent, same-indentation runs).
"""

from __future__ import annotations

from backend.app.models.engine import Barrier, Candidate, PolicyKind
from backend.app.models.tree import Node, Span
from backend.app.services.grouping import group_by_parent, group_contiguous, singletons

POLICY = PolicyKind.ALIGN_ASSIGNMENTS


def _node(first_line: int, last_line: int = None, column: int = 0) -> Node:
    last_line = last_line or first_line
    # 100 characters per line keeps offsets ordered like lines
    return Node(
        index=first_line,
        kind="assignment",
        span=Span(
            start_line=first_line,
            start_column=column,
            end_line=last_line,
            end_column=column + 5,
            start_offset=first_line * 100 + column,
            end_offset=last_line * 100 + column + 5,
        ),
    )


def _candidate(first_line: int, indent: int = 0, last_line: int = None, group_key: int = None) -> Candidate:
    node = _node(first_line, last_line, indent)
    return Candidate(
        policy=POLICY,
        node=node,
        indent=indent,
        anchor_column=indent + 2,
        width=10,
        start_offset=node.span.start_offset,
        end_offset=node.span.start_offset,
        group_key=group_key,
    )


def _lines(groups):
    return [[member.first_line for member in group] for group in groups]


def test_adjacent_lines_form_one_group():
    groups = group_contiguous(POLICY, [_candidate(1), _candidate(2), _candidate(3)])
    assert _lines(groups) == [[1, 2, 3]]


def test_gap_splits_runs_and_drops_singletons():
    groups = group_contiguous(POLICY, [_candidate(1), _candidate(2), _candidate(4), _candidate(6), _candidate(7)])
    assert _lines(groups) == [[1, 2], [6, 7]]


def test_indentation_change_splits_runs():
    groups = group_contiguous(POLICY, [_candidate(1), _candidate(2), _candidate(3, indent=2), _candidate(4, indent=2)])
    assert _lines(groups) == [[1, 2], [3, 4]]


def test_barrier_between_members_splits_runs():
    entries = [_candidate(1), _candidate(2), Barrier(_node(3)), _candidate(4), _candidate(5)]
    assert _lines(group_contiguous(POLICY, entries)) == [[1, 2], [4, 5]]


def test_barrier_nested_inside_a_member_does_not_split():
    outer = _candidate(1)
    nested = Barrier(_node(1, column=3))
    assert _lines(group_contiguous(POLICY, [outer, nested, _candidate(2)])) == [[1, 2]]


def test_multiline_member_is_adjacent_to_the_line_after_its_end():
    groups = group_contiguous(POLICY, [_candidate(1, last_line=3), _candidate(4)], min_size=2)
    assert _lines(groups) == [[1, 4]]


def test_entries_are_ordered_by_position():
    assert _lines(group_contiguous(POLICY, [_candidate(3), _candidate(1), _candidate(2)])) == [[1, 2, 3]]


def test_group_by_parent_ignores_adjacency():
    entries = [_candidate(2, group_key=1), _candidate(6, group_key=1), _candidate(9, group_key=8), Barrier(_node(4))]
    assert _lines(group_by_parent(PolicyKind.CONDENSE_WHEN, entries)) == [[2, 6], [9]]


def test_singletons():
    groups = singletons(PolicyKind.SAFE_ENDLESS_METHOD, [_candidate(1), Barrier(_node(2)), _candidate(3)])
    assert _lines(groups) == [[1], [3]]
