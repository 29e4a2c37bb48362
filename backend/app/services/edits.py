"""
Edit Builder: decisions -> text edits -> one atomic rewrite.

Every range refers to the source buffer the pass started from. Edits are never
applied incrementally; `EditSet.apply` rebuilds the whole buffer once.
"""

from __future__ import annotations

import logging
from bisect import bisect_left
from typing import Iterator, List, Optional

from ..models.engine import Decision, Edit, TablecopError

logger = logging.getLogger(__name__)


class EditConflictError(TablecopError):
    """Two edits of one pass touch the same range."""

    def __init__(self, edit: Edit, existing: Edit):
        super().__init__(
            f"Edit [{edit.start}, {edit.end}) overlaps [{existing.start}, {existing.end})"
        )
        self.edit = edit
        self.existing = existing


def build_edit(decision: Decision) -> Optional[Edit]:
    """
    Edit realizing one decision, or None when it would not change the source.

    Padding goes at `pad_at` inside the candidate's rendering. For padding-only
    policies the rendering is empty and the range zero-length, so the result is
    a bare insertion of spaces at the anchor.
    """
    if not decision.changes_source:
        return None
    candidate = decision.candidate
    text = (
        candidate.rendering[: candidate.pad_at]
        + " " * decision.padding
        + candidate.rendering[candidate.pad_at :]
    )
    return Edit(start=candidate.start_offset, end=candidate.end_offset, text=text)


class EditSet:
    """Sorted, non-overlapping edits for one pass."""

    def __init__(self) -> None:
        self._edits: List[Edit] = []

    def __len__(self) -> int:
        return len(self._edits)

    def __bool__(self) -> bool:
        return bool(self._edits)

    def __iter__(self) -> Iterator[Edit]:
        return iter(self._edits)

    @property
    def edits(self) -> List[Edit]:
        return list(self._edits)

    def conflict(self, edit: Edit) -> Optional[Edit]:
        """First accepted edit overlapping `edit`, if any."""
        return next((existing for existing in self._edits if existing.overlaps(edit)), None)

    def overlaps(self, edit: Edit) -> bool:
        return self.conflict(edit) is not None

    def add(self, edit: Edit) -> None:
        existing = self.conflict(edit)
        if existing is not None:
            raise EditConflictError(edit, existing)
        keys = [(e.start, e.end) for e in self._edits]
        self._edits.insert(bisect_left(keys, (edit.start, edit.end)), edit)

    def apply(self, source: str) -> str:
        """Rewrite `source` with every edit, all offsets taken against `source` itself."""
        if not self._edits:
            return source
        parts: List[str] = []
        cursor = 0
        for edit in self._edits:
            parts.append(source[cursor:edit.start])
            parts.append(edit.text)
            cursor = edit.end
        parts.append(source[cursor:])
        logger.debug("Applied %d edit(s)", len(self._edits))
        return "".join(parts)
