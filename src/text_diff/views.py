"""
Presentation transforms over a computed op sequence.

None of these recompute the diff; they only reshape ``DiffResult.ops`` for
display or export.
"""

import html
from typing import List, Optional, Sequence, Union

from .exceptions import InvalidDiffOptionError
from .types import (
    DELETE, EQUAL, INSERT, REPLACE, DEFAULT_COLLAPSE_MIN_RUN,
    CollapsedRun, DiffOp, DiffRow, InlineRow, SideBySideRow, SideCell, WordOp
)

ViewItem = Union[DiffRow, CollapsedRun]

ORIGINAL_SIDE = 'original'
MODIFIED_SIDE = 'modified'


def collapse_unchanged(ops: Sequence[DiffOp], min_run: int = DEFAULT_COLLAPSE_MIN_RUN) -> List[ViewItem]:
    """Hide every run of at least ``min_run`` unchanged lines behind a CollapsedRun."""
    if isinstance(min_run, bool) or not isinstance(min_run, int) or min_run < 1:
        raise InvalidDiffOptionError('min_run must be a positive integer')

    items: List[ViewItem] = []

    def flush(start: int, end: int):
        if end - start >= min_run:
            items.append(CollapsedRun(start, end - start))
        else:
            items.extend(DiffRow(k, ops[k]) for k in range(start, end))

    run_start = None
    for index, op in enumerate(ops):
        if op.kind == EQUAL:
            if run_start is None:
                run_start = index
            continue
        if run_start is not None:
            flush(run_start, index)
            run_start = None
        items.append(DiffRow(index, op))

    if run_start is not None:
        flush(run_start, len(ops))

    return items


def expand_all(ops: Sequence[DiffOp]) -> List[ViewItem]:
    return [DiffRow(index, op) for index, op in enumerate(ops)]


def change_clusters(ops: Sequence[DiffOp]) -> List[int]:
    """Index of the first op of every run of consecutive changes."""
    return [
        index for index, op in enumerate(ops)
        if op.is_change and (index == 0 or not ops[index - 1].is_change)
    ]


def step_cluster(position: Optional[int], count: int, direction: int) -> Optional[int]:
    """Move to the next (1) or previous (-1) cluster, wrapping at both ends.

    ``position`` None means no cluster is selected yet: stepping forward lands
    on the first cluster, stepping back on the last one.
    """
    if direction not in (1, -1):
        raise InvalidDiffOptionError('direction must be 1 or -1')
    if count <= 0:
        return None
    if position is None:
        return 0 if direction == 1 else count - 1
    if not 0 <= position < count:
        raise InvalidDiffOptionError(f'position {position} out of range for {count} changes')
    return (position + direction) % count


class ChangeNavigator:
    """Next/previous stepping through the change clusters of a diff."""

    def __init__(self, ops: Sequence[DiffOp]):
        self.clusters = change_clusters(ops)
        self.position: Optional[int] = None

    def __len__(self) -> int:
        return len(self.clusters)

    @property
    def current(self) -> Optional[int]:
        """Op index of the selected cluster, or None."""
        if self.position is None:
            return None
        return self.clusters[self.position]

    def next(self) -> Optional[int]:
        self.position = step_cluster(self.position, len(self.clusters), 1)
        return self.current

    def previous(self) -> Optional[int]:
        self.position = step_cluster(self.position, len(self.clusters), -1)
        return self.current

    def progress(self) -> str:
        """'current/total' label, e.g. '2/5'; '0/N' before the first step."""
        shown = 0 if self.position is None else self.position + 1
        return f'{shown}/{len(self.clusters)}'


def unified_text(ops: Sequence[DiffOp]) -> str:
    """Export ops as plain text: '  ' unchanged, '- ' original side, '+ ' modified side."""
    lines = []
    for op in ops:
        if op.kind == EQUAL:
            lines.append(f'  {op.original}')
        if op.kind in (DELETE, REPLACE):
            lines.append(f'- {op.original}')
        if op.kind in (INSERT, REPLACE):
            lines.append(f'+ {op.modified}')
    return '\n'.join(lines)


def word_ops_html(word_ops: Sequence[WordOp], side: str) -> str:
    """Render one side of a replaced line with its changed tokens wrapped in spans."""
    if side not in (ORIGINAL_SIDE, MODIFIED_SIDE):
        raise InvalidDiffOptionError(f'Unknown side: {side}')

    parts = []
    for op in word_ops:
        if op.kind == EQUAL:
            text = op.original if side == ORIGINAL_SIDE else op.modified
            parts.append(html.escape(text))
        elif op.kind == DELETE and side == ORIGINAL_SIDE:
            parts.append(f'<span class="word-delete">{html.escape(op.original)}</span>')
        elif op.kind == INSERT and side == MODIFIED_SIDE:
            parts.append(f'<span class="word-insert">{html.escape(op.modified)}</span>')
    return ''.join(parts)


def _original_html(op: DiffOp) -> str:
    if op.kind == REPLACE:
        return word_ops_html(op.word_ops, ORIGINAL_SIDE)
    return html.escape(op.original)


def _modified_html(op: DiffOp) -> str:
    if op.kind == REPLACE:
        return word_ops_html(op.word_ops, MODIFIED_SIDE)
    return html.escape(op.modified)


def side_by_side_rows(ops: Sequence[DiffOp]) -> List[SideBySideRow]:
    """One row per op; the side an op does not touch is left empty (None)."""
    rows = []
    for op in ops:
        left = right = None
        if op.has_original:
            left = SideCell(op.original_index + 1, op.original, op.is_change, _original_html(op))
        if op.has_modified:
            right = SideCell(op.modified_index + 1, op.modified, op.is_change, _modified_html(op))
        rows.append(SideBySideRow(op.kind, left, right))
    return rows


def inline_rows(ops: Sequence[DiffOp]) -> List[InlineRow]:
    """Single-column rows; a replaced line shows as a '-' row followed by a '+' row."""
    rows = []
    for op in ops:
        if op.kind == EQUAL:
            rows.append(InlineRow(' ', op.original, op.original_index + 1, op.modified_index + 1,
                                  html.escape(op.original)))
            continue
        if op.has_original:
            rows.append(InlineRow('-', op.original, op.original_index + 1, None, _original_html(op)))
        if op.has_modified:
            rows.append(InlineRow('+', op.modified, None, op.modified_index + 1, _modified_html(op)))
    return rows
