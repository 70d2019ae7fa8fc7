"""
Statistics over a computed diff.
"""

from typing import Iterable

from .types import DELETE, EQUAL, INSERT, REPLACE, DiffOp, DiffStats


def similarity_percent(unchanged: int, total_original: int, total_modified: int) -> float:
    """Unchanged lines over the longer document, as a percentage with one decimal."""
    larger = max(total_original, total_modified)
    if larger == 0:
        return 100.0
    return round(unchanged / larger * 100, 1)


def compute_stats(ops: Iterable[DiffOp], total_original: int, total_modified: int) -> DiffStats:
    """Derive DiffStats from an op sequence in a single pass."""
    counts = {EQUAL: 0, INSERT: 0, DELETE: 0, REPLACE: 0}
    for op in ops:
        counts[op.kind] += 1

    return DiffStats(
        total_original_lines=total_original,
        total_modified_lines=total_modified,
        unchanged_count=counts[EQUAL],
        added_count=counts[INSERT],
        removed_count=counts[DELETE],
        modified_count=counts[REPLACE],
        change_count=counts[INSERT] + counts[DELETE] + counts[REPLACE],
        similarity_percent=similarity_percent(counts[EQUAL], total_original, total_modified)
    )
