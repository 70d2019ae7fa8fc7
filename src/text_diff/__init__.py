"""
Line-level and word-level text diff engine.

Usage:
    from text_diff import compute_diff, DiffOptions

    result = compute_diff(original, modified, DiffOptions(ignore_case=True))
    for op in result.ops:
        ...
"""

from .engine import align_words, compute_diff
from .exceptions import InvalidDiffInputError, InvalidDiffOptionError, TextDiffError
from .lcs import align
from .normalize import split_lines, tokenize
from .stats import compute_stats
from .types import (
    DELETE, EQUAL, INSERT, REPLACE,
    CollapsedRun, DiffOp, DiffOptions, DiffResult, DiffRow, DiffSettings,
    DiffStats, InlineRow, SideBySideRow, SideCell, WordOp
)
from .views import (
    ChangeNavigator, change_clusters, collapse_unchanged, expand_all,
    inline_rows, side_by_side_rows, step_cluster, unified_text, word_ops_html
)

__all__ = [
    # Engine
    'compute_diff', 'align_words', 'align', 'compute_stats',
    'split_lines', 'tokenize',
    # Types
    'EQUAL', 'INSERT', 'DELETE', 'REPLACE',
    'DiffOptions', 'DiffSettings', 'DiffOp', 'WordOp', 'DiffStats', 'DiffResult',
    'DiffRow', 'CollapsedRun', 'SideCell', 'SideBySideRow', 'InlineRow',
    # Views
    'collapse_unchanged', 'expand_all', 'change_clusters', 'step_cluster',
    'ChangeNavigator', 'unified_text', 'word_ops_html',
    'side_by_side_rows', 'inline_rows',
    # Exceptions
    'TextDiffError', 'InvalidDiffInputError', 'InvalidDiffOptionError',
]
