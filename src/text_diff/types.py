"""
Data types produced by the text diff engine.

All types are immutable value objects. Each one can be turned into plain
dictionaries with ``to_dict()`` so the API layer can hand them to ``jsonify``.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .exceptions import InvalidDiffOptionError

EQUAL = 'equal'
INSERT = 'insert'
DELETE = 'delete'
REPLACE = 'replace'

DEFAULT_COLLAPSE_MIN_RUN = 4
DEFAULT_MAX_LINE_CELLS = 4_000_000
DEFAULT_MAX_WORD_CELLS = 250_000


@dataclass(frozen=True)
class DiffOptions:
    """Comparison options. They only change comparison keys, never displayed text."""
    ignore_case: bool = False
    ignore_whitespace: bool = False

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'DiffOptions':
        """Build options from a request payload, ignoring unknown keys."""
        data = data or {}
        ignore_case = data.get('ignore_case', False)
        ignore_whitespace = data.get('ignore_whitespace', False)
        for name, value in (('ignore_case', ignore_case), ('ignore_whitespace', ignore_whitespace)):
            if not isinstance(value, bool):
                raise InvalidDiffOptionError(f'{name} must be a boolean')
        return cls(ignore_case=ignore_case, ignore_whitespace=ignore_whitespace)

    def to_dict(self) -> Dict[str, bool]:
        return {'ignore_case': self.ignore_case, 'ignore_whitespace': self.ignore_whitespace}


@dataclass(frozen=True)
class WordOp:
    """One token-level operation inside a replaced line."""
    kind: str  # 'equal', 'insert', 'delete'
    original: Optional[str] = None
    modified: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'type': self.kind, 'original': self.original, 'modified': self.modified}


@dataclass(frozen=True)
class DiffOp:
    """One line-level operation of the edit script.

    ``original_index`` and ``modified_index`` are 0-based positions in the
    source documents; a side that does not take part in the op is ``None``.
    """
    kind: str  # 'equal', 'insert', 'delete', 'replace'
    original_index: Optional[int] = None
    original: Optional[str] = None
    modified_index: Optional[int] = None
    modified: Optional[str] = None
    word_ops: Tuple[WordOp, ...] = ()

    @classmethod
    def equal(cls, original_index: int, original: str, modified_index: int, modified: str) -> 'DiffOp':
        return cls(EQUAL, original_index, original, modified_index, modified)

    @classmethod
    def insert(cls, modified_index: int, modified: str) -> 'DiffOp':
        return cls(INSERT, modified_index=modified_index, modified=modified)

    @classmethod
    def delete(cls, original_index: int, original: str) -> 'DiffOp':
        return cls(DELETE, original_index=original_index, original=original)

    @classmethod
    def replace(cls, deleted: 'DiffOp', inserted: 'DiffOp', word_ops: List[WordOp]) -> 'DiffOp':
        return cls(
            REPLACE,
            deleted.original_index, deleted.original,
            inserted.modified_index, inserted.modified,
            tuple(word_ops)
        )

    @property
    def is_change(self) -> bool:
        return self.kind != EQUAL

    @property
    def has_original(self) -> bool:
        return self.kind in (EQUAL, DELETE, REPLACE)

    @property
    def has_modified(self) -> bool:
        return self.kind in (EQUAL, INSERT, REPLACE)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            'type': self.kind,
            'original': self.original,
            'modified': self.modified,
            'line_num_1': self.original_index + 1 if self.original_index is not None else None,
            'line_num_2': self.modified_index + 1 if self.modified_index is not None else None,
        }
        if self.kind == REPLACE:
            result['word_ops'] = [op.to_dict() for op in self.word_ops]
        return result


@dataclass(frozen=True)
class DiffStats:
    """Aggregate statistics derived from a diff."""
    total_original_lines: int
    total_modified_lines: int
    unchanged_count: int
    added_count: int
    removed_count: int
    modified_count: int
    change_count: int
    similarity_percent: float

    @property
    def similarity_level(self) -> str:
        """Colour band used by the UI: 'high', 'medium' or 'low'."""
        if self.similarity_percent > 80:
            return 'high'
        if self.similarity_percent > 50:
            return 'medium'
        return 'low'

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total_original_lines': self.total_original_lines,
            'total_modified_lines': self.total_modified_lines,
            'unchanged': self.unchanged_count,
            'additions': self.added_count,
            'deletions': self.removed_count,
            'modifications': self.modified_count,
            'changes': self.change_count,
            'similarity': self.similarity_percent,
            'similarity_level': self.similarity_level,
        }


@dataclass(frozen=True)
class DiffResult:
    """Full result of comparing two texts."""
    ops: Tuple[DiffOp, ...]
    stats: DiffStats
    options: DiffOptions = field(default_factory=DiffOptions)
    warnings: Tuple[str, ...] = ()
    degraded: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            'ops': [op.to_dict() for op in self.ops],
            'stats': self.stats.to_dict(),
            'options': self.options.to_dict(),
            'warnings': list(self.warnings),
            'degraded': self.degraded,
        }


@dataclass(frozen=True)
class DiffRow:
    """A visible op in a (possibly collapsed) view."""
    index: int
    op: DiffOp

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'line', 'index': self.index, 'op': self.op.to_dict()}


@dataclass(frozen=True)
class CollapsedRun:
    """Marker standing in for a run of hidden unchanged lines."""
    start: int
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {'type': 'collapsed', 'start': self.start, 'count': self.count}


@dataclass(frozen=True)
class SideCell:
    """One side of a side-by-side row."""
    line_number: int
    text: str
    changed: bool = False
    html: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {'line_num': self.line_number, 'text': self.text, 'changed': self.changed, 'html': self.html}


@dataclass(frozen=True)
class SideBySideRow:
    """One row of the side-by-side view; a missing side is ``None``."""
    kind: str
    left: Optional[SideCell]
    right: Optional[SideCell]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.kind,
            'left': self.left.to_dict() if self.left else None,
            'right': self.right.to_dict() if self.right else None,
        }


@dataclass(frozen=True)
class InlineRow:
    """One row of the inline (unified) view."""
    prefix: str  # '+', '-' or ' '
    text: str
    line_num_1: Optional[int] = None
    line_num_2: Optional[int] = None
    html: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'prefix': self.prefix,
            'text': self.text,
            'line_num_1': self.line_num_1,
            'line_num_2': self.line_num_2,
            'html': self.html,
        }


@dataclass(frozen=True)
class DiffSettings:
    """Tunable limits of the engine and its views.

    max_line_cells caps the line-level LCS table (lines of original times
    lines of modified, after the common suffix). max_word_cells does the same
    for the token table of one replaced line.
    """
    collapse_min_run: int = DEFAULT_COLLAPSE_MIN_RUN
    max_line_cells: int = DEFAULT_MAX_LINE_CELLS
    max_word_cells: int = DEFAULT_MAX_WORD_CELLS

    def __post_init__(self):
        for name in ('collapse_min_run', 'max_line_cells', 'max_word_cells'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise InvalidDiffOptionError(f'{name} must be a positive integer, got {value!r}')

    def to_dict(self) -> Dict[str, int]:
        return {
            'collapse_min_run': self.collapse_min_run,
            'max_line_cells': self.max_line_cells,
            'max_word_cells': self.max_word_cells,
        }
