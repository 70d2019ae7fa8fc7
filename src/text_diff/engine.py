"""
Line-level and word-level diff of two texts.

compute_diff() splits both texts into lines, aligns them with an LCS over
their comparison keys, turns each lone delete/insert pair into a replace and
aligns the tokens of every replaced line with the same LCS.
"""

import difflib
import logging
from typing import Callable, List, Optional, Tuple

from .exceptions import InvalidDiffInputError
from .lcs import Step, align_keys, table_cells
from .normalize import make_key, split_lines, tokenize
from .stats import compute_stats
from .types import (
    DELETE, EQUAL, INSERT,
    DiffOp, DiffOptions, DiffResult, DiffSettings, WordOp
)

logger = logging.getLogger(__name__)


def compute_diff(original: str, modified: str,
                 options: Optional[DiffOptions] = None,
                 settings: Optional[DiffSettings] = None) -> DiffResult:
    """Compare two texts line by line, with word-level detail for modified lines.

    Args:
        original: The original text
        modified: The modified text
        options: Case and whitespace folding for comparison keys
        settings: Size limits; defaults apply when omitted

    Returns:
        DiffResult with the op sequence, statistics and any warnings
    """
    if not isinstance(original, str) or not isinstance(modified, str):
        raise InvalidDiffInputError('Both texts must be strings')

    options = options or DiffOptions()
    settings = settings or DiffSettings()
    key = make_key(options)
    warnings: List[str] = []

    original_lines = split_lines(original)
    modified_lines = split_lines(modified)

    steps, degraded = align_lines(original_lines, modified_lines, key, settings, warnings)
    ops = build_line_ops(steps, original_lines, modified_lines)
    ops = coalesce_replacements(ops, key, settings, warnings)
    stats = compute_stats(ops, len(original_lines), len(modified_lines))

    logger.debug(
        "Diffed %d vs %d lines: %d ops, %.1f%% similar",
        len(original_lines), len(modified_lines), len(ops), stats.similarity_percent
    )

    return DiffResult(
        ops=tuple(ops),
        stats=stats,
        options=options,
        warnings=tuple(warnings),
        degraded=degraded
    )


def align_lines(original_lines: List[str], modified_lines: List[str],
                key: Callable[[str], str], settings: DiffSettings,
                warnings: List[str]) -> Tuple[List[Step], bool]:
    """Align two line lists; falls back to difflib above the table ceiling."""
    a_keys = [key(line) for line in original_lines]
    b_keys = [key(line) for line in modified_lines]

    cells = table_cells(a_keys, b_keys)
    if cells <= settings.max_line_cells:
        return align_keys(a_keys, b_keys), False

    message = (
        f'Input too large for an exact diff ({len(original_lines)} x {len(modified_lines)} lines); '
        f'showing an approximate line alignment'
    )
    logger.warning("%s (%d cells, limit %d)", message, cells, settings.max_line_cells)
    warnings.append(message)
    return approximate_steps(a_keys, b_keys), True


def approximate_steps(a_keys: List[str], b_keys: List[str]) -> List[Step]:
    """Line alignment from difflib opcodes, used for oversized inputs.

    Replaced blocks are reported as all deletes followed by all inserts,
    the same order the LCS backtrack produces.
    """
    matcher = difflib.SequenceMatcher(None, a_keys, b_keys, autojunk=False)
    steps: List[Step] = []

    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == 'equal':
            steps.extend((EQUAL, i1 + k, j1 + k) for k in range(i2 - i1))
            continue
        steps.extend((DELETE, i, None) for i in range(i1, i2))
        steps.extend((INSERT, None, j) for j in range(j1, j2))

    return steps


def build_line_ops(steps: List[Step], original_lines: List[str], modified_lines: List[str]) -> List[DiffOp]:
    """Turn alignment steps into DiffOps carrying the untouched line text."""
    ops = []
    for tag, i, j in steps:
        if tag == EQUAL:
            ops.append(DiffOp.equal(i, original_lines[i], j, modified_lines[j]))
        elif tag == INSERT:
            ops.append(DiffOp.insert(j, modified_lines[j]))
        else:
            ops.append(DiffOp.delete(i, original_lines[i]))
    return ops


def coalesce_replacements(ops: List[DiffOp], key: Callable[[str], str],
                          settings: DiffSettings, warnings: List[str]) -> List[DiffOp]:
    """Merge each change run made of exactly one delete and one insert into a replace.

    Longer runs stay as separate deletes and inserts; pairing lines inside
    a multi-line block would be arbitrary.
    """
    result: List[DiffOp] = []
    run: List[DiffOp] = []

    def flush():
        kinds = sorted(op.kind for op in run)
        if kinds == [DELETE, INSERT]:
            deleted = run[0] if run[0].kind == DELETE else run[1]
            inserted = run[1] if run[0].kind == DELETE else run[0]
            word_ops = align_words(deleted.original, inserted.modified, key, settings, warnings)
            result.append(DiffOp.replace(deleted, inserted, word_ops))
        else:
            result.extend(run)
        run.clear()

    for op in ops:
        if op.is_change:
            run.append(op)
            continue
        if run:
            flush()
        result.append(op)

    if run:
        flush()

    return result


def align_words(original_line: str, modified_line: str, key: Callable[[str], str],
                settings: DiffSettings, warnings: Optional[List[str]] = None) -> List[WordOp]:
    """Token-level alignment of one replaced line pair."""
    a_tokens = tokenize(original_line)
    b_tokens = tokenize(modified_line)
    a_keys = [key(token) for token in a_tokens]
    b_keys = [key(token) for token in b_tokens]

    if table_cells(a_keys, b_keys) > settings.max_word_cells:
        message = f'Line too long for word-level highlighting ({len(a_tokens)} x {len(b_tokens)} tokens)'
        logger.warning("%s", message)
        if warnings is not None:
            warnings.append(message)
        return ([WordOp(DELETE, original=token) for token in a_tokens] +
                [WordOp(INSERT, modified=token) for token in b_tokens])

    word_ops = []
    for tag, i, j in align_keys(a_keys, b_keys):
        if tag == EQUAL:
            word_ops.append(WordOp(EQUAL, original=a_tokens[i], modified=b_tokens[j]))
        elif tag == INSERT:
            word_ops.append(WordOp(INSERT, modified=b_tokens[j]))
        else:
            word_ops.append(WordOp(DELETE, original=a_tokens[i]))
    return word_ops
