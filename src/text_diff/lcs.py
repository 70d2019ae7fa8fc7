"""
Longest Common Subsequence alignment.

The same alignment is used for lines and for the tokens of a replaced line,
so it works on any sequence of items compared through a key function.
"""

from typing import Callable, List, Optional, Sequence, Tuple

from .types import DELETE, EQUAL, INSERT

# (tag, index into a, index into b)
Step = Tuple[str, Optional[int], Optional[int]]


def common_suffix_length(a_keys: Sequence, b_keys: Sequence) -> int:
    """Length of the common suffix of two key sequences."""
    n, m = len(a_keys), len(b_keys)
    k = 0
    while k < n and k < m and a_keys[n - 1 - k] == b_keys[m - 1 - k]:
        k += 1
    return k


def lcs_table(a_keys: Sequence, b_keys: Sequence) -> List[List[int]]:
    """Build the LCS length table.

    table[i][j] is the LCS length of a_keys[:i] and b_keys[:j].
    """
    n, m = len(a_keys), len(b_keys)
    table = [[0] * (m + 1) for _ in range(n + 1)]

    for i in range(1, n + 1):
        row = table[i]
        prev = table[i - 1]
        a_key = a_keys[i - 1]
        for j in range(1, m + 1):
            if a_key == b_keys[j - 1]:
                row[j] = prev[j - 1] + 1
            else:
                row[j] = prev[j] if prev[j] > row[j - 1] else row[j - 1]

    return table


def backtrack(table: List[List[int]], a_keys: Sequence, b_keys: Sequence) -> List[Step]:
    """Walk the table from the bottom-right corner and return forward-ordered steps.

    On a tie between consuming from ``a`` and from ``b`` the insert (consuming
    from ``b``) is taken first. As the walk runs backwards, this puts deletes
    before inserts in the returned order.
    """
    steps: List[Step] = []
    i, j = len(a_keys), len(b_keys)

    while i > 0 or j > 0:
        if i > 0 and j > 0 and a_keys[i - 1] == b_keys[j - 1]:
            steps.append((EQUAL, i - 1, j - 1))
            i -= 1
            j -= 1
        elif j > 0 and (i == 0 or table[i][j - 1] >= table[i - 1][j]):
            steps.append((INSERT, None, j - 1))
            j -= 1
        else:
            steps.append((DELETE, i - 1, None))
            i -= 1

    steps.reverse()
    return steps


def align_keys(a_keys: Sequence, b_keys: Sequence) -> List[Step]:
    """Align two sequences of comparison keys and return the edit steps.

    A common suffix is matched up front. The backtrack would pair those items
    diagonally anyway, so the result is the same with a smaller table.
    """
    suffix = common_suffix_length(a_keys, b_keys)
    n, m = len(a_keys) - suffix, len(b_keys) - suffix
    head_a, head_b = a_keys[:n], b_keys[:m]

    steps = backtrack(lcs_table(head_a, head_b), head_a, head_b)
    steps.extend((EQUAL, n + k, m + k) for k in range(suffix))
    return steps


def align(a: Sequence[str], b: Sequence[str], key: Optional[Callable[[str], str]] = None) -> List[Step]:
    """Align two sequences, comparing items through ``key`` when given."""
    if key is None:
        return align_keys(list(a), list(b))
    return align_keys([key(item) for item in a], [key(item) for item in b])


def table_cells(a_keys: Sequence, b_keys: Sequence) -> int:
    """Number of table cells ``align_keys`` would allocate for these keys."""
    suffix = common_suffix_length(a_keys, b_keys)
    return (len(a_keys) - suffix) * (len(b_keys) - suffix)
