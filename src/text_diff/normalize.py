"""
Line splitting, tokenisation and comparison keys.
"""

import re
from typing import Callable, List

from .types import DiffOptions

WHITESPACE_RE = re.compile(r'\s+')
TOKEN_RE = re.compile(r'\s+|\S+')


def split_lines(text: str) -> List[str]:
    """Split text on '\\n'. An empty text has no lines at all."""
    if not text:
        return []
    return text.split('\n')


def tokenize(line: str) -> List[str]:
    """Split a line into alternating whitespace and non-whitespace runs.

    The tokens always concatenate back to ``line``.
    """
    return TOKEN_RE.findall(line)


def make_key(options: DiffOptions) -> Callable[[str], str]:
    """Return the comparison key function for the given options."""
    ignore_case = options.ignore_case
    ignore_whitespace = options.ignore_whitespace

    if not ignore_case and not ignore_whitespace:
        return lambda s: s

    def key(s: str) -> str:
        if ignore_whitespace:
            s = WHITESPACE_RE.sub(' ', s).strip()
        if ignore_case:
            s = s.lower()
        return s

    return key
