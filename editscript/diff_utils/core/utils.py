"""
Utility functions for the diff_utils package.
"""

import re
from typing import List, Sequence

_LINE_PATTERN = re.compile(r'[^\n]*\n|[^\n]+')


def split_lines(text: str) -> List[str]:
    """
    Split text into lines, keeping the line terminators.

    Only ``\\n`` ends a line. Unlike ``str.splitlines``, carriage returns, form
    feeds and unicode separators stay inside the line they appear in, so the
    lines always join back to the original text.

    Args:
        text: The text to split

    Returns:
        The lines of the text; the last one may lack a trailing newline
    """
    return _LINE_PATTERN.findall(text)


def split_chars(text: str) -> List[str]:
    """Split text into single characters."""
    return list(text)


def join_units(units: Sequence[str]) -> str:
    """Concatenate atomic units back into text."""
    return ''.join(units)


def unit_offsets(units: Sequence[str]) -> List[int]:
    """
    Compute the offset of every unit in the concatenation of ``units``.

    Args:
        units: The atomic units

    Returns:
        A list of ``len(units) + 1`` offsets; entry ``i`` is the offset of
        ``units[i]`` and the last entry is the total length
    """
    offsets = [0]
    for unit in units:
        offsets.append(offsets[-1] + len(unit))
    return offsets
