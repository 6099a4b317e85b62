"""
Streaming application of sorted edits.

Edits are applied in a single forward pass: the text between edits is copied
from the input stream, replaced regions are skipped and replacement text is
written in their place. Offsets must match exactly; there is no fuzzy
repositioning.
"""

import io
from typing import IO, Iterable

from editscript.utils.logging_utils import logger
from ..core.config import get_apply_chunk_size
from ..core.edit_set import Edit
from ..core.exceptions import PatchApplicationError


def _transfer(in_stream: IO[str], out_stream, count: int, chunk_size: int) -> int:
    """
    Read ``count`` characters from ``in_stream``, writing them to ``out_stream`` if given.

    Returns:
        The number of characters actually read (less than ``count`` at end of input)
    """
    remaining = count
    while remaining > 0:
        chunk = in_stream.read(min(remaining, chunk_size))
        if not chunk:
            break
        if out_stream is not None:
            out_stream.write(chunk)
        remaining -= len(chunk)
    return count - remaining


def apply_edits(edits: Iterable[Edit], in_stream: IO[str], out_stream: IO[str]) -> None:
    """
    Apply edits sorted by offset to the text read from ``in_stream``.

    Args:
        edits: Edits sorted ascending by offset, pairwise non-overlapping
        in_stream: Stream holding the original text
        out_stream: Stream receiving the edited text

    Raises:
        PatchApplicationError: if edits overlap, are out of order, or reach past
            the end of the input
        OSError: if reading or writing fails
    """
    chunk_size = get_apply_chunk_size()
    position = 0
    for edit in edits:
        if edit.offset < position:
            logger.error(f"Edit {edit} overlaps the previous edit ending at {position}")
            raise PatchApplicationError(
                "Overlapping edits cannot be applied",
                {"type": "overlap", "offset": edit.offset, "length": edit.length, "position": position}
            )

        copied = _transfer(in_stream, out_stream, edit.offset - position, chunk_size)
        if copied < edit.offset - position:
            raise PatchApplicationError(
                "Edit offset is past the end of the input",
                {"type": "range", "offset": edit.offset, "input_length": position + copied}
            )
        out_stream.write(edit.replacement)

        skipped = _transfer(in_stream, None, edit.length, chunk_size)
        if skipped < edit.length:
            raise PatchApplicationError(
                "Edit extends past the end of the input",
                {"type": "range", "offset": edit.offset, "length": edit.length,
                 "input_length": edit.offset + skipped}
            )
        position = edit.end

    # Copy whatever follows the last edit
    while True:
        chunk = in_stream.read(chunk_size)
        if not chunk:
            break
        out_stream.write(chunk)


def apply_edits_to_string(edits: Iterable[Edit], text: str) -> str:
    """Apply sorted edits to ``text`` and return the result."""
    out = io.StringIO()
    apply_edits(edits, io.StringIO(text), out)
    return out.getvalue()
