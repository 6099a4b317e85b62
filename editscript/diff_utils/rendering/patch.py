"""
Read-only patches.

A Patch is created from an EditSet and the original text of one file. It
keeps the file's hunks and renders them as a unified diff. Patches share the
EditSet interface so they can be passed wherever edits are read, but they
cannot be modified or applied.
"""

import io
from typing import Dict, IO, List, Optional, Sequence

from ..core.edit_set import Edit, EditSetBase
from ..core.exceptions import ReadOnlyPatchError, UnsupportedOperationError
from .hunk import Hunk
from .hunk_assembler import assemble_hunks, iter_stream_lines
from .unified_renderer import write_unified_diff


class Patch(EditSetBase):
    """A unified diff for a single file."""

    def __init__(self, key: str, hunks: Optional[List[Hunk]] = None):
        self.key = key
        self.hunks: List[Hunk] = list(hunks or [])

    def edits(self) -> Dict[str, List[Edit]]:
        edits = []
        for hunk in self.hunks:
            edits.extend(hunk.absolute_edits())
        return {self.key: edits}

    def add(self, key: str, offset: int, length: int, replacement: str) -> None:
        raise ReadOnlyPatchError(
            "add cannot be called on Patch (read-only)",
            {"key": key, "offset": offset, "length": length}
        )

    def apply_to(self, key: str, in_stream: IO[str], out_stream: IO[str]) -> None:
        raise UnsupportedOperationError("Applying a Patch is not implemented", {"key": key})

    def apply_to_string(self, key: str, text: str) -> str:
        raise UnsupportedOperationError("Applying a Patch is not implemented", {"key": key})

    def apply_to_file(self, path: str, out_stream: IO[str]) -> None:
        raise UnsupportedOperationError("Applying a Patch is not implemented", {"path": path})

    def create_patch(self, key: str, in_stream: IO[str], context_lines: Optional[int] = None) -> "Patch":
        return self

    def write(self, out: IO[str]) -> None:
        """Write this patch as a unified diff."""
        write_unified_diff(self.key, self.hunks, out)

    def __str__(self) -> str:
        out = io.StringIO()
        self.write(out)
        return out.getvalue()

    def __repr__(self) -> str:
        return f"Patch({self.key!r}, {len(self.hunks)} hunks)"


def create_patch(edits: Sequence[Edit], key: str, in_stream: IO[str],
                 context_lines: Optional[int] = None) -> Patch:
    """
    Build a Patch from the sorted edits of one file.

    Args:
        edits: The file's edits, sorted by offset
        key: The file name written in the patch header
        in_stream: Stream holding the original text of the file
        context_lines: Lines of context around each hunk (configured default if None)

    Returns:
        The patch
    """
    hunks = assemble_hunks(edits, iter_stream_lines(in_stream), context_lines)
    return Patch(key, hunks)


def unified_diff(key: str, original: str, target: str, context_lines: Optional[int] = None,
                 validate: Optional[bool] = None) -> str:
    """
    Diff two texts line by line and render the result as a unified diff.

    Args:
        key: The file name written in the patch header
        original: The original text
        target: The target text
        context_lines: Lines of context around each hunk (configured default if None)
        validate: Re-apply the rendered diff and compare it to ``target``
            (configured default if None)

    Returns:
        The unified diff, or an empty string if the texts are equal
    """
    from ..core.config import is_patch_validation_enabled
    from ..matching.sequence_matcher import diff_lines

    edit_set = diff_lines(key, original, target)
    patch = edit_set.create_patch(key, io.StringIO(original), context_lines)
    text = str(patch)

    if validate is None:
        validate = is_patch_validation_enabled()
    if validate:
        from ..validation.patch_validator import validate_unified_diff
        validate_unified_diff(text, original, target)
    return text
