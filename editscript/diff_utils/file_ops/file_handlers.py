"""
Utilities for file operations related to edit sets and patches.
"""

from typing import IO, Optional

from editscript.utils.logging_utils import logger
from ..core.edit_set import EditSetBase


def open_original(path: str) -> IO[str]:
    """
    Open a file for reading without translating line endings.

    Offsets computed on the file's text stay valid for the stream.
    """
    return open(path, 'r', encoding='utf-8', newline='\n')


def apply_edits_to_file(edit_set: EditSetBase, path: str, out: IO[str]) -> None:
    """
    Apply the edits keyed by ``path`` to the file at ``path``.

    Args:
        edit_set: The edits, keyed by file path
        path: The file to read the original text from
        out: The stream receiving the edited text
    """
    logger.debug(f"Applying edits to {path}")
    with open_original(path) as f:
        edit_set.apply_to(path, f, out)


def create_patch_for_file(edit_set: EditSetBase, path: str, context_lines: Optional[int] = None):
    """
    Create a patch for the file at ``path`` from the edits keyed by it.

    Args:
        edit_set: The edits, keyed by file path
        path: The file holding the original text
        context_lines: Lines of context around each hunk (configured default if None)

    Returns:
        The patch
    """
    logger.debug(f"Creating patch for {path}")
    with open_original(path) as f:
        return edit_set.create_patch(path, f, context_lines)
