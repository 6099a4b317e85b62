"""
Rendering utilities for the diff_utils package.

This module groups edits into hunks and writes them as unified diffs.
"""

from .hunk import Hunk
from .hunk_assembler import (
    HunkAssembler, AssemblerState, EditCursor, SourceLine,
    assemble_hunks, iter_stream_lines, iter_text_lines, touches
)
from .unified_renderer import render, write_hunk, write_unified_diff
from .patch import Patch, create_patch
