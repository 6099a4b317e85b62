"""
Unified diff output.

The unified diff format is documented in the POSIX standard (IEEE 1003.1),
"diff - compare two files", section "Diff -u or -U Output Format".
"""

import io
from typing import IO, List, Optional, Sequence, Tuple

from editscript.utils.logging_utils import logger
from ..application.edit_apply import apply_edits_to_string
from ..core.edit_set import Edit
from ..core.utils import split_lines
from ..matching.sequence_matcher import diff
from .hunk import Hunk

NO_NEWLINE_MARKER = "\\ No newline at end of file\n"


def _write_line(out: IO[str], prefix: str, line: str) -> None:
    out.write(prefix)
    out.write(line)
    if not line.endswith('\n'):
        out.write('\n')
        out.write(NO_NEWLINE_MARKER)


def _range(start: int, count: int) -> str:
    # An empty range names the line before it
    if count == 0:
        start -= 1
    return f"{start},{count}"


def _line_script(orig_lines: Sequence[str], new_lines: Sequence[str]) -> List[Edit]:
    """Return one edit per inserted or deleted line, sorted by offset."""
    if orig_lines and new_lines:
        return diff(orig_lines, new_lines).edits_for("")
    # diff() collapses a one-sided change into a single edit; split it per line
    script = []
    offset = 0
    for line in orig_lines:
        script.append(Edit(offset, len(line), ""))
        offset += len(line)
    script.extend(Edit(offset, 0, line) for line in new_lines)
    return script


def _region_entries(orig_lines: Sequence[str], new_lines: Sequence[str]) -> List[Tuple[str, str]]:
    """Pair every line of a changed region with its unified diff prefix."""
    entries = []
    script = _line_script(orig_lines, new_lines)
    index = 0
    offset = 0
    for line in orig_lines:
        deleted = False
        while index < len(script) and script[index].offset == offset:
            edit = script[index]
            if edit.length > 0:
                entries.append(('-', line))
                deleted = True
            else:
                entries.append(('+', edit.replacement))
            index += 1
        if not deleted:
            entries.append((' ', line))
        offset += len(line)

    # Lines added after the last original line
    entries.extend(('+', edit.replacement) for edit in script[index:])
    return entries


def _hunk_entries(hunk: Hunk) -> List[Tuple[str, str]]:
    """
    Render a hunk as (prefix, line) pairs.

    Unchanged lines are written as context. Each run of changed lines between
    them is re-diffed on its own, together with the edits inserting whole
    lines in front of the next unchanged line.
    """
    entries = []
    region: List[str] = []
    region_start = 0
    index = 0
    offset = 0

    def flush(limit: Optional[int]) -> None:
        nonlocal index
        edits = []
        while index < len(hunk.edits) and (limit is None or hunk.edits[index].offset <= limit):
            edits.append(hunk.edits[index].relative_to(region_start))
            index += 1
        if region or edits:
            edited = apply_edits_to_string(edits, ''.join(region))
            entries.extend(_region_entries(region, split_lines(edited)))

    for line, changed in zip(hunk.lines, hunk.changed):
        if changed:
            region.append(line)
        else:
            flush(offset)
            entries.append((' ', line))
            region = []
            region_start = offset + len(line)
        offset += len(line)
    flush(None)
    return entries


def _trim_context(entries: List[Tuple[str, str]], context_lines: Optional[int]):
    """Drop context beyond ``context_lines`` at both ends; returns the entries and the lines dropped in front."""
    changes = [i for i, (prefix, _) in enumerate(entries) if prefix != ' ']
    if context_lines is None or not changes:
        return entries, 0
    front = max(0, changes[0] - context_lines)
    back = min(len(entries), changes[-1] + 1 + context_lines)
    return entries[front:back], front


def write_hunk(hunk: Hunk, line_delta: int, out: IO[str]) -> int:
    """
    Write a single hunk in unified diff format.

    The hunk's edits may not line up with line boundaries individually, so the
    changed lines are found by diffing the original lines of each changed
    region against its edited lines. A hunk whose edits leave every line as it
    was writes nothing.

    Args:
        hunk: The hunk to write
        line_delta: Net number of lines added by the hunks written before this one
        out: The stream receiving the diff

    Returns:
        The number of lines this hunk adds (negative if it removes lines)
    """
    entries = _hunk_entries(hunk)
    if all(prefix == ' ' for prefix, _ in entries):
        logger.debug(f"Hunk at line {hunk.start_line} changes no lines")
        return 0

    entries, dropped = _trim_context(entries, hunk.context_lines)
    old_count = sum(1 for prefix, _ in entries if prefix != '+')
    new_count = sum(1 for prefix, _ in entries if prefix != '-')
    start = hunk.start_line + dropped

    out.write(f"@@ -{_range(start, old_count)} +{_range(start + line_delta, new_count)} @@\n")
    for prefix, line in entries:
        _write_line(out, prefix, line)
    return new_count - old_count


def write_unified_diff(key: str, hunks: Sequence[Hunk], out: IO[str]) -> None:
    """
    Write a unified diff for one file.

    Nothing is written when no hunk changes a line.

    Args:
        key: The file name used in the ``---``/``+++`` header
        hunks: The hunks of the file, in order
        out: The stream receiving the diff
    """
    body = io.StringIO()
    line_delta = 0
    for hunk in hunks:
        line_delta += write_hunk(hunk, line_delta, body)
    if not body.getvalue():
        return
    out.write(f"--- {key}\n+++ {key}\n")
    out.write(body.getvalue())
    logger.debug(f"Rendered {len(hunks)} hunks for {key}, net line change {line_delta:+d}")


def render(key: str, hunks: Sequence[Hunk]) -> str:
    """Render hunks of one file as unified diff text."""
    out = io.StringIO()
    write_unified_diff(key, hunks, out)
    return out.getvalue()
