"""
Utilities for parsing diff files.
"""

import re
from typing import List, Dict, Optional, Any

from editscript.utils.logging_utils import logger

HUNK_HEADER_PATTERN = re.compile(r'^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@')


def extract_target_file_from_diff(diff_content: str) -> Optional[str]:
    """
    Extract the target file path from a unified diff.
    Returns None if no valid target file path is found.

    Args:
        diff_content: The diff content to parse

    Returns:
        The target file path, or None if not found
    """
    if not diff_content:
        return None

    for line in diff_content.splitlines():
        # Git style prefixes
        if line.startswith('+++ b/'):
            return line[6:]

        if line.startswith('+++ ') and not line.startswith('+++ /dev/null'):
            # Drop an optional timestamp after a tab
            return line[4:].split('\t', 1)[0].strip()

        if line.startswith('--- a/'):
            return line[6:]

    return None


def _start_hunk(line: str) -> Optional[Dict[str, Any]]:
    match = HUNK_HEADER_PATTERN.match(line)
    if not match:
        logger.debug(f"Skipping malformed hunk header: {line.rstrip()}")
        return None
    return {
        'old_start': int(match.group(1)),
        'old_count': int(match.group(2)) if match.group(2) is not None else 1,
        'new_start': int(match.group(3)),
        'new_count': int(match.group(4)) if match.group(4) is not None else 1,
        'header': line.rstrip('\n'),
        'content': []
    }


def _is_file_header(lines: List[str], index: int, current_hunk: Optional[Dict[str, Any]]) -> bool:
    # A '--- ' line inside an unfinished hunk is a deleted line, not a header
    return (lines[index].startswith('--- ') and index + 1 < len(lines) and
            lines[index + 1].startswith('+++ ') and
            (current_hunk is None or _hunk_is_complete(current_hunk)))


def split_combined_diff(diff_content: str) -> List[str]:
    """
    Split a combined diff containing multiple files into individual file diffs.
    Returns a list of individual diff strings.

    Args:
        diff_content: The combined diff content

    Returns:
        A list of individual diff strings
    """
    if not diff_content:
        return []

    lines = diff_content.splitlines(True)
    diffs = []
    current_diff: List[str] = []
    current_hunk = None

    for index, line in enumerate(lines):
        if _is_file_header(lines, index, current_hunk):
            if current_diff:
                diffs.append(''.join(current_diff))
            current_diff = []
            current_hunk = None
        elif line.startswith('@@ '):
            current_hunk = _start_hunk(line)
        elif current_hunk is not None:
            current_hunk['content'].append(line.rstrip('\n'))
        current_diff.append(line)

    if current_diff:
        diffs.append(''.join(current_diff))

    logger.debug(f"split_combined_diff found {len(diffs)} file diffs")
    return diffs


def parse_unified_diff(diff_content: str) -> List[Dict[str, Any]]:
    """
    Parse a unified diff format and extract hunks with their content.
    If we can't parse anything, we return an empty list.

    Counts omitted from a hunk header (``@@ -3 +3 @@``) default to 1.

    Args:
        diff_content: The diff content to parse

    Returns:
        A list of dictionaries representing hunks
    """
    if not diff_content:
        return []

    lines = diff_content.splitlines()
    hunks = []
    current_hunk = None

    for index, line in enumerate(lines):
        if _is_file_header(lines, index, current_hunk):
            # File header of the next diff
            if current_hunk:
                hunks.append(current_hunk)
            current_hunk = None
        elif line.startswith('@@ '):
            # Start of a new hunk
            if current_hunk:
                hunks.append(current_hunk)
            current_hunk = _start_hunk(line)
        elif current_hunk is not None:
            current_hunk['content'].append(line)

    # Add the last hunk
    if current_hunk:
        hunks.append(current_hunk)

    return hunks


def count_hunk_lines(hunk: Dict[str, Any]) -> Dict[str, int]:
    """
    Count the original and new lines described by a hunk body.

    Args:
        hunk: A hunk dictionary from parse_unified_diff

    Returns:
        Dictionary with 'old' and 'new' line counts
    """
    old_count = 0
    new_count = 0
    for line in hunk['content']:
        if line.startswith(' '):
            old_count += 1
            new_count += 1
        elif line.startswith('-'):
            old_count += 1
        elif line.startswith('+'):
            new_count += 1
    return {'old': old_count, 'new': new_count}


def _hunk_is_complete(hunk: Dict[str, Any]) -> bool:
    counts = count_hunk_lines(hunk)
    return counts['old'] >= hunk['old_count'] and counts['new'] >= hunk['new_count']
