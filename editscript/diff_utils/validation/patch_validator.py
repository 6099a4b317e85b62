"""
Validation of rendered unified diffs.

A rendered diff is parsed back with whatthepatch and re-applied to the
original text; the result must be the target text. This catches garbled
output before it reaches a caller.
"""

from typing import List, Optional

import whatthepatch
from whatthepatch import exceptions as wtp_exceptions

from editscript.utils.logging_utils import logger
from ..core.exceptions import PatchValidationError
from ..core.utils import split_lines
from ..parsing.diff_parser import count_hunk_lines, parse_unified_diff, split_combined_diff


def _content_lines(text: str) -> List[str]:
    return [line[:-1] if line.endswith('\n') else line for line in split_lines(text)]


def check_hunk_headers(patch_text: str) -> None:
    """
    Check that every hunk header matches the number of lines in its body.

    Raises:
        PatchValidationError: if a header count disagrees with the body
    """
    for index, hunk in enumerate(parse_unified_diff(patch_text)):
        counts = count_hunk_lines(hunk)
        if counts['old'] != hunk['old_count'] or counts['new'] != hunk['new_count']:
            raise PatchValidationError(
                f"Hunk header does not match its body: {hunk['header']}",
                {"hunk": index, "header": hunk['header'],
                 "old_lines": counts['old'], "new_lines": counts['new']}
            )


def validate_unified_diff(patch_text: str, original: str, target: Optional[str] = None) -> List[str]:
    """
    Re-apply a single-file unified diff to its original text.

    Line endings are not compared: whatthepatch works on line content only.

    Args:
        patch_text: The unified diff to check
        original: The text the diff was computed against
        target: The expected result, if known

    Returns:
        The lines (without terminators) produced by applying the diff

    Raises:
        PatchValidationError: if the diff is malformed, covers more than one
            file, does not apply, or does not produce ``target``
    """
    if not patch_text:
        result = _content_lines(original)
    else:
        file_diffs = split_combined_diff(patch_text)
        if len(file_diffs) != 1:
            raise PatchValidationError(
                "Exactly one file per unified diff is supported",
                {"stage": "parse", "files": len(file_diffs)}
            )
        check_hunk_headers(patch_text)

        # whatthepatch does not need the end-of-file markers
        body = '\n'.join(line for line in patch_text.splitlines() if not line.startswith('\\')) + '\n'
        try:
            diffs = list(whatthepatch.parse_patch(body))
        except (ValueError, wtp_exceptions.WhatThePatchException) as e:
            raise PatchValidationError(f"Unified diff could not be parsed: {e}", {"stage": "parse"}) from e

        if len(diffs) != 1:
            raise PatchValidationError(
                "Exactly one file per unified diff is supported",
                {"stage": "parse", "files": len(diffs)}
            )

        try:
            result = whatthepatch.apply_diff(diffs[0], _content_lines(original))
        except (ValueError, wtp_exceptions.WhatThePatchException) as e:
            raise PatchValidationError(f"Unified diff does not apply: {e}", {"stage": "apply"}) from e

    if target is not None and list(result) != _content_lines(target):
        logger.error("Rendered unified diff does not reproduce the target text")
        raise PatchValidationError(
            "Unified diff does not reproduce the target text",
            {"stage": "compare", "result_lines": len(result), "target_lines": len(_content_lines(target))}
        )

    logger.debug(f"Validated unified diff producing {len(result)} lines")
    return list(result)
