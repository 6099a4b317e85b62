"""
Validation utilities for the diff_utils package.

This module checks rendered unified diffs before they are handed out.
"""

from .patch_validator import validate_unified_diff, check_hunk_headers
