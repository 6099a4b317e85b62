"""
Parsing utilities for the diff_utils package.

This module provides functionality for parsing diffs and extracting information from them.
"""

from .diff_parser import parse_unified_diff, extract_target_file_from_diff, count_hunk_lines
from .diff_parser import split_combined_diff
