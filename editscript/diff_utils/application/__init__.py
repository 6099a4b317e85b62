"""
Application utilities for the diff_utils package.

This module applies edit sets to text streams.
"""

from .edit_apply import apply_edits, apply_edits_to_string
