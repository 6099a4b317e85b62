"""
File operation utilities for the diff_utils package.
"""

from .file_handlers import apply_edits_to_file, create_patch_for_file, open_original
