"""
diff_utils package - Utilities for computing, rendering and applying diffs.

This package computes minimal edit scripts between two versions of a text,
groups them into hunks and renders POSIX unified diffs, or applies them
directly to reconstruct the target text.
"""

# Core data model and errors
from .core import Edit, EditSet, EditSetBase
from .core import (
    ErrorCategory, DiffError, MisuseError, ReadOnlyPatchError, UnsupportedOperationError,
    InvalidEditError, InternalDefectError, SearchLimitExceededError, PatchApplicationError,
    EditOrderError, PatchValidationError
)
from .core import classify_error, extract_error_info, ErrorTracker

# Matching utilities
from .matching import diff, diff_lines, diff_chars

# Application utilities
from .application import apply_edits, apply_edits_to_string

# Rendering utilities
from .rendering import Hunk, HunkAssembler, Patch, assemble_hunks, create_patch, render
from .rendering.patch import unified_diff

# Parsing and validation utilities
from .parsing import parse_unified_diff, extract_target_file_from_diff
from .validation import validate_unified_diff

# File operation utilities
from .file_ops import apply_edits_to_file, create_patch_for_file
