"""
Core data model, configuration and errors for the diff engine.
"""

from .exceptions import (
    ErrorCategory, DiffError, MisuseError, ReadOnlyPatchError, UnsupportedOperationError,
    InvalidEditError, InternalDefectError, SearchLimitExceededError, PatchApplicationError,
    EditOrderError, PatchValidationError
)
from .edit_set import Edit, EditSet, EditSetBase
from .utils import split_lines, split_chars, join_units, unit_offsets
from .error_tracking import classify_error, extract_error_info, ErrorTracker
