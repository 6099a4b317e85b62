"""
Error tracking utilities for the diff engine.

This module attributes failures to one of the three error categories so that
callers can report misuse, I/O problems and internal defects differently
instead of collapsing them into a generic failure.
"""

from typing import Dict, List, Any, Optional
from dataclasses import dataclass, field
import logging

from .exceptions import DiffError, ErrorCategory

logger = logging.getLogger(__name__)


def classify_error(error_obj: BaseException) -> Optional[ErrorCategory]:
    """
    Determine the category of an exception raised by the engine.

    Args:
        error_obj: The exception to classify

    Returns:
        The error category, or None if the exception did not come from the engine
    """
    if isinstance(error_obj, DiffError):
        return error_obj.category
    if isinstance(error_obj, OSError):
        return ErrorCategory.IO
    return None


def extract_error_info(error_obj: Any) -> Dict[str, Any]:
    """
    Extract error information from an exception or error object.

    Args:
        error_obj: The error object to extract information from

    Returns:
        Dictionary with error information
    """
    error_info = {
        "message": str(error_obj),
        "type": "unknown",
        "category": None
    }

    # Engine errors carry structured details
    if hasattr(error_obj, 'details'):
        error_info["details"] = getattr(error_obj, 'details', {})

    if isinstance(error_obj, BaseException):
        error_info["type"] = error_obj.__class__.__name__
        category = classify_error(error_obj)
        if category is not None:
            error_info["category"] = category.value

    return error_info


@dataclass
class FileErrorInfo:
    """Class for tracking a failure that occurred while processing one file."""
    file_key: str
    operation: str
    category: Optional[ErrorCategory]
    error_type: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for reporting."""
        return {
            "file_key": self.file_key,
            "operation": self.operation,
            "category": self.category.value if self.category else None,
            "error_type": self.error_type,
            "message": self.message,
            "details": self.details
        }


class ErrorTracker:
    """Class for collecting attributed errors across several diff operations."""

    def __init__(self):
        """Initialize the error tracker."""
        self.errors: List[FileErrorInfo] = []

    def record(self, file_key: str, operation: str, error_obj: BaseException) -> FileErrorInfo:
        """
        Record an error raised while processing a file.

        Args:
            file_key: The file the operation was working on
            operation: The operation that failed (e.g. "diff", "render", "apply")
            error_obj: The exception that was raised

        Returns:
            The recorded error information
        """
        info = extract_error_info(error_obj)
        entry = FileErrorInfo(
            file_key=file_key,
            operation=operation,
            category=classify_error(error_obj),
            error_type=info["type"],
            message=info["message"],
            details=info.get("details", {})
        )
        self.errors.append(entry)

        logger.debug(f"Recorded {entry.error_type} for {file_key} during {operation}: {entry.message} (category: {entry.category})")
        return entry

    def has_internal_defects(self) -> bool:
        """Check whether any recorded error is an internal defect."""
        return any(e.category is ErrorCategory.INTERNAL_DEFECT for e in self.errors)

    def by_category(self, category: ErrorCategory) -> List[FileErrorInfo]:
        """Return the recorded errors of one category."""
        return [e for e in self.errors if e.category is category]

    def to_dict(self) -> Dict[str, Any]:
        """Convert the error tracker to a dictionary for reporting."""
        return {
            "errors": [e.to_dict() for e in self.errors],
            "counts": {c.value: len(self.by_category(c)) for c in ErrorCategory}
        }
