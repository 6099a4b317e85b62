"""
Exceptions for diff utilities.

Every exception raised by the engine belongs to one of three categories:
misuse of the API by a caller, an I/O failure (plain ``OSError``, never
wrapped), or an internal defect that leaves no correct result to return.
"""

import enum


class ErrorCategory(enum.Enum):
    """Enum representing who is responsible for a failure."""
    MISUSE = "misuse"
    IO = "io"
    INTERNAL_DEFECT = "internal_defect"


class DiffError(Exception):
    """
    Base class for errors raised by the diff engine.

    Attributes:
        message -- explanation of the error
        details -- additional details about the error
    """

    category = None

    def __init__(self, message, details=None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class MisuseError(DiffError):
    """Raised when a caller violates a documented precondition."""
    category = ErrorCategory.MISUSE


class ReadOnlyPatchError(MisuseError):
    """Raised when edits are added to an already rendered patch."""


class UnsupportedOperationError(MisuseError, NotImplementedError):
    """Raised for operations a patch deliberately does not implement."""


class InvalidEditError(MisuseError, ValueError):
    """Raised when an edit is created with a negative offset or length."""


class InternalDefectError(DiffError):
    """
    Raised when an invariant of the engine is violated.

    These are not recoverable: no correct result can be derived once one is
    raised, so callers should report them rather than retry.
    """
    category = ErrorCategory.INTERNAL_DEFECT


class SearchLimitExceededError(InternalDefectError):
    """Raised when the edit script search runs past the maximum edit distance."""


class PatchApplicationError(InternalDefectError):
    """Exception raised when edits overlap or fall outside the text they are applied to."""


class EditOrderError(InternalDefectError):
    """Raised when edits are not consumed in ascending, non-overlapping order."""


class PatchValidationError(InternalDefectError):
    """Raised when rendered unified diff text does not reproduce the target text."""
