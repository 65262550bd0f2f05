"""
Custom exceptions for the Coursebook platform.
"""

from typing import Optional, Any, Dict


class CoursebookException(Exception):
    """Base exception for all Coursebook-related errors."""

    default_code = "coursebook_error"

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.default_code
        self.details = details or {}


class PermissionDenied(CoursebookException):
    """Raised when the caller lacks the role an operation requires."""
    default_code = "permission_denied"


class NotOwner(PermissionDenied):
    """Raised when the caller is not the course owner."""
    default_code = "not_owner"


class NotCoordinator(PermissionDenied):
    """Raised when the caller is not the course coordinator."""
    default_code = "not_coordinator"


class NotTeacher(PermissionDenied):
    """Raised when the caller is not a registered teacher."""
    default_code = "not_teacher"


class CourseClosed(CoursebookException):
    """Raised when a mutation is attempted after the course was closed."""
    default_code = "course_closed"


class RosterError(CoursebookException):
    """Raised when a roster precondition does not hold."""
    default_code = "roster_error"


class AlreadyEnrolled(RosterError):
    """Raised when the identity already has a student record."""
    default_code = "already_enrolled"


class NotEnrolled(RosterError):
    """Raised when the identity has no student record."""
    default_code = "not_enrolled"


class DuplicateDocument(RosterError):
    """Raised when self-enrollment finds an identification document already on file."""
    default_code = "duplicate_document"


class InvalidEvaluationIndex(CoursebookException):
    """Raised when an evaluation index does not exist."""
    default_code = "invalid_evaluation_index"


class ValidationError(CoursebookException):
    """Raised when input validation fails."""
    default_code = "validation_error"


class EmptyFieldRejected(ValidationError):
    """Raised when a required string field is empty."""
    default_code = "empty_field"


class ScoreOutOfRange(ValidationError):
    """Raised when a score falls outside 0.00 - 10.00."""
    default_code = "score_out_of_range"


class InvalidWeight(ValidationError):
    """Raised when an evaluation weight or timestamp is negative."""
    default_code = "invalid_weight"


class ValueTransferRejected(CoursebookException):
    """Raised when a call carries a value transfer; no entry point accepts funds."""
    default_code = "value_transfer_rejected"


class ConfigurationError(CoursebookException):
    """Raised when configuration is invalid."""
    default_code = "configuration_error"
