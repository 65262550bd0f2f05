"""
Enumerations and constants for the Coursebook platform.
"""

from enum import Enum


class CourseState(Enum):
    """Lifecycle state of a course. CLOSED is terminal."""
    OPEN = "open"
    CLOSED = "closed"


class GradeKind(Enum):
    """Kind of a grade cell or of a computed final grade."""
    EMPTY = "empty"  # never graded (Unset)
    NOT_PRESENTED = "not_presented"
    NUMERIC = "numeric"


class Capability(Enum):
    """Predicates the access gate can evaluate for a caller."""
    OWNER = "owner"
    COORDINATOR = "coordinator"
    TEACHER = "teacher"
    ENROLLED = "enrolled"
    NOT_ENROLLED = "not_enrolled"
    OPEN = "open"


# Scores are fixed point with two implied decimals.
SCORE_SCALE = 100
MAX_SCORE = 10 * SCORE_SCALE
# Ceiling applied to a final grade when any evaluation was not presented.
NOT_PRESENTED_CAP = 499
