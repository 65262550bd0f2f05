"""
Core module containing the course object model, access gate and grading.
"""

from .entities import *
from .enums import *
from .exceptions import *
from .access import AccessGate
from .lifecycle import LifecycleController
from .roster import Roster
from .evaluations import EvaluationRegistry
from .grades import GradeStore, build_cell
from .grading import compute_final

__all__ = [
    # Entities
    "AbstractEntity",
    "Course",
    "StudentRecord",
    "Evaluation",
    "GradeCell",
    "FinalGrade",

    # Components
    "AccessGate",
    "LifecycleController",
    "Roster",
    "EvaluationRegistry",
    "GradeStore",
    "build_cell",
    "compute_final",

    # Enums
    "CourseState",
    "GradeKind",
    "Capability",

    # Exceptions
    "CoursebookException",
    "PermissionDenied",
    "NotOwner",
    "NotCoordinator",
    "NotTeacher",
    "CourseClosed",
    "RosterError",
    "AlreadyEnrolled",
    "NotEnrolled",
    "DuplicateDocument",
    "InvalidEvaluationIndex",
    "ValidationError",
    "EmptyFieldRejected",
    "ScoreOutOfRange",
    "InvalidWeight",
    "ValueTransferRejected",
    "ConfigurationError",
]
