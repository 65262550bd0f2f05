"""
Course service: the single entry point for every course operation.

Calls are serialized with a re-entrant lock so each one sees a consistent
state and completes before the next begins. Every mutation checks its guard
set and validates its inputs before the first write, so a failed call leaves
no trace.
"""

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, List, Optional, Union

from ..core.access import (
    AccessGate, OWNER_OPEN, COORDINATOR_OPEN, TEACHER_OPEN, ENROLLED, NOT_ENROLLED
)
from ..core.entities import Course, Evaluation, FinalGrade, GradeCell, StudentRecord
from ..core.enums import GradeKind
from ..core.evaluations import EvaluationRegistry
from ..core.exceptions import (
    CoursebookException, PermissionDenied, ValueTransferRejected, NotEnrolled
)
from ..core.grades import GradeStore, build_cell
from ..core.grading import compute_final
from ..core.roster import Roster

logger = logging.getLogger(__name__)

Score = Union[int, str, Decimal]


@dataclass
class CourseStatistics:
    """Public counters of the course."""
    teacher_count: int
    enrollment_count: int
    evaluation_count: int

    def to_dict(self) -> Dict[str, int]:
        return {
            'teacher_count': self.teacher_count,
            'enrollment_count': self.enrollment_count,
            'evaluation_count': self.evaluation_count,
        }


def reject_value_transfer(value: Optional[int]) -> None:
    """No entry point accepts funds."""
    if value:
        raise ValueTransferRejected(
            "Value transfers are not accepted",
            details={'value': value}
        )


class CourseService:
    """Service that owns one course and every record hanging off it."""

    def __init__(self, name: str, term: str, owner: str, value: int = 0):
        reject_value_transfer(value)
        self._course = Course(name=name, term=term, owner=owner)
        self._roster = Roster()
        self._evaluations = EvaluationRegistry()
        self._grades = GradeStore()
        self._gate = AccessGate(self._course, self._roster)
        self._lock = threading.RLock()
        logger.info("Course %r (%s) created by %s", name, term, owner)

    @property
    def course(self) -> Course:
        return self._course

    @contextmanager
    def _call(self, operation: str, caller: Optional[str], value: Optional[int], mutating: bool = False):
        """Serialize one call, reject attached value, and log the outcome."""
        with self._lock:
            try:
                reject_value_transfer(value)
                if caller is not None and not caller:
                    raise PermissionDenied("Caller identity is required")
                yield
            except CoursebookException as e:
                logger.warning("%s rejected for caller %s: %s (%s)", operation, caller, e.message, e.error_code)
                raise
            if mutating:
                logger.info("%s committed by %s", operation, caller)
            else:
                logger.debug("%s served for %s", operation, caller)

    # Lifecycle

    def close(self, caller: str, value: int = 0) -> None:
        """Close the course. Only the coordinator can, and only once."""
        with self._call("close", caller, value, mutating=True):
            self._gate.require(caller, *COORDINATOR_OPEN)
            self._course.close()

    # Roster

    def set_coordinator(self, caller: str, identity: str, value: int = 0) -> None:
        with self._call("set_coordinator", caller, value, mutating=True):
            self._gate.require(caller, *OWNER_OPEN)
            self._course.set_coordinator(identity)

    def add_teacher(self, caller: str, identity: str, name: str, value: int = 0) -> bool:
        """Register a teacher; a repeat for the same identity keeps the first name."""
        with self._call("add_teacher", caller, value, mutating=True):
            self._gate.require(caller, *OWNER_OPEN)
            written = self._roster.register_teacher(identity, name)
            if not written:
                logger.debug("Teacher %s already registered, keeping existing entry", identity)
            return written

    def enroll_by_admin(self, caller: str, identity: str, name: str, id_document: str,
                        email: str, value: int = 0) -> StudentRecord:
        with self._call("enroll_by_admin", caller, value, mutating=True):
            self._gate.require(caller, *OWNER_OPEN)
            return self._roster.enroll(identity, name, id_document, email)

    def self_enroll(self, caller: str, name: str, id_document: str, email: str,
                    value: int = 0) -> StudentRecord:
        """Enroll the caller. Allowed in any lifecycle state."""
        with self._call("self_enroll", caller, value, mutating=True):
            self._gate.require(caller, *NOT_ENROLLED)
            return self._roster.self_enroll(caller, name, id_document, email)

    def get_own_record(self, caller: str, value: int = 0) -> StudentRecord:
        with self._call("get_own_record", caller, value):
            self._gate.require(caller, *ENROLLED)
            return self._roster.record_for(caller)

    # Evaluations

    def create_evaluation(self, caller: str, name: str, due_timestamp: int, weight: int,
                          min_pass_score: Score, value: int = 0) -> int:
        """Append an evaluation and return its index."""
        with self._call("create_evaluation", caller, value, mutating=True):
            self._gate.require(caller, *TEACHER_OPEN)
            return self._evaluations.create(name, due_timestamp, weight, min_pass_score)

    # Grades

    def set_grade(self, caller: str, student: str, index: int, kind: GradeKind,
                  raw_score: Score = 0, value: int = 0) -> GradeCell:
        """Record a grade, replacing any earlier one for the same evaluation."""
        with self._call("set_grade", caller, value, mutating=True):
            self._gate.require(caller, *TEACHER_OPEN)
            if not self._roster.is_enrolled(student):
                raise NotEnrolled(
                    f"Student {student} is not enrolled",
                    details={'identity': student}
                )
            self._evaluations.require_index(index)
            cell = build_cell(kind, raw_score)
            self._grades.write(student, index, cell)
            return cell

    def get_grade(self, student: str, index: int, value: int = 0) -> GradeCell:
        """Public lookup of any student's grade cell."""
        with self._call("get_grade", None, value):
            self._evaluations.require_index(index)
            return self._grades.cell(student, index)

    def get_own_grade(self, caller: str, index: int, value: int = 0) -> GradeCell:
        with self._call("get_own_grade", caller, value):
            self._gate.require(caller, *ENROLLED)
            self._evaluations.require_index(index)
            return self._grades.cell(caller, index)

    # Finals

    def compute_own_final(self, caller: str, value: int = 0) -> FinalGrade:
        with self._call("compute_own_final", caller, value):
            self._gate.require(caller, *ENROLLED)
            return self._final_for(caller)

    def compute_final_for(self, identity: str, value: int = 0) -> FinalGrade:
        with self._call("compute_final_for", None, value):
            return self._final_for(identity)

    def _final_for(self, identity: str) -> FinalGrade:
        return compute_final(
            self._evaluations.all(),
            lambda index: self._grades.cell(identity, index)
        )

    # Public lookups

    def get_statistics(self, value: int = 0) -> CourseStatistics:
        with self._call("get_statistics", None, value):
            return CourseStatistics(
                teacher_count=self._roster.teacher_count,
                enrollment_count=self._roster.enrollment_count,
                evaluation_count=len(self._evaluations),
            )

    def course_info(self, value: int = 0) -> Dict[str, Any]:
        with self._call("course_info", None, value):
            return self._course.to_dict()

    def teacher_name(self, identity: str, value: int = 0) -> str:
        with self._call("teacher_name", None, value):
            return self._roster.teacher_name(identity)

    def teachers(self, value: int = 0) -> List[str]:
        with self._call("teachers", None, value):
            return self._roster.teachers

    def student_record(self, identity: str, value: int = 0) -> Optional[StudentRecord]:
        with self._call("student_record", None, value):
            return self._roster.record_for(identity)

    def enrolled_students(self, value: int = 0) -> List[str]:
        with self._call("enrolled_students", None, value):
            return self._roster.enrolled

    def get_evaluation(self, index: int, value: int = 0) -> Evaluation:
        with self._call("get_evaluation", None, value):
            return self._evaluations.get(index)

    def list_evaluations(self, value: int = 0) -> List[Evaluation]:
        with self._call("list_evaluations", None, value):
            return self._evaluations.all()
