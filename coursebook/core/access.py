"""
Access gate: capability predicates over the caller and current course state.

Each predicate is a plain function of (gate, caller). Operations declare a
guard set, a tuple of capabilities checked in order; the first one that does
not hold raises its own error and nothing else is evaluated.
"""

from typing import Callable, Dict, Iterable, Type

from .entities import Course
from .enums import Capability
from .exceptions import (
    CoursebookException, NotOwner, NotCoordinator, NotTeacher,
    NotEnrolled, AlreadyEnrolled, CourseClosed
)
from .roster import Roster


def _is_owner(course: Course, roster: Roster, caller: str) -> bool:
    return caller == course.owner


def _is_coordinator(course: Course, roster: Roster, caller: str) -> bool:
    return course.coordinator is not None and caller == course.coordinator


def _is_teacher(course: Course, roster: Roster, caller: str) -> bool:
    return roster.is_teacher(caller)


def _is_enrolled(course: Course, roster: Roster, caller: str) -> bool:
    return roster.is_enrolled(caller)


def _is_not_enrolled(course: Course, roster: Roster, caller: str) -> bool:
    return not roster.is_enrolled(caller)


def _is_open(course: Course, roster: Roster, caller: str) -> bool:
    return not course.closed


PREDICATES: Dict[Capability, Callable[[Course, Roster, str], bool]] = {
    Capability.OWNER: _is_owner,
    Capability.COORDINATOR: _is_coordinator,
    Capability.TEACHER: _is_teacher,
    Capability.ENROLLED: _is_enrolled,
    Capability.NOT_ENROLLED: _is_not_enrolled,
    Capability.OPEN: _is_open,
}

FAILURES: Dict[Capability, Type[CoursebookException]] = {
    Capability.OWNER: NotOwner,
    Capability.COORDINATOR: NotCoordinator,
    Capability.TEACHER: NotTeacher,
    Capability.ENROLLED: NotEnrolled,
    Capability.NOT_ENROLLED: AlreadyEnrolled,
    Capability.OPEN: CourseClosed,
}

_MESSAGES: Dict[Capability, str] = {
    Capability.OWNER: "Only the course owner may do this",
    Capability.COORDINATOR: "Only the course coordinator may do this",
    Capability.TEACHER: "Only a registered teacher may do this",
    Capability.ENROLLED: "Caller is not enrolled in the course",
    Capability.NOT_ENROLLED: "Caller is already enrolled in the course",
    Capability.OPEN: "Course is closed",
}


class AccessGate:
    """Stateless evaluator bound to the course and roster it reads."""

    def __init__(self, course: Course, roster: Roster):
        self._course = course
        self._roster = roster

    def holds(self, capability: Capability, caller: str) -> bool:
        """Check a single capability without raising."""
        return PREDICATES[capability](self._course, self._roster, caller)

    def require(self, caller: str, *guards: Capability) -> None:
        """Raise the first failing capability's error, in declaration order."""
        for capability in guards:
            if not self.holds(capability, caller):
                raise FAILURES[capability](
                    _MESSAGES[capability],
                    details={'caller': caller, 'capability': capability.value}
                )

    def capabilities(self, caller: str, candidates: Iterable[Capability] = tuple(Capability)) -> set:
        """All capabilities that currently hold for the caller."""
        return {capability for capability in candidates if self.holds(capability, caller)}

    def is_owner(self, caller: str) -> bool:
        return self.holds(Capability.OWNER, caller)

    def is_coordinator(self, caller: str) -> bool:
        return self.holds(Capability.COORDINATOR, caller)

    def is_teacher(self, caller: str) -> bool:
        return self.holds(Capability.TEACHER, caller)

    def is_enrolled(self, caller: str) -> bool:
        return self.holds(Capability.ENROLLED, caller)


# Guard sets used by the course service.
OWNER_OPEN = (Capability.OWNER, Capability.OPEN)
COORDINATOR_OPEN = (Capability.COORDINATOR, Capability.OPEN)
TEACHER_OPEN = (Capability.TEACHER, Capability.OPEN)
ENROLLED = (Capability.ENROLLED,)
NOT_ENROLLED = (Capability.NOT_ENROLLED,)
