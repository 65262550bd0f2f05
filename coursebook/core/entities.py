"""
Core entities for the Coursebook platform.
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import (
    Decimal, DecimalException, Inexact, InvalidOperation, Overflow, Underflow, localcontext
)
from typing import Any, Dict, Optional, Union

from .enums import CourseState, GradeKind, SCORE_SCALE
from .exceptions import EmptyFieldRejected, ScoreOutOfRange
from .lifecycle import LifecycleController


def require_text(field_name: str, value: Optional[str]) -> str:
    """Reject empty required string fields."""
    if not value:
        raise EmptyFieldRejected(f"{field_name} must not be empty", details={'field': field_name})
    return value


def scale_score(raw_score: Union[int, str, Decimal], field_name: str = "score") -> int:
    """Convert a whole-unit score (up to two decimals) to fixed point x100.

    The scaling runs with inexact, overflow and underflow results trapped, so
    digits the context would round away are rejected instead of absorbed.
    """
    try:
        raw = Decimal(str(raw_score))
    except InvalidOperation:
        raise ScoreOutOfRange(f"{field_name} is not a number: {raw_score!r}", details={'field': field_name})
    if not raw.is_finite() or raw < 0:
        raise ScoreOutOfRange(
            f"{field_name} must be a finite non-negative number",
            details={'field': field_name, 'value': str(raw_score)}
        )
    try:
        with localcontext() as ctx:
            ctx.traps[Inexact] = True
            ctx.traps[Overflow] = True
            ctx.traps[Underflow] = True
            scaled = raw.scaleb(2)
    except DecimalException:
        raise ScoreOutOfRange(
            f"{field_name} cannot be represented with two decimals: {raw_score!r}",
            details={'field': field_name, 'value': str(raw_score)}
        )
    if scaled != scaled.to_integral_value():
        raise ScoreOutOfRange(
            f"{field_name} must have at most two decimals",
            details={'field': field_name, 'value': str(raw_score)}
        )
    return int(scaled)


class AbstractEntity:
    """Base entity with universal ID, timestamps, and versioning."""

    def __init__(self, entity_id: Optional[str] = None):
        self._id = entity_id or str(uuid.uuid4())
        self._created_at = datetime.now(timezone.utc)
        self._updated_at = self._created_at
        self._version = 1

    @property
    def id(self) -> str:
        """Get the entity ID."""
        return self._id

    @property
    def created_at(self) -> datetime:
        """Get creation timestamp."""
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        """Get last update timestamp."""
        return self._updated_at

    @property
    def version(self) -> int:
        """Get current version."""
        return self._version

    def touch(self) -> None:
        """Record a change to the entity."""
        self._updated_at = datetime.now(timezone.utc)
        self._version += 1

    def to_dict(self) -> Dict[str, Any]:
        """Convert entity to dictionary."""
        return {
            'id': self._id,
            'created_at': self._created_at.isoformat(),
            'updated_at': self._updated_at.isoformat(),
            'version': self._version,
        }

    def __str__(self) -> str:
        return f"{self.__class__.__name__}(id={self._id})"


class Course(AbstractEntity):
    """The single course record: identity fields plus lifecycle.

    The owner is fixed at construction from the creating caller. The
    coordinator starts unset and can be reassigned while the course is open.
    """

    def __init__(self, name: str, term: str, owner: str, **kwargs):
        super().__init__(**kwargs)
        self._name = require_text("name", name)
        self._term = require_text("term", term)
        self._owner = require_text("owner", owner)
        self._coordinator: Optional[str] = None
        self._lifecycle = LifecycleController()

    @property
    def name(self) -> str:
        return self._name

    @property
    def term(self) -> str:
        return self._term

    @property
    def owner(self) -> str:
        return self._owner

    @property
    def coordinator(self) -> Optional[str]:
        return self._coordinator

    @property
    def state(self) -> CourseState:
        return self._lifecycle.state

    @property
    def closed(self) -> bool:
        return self._lifecycle.is_closed

    def set_coordinator(self, identity: str) -> None:
        """Replace the coordinator."""
        self._coordinator = identity
        self.touch()

    def close(self) -> None:
        """Close the course for good."""
        self._lifecycle.close()
        self.touch()

    def to_dict(self) -> Dict[str, Any]:
        """Convert course to dictionary."""
        base_dict = super().to_dict()
        base_dict.update({
            'name': self._name,
            'term': self._term,
            'owner': self._owner,
            'coordinator': self._coordinator,
            'state': self.state.value,
        })
        return base_dict


@dataclass(frozen=True)
class StudentRecord:
    """Personal data of an enrolled student. Its existence is the enrollment."""
    name: str
    id_document: str
    email: str

    def to_dict(self) -> Dict[str, Any]:
        return {'name': self.name, 'id_document': self.id_document, 'email': self.email}


@dataclass(frozen=True)
class Evaluation:
    """A graded evaluation; min_pass_score is fixed point (x100)."""
    name: str
    due_timestamp: int
    weight: int
    min_pass_score: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            'name': self.name,
            'due_timestamp': self.due_timestamp,
            'weight': self.weight,
            'min_pass_score': self.min_pass_score,
        }


@dataclass(frozen=True)
class GradeCell:
    """Immutable value object for one (student, evaluation) grade."""
    kind: GradeKind = GradeKind.EMPTY
    score: int = 0

    @property
    def display(self) -> str:
        """Human readable score, e.g. '7.20'."""
        if self.kind is GradeKind.NUMERIC:
            return f"{self.score // SCORE_SCALE}.{self.score % SCORE_SCALE:02d}"
        return self.kind.value

    def to_dict(self) -> Dict[str, Any]:
        return {'kind': self.kind.value, 'score': self.score}


# A computed final grade has the same shape as a cell.
FinalGrade = GradeCell

EMPTY_CELL = GradeCell()
