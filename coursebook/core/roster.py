"""
Roster of teachers and enrolled students.

Teachers and students are both "a value keyed by identity", but they follow
different write policies: a teacher entry is written once and never replaced,
while a student record may only be created for an identity that has none.
"""

from typing import Dict, List, Optional

from .entities import StudentRecord, require_text
from .exceptions import AlreadyEnrolled, DuplicateDocument


class Roster:
    """Teacher registry and student enrollment book."""

    def __init__(self):
        self._teachers: Dict[str, str] = {}
        self._teacher_order: List[str] = []
        self._students: Dict[str, StudentRecord] = {}
        self._enrollment_order: List[str] = []

    # Teachers

    def is_teacher(self, identity: str) -> bool:
        return bool(self._teachers.get(identity))

    def teacher_name(self, identity: str) -> str:
        """Display name of a teacher, empty when not registered."""
        return self._teachers.get(identity, "")

    def register_teacher(self, identity: str, name: str) -> bool:
        """Register a teacher unless one is already on file.

        Returns True when the entry was written, False when an earlier entry
        for the identity was kept.
        """
        require_text("name", name)
        if self._teachers.get(identity):
            return False
        self._teachers[identity] = name
        self._teacher_order.append(identity)
        return True

    @property
    def teachers(self) -> List[str]:
        return list(self._teacher_order)

    @property
    def teacher_count(self) -> int:
        return len(self._teacher_order)

    # Students

    def is_enrolled(self, identity: str) -> bool:
        return identity in self._students

    def record_for(self, identity: str) -> Optional[StudentRecord]:
        return self._students.get(identity)

    def document_on_file(self, identity: str) -> str:
        """Identification document stored in the identity's own slot."""
        record = self._students.get(identity)
        return record.id_document if record else ""

    def enroll(self, identity: str, name: str, id_document: str, email: str) -> StudentRecord:
        """Create a student record for an identity that has none."""
        record = self._build_record(name, id_document, email)
        if self.is_enrolled(identity):
            raise AlreadyEnrolled(
                f"Student {identity} is already enrolled",
                details={'identity': identity}
            )
        return self._store(identity, record)

    def self_enroll(self, identity: str, name: str, id_document: str, email: str) -> StudentRecord:
        """Create the caller's own record.

        The duplicate check only looks at the caller's own slot, which is
        empty whenever the caller is not yet enrolled.
        """
        record = self._build_record(name, id_document, email)
        if self.document_on_file(identity):
            raise DuplicateDocument(
                "Identification document already registered",
                details={'identity': identity}
            )
        return self._store(identity, record)

    @property
    def enrolled(self) -> List[str]:
        return list(self._enrollment_order)

    @property
    def enrollment_count(self) -> int:
        return len(self._enrollment_order)

    def _build_record(self, name: str, id_document: str, email: str) -> StudentRecord:
        return StudentRecord(
            name=require_text("name", name),
            id_document=require_text("id_document", id_document),
            email=email or "",
        )

    def _store(self, identity: str, record: StudentRecord) -> StudentRecord:
        self._students[identity] = record
        self._enrollment_order.append(identity)
        return record
