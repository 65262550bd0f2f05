"""Test configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from coursebook.api.rest_api import CoursebookRestAPI
from coursebook.core.enums import GradeKind
from coursebook.services import CourseService

OWNER = "owner"
COORDINATOR = "coordinator"
TEACHER = "teacher"
ALICE = "alice"
BOB = "bob"
OUTSIDER = "mallory"


@pytest.fixture
def service():
    """A fresh, empty open course."""
    return CourseService(name="Programming I", term="2026-1", owner=OWNER)


@pytest.fixture
def course(service):
    """An open course with staff, two students and a 60/40 pair of evaluations."""
    service.set_coordinator(OWNER, COORDINATOR)
    service.add_teacher(OWNER, TEACHER, "Ada Lovelace")
    service.enroll_by_admin(OWNER, ALICE, "Alice", "DOC-001", "alice@example.edu")
    service.self_enroll(BOB, "Bob", "DOC-002", "bob@example.edu")
    service.create_evaluation(TEACHER, "Midterm", 1767225600, 60, 5)
    service.create_evaluation(TEACHER, "Final exam", 1772323200, 40, 5)
    return service


@pytest.fixture
def graded_course(course):
    """Alice fully graded; Bob present on the midterm only."""
    course.set_grade(TEACHER, ALICE, 0, GradeKind.NUMERIC, 8)
    course.set_grade(TEACHER, ALICE, 1, GradeKind.NUMERIC, 6)
    course.set_grade(TEACHER, BOB, 0, GradeKind.NUMERIC, 8)
    course.set_grade(TEACHER, BOB, 1, GradeKind.NOT_PRESENTED)
    return course


@pytest.fixture
def closed_course(graded_course):
    graded_course.close(COORDINATOR)
    return graded_course


@pytest.fixture
def client(service):
    api = CoursebookRestAPI(service)
    with TestClient(api.app) as test_client:
        yield test_client

