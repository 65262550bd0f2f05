"""
Services module wrapping the course core behind a serialized entry point.
"""

from .course_service import CourseService, CourseStatistics, reject_value_transfer

__all__ = [
    "CourseService",
    "CourseStatistics",
    "reject_value_transfer",
]
