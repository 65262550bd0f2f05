"""
Course lifecycle: a two-state machine that only moves forward.
"""

import logging

from .enums import CourseState
from .exceptions import CourseClosed

logger = logging.getLogger(__name__)


class LifecycleController:
    """Owns the OPEN/CLOSED state of a course."""

    def __init__(self):
        self._state = CourseState.OPEN

    @property
    def state(self) -> CourseState:
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is CourseState.OPEN

    @property
    def is_closed(self) -> bool:
        return self._state is CourseState.CLOSED

    def close(self) -> None:
        """Move the course to CLOSED. There is no way back."""
        if self.is_closed:
            raise CourseClosed("Course is already closed")
        self._state = CourseState.CLOSED
        logger.info("Course lifecycle moved to %s", self._state.value)
