"""
API module for the REST implementation.
"""

from .rest_api import CoursebookRestAPI

__all__ = [
    "CoursebookRestAPI",
]
