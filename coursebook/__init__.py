"""
Coursebook: role-gated course records with weighted final grades.

Manages a single academic course: its teachers and enrolled students, its
graded evaluations, and the computation of each student's final grade, with
every mutation gated by role and by a one-way open/closed lifecycle.
"""

__version__ = "1.0.0"
__author__ = "Coursebook Development Team"
__description__ = "Role-gated course record and grade aggregation service"
