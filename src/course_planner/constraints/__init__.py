"""Constraint implementations for the planner."""

from .base import ConstraintBase
from .hard import (
    CourseMultiplicityConstraint,
    MaxCoursesPerDayConstraint,
    MaxEmptySlotsBetweenCoursesConstraint,
    NoOverlappingSlotsConstraint,
)

__all__ = [
    "ConstraintBase",
    "CourseMultiplicityConstraint",
    "MaxCoursesPerDayConstraint",
    "MaxEmptySlotsBetweenCoursesConstraint",
    "NoOverlappingSlotsConstraint",
]
