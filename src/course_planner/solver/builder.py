"""Constraint set construction."""

import logging

from ..constraints import (
    ConstraintBase,
    CourseMultiplicityConstraint,
    MaxCoursesPerDayConstraint,
    MaxEmptySlotsBetweenCoursesConstraint,
    NoOverlappingSlotsConstraint,
)
from ..models import SolveRequest

logger = logging.getLogger(__name__)


class ConstraintBuilder:
    """Builds a fresh list of constraints for one solve call."""

    def __init__(self, request: SolveRequest, course_duration_minutes: int, debug: bool = False):
        self.request = request
        self.course_duration_minutes = course_duration_minutes
        self.debug = debug

    def build(self) -> list[ConstraintBase]:
        """
        Build the constraints implied by the request.

        No-overlap is always active; the others only when their
        request field is set.
        """
        constraints: list[ConstraintBase] = [NoOverlappingSlotsConstraint()]

        if self.request.max_courses_per_day:
            constraints.append(MaxCoursesPerDayConstraint(self.request.max_courses_per_day))

        if self.request.max_empty_slots_between_courses is not None:
            constraints.append(
                MaxEmptySlotsBetweenCoursesConstraint(
                    self.request.max_empty_slots_between_courses,
                    self.course_duration_minutes,
                )
            )

        if self.request.course_multiplicity is not None:
            constraints.append(CourseMultiplicityConstraint(self.request.course_multiplicity))

        if self.debug:
            for constraint in constraints:
                logger.debug("Added constraint: %s", constraint.description)

        return constraints
