"""Hard constraint implementations for the planner.

Every constraint here is mandatory: a schedule violating any of them is
never returned as a solution.
"""

from ..constants import DEFAULT_COURSE_DURATION_MINUTES
from ..models import Schedule
from ..utils import quantized_day_gaps
from .base import ConstraintBase


class NoOverlappingSlotsConstraint(ConstraintBase):
    """No two assigned slots may share the same day and time."""

    def is_satisfied(self, schedule: Schedule) -> bool:
        seen = set()
        for slot in schedule.all_assigned_slots():
            if slot in seen:
                return False
            seen.add(slot)
        return True

    @property
    def description(self) -> str:
        return "No overlapping time slots"


class MaxCoursesPerDayConstraint(ConstraintBase):
    """No day may hold more assigned slots than the limit."""

    def __init__(self, max_courses: int):
        self.max_courses = max_courses

    def is_satisfied(self, schedule: Schedule) -> bool:
        return all(
            len(day_slots) <= self.max_courses
            for day_slots in schedule.slots_by_day().values()
        )

    @property
    def description(self) -> str:
        return f"Maximum {self.max_courses} courses per day"


class MaxEmptySlotsBetweenCoursesConstraint(ConstraintBase):
    """
    Limit the quantized gap between adjacent courses of the same day.

    Gaps are measured start to start and rounded down to whole course
    durations before being compared, in hours, against the limit.
    """

    def __init__(
        self,
        max_gap_hours: float,
        course_duration_minutes: int = DEFAULT_COURSE_DURATION_MINUTES,
    ):
        self.max_gap_hours = max_gap_hours
        self.course_duration_minutes = course_duration_minutes

    def is_satisfied(self, schedule: Schedule) -> bool:
        for day_slots in schedule.slots_by_day().values():
            for gap in quantized_day_gaps(day_slots, self.course_duration_minutes):
                if gap > self.max_gap_hours:
                    return False
        return True

    @property
    def description(self) -> str:
        return (
            f"Maximum {self.max_gap_hours} hours gap between courses on same day "
            f"(course duration: {self.course_duration_minutes}min)"
        )


class CourseMultiplicityConstraint(ConstraintBase):
    """
    Each course must be assigned exactly its required number of slots.

    Courses without an entry in the multiplicity map require exactly one.
    During search only assigned courses are checked; the complete check
    also covers courses that were never assigned.
    """

    def __init__(self, multiplicity: dict[str, int] | None = None):
        self.multiplicity = dict(multiplicity or {})

    def _required(self, course_name: str) -> int:
        return self.multiplicity.get(course_name, 1)

    def is_satisfied(self, schedule: Schedule) -> bool:
        return all(
            len(slots) == self._required(name)
            for name, slots in schedule.assignments.items()
        )

    def is_complete_satisfied(self, schedule: Schedule, all_course_names: list[str]) -> bool:
        return all(
            len(schedule.assignments.get(name, ())) == self._required(name)
            for name in all_course_names
        )

    @property
    def description(self) -> str:
        counts = ", ".join(f"{name}: {count} times" for name, count in self.multiplicity.items())
        return f"Course multiplicity: {counts}"
