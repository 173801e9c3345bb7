"""Validation logic for solve requests.

All checks run before search starts and raise InvalidRequestError naming
the offending field and course.
"""

import math
from numbers import Real

from .constants import MINUTES_PER_DAY
from .exceptions import InvalidRequestError
from .models import SolveRequest, TimeSlot, Weekday


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_course_duration(duration_minutes: object) -> None:
    """Validate the course duration used for gap quantization.

    Args:
        duration_minutes: Duration in minutes, must be a positive integer
    """
    if not _is_int(duration_minutes) or duration_minutes <= 0:
        raise InvalidRequestError(
            f"Course duration must be a positive integer, got {duration_minutes!r}",
            field="course_duration_minutes",
        )


def validate_max_solutions(max_solutions: object) -> None:
    """Validate a solution cap (None means unbounded)."""
    if max_solutions is None:
        return
    if not _is_int(max_solutions) or max_solutions < 1:
        raise InvalidRequestError(
            f"Expected a positive integer or None, got {max_solutions!r}",
            field="max_solutions",
        )


def validate_max_search_nodes(max_nodes: object) -> None:
    """Validate a search node budget (None means unbounded)."""
    if max_nodes is None:
        return
    if not _is_int(max_nodes) or max_nodes < 1:
        raise InvalidRequestError(
            f"Expected a positive integer or None, got {max_nodes!r}",
            field="max_search_nodes",
        )


def _validate_slots(slots: object, field: str, course: str) -> None:
    if not isinstance(slots, (list, tuple)):
        raise InvalidRequestError("Expected a list of slots", field=field, course=course)

    for slot in slots:
        if not isinstance(slot, TimeSlot):
            raise InvalidRequestError(
                f"Expected TimeSlot, got {type(slot).__name__}", field=field, course=course
            )
        if not isinstance(slot.day, Weekday):
            raise InvalidRequestError(f"Unknown weekday: {slot.day!r}", field=field, course=course)
        if not _is_int(slot.minute_of_day) or not 0 <= slot.minute_of_day < MINUTES_PER_DAY:
            raise InvalidRequestError(
                f"Minute of day out of range: {slot.minute_of_day!r}", field=field, course=course
            )


def _validate_courses(courses: object, field: str) -> None:
    if not isinstance(courses, dict):
        raise InvalidRequestError("Expected a mapping of course name to slots", field=field)

    for name, slots in courses.items():
        if not isinstance(name, str) or not name.strip():
            raise InvalidRequestError(
                f"Course name must be a non-empty string, got {name!r}", field=field
            )
        _validate_slots(slots, field, name)


def validate_request(request: object) -> None:
    """Validate a solve request.

    Args:
        request: Request to validate

    Raises:
        InvalidRequestError: If any field is malformed
    """
    if not isinstance(request, SolveRequest):
        raise InvalidRequestError(
            f"Expected SolveRequest, got {type(request).__name__}. "
            "Use SolveRequest.from_dict() for raw dictionaries."
        )

    _validate_courses(request.selected_courses, "selected_courses")
    _validate_courses(request.existing_courses, "existing_courses")

    limit = request.max_courses_per_day
    if limit is not None and (not _is_int(limit) or limit < 0):
        raise InvalidRequestError(
            f"Expected a non-negative integer, got {limit!r}", field="max_courses_per_day"
        )

    gap = request.max_empty_slots_between_courses
    if gap is not None and (
        isinstance(gap, bool) or not isinstance(gap, Real) or not math.isfinite(gap) or gap < 0
    ):
        raise InvalidRequestError(
            f"Expected a finite non-negative number of hours, got {gap!r}",
            field="max_empty_slots_between_courses",
        )

    multiplicity = request.course_multiplicity
    if multiplicity is None:
        return
    if not isinstance(multiplicity, dict):
        raise InvalidRequestError("Expected a mapping of course name to count", field="course_multiplicity")
    for name, count in multiplicity.items():
        if not _is_int(count) or count < 1:
            raise InvalidRequestError(
                f"Multiplicity must be a positive integer, got {count!r}",
                field="course_multiplicity",
                course=name,
            )
