"""Utility functions for time handling and gap quantization."""

import re
from collections.abc import Iterator, Sequence
from typing import TYPE_CHECKING

from .constants import MINUTES_PER_DAY

if TYPE_CHECKING:
    from .models import TimeSlot

TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*$")


def format_minutes(minute_of_day: int) -> str:
    """Format minutes from midnight as HH:MM."""
    hours, minutes = divmod(minute_of_day, 60)
    return f"{hours:02d}:{minutes:02d}"


def parse_time(value: str) -> int | None:
    """Parse an HH:MM string into minutes from midnight.

    Args:
        value: Time string such as '18:00' or '9:30'

    Returns:
        Minutes from midnight, or None if the string is not a valid time
    """
    match = TIME_PATTERN.match(str(value))
    if not match:
        return None

    hours, minutes = int(match.group(1)), int(match.group(2))
    if minutes >= 60:
        return None

    total = hours * 60 + minutes
    if total >= MINUTES_PER_DAY:
        return None
    return total


def quantize_gap_hours(gap_minutes: int, course_duration_minutes: int) -> float:
    """Round a start-to-start gap down to whole course durations, in hours.

    A 120 minute gap with 70 minute courses counts as one course duration,
    i.e. 70 / 60 hours.
    """
    gap_slots = gap_minutes // course_duration_minutes
    return (gap_slots * course_duration_minutes) / 60


def quantized_day_gaps(
    day_slots: Sequence["TimeSlot"],
    course_duration_minutes: int,
) -> Iterator[float]:
    """Yield the quantized gap between each pair of adjacent slots of one day."""
    ordered = sorted(day_slots, key=lambda s: s.minute_of_day)
    for previous, following in zip(ordered, ordered[1:]):
        yield quantize_gap_hours(
            following.minute_of_day - previous.minute_of_day,
            course_duration_minutes,
        )
