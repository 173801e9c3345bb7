"""Data models for the course planning engine."""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from .constants import (
    DEFAULT_COURSE_DURATION_MINUTES,
    IGNORED_REQUEST_FIELDS,
    MINUTES_PER_DAY,
)
from .exceptions import InvalidRequestError, InvalidSlotError
from .utils import format_minutes, parse_time, quantized_day_gaps

logger = logging.getLogger(__name__)


class Weekday(str, Enum):
    """Days of the week, using the two-letter codes of the course provider."""

    MONDAY = "MO"
    TUESDAY = "DI"
    WEDNESDAY = "MI"
    THURSDAY = "DO"
    FRIDAY = "FR"
    SATURDAY = "SA"
    SUNDAY = "SO"

    @property
    def index(self) -> int:
        """Position in the week, Monday is 0."""
        return list(Weekday).index(self)

    @classmethod
    def parse(cls, value: Any) -> "Weekday":
        """Parse a weekday from its code ('MO') or English name ('monday')."""
        if isinstance(value, Weekday):
            return value
        text = str(value).strip()
        for day in cls:
            if text.upper() == day.value or text.upper() == day.name:
                return day
        raise ValueError(f"Unknown weekday: '{value}'")


@dataclass(frozen=True)
class TimeSlot:
    """A weekly time point: weekday plus minutes from midnight."""

    day: Weekday
    minute_of_day: int

    def __str__(self) -> str:
        return f"{self.day.value} {format_minutes(self.minute_of_day)}"

    @property
    def sort_key(self) -> tuple[int, int]:
        return (self.day.index, self.minute_of_day)

    @property
    def time(self) -> str:
        return format_minutes(self.minute_of_day)

    def gap_to(self, other: "TimeSlot") -> float:
        """Hours between two slots of the same day, infinite across days."""
        if self.day != other.day:
            return math.inf
        return abs(other.minute_of_day - self.minute_of_day) / 60

    def can_fit_between(
        self,
        start: "TimeSlot",
        end: "TimeSlot",
        course_duration_minutes: int = DEFAULT_COURSE_DURATION_MINUTES,
    ) -> bool:
        """Check if this slot starts after one course ends and ends before the next starts."""
        if self.day != start.day or self.day != end.day:
            return False
        start_time = min(start.minute_of_day, end.minute_of_day)
        end_time = max(start.minute_of_day, end.minute_of_day)
        return (
            self.minute_of_day >= start_time + course_duration_minutes
            and self.minute_of_day + course_duration_minutes <= end_time
        )

    @classmethod
    def from_dict(cls, data: Any, course: str | None = None) -> "TimeSlot":
        """Create a TimeSlot from a dictionary.

        Accepts ``{"day": "MO", "slot": 1080}``, ``{"day": "MO", "minute_of_day": 1080}``
        and ``{"day": "MO", "time": "18:00"}``.
        """
        if isinstance(data, TimeSlot):
            return data
        if not isinstance(data, Mapping):
            raise InvalidSlotError(data, "Slot must be a mapping with 'day' and a time", course)

        try:
            day = Weekday.parse(data["day"])
        except KeyError:
            raise InvalidSlotError(data, "Slot has no 'day'", course) from None
        except ValueError as e:
            raise InvalidSlotError(data, str(e), course) from None

        if "slot" in data:
            minute = data["slot"]
        elif "minute_of_day" in data:
            minute = data["minute_of_day"]
        elif "time" in data:
            minute = parse_time(data["time"])
            if minute is None:
                raise InvalidSlotError(data, "Time must be HH:MM", course)
        else:
            raise InvalidSlotError(data, "Slot has no 'slot', 'minute_of_day' or 'time'", course)

        if isinstance(minute, bool) or not isinstance(minute, int):
            raise InvalidSlotError(data, "Minute of day must be an integer", course)
        if not 0 <= minute < MINUTES_PER_DAY:
            raise InvalidSlotError(data, f"Minute of day must be in [0, {MINUTES_PER_DAY})", course)

        return cls(day=day, minute_of_day=minute)

    def to_dict(self) -> dict[str, Any]:
        """Convert slot to dictionary."""
        return {
            "day": self.day.value,
            "minute_of_day": self.minute_of_day,
            "time": self.time,
        }


@dataclass(frozen=True)
class Course:
    """A selectable course and the weekly slots it could be attended at."""

    name: str
    available_slots: tuple[TimeSlot, ...]


@dataclass
class Solution:
    """A complete schedule together with its quality statistics."""

    days: int
    max_gap_between_courses: float
    courses_on_busiest_day: int
    score: float
    schedule: dict[str, tuple[TimeSlot, ...]]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "days": self.days,
            "max_gap_between_courses": self.max_gap_between_courses,
            "courses_on_busiest_day": self.courses_on_busiest_day,
            "score": self.score,
            "schedule": {
                name: [slot.to_dict() for slot in slots]
                for name, slots in self.schedule.items()
            },
        }


class Schedule:
    """A partial or complete assignment of slots to courses.

    Assigning never mutates an existing schedule; ``assign`` returns a new one.
    """

    def __init__(self, assignments: Mapping[str, Iterable[TimeSlot]] | None = None):
        self.assignments: dict[str, tuple[TimeSlot, ...]] = {
            name: tuple(slots) for name, slots in (assignments or {}).items()
        }

    def __repr__(self) -> str:
        parts = ", ".join(
            f"{name}: [{', '.join(str(s) for s in slots)}]"
            for name, slots in self.assignments.items()
        )
        return f"Schedule({parts})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Schedule):
            return NotImplemented
        return self.assignments == other.assignments

    def assign(self, course_name: str, slots: Iterable[TimeSlot]) -> "Schedule":
        """Return a new schedule with the course assigned to the given slots."""
        assignments = dict(self.assignments)
        assignments[course_name] = tuple(slots)
        return Schedule(assignments)

    def all_assigned_slots(self) -> list[TimeSlot]:
        """All assigned slots across every course."""
        return [slot for slots in self.assignments.values() for slot in slots]

    def slots_by_day(self) -> dict[Weekday, list[TimeSlot]]:
        """Group assigned slots by weekday."""
        by_day: dict[Weekday, list[TimeSlot]] = {}
        for slot in self.all_assigned_slots():
            by_day.setdefault(slot.day, []).append(slot)
        return by_day

    def compute_stats(
        self, course_duration_minutes: int = DEFAULT_COURSE_DURATION_MINUTES
    ) -> Solution:
        """
        Compute quality statistics for this schedule.

        score = days * 2 + max quantized gap - courses on busiest day * 2
        """
        by_day = self.slots_by_day()

        max_gap = 0.0
        for day_slots in by_day.values():
            for gap in quantized_day_gaps(day_slots, course_duration_minutes):
                max_gap = max(max_gap, gap)

        busiest = max((len(day_slots) for day_slots in by_day.values()), default=0)
        days = len(by_day)

        return Solution(
            days=days,
            max_gap_between_courses=max_gap,
            courses_on_busiest_day=busiest,
            score=days * 2 + max_gap - busiest * 2,
            schedule=dict(self.assignments),
        )


def _lookup(data: Mapping[str, Any], camel: str, snake: str, default: Any = None) -> Any:
    """Read a request key in either its camelCase or snake_case spelling."""
    if camel in data:
        return data[camel]
    return data.get(snake, default)


def _parse_courses(raw: Any, field_name: str) -> dict[str, list[TimeSlot]]:
    if not isinstance(raw, Mapping):
        raise InvalidRequestError("Expected a mapping of course name to slots", field=field_name)

    courses: dict[str, list[TimeSlot]] = {}
    for name, slots in raw.items():
        if isinstance(slots, (str, bytes)) or not isinstance(slots, Iterable):
            raise InvalidRequestError("Expected a list of slots", field=field_name, course=name)
        courses[name] = [TimeSlot.from_dict(slot, course=name) for slot in slots]
    return courses


@dataclass
class SolveRequest:
    """A scheduling problem: candidate slots per course plus constraint parameters.

    ``existing_courses`` holds every slot of a course, including deselected ones,
    and is only used to derive hints.
    """

    selected_courses: dict[str, list[TimeSlot]]
    existing_courses: dict[str, list[TimeSlot]] = field(default_factory=dict)
    max_courses_per_day: int | None = None
    max_empty_slots_between_courses: float | None = None
    course_multiplicity: dict[str, int] | None = None

    @property
    def course_names(self) -> list[str]:
        return list(self.selected_courses)

    def required_slots(self, course_name: str) -> int:
        """Number of slots a course must be given (1 unless a multiplicity is set)."""
        if self.course_multiplicity:
            return self.course_multiplicity.get(course_name) or 1
        return 1

    def with_max_courses_per_day(self, limit: int) -> "SolveRequest":
        return replace(self, max_courses_per_day=limit)

    def with_max_gap(self, hours: float) -> "SolveRequest":
        return replace(self, max_empty_slots_between_courses=hours)

    def with_multiplicity(self, course_name: str, count: int) -> "SolveRequest":
        multiplicity = dict(self.course_multiplicity or {})
        multiplicity[course_name] = count
        return replace(self, course_multiplicity=multiplicity)

    def without_course(self, course_name: str) -> "SolveRequest":
        selected = {
            name: slots for name, slots in self.selected_courses.items() if name != course_name
        }
        return replace(self, selected_courses=selected)

    def with_course_slots(self, course_name: str, slots: list[TimeSlot]) -> "SolveRequest":
        selected = dict(self.selected_courses)
        selected[course_name] = list(slots)
        return replace(self, selected_courses=selected)

    @classmethod
    def from_dict(cls, data: Any) -> "SolveRequest":
        """Create a SolveRequest from a dictionary using camelCase or snake_case keys."""
        if not isinstance(data, Mapping):
            raise InvalidRequestError(f"Request must be a mapping, got {type(data).__name__}")

        raw_selected = _lookup(data, "selectedCourses", "selected_courses")
        if raw_selected is None:
            raise InvalidRequestError("Missing required field", field="selectedCourses")

        ignored = [key for key in IGNORED_REQUEST_FIELDS if key in data]
        if ignored:
            logger.warning("Ignoring unsupported request fields: %s", ", ".join(ignored))

        multiplicity = _lookup(data, "courseMultiplicity", "course_multiplicity")
        if multiplicity is not None and not isinstance(multiplicity, Mapping):
            raise InvalidRequestError(
                "Expected a mapping of course name to count", field="courseMultiplicity"
            )

        return cls(
            selected_courses=_parse_courses(raw_selected, "selectedCourses"),
            existing_courses=_parse_courses(
                _lookup(data, "existingCourses", "existing_courses", {}), "existingCourses"
            ),
            max_courses_per_day=_lookup(data, "maxCoursesPerDay", "max_courses_per_day"),
            max_empty_slots_between_courses=_lookup(
                data, "maxEmptySlotsBetweenCourses", "max_empty_slots_between_courses"
            ),
            course_multiplicity=dict(multiplicity) if multiplicity is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert request to dictionary."""
        data: dict[str, Any] = {
            "selected_courses": {
                name: [slot.to_dict() for slot in slots]
                for name, slots in self.selected_courses.items()
            },
            "existing_courses": {
                name: [slot.to_dict() for slot in slots]
                for name, slots in self.existing_courses.items()
            },
        }
        if self.max_courses_per_day is not None:
            data["max_courses_per_day"] = self.max_courses_per_day
        if self.max_empty_slots_between_courses is not None:
            data["max_empty_slots_between_courses"] = self.max_empty_slots_between_courses
        if self.course_multiplicity is not None:
            data["course_multiplicity"] = dict(self.course_multiplicity)
        return data


@dataclass
class SlotConflict:
    """Several courses offered at the identical slot."""

    slot: TimeSlot
    conflicting_courses: list[str]

    def to_dict(self) -> dict[str, Any]:
        return {
            "slot": self.slot.to_dict(),
            "conflicting_courses": self.conflicting_courses,
        }


@dataclass
class FailureAnalysis:
    """Structural diagnosis of an infeasible request."""

    total_courses: int = 0
    courses_with_no_slots: list[str] = field(default_factory=list)
    courses_with_limited_slots: list[dict[str, Any]] = field(default_factory=list)
    potential_conflicts: list[SlotConflict] = field(default_factory=list)
    constraint_analysis: list[dict[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_courses": self.total_courses,
            "courses_with_no_slots": self.courses_with_no_slots,
            "courses_with_limited_slots": self.courses_with_limited_slots,
            "potential_conflicts": [c.to_dict() for c in self.potential_conflicts],
            "constraint_analysis": self.constraint_analysis,
        }


@dataclass
class SolveResult:
    """Result of a single-solution search."""

    success: bool
    solution: Solution | None = None
    reason: str | None = None
    details: FailureAnalysis | None = None
    constraints: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        if self.success and self.solution is not None:
            return {"success": True, **self.solution.to_dict()}
        return {
            "success": False,
            "reason": self.reason,
            "details": self.details.to_dict() if self.details else None,
            "constraints": self.constraints,
        }


@dataclass
class SolutionSet:
    """Result of enumerating solutions, best score first."""

    schedules: list[Solution] = field(default_factory=list)
    details: FailureAnalysis | None = None

    @property
    def success(self) -> bool:
        return len(self.schedules) > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        data: dict[str, Any] = {
            "success": self.success,
            "schedules": [s.to_dict() for s in self.schedules],
        }
        if self.details is not None:
            data["details"] = self.details.to_dict()
        return data


def _serialize_value(value: Any) -> Any:
    if isinstance(value, TimeSlot):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize_value(item) for item in value]
    return value


class HintType(str, Enum):
    """Kind of modification a hint suggests."""

    ADD_SLOTS = "add_slots"
    REDUCE_MULTIPLICITY = "reduce_multiplicity"
    RELAX_CONSTRAINT = "relax_constraint"
    REMOVE_COURSE = "remove_course"


@dataclass
class SchedulingHint:
    """A suggested modification that may make the request solvable."""

    type: HintType
    description: str
    modification: dict[str, Any]
    impact: str

    def to_dict(self) -> dict[str, Any]:
        modification = {
            key: _serialize_value(value) for key, value in self.modification.items()
        }
        return {
            "type": self.type.value,
            "description": self.description,
            "modification": modification,
            "impact": self.impact,
        }


@dataclass
class AlternativeSolution:
    """Verified schedules obtained under a relaxed version of the request."""

    schedules: list[Solution]
    relaxed_constraint: str
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "relaxed_constraint": self.relaxed_constraint,
            "description": self.description,
            "schedules": [s.to_dict() for s in self.schedules],
        }


@dataclass
class HintingResult:
    """Schedules on success; hints and alternatives on failure."""

    success: bool
    schedules: list[Solution] = field(default_factory=list)
    reason: str | None = None
    hints: list[SchedulingHint] = field(default_factory=list)
    alternatives: list[AlternativeSolution] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        if self.success:
            return {
                "success": True,
                "schedules": [s.to_dict() for s in self.schedules],
            }
        return {
            "success": False,
            "reason": self.reason,
            "hints": [h.to_dict() for h in self.hints],
            "alternatives": [a.to_dict() for a in self.alternatives],
        }
