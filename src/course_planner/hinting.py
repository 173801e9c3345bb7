"""Hinting solver: explains infeasible requests and proposes fixes.

When the declarative solver finds no schedule, the hinting solver re-runs
it on modified copies of the request (relaxed limits, fewer repetitions,
extra slots, one course fewer) and reports which modifications help.
Every probe is an independent, side-effect-free solve.
"""

import logging

from .constants import (
    ALTERNATIVE_SOLUTION_LIMIT,
    DEFAULT_COURSE_DURATION_MINUTES,
    DEFAULT_MAX_SOLUTIONS,
    HINT_PRIORITIES,
    INFEASIBLE_REASON,
    MAX_COURSES_PER_DAY_RELAXATIONS,
    MAX_GAP_HINT_RELAXATION,
    MAX_GAP_RELAXATIONS,
    MAX_SUGGESTED_SLOTS,
    UNKNOWN_HINT_PRIORITY,
)
from .models import (
    AlternativeSolution,
    HintingResult,
    HintType,
    SchedulingHint,
    SlotConflict,
    SolutionSet,
    SolveRequest,
    TimeSlot,
)
from .solver import DeclarativeSolver
from .validators import validate_max_solutions

logger = logging.getLogger(__name__)


def hint_priority(hint: SchedulingHint) -> int:
    """Sort key for hints, lower first."""
    hint_type = hint.type.value if isinstance(hint.type, HintType) else hint.type
    return HINT_PRIORITIES.get(hint_type, UNKNOWN_HINT_PRIORITY)


def find_slot_conflicts(selected_courses: dict[str, list[TimeSlot]]) -> list[SlotConflict]:
    """Find slots selected for more than one course."""
    slot_map: dict[TimeSlot, list[str]] = {}
    for course, slots in selected_courses.items():
        for slot in slots:
            slot_map.setdefault(slot, []).append(course)

    return [
        SlotConflict(slot=slot, conflicting_courses=courses)
        for slot, courses in slot_map.items()
        if len(courses) > 1
    ]


def _additional_slots(request: SolveRequest, course: str) -> list[TimeSlot]:
    """Slots known for a course that are not currently selected."""
    selected = set(request.selected_courses.get(course, []))
    return [slot for slot in request.existing_courses.get(course, []) if slot not in selected]


class HintingSolver:
    """
    Solver that provides hints when scheduling fails.

    Wraps DeclarativeSolver. On success the ranked schedules are returned
    unchanged; on failure the result carries hints (unverified suggestions)
    and alternatives (suggestions with computed schedules).
    """

    def __init__(
        self,
        course_duration_minutes: int = DEFAULT_COURSE_DURATION_MINUTES,
        max_search_nodes: int | None = None,
        alternative_solution_limit: int = ALTERNATIVE_SOLUTION_LIMIT,
    ):
        self.base_solver = DeclarativeSolver(course_duration_minutes, max_search_nodes)
        self.alternative_solution_limit = alternative_solution_limit
        self.debug_mode = False

    def set_debug_mode(self, enabled: bool) -> None:
        """Enable or disable debug logging, including the wrapped solver."""
        self.debug_mode = enabled
        self.base_solver.set_debug_mode(enabled)

    def set_course_duration(self, duration_minutes: int) -> None:
        """Set the course duration in minutes for gap calculations."""
        self.base_solver.set_course_duration(duration_minutes)

    def solve(
        self,
        request: SolveRequest,
        max_solutions: int | None = DEFAULT_MAX_SOLUTIONS,
    ) -> HintingResult:
        """
        Solve the request, explaining failure with hints and alternatives.

        Args:
            request: The scheduling problem, with ``existing_courses`` listing
                     every known slot per course.
            max_solutions: Maximum schedules to return on success.
        """
        validate_max_solutions(max_solutions)

        result = self.base_solver.find_all_solutions(request, max_solutions)
        if result.success:
            if self.debug_mode:
                logger.debug("Found %d solutions", len(result.schedules))
            return HintingResult(success=True, schedules=result.schedules)

        if self.debug_mode:
            logger.debug("No solutions found, analyzing constraints")

        hints = self.generate_hints(request)
        alternatives = self.find_alternatives(request, max_solutions)

        if self.debug_mode:
            logger.debug("Generated %d hints and %d alternatives", len(hints), len(alternatives))

        return HintingResult(
            success=False,
            reason=INFEASIBLE_REASON,
            hints=hints,
            alternatives=alternatives,
        )

    def generate_hints(self, request: SolveRequest) -> list[SchedulingHint]:
        """Collect hints from every analyzer, ordered by priority."""
        hints: list[SchedulingHint] = []
        hints.extend(self._analyze_slot_conflicts(request))
        hints.extend(self._analyze_constraint_relaxation(request))
        hints.extend(self._analyze_multiplicity(request))
        hints.extend(self._analyze_course_removal(request))

        hints.sort(key=hint_priority)
        return hints

    def find_alternatives(
        self, request: SolveRequest, max_solutions: int | None = DEFAULT_MAX_SOLUTIONS
    ) -> list[AlternativeSolution]:
        """Collect verified alternatives under relaxed versions of the request."""
        limit = self.alternative_solution_limit
        if max_solutions is not None:
            limit = min(limit, max_solutions)

        alternatives: list[AlternativeSolution] = []
        alternatives.extend(self._try_relaxed_constraints(request, limit))
        alternatives.extend(self._try_reduced_multiplicity(request, limit))
        alternatives.extend(self._try_additional_slots(request, limit))
        return alternatives

    def _probe(self, request: SolveRequest, limit: int = 1) -> SolutionSet:
        return self.base_solver.find_all_solutions(request, limit)

    def _analyze_slot_conflicts(self, request: SolveRequest) -> list[SchedulingHint]:
        """Suggest enabling more slots for courses caught in a slot conflict."""
        hints = []
        for conflict in find_slot_conflicts(request.selected_courses):
            for course in conflict.conflicting_courses:
                additional = _additional_slots(request, course)
                if not additional:
                    continue
                hints.append(
                    SchedulingHint(
                        type=HintType.ADD_SLOTS,
                        description=f'Enable additional time slots for "{course}" to resolve conflict',
                        modification={
                            "course": course,
                            "suggested_slots": additional[:MAX_SUGGESTED_SLOTS],
                            "conflict_slot": conflict.slot,
                        },
                        impact="High - directly resolves scheduling conflict",
                    )
                )
        return hints

    def _analyze_constraint_relaxation(self, request: SolveRequest) -> list[SchedulingHint]:
        """Test whether loosening a daily limit makes the request solvable."""
        hints = []

        current = request.max_courses_per_day
        if current:
            if self._probe(request.with_max_courses_per_day(current + 1)).success:
                hints.append(
                    SchedulingHint(
                        type=HintType.RELAX_CONSTRAINT,
                        description=f"Allow {current + 1} courses per day (currently {current})",
                        modification={
                            "constraint": "max_courses_per_day",
                            "current_value": current,
                            "suggested_value": current + 1,
                        },
                        impact="Medium - may enable solution with slightly busier days",
                    )
                )

        gap = request.max_empty_slots_between_courses
        if gap is not None:
            relaxed = gap + MAX_GAP_HINT_RELAXATION
            if self._probe(request.with_max_gap(relaxed)).success:
                hints.append(
                    SchedulingHint(
                        type=HintType.RELAX_CONSTRAINT,
                        description=(
                            f"Allow up to {relaxed} hour gaps between courses (currently {gap})"
                        ),
                        modification={
                            "constraint": "max_empty_slots_between_courses",
                            "current_value": gap,
                            "suggested_value": relaxed,
                        },
                        impact="Low - allows longer breaks between courses",
                    )
                )

        return hints

    def _analyze_multiplicity(self, request: SolveRequest) -> list[SchedulingHint]:
        """Test whether taking a repeated course one time fewer helps."""
        hints = []
        for course, count in (request.course_multiplicity or {}).items():
            if count <= 1:
                continue
            if self._probe(request.with_multiplicity(course, count - 1)).success:
                hints.append(
                    SchedulingHint(
                        type=HintType.REDUCE_MULTIPLICITY,
                        description=f'Take "{course}" {count - 1} times instead of {count} times',
                        modification={
                            "course": course,
                            "current_count": count,
                            "suggested_count": count - 1,
                        },
                        impact="Medium - reduces time commitment while keeping the course",
                    )
                )
        return hints

    def _analyze_course_removal(self, request: SolveRequest) -> list[SchedulingHint]:
        """Test dropping each course in turn."""
        hints = []
        for course in request.course_names:
            reduced = request.without_course(course)
            if self._probe(reduced).success:
                hints.append(
                    SchedulingHint(
                        type=HintType.REMOVE_COURSE,
                        description=f'Consider removing "{course}" to make scheduling possible',
                        modification={
                            "course": course,
                            "remaining_courses": reduced.course_names,
                        },
                        impact="High - immediately enables solution for remaining courses",
                    )
                )
        return hints

    def _try_relaxed_constraints(
        self, request: SolveRequest, limit: int
    ) -> list[AlternativeSolution]:
        """Find the smallest working relaxation of each daily limit."""
        alternatives = []

        current = request.max_courses_per_day
        if current:
            for extra in MAX_COURSES_PER_DAY_RELAXATIONS:
                result = self._probe(request.with_max_courses_per_day(current + extra), limit)
                if result.success:
                    alternatives.append(
                        AlternativeSolution(
                            schedules=result.schedules,
                            relaxed_constraint="max_courses_per_day",
                            description=(
                                f"Allow {current + extra} courses per day (was {current})"
                            ),
                        )
                    )
                    break

        gap = request.max_empty_slots_between_courses
        if gap is not None:
            for extra in MAX_GAP_RELAXATIONS:
                result = self._probe(request.with_max_gap(gap + extra), limit)
                if result.success:
                    alternatives.append(
                        AlternativeSolution(
                            schedules=result.schedules,
                            relaxed_constraint="max_empty_slots_between_courses",
                            description=f"Allow {gap + extra} hour gaps (was {gap})",
                        )
                    )
                    break

        return alternatives

    def _try_reduced_multiplicity(
        self, request: SolveRequest, limit: int
    ) -> list[AlternativeSolution]:
        alternatives = []
        for course, count in (request.course_multiplicity or {}).items():
            if count <= 1:
                continue
            result = self._probe(request.with_multiplicity(course, count - 1), limit)
            if result.success:
                alternatives.append(
                    AlternativeSolution(
                        schedules=result.schedules,
                        relaxed_constraint="course_multiplicity",
                        description=f'Take "{course}" {count - 1} times (was {count} times)',
                    )
                )
        return alternatives

    def _try_additional_slots(
        self, request: SolveRequest, limit: int
    ) -> list[AlternativeSolution]:
        """Enable every known slot of one selected course at a time."""
        alternatives = []
        for course in request.course_names:
            additional = _additional_slots(request, course)
            if not additional:
                continue
            expanded = request.with_course_slots(
                course, list(request.selected_courses[course]) + additional
            )
            result = self._probe(expanded, limit)
            if result.success:
                alternatives.append(
                    AlternativeSolution(
                        schedules=result.schedules,
                        relaxed_constraint="additional_slots",
                        description=(
                            f'Enable {len(additional)} additional time slot(s) for "{course}"'
                        ),
                    )
                )
        return alternatives
