"""Exhaustive backtracking search over slot combinations."""

import logging
from itertools import combinations

from ..constraints import ConstraintBase
from ..exceptions import SearchBudgetExceededError
from ..models import Course, Schedule, SolveRequest, TimeSlot

logger = logging.getLogger(__name__)


def slot_combinations(
    available_slots: tuple[TimeSlot, ...], required_count: int
) -> list[tuple[TimeSlot, ...]]:
    """All order-independent choices of ``required_count`` distinct offered slots."""
    if not available_slots or required_count > len(available_slots):
        return []
    return list(combinations(available_slots, required_count))


class BacktrackingSearch:
    """
    Depth-first search assigning courses one at a time, in request order.

    Each course receives every combination of its required number of slots;
    partial schedules violating a constraint are pruned, and leaves are
    accepted only after the complete-schedule check.
    """

    def __init__(
        self,
        request: SolveRequest,
        courses: dict[str, Course],
        constraints: list[ConstraintBase],
        max_nodes: int | None = None,
        debug: bool = False,
    ):
        self.request = request
        self.courses = courses
        self.course_names = request.course_names
        self.constraints = constraints
        self.max_nodes = max_nodes
        self.debug = debug
        self.nodes_examined = 0

    def first(self) -> Schedule | None:
        """Return the first valid leaf in depth-first order."""
        return self._search_first(0, Schedule())

    def collect(self, max_solutions: int | None) -> list[Schedule]:
        """Collect valid leaves in depth-first order, up to ``max_solutions``."""
        solutions: list[Schedule] = []
        self._search_all(0, Schedule(), solutions, max_solutions)
        return solutions

    def is_valid_partial(self, schedule: Schedule) -> bool:
        for constraint in self.constraints:
            if not constraint.is_satisfied(schedule):
                if self.debug:
                    logger.debug("Constraint violated: %s", constraint.description)
                return False
        return True

    def is_valid_complete(self, schedule: Schedule) -> bool:
        for constraint in self.constraints:
            if not constraint.is_complete_satisfied(schedule, self.course_names):
                if self.debug:
                    logger.debug(
                        "Complete schedule constraint violated: %s", constraint.description
                    )
                return False
        return True

    def _candidates(self, course_index: int) -> tuple[str, list[tuple[TimeSlot, ...]]]:
        course_name = self.course_names[course_index]
        course = self.courses[course_name]
        return course_name, slot_combinations(
            course.available_slots, self.request.required_slots(course_name)
        )

    def _visit(self, schedule: Schedule) -> bool:
        self.nodes_examined += 1
        if self.max_nodes is not None and self.nodes_examined > self.max_nodes:
            raise SearchBudgetExceededError(self.max_nodes)
        return self.is_valid_partial(schedule)

    def _search_first(self, course_index: int, schedule: Schedule) -> Schedule | None:
        if course_index >= len(self.course_names):
            return schedule if self.is_valid_complete(schedule) else None

        course_name, candidates = self._candidates(course_index)
        for combination in candidates:
            extended = schedule.assign(course_name, combination)
            if self._visit(extended):
                result = self._search_first(course_index + 1, extended)
                if result is not None:
                    return result
        return None

    def _search_all(
        self,
        course_index: int,
        schedule: Schedule,
        solutions: list[Schedule],
        max_solutions: int | None,
    ) -> None:
        if max_solutions is not None and len(solutions) >= max_solutions:
            return

        if course_index >= len(self.course_names):
            if self.is_valid_complete(schedule):
                solutions.append(schedule)
            return

        course_name, candidates = self._candidates(course_index)
        for combination in candidates:
            if max_solutions is not None and len(solutions) >= max_solutions:
                break
            extended = schedule.assign(course_name, combination)
            if self._visit(extended):
                self._search_all(course_index + 1, extended, solutions, max_solutions)
