"""Declarative constraint solver for weekly course scheduling."""

import logging

from ..constants import DEFAULT_COURSE_DURATION_MINUTES, DEFAULT_MAX_SOLUTIONS, NO_SOLUTION_REASON
from ..constraints import ConstraintBase
from ..models import Course, FailureAnalysis, SolutionSet, SolveRequest, SolveResult
from ..validators import (
    validate_course_duration,
    validate_max_search_nodes,
    validate_max_solutions,
    validate_request,
)
from .analysis import FailureAnalyzer
from .builder import ConstraintBuilder
from .search import BacktrackingSearch

logger = logging.getLogger(__name__)


class DeclarativeSolver:
    """
    Course scheduler using exhaustive backtracking search.

    Courses are assigned in request order. For each course every combination
    of its required number of slots is tried; partial schedules that violate
    a constraint are pruned. Constraints are rebuilt from the request on every
    call, so one instance can serve any number of requests.

    Example:
        solver = DeclarativeSolver()
        result = solver.find_all_solutions(
            SolveRequest.from_dict({
                "selectedCourses": {
                    "Salsa": [{"day": "MO", "slot": 1080}, {"day": "MO", "slot": 1140}],
                    "Tango": [{"day": "DI", "slot": 1080}],
                },
            }),
            max_solutions=10,
        )
    """

    def __init__(
        self,
        course_duration_minutes: int = DEFAULT_COURSE_DURATION_MINUTES,
        max_search_nodes: int | None = None,
    ):
        """
        Initialize the solver.

        Args:
            course_duration_minutes: Length of one course including break, used
                                     to quantize gaps between courses.
            max_search_nodes: Abort a search after examining this many partial
                              schedules. None means unlimited.
        """
        validate_course_duration(course_duration_minutes)
        validate_max_search_nodes(max_search_nodes)
        self.course_duration_minutes = course_duration_minutes
        self.max_search_nodes = max_search_nodes
        self.debug_mode = False
        self._last_constraints: list[ConstraintBase] = []

    def set_debug_mode(self, enabled: bool) -> None:
        """Enable or disable debug logging."""
        self.debug_mode = enabled

    def set_course_duration(self, duration_minutes: int) -> None:
        """Set the course duration in minutes for gap calculations."""
        validate_course_duration(duration_minutes)
        self.course_duration_minutes = duration_minutes

    @property
    def constraints_summary(self) -> list[str]:
        """Descriptions of the constraints used by the most recent call."""
        return [c.description for c in self._last_constraints]

    def solve(self, request: SolveRequest) -> SolveResult:
        """
        Find the first valid schedule in search order.

        Returns a successful SolveResult with the schedule statistics, or a
        failed one carrying a failure analysis. Infeasibility is not an error.
        """
        search = self._prepare(request)
        if self.debug_mode:
            logger.debug(
                "Solving for %d courses with %d constraints",
                len(search.course_names),
                len(search.constraints),
            )

        solution = search.first()

        # Leaves are already checked during search; verify once more.
        if solution is not None and not search.is_valid_complete(solution):
            logger.warning("Discarding schedule that failed final verification")
            solution = None

        if solution is None:
            details = self._analyze_failure(search)
            if self.debug_mode:
                logger.debug("No solution found: %s", details)
            return SolveResult(
                success=False,
                reason=NO_SOLUTION_REASON,
                details=details,
                constraints=self.constraints_summary,
            )

        stats = solution.compute_stats(self.course_duration_minutes)
        if self.debug_mode:
            logger.debug("Found solution with score %s", stats.score)
        return SolveResult(success=True, solution=stats)

    def find_all_solutions(
        self,
        request: SolveRequest,
        max_solutions: int | None = DEFAULT_MAX_SOLUTIONS,
    ) -> SolutionSet:
        """
        Enumerate valid schedules, best score first.

        Args:
            request: The scheduling problem.
            max_solutions: Stop after this many schedules. None enumerates all.

        Returns:
            SolutionSet sorted by score descending; ties keep discovery order.
            When empty, ``details`` holds the failure analysis.
        """
        validate_max_solutions(max_solutions)
        search = self._prepare(request)
        if self.debug_mode:
            logger.debug("Finding all solutions (max: %s)", max_solutions)

        leaves = search.collect(max_solutions)
        verified = [leaf for leaf in leaves if search.is_valid_complete(leaf)]
        if len(verified) != len(leaves):
            logger.warning(
                "Discarded %d schedules that failed final verification",
                len(leaves) - len(verified),
            )

        solutions = [leaf.compute_stats(self.course_duration_minutes) for leaf in verified]
        solutions.sort(key=lambda s: s.score, reverse=True)

        if self.debug_mode:
            logger.debug("Found %d solutions", len(solutions))

        if not solutions:
            return SolutionSet(details=self._analyze_failure(search))
        return SolutionSet(schedules=solutions)

    def _prepare(self, request: SolveRequest) -> BacktrackingSearch:
        """Validate the request and set up a search with fresh constraints."""
        validate_request(request)

        courses = {
            name: Course(name=name, available_slots=tuple(slots))
            for name, slots in request.selected_courses.items()
        }
        constraints = ConstraintBuilder(
            request, self.course_duration_minutes, debug=self.debug_mode
        ).build()
        self._last_constraints = constraints

        return BacktrackingSearch(
            request,
            courses,
            constraints,
            max_nodes=self.max_search_nodes,
            debug=self.debug_mode,
        )

    def _analyze_failure(self, search: BacktrackingSearch) -> FailureAnalysis:
        return FailureAnalyzer(search.courses, search.course_names, search.constraints).analyze()
