"""Course Planner - conflict-free weekly course schedules.

Given courses with fixed weekly time slots and a few user constraints, the
planner enumerates every valid way to attend the chosen courses, ranks the
results, and, when nothing fits, suggests how to relax the request.

Example usage:
    from course_planner import HintingSolver, SolveRequest

    request = SolveRequest.from_dict({
        "selectedCourses": {
            "Salsa 1": [{"day": "MO", "slot": 1080}, {"day": "MO", "slot": 1140}],
            "Tango": [{"day": "DI", "slot": 1080}],
        },
        "maxCoursesPerDay": 2,
    })

    result = HintingSolver().solve(request)
    if result.success:
        for schedule in result.schedules:
            print(schedule.score, schedule.schedule)
    else:
        for hint in result.hints:
            print(hint.description)
"""

from .config import PlannerConfig
from .constraints import (
    ConstraintBase,
    CourseMultiplicityConstraint,
    MaxCoursesPerDayConstraint,
    MaxEmptySlotsBetweenCoursesConstraint,
    NoOverlappingSlotsConstraint,
)
from .exceptions import (
    ConfigError,
    InvalidRequestError,
    InvalidSlotError,
    OfferingsError,
    PlannerError,
    SearchBudgetExceededError,
)
from .exporters import CSVExporter, ExcelExporter, JSONExporter, get_exporter, load_request
from .hinting import HintingSolver
from .models import (
    AlternativeSolution,
    Course,
    FailureAnalysis,
    HintingResult,
    HintType,
    Schedule,
    SchedulingHint,
    SlotConflict,
    Solution,
    SolutionSet,
    SolveRequest,
    SolveResult,
    TimeSlot,
    Weekday,
)
from .offerings import OfferingsLoader, OfferingsTable
from .solver import DeclarativeSolver

__version__ = "0.1.0"

__all__ = [
    # Solvers
    "DeclarativeSolver",
    "HintingSolver",
    "PlannerConfig",
    # Models
    "Weekday",
    "TimeSlot",
    "Course",
    "Schedule",
    "Solution",
    "SolveRequest",
    "SolveResult",
    "SolutionSet",
    "FailureAnalysis",
    "SlotConflict",
    "HintType",
    "SchedulingHint",
    "AlternativeSolution",
    "HintingResult",
    # Constraints
    "ConstraintBase",
    "NoOverlappingSlotsConstraint",
    "MaxCoursesPerDayConstraint",
    "MaxEmptySlotsBetweenCoursesConstraint",
    "CourseMultiplicityConstraint",
    # Input and output
    "OfferingsLoader",
    "OfferingsTable",
    "JSONExporter",
    "CSVExporter",
    "ExcelExporter",
    "get_exporter",
    "load_request",
    # Exceptions
    "PlannerError",
    "InvalidRequestError",
    "InvalidSlotError",
    "ConfigError",
    "OfferingsError",
    "SearchBudgetExceededError",
]
