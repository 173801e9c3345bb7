"""Tests for the hinting solver."""

import pytest

from course_planner import HintingSolver, SolveRequest
from course_planner.constants import INFEASIBLE_REASON
from course_planner.exceptions import InvalidRequestError, SearchBudgetExceededError
from course_planner.hinting import find_slot_conflicts, hint_priority
from course_planner.models import HintType, SchedulingHint, TimeSlot


def ts(day: str, time: str) -> TimeSlot:
    return TimeSlot.from_dict({"day": day, "time": time})


def hint(hint_type) -> SchedulingHint:
    return SchedulingHint(type=hint_type, description="", modification={}, impact="")


@pytest.fixture
def busy_monday_request():
    """Two courses on Monday with at most one course per day."""
    return SolveRequest(
        selected_courses={"A": [ts("MO", "18:00")], "B": [ts("MO", "19:10")]},
        max_courses_per_day=1,
    )


@pytest.fixture
def long_gap_request():
    """Two Monday courses six hours apart with a one hour gap limit."""
    return SolveRequest(
        selected_courses={"A": [ts("MO", "09:00")], "B": [ts("MO", "15:00")]},
        max_empty_slots_between_courses=1,
    )


@pytest.fixture
def multiplicity_request():
    """A course required three times but offered only twice."""
    return SolveRequest(
        selected_courses={"A": [ts("MO", "18:00"), ts("DI", "18:00")]},
        course_multiplicity={"A": 3},
    )


class TestHelpers:
    """Tests for module-level helpers."""

    def test_hint_priority_order(self):
        assert hint_priority(hint(HintType.ADD_SLOTS)) == 1
        assert hint_priority(hint(HintType.REDUCE_MULTIPLICITY)) == 2
        assert hint_priority(hint(HintType.RELAX_CONSTRAINT)) == 3
        assert hint_priority(hint(HintType.REMOVE_COURSE)) == 4

    def test_unknown_hint_type_sorts_last(self):
        assert hint_priority(hint("split_course")) == 5

    def test_find_slot_conflicts(self):
        conflicts = find_slot_conflicts(
            {
                "A": [ts("MO", "18:00"), ts("DI", "18:00")],
                "B": [ts("MO", "18:00")],
                "C": [ts("MO", "18:00"), ts("MI", "18:00")],
            }
        )
        assert len(conflicts) == 1
        assert conflicts[0].slot == ts("MO", "18:00")
        assert conflicts[0].conflicting_courses == ["A", "B", "C"]

    def test_no_conflicts(self):
        assert find_slot_conflicts({"A": [ts("MO", "18:00")], "B": [ts("DI", "18:00")]}) == []


class TestHintingSolverSuccess:
    """Tests for feasible requests."""

    def test_passes_schedules_through(self, hinting_solver, two_day_request):
        result = hinting_solver.solve(two_day_request)
        assert result.success
        assert len(result.schedules) == 4
        assert result.hints == []
        assert result.alternatives == []
        assert result.reason is None

    def test_max_solutions(self, hinting_solver, two_day_request):
        assert len(hinting_solver.solve(two_day_request, max_solutions=1).schedules) == 1

    def test_invalid_max_solutions(self, hinting_solver, two_day_request):
        with pytest.raises(InvalidRequestError):
            hinting_solver.solve(two_day_request, max_solutions=-1)

    def test_set_course_duration_reaches_base_solver(self, hinting_solver):
        hinting_solver.set_course_duration(90)
        assert hinting_solver.base_solver.course_duration_minutes == 90

    def test_set_debug_mode_reaches_base_solver(self, hinting_solver):
        hinting_solver.set_debug_mode(True)
        assert hinting_solver.base_solver.debug_mode is True


class TestSlotConflictHints:
    """Tests for conflicts resolved by enabling known slots."""

    def test_hints_in_priority_order(self, hinting_solver, conflict_request):
        result = hinting_solver.solve(conflict_request)
        assert not result.success
        assert result.reason == INFEASIBLE_REASON
        assert [h.type for h in result.hints] == [
            HintType.ADD_SLOTS,
            HintType.REMOVE_COURSE,
            HintType.REMOVE_COURSE,
        ]

    def test_add_slots_hint(self, hinting_solver, conflict_request):
        add_slots = hinting_solver.solve(conflict_request).hints[0]
        assert add_slots.modification["course"] == "A"
        assert add_slots.modification["conflict_slot"] == ts("MO", "18:00")
        assert add_slots.modification["suggested_slots"] == [
            ts("DI", "18:00"),
            ts("MI", "18:00"),
            ts("DO", "18:00"),
        ]
        assert "resolve conflict" in add_slots.description

    def test_remove_course_hints(self, hinting_solver, conflict_request):
        hints = hinting_solver.solve(conflict_request).hints
        assert hints[1].modification == {"course": "A", "remaining_courses": ["B"]}
        assert hints[2].modification == {"course": "B", "remaining_courses": ["A"]}

    def test_additional_slots_alternative(self, hinting_solver, conflict_request):
        alternatives = hinting_solver.solve(conflict_request).alternatives
        assert len(alternatives) == 1
        alternative = alternatives[0]
        assert alternative.relaxed_constraint == "additional_slots"
        assert alternative.description == 'Enable 4 additional time slot(s) for "A"'
        assert len(alternative.schedules) == 4
        for solution in alternative.schedules:
            assert solution.schedule["A"] != (ts("MO", "18:00"),)
            assert solution.schedule["B"] == (ts("MO", "18:00"),)

    def test_additional_slots_only_for_selected_courses(self, hinting_solver):
        request = SolveRequest(
            selected_courses={"A": [ts("MO", "18:00")], "B": [ts("MO", "18:00")]},
            existing_courses={"Z": [ts("SA", "10:00")]},
        )
        result = hinting_solver.solve(request)
        assert result.alternatives == []
        assert all(h.type != HintType.ADD_SLOTS for h in result.hints)

    def test_hint_to_dict(self, hinting_solver, conflict_request):
        data = hinting_solver.solve(conflict_request).to_dict()
        assert data["success"] is False
        first = data["hints"][0]
        assert first["type"] == "add_slots"
        assert first["modification"]["conflict_slot"] == {
            "day": "MO",
            "minute_of_day": 1080,
            "time": "18:00",
        }
        assert len(first["modification"]["suggested_slots"]) == 3


class TestConstraintRelaxation:
    """Tests for relaxing the daily limits."""

    def test_relax_max_courses_per_day_hint(self, hinting_solver, busy_monday_request):
        hints = hinting_solver.solve(busy_monday_request).hints
        assert [h.type for h in hints] == [
            HintType.RELAX_CONSTRAINT,
            HintType.REMOVE_COURSE,
            HintType.REMOVE_COURSE,
        ]
        relax = hints[0]
        assert relax.description == "Allow 2 courses per day (currently 1)"
        assert relax.modification == {
            "constraint": "max_courses_per_day",
            "current_value": 1,
            "suggested_value": 2,
        }

    def test_relax_max_courses_per_day_alternative(self, hinting_solver, busy_monday_request):
        alternatives = hinting_solver.solve(busy_monday_request).alternatives
        assert len(alternatives) == 1
        assert alternatives[0].relaxed_constraint == "max_courses_per_day"
        assert alternatives[0].description == "Allow 2 courses per day (was 1)"
        assert len(alternatives[0].schedules) == 1

    def test_gap_hint_needs_working_relaxation(self, hinting_solver, long_gap_request):
        hints = hinting_solver.solve(long_gap_request).hints
        # +2 hours is not enough for a 5 slot gap
        assert [h.type for h in hints] == [HintType.REMOVE_COURSE, HintType.REMOVE_COURSE]

    def test_gap_alternative_uses_first_working_step(self, hinting_solver, long_gap_request):
        alternatives = hinting_solver.solve(long_gap_request).alternatives
        assert len(alternatives) == 1
        assert alternatives[0].relaxed_constraint == "max_empty_slots_between_courses"
        assert alternatives[0].description == "Allow 7 hour gaps (was 1)"

    def test_gap_hint(self, hinting_solver):
        request = SolveRequest(
            selected_courses={"A": [ts("MO", "18:00")], "B": [ts("MO", "19:10")]},
            max_empty_slots_between_courses=0,
        )
        result = hinting_solver.solve(request)
        relax = result.hints[0]
        assert relax.type == HintType.RELAX_CONSTRAINT
        assert relax.description == "Allow up to 2 hour gaps between courses (currently 0)"
        assert result.alternatives[0].description == "Allow 2 hour gaps (was 0)"

    def test_alternative_schedules_capped(self, hinting_solver):
        monday = [TimeSlot.from_dict({"day": "MO", "slot": 600 + 70 * i}) for i in range(7)]
        request = SolveRequest(
            selected_courses={"A": list(monday), "B": list(monday)},
            max_courses_per_day=1,
        )
        alternatives = hinting_solver.solve(request).alternatives
        assert len(alternatives[0].schedules) == 5
        assert len(hinting_solver.solve(request, max_solutions=3).alternatives[0].schedules) == 3


class TestMultiplicityHints:
    """Tests for reducing how often a course is taken."""

    def test_reduce_multiplicity_hint(self, hinting_solver, multiplicity_request):
        hints = hinting_solver.solve(multiplicity_request).hints
        assert [h.type for h in hints] == [HintType.REDUCE_MULTIPLICITY, HintType.REMOVE_COURSE]
        assert hints[0].description == 'Take "A" 2 times instead of 3 times'
        assert hints[0].modification == {"course": "A", "current_count": 3, "suggested_count": 2}

    def test_removing_only_course_is_feasible(self, hinting_solver, multiplicity_request):
        remove = hinting_solver.solve(multiplicity_request).hints[1]
        assert remove.modification == {"course": "A", "remaining_courses": []}

    def test_reduce_multiplicity_alternative(self, hinting_solver, multiplicity_request):
        alternatives = hinting_solver.solve(multiplicity_request).alternatives
        assert len(alternatives) == 1
        assert alternatives[0].relaxed_constraint == "course_multiplicity"
        assert alternatives[0].description == 'Take "A" 2 times (was 3 times)'
        assert len(alternatives[0].schedules[0].schedule["A"]) == 2

    def test_input_request_unchanged(self, hinting_solver, multiplicity_request):
        hinting_solver.solve(multiplicity_request)
        assert multiplicity_request.course_multiplicity == {"A": 3}


class TestNoSuggestions:
    """Tests for requests no modification can fix."""

    def test_courses_without_slots(self, hinting_solver):
        request = SolveRequest(selected_courses={"A": [], "B": []})
        result = hinting_solver.solve(request)
        assert not result.success
        assert result.hints == []
        assert result.alternatives == []

    def test_search_budget_propagates(self, two_day_request):
        solver = HintingSolver(max_search_nodes=1)
        with pytest.raises(SearchBudgetExceededError):
            solver.solve(two_day_request)


class TestDeterminism:
    """Tests for repeatable hinting output."""

    def test_repeated_calls_match(self, hinting_solver, conflict_request):
        first = hinting_solver.solve(conflict_request).to_dict()
        second = hinting_solver.solve(conflict_request).to_dict()
        assert first == second
