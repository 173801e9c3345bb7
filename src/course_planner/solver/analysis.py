"""Failure analysis for infeasible requests."""

from ..constraints import ConstraintBase
from ..models import Course, FailureAnalysis, SlotConflict, TimeSlot


class FailureAnalyzer:
    """Analyzes why a request has no valid schedule."""

    def __init__(
        self,
        courses: dict[str, Course],
        course_names: list[str],
        constraints: list[ConstraintBase],
    ):
        self.courses = courses
        self.course_names = course_names
        self.constraints = constraints

    def analyze(self) -> FailureAnalysis:
        """
        Analyze potential causes of infeasibility.

        Reports courses without slots, courses with a single slot, slots
        offered by several courses at once, and the active constraints.
        """
        analysis = FailureAnalysis(total_courses=len(self.course_names))

        for name in self.course_names:
            slot_count = len(self.courses[name].available_slots)
            if slot_count == 0:
                analysis.courses_with_no_slots.append(name)
            elif slot_count == 1:
                analysis.courses_with_limited_slots.append({"course": name, "slots": slot_count})

        analysis.potential_conflicts = self._find_conflicts()

        analysis.constraint_analysis = [
            {"constraint": c.description, "type": c.type_name} for c in self.constraints
        ]

        return analysis

    def _find_conflicts(self) -> list[SlotConflict]:
        """Group offered slots and report those shared by two or more courses."""
        slot_groups: dict[TimeSlot, list[str]] = {}
        for name in self.course_names:
            for slot in self.courses[name].available_slots:
                owners = slot_groups.setdefault(slot, [])
                if name not in owners:
                    owners.append(name)

        return [
            SlotConflict(slot=slot, conflicting_courses=owners)
            for slot, owners in slot_groups.items()
            if len(owners) > 1
        ]
