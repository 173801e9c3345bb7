"""Base class for constraint implementations."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..models import Schedule


class ConstraintBase(ABC):
    """Abstract base class for schedule constraints.

    Constraints are stateless predicates over a (possibly partial) schedule.
    """

    @abstractmethod
    def is_satisfied(self, schedule: "Schedule") -> bool:
        """
        Check a partial schedule against the constraint.

        Args:
            schedule: Schedule with some or all courses assigned.

        Returns:
            True if the constraint holds for every assigned course.
        """
        pass

    def is_complete_satisfied(self, schedule: "Schedule", all_course_names: list[str]) -> bool:
        """
        Check a fully assigned schedule against the constraint.

        Args:
            schedule: Schedule at the leaf of the search.
            all_course_names: Every course of the request, assigned or not.
        """
        return self.is_satisfied(schedule)

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of the constraint."""
        pass

    @property
    def type_name(self) -> str:
        return type(self).__name__
