"""Custom exceptions for the course planner."""


class PlannerError(Exception):
    """Base exception for planner errors."""

    pass


class InvalidRequestError(PlannerError):
    """A solve request is malformed."""

    def __init__(self, message: str, field: str | None = None, course: str | None = None):
        self.field = field
        self.course = course
        location = ""
        if field:
            location += f" in field '{field}'"
        if course is not None:
            location += f" for course '{course}'"
        super().__init__(f"Invalid request{location}: {message}")


class InvalidSlotError(InvalidRequestError):
    """A time slot could not be parsed."""

    def __init__(self, value: object, reason: str, course: str | None = None):
        self.value = value
        super().__init__(f"{reason} (got {value!r})", field="slot", course=course)


class ConfigError(PlannerError):
    """Planner configuration is invalid."""

    pass


class OfferingsError(PlannerError):
    """Offerings table could not be read."""

    def __init__(self, path: str, message: str):
        self.path = path
        super().__init__(f"Cannot load offerings from '{path}': {message}")


class SearchBudgetExceededError(PlannerError):
    """Backtracking search examined more nodes than allowed."""

    def __init__(self, max_nodes: int):
        self.max_nodes = max_nodes
        super().__init__(
            f"Search aborted after examining {max_nodes} partial schedules. "
            "Narrow the slot selection or raise max_search_nodes."
        )
