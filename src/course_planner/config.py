"""Planner configuration loader."""

import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

from .constants import (
    ALTERNATIVE_SOLUTION_LIMIT,
    DEFAULT_COURSE_DURATION_MINUTES,
    DEFAULT_MAX_SOLUTIONS,
)
from .exceptions import ConfigError, InvalidRequestError
from .hinting import HintingSolver
from .solver import DeclarativeSolver
from .validators import validate_course_duration, validate_max_search_nodes, validate_max_solutions

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("planner.json")


@dataclass
class PlannerConfig:
    """Settings shared by the solvers and the CLI."""

    course_duration_minutes: int = DEFAULT_COURSE_DURATION_MINUTES
    max_solutions: int = DEFAULT_MAX_SOLUTIONS
    alternative_solution_limit: int = ALTERNATIVE_SOLUTION_LIMIT
    max_search_nodes: int | None = None
    debug: bool = False

    def __post_init__(self) -> None:
        try:
            validate_course_duration(self.course_duration_minutes)
            validate_max_solutions(self.max_solutions)
            validate_max_solutions(self.alternative_solution_limit)
            validate_max_search_nodes(self.max_search_nodes)
        except InvalidRequestError as e:
            raise ConfigError(str(e)) from e

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PlannerConfig":
        """Create a config from a dictionary, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def from_file(cls, path: Path | str | None = None) -> "PlannerConfig":
        """
        Load configuration from a JSON file.

        Args:
            path: Path to the JSON file. Defaults to 'planner.json' in the
                  working directory; a missing file yields the defaults.
        """
        config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
        if not config_path.exists():
            logger.debug("No config file at %s, using defaults", config_path)
            return cls()

        try:
            with open(config_path, encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Expected a JSON object in {config_path}")
        return cls.from_dict(data)

    def create_solver(self) -> DeclarativeSolver:
        """Create a declarative solver with these settings."""
        solver = DeclarativeSolver(self.course_duration_minutes, self.max_search_nodes)
        solver.set_debug_mode(self.debug)
        return solver

    def create_hinting_solver(self) -> HintingSolver:
        """Create a hinting solver with these settings."""
        solver = HintingSolver(
            self.course_duration_minutes,
            self.max_search_nodes,
            self.alternative_solution_limit,
        )
        solver.set_debug_mode(self.debug)
        return solver

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
