"""Test fixtures for course planner tests."""

import pandas as pd
import pytest

from course_planner import DeclarativeSolver, HintingSolver, SolveRequest


@pytest.fixture
def solver():
    """Declarative solver with the default 70 minute course duration."""
    return DeclarativeSolver()


@pytest.fixture
def hinting_solver():
    """Hinting solver with default settings."""
    return HintingSolver()


@pytest.fixture
def two_day_request():
    """Two courses, each offered twice on its own day."""
    return SolveRequest.from_dict(
        {
            "selectedCourses": {
                "A": [{"day": "MO", "time": "18:00"}, {"day": "MO", "time": "19:00"}],
                "B": [{"day": "DI", "time": "18:00"}, {"day": "DI", "time": "19:00"}],
            }
        }
    )


@pytest.fixture
def saturday_request():
    """One course offered six times on Saturday, to be taken three times."""
    return SolveRequest.from_dict(
        {
            "selectedCourses": {
                "A": [
                    {"day": "SA", "time": "09:00"},
                    {"day": "SA", "time": "10:10"},
                    {"day": "SA", "time": "11:20"},
                    {"day": "SA", "time": "12:30"},
                    {"day": "SA", "time": "13:40"},
                    {"day": "SA", "time": "14:50"},
                ]
            },
            "courseMultiplicity": {"A": 3},
        }
    )


@pytest.fixture
def conflict_request():
    """Two courses sharing their only selected slot; A has more known slots."""
    return SolveRequest.from_dict(
        {
            "selectedCourses": {
                "A": [{"day": "MO", "slot": 1080}],
                "B": [{"day": "MO", "slot": 1080}],
            },
            "existingCourses": {
                "A": [
                    {"day": "MO", "slot": 1080},
                    {"day": "DI", "slot": 1080},
                    {"day": "MI", "slot": 1080},
                    {"day": "DO", "slot": 1080},
                    {"day": "FR", "slot": 1080},
                ],
                "B": [{"day": "MO", "slot": 1080}],
            },
        }
    )


@pytest.fixture
def offerings_frame():
    """Weekly offerings table as read from a spreadsheet."""
    return pd.DataFrame(
        {
            "course": ["Salsa 1", "Salsa 1", "Salsa 1", "Tango", "Tango", "Discofox"],
            "day": ["MO", "MI", "FR", "MO", "DI", "SA"],
            "time": ["18:00", "19:10", "18:00", "18:00", "20:20", "14:00"],
            "enabled": ["yes", "no", "yes", "yes", "yes", "yes"],
            "pair_only": ["no", "no", "no", "no", "yes", "no"],
        }
    )


@pytest.fixture
def offerings_csv(tmp_path, offerings_frame):
    """Offerings table written to a CSV file."""
    file_path = tmp_path / "offerings.csv"
    offerings_frame.to_csv(file_path, index=False)
    return file_path
