"""Backtracking solver components."""

from .analysis import FailureAnalyzer
from .builder import ConstraintBuilder
from .declarative import DeclarativeSolver
from .search import BacktrackingSearch, slot_combinations

__all__ = [
    "BacktrackingSearch",
    "ConstraintBuilder",
    "DeclarativeSolver",
    "FailureAnalyzer",
    "slot_combinations",
]
