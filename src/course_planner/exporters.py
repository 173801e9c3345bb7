"""Export functionality for planner results."""

import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Protocol

import pandas as pd

from .exceptions import InvalidRequestError
from .models import HintingResult, Solution, SolutionSet, SolveRequest, SolveResult


class Exportable(Protocol):
    def to_dict(self) -> dict[str, Any]: ...


class BaseExporter(ABC):
    """Base class for exporters."""

    @abstractmethod
    def export(self, result: Exportable, output_path: str | Path) -> Path:
        """Export a result to file.

        Args:
            result: Result to export
            output_path: Path to output file

        Returns:
            Path of the written file
        """
        pass


class JSONExporter(BaseExporter):
    """Export to JSON format."""

    def __init__(self, indent: int = 2, ensure_ascii: bool = False):
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def export(self, result: Exportable, output_path: str | Path) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(
                result.to_dict(),
                f,
                indent=self.indent,
                ensure_ascii=self.ensure_ascii,
            )
        return output_path


def _ranked_schedules(result: Exportable) -> list[Solution]:
    if isinstance(result, (SolutionSet, HintingResult)):
        return result.schedules
    if isinstance(result, SolveResult):
        return [result.solution] if result.solution is not None else []
    raise TypeError(f"Cannot export schedules from {type(result).__name__}")


SCHEDULE_COLUMNS = ["rank", "score", "days", "course", "day", "time", "minute_of_day"]


def schedule_frame(result: Exportable) -> pd.DataFrame:
    """Flatten ranked schedules into one row per assigned slot."""
    rows = []
    for rank, solution in enumerate(_ranked_schedules(result), start=1):
        for course, slots in solution.schedule.items():
            for slot in sorted(slots, key=lambda s: s.sort_key):
                rows.append(
                    {
                        "rank": rank,
                        "score": solution.score,
                        "days": solution.days,
                        "course": course,
                        "day": slot.day.value,
                        "time": slot.time,
                        "minute_of_day": slot.minute_of_day,
                    }
                )
    return pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)


class CSVExporter(BaseExporter):
    """Export schedules to CSV, one row per assigned slot."""

    def export(self, result: Exportable, output_path: str | Path) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        schedule_frame(result).to_csv(output_path, index=False)
        return output_path


class ExcelExporter(BaseExporter):
    """Export schedules to an Excel workbook."""

    def export(self, result: Exportable, output_path: str | Path) -> Path:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
            schedule_frame(result).to_excel(writer, sheet_name="Schedules", index=False)
        return output_path


def get_exporter(format: str) -> BaseExporter:
    """Get exporter by format name.

    Args:
        format: Format name ('json', 'csv' or 'excel')

    Returns:
        Exporter instance
    """
    exporters = {
        "json": JSONExporter,
        "csv": CSVExporter,
        "excel": ExcelExporter,
    }

    exporter_class = exporters.get(format.lower())
    if exporter_class is None:
        raise ValueError(f"Unknown format: {format}. Available: {', '.join(exporters.keys())}")

    return exporter_class()


def load_request(input_path: Path | str) -> SolveRequest:
    """Load a solve request from a JSON file.

    Args:
        input_path: Path to request JSON file

    Returns:
        Parsed SolveRequest
    """
    with open(input_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidRequestError(f"Invalid JSON in {input_path}: {e}") from e
    return SolveRequest.from_dict(data)


def save_request(request: SolveRequest, output_path: Path | str) -> Path:
    """Write a solve request to a JSON file."""
    return JSONExporter().export(request, output_path)
