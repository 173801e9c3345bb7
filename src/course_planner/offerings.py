"""Loader for weekly course offering tables (CSV or Excel).

Each row is one weekly session of a course:

    course,day,time,enabled,pair_only
    Salsa 1,MO,18:00,yes,no
    Salsa 1,MI,19:10,no,no

``enabled`` and ``pair_only`` are optional. Disabled rows still count as
known slots of the course and are offered back as hints.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import time as dt_time
from pathlib import Path
from typing import Any

import pandas as pd

from .exceptions import OfferingsError
from .models import SolveRequest, TimeSlot, Weekday
from .utils import parse_time

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ["course", "day", "time"]
TRUE_VALUES = {"1", "true", "yes", "y", "x"}
FALSE_VALUES = {"0", "false", "no", "n", ""}


def _to_minutes(value: Any) -> int | None:
    """Convert a table cell to minutes from midnight."""
    if isinstance(value, dt_time):
        return value.hour * 60 + value.minute
    if isinstance(value, pd.Timestamp):
        return value.hour * 60 + value.minute
    return parse_time(str(value))


def _to_bool(value: Any, default: bool) -> bool:
    if value is None or pd.isna(value):
        return default
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    return default


@dataclass
class Offering:
    """One weekly session of a course."""

    course: str
    slot: TimeSlot
    enabled: bool = True
    pair_only: bool = False


@dataclass
class OfferingsTable:
    """All offerings read from a table, in file order."""

    offerings: list[Offering] = field(default_factory=list)
    source: str = "<dataframe>"
    warnings: list[str] = field(default_factory=list)

    @property
    def course_names(self) -> list[str]:
        return list(dict.fromkeys(o.course for o in self.offerings))

    def existing_courses(self, courses: list[str] | None = None) -> dict[str, list[TimeSlot]]:
        """Every known slot per course, including disabled ones."""
        return self._group(courses, lambda o: True)

    def selected_courses(
        self,
        courses: list[str] | None = None,
        exclude_pair_only: bool = False,
    ) -> dict[str, list[TimeSlot]]:
        """Enabled slots per course, optionally without pair-only sessions."""
        return self._group(
            courses,
            lambda o: o.enabled and not (exclude_pair_only and o.pair_only),
        )

    def _group(
        self, courses: list[str] | None, keep: Callable[[Offering], bool]
    ) -> dict[str, list[TimeSlot]]:
        names = courses if courses is not None else self.course_names
        grouped: dict[str, list[TimeSlot]] = {name: [] for name in names}
        for offering in self.offerings:
            if offering.course not in grouped or not keep(offering):
                continue
            if offering.slot not in grouped[offering.course]:
                grouped[offering.course].append(offering.slot)
        return grouped

    def build_request(
        self,
        courses: list[str],
        multiplicity: dict[str, int] | None = None,
        max_courses_per_day: int | None = None,
        max_empty_slots_between_courses: float | None = None,
        exclude_pair_only: bool = False,
    ) -> SolveRequest:
        """
        Assemble a solve request for the chosen courses.

        Only multiplicities above 1 for chosen courses are kept. Unknown
        course names raise OfferingsError.
        """
        known = set(self.course_names)
        missing = [name for name in courses if name not in known]
        if missing:
            raise OfferingsError(self.source, f"Unknown courses: {', '.join(missing)}")

        kept = {
            name: count
            for name, count in (multiplicity or {}).items()
            if name in courses and count > 1
        }

        return SolveRequest(
            selected_courses=self.selected_courses(courses, exclude_pair_only),
            existing_courses=self.existing_courses(courses),
            max_courses_per_day=max_courses_per_day,
            max_empty_slots_between_courses=max_empty_slots_between_courses,
            course_multiplicity=kept,
        )


class OfferingsLoader:
    """Reads offering tables with pandas."""

    def load(self, file_path: str | Path) -> OfferingsTable:
        """Load an offerings table.

        Args:
            file_path: Path to a .csv, .xlsx or .xls file

        Returns:
            OfferingsTable with valid rows; skipped rows are listed in warnings
        """
        path = Path(file_path)
        if not path.exists():
            raise OfferingsError(str(path), "File not found")

        return self.from_dataframe(self._read(path), source=str(path))

    def from_dataframe(self, df: pd.DataFrame, source: str = "<dataframe>") -> OfferingsTable:
        """Build a table from a DataFrame with course/day/time columns."""
        df = df.rename(columns=lambda c: str(c).strip().lower())

        missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
        if missing:
            raise OfferingsError(source, f"Missing columns: {', '.join(missing)}")

        table = OfferingsTable(source=source)

        for position, (_, row) in enumerate(df.iterrows()):
            # Spreadsheet row number, header is row 1
            line = position + 2
            course = row["course"]
            if pd.isna(course) or not str(course).strip():
                table.warnings.append(f"Row {line}: missing course name")
                continue

            try:
                day = Weekday.parse(row["day"])
            except ValueError:
                table.warnings.append(f"Row {line}: unknown day '{row['day']}'")
                continue

            minutes = None if pd.isna(row["time"]) else _to_minutes(row["time"])
            if minutes is None:
                table.warnings.append(f"Row {line}: invalid time '{row['time']}'")
                continue

            table.offerings.append(
                Offering(
                    course=str(course).strip(),
                    slot=TimeSlot(day=day, minute_of_day=minutes),
                    enabled=_to_bool(row.get("enabled"), True),
                    pair_only=_to_bool(row.get("pair_only"), False),
                )
            )

        for warning in table.warnings:
            logger.warning(warning)

        return table

    def _read(self, path: Path) -> pd.DataFrame:
        suffix = path.suffix.lower()
        try:
            if suffix == ".csv":
                return pd.read_csv(path)
            if suffix in (".xlsx", ".xls"):
                return pd.read_excel(path)
        except (ValueError, OSError) as e:
            raise OfferingsError(str(path), str(e)) from e
        raise OfferingsError(str(path), f"Unsupported file type '{suffix}'")
