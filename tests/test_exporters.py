"""Tests for exporters."""

import json

import pandas as pd
import pytest

from course_planner import DeclarativeSolver, HintingSolver, SolveRequest
from course_planner.exceptions import InvalidRequestError
from course_planner.exporters import (
    CSVExporter,
    ExcelExporter,
    JSONExporter,
    get_exporter,
    load_request,
    save_request,
    schedule_frame,
)


@pytest.fixture
def solutions(two_day_request):
    return DeclarativeSolver().find_all_solutions(two_day_request)


class TestGetExporter:
    """Tests for get_exporter."""

    def test_known_formats(self):
        assert isinstance(get_exporter("json"), JSONExporter)
        assert isinstance(get_exporter("CSV"), CSVExporter)
        assert isinstance(get_exporter("excel"), ExcelExporter)

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown format"):
            get_exporter("xml")


class TestJSONExporter:
    """Tests for JSONExporter."""

    def test_export_solution_set(self, tmp_path, solutions):
        output = JSONExporter().export(solutions, tmp_path / "out" / "schedules.json")
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["success"] is True
        assert len(data["schedules"]) == 4
        assert data["schedules"][0]["schedule"]["A"] == [
            {"day": "MO", "minute_of_day": 1080, "time": "18:00"}
        ]

    def test_export_hinting_failure(self, tmp_path, conflict_request):
        result = HintingSolver().solve(conflict_request)
        output = JSONExporter().export(result, tmp_path / "hints.json")
        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["success"] is False
        assert [h["type"] for h in data["hints"]] == ["add_slots", "remove_course", "remove_course"]
        assert data["alternatives"][0]["relaxed_constraint"] == "additional_slots"


class TestTabularExporters:
    """Tests for CSV and Excel exporters."""

    def test_schedule_frame(self, solutions):
        df = schedule_frame(solutions)
        assert list(df.columns) == ["rank", "score", "days", "course", "day", "time", "minute_of_day"]
        # four schedules, two courses each
        assert len(df) == 8
        assert df.iloc[0]["course"] == "A"
        assert df.iloc[0]["time"] == "18:00"

    def test_schedule_frame_failed_result(self):
        request = SolveRequest.from_dict({"selectedCourses": {"A": []}})
        df = schedule_frame(DeclarativeSolver().solve(request))
        assert df.empty
        assert "course" in df.columns

    def test_csv_export(self, tmp_path, solutions):
        output = CSVExporter().export(solutions, tmp_path / "schedules.csv")
        df = pd.read_csv(output)
        assert len(df) == 8
        assert sorted(df["rank"].unique()) == [1, 2, 3, 4]

    def test_excel_export(self, tmp_path, solutions):
        output = ExcelExporter().export(solutions, tmp_path / "schedules.xlsx")
        df = pd.read_excel(output, sheet_name="Schedules")
        assert len(df) == 8
        assert set(df["day"]) == {"MO", "DI"}


class TestRequestFiles:
    """Tests for loading and saving requests."""

    def test_round_trip(self, tmp_path, conflict_request):
        path = save_request(conflict_request, tmp_path / "request.json")
        assert load_request(path) == conflict_request

    def test_load_camel_case(self, tmp_path):
        path = tmp_path / "request.json"
        path.write_text(
            json.dumps(
                {
                    "selectedCourses": {"Salsa": [{"day": "MO", "slot": 1080}]},
                    "maxCoursesPerDay": 2,
                }
            )
        )
        request = load_request(path)
        assert request.course_names == ["Salsa"]
        assert request.max_courses_per_day == 2

    def test_load_invalid_json(self, tmp_path):
        path = tmp_path / "request.json"
        path.write_text("{")
        with pytest.raises(InvalidRequestError, match="Invalid JSON"):
            load_request(path)
