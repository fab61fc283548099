"""
Unit tests for CSV export
"""
from datetime import date

import pytest

from pki.analytics.weekly import WeeklyReport, generate_weekly_reports
from pki.export import default_export_filename, export_weekly_csv, weekly_reports_to_frame

HEADER = "Week,Total Hours,Productivity Score,Focus Ratio,Completion Rate"


@pytest.mark.unit
class TestWeeklyCsvExport:
    """Test export_weekly_csv."""

    def test_header_and_rows(self):
        reports = [
            WeeklyReport(date(2026, 1, 5), 12.5, 64, 50.0, 66.7),
            WeeklyReport(date(2026, 1, 12), 3.25, 40, 10.2, 0.0),
        ]
        lines = export_weekly_csv(reports).split("\n")

        assert lines == [
            HEADER,
            "Jan 5,12.5,64,50,67",
            "Jan 12,3.3,40,10,0",
        ]

    def test_whole_hours_without_decimal(self):
        reports = [
            WeeklyReport(date(2026, 1, 5), 6.0, 75, 200 / 3, 50.0),
            WeeklyReport(date(2026, 1, 12), 12.5, 64, 50.0, 0.0),
            WeeklyReport(date(2026, 1, 19), 0.0, 0, 0.0, 0.0),
        ]
        lines = export_weekly_csv(reports).split("\n")[1:]

        assert lines == [
            "Jan 5,6,75,67,50",
            "Jan 12,12.5,64,50,0",
            "Jan 19,0,0,0,0",
        ]

    def test_line_count(self, two_week_fixture):
        data = two_week_fixture
        reports = generate_weekly_reports(data["entries"], data["tasks"], data["plans"], 3, today=data["today"])
        content = export_weekly_csv(reports)

        assert len(content.split("\n")) == len(reports) + 1
        assert not content.endswith("\n")

    def test_empty(self):
        assert export_weekly_csv([]) == HEADER

    def test_fields_in_order(self, two_week_fixture):
        data = two_week_fixture
        reports = generate_weekly_reports(data["entries"], data["tasks"], data["plans"], 1, today=data["today"])
        lines = export_weekly_csv(reports).split("\n")[1:]

        assert lines[0].split(",") == ["Jan 5", "6", "75", "67", "50"]
        assert lines[1].split(",") == ["Jan 12", "3.5", "65", "14", "100"]

    def test_write_file(self, tmp_path):
        target = tmp_path / "out" / default_export_filename(date(2026, 1, 14))
        content = export_weekly_csv([WeeklyReport(date(2026, 1, 5))], target)

        assert target.name == "weekly-report-2026-01-14.csv"
        assert target.read_text(encoding="utf-8") == content

    def test_frame_columns(self):
        df = weekly_reports_to_frame([WeeklyReport(date(2026, 1, 5))])
        assert list(df.columns) == HEADER.split(",")
        assert len(df) == 1
