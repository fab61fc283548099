"""
Report service - Weekly reports, trends and CSV export for a profile.
Reads every log, task and plan of the profile from the store.
"""

from datetime import date
from pathlib import Path
from typing import List, Optional

from ..analytics.weekly import (
    WeeklyReport,
    generate_weekly_reports,
    get_metric_trend,
    weekly_chart_rows,
)
from ..api.store import ObjectStore
from ..config import DEFAULT_REPORT_WEEKS
from ..export import export_weekly_csv
from ..logger import log_entries_stats, setup_logger
from ..models.records import Log, LogEntry, Plan, Task

logger = setup_logger(__name__)

TREND_METRICS = ('total_hours', 'productivity_score', 'focus_ratio', 'completion_rate')


class ReportService:
    """
    Service layer for multi-week analytics.
    All methods are read-only and can be repeated freely.
    """

    def __init__(self, store: ObjectStore):
        self.store = store

    def get_entries(self, profile_id: int) -> List[LogEntry]:
        """All of a profile's entries, each carrying the date of its log."""
        entries = []
        for record in self.store.get_all('logs'):
            if record.get('profileId') != profile_id:
                continue
            entries.extend(Log.from_dict(record).entries)

        log_entries_stats(entries, logger, name=f"Profile {profile_id} entries")
        return entries

    def get_tasks(self, profile_id: int) -> List[Task]:
        return [
            Task.from_dict(r)
            for r in self.store.get_all('tasks')
            if r.get('profileId') == profile_id
        ]

    def get_plans(self, profile_id: int) -> List[Plan]:
        return [
            Plan.from_dict(r)
            for r in self.store.get_all('plans')
            if r.get('profileId') == profile_id
        ]

    def get_weekly_reports(
        self,
        profile_id: int,
        num_weeks: int = DEFAULT_REPORT_WEEKS,
        today: Optional[date] = None,
    ) -> List[WeeklyReport]:
        """
        Get weekly reports for a profile.

        Args:
            profile_id: Profile to report on
            num_weeks: Weeks to look back
            today: Reference day (defaults to the current date)

        Returns:
            Chronological list of WeeklyReport
        """
        return generate_weekly_reports(
            self.get_entries(profile_id),
            self.get_tasks(profile_id),
            self.get_plans(profile_id),
            num_weeks,
            today=today,
        )

    def get_trends(
        self,
        profile_id: int,
        num_weeks: int = DEFAULT_REPORT_WEEKS,
        today: Optional[date] = None,
        window: int = 2,
    ) -> dict:
        """Trend direction of each chart metric over the last window weeks."""
        rows = weekly_chart_rows(self.get_weekly_reports(profile_id, num_weeks, today))
        return {metric: get_metric_trend(rows, metric, window) for metric in TREND_METRICS}

    def export_csv(
        self,
        profile_id: int,
        num_weeks: int = DEFAULT_REPORT_WEEKS,
        today: Optional[date] = None,
        filepath: Optional[str | Path] = None,
    ) -> str:
        """Weekly reports of a profile as CSV text (optionally written to filepath)."""
        reports = self.get_weekly_reports(profile_id, num_weeks, today)
        return export_weekly_csv(reports, filepath)
