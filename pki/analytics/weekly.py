"""
Weekly Reports Module
Buckets logged time, tasks and plans into Monday-start weeks, scores each
week and derives rule-based insights and trends.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Iterable, List, Optional, Sequence

import pandas as pd

from ..config import (
    HIGH_FOCUS_PCT,
    HIGH_VOLUME_HOURS,
    LOW_FOCUS_PCT,
    LOW_VOLUME_HOURS,
    TOP_ACTIVITIES_LIMIT,
    TREND_THRESHOLD_PCT,
)
from ..logger import setup_logger
from ..metrics.composite import compute_composite_metrics
from ..metrics.points import round_half_up
from ..models.records import LogEntry, Plan, Task

logger = setup_logger(__name__)

ENTRY_COLUMNS = ['date', 'start_time', 'duration', 'category']


@dataclass
class WeeklyReport:
    """
    Aggregated metrics for one Monday-start week.

    Attributes:
        week_start: Monday of the week
        total_hours: Logged hours
        productivity_score: Composite score (0-100) of the week's data
        focus_ratio: Deep work share of logged time, in percent
        completion_rate: Completed share of all tasks, in percent
        top_activities: Up to three {'category', 'hours'} dicts, most hours first
        insights: Generated messages in rule order
    """
    week_start: date
    total_hours: float = 0.0
    productivity_score: int = 0
    focus_ratio: float = 0.0
    completion_rate: float = 0.0
    top_activities: List[dict] = field(default_factory=list)
    insights: List[str] = field(default_factory=list)

    @property
    def week_end(self) -> date:
        return self.week_start + timedelta(days=6)


def start_of_week(day: date) -> date:
    """Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def week_starts(num_weeks: int, today: Optional[date] = None) -> List[date]:
    """
    Mondays of every week between today - num_weeks weeks and today.

    Returns:
        Week starts in chronological order (num_weeks + 1 values)
    """
    today = today or date.today()
    first = start_of_week(today - timedelta(weeks=num_weeks))
    last = start_of_week(today)
    return [d.date() for d in pd.date_range(first, last, freq='7D')]


def entries_to_frame(entries: Iterable[LogEntry]) -> pd.DataFrame:
    """Build a DataFrame with one row per entry, in input order."""
    rows = [
        {
            'date': e.date,
            'start_time': e.start_time,
            'duration': e.duration,
            'category': e.category,
        }
        for e in entries
    ]
    return pd.DataFrame(rows, columns=ENTRY_COLUMNS)


def get_top_activities(df: pd.DataFrame, limit: int = TOP_ACTIVITIES_LIMIT) -> List[dict]:
    """
    Categories with the most logged hours.
    Ties keep the order in which categories first appear.
    """
    if df.empty:
        return []

    minutes = df.groupby('category', sort=False)['duration'].sum()
    ranked = sorted(minutes.items(), key=lambda item: item[1], reverse=True)
    return [
        {'category': category, 'hours': float(total) / 60}
        for category, total in ranked[:limit]
    ]


def get_peak_hour(df: pd.DataFrame) -> Optional[int]:
    """Start hour with the most logged minutes; earliest hour wins ties."""
    if df.empty:
        return None

    hours = df['start_time'].str.split(':').str[0].astype(int)
    hourly = df['duration'].groupby(hours).sum()
    return int(hourly.idxmax())


def generate_insights(df: pd.DataFrame, total_hours: float, focus_ratio: float) -> List[str]:
    """
    Rule-based weekly insights.

    Args:
        df: The week's entries (see entries_to_frame)
        total_hours: Logged hours in the week
        focus_ratio: Deep work share in percent

    Returns:
        Peak hour, focus and volume messages, each only when its rule fires
    """
    insights = []

    peak_hour = get_peak_hour(df)
    if peak_hour is not None:
        insights.append(f"Peak productivity: {peak_hour}:00 - {peak_hour + 1}:00")

    if focus_ratio > HIGH_FOCUS_PCT:
        insights.append("Excellent focus ratio this week!")
    elif focus_ratio < LOW_FOCUS_PCT:
        insights.append("Consider scheduling more deep work sessions")

    if total_hours > HIGH_VOLUME_HOURS:
        insights.append("High activity week - ensure adequate rest")
    elif total_hours < LOW_VOLUME_HOURS:
        insights.append("Light activity week - opportunity to increase engagement")

    return insights


def build_weekly_report(
    week_start: date,
    entries: Sequence[LogEntry],
    tasks: Sequence[Task],
    plans: Sequence[Plan],
) -> WeeklyReport:
    """Score one week; entries, tasks and plans outside the week are ignored."""
    week_end = week_start + timedelta(days=6)

    def in_week(day: Optional[date]) -> bool:
        return day is not None and week_start <= day <= week_end

    week_entries = [e for e in entries if in_week(e.date)]
    week_tasks = [t for t in tasks if in_week(t.date)]
    week_plans = [p for p in plans if in_week(p.date)]

    df = entries_to_frame(week_entries)
    total_hours = float(df['duration'].sum()) / 60 if not df.empty else 0.0

    metrics = compute_composite_metrics(
        week_tasks, week_entries, week_plans[0] if week_plans else None
    )
    focus_ratio = metrics.focus_ratio * 100

    completed = sum(1 for t in week_tasks if t.is_complete)
    completion_rate = completed / len(week_tasks) * 100 if week_tasks else 0.0

    return WeeklyReport(
        week_start=week_start,
        total_hours=total_hours,
        productivity_score=metrics.composite_score,
        focus_ratio=focus_ratio,
        completion_rate=completion_rate,
        top_activities=get_top_activities(df),
        insights=generate_insights(df, total_hours, focus_ratio),
    )


def generate_weekly_reports(
    entries: Iterable[LogEntry],
    tasks: Iterable[Task],
    plans: Iterable[Plan],
    num_weeks: int,
    today: Optional[date] = None,
) -> List[WeeklyReport]:
    """
    Generate one report per week over the last num_weeks weeks.

    Args:
        entries: Log entries with their date set
        tasks: Tasks of the profile
        plans: Plans of the profile
        num_weeks: How many weeks to look back from today
        today: Reference day (defaults to the current date)

    Returns:
        Reports in chronological order, including the current week
    """
    entries = list(entries)
    tasks = list(tasks)
    plans = list(plans)

    undated = sum(1 for e in entries if e.date is None)
    if undated:
        logger.debug(f"Skipping {undated} entries without a date")

    reports = [
        build_weekly_report(week_start, entries, tasks, plans)
        for week_start in week_starts(num_weeks, today)
    ]

    logger.debug(f"Generated {len(reports)} weekly reports")
    return reports


def format_week_label(day: date) -> str:
    """Short label such as 'Jan 5'."""
    return f"{day.strftime('%b')} {day.day}"


def weekly_chart_rows(reports: Iterable[WeeklyReport]) -> List[dict]:
    """
    Rounded per-week values for charts and CSV export.

    Returns:
        Dicts with week, total_hours (1 decimal), productivity_score,
        focus_ratio and completion_rate (whole percents)
    """
    return [
        {
            'week': format_week_label(r.week_start),
            'total_hours': round_half_up(r.total_hours * 10) / 10,
            'productivity_score': r.productivity_score,
            'focus_ratio': round_half_up(r.focus_ratio),
            'completion_rate': round_half_up(r.completion_rate),
        }
        for r in reports
    ]


def _metric_value(point, metric: str) -> float:
    if isinstance(point, Mapping):
        return point[metric]
    return getattr(point, metric)


def calculate_percentage_change(current: float, previous: float) -> float:
    """
    Percentage change between two values.
    A zero previous value counts as +100% when current is positive.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def get_metric_trend(series: Sequence, metric: str, window: int = 2) -> str:
    """
    Direction of a metric over the last window points.

    Args:
        series: Chart rows or WeeklyReport objects, oldest first
        metric: Name of the metric to compare
        window: Number of trailing points to consider

    Returns:
        'up' (> +5%), 'down' (< -5%) or 'stable'; 'stable' when the series
        is shorter than window
    """
    if window < 1 or len(series) < window:
        return 'stable'

    recent = series[-window:]
    first = _metric_value(recent[0], metric)
    last = _metric_value(recent[-1], metric)

    change = calculate_percentage_change(last, first)

    if change > TREND_THRESHOLD_PCT:
        return 'up'
    if change < -TREND_THRESHOLD_PCT:
        return 'down'
    return 'stable'
