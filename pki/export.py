"""
Export functionality for weekly reports.
Writes per-week rows as CSV.
"""

from datetime import date
from pathlib import Path
from typing import Iterable, Optional

import pandas as pd

from .analytics.weekly import WeeklyReport, weekly_chart_rows
from .logger import setup_logger

logger = setup_logger(__name__)

CSV_COLUMNS = {
    'week': 'Week',
    'total_hours': 'Total Hours',
    'productivity_score': 'Productivity Score',
    'focus_ratio': 'Focus Ratio',
    'completion_rate': 'Completion Rate',
}


def default_export_filename(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"weekly-report-{day.isoformat()}.csv"


def weekly_reports_to_frame(reports: Iterable[WeeklyReport]) -> pd.DataFrame:
    """One row per week with the CSV column names."""
    rows = weekly_chart_rows(reports)
    df = pd.DataFrame(rows, columns=list(CSV_COLUMNS))
    return df.rename(columns=CSV_COLUMNS)


def export_weekly_csv(reports: Iterable[WeeklyReport], filepath: Optional[str | Path] = None) -> str:
    """
    Export weekly reports as CSV.

    Args:
        reports: Weekly reports, oldest first
        filepath: Optional path to also write the CSV to

    Returns:
        CSV text: a header line plus one line per week, no trailing newline
    """
    df = weekly_reports_to_frame(reports)
    # Whole hours are written as '6', not '6.0'
    content = df.to_csv(index=False, float_format='%g', lineterminator='\n').rstrip('\n')

    if filepath is not None:
        try:
            filepath = Path(filepath)
            filepath.parent.mkdir(parents=True, exist_ok=True)
            filepath.write_text(content, encoding='utf-8')
            logger.info(f"Exported {len(df)} weekly rows to {filepath.name}")
        except OSError as e:
            logger.error(f"Failed to export CSV: {e}")
            raise

    return content
