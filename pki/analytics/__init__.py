"""
Analytics subpackage: leveling, streaks, weekly reports and timetable layout.
"""

from .gamification import (
    xp_required_for_level,
    level_from_total_xp,
    level_progress,
    LevelProgress,
    StreakTracker,
)

from .weekly import (
    generate_weekly_reports,
    weekly_chart_rows,
    get_metric_trend,
    WeeklyReport,
)

from .timetable import (
    build_time_blocks,
    blocks_for_day_and_hour,
    block_position,
    week_days,
    TimeBlock,
    BlockPosition,
)

__all__ = [
    # Gamification
    "xp_required_for_level",
    "level_from_total_xp",
    "level_progress",
    "LevelProgress",
    "StreakTracker",
    # Weekly reports
    "generate_weekly_reports",
    "weekly_chart_rows",
    "get_metric_trend",
    "WeeklyReport",
    # Timetable
    "build_time_blocks",
    "blocks_for_day_and_hour",
    "block_position",
    "week_days",
    "TimeBlock",
    "BlockPosition",
]
