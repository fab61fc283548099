"""
Point calculations for logged time.
Converts durations into XP and handles 'HH:MM' time arithmetic.
"""

import math
from typing import Iterable

from ..models.category import get_category
from ..models.records import LogEntry

MINUTES_PER_DAY = 24 * 60


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves toward +infinity (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def compute_points(duration_minutes: float, category_id: str) -> int:
    """
    Calculate XP for a logged duration.

    Args:
        duration_minutes: Logged minutes
        category_id: Activity category id

    Returns:
        round((duration / 30) * rate); 0 for an unknown category
    """
    category = get_category(category_id)
    if category is None:
        return 0

    return round_half_up((duration_minutes / 30) * category.points_per_30_min)


def sum_xp(entries: Iterable[LogEntry]) -> int:
    """Total of the points stored on each entry."""
    return sum(entry.points for entry in entries)


def parse_time_to_minutes(time_str: str) -> int:
    """
    Parse 'HH:MM' into minutes since midnight.

    Raises:
        ValueError: If the string is not a valid 24h time
    """
    try:
        hours, minutes = (int(part) for part in time_str.split(':'))
    except (AttributeError, ValueError) as e:
        raise ValueError(f"Invalid time '{time_str}', expected HH:MM") from e

    if not (0 <= hours < 24 and 0 <= minutes < 60):
        raise ValueError(f"Invalid time '{time_str}', expected HH:MM")

    return hours * 60 + minutes


def compute_duration(start_time: str, end_time: str) -> int:
    """
    Minutes between two 'HH:MM' times.
    An end time earlier than the start time is taken to be on the next day.

    Examples:
        compute_duration('09:00', '10:30') -> 90
        compute_duration('23:30', '00:15') -> 45
    """
    start = parse_time_to_minutes(start_time)
    end = parse_time_to_minutes(end_time)

    if end >= start:
        return end - start
    return (MINUTES_PER_DAY - start) + end


def format_duration(minutes: int) -> str:
    """
    Format minutes for display.

    Examples:
        format_duration(45) -> '45m'
        format_duration(120) -> '2h'
        format_duration(90) -> '1h 30m'
    """
    hours, mins = divmod(int(minutes), 60)

    if hours == 0:
        return f"{mins}m"
    if mins == 0:
        return f"{hours}h"
    return f"{hours}h {mins}m"
