"""
Timetable layout for logged time.
Places log entries on an hour-by-day grid; geometry only.
"""

import math
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, List

from ..metrics.points import parse_time_to_minutes
from ..models.records import LogEntry


@dataclass(frozen=True)
class TimeBlock:
    """A log entry positioned on the timetable."""
    entry: LogEntry
    start_hour: float
    duration: int
    date: date

    @property
    def end_hour(self) -> float:
        return self.start_hour + self.duration / 60

    def covers_hour(self, hour: int) -> bool:
        """Whether the block overlaps the hour cell [hour, hour + 1)."""
        return math.floor(self.start_hour) <= hour < math.ceil(self.end_hour)


@dataclass(frozen=True)
class BlockPosition:
    """Vertical placement within an hour cell, in percent."""
    top: float
    height: float


def decimal_hour(time_str: str) -> float:
    """'09:30' -> 9.5"""
    return parse_time_to_minutes(time_str) / 60


def build_time_blocks(entries: Iterable[LogEntry]) -> List[TimeBlock]:
    """Convert dated entries into time blocks; entries without a date are skipped."""
    return [
        TimeBlock(
            entry=entry,
            start_hour=decimal_hour(entry.start_time),
            duration=entry.duration,
            date=entry.date,
        )
        for entry in entries
        if entry.date is not None
    ]


def blocks_for_day_and_hour(blocks: Iterable[TimeBlock], day: date, hour: int) -> List[TimeBlock]:
    return [b for b in blocks if b.date == day and b.covers_hour(hour)]


def block_position(block: TimeBlock) -> BlockPosition:
    """
    Position of a block inside the cell of its starting hour.

    top is the fractional part of the start hour; height is the duration,
    clipped so the block does not run past the bottom of the cell.
    """
    top = (block.start_hour - math.floor(block.start_hour)) * 100
    height = min(block.duration / 60 * 100, 100 - top)
    return BlockPosition(top=top, height=height)


def week_days(day: date) -> List[date]:
    """The seven days of the Monday-start week containing day."""
    monday = day - timedelta(days=day.weekday())
    return [monday + timedelta(days=i) for i in range(7)]
