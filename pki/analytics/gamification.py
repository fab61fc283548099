"""
Leveling & Streaks Module
Maps accumulated XP to levels and keeps per-profile consecutive-day streaks.
"""

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..api.store import ObjectStore
from .. import config
from ..config import XP_LEVEL_BASE, XP_LEVEL_GROWTH
from ..logger import setup_logger
from ..metrics.points import round_half_up
from ..models.records import Streak, StreakType

logger = setup_logger(__name__)

STREAKS_STORE = 'streaks'


@dataclass(frozen=True)
class LevelProgress:
    """Where a total XP value sits within its level."""
    level: int
    xp_into_level: int
    xp_for_next_level: int

    @property
    def fraction(self) -> float:
        return self.xp_into_level / self.xp_for_next_level if self.xp_for_next_level > 0 else 0.0


def xp_required_for_level(level: int) -> int:
    """
    XP needed to complete a level.
    Uses geometric scaling: each level needs 15% more XP than the last.

    Raises:
        ValueError: If level is below 1
    """
    if level < 1:
        raise ValueError("Level must be at least 1")
    return round_half_up(XP_LEVEL_BASE * XP_LEVEL_GROWTH ** (level - 1))


def level_from_total_xp(total_xp: int) -> int:
    """
    Calculate level from total XP.

    Level L is reached once the XP of levels 1..L-1 has been accumulated,
    so 0-299 XP is level 1 and 300 XP is level 2.
    """
    return level_progress(total_xp).level


def level_progress(total_xp: int) -> LevelProgress:
    """
    Calculate level and progress within it.

    Returns:
        LevelProgress(level, xp_into_level, xp_for_next_level)
    """
    level = 1
    remaining_xp = max(0, total_xp)
    xp_for_next_level = xp_required_for_level(level)

    while remaining_xp >= xp_for_next_level:
        remaining_xp -= xp_for_next_level
        level += 1
        xp_for_next_level = xp_required_for_level(level)

    return LevelProgress(level, remaining_xp, xp_for_next_level)


class StreakTracker:
    """
    Keeps consecutive-day counters per (profile, streak type) in a store.

    By default every recorded event adds one to the current streak, even
    when days were skipped in between. With reset_on_gap, repeated events on
    the same day count once and a skipped day restarts the streak at 1.
    Leaving reset_on_gap unset reads PKI_STREAK_RESET_ON_GAP when the
    tracker is created.

    Not safe for concurrent use on the same profile: record() is an
    unguarded read-modify-write on the store.
    """

    def __init__(self, store: ObjectStore, reset_on_gap: Optional[bool] = None):
        self.store = store
        if reset_on_gap is None:
            reset_on_gap = config.streak_reset_on_gap()
        self.reset_on_gap = reset_on_gap

    def get(self, profile_id: int, streak_type: StreakType) -> Optional[Streak]:
        record = self.store.get(STREAKS_STORE, [profile_id, StreakType(streak_type).value])
        return Streak.from_dict(record) if record else None

    def get_count(self, profile_id: int, streak_type: StreakType) -> int:
        """Current count, 0 when the streak was never started."""
        streak = self.get(profile_id, streak_type)
        return streak.current_count if streak else 0

    def _next_count(self, existing: Optional[Streak], today: date) -> int:
        if existing is None:
            return 1
        if not self.reset_on_gap or existing.last_log_date is None:
            return existing.current_count + 1

        if existing.last_log_date == today:
            return existing.current_count
        if existing.last_log_date == today - timedelta(days=1):
            return existing.current_count + 1
        return 1

    def record(self, profile_id: int, streak_type: StreakType, today: Optional[date] = None) -> Streak:
        """
        Register a qualifying event and persist the updated streak.

        Args:
            profile_id: Owning profile
            streak_type: dailyLog or deepWork
            today: Day of the event (defaults to the current date)

        Returns:
            The updated Streak
        """
        today = today or date.today()
        existing = self.get(profile_id, streak_type)

        current = self._next_count(existing, today)
        longest = max(existing.longest_count if existing else 0, current)

        streak = Streak(
            profile_id=profile_id,
            streak_type=streak_type,
            current_count=current,
            longest_count=longest,
            last_log_date=today,
        )
        self.store.put(STREAKS_STORE, streak.to_dict())

        logger.debug(
            f"Streak {streak.streak_type.value} for profile {profile_id}: "
            f"current={current}, longest={longest}"
        )
        return streak
