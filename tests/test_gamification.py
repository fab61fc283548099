"""
Unit tests for leveling and streaks
"""
from datetime import date, timedelta

import pytest

from pki.analytics.gamification import (
    StreakTracker,
    level_from_total_xp,
    level_progress,
    xp_required_for_level,
)
from pki.models.records import StreakType


@pytest.mark.unit
class TestLeveling:
    """Test the XP curve and level lookup."""

    def test_first_levels(self):
        assert xp_required_for_level(1) == 300
        assert xp_required_for_level(2) == 345
        assert xp_required_for_level(3) == 397

    def test_strictly_increasing(self):
        values = [xp_required_for_level(level) for level in range(1, 60)]
        assert all(b > a for a, b in zip(values, values[1:]))

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            xp_required_for_level(0)

    @pytest.mark.parametrize("total_xp,expected", [
        (0, 1),
        (299, 1),
        (300, 2),
        (644, 2),
        (645, 3),
        (-50, 1),
    ])
    def test_level_boundaries(self, total_xp, expected):
        assert level_from_total_xp(total_xp) == expected

    def test_level_matches_cumulative_thresholds(self):
        cumulative = 0
        for level in range(1, 20):
            assert level_from_total_xp(cumulative) == level
            cumulative += xp_required_for_level(level)
            assert level_from_total_xp(cumulative - 1) == level

    def test_level_progress(self):
        progress = level_progress(400)

        assert progress.level == 2
        assert progress.xp_into_level == 100
        assert progress.xp_for_next_level == 345
        assert progress.fraction == pytest.approx(100 / 345)


@pytest.mark.unit
class TestStreakTracker:
    """Test StreakTracker against the in-memory store."""

    def test_first_two_calls(self, memory_store):
        tracker = StreakTracker(memory_store, reset_on_gap=False)
        day = date(2026, 1, 5)

        first = tracker.record(1, StreakType.DAILY_LOG, day)
        second = tracker.record(1, StreakType.DAILY_LOG, day)

        assert [first.current_count, second.current_count] == [1, 2]
        assert second.longest_count == 2
        assert second.last_log_date == day

    def test_persisted_under_composite_key(self, memory_store):
        tracker = StreakTracker(memory_store)
        tracker.record(7, StreakType.DAILY_LOG, date(2026, 1, 5))

        record = memory_store.get("streaks", [7, "dailyLog"])
        assert record["currentCount"] == 1
        assert record["lastLogDate"] == "2026-01-05"
        assert tracker.get_count(7, StreakType.DAILY_LOG) == 1

    def test_no_reset_on_gap_by_default(self, memory_store):
        tracker = StreakTracker(memory_store, reset_on_gap=False)
        tracker.record(1, StreakType.DAILY_LOG, date(2026, 1, 1))
        streak = tracker.record(1, StreakType.DAILY_LOG, date(2026, 1, 20))

        assert streak.current_count == 2

    def test_types_are_independent(self, memory_store):
        tracker = StreakTracker(memory_store)
        tracker.record(1, StreakType.DAILY_LOG, date(2026, 1, 5))
        tracker.record(1, StreakType.DAILY_LOG, date(2026, 1, 6))

        assert tracker.get_count(1, StreakType.DAILY_LOG) == 2
        assert tracker.get_count(1, StreakType.DEEP_WORK) == 0
        assert tracker.get_count(2, StreakType.DAILY_LOG) == 0

    def test_reset_on_gap(self, memory_store):
        tracker = StreakTracker(memory_store, reset_on_gap=True)
        start = date(2026, 1, 5)

        counts = []
        for offset in (0, 0, 1, 2, 5, 6):
            counts.append(tracker.record(1, StreakType.DEEP_WORK, start + timedelta(days=offset)).current_count)

        assert counts == [1, 1, 2, 3, 1, 2]
        assert tracker.get(1, StreakType.DEEP_WORK).longest_count == 3

    def test_longest_never_decreases(self, memory_store):
        tracker = StreakTracker(memory_store, reset_on_gap=True)
        days = [date(2026, 1, d) for d in (1, 2, 3, 10, 11, 20)]

        longest = 0
        for day in days:
            streak = tracker.record(1, StreakType.DAILY_LOG, day)
            assert streak.longest_count >= longest
            assert streak.longest_count >= streak.current_count
            longest = streak.longest_count

    def test_default_reads_environment_when_created(self, memory_store, monkeypatch):
        monkeypatch.setenv("PKI_STREAK_RESET_ON_GAP", "true")
        assert StreakTracker(memory_store).reset_on_gap is True

        monkeypatch.setenv("PKI_STREAK_RESET_ON_GAP", "false")
        assert StreakTracker(memory_store).reset_on_gap is False

    def test_explicit_flag_overrides_environment(self, memory_store, monkeypatch):
        monkeypatch.setenv("PKI_STREAK_RESET_ON_GAP", "true")
        assert StreakTracker(memory_store, reset_on_gap=False).reset_on_gap is False
