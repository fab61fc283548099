"""
Unit tests for plan progress
"""
from datetime import date

import pytest

from pki.goals import calculate_plan_progress
from pki.models.records import Plan

DAY = date(2026, 1, 5)


def _progress_for(progress, category_id):
    return next(p for p in progress if p.category.id == category_id)


@pytest.mark.unit
class TestPlanProgress:
    """Test calculate_plan_progress."""

    def test_one_row_per_category(self, make_entry):
        progress = calculate_plan_progress([make_entry(day=DAY)])
        assert len(progress) == 6
        assert all(p.target == 0 and p.message is None for p in progress)
        assert _progress_for(progress, "deep-work").percentage == 0

    def test_on_target(self, make_entry):
        plan = Plan(profile_id=1, date=DAY, targets={"deep-work": 60})
        progress = _progress_for(calculate_plan_progress([make_entry("09:00", "10:00", day=DAY)], plan), "deep-work")

        assert progress.message == "Perfect! Right on target"
        assert progress.percentage == pytest.approx(100)
        assert progress.status == "success"

    def test_surpassed(self, make_entry):
        plan = Plan(profile_id=1, date=DAY, targets={"deep-work": 60})
        progress = _progress_for(calculate_plan_progress([make_entry("09:00", "10:30", day=DAY)], plan), "deep-work")

        assert progress.message == "Surpassed target by 30m – excellent!"

    def test_remaining(self, make_entry):
        plan = Plan(profile_id=1, date=DAY, targets={"shallow-work": 120})
        entries = [make_entry("09:00", "09:30", "shallow-work", DAY)]
        progress = _progress_for(calculate_plan_progress(entries, plan), "shallow-work")

        assert progress.message == "1h 30m remaining to reach target"
        assert progress.status == "danger"

    def test_exceeded_limit(self, make_entry):
        plan = Plan(profile_id=1, date=DAY, targets={"distraction": 30})
        entries = [make_entry("09:00", "10:30", "distraction", DAY)]
        progress = _progress_for(calculate_plan_progress(entries, plan), "distraction")

        assert progress.message == "You've exceeded your Distraction limit by 1h. Try to refocus."
        assert progress.status == "danger"

    def test_limit_respected(self, make_entry):
        plan = Plan(profile_id=1, date=DAY, targets={"rabbit-hole": 60})
        entries = [make_entry("09:00", "09:20", "rabbit-hole", DAY)]
        progress = _progress_for(calculate_plan_progress(entries, plan), "rabbit-hole")

        assert progress.status == "success"
        assert progress.message == "40m remaining to reach target"
