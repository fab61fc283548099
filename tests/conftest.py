"""
Pytest configuration and fixtures
"""
import os
import sys
import tempfile
from datetime import date
from pathlib import Path

import pytest

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep log files out of the source tree
os.environ.setdefault("PKI_LOG_DIR", tempfile.mkdtemp(prefix="pki-logs-"))


@pytest.fixture
def make_entry():
    """Factory for log entries with points computed from the catalog."""
    from pki.metrics.points import compute_duration, compute_points
    from pki.models.records import LogEntry

    counter = {"n": 0}

    def _make(start_time="09:00", end_time="10:00", category="deep-work", day=None, description="Work"):
        counter["n"] += 1
        duration = compute_duration(start_time, end_time)
        return LogEntry(
            id=str(counter["n"]),
            start_time=start_time,
            end_time=end_time,
            duration=duration,
            category=category,
            description=description,
            points=compute_points(duration, category),
            date=day,
        )

    return _make


@pytest.fixture
def make_task():
    """Factory for tasks."""
    from pki.models.records import Task

    def _make(priority="high", is_complete=False, day=date(2026, 1, 5), description="Task"):
        return Task(
            profile_id=1,
            date=day,
            description=description,
            priority=priority,
            related_category="deep-work",
            is_complete=is_complete,
        )

    return _make


@pytest.fixture
def memory_store():
    """Empty in-memory object store."""
    from pki.api.store import MemoryStore

    return MemoryStore()


@pytest.fixture
def temp_db(tmp_path):
    """Path for a temporary SQLite database."""
    return tmp_path / "pki.db"


@pytest.fixture
def two_week_fixture(make_entry, make_task):
    """
    Two weeks of data: the weeks starting Monday 2026-01-05 and 2026-01-12.

    Week 1: 6h logged (4h deep work, 1h shallow, 1h distraction), peak at 9:00.
    Week 2: 3.5h logged (1.5h shallow, 1.5h leisure, 0.5h deep work), peak at 13:00.
    """
    from pki.models.records import Plan

    week1_mon = date(2026, 1, 5)
    week1_wed = date(2026, 1, 7)
    week2_tue = date(2026, 1, 13)

    entries = [
        make_entry("09:00", "12:00", "deep-work", week1_mon),
        make_entry("14:00", "15:00", "shallow-work", week1_mon),
        make_entry("09:30", "10:30", "deep-work", week1_wed),
        make_entry("20:00", "21:00", "distraction", week1_wed),
        make_entry("13:00", "14:30", "shallow-work", week2_tue),
        make_entry("18:00", "19:30", "scheduled-leisure", week2_tue),
        make_entry("08:00", "08:30", "deep-work", week2_tue),
    ]
    tasks = [
        make_task("high", True, week1_mon),
        make_task("low", False, week1_wed),
        make_task("high", True, week2_tue),
    ]
    plans = [
        Plan(profile_id=1, date=week2_tue, targets={"scheduled-leisure": 60, "scheduled-break": 30}),
    ]
    return {"entries": entries, "tasks": tasks, "plans": plans, "today": date(2026, 1, 14)}
