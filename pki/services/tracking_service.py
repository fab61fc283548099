"""
Tracking service - Daily logging, planning and task operations.
Owns every write to the object store for a profile's day.
"""

import time
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from ..analytics.gamification import StreakTracker, level_from_total_xp
from ..api.store import ObjectStore
from ..config import DEFAULT_PROFILE_NAME
from ..goals import PlanProgress, calculate_plan_progress
from ..logger import setup_logger
from ..metrics.composite import CompositeMetrics, compute_composite_metrics
from ..metrics.points import compute_duration, compute_points, sum_xp
from ..models.category import is_known_category
from ..models.records import (
    Log,
    LogEntry,
    Plan,
    Priority,
    Profile,
    StreakType,
    Task,
    format_date,
)

logger = setup_logger(__name__)


def _new_entry_id(log: Log) -> str:
    """Timestamp id, suffixed when the day already holds an entry with that id."""
    base = str(time.time_ns())
    taken = {e.id for e in log.entries}
    entry_id = base
    suffix = 1
    while entry_id in taken:
        entry_id = f"{base}-{suffix}"
        suffix += 1
    return entry_id


@dataclass
class DailySnapshot:
    """Everything the dashboard shows for one day."""
    day: date
    metrics: CompositeMetrics
    daily_xp: int
    logged_minutes: int
    completed_tasks: int
    total_tasks: int
    plan_progress: List[PlanProgress] = field(default_factory=list)


class TrackingService:
    """
    Service layer for a profile's daily records.

    Not safe for concurrent writes on the same profile: adding an entry
    reads and rewrites the day's log, the streak and the profile.
    """

    def __init__(self, store: ObjectStore, streak_tracker: Optional[StreakTracker] = None):
        self.store = store
        self.streaks = streak_tracker or StreakTracker(store)

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def ensure_default_profile(self) -> Profile:
        """Return the first profile, creating the default one if none exists."""
        profiles = self.store.get_all('profiles')
        if profiles:
            return Profile.from_dict(profiles[0])

        created = self.store.add('profiles', Profile(name=DEFAULT_PROFILE_NAME).to_dict())
        logger.info(f"Created default profile {created['id']}")
        return Profile.from_dict(created)

    def get_profile(self, profile_id: int) -> Profile:
        record = self.store.get('profiles', profile_id)
        if record is None:
            raise KeyError(f"Profile {profile_id} not found")
        return Profile.from_dict(record)

    def add_xp(self, profile_id: int, xp: int) -> Profile:
        """Add XP to a profile and recompute its level."""
        profile = self.get_profile(profile_id)
        profile.total_xp += xp
        profile.level = level_from_total_xp(profile.total_xp)
        self.store.put('profiles', profile.to_dict())
        return profile

    # ------------------------------------------------------------------
    # Log entries
    # ------------------------------------------------------------------

    def get_log(self, profile_id: int, day: date) -> Log:
        record = self.store.get('logs', [profile_id, format_date(day)])
        return Log.from_dict(record) if record else Log(profile_id=profile_id, date=day)

    def get_log_entries(self, profile_id: int, day: date) -> List[LogEntry]:
        return self.get_log(profile_id, day).entries

    def add_log_entry(
        self,
        profile_id: int,
        day: date,
        start_time: str,
        end_time: str,
        category: str,
        description: str,
    ) -> LogEntry:
        """
        Log a block of time for a day.

        The entry's points are computed once here and stored with it. A
        successful add records the dailyLog streak and adds the points to
        the profile's XP.

        Raises:
            ValueError: On malformed times, an unknown category, a blank
                description or a zero duration
        """
        if not is_known_category(category):
            raise ValueError(f"Unknown category: {category}")
        if not description or not description.strip():
            raise ValueError("Description cannot be empty")

        duration = compute_duration(start_time, end_time)
        if duration <= 0:
            raise ValueError("End time must be after start time")

        try:
            log = self.get_log(profile_id, day)
            entry = LogEntry(
                id=_new_entry_id(log),
                start_time=start_time,
                end_time=end_time,
                duration=duration,
                category=category,
                description=description.strip(),
                points=compute_points(duration, category),
                date=day,
            )
            log.entries.append(entry)
            self.store.put('logs', log.to_dict())

            self.streaks.record(profile_id, StreakType.DAILY_LOG, day)
            self.add_xp(profile_id, entry.points)
        except Exception as e:
            logger.error(f"Error adding log entry: {e}")
            raise

        logger.info(
            f"Logged {duration} min of {category} for profile {profile_id} "
            f"on {format_date(day)} ({entry.points:+d} XP)"
        )
        return entry

    def delete_log_entry(self, profile_id: int, day: date, entry_id: str) -> None:
        """
        Remove an entry from a day's log.
        XP and streaks are left as they are.
        """
        log = self.get_log(profile_id, day)
        remaining = [e for e in log.entries if e.id != entry_id]
        if len(remaining) == len(log.entries):
            raise KeyError(f"Log entry {entry_id} not found")

        log.entries = remaining
        self.store.put('logs', log.to_dict())
        logger.info(f"Deleted log entry {entry_id} for profile {profile_id}")

    # ------------------------------------------------------------------
    # Plans
    # ------------------------------------------------------------------

    def save_plan(self, profile_id: int, day: date, targets: dict) -> Plan:
        """Create or replace the plan for a day."""
        plan = Plan(profile_id=profile_id, date=day, targets=dict(targets))
        self.store.put('plans', plan.to_dict())
        logger.info(f"Saved plan for profile {profile_id} on {format_date(day)}")
        return plan

    def get_plan(self, profile_id: int, day: date) -> Optional[Plan]:
        record = self.store.get('plans', [profile_id, format_date(day)])
        return Plan.from_dict(record) if record else None

    # ------------------------------------------------------------------
    # Tasks
    # ------------------------------------------------------------------

    def get_tasks(self, profile_id: int, day: date) -> List[Task]:
        records = self.store.get_by_index('tasks', 'profileDate', [profile_id, format_date(day)])
        return [Task.from_dict(r) for r in records]

    def save_tasks(self, profile_id: int, day: date, tasks: Iterable[Task]) -> List[Task]:
        """
        Replace the day's task list.
        Existing tasks for the day are deleted before the new ones are added.
        """
        for existing in self.get_tasks(profile_id, day):
            self.store.delete('tasks', existing.id)

        saved = []
        for task in tasks:
            record = task.to_dict()
            record.pop('id', None)
            record['profileId'] = profile_id
            record['date'] = format_date(day)
            saved.append(Task.from_dict(self.store.add('tasks', record)))

        logger.info(f"Saved {len(saved)} tasks for profile {profile_id} on {format_date(day)}")
        return saved

    def _get_task(self, task_id: int) -> Task:
        record = self.store.get('tasks', task_id)
        if record is None:
            raise KeyError(f"Task {task_id} not found")
        return Task.from_dict(record)

    def toggle_task(self, task_id: int) -> Task:
        """Flip a task's completion flag."""
        task = self._get_task(task_id)
        task.is_complete = not task.is_complete
        self.store.put('tasks', task.to_dict())
        return task

    def update_task(
        self,
        task_id: int,
        description: Optional[str] = None,
        priority: Optional[Priority] = None,
    ) -> Task:
        """Edit a task's description and/or priority."""
        task = self._get_task(task_id)
        if description is not None:
            task.description = description
        if priority is not None:
            task.priority = Priority(priority)
        self.store.put('tasks', task.to_dict())
        return task

    # ------------------------------------------------------------------
    # Read models
    # ------------------------------------------------------------------

    def get_streak_counts(self, profile_id: int) -> dict:
        """Current count per streak type."""
        return {
            streak_type.value: self.streaks.get_count(profile_id, streak_type)
            for streak_type in StreakType
        }

    def get_daily_snapshot(self, profile_id: int, day: date) -> DailySnapshot:
        """
        Get the scored view of one day.

        Args:
            profile_id: Owning profile
            day: Day to summarize

        Returns:
            DailySnapshot with composite metrics, XP, time and plan progress
        """
        entries = self.get_log_entries(profile_id, day)
        tasks = self.get_tasks(profile_id, day)
        plan = self.get_plan(profile_id, day)

        return DailySnapshot(
            day=day,
            metrics=compute_composite_metrics(tasks, entries, plan),
            daily_xp=sum_xp(entries),
            logged_minutes=sum(e.duration for e in entries),
            completed_tasks=sum(1 for t in tasks if t.is_complete),
            total_tasks=len(tasks),
            plan_progress=calculate_plan_progress(entries, plan),
        )
