"""
Plan progress for the PKI engine.
Compares logged minutes per category against the day's planned targets.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from .config import PROGRESS_SUCCESS_PCT, PROGRESS_WARNING_PCT
from .metrics.points import format_duration
from .models.category import ACTIVITY_CATEGORIES, ActivityCategory
from .models.records import LogEntry, Plan


@dataclass
class PlanProgress:
    """Progress of one category towards its planned minutes."""
    category: ActivityCategory
    actual: int
    target: int

    @property
    def is_max(self) -> bool:
        """Negative categories are limits: staying under target is good."""
        return self.category.is_negative

    @property
    def percentage(self) -> float:
        if self.target == 0:
            return 0
        return self.actual / self.target * 100

    @property
    def status(self) -> str:
        """Return 'success', 'warning', or 'danger' based on progress."""
        if self.is_max:
            if self.actual <= self.target:
                return "success"
            elif self.actual <= self.target * 1.2:
                return "warning"
            return "danger"
        else:
            pct = self.percentage
            if pct >= PROGRESS_SUCCESS_PCT:
                return "success"
            elif pct >= PROGRESS_WARNING_PCT:
                return "warning"
            return "danger"

    @property
    def message(self) -> Optional[str]:
        """Status message for the day, None when nothing was planned."""
        if self.target == 0:
            return None

        diff = self.actual - self.target
        if diff == 0:
            return "Perfect! Right on target"
        if diff > 0:
            if self.is_max:
                return (
                    f"You've exceeded your {self.category.name} limit by "
                    f"{format_duration(diff)}. Try to refocus."
                )
            return f"Surpassed target by {format_duration(diff)} – excellent!"
        return f"{format_duration(-diff)} remaining to reach target"


def minutes_by_category(entries: Iterable[LogEntry]) -> dict:
    totals: dict = {}
    for entry in entries:
        totals[entry.category] = totals.get(entry.category, 0) + entry.duration
    return totals


def calculate_plan_progress(entries: Iterable[LogEntry], plan: Optional[Plan] = None) -> List[PlanProgress]:
    """
    Calculate progress towards each category's planned minutes.

    Args:
        entries: The day's log entries
        plan: The day's plan (all targets read as 0 without one)

    Returns:
        One PlanProgress per category, in catalog order
    """
    actual = minutes_by_category(entries)
    return [
        PlanProgress(
            category=category,
            actual=actual.get(category.id, 0),
            target=plan.target_for(category.id) if plan else 0,
        )
        for category in ACTIVITY_CATEGORIES
    ]
