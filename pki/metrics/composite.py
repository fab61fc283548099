"""
Composite productivity scoring.
Blends five normalized sub-metrics into a single 0-100 score.
Works on any bounded set of tasks and entries, one day or a whole week.
"""

from dataclasses import dataclass, asdict
from typing import Iterable, Optional

from ..config import COMPOSITE_WEIGHTS, THROUGHPUT_CAP_TASKS
from ..logger import setup_logger
from ..models.category import DEEP_WORK, NEGATIVE_CATEGORIES, RESTORATIVE_CATEGORIES
from ..models.records import LogEntry, Plan, Task
from .points import round_half_up

logger = setup_logger(__name__)


@dataclass(frozen=True)
class CompositeMetrics:
    """Sub-metrics in [0, 1] and the weighted score in [0, 100]."""
    completion_rate: float
    focus_ratio: float
    distraction_ratio: float
    throughput: float
    rest_balance: float
    composite_score: int

    def to_dict(self) -> dict:
        return asdict(self)


def calculate_completion_rate(tasks: list[Task]) -> float:
    """Share of high-priority tasks completed; 1 when there are none."""
    high_priority = [t for t in tasks if t.is_high_priority]
    if not high_priority:
        return 1.0
    completed = sum(1 for t in high_priority if t.is_complete)
    return completed / len(high_priority)


def calculate_focus_ratio(entries: list[LogEntry]) -> float:
    """Deep work minutes over all logged minutes; 0 when nothing is logged."""
    total = sum(e.duration for e in entries)
    if total <= 0:
        return 0.0
    deep_work = sum(e.duration for e in entries if e.category == DEEP_WORK)
    return deep_work / total


def calculate_distraction_ratio(entries: list[LogEntry]) -> float:
    """1 minus the distracted share of logged time; 1 when nothing is logged."""
    total = sum(e.duration for e in entries)
    if total <= 0:
        return 1.0
    distracted = sum(e.duration for e in entries if e.category in NEGATIVE_CATEGORIES)
    return max(0.0, 1 - distracted / total)


def calculate_throughput(tasks: list[Task]) -> float:
    completed = sum(1 for t in tasks if t.is_complete)
    return min(completed / THROUGHPUT_CAP_TASKS, 1.0)


def calculate_rest_balance(entries: list[LogEntry], plan: Optional[Plan] = None) -> float:
    """
    Closeness of actual rest to planned rest.

    Peaks at 1 when restorative minutes equal the planned leisure + break
    minutes and falls off linearly in both directions. Without a plan, or
    with no rest planned, the metric is 1.
    """
    if plan is None:
        return 1.0

    planned_rest = sum(plan.target_for(c) for c in RESTORATIVE_CATEGORIES)
    if planned_rest <= 0:
        return 1.0

    rest = sum(e.duration for e in entries if e.category in RESTORATIVE_CATEGORIES)
    return max(0.0, 1 - abs(rest / planned_rest - 1))


def compute_composite_metrics(
    tasks: Iterable[Task],
    entries: Iterable[LogEntry],
    plan: Optional[Plan] = None,
) -> CompositeMetrics:
    """
    Compute all sub-metrics and the composite score.

    Args:
        tasks: Tasks in scope
        entries: Log entries in scope
        plan: Plan to measure rest against, if any

    Returns:
        CompositeMetrics for the given collections
    """
    tasks = list(tasks)
    entries = list(entries)

    metrics = {
        'completion_rate': calculate_completion_rate(tasks),
        'focus_ratio': calculate_focus_ratio(entries),
        'distraction_ratio': calculate_distraction_ratio(entries),
        'throughput': calculate_throughput(tasks),
        'rest_balance': calculate_rest_balance(entries, plan),
    }

    weighted = sum(metrics[name] * weight for name, weight in COMPOSITE_WEIGHTS.items())
    score = round_half_up(weighted * 100)

    logger.debug(
        f"Composite score {score} from {len(tasks)} tasks and {len(entries)} entries"
    )

    return CompositeMetrics(composite_score=score, **metrics)
