"""
Models package - Data models and type definitions.
"""

from .category import (
    ActivityCategory,
    CategoryClass,
    ACTIVITY_CATEGORIES,
    CATEGORY_MAP,
    get_category,
    is_known_category,
)
from .records import LogEntry, Log, Task, Plan, Streak, Profile, Priority, StreakType

__all__ = [
    'ActivityCategory',
    'CategoryClass',
    'ACTIVITY_CATEGORIES',
    'CATEGORY_MAP',
    'get_category',
    'is_known_category',
    'LogEntry',
    'Log',
    'Task',
    'Plan',
    'Streak',
    'Profile',
    'Priority',
    'StreakType',
]
