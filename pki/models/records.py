"""
Record models for the tracking data.
Each record converts to and from the dictionary layout kept in the object store.
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Dict, List, Optional, Tuple

from ..config import DATE_FORMAT


class Priority(str, Enum):
    """Task priority."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class StreakType(str, Enum):
    """Kinds of streaks tracked per profile."""
    DAILY_LOG = "dailyLog"
    DEEP_WORK = "deepWork"


def format_date(day: date) -> str:
    return day.strftime(DATE_FORMAT)


def parse_date(value) -> date:
    """Parse a 'YYYY-MM-DD' string (or pass through a date)."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return datetime.strptime(value, DATE_FORMAT).date()


@dataclass
class LogEntry:
    """
    A single logged block of time.

    Attributes:
        id: Entry identifier, unique within its day
        start_time: Start as 'HH:MM'
        end_time: End as 'HH:MM' (may be past midnight)
        duration: Duration in minutes
        category: Activity category id
        description: Free text
        points: XP earned, fixed when the entry was created
        date: Day of the log the entry belongs to (not stored on the entry itself)
    """
    id: str
    start_time: str
    end_time: str
    duration: int
    category: str
    description: str = ""
    points: int = 0
    date: Optional[date] = None

    def __post_init__(self):
        """Validate entry data."""
        if self.duration <= 0:
            raise ValueError("Duration must be positive")

    @property
    def start_hour(self) -> int:
        """Integer hour of the start time."""
        return int(self.start_time.split(':')[0])

    def with_date(self, day) -> 'LogEntry':
        return replace(self, date=day)

    def to_dict(self) -> dict:
        """Convert entry to dictionary."""
        return {
            'id': self.id,
            'startTime': self.start_time,
            'endTime': self.end_time,
            'duration': self.duration,
            'category': self.category,
            'description': self.description,
            'points': self.points,
        }

    @classmethod
    def from_dict(cls, data: dict, day=None) -> 'LogEntry':
        """Create LogEntry from dictionary."""
        return cls(
            id=str(data['id']),
            start_time=data['startTime'],
            end_time=data['endTime'],
            duration=data['duration'],
            category=data['category'],
            description=data.get('description', ''),
            points=data.get('points', 0),
            date=day,
        )


@dataclass
class Log:
    """All entries logged by a profile on one day."""
    profile_id: int
    date: date
    entries: List[LogEntry] = field(default_factory=list)

    @property
    def key(self) -> Tuple[int, str]:
        return (self.profile_id, format_date(self.date))

    def to_dict(self) -> dict:
        return {
            'id': list(self.key),
            'profileId': self.profile_id,
            'date': format_date(self.date),
            'entries': [entry.to_dict() for entry in self.entries],
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Log':
        day = parse_date(data['date'])
        return cls(
            profile_id=data['profileId'],
            date=day,
            entries=[LogEntry.from_dict(e, day) for e in data.get('entries', [])],
        )


@dataclass
class Task:
    """A planned task for one day."""
    profile_id: int
    date: date
    description: str
    priority: Priority = Priority.MEDIUM
    related_category: str = ""
    is_complete: bool = False
    planned_duration: Optional[int] = None
    created_at: datetime = field(default_factory=datetime.now)
    id: Optional[int] = None

    def __post_init__(self):
        self.priority = Priority(self.priority)

    @property
    def is_high_priority(self) -> bool:
        return self.priority is Priority.HIGH

    def to_dict(self) -> dict:
        data = {
            'profileId': self.profile_id,
            'date': format_date(self.date),
            'description': self.description,
            'priority': self.priority.value,
            'relatedCategory': self.related_category,
            'isComplete': self.is_complete,
            'createdAt': self.created_at.isoformat(),
        }
        if self.planned_duration is not None:
            data['plannedDuration'] = self.planned_duration
        if self.id is not None:
            data['id'] = self.id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Task':
        created_at = data.get('createdAt')
        return cls(
            id=data.get('id'),
            profile_id=data['profileId'],
            date=parse_date(data['date']),
            description=data['description'],
            priority=data.get('priority', Priority.MEDIUM),
            related_category=data.get('relatedCategory', ''),
            is_complete=bool(data.get('isComplete', False)),
            planned_duration=data.get('plannedDuration'),
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.now(),
        )


@dataclass
class Plan:
    """Planned minutes per category for one day."""
    profile_id: int
    date: date
    targets: Dict[str, int] = field(default_factory=dict)

    @property
    def key(self) -> Tuple[int, str]:
        return (self.profile_id, format_date(self.date))

    def target_for(self, category_id: str) -> int:
        """Planned minutes for a category, 0 when not planned."""
        return self.targets.get(category_id) or 0

    def to_dict(self) -> dict:
        return {
            'id': list(self.key),
            'profileId': self.profile_id,
            'date': format_date(self.date),
            'targets': dict(self.targets),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Plan':
        return cls(
            profile_id=data['profileId'],
            date=parse_date(data['date']),
            targets=dict(data.get('targets', {})),
        )


@dataclass
class Streak:
    """A consecutive-day counter for one profile and streak type."""
    profile_id: int
    streak_type: StreakType
    current_count: int = 0
    longest_count: int = 0
    last_log_date: Optional[date] = None

    def __post_init__(self):
        self.streak_type = StreakType(self.streak_type)
        if self.longest_count < self.current_count:
            raise ValueError("Longest streak cannot be shorter than the current streak")

    @property
    def key(self) -> Tuple[int, str]:
        return (self.profile_id, self.streak_type.value)

    def to_dict(self) -> dict:
        return {
            'id': list(self.key),
            'profileId': self.profile_id,
            'streakType': self.streak_type.value,
            'currentCount': self.current_count,
            'longestCount': self.longest_count,
            'lastLogDate': format_date(self.last_log_date) if self.last_log_date else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Streak':
        last = data.get('lastLogDate')
        return cls(
            profile_id=data['profileId'],
            streak_type=data['streakType'],
            current_count=data.get('currentCount', 0),
            longest_count=data.get('longestCount', 0),
            last_log_date=parse_date(last) if last else None,
        )


@dataclass
class Profile:
    """The user profile, root of all other records."""
    name: str
    total_xp: int = 0
    level: int = 1
    theme: str = "light"
    created_at: datetime = field(default_factory=datetime.now)
    id: Optional[int] = None

    def to_dict(self) -> dict:
        data = {
            'name': self.name,
            'createdAt': self.created_at.isoformat(),
            'settings': {'theme': self.theme},
            'stats': {'totalXP': self.total_xp, 'level': self.level},
        }
        if self.id is not None:
            data['id'] = self.id
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'Profile':
        stats = data.get('stats', {})
        created_at = data.get('createdAt')
        return cls(
            id=data.get('id'),
            name=data['name'],
            total_xp=stats.get('totalXP', 0),
            level=stats.get('level', 1),
            theme=data.get('settings', {}).get('theme', 'light'),
            created_at=datetime.fromisoformat(created_at) if created_at else datetime.now(),
        )
