"""
Activity category catalog.
The six categories are fixed; the lookup map is built once at import and is read-only.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple


class CategoryClass(Enum):
    """Semantic class of an activity category."""
    PRODUCTIVE = "productive"
    RESTORATIVE = "restorative"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class ActivityCategory:
    """
    A loggable activity category.

    Attributes:
        id: Stable identifier used in log entries and plan targets
        name: Display name
        points_per_30_min: Signed XP rate per half hour
        color: Color hint for the presentation layer
        icon: Icon hint for the presentation layer
        description: Short description
        category_class: Productive, restorative or negative
    """
    id: str
    name: str
    points_per_30_min: int
    color: str
    icon: str
    description: str
    category_class: CategoryClass

    @property
    def is_negative(self) -> bool:
        return self.category_class is CategoryClass.NEGATIVE

    def to_dict(self) -> dict:
        """Convert category to dictionary."""
        return {
            'id': self.id,
            'name': self.name,
            'pointsPer30Min': self.points_per_30_min,
            'color': self.color,
            'icon': self.icon,
            'description': self.description,
            'class': self.category_class.value,
        }


DEEP_WORK = 'deep-work'
SHALLOW_WORK = 'shallow-work'
SCHEDULED_LEISURE = 'scheduled-leisure'
SCHEDULED_BREAK = 'scheduled-break'
DISTRACTION = 'distraction'
RABBIT_HOLE = 'rabbit-hole'

ACTIVITY_CATEGORIES: Tuple[ActivityCategory, ...] = (
    ActivityCategory(
        DEEP_WORK, "Deep Work", 10, "emerald", "brain",
        "High-value tasks requiring deep concentration",
        CategoryClass.PRODUCTIVE,
    ),
    ActivityCategory(
        SHALLOW_WORK, "Shallow Work", 4, "blue", "clipboard",
        "Low-demand but necessary tasks (emails, planning)",
        CategoryClass.PRODUCTIVE,
    ),
    ActivityCategory(
        SCHEDULED_LEISURE, "Scheduled Leisure", 2, "purple", "gamepad-2",
        "Planned, restorative activities (reading, gaming)",
        CategoryClass.RESTORATIVE,
    ),
    ActivityCategory(
        SCHEDULED_BREAK, "Scheduled Break", 2, "green", "coffee",
        "Essential short breaks for recovery (lunch, walks)",
        CategoryClass.RESTORATIVE,
    ),
    ActivityCategory(
        DISTRACTION, "Distraction", -5, "yellow", "smartphone",
        "Unplanned, low-value diversions (social media)",
        CategoryClass.NEGATIVE,
    ),
    ActivityCategory(
        RABBIT_HOLE, "Rabbit Hole", -10, "red", "spiral",
        "Deep, time-consuming distractions with negative impact",
        CategoryClass.NEGATIVE,
    ),
)

CATEGORY_MAP: Mapping[str, ActivityCategory] = MappingProxyType(
    {category.id: category for category in ACTIVITY_CATEGORIES}
)

CATEGORY_IDS: Tuple[str, ...] = tuple(CATEGORY_MAP)

RESTORATIVE_CATEGORIES = frozenset(
    c.id for c in ACTIVITY_CATEGORIES if c.category_class is CategoryClass.RESTORATIVE
)
NEGATIVE_CATEGORIES = frozenset(
    c.id for c in ACTIVITY_CATEGORIES if c.category_class is CategoryClass.NEGATIVE
)


def get_category(category_id: str) -> Optional[ActivityCategory]:
    """Look up a category by id, None when unknown."""
    return CATEGORY_MAP.get(category_id)


def is_known_category(category_id: str) -> bool:
    return category_id in CATEGORY_MAP
