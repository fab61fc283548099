"""
Configuration constants for the PKI engine.
Centralized configuration for weights, thresholds, and behavior.
"""

import os
from pathlib import Path
from typing import Dict

# Database
DB_PATH = Path(os.environ.get(
    "PKI_DB_PATH",
    Path(__file__).parent.parent / "data" / "pki.db",
))

# Composite score weights (must sum to 1.0)
COMPOSITE_WEIGHTS: Dict[str, float] = {
    'completion_rate': 0.30,
    'focus_ratio': 0.25,
    'distraction_ratio': 0.20,
    'throughput': 0.15,
    'rest_balance': 0.10,
}

# Completed tasks at which throughput saturates
THROUGHPUT_CAP_TASKS = 10

# Leveling curve: xp(level) = BASE * GROWTH ** (level - 1)
XP_LEVEL_BASE = 300
XP_LEVEL_GROWTH = 1.15

# Streaks
def streak_reset_on_gap() -> bool:
    """
    Read PKI_STREAK_RESET_ON_GAP at call time.
    When false every qualifying event increments the streak, skipped days included.
    """
    return os.environ.get('PKI_STREAK_RESET_ON_GAP', 'false').lower() == 'true'


# Weekly reports
DEFAULT_REPORT_WEEKS = 8
TOP_ACTIVITIES_LIMIT = 3
HIGH_FOCUS_PCT = 60
LOW_FOCUS_PCT = 30
HIGH_VOLUME_HOURS = 40
LOW_VOLUME_HOURS = 20
TREND_THRESHOLD_PCT = 5

# Plan progress status bands (percent of target)
PROGRESS_SUCCESS_PCT = 80
PROGRESS_WARNING_PCT = 50

# Profile bootstrap
DEFAULT_PROFILE_NAME = "Default Profile"

# Date Formats
DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"

# Logging
LOG_DIR = Path(os.environ.get("PKI_LOG_DIR", Path(__file__).parent.parent / "logs"))
LOG_LEVEL = os.environ.get("PKI_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
