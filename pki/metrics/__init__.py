"""Metrics package for points and composite scoring."""

from .points import (
    round_half_up,
    compute_points,
    sum_xp,
    parse_time_to_minutes,
    compute_duration,
    format_duration,
)
from .composite import (
    CompositeMetrics,
    compute_composite_metrics,
    calculate_completion_rate,
    calculate_focus_ratio,
    calculate_distraction_ratio,
    calculate_throughput,
    calculate_rest_balance,
)
