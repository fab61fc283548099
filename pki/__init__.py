"""
PKI engine: scoring, streaks and weekly analytics for daily time tracking.
"""

__version__ = "1.0.0"
