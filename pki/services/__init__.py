"""
Services package - Business logic layer.
"""

from typing import Optional

from ..api.store import SQLiteStore
from ..config import DB_PATH
from .tracking_service import TrackingService, DailySnapshot
from .report_service import ReportService

__all__ = [
    'TrackingService',
    'DailySnapshot',
    'ReportService',
    'get_tracking_service',
    'get_report_service',
]

# Global singleton instances, created on first use
_store: Optional[SQLiteStore] = None
_tracking_service: Optional[TrackingService] = None
_report_service: Optional[ReportService] = None


def _get_store() -> SQLiteStore:
    global _store
    if _store is None:
        _store = SQLiteStore(DB_PATH)
    return _store


def get_tracking_service() -> TrackingService:
    """
    Get the global TrackingService instance.

    Returns:
        TrackingService singleton backed by the SQLite store at DB_PATH
    """
    global _tracking_service
    if _tracking_service is None:
        _tracking_service = TrackingService(_get_store())
    return _tracking_service


def get_report_service() -> ReportService:
    """
    Get the global ReportService instance.

    Returns:
        ReportService singleton backed by the SQLite store at DB_PATH
    """
    global _report_service
    if _report_service is None:
        _report_service = ReportService(_get_store())
    return _report_service
