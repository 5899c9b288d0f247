"""
Range query planner: which rolls were on stock during a window.

Two renditions of the same overlap rule (Interval.overlaps):
    - select_candidates(): in memory, for any iterable of stock items
    - overlap_q(): ORM expression, for Roll querysets

Keep them in lockstep; a roll deleted exactly at window_start and a roll
added exactly at window_end are both candidates.

Naive datetimes (bounds or item timestamps) are wall time in tz, which
defaults to the configured reporting timezone.
"""

from datetime import datetime, tzinfo

from django.db.models import Q

from rollman.conf import reporting_timezone
from rollman.intervals import Interval, Window, to_utc


def _utc_window(window_start: datetime, window_end: datetime, tz: tzinfo) -> Window:
    return Window(to_utc(window_start, tz), to_utc(window_end, tz))


def select_candidates(items, window_start: datetime, window_end: datetime,
                      tz: tzinfo | None = None) -> list:
    """
    Every item whose presence interval overlaps [window_start, window_end].

    Raises:
        InvalidRange: If window_start > window_end

    Returns:
        List of the original items, in input order (callers must not rely
        on any particular order)
    """
    if tz is None:
        tz = reporting_timezone()
    window = _utc_window(window_start, window_end, tz)
    return [
        item for item in items
        if Interval.from_item(item).normalized(tz).overlaps(window.start, window.end)
    ]


def overlap_q(window_start: datetime, window_end: datetime, tz: tzinfo | None = None) -> Q:
    """Queryset version of select_candidates."""
    if tz is None:
        tz = reporting_timezone()
    window = _utc_window(window_start, window_end, tz)
    return Q(added_at__lte=window.end) & (
        Q(deleted_at__isnull=True) | Q(deleted_at__gte=window.start)
    )
