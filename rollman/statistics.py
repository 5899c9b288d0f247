"""
Roll statistics: aggregation over the rolls on stock during a window.

Pure computation: receives candidates already narrowed by the planner,
performs no I/O and reads no settings. The reporting timezone is passed in
explicitly and decides calendar-day boundaries only; instants are compared
and subtracted in UTC, so lifespans stay exact across DST changes.

Usage:
    candidates = Roll.objects.on_stock_between(start, end)
    report = compute_statistics(candidates, start, end, ZoneInfo('Europe/Moscow'))
    report.added_count
    report.day_with_max_weight
"""

from dataclasses import asdict, dataclass
from datetime import date, datetime, timezone, tzinfo
from decimal import Decimal
from operator import attrgetter
from typing import Any, Iterable

from rollman.intervals import Interval, Window, day_bounds, to_utc


@dataclass
class StatisticsReport:
    """
    Statistics for one window.

    Fields describing measurements, lifespans or days are None when there
    is no data for them, never zero.
    """

    added_count: int = 0
    deleted_count: int = 0
    average_length: Decimal | None = None
    average_weight: Decimal | None = None
    min_length: Decimal | None = None
    max_length: Decimal | None = None
    min_weight: Decimal | None = None
    max_weight: Decimal | None = None
    total_weight: Decimal | None = None
    min_life_span_seconds: int | None = None
    max_life_span_seconds: int | None = None
    day_with_min_count: date | None = None
    day_with_max_count: date | None = None
    day_with_min_weight: date | None = None
    day_with_max_weight: date | None = None

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (Decimals as strings, days as ISO dates)."""
        result = {}
        for key, value in asdict(self).items():
            if isinstance(value, Decimal):
                value = str(value)
            elif isinstance(value, date):
                value = value.isoformat()
            result[key] = value
        return result


@dataclass(frozen=True)
class DailySnapshot:
    """Rolls present at any instant of one calendar day."""

    day: date
    count: int
    weight: Decimal


def compute_statistics(candidates: Iterable, window_start: datetime,
                       window_end: datetime, tz: tzinfo) -> StatisticsReport:
    """
    Derive a StatisticsReport from the rolls on stock during a window.

    Args:
        candidates: Stock items overlapping the window (see planner)
        window_start: Inclusive start; naive values are wall time in tz
        window_end: Inclusive end; naive values are wall time in tz
        tz: Reporting timezone for day boundaries

    Raises:
        InvalidRange: If window_start > window_end (nothing is computed)

    Returns:
        StatisticsReport
    """
    window = Window(to_utc(window_start, tz), to_utc(window_end, tz))
    intervals = [Interval.from_item(c).normalized(tz) for c in candidates]

    report = StatisticsReport()
    report.added_count = sum(1 for i in intervals if window.contains(i.added_at))

    deleted_in_period = [i for i in intervals if window.contains(i.deleted_at)]
    report.deleted_count = len(deleted_in_period)

    if intervals:
        lengths = [i.length for i in intervals]
        weights = [i.weight for i in intervals]
        total_length = sum(lengths, Decimal('0'))
        total_weight = sum(weights, Decimal('0'))

        report.average_length = total_length / len(lengths)
        report.average_weight = total_weight / len(weights)
        report.min_length = min(lengths)
        report.max_length = max(lengths)
        report.min_weight = min(weights)
        report.max_weight = max(weights)
        report.total_weight = total_weight

    if deleted_in_period:
        spans = [i.lifespan_seconds() for i in deleted_in_period]
        report.min_life_span_seconds = min(spans)
        report.max_life_span_seconds = max(spans)

    _apply_daily_extremes(report, _snapshots(intervals, window, tz))
    return report


def daily_snapshots(candidates: Iterable, window_start: datetime,
                    window_end: datetime, tz: tzinfo) -> list[DailySnapshot]:
    """
    Per-day presence series, one entry per calendar day of the window.

    Days with nobody present are included with count 0.

    Raises:
        InvalidRange: If window_start > window_end
    """
    window = Window(to_utc(window_start, tz), to_utc(window_end, tz))
    intervals = [Interval.from_item(c).normalized(tz) for c in candidates]
    return _snapshots(intervals, window, tz)


def _snapshots(intervals: list[Interval], window: Window, tz: tzinfo) -> list[DailySnapshot]:
    # O(days x candidates): presence is recomputed from scratch for every day
    snapshots = []
    for day in window.days(tz):
        day_start, day_end = (b.astimezone(timezone.utc) for b in day_bounds(day, tz))
        present = [i for i in intervals if i.overlaps(day_start, day_end)]
        snapshots.append(DailySnapshot(
            day=day,
            count=len(present),
            weight=sum((i.weight for i in present), Decimal('0')),
        ))
    return snapshots


def _apply_daily_extremes(report: StatisticsReport, snapshots: list[DailySnapshot]) -> None:
    """
    Fill the min/max day fields.

    Empty days never qualify. min()/max() keep the first of equal values,
    so ties resolve to the earliest day.
    """
    by_count = attrgetter('count')
    by_weight = attrgetter('weight')

    counted = [s for s in snapshots if s.count > 0]
    if counted:
        report.day_with_min_count = min(counted, key=by_count).day
        report.day_with_max_count = max(counted, key=by_count).day

    weighted = [s for s in snapshots if s.weight > 0]
    if weighted:
        report.day_with_min_weight = min(weighted, key=by_weight).day
        report.day_with_max_weight = max(weighted, key=by_weight).day
