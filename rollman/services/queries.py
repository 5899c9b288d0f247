"""
Roll queries: read-only operations.

All methods are classmethod on Rolls and use no locking.
"""

import logging
from datetime import datetime

from rollman.conf import reporting_timezone
from rollman.exceptions import RollNotFound
from rollman.filters import RollFilter
from rollman.intervals import Window, localize
from rollman.models.roll import Roll
from rollman.statistics import DailySnapshot, StatisticsReport, compute_statistics, daily_snapshots

logger = logging.getLogger('rollman')


def _window(start: datetime, end: datetime) -> Window:
    """Validated window with naive bounds read as reporting-timezone wall time."""
    tz = reporting_timezone()
    return Window(localize(start, tz), localize(end, tz))


class RollQueries:
    """Read-only roll query methods."""

    @classmethod
    def get(cls, roll_id) -> Roll:
        """
        Fetch one roll, deleted or not.

        Raises:
            RollNotFound: If no roll has this id
        """
        try:
            return Roll.objects.get(pk=roll_id)
        except (Roll.DoesNotExist, ValueError, TypeError):
            raise RollNotFound(
                message=f'Roll with id {roll_id} not found', roll_id=roll_id
            ) from None

    @classmethod
    def list_rolls(cls, roll_filter: RollFilter | None = None):
        """
        Rolls matching a filter, ordered by id.

        Args:
            roll_filter: Bounds to apply (None = every roll, deleted included)

        Raises:
            InvalidInput: If the filter has inverted or malformed bounds
        """
        roll_filter = (roll_filter or RollFilter()).localized(reporting_timezone())
        return Roll.objects.matching(roll_filter).order_by('id')

    @classmethod
    def statistics(cls, start: datetime, end: datetime) -> StatisticsReport:
        """
        Statistics for rolls on stock at some instant in [start, end].

        Args:
            start: Inclusive start (naive = reporting-timezone wall time)
            end: Inclusive end (naive = reporting-timezone wall time)

        Raises:
            InvalidRange: If start > end (checked before querying)

        Returns:
            StatisticsReport
        """
        window = _window(start, end)
        candidates = _candidates(window)
        return _report(candidates, window)

    @classmethod
    def daily(cls, start: datetime, end: datetime) -> list[DailySnapshot]:
        """
        Count and weight of rolls present on each calendar day of [start, end].

        Raises:
            InvalidRange: If start > end
        """
        window = _window(start, end)
        return daily_snapshots(_candidates(window), window.start, window.end, reporting_timezone())

    @classmethod
    def statistics_with_daily(cls, start: datetime, end: datetime) -> tuple[StatisticsReport, list[DailySnapshot]]:
        """
        Report and daily series computed from one candidate fetch.

        Both describe the same snapshot of the table, even while rolls are
        being added or deleted concurrently.

        Raises:
            InvalidRange: If start > end
        """
        window = _window(start, end)
        candidates = _candidates(window)
        snapshots = daily_snapshots(candidates, window.start, window.end, reporting_timezone())
        return _report(candidates, window), snapshots


def _candidates(window: Window) -> list[Roll]:
    return list(Roll.objects.on_stock_between(window.start, window.end))


def _report(candidates: list[Roll], window: Window) -> StatisticsReport:
    report = compute_statistics(candidates, window.start, window.end, reporting_timezone())
    logger.debug(
        "rolls.statistics.computed",
        extra={
            "start": window.start.isoformat(),
            "end": window.end.isoformat(),
            "candidates": len(candidates),
        },
    )
    return report
