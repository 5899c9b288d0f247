"""
Presence intervals: isolated, testable, reusable.

A roll is on stock over the closed interval [added_at, deleted_at], open
ended while deleted_at is None. Everything that asks "was this roll there?"
goes through Interval so candidate selection, daily snapshots and filtering
agree on boundary instants.

Aware timestamps are compared as instants (in UTC), whatever zone they are
expressed in. The reporting zone only decides calendar days.

Examples:
    - added 10:00, deleted 10:10: present at 10:00 and at 10:10, not at 10:11
    - added 10:00, never deleted: present at any instant from 10:00 on
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from decimal import Decimal
from typing import Iterator

from rollman.exceptions import InvalidRange
from rollman.protocols.item import StockItem

ONE_SECOND = timedelta(seconds=1)


def _is_naive(value: datetime) -> bool:
    return value.tzinfo is None or value.utcoffset() is None


def localize(value: datetime | None, tz: tzinfo) -> datetime | None:
    """
    Express a timestamp in the reporting zone.

    Naive values are read as wall time in tz; aware values are converted.
    """
    if value is None:
        return None
    if _is_naive(value):
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def to_utc(value: datetime | None, tz: tzinfo) -> datetime | None:
    """Same instant as localize(value, tz), expressed in UTC."""
    if value is None:
        return None
    return localize(value, tz).astimezone(timezone.utc)


def _instant(value: datetime | None) -> datetime | None:
    # Two datetimes sharing one tzinfo compare as wall times; UTC does not.
    if value is None or _is_naive(value):
        return value
    return value.astimezone(timezone.utc)


def day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """First and last representable instants of a calendar day in tz."""
    return (
        datetime.combine(day, time.min, tzinfo=tz),
        datetime.combine(day, time.max, tzinfo=tz),
    )


@dataclass(frozen=True)
class Interval:
    """
    Presence interval of one item plus its static measurements.

    No fix-up is applied: an interval whose deleted_at precedes added_at is
    queried with the stored values as they are.
    """

    added_at: datetime
    deleted_at: datetime | None
    length: Decimal
    weight: Decimal

    @classmethod
    def from_item(cls, item: StockItem) -> Interval:
        """Build from anything shaped like StockItem."""
        if isinstance(item, cls):
            return item
        return cls(
            added_at=item.added_at,
            deleted_at=item.deleted_at,
            length=item.length,
            weight=item.weight,
        )

    def present_at(self, moment: datetime) -> bool:
        """Is the item on stock at this instant?"""
        moment = _instant(moment)
        return _instant(self.added_at) <= moment and (
            self.deleted_at is None or _instant(self.deleted_at) >= moment
        )

    def overlaps(self, window_start: datetime, window_end: datetime) -> bool:
        """Was the item on stock at some instant in [window_start, window_end]?"""
        return _instant(self.added_at) <= _instant(window_end) and (
            self.deleted_at is None or _instant(self.deleted_at) >= _instant(window_start)
        )

    def lifespan_seconds(self) -> int | None:
        """Elapsed whole seconds between add and delete (floored), None if on stock."""
        if self.deleted_at is None:
            return None
        return (_instant(self.deleted_at) - _instant(self.added_at)) // ONE_SECOND

    def normalized(self, tz: tzinfo) -> Interval:
        """Same interval in UTC, naive timestamps read as wall time in tz."""
        return replace(
            self,
            added_at=to_utc(self.added_at, tz),
            deleted_at=to_utc(self.deleted_at, tz),
        )


@dataclass(frozen=True)
class Window:
    """
    Closed query window [start, end].

    Both endpoints are inclusive, matching Interval.overlaps.
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if _instant(self.start) > _instant(self.end):
            raise InvalidRange(start=self.start, end=self.end)

    def contains(self, moment: datetime | None) -> bool:
        """Does a timestamp fall within the window (inclusive)?"""
        if moment is None:
            return False
        return _instant(self.start) <= _instant(moment) <= _instant(self.end)

    def days(self, tz: tzinfo) -> Iterator[date]:
        """Calendar days from floor(start) to floor(end) in tz, ascending."""
        day = localize(self.start, tz).date()
        last = localize(self.end, tz).date()
        while day <= last:
            yield day
            day += timedelta(days=1)
