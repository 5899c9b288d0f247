"""
Roll filters: optional min/max bounds composed into one predicate.

Usage:
    roll_filter = RollFilter(length_min=Decimal('10'), delete_date_max=friday)
    keep = build_predicate(roll_filter)   # callable for in-memory items
    Roll.objects.filter(to_q(roll_filter))  # same rule for querysets

Bounds are inclusive on both ends. An absent bound imposes nothing. A roll
without deleted_at fails any delete-date bound. Inverted bounds are a
caller error (InvalidInput), never an always-false predicate.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from datetime import datetime, tzinfo
from decimal import Decimal
from typing import Any, Callable, Mapping

from django.db.models import Q
from django.utils.dateparse import parse_datetime

from rollman.conf import reporting_timezone
from rollman.exceptions import InvalidInput
from rollman.intervals import localize, to_utc
from rollman.measures import measure_problem, to_decimal

# filter prefix -> item attribute / ORM field
BOUNDED_FIELDS = {
    'id': 'id',
    'length': 'length',
    'weight': 'weight',
    'add_date': 'added_at',
    'delete_date': 'deleted_at',
}

DATE_BOUNDS = ('add_date_min', 'add_date_max', 'delete_date_min', 'delete_date_max')
DATE_ATTRS = ('added_at', 'deleted_at')

_CAMEL_KEYS = {
    'idMin': 'id_min',
    'idMax': 'id_max',
    'lengthMin': 'length_min',
    'lengthMax': 'length_max',
    'weightMin': 'weight_min',
    'weightMax': 'weight_max',
    'addDateMin': 'add_date_min',
    'addDateMax': 'add_date_max',
    'deleteDateMin': 'delete_date_min',
    'deleteDateMax': 'delete_date_max',
}


@dataclass(frozen=True)
class RollFilter:
    """Listing filter; every bound is optional."""

    id_min: int | None = None
    id_max: int | None = None
    length_min: Decimal | None = None
    length_max: Decimal | None = None
    weight_min: Decimal | None = None
    weight_max: Decimal | None = None
    add_date_min: datetime | None = None
    add_date_max: datetime | None = None
    delete_date_min: datetime | None = None
    delete_date_max: datetime | None = None

    @classmethod
    def from_params(cls, params: Mapping[str, Any], tz: tzinfo | None = None) -> RollFilter:
        """
        Build a filter from query parameters.

        Accepts snake_case or camelCase keys, ignores unknown keys and
        blank values. Naive datetimes are read as wall time in tz when given.

        Raises:
            InvalidInput: If a value cannot be parsed
        """
        known = {f.name for f in fields(cls)}
        values = {}
        errors = {}

        for key, raw in params.items():
            name = _CAMEL_KEYS.get(key, key)
            if name not in known or raw is None or raw == '':
                continue
            value = _parse_bound(name, raw)
            if value is None:
                errors[name] = f'cannot parse {raw!r}'
            else:
                values[name] = value

        if errors:
            raise InvalidInput(message='Malformed filter parameters', errors=errors)

        roll_filter = cls(**values)
        return roll_filter.localized(tz) if tz is not None else roll_filter

    def localized(self, tz: tzinfo) -> RollFilter:
        """Copy with every date bound expressed in tz."""
        return replace(self, **{
            name: localize(getattr(self, name), tz)
            for name in DATE_BOUNDS
        })

    def normalized(self, tz: tzinfo) -> RollFilter:
        """Copy with every date bound in UTC, naive bounds read as wall time in tz."""
        return replace(self, **{
            name: to_utc(getattr(self, name), tz)
            for name in DATE_BOUNDS
        })

    def bounds(self):
        """Yield (attribute, low, high) for every field with at least one bound."""
        for prefix, attr in BOUNDED_FIELDS.items():
            low = getattr(self, f'{prefix}_min')
            high = getattr(self, f'{prefix}_max')
            if low is not None or high is not None:
                yield attr, low, high

    def validate(self, tz: tzinfo | None = None) -> None:
        """
        Check bounds before any query is built.

        Naive date bounds are wall time in tz (default: reporting timezone).

        Raises:
            InvalidInput: With an errors dict naming every offending field
        """
        checked = self.normalized(tz if tz is not None else reporting_timezone())
        errors = {}

        for name in ('id_min', 'id_max'):
            value = getattr(checked, name)
            if value is not None and value < 1:
                errors[name] = 'must be a positive id'

        for name in ('length_min', 'length_max', 'weight_min', 'weight_max'):
            value = getattr(checked, name)
            if value is not None:
                problem = measure_problem(value)
                if problem:
                    errors[name] = problem

        for prefix in BOUNDED_FIELDS:
            low_name, high_name = f'{prefix}_min', f'{prefix}_max'
            if low_name in errors or high_name in errors:
                continue
            low = getattr(checked, low_name)
            high = getattr(checked, high_name)
            if low is not None and high is not None and low > high:
                errors[f'{prefix}_range'] = f'{low_name} cannot be greater than {high_name}'

        if (checked.delete_date_min is not None and checked.add_date_min is not None
                and checked.delete_date_min < checked.add_date_min):
            errors['delete_date_min'] = 'cannot be earlier than add_date_min'

        if errors:
            raise InvalidInput(message='Invalid filter', errors=errors)


def build_predicate(roll_filter: RollFilter, tz: tzinfo | None = None) -> Callable[[Any], bool]:
    """
    Conjunction of every supplied bound, as a plain callable.

    Naive datetimes, in the filter or on the items, are wall time in tz
    (default: reporting timezone).

    Raises:
        InvalidInput: If the filter does not validate
    """
    if tz is None:
        tz = reporting_timezone()
    roll_filter.validate(tz)
    checks = []
    for attr, low, high in roll_filter.normalized(tz).bounds():
        read = _date_reader(tz) if attr in DATE_ATTRS else getattr
        if low is not None:
            checks.append(_at_least(read, attr, low))
        if high is not None:
            checks.append(_at_most(read, attr, high))

    def predicate(item) -> bool:
        return all(check(item) for check in checks)

    return predicate


def to_q(roll_filter: RollFilter, tz: tzinfo | None = None) -> Q:
    """
    Queryset version of build_predicate.

    SQL comparisons against NULL are never true, so rolls still on stock
    drop out of delete-date bounds exactly as in memory.
    """
    if tz is None:
        tz = reporting_timezone()
    roll_filter.validate(tz)
    q = Q()
    for attr, low, high in roll_filter.normalized(tz).bounds():
        if low is not None:
            q &= Q(**{f'{attr}__gte': low})
        if high is not None:
            q &= Q(**{f'{attr}__lte': high})
    return q


def _date_reader(tz):
    def read(item, name, default=None):
        return to_utc(getattr(item, name, default), tz)
    return read


def _at_least(read, attr, bound):
    def check(item):
        value = read(item, attr, None)
        return value is not None and value >= bound
    return check


def _at_most(read, attr, bound):
    def check(item):
        value = read(item, attr, None)
        return value is not None and value <= bound
    return check


def _parse_bound(name: str, raw):
    if name.startswith('id_'):
        if isinstance(raw, bool):
            return None
        if isinstance(raw, int):
            return raw
        number = to_decimal(raw)
        if number is None or not number.is_finite() or number != number.to_integral_value():
            return None
        return int(number)

    if name.startswith(('length_', 'weight_')):
        number = to_decimal(raw)
        if number is None or not number.is_finite():
            return None
        return number

    if isinstance(raw, datetime):
        return raw
    try:
        return parse_datetime(str(raw))
    except ValueError:
        return None
