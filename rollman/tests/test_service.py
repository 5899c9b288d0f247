"""
Tests for Rolls service API.
"""

import logging
from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest
from django.db import connection
from django.test.utils import CaptureQueriesContext

from rollman import rolls, InvalidInput, InvalidRange, RollError, RollNotFound
from rollman.filters import RollFilter
from rollman.models import Roll


pytestmark = pytest.mark.django_db


def updates(queries):
    return [q for q in queries if q['sql'].lstrip().upper().startswith('UPDATE')]


class TestRollsCreate:
    """Tests for rolls.create()."""

    def test_create_stores_measures(self):
        """Create saves length, weight and an open interval."""
        roll = rolls.create(Decimal('12.5'), Decimal('340.125'))

        roll.refresh_from_db()
        assert roll.length == Decimal('12.5')
        assert roll.weight == Decimal('340.125')
        assert roll.deleted_at is None

    def test_added_at_in_reporting_zone(self):
        """added_at is "now" expressed in Moscow time."""
        roll = rolls.create(Decimal('1'), Decimal('1'))

        assert roll.added_at.utcoffset() == timedelta(hours=3)

    def test_accepts_strings_and_ints(self):
        roll = rolls.create('10.250', 7)

        assert roll.length == Decimal('10.250')
        assert roll.weight == Decimal('7')

    @pytest.mark.parametrize('length, weight', [
        (None, Decimal('1')),
        (Decimal('1'), None),
        (Decimal('0'), Decimal('1')),
        (Decimal('1'), Decimal('-5')),
        ('abc', Decimal('1')),
        (Decimal('1234567'), Decimal('1')),
        (Decimal('1'), Decimal('1.2345')),
        (Decimal('NaN'), Decimal('1')),
    ])
    def test_invalid_measures(self, length, weight):
        """Bad input raises InvalidInput and writes nothing."""
        with pytest.raises(InvalidInput) as exc:
            rolls.create(length, weight)

        assert exc.value.code == 'INVALID_INPUT'
        assert Roll.objects.count() == 0


class TestRollsDelete:
    """Tests for rolls.delete()."""

    def test_delete_sets_deleted_at(self):
        roll = rolls.create(Decimal('10'), Decimal('100'))

        deleted = rolls.delete(roll.pk)

        assert deleted.deleted_at is not None
        assert deleted.deleted_at >= roll.added_at
        assert Roll.objects.deleted().filter(pk=roll.pk).exists()

    def test_delete_is_idempotent(self):
        """Second delete returns the same deleted_at and writes nothing."""
        roll = rolls.create(Decimal('10'), Decimal('100'))

        with CaptureQueriesContext(connection) as first_call:
            first = rolls.delete(roll.pk)
        with CaptureQueriesContext(connection) as second_call:
            second = rolls.delete(roll.pk)

        assert first.deleted_at == second.deleted_at
        assert len(updates(first_call.captured_queries)) == 1
        assert updates(second_call.captured_queries) == []

    def test_repeated_delete_is_logged(self, caplog):
        roll = rolls.create(Decimal('10'), Decimal('100'))
        rolls.delete(roll.pk)

        with caplog.at_level(logging.WARNING, logger='rollman'):
            rolls.delete(roll.pk)

        assert 'rolls.roll.delete_repeated' in caplog.messages

    def test_delete_unknown_id(self):
        with pytest.raises(RollNotFound) as exc:
            rolls.delete(999)

        assert exc.value.code == 'ROLL_NOT_FOUND'
        assert '999' in exc.value.message

    def test_deleted_roll_stays_queryable(self):
        """Logical delete: the row is still there."""
        roll = rolls.create(Decimal('10'), Decimal('100'))
        rolls.delete(roll.pk)

        assert rolls.get(roll.pk).is_deleted


class TestRollsGet:
    """Tests for rolls.get()."""

    def test_get_unknown_id(self):
        with pytest.raises(RollNotFound):
            rolls.get(12345)

    def test_get_malformed_id(self):
        with pytest.raises(RollNotFound):
            rolls.get('abc')

    def test_errors_share_a_base(self):
        """All service failures are RollError."""
        assert issubclass(RollNotFound, RollError)
        assert issubclass(InvalidInput, RollError)
        assert issubclass(InvalidRange, RollError)


class TestRollsList:
    """Tests for rolls.list_rolls()."""

    def test_list_everything_by_default(self, make_roll, at):
        first = make_roll(at(2026, 1, 1))
        second = make_roll(at(2026, 1, 2), at(2026, 1, 3))

        assert list(rolls.list_rolls()) == [first, second]

    def test_list_by_weight(self, make_roll, at):
        make_roll(at(2026, 1, 1), weight='50')
        heavy = make_roll(at(2026, 1, 1), weight='500')

        assert list(rolls.list_rolls(RollFilter(weight_min=Decimal('100')))) == [heavy]

    def test_list_by_delete_date_skips_on_stock(self, make_roll, at):
        make_roll(at(2026, 1, 1))
        gone = make_roll(at(2026, 1, 1), at(2026, 1, 2))

        found = rolls.list_rolls(RollFilter(delete_date_max=at(2026, 12, 31)))

        assert list(found) == [gone]

    def test_naive_filter_dates_use_reporting_zone(self, make_roll, at):
        """Naive 02:00 means 02:00 Moscow, i.e. 23:00 UTC the day before."""
        roll = make_roll(at(2026, 1, 2, 1, 30))

        assert list(rolls.list_rolls(RollFilter(add_date_min=datetime(2026, 1, 2, 2)))) == []
        assert list(rolls.list_rolls(RollFilter(add_date_min=datetime(2026, 1, 2, 1)))) == [roll]

    def test_list_inverted_filter(self):
        with pytest.raises(InvalidInput):
            rolls.list_rolls(RollFilter(length_min=Decimal('5'), length_max=Decimal('1')))

    def test_list_non_finite_bound(self):
        with pytest.raises(InvalidInput) as exc:
            rolls.list_rolls(RollFilter(length_min=Decimal('NaN'), length_max=Decimal('5')))

        assert set(exc.value.errors) == {'length_min'}


class TestRollsStatistics:
    """Tests for rolls.statistics() against the database."""

    def test_statistics_over_stored_rolls(self, make_roll, at):
        make_roll(at(2025, 12, 31, 23, 59), length='10', weight='100')
        make_roll(at(2026, 1, 1, 10), at(2026, 1, 1, 10, 10), length='20', weight='200')
        make_roll(at(2025, 1, 1), at(2025, 6, 1), length='99', weight='999')  # gone before
        make_roll(at(2026, 3, 1), length='99', weight='999')  # arrives after

        report = rolls.statistics(at(2026, 1, 1), at(2026, 2, 8))

        assert report.added_count == 1
        assert report.deleted_count == 1
        assert report.average_length == Decimal('15')
        assert report.total_weight == Decimal('300')
        assert report.min_life_span_seconds == 600
        assert report.day_with_max_count == date(2026, 1, 1)
        assert report.day_with_min_count == date(2026, 1, 2)

    def test_statistics_without_rolls(self, at):
        report = rolls.statistics(at(2026, 1, 1), at(2026, 2, 8))

        assert report.added_count == 0
        assert report.total_weight is None
        assert report.average_weight is None

    def test_inverted_range_fails_before_querying(self, django_assert_num_queries):
        """Scenario E through the service: no query runs."""
        with django_assert_num_queries(0):
            with pytest.raises(InvalidRange):
                rolls.statistics(datetime(2026, 2, 1), datetime(2026, 1, 1))

    def test_naive_window(self, make_roll, at):
        """Naive bounds are Moscow wall time."""
        make_roll(at(2026, 1, 1, 0, 30))

        report = rolls.statistics(datetime(2026, 1, 1), datetime(2026, 1, 1, 1))

        assert report.added_count == 1

    def test_daily_series(self, make_roll, at):
        make_roll(at(2026, 1, 2, 12), weight='100')

        snapshots = rolls.daily(at(2026, 1, 1), at(2026, 1, 3))

        assert [(s.day, s.count) for s in snapshots] == [
            (date(2026, 1, 1), 0),
            (date(2026, 1, 2), 1),
            (date(2026, 1, 3), 1),
        ]

    def test_statistics_with_daily_share_one_query(self, make_roll, at, django_assert_num_queries):
        """Report and series come from the same candidate fetch."""
        make_roll(at(2026, 1, 2, 12), weight='100')

        with django_assert_num_queries(1):
            report, snapshots = rolls.statistics_with_daily(at(2026, 1, 1), at(2026, 1, 3))

        assert report.added_count == 1
        assert report.total_weight == Decimal('100')
        assert [s.count for s in snapshots] == [0, 1, 1]

