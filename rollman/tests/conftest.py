"""
Pytest fixtures for Rollman tests.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from itertools import count
from zoneinfo import ZoneInfo

import pytest

from rollman.models import Roll


MOSCOW = ZoneInfo('Europe/Moscow')


@dataclass
class Item:
    """Stand-in stock item that never touches the database."""

    id: int
    length: Decimal
    weight: Decimal
    added_at: datetime
    deleted_at: datetime | None = None


@pytest.fixture
def moscow():
    """Reporting timezone used across the suite."""
    return MOSCOW


@pytest.fixture
def at():
    """Build an aware Moscow datetime: at(2026, 1, 15, 12)."""
    def build(*args):
        return datetime(*args, tzinfo=MOSCOW)
    return build


@pytest.fixture
def make_item():
    """Factory for in-memory stock items with sequential ids."""
    ids = count(1)

    def build(added_at, deleted_at=None, length='10', weight='100'):
        return Item(
            id=next(ids),
            length=Decimal(length),
            weight=Decimal(weight),
            added_at=added_at,
            deleted_at=deleted_at,
        )
    return build


@pytest.fixture
def make_roll(db):
    """Factory for saved rolls with explicit timestamps."""
    def build(added_at, deleted_at=None, length='10', weight='100'):
        return Roll.objects.create(
            length=Decimal(length),
            weight=Decimal(weight),
            added_at=added_at,
            deleted_at=deleted_at,
        )
    return build
