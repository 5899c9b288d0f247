"""
Stock item protocol: the shape the analytics engine reads.

The Roll model implements it, but the engine accepts any object exposing
these attributes (unsaved models, plain dataclasses, rows from elsewhere).
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Protocol, runtime_checkable


@runtime_checkable
class StockItem(Protocol):
    """
    A tracked unit with measurements and a presence interval.

    Attributes:
        id: Storage identity, None before the item is saved
        added_at: When the item entered stock
        deleted_at: When it left stock, None while still on stock
        length: Fixed-point length
        weight: Fixed-point weight
    """

    id: int | None
    added_at: datetime
    deleted_at: datetime | None
    length: Decimal
    weight: Decimal
