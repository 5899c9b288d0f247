"""
Roll model: one physical roll on (or once on) stock.
"""

from datetime import datetime
from decimal import Decimal

from django.core.validators import MinValueValidator
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from rollman.filters import RollFilter, to_q
from rollman.intervals import Interval
from rollman.planner import overlap_q


class RollQuerySet(models.QuerySet):
    """QuerySet with the presence filters used by the service."""

    def on_stock(self):
        """Rolls not deleted yet."""
        return self.filter(deleted_at__isnull=True)

    def deleted(self):
        """Rolls already taken off stock."""
        return self.filter(deleted_at__isnull=False)

    def on_stock_between(self, start: datetime, end: datetime):
        """Rolls on stock at some instant in [start, end]."""
        return self.filter(overlap_q(start, end))

    def matching(self, roll_filter: RollFilter):
        """Rolls satisfying every bound of a listing filter."""
        return self.filter(to_q(roll_filter))

    def find_all(self, predicate) -> list:
        """Evaluate the queryset and keep rows for which predicate(roll) holds."""
        return [roll for roll in self if predicate(roll)]


class Roll(models.Model):
    """
    A roll with immutable measures and a presence interval.

    Rules:
    - length, weight and added_at never change after creation
    - deleted_at is set at most once (logical delete)
    - rows are NEVER removed; deleted rolls feed historical statistics
    """

    length = models.DecimalField(
        max_digits=9,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0.001'))],
        verbose_name=_('Length'),
    )
    weight = models.DecimalField(
        max_digits=9,
        decimal_places=3,
        validators=[MinValueValidator(Decimal('0.001'))],
        verbose_name=_('Weight'),
    )

    added_at = models.DateTimeField(
        default=timezone.now,
        db_index=True,
        verbose_name=_('Added at'),
    )
    deleted_at = models.DateTimeField(
        null=True,
        blank=True,
        db_index=True,
        verbose_name=_('Deleted at'),
        help_text=_('Empty = still on stock.'),
    )

    objects = RollQuerySet.as_manager()

    class Meta:
        verbose_name = _('Roll')
        verbose_name_plural = _('Rolls')
        ordering = ['id']
        indexes = [
            models.Index(fields=['added_at', 'deleted_at'], name='rollman_roll_presence_idx'),
        ]

    # ══════════════════════════════════════════════════════════════
    # PROPERTIES
    # ══════════════════════════════════════════════════════════════

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    @property
    def interval(self) -> Interval:
        """Presence interval and measures as a value object."""
        return Interval.from_item(self)

    # ══════════════════════════════════════════════════════════════
    # METHODS
    # ══════════════════════════════════════════════════════════════

    def present_at(self, moment: datetime) -> bool:
        return self.interval.present_at(moment)

    def overlaps(self, start: datetime, end: datetime) -> bool:
        return self.interval.overlaps(start, end)

    def lifespan_seconds(self) -> int | None:
        return self.interval.lifespan_seconds()

    def __str__(self) -> str:
        state = f" (deleted {self.deleted_at:%Y-%m-%d %H:%M})" if self.deleted_at else ""
        return f"Roll #{self.pk}: {self.length} x {self.weight}{state}"
