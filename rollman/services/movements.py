"""
Roll movements: state-changing operations (create, delete).

All methods use transaction.atomic(); delete locks the row.
"""

import logging

from django.db import transaction
from django.utils import timezone

from rollman.conf import reporting_timezone
from rollman.exceptions import RollNotFound
from rollman.measures import parse_measure
from rollman.models.roll import Roll

logger = logging.getLogger('rollman')


def _now():
    """Current instant expressed in the reporting timezone."""
    return timezone.now().astimezone(reporting_timezone())


class RollMovements:
    """Roll lifecycle methods."""

    @classmethod
    def create(cls, length, weight) -> Roll:
        """
        Put a new roll on stock.

        Raises:
            InvalidInput: If length or weight is missing, not positive,
                not a number or exceeds 6.3 digits
        """
        length = parse_measure(length, 'length')
        weight = parse_measure(weight, 'weight')

        with transaction.atomic():
            roll = Roll.objects.create(length=length, weight=weight, added_at=_now())

        logger.info(
            "rolls.roll.created",
            extra={"roll_id": roll.pk, "length": str(length), "weight": str(weight)},
        )
        return roll

    @classmethod
    def delete(cls, roll_id) -> Roll:
        """
        Take a roll off stock (logical delete).

        Idempotent: a roll that is already deleted is returned unchanged
        and nothing is written.

        Raises:
            RollNotFound: If no roll has this id

        Concurrency:
            - Runs under transaction.atomic()
            - Uses select_for_update() so only one caller sets deleted_at
        """
        with transaction.atomic():
            try:
                roll = Roll.objects.select_for_update().get(pk=roll_id)
            except (Roll.DoesNotExist, ValueError, TypeError):
                raise RollNotFound(
                    message=f'Roll with id {roll_id} not found', roll_id=roll_id
                ) from None

            if roll.deleted_at is not None:
                logger.warning(
                    "rolls.roll.delete_repeated",
                    extra={"roll_id": roll.pk},
                )
                return roll

            roll.deleted_at = _now()
            roll.save(update_fields=['deleted_at'])
            logger.info(
                "rolls.roll.deleted",
                extra={"roll_id": roll.pk},
            )
            return roll
