"""
Roll Service: The single public interface for all roll operations.

Usage:
    from rollman import rolls, RollError

    roll = rolls.create(Decimal('12.5'), Decimal('340'))
    rolls.delete(roll.pk)
    rolls.list_rolls(RollFilter(weight_min=Decimal('100')))
    rolls.statistics(start, end).total_weight
"""

from rollman.services.movements import RollMovements
from rollman.services.queries import RollQueries


class Rolls(RollQueries, RollMovements):
    """
    Single interface for all roll operations.

    Queries (get, list_rolls, statistics, daily) take no locks.
    Movements (create, delete) run in atomic transactions; see each
    method's docstring.
    """
