"""
Django Rollman: roll stock tracking and interval statistics.

Usage:
    from rollman import rolls, RollError

    roll = rolls.create(Decimal('10.5'), Decimal('120'))
    rolls.delete(roll.pk)
    rolls.statistics(start, end)
"""


def __getattr__(name):
    """Lazy import to avoid circular imports during app loading."""
    if name == 'rolls':
        from rollman.service import Rolls
        return Rolls
    elif name == 'RollError':
        from rollman.exceptions import RollError
        return RollError
    elif name == 'InvalidInput':
        from rollman.exceptions import InvalidInput
        return InvalidInput
    elif name == 'InvalidRange':
        from rollman.exceptions import InvalidRange
        return InvalidRange
    elif name == 'RollNotFound':
        from rollman.exceptions import RollNotFound
        return RollNotFound
    elif name == 'Roll':
        from rollman.models.roll import Roll
        return Roll
    elif name == 'RollFilter':
        from rollman.filters import RollFilter
        return RollFilter
    elif name == 'StatisticsReport':
        from rollman.statistics import StatisticsReport
        return StatisticsReport
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = [
    'rolls',
    'RollError',
    'InvalidInput',
    'InvalidRange',
    'RollNotFound',
    'Roll',
    'RollFilter',
    'StatisticsReport',
]

__version__ = '0.1.0'
