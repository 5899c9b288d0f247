"""
Roll services: modular organization of roll operations.

    from rollman.services import RollQueries, RollMovements
"""

from rollman.services.movements import RollMovements
from rollman.services.queries import RollQueries

__all__ = [
    'RollQueries',
    'RollMovements',
]
