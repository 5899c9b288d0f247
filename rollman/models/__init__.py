"""
Rollman Models.

- Roll: a physical roll with measures and a presence interval
"""

from rollman.models.roll import Roll, RollQuerySet

__all__ = [
    'Roll',
    'RollQuerySet',
]
