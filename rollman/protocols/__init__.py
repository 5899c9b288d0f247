"""
Rollman protocols: interfaces for code living outside this app.
"""

from rollman.protocols.item import StockItem

__all__ = [
    'StockItem',
]
