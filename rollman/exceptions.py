"""
Exceptions for Rollman.

All errors are RollError with a structured code for programmatic handling.
Typed subclasses let callers catch one failure kind at a time.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any


class RollError(Exception):
    """
    Structured exception for roll operations.

    Usage:
        try:
            rolls.statistics(start, end)
        except RollError as e:
            if e.code == 'INVALID_RANGE':
                print(e.message)

    Attributes:
        code: Error code for programmatic handling
        message: Human-readable message
        data: Additional context data
    """

    _default_messages = {
        'INVALID_INPUT': 'Invalid input',
        'INVALID_RANGE': 'Start of the period cannot be after its end',
        'ROLL_NOT_FOUND': 'Roll not found',
    }

    default_code = 'ROLL_ERROR'

    def __init__(self, code: str | None = None, message: str | None = None, **data):
        self.code = code or self.default_code
        self.message = message or self._default_messages.get(self.code, self.code)
        self.data = data
        super().__init__(self.message)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.code!r}, {self.message!r})"

    def as_dict(self) -> dict[str, Any]:
        """Serialize to dict (useful for APIs)."""
        return {
            'code': self.code,
            'message': self.message,
            'data': {k: _plain(v) for k, v in self.data.items()},
        }


class InvalidInput(RollError):
    """Bad measurements at creation or a malformed filter."""

    default_code = 'INVALID_INPUT'

    @property
    def errors(self) -> dict[str, str]:
        """Field -> message map collected during validation."""
        return self.data.get('errors', {})


class InvalidRange(RollError):
    """Statistics window whose start is after its end."""

    default_code = 'INVALID_RANGE'


class RollNotFound(RollError):
    """Operation targets a roll id that does not exist."""

    default_code = 'ROLL_NOT_FOUND'


def _plain(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    return value
