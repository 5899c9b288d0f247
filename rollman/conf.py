"""
Rollman configuration.

Usage in settings.py:
    ROLLMAN = {
        "REPORTING_TIMEZONE": "Europe/Moscow",
        "MAX_INTEGER_DIGITS": 6,
        "MAX_DECIMAL_PLACES": 3,
    }
"""

from dataclasses import dataclass
from typing import Any
from zoneinfo import ZoneInfo

from django.conf import settings


@dataclass
class RollmanSettings:
    """Rollman configuration settings."""

    # Zone for "now" at creation and for calendar-day boundaries in reports
    REPORTING_TIMEZONE: str = "Europe/Moscow"

    # Precision of length and weight (digits before / after the point)
    MAX_INTEGER_DIGITS: int = 6
    MAX_DECIMAL_PLACES: int = 3


def get_rollman_settings() -> RollmanSettings:
    """Load settings from Django settings."""
    user_settings: dict[str, Any] = getattr(settings, "ROLLMAN", {})
    return RollmanSettings(**{
        k: v for k, v in user_settings.items()
        if k in RollmanSettings.__dataclass_fields__
    })


def reporting_timezone() -> ZoneInfo:
    """The fixed reporting zone as a tzinfo."""
    return ZoneInfo(get_rollman_settings().REPORTING_TIMEZONE)


class _LazySettings:
    """Lazy proxy that re-reads settings on every attribute access."""

    def __getattr__(self, name):
        return getattr(get_rollman_settings(), name)


rollman_settings = _LazySettings()
