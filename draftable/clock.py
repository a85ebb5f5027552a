"""
Clocks used to evaluate publish state.

Every publish-state check asks a clock for "now" instead of reading the
wall clock directly, so tests can pin or move time per model or per manager.
"""

from datetime import datetime, timedelta
from typing import Optional, Protocol, runtime_checkable

from django.utils import timezone


@runtime_checkable
class Clock(Protocol):
    """Anything with a ``now()`` returning an aware datetime."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Clock backed by Django's ``timezone.now``."""

    def now(self) -> datetime:
        return timezone.now()

    def __repr__(self):
        return "SystemClock()"


class FrozenClock:
    """
    Clock pinned to a fixed instant.

    The instant only changes through ``travel_to`` or ``advance``, which
    makes scheduled records observable at exact points in time.
    """

    def __init__(self, instant: Optional[datetime] = None):
        self._instant = instant if instant is not None else timezone.now()

    def now(self) -> datetime:
        return self._instant

    def travel_to(self, instant: datetime) -> datetime:
        """Move the clock to ``instant`` and return it."""
        self._instant = instant
        return self._instant

    def advance(self, **kwargs) -> datetime:
        """Move the clock forward by ``timedelta(**kwargs)``."""
        self._instant = self._instant + timedelta(**kwargs)
        return self._instant

    def __repr__(self):
        return f"FrozenClock({self._instant.isoformat()})"
