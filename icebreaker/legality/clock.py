"""
Clock: the single source of "today" for date-based legality.

Rotation and the alternate formats ask whether a release date is already
in the past. They never read the wall clock directly; a Clock is injected
instead so tests can pin the date.
"""

from collections.abc import Callable
from datetime import date

Clock = Callable[[], date]


def system_clock() -> date:
    """Today's date from the system clock."""
    return date.today()


def fixed_clock(today: date) -> Clock:
    """A clock that always reports the given date."""

    def _clock() -> date:
        return today

    return _clock


def is_past(day: date | None, clock: Clock = system_clock) -> bool:
    """True if the date is set and strictly before today."""
    if day is None:
        return False
    return day < clock()
