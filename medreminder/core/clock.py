"""
Clock abstraction.

Every time-dependent component reads "now" through an `IClock` so tests can
pin the wall clock. Calendar days and minutes-since-midnight are always taken
in the clock's reference timezone.
"""

from datetime import UTC, date, datetime, time, timedelta
from typing import Protocol, runtime_checkable

import pytz
from pytz.tzinfo import BaseTzInfo


@runtime_checkable
class IClock(Protocol):
    """Source of the current instant in the reference timezone."""

    @property
    def tz(self) -> BaseTzInfo: ...

    def now(self) -> datetime:
        """Return the current timezone-aware instant in the reference timezone."""
        ...


class SystemClock:
    """Wall clock backed by the system time."""

    def __init__(self, timezone_name: str = "UTC"):
        self._tz = pytz.timezone(timezone_name)

    @property
    def tz(self) -> BaseTzInfo:
        return self._tz

    def now(self) -> datetime:
        return datetime.now(self._tz)


def to_local(moment: datetime, tz: BaseTzInfo) -> datetime:
    """Convert an instant to the reference timezone (naive values are UTC)."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment.astimezone(tz)


def localize(day: date, at: time, tz: BaseTzInfo) -> datetime:
    """Build the aware instant for a local date and wall time."""
    return tz.localize(datetime.combine(day, at))


def local_day_bounds(day: date, tz: BaseTzInfo) -> tuple[datetime, datetime]:
    """Return the half-open instant range [start, end) covering a local calendar day."""
    start = localize(day, time.min, tz)
    end = localize(day + timedelta(days=1), time.min, tz)
    return start, end
