"""
Time-window matching.

Reminder passes run on a fixed cadence, so a scheduled time is considered
"now" when it lies within a tolerance of the pass instant. With a 5 minute
cadence aligned to the clock and a tolerance of 2 minutes every minute of
the day is covered by exactly one pass.
"""

from datetime import datetime, time

from medreminder.domains.shared.domain.value_objects.time_of_day import TimeOfDay

MINUTES_PER_DAY = 24 * 60


def to_minutes(value: str | time | datetime | TimeOfDay) -> int:
    """
    Minutes since midnight.

    Datetimes are read as wall-clock values, so callers pass instants already
    converted to the reference timezone.
    """
    if isinstance(value, TimeOfDay):
        return value.minutes
    if isinstance(value, str):
        return TimeOfDay.parse(value).minutes
    return value.hour * 60 + value.minute


def minutes_since(scheduled: str | time | TimeOfDay, now: datetime | time) -> int:
    """Signed minutes elapsed from `scheduled` to `now` on the same day."""
    return to_minutes(now) - to_minutes(scheduled)


def distance(scheduled: str | time | TimeOfDay, now: datetime | time, wrap_midnight: bool = False) -> int:
    delta = abs(minutes_since(scheduled, now))
    if wrap_midnight:
        delta = min(delta, MINUTES_PER_DAY - delta)
    return delta


def matches(
    scheduled: str | time | TimeOfDay,
    now: datetime | time,
    tolerance_minutes: int,
    wrap_midnight: bool = False,
) -> bool:
    """
    True iff |scheduled - now| <= tolerance, in minutes since midnight.

    Args:
        scheduled: Scheduled wall-clock time
        now: Current instant in the reference timezone
        tolerance_minutes: Accepted distance in minutes
        wrap_midnight: Measure the distance around the clock, so 23:59 and
            00:01 are two minutes apart
    """
    return distance(scheduled, now, wrap_midnight) <= tolerance_minutes


def matching_times(
    times: list[str],
    now: datetime | time,
    tolerance_minutes: int,
    wrap_midnight: bool = False,
) -> list[str]:
    return [t for t in times if matches(t, now, tolerance_minutes, wrap_midnight)]
