"""
Time of day value object.

Medication schedules are expressed as wall-clock times at minute granularity
("08:00", "20:30") interpreted in the reference timezone.
"""

import re
from dataclasses import dataclass
from datetime import time

from medreminder.core.domain import ValidationException, ValueObject

TIME_PATTERN = re.compile(r"^([0-1]?[0-9]|2[0-3]):[0-5][0-9]$")


@dataclass(frozen=True, order=True)
class TimeOfDay(ValueObject):
    """
    Wall-clock time with minute granularity.

    Example:
        ```python
        TimeOfDay.parse("8:05").label  # "08:05"
        TimeOfDay.parse("20:30").minutes  # 1230
        ```
    """

    hour: int
    minute: int

    def _validate(self) -> None:
        if not 0 <= self.hour <= 23 or not 0 <= self.minute <= 59:
            raise ValidationException(f"Invalid time of day: {self.hour}:{self.minute}", field="time")

    @classmethod
    def parse(cls, value: str) -> "TimeOfDay":
        """Parse an HH:MM string (leading zero optional)."""
        if not isinstance(value, str) or not TIME_PATTERN.match(value.strip()):
            raise ValidationException(
                f"Invalid time format '{value}'. Use HH:MM (24-hour format)",
                field="time",
            )
        hour, minute = value.strip().split(":")
        return cls(hour=int(hour), minute=int(minute))

    @classmethod
    def from_minutes(cls, minutes: int) -> "TimeOfDay":
        minutes %= 24 * 60
        return cls(hour=minutes // 60, minute=minutes % 60)

    @property
    def minutes(self) -> int:
        """Minutes since midnight."""
        return self.hour * 60 + self.minute

    @property
    def label(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def to_time(self) -> time:
        return time(self.hour, self.minute)

    def __str__(self) -> str:
        return self.label
