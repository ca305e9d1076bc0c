"""
Bookable slot generation.

Candidate slots start every `step` minutes from opening time and must end by
closing time. Slots falling entirely inside the break are omitted; every
other slot is reported with its availability.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from medreminder.domains.appointments.domain.entities.appointment import Appointment
from medreminder.domains.appointments.domain.services.conflict_rules import find_conflicts
from medreminder.domains.shared.domain.value_objects.time_of_day import TimeOfDay


@dataclass(frozen=True)
class ClinicHours:
    opening: TimeOfDay
    closing: TimeOfDay
    break_start: TimeOfDay
    break_end: TimeOfDay
    step_minutes: int = 15

    @classmethod
    def from_strings(
        cls,
        opening: str = "09:00",
        closing: str = "17:00",
        break_start: str = "12:00",
        break_end: str = "13:00",
        step_minutes: int = 15,
    ) -> "ClinicHours":
        return cls(
            opening=TimeOfDay.parse(opening),
            closing=TimeOfDay.parse(closing),
            break_start=TimeOfDay.parse(break_start),
            break_end=TimeOfDay.parse(break_end),
            step_minutes=step_minutes,
        )


@dataclass(frozen=True)
class AvailableSlot:
    start: TimeOfDay
    end: TimeOfDay
    available: bool

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start.label, "end": self.end.label, "available": self.available}


def generate_slots(
    appointments: Iterable[Appointment],
    hours: ClinicHours,
    duration_minutes: int,
) -> list[AvailableSlot]:
    booked = list(appointments)
    slots: list[AvailableSlot] = []

    current = hours.opening.minutes
    while current + duration_minutes <= hours.closing.minutes:
        end = current + duration_minutes
        inside_break = current >= hours.break_start.minutes and end <= hours.break_end.minutes
        if not inside_break:
            slots.append(
                AvailableSlot(
                    start=TimeOfDay.from_minutes(current),
                    end=TimeOfDay.from_minutes(end),
                    available=not find_conflicts(booked, current, duration_minutes),
                )
            )
        current += hours.step_minutes

    return slots
