"""
Appointment overlap rules.

Intervals are half-open: an appointment ending at 10:30 does not conflict
with one starting at 10:30. Only scheduled and confirmed appointments occupy
the calendar.
"""

from collections.abc import Iterable

from medreminder.domains.appointments.domain.entities.appointment import Appointment


def intervals_overlap(start_a: int, end_a: int, start_b: int, end_b: int) -> bool:
    return start_a < end_b and end_a > start_b


def find_conflicts(
    appointments: Iterable[Appointment],
    start_minutes: int,
    duration_minutes: int,
    exclude_appointment_id: int | None = None,
) -> list[Appointment]:
    """
    Active appointments overlapping [start, start + duration).

    Args:
        appointments: Same doctor, same day
        start_minutes: Candidate start in minutes since midnight
        duration_minutes: Candidate duration
        exclude_appointment_id: Appointment being edited, ignored in the check
    """
    end_minutes = start_minutes + duration_minutes
    return [
        a
        for a in appointments
        if a.status.is_active()
        and (exclude_appointment_id is None or a.id != exclude_appointment_id)
        and intervals_overlap(start_minutes, end_minutes, a.start_minutes, a.end_minutes)
    ]
