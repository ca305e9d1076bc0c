"""
Appointment conflict resolver.

Decides whether a candidate interval collides with the doctor's existing
scheduled or confirmed appointments on the same day. A conflict is a hard
rejection; there is no waitlist or automatic rescheduling.
"""

import logging
from datetime import date, time

from medreminder.core.domain import AppointmentConflictException
from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository
from medreminder.domains.appointments.domain.entities.appointment import Appointment, minutes_of_day
from medreminder.domains.appointments.domain.services.conflict_rules import find_conflicts
from medreminder.domains.appointments.domain.value_objects.appointment_status import ACTIVE_STATUSES

logger = logging.getLogger(__name__)


class AppointmentConflictResolver:
    def __init__(self, appointment_repository: IAppointmentRepository):
        self.appointment_repo = appointment_repository

    async def find_conflicts(
        self,
        doctor_id: int,
        appointment_date: date,
        start_time: time,
        duration_minutes: int,
        exclude_appointment_id: int | None = None,
    ) -> list[Appointment]:
        existing = await self.appointment_repo.find_by_doctor_and_date(
            doctor_id, appointment_date, statuses=ACTIVE_STATUSES
        )
        return find_conflicts(existing, minutes_of_day(start_time), duration_minutes, exclude_appointment_id)

    async def has_conflict(
        self,
        doctor_id: int,
        appointment_date: date,
        start_time: time,
        duration_minutes: int,
        exclude_appointment_id: int | None = None,
    ) -> bool:
        """
        Check the doctor's calendar for an overlapping active appointment.

        Args:
            doctor_id: Doctor ID
            appointment_date: Day of the candidate appointment
            start_time: Candidate start
            duration_minutes: Candidate duration
            exclude_appointment_id: Appointment being rescheduled

        Returns:
            True if [start, start + duration) overlaps an active appointment
        """
        conflicts = await self.find_conflicts(
            doctor_id, appointment_date, start_time, duration_minutes, exclude_appointment_id
        )
        return bool(conflicts)

    async def ensure_available(
        self,
        doctor_id: int,
        appointment_date: date,
        start_time: time,
        duration_minutes: int,
        exclude_appointment_id: int | None = None,
    ) -> None:
        """
        Raises:
            AppointmentConflictException: If the slot overlaps an active appointment
        """
        conflicts = await self.find_conflicts(
            doctor_id, appointment_date, start_time, duration_minutes, exclude_appointment_id
        )
        if conflicts:
            slot = f"{appointment_date.isoformat()} {start_time.strftime('%H:%M')} ({duration_minutes} min)"
            logger.info(f"Rejected booking for doctor {doctor_id} at {slot}: overlaps {[a.id for a in conflicts]}")
            raise AppointmentConflictException(doctor_id=doctor_id, time_slot=slot)
