"""
Reschedule Appointment Use Case
"""

import logging
from dataclasses import dataclass
from datetime import date, time

from medreminder.core.clock import IClock
from medreminder.core.domain import EntityNotFoundException, ValidationException
from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository
from medreminder.domains.appointments.application.services.conflict_resolver import AppointmentConflictResolver
from medreminder.domains.appointments.application.use_cases.book_appointment import resolve_duration
from medreminder.domains.appointments.domain.entities.appointment import Appointment

logger = logging.getLogger(__name__)


@dataclass
class RescheduleAppointmentRequest:
    """Fields left as None keep their current value."""

    appointment_date: date | None = None
    start_time: time | None = None
    duration_minutes: int | None = None
    end_time: time | None = None
    location: str | None = None
    notes: str | None = None


class RescheduleAppointmentUseCase:
    """
    Moves or resizes an appointment. The appointment itself is excluded from
    the conflict check.
    """

    def __init__(self, appointment_repository: IAppointmentRepository, clock: IClock):
        self.appointment_repo = appointment_repository
        self.clock = clock
        self.conflict_resolver = AppointmentConflictResolver(appointment_repository)

    async def execute(self, appointment_id: int, request: RescheduleAppointmentRequest) -> Appointment:
        appointment = await self.appointment_repo.find_by_id(appointment_id)
        if appointment is None:
            raise EntityNotFoundException("Appointment", appointment_id)

        new_date = request.appointment_date or appointment.appointment_date
        new_start = request.start_time or appointment.start_time
        if new_date is None or new_start is None:
            raise ValidationException("Appointment date and time are required")

        timing_changed = any(
            value is not None
            for value in (request.appointment_date, request.start_time, request.duration_minutes, request.end_time)
        )

        if timing_changed:
            if request.appointment_date is not None and request.appointment_date < self.clock.now().date():
                raise ValidationException("Appointment date cannot be in the past", field="appointment_date")

            if request.duration_minutes is None and request.end_time is None:
                duration = appointment.duration_minutes
            else:
                duration = resolve_duration(new_start, request.duration_minutes, request.end_time)

            await self.conflict_resolver.ensure_available(
                doctor_id=appointment.doctor_id,
                appointment_date=new_date,
                start_time=new_start,
                duration_minutes=duration,
                exclude_appointment_id=appointment.id,
            )
            appointment.reschedule(appointment_date=new_date, start_time=new_start, duration_minutes=duration)

        if request.location is not None:
            appointment.location = request.location
        if request.notes is not None:
            appointment.notes = request.notes

        saved = await self.appointment_repo.save(appointment)
        logger.info(f"Appointment {appointment_id} updated")
        return saved
