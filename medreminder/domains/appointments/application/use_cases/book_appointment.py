"""
Book Appointment Use Case
"""

import logging
from dataclasses import dataclass
from datetime import date, time

from medreminder.core.clock import IClock
from medreminder.core.domain import ValidationException
from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository
from medreminder.domains.appointments.application.services.conflict_resolver import AppointmentConflictResolver
from medreminder.domains.appointments.domain.entities.appointment import (
    DEFAULT_DURATION_MINUTES,
    Appointment,
    duration_between,
)
from medreminder.domains.appointments.domain.value_objects.appointment_status import AppointmentType
from medreminder.domains.shared.application.ports.user_repository import IUserRepository
from medreminder.domains.shared.domain.value_objects.user_role import UserRole

logger = logging.getLogger(__name__)


def resolve_duration(start_time: time, duration_minutes: int | None, end_time: time | None) -> int:
    """Duration from an explicit value, an explicit end time, or the default."""
    if end_time is not None:
        duration = duration_between(start_time, end_time)
        if duration_minutes is not None and duration_minutes != duration:
            raise ValidationException("Duration does not match end time", field="end_time")
    else:
        duration = duration_minutes if duration_minutes is not None else DEFAULT_DURATION_MINUTES
    Appointment.validate_duration(duration)
    return duration


@dataclass
class BookAppointmentRequest:
    """Request for booking an appointment."""

    patient_id: int
    doctor_id: int
    appointment_date: date
    start_time: time
    duration_minutes: int | None = None
    end_time: time | None = None
    appointment_type: AppointmentType = AppointmentType.CONSULTATION
    location: str = ""
    reason: str = ""
    notes: str = ""


class BookAppointmentUseCase:
    """
    Creates an appointment after validating references and the doctor's calendar.
    """

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        user_repository: IUserRepository,
        clock: IClock,
    ):
        self.appointment_repo = appointment_repository
        self.user_repo = user_repository
        self.clock = clock
        self.conflict_resolver = AppointmentConflictResolver(appointment_repository)

    async def execute(self, request: BookAppointmentRequest) -> Appointment:
        """
        Raises:
            ValidationException: Unknown patient or doctor, past date, bad duration
            AppointmentConflictException: Doctor already booked in that interval
        """
        patient = await self.user_repo.find_by_id(request.patient_id)
        if patient is None or patient.role != UserRole.PATIENT:
            raise ValidationException(f"Patient {request.patient_id} does not exist", field="patient_id")

        doctor = await self.user_repo.find_by_id(request.doctor_id)
        if doctor is None or doctor.role != UserRole.DOCTOR or not doctor.is_active:
            raise ValidationException(f"Doctor {request.doctor_id} does not exist", field="doctor_id")

        if request.appointment_date < self.clock.now().date():
            raise ValidationException("Appointment date cannot be in the past", field="appointment_date")

        duration = resolve_duration(request.start_time, request.duration_minutes, request.end_time)

        await self.conflict_resolver.ensure_available(
            doctor_id=request.doctor_id,
            appointment_date=request.appointment_date,
            start_time=request.start_time,
            duration_minutes=duration,
        )

        appointment = Appointment(
            patient_id=request.patient_id,
            doctor_id=request.doctor_id,
            appointment_date=request.appointment_date,
            start_time=request.start_time,
            duration_minutes=duration,
            appointment_type=request.appointment_type,
            location=request.location,
            reason=request.reason,
            notes=request.notes,
        )
        saved = await self.appointment_repo.save(appointment)

        logger.info(
            f"Appointment booked: {saved.id} for patient {request.patient_id} with doctor {request.doctor_id} "
            f"on {request.appointment_date} at {request.start_time:%H:%M}"
        )
        return saved
