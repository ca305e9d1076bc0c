"""
Get Available Slots Use Case
"""

from datetime import date

from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository
from medreminder.domains.appointments.domain.entities.appointment import DEFAULT_DURATION_MINUTES, Appointment
from medreminder.domains.appointments.domain.services.slot_finder import AvailableSlot, ClinicHours, generate_slots
from medreminder.domains.appointments.domain.value_objects.appointment_status import ACTIVE_STATUSES


class GetAvailableSlotsUseCase:
    def __init__(self, appointment_repository: IAppointmentRepository, clinic_hours: ClinicHours):
        self.appointment_repo = appointment_repository
        self.clinic_hours = clinic_hours

    async def execute(
        self,
        doctor_id: int,
        appointment_date: date,
        duration_minutes: int = DEFAULT_DURATION_MINUTES,
    ) -> list[AvailableSlot]:
        """
        List candidate slots of a doctor's day with their availability.

        Raises:
            ValidationException: If the duration is out of range
        """
        Appointment.validate_duration(duration_minutes)
        existing = await self.appointment_repo.find_by_doctor_and_date(
            doctor_id, appointment_date, statuses=ACTIVE_STATUSES
        )
        return generate_slots(existing, self.clinic_hours, duration_minutes)
