"""
Appointment Repository Port

Interface for appointment data access.
"""

from datetime import date, datetime
from typing import Protocol, runtime_checkable

from medreminder.domains.appointments.domain.entities.appointment import Appointment
from medreminder.domains.appointments.domain.value_objects.appointment_status import AppointmentStatus


@runtime_checkable
class IAppointmentRepository(Protocol):
    """
    Appointment repository interface.

    Example:
        ```python
        class SQLAlchemyAppointmentRepository(IAppointmentRepository):
            async def find_by_id(self, appointment_id: int) -> Appointment | None:
                ...
        ```
    """

    async def find_by_id(self, appointment_id: int) -> Appointment | None:
        """
        Find appointment by ID.

        Returns:
            Appointment if found, None otherwise
        """
        ...

    async def find_by_doctor_and_date(
        self,
        doctor_id: int,
        appointment_date: date,
        statuses: tuple[AppointmentStatus, ...] | None = None,
    ) -> list[Appointment]:
        """
        Find a doctor's appointments on one day.

        Args:
            doctor_id: Doctor ID
            appointment_date: Calendar day
            statuses: Optional status filter

        Returns:
            Appointments ordered by start time
        """
        ...

    async def find_pending_reminders(self, appointment_date: date) -> list[Appointment]:
        """Active appointments on `appointment_date` whose reminder was not sent."""
        ...

    async def find_active_until(self, appointment_date: date) -> list[Appointment]:
        """Active appointments dated on or before `appointment_date`."""
        ...

    async def save(self, appointment: Appointment) -> Appointment:
        """Create or update an appointment."""
        ...

    async def delete_completed_before(self, cutoff: datetime) -> int:
        """Delete completed appointments whose completion is before `cutoff`."""
        ...

    async def count_by_status(self, appointment_date: date) -> dict[AppointmentStatus, int]:
        """Count appointments of one day per status."""
        ...
