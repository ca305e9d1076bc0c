"""
Appointment status use cases.

Each transition is validated by the entity; an illegal move surfaces as
InvalidOperationException.
"""

import logging

from medreminder.core.domain import EntityNotFoundException
from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository
from medreminder.domains.appointments.domain.entities.appointment import Appointment

logger = logging.getLogger(__name__)


class _AppointmentStatusUseCase:
    def __init__(self, appointment_repository: IAppointmentRepository):
        self.appointment_repo = appointment_repository

    async def _load(self, appointment_id: int) -> Appointment:
        appointment = await self.appointment_repo.find_by_id(appointment_id)
        if appointment is None:
            raise EntityNotFoundException("Appointment", appointment_id)
        return appointment


class ConfirmAppointmentUseCase(_AppointmentStatusUseCase):
    async def execute(self, appointment_id: int) -> Appointment:
        appointment = await self._load(appointment_id)
        appointment.confirm()
        saved = await self.appointment_repo.save(appointment)
        logger.info(f"Appointment {appointment_id} confirmed")
        return saved


class CompleteAppointmentUseCase(_AppointmentStatusUseCase):
    async def execute(self, appointment_id: int, diagnosis: str = "", treatment: str = "") -> Appointment:
        appointment = await self._load(appointment_id)
        appointment.complete(diagnosis=diagnosis, treatment=treatment)
        saved = await self.appointment_repo.save(appointment)
        logger.info(f"Appointment {appointment_id} completed")
        return saved


class CancelAppointmentUseCase(_AppointmentStatusUseCase):
    """Cancelling frees the interval for new bookings."""

    async def execute(self, appointment_id: int, reason: str = "") -> Appointment:
        appointment = await self._load(appointment_id)
        appointment.cancel(reason=reason)
        saved = await self.appointment_repo.save(appointment)
        logger.info(f"Appointment {appointment_id} cancelled: {reason or 'no reason given'}")
        return saved
