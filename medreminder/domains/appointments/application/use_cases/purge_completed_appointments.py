"""
Purge Completed Appointments Use Case
"""

import logging
from datetime import timedelta

from medreminder.core.clock import IClock
from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository

logger = logging.getLogger(__name__)


class PurgeCompletedAppointmentsUseCase:
    def __init__(self, appointment_repository: IAppointmentRepository, clock: IClock, retention_days: int = 180):
        self.appointment_repo = appointment_repository
        self.clock = clock
        self.retention_days = retention_days

    async def execute(self) -> int:
        cutoff = self.clock.now() - timedelta(days=self.retention_days)
        deleted = await self.appointment_repo.delete_completed_before(cutoff)
        logger.info(f"Purged {deleted} completed appointments older than {cutoff:%Y-%m-%d}")
        return deleted
