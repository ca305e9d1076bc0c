"""
Collect Appointment Statistics Use Case
"""

import logging
from datetime import date

from medreminder.core.clock import IClock
from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository
from medreminder.domains.appointments.domain.value_objects.appointment_status import AppointmentStatus

logger = logging.getLogger(__name__)


class CollectAppointmentStatisticsUseCase:
    """Counts one day's appointments per status."""

    def __init__(self, appointment_repository: IAppointmentRepository, clock: IClock):
        self.appointment_repo = appointment_repository
        self.clock = clock

    async def execute(self, day: date | None = None) -> dict[str, int]:
        day = day or self.clock.now().date()
        counts = await self.appointment_repo.count_by_status(day)
        stats = {status.value: counts.get(status, 0) for status in AppointmentStatus}
        stats["total"] = sum(counts.values())
        logger.info(f"Appointment statistics for {day}: {stats}")
        return stats
