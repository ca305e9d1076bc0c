"""
Mark No-Shows Use Case
"""

import logging
from datetime import datetime, timedelta

from medreminder.core.clock import IClock
from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository

logger = logging.getLogger(__name__)


class MarkNoShowsUseCase:
    """
    Moves active appointments to no-show once their end is more than
    `grace_hours` in the past.
    """

    def __init__(self, appointment_repository: IAppointmentRepository, clock: IClock, grace_hours: int = 2):
        self.appointment_repo = appointment_repository
        self.clock = clock
        self.grace = timedelta(hours=grace_hours)

    async def execute(self, now: datetime | None = None) -> int:
        """
        Returns:
            Number of appointments marked as no-show
        """
        now = now or self.clock.now()
        candidates = await self.appointment_repo.find_active_until(now.date())

        marked = 0
        for appointment in candidates:
            if not appointment.is_overdue(now, self.clock.tz, self.grace):
                continue
            try:
                appointment.mark_no_show()
                await self.appointment_repo.save(appointment)
                marked += 1
            except Exception as e:
                logger.error(f"Error marking appointment {appointment.id} as no-show: {e}", exc_info=True)

        if marked:
            logger.info(f"Marked {marked} appointments as no-show")
        return marked
