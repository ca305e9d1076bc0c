"""
Scheduler context.

Owns the AsyncIOScheduler shared by the periodic tasks and the
per-medication timer registry. Built once by the application lifespan.
"""

import logging
from datetime import date
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler  # type: ignore[import-not-found]
from pytz import timezone
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from medreminder.config.settings import Settings
from medreminder.core.container import DependencyContainer
from medreminder.core.scheduler.periodic_tasks import PeriodicTaskRunner
from medreminder.domains.medications.application.dto.reminder_dto import ReminderFireOutcome
from medreminder.domains.medications.infrastructure.scheduler.timer_registry import MedicationTimerRegistry

logger = logging.getLogger(__name__)


class SchedulerContext:
    """
    Scheduler, periodic tasks and timer registry of one application instance.

    Example:
        ```python
        context = SchedulerContext(settings, container, session_factory)
        await context.start()
        ...
        await context.stop()
        ```
    """

    def __init__(
        self,
        settings: Settings,
        container: DependencyContainer,
        session_factory: async_sessionmaker[AsyncSession],
        scheduler: AsyncIOScheduler | None = None,
    ):
        self.settings = settings
        self.container = container
        self.session_factory = session_factory
        self.scheduler = scheduler or AsyncIOScheduler(timezone=timezone(settings.SCHEDULER_TIMEZONE))
        self.periodic_tasks = PeriodicTaskRunner(self.scheduler, container, session_factory, settings)
        self.timer_registry: MedicationTimerRegistry | None = None
        if settings.TIMER_REGISTRY_ENABLED:
            self.timer_registry = MedicationTimerRegistry(
                self.scheduler,
                self.fire_reminder,
                timezone_name=settings.TIMER_REGISTRY_TIMEZONE,
            )
        self._is_running = False

    @property
    def is_running(self) -> bool:
        return self._is_running

    async def fire_reminder(self, medication_id: int, scheduled_time: str) -> ReminderFireOutcome:
        """Trigger handler: one database session per firing."""
        async with self.session_factory() as session:
            use_case = self.container.medications.create_fire_scheduled_reminder_use_case(session)
            return await use_case.execute(medication_id, scheduled_time)

    async def rebuild_timers(self, today: date | None = None) -> int:
        """Register triggers for every schedulable medication whose patient has a channel."""
        if self.timer_registry is None:
            return 0

        today = today or self.container.get_clock().now().date()
        async with self.session_factory() as session:
            medications = await self.container.medications.create_medication_repository(session).find_schedulable(
                today
            )
            patients = await self.container.shared.create_user_repository(session).find_by_ids(
                list({m.patient_id for m in medications})
            )
        return self.timer_registry.rebuild((m, patients.get(m.patient_id)) for m in medications)

    async def start(self) -> None:
        if self._is_running:
            logger.warning("Scheduler context already running")
            return

        self.periodic_tasks.register()
        if self.timer_registry is not None:
            try:
                await self.rebuild_timers()
            except Exception as e:
                logger.error(f"Could not rebuild medication timers: {e}", exc_info=True)
            self.container.set_timer_registry(self.timer_registry)

        self.scheduler.start()
        self._is_running = True
        logger.info(f"Scheduler started with {len(self.scheduler.get_jobs())} jobs")

    async def stop(self) -> None:
        if not self._is_running:
            return

        self.container.set_timer_registry(None)
        if self.timer_registry is not None:
            self.timer_registry.cancel_all()
        self.scheduler.shutdown(wait=False)
        self._is_running = False
        logger.info("Scheduler stopped")

    def jobs_info(self) -> list[dict[str, Any]]:
        info = []
        for job in self.scheduler.get_jobs():
            next_run = getattr(job, "next_run_time", None)
            info.append(
                {
                    "id": job.id,
                    "name": job.name,
                    "next_run": next_run.isoformat() if next_run else None,
                }
            )
        return info
