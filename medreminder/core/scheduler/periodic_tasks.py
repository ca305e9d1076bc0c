"""Periodic maintenance and reminder tasks.

Cron jobs registered on the shared AsyncIOScheduler:

- reminder_pass: every REMINDER_TICK_MINUTES, medication reminders and
  missed-dose detection
- no_show_sweep: hourly
- health_ping: hourly
- retention_cleanup: daily at CLEANUP_HOUR
- daily_statistics: daily at DAILY_STATS_HOUR
- appointment_reminders: daily at APPOINTMENT_REMINDER_HOUR
- adherence_report: weekly on WEEKLY_REPORT_DAY at WEEKLY_REPORT_HOUR

Every task opens its own database session, and a task still running when its
next firing comes due is not started twice.
"""

import logging
import resource
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler  # type: ignore[import-not-found]
from apscheduler.triggers.cron import CronTrigger  # type: ignore[import-not-found]
from pytz import timezone
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from medreminder.config.settings import Settings
from medreminder.core.container import DependencyContainer
from medreminder.core.domain import EntityNotFoundException

logger = logging.getLogger(__name__)

TaskHandler = Callable[[], Awaitable[dict[str, Any]]]


@dataclass
class PeriodicTask:
    name: str
    description: str
    trigger: CronTrigger
    handler: TaskHandler


class PeriodicTaskRunner:
    """Registers and runs the periodic tasks.

    Attributes:
        scheduler: Shared APScheduler instance.
        tasks: Task name -> definition.
        _in_flight: Names of tasks currently running.
    """

    JOB_PREFIX = "periodic_"

    def __init__(
        self,
        scheduler: AsyncIOScheduler,
        container: DependencyContainer,
        session_factory: async_sessionmaker[AsyncSession],
        settings: Settings,
    ):
        self.scheduler = scheduler
        self.container = container
        self.session_factory = session_factory
        self.settings = settings
        self.tz = timezone(settings.SCHEDULER_TIMEZONE)
        self._in_flight: set[str] = set()
        self.tasks: dict[str, PeriodicTask] = {task.name: task for task in self._build_tasks()}

    def _build_tasks(self) -> list[PeriodicTask]:
        s = self.settings
        return [
            PeriodicTask(
                "reminder_pass",
                f"Medication reminders every {s.REMINDER_TICK_MINUTES} minutes",
                CronTrigger(minute=f"*/{s.REMINDER_TICK_MINUTES}", timezone=self.tz),
                self._reminder_pass,
            ),
            PeriodicTask(
                "no_show_sweep",
                "Mark overdue appointments as no-show",
                CronTrigger(minute=0, timezone=self.tz),
                self._no_show_sweep,
            ),
            PeriodicTask(
                "health_ping",
                "Scheduler health log",
                CronTrigger(minute=0, timezone=self.tz),
                self._health_ping,
            ),
            PeriodicTask(
                "retention_cleanup",
                "Purge old dose records and completed appointments",
                CronTrigger(hour=s.CLEANUP_HOUR, minute=0, timezone=self.tz),
                self._retention_cleanup,
            ),
            PeriodicTask(
                "daily_statistics",
                "Log today's dose and appointment counts",
                CronTrigger(hour=s.DAILY_STATS_HOUR, minute=0, timezone=self.tz),
                self._daily_statistics,
            ),
            PeriodicTask(
                "appointment_reminders",
                "Remind patients of tomorrow's appointments",
                CronTrigger(hour=s.APPOINTMENT_REMINDER_HOUR, minute=0, timezone=self.tz),
                self._appointment_reminders,
            ),
            PeriodicTask(
                "adherence_report",
                "Weekly adherence report",
                CronTrigger(day_of_week=s.WEEKLY_REPORT_DAY, hour=s.WEEKLY_REPORT_HOUR, minute=0, timezone=self.tz),
                self._adherence_report,
            ),
        ]

    def register(self) -> None:
        for task in self.tasks.values():
            self.scheduler.add_job(
                self._run_scheduled,
                trigger=task.trigger,
                id=f"{self.JOB_PREFIX}{task.name}",
                replace_existing=True,
                name=task.description,
                kwargs={"name": task.name},
                max_instances=1,
                coalesce=True,
            )
        logger.info(f"Registered {len(self.tasks)} periodic tasks (timezone {self.tz})")

    def is_running(self, name: str) -> bool:
        return name in self._in_flight

    async def run_task(self, name: str) -> dict[str, Any]:
        """Run one task now.

        Raises:
            EntityNotFoundException: Unknown task name
        """
        task = self.tasks.get(name)
        if task is None:
            raise EntityNotFoundException("PeriodicTask", name)

        if name in self._in_flight:
            logger.warning(f"Periodic task {name} still running, skipping this invocation")
            return {"task": name, "skipped": True}

        self._in_flight.add(name)
        try:
            result = await task.handler()
        finally:
            self._in_flight.discard(name)

        return {"task": name, "skipped": False, "result": result}

    async def _run_scheduled(self, name: str) -> None:
        try:
            await self.run_task(name)
        except Exception as e:
            logger.error(f"Periodic task {name} failed: {e}", exc_info=True)

    # Task handlers

    async def _reminder_pass(self) -> dict[str, Any]:
        async with self.session_factory() as session:
            use_case = self.container.medications.create_run_reminder_pass_use_case(session)
            result = await use_case.execute()
        return result.to_dict()

    async def _no_show_sweep(self) -> dict[str, Any]:
        async with self.session_factory() as session:
            use_case = self.container.appointments.create_mark_no_shows_use_case(session)
            marked = await use_case.execute()
        return {"marked": marked}

    async def _health_ping(self) -> dict[str, Any]:
        jobs = len(self.scheduler.get_jobs())
        peak_rss_kb = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
        logger.info(f"Scheduler health: {jobs} jobs, peak RSS {peak_rss_kb // 1024} MB")
        return {"jobs": jobs, "peak_rss_kb": peak_rss_kb}

    async def _retention_cleanup(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        async with self.session_factory() as session:
            try:
                purge = self.container.medications.create_purge_dose_history_use_case(session)
                result["dose_records"] = await purge.execute()
            except Exception as e:
                logger.error(f"Dose history cleanup failed: {e}", exc_info=True)
                result["dose_records"] = None

            try:
                purge = self.container.appointments.create_purge_completed_appointments_use_case(session)
                result["appointments"] = await purge.execute()
            except Exception as e:
                logger.error(f"Appointment cleanup failed: {e}", exc_info=True)
                result["appointments"] = None
        return result

    async def _daily_statistics(self) -> dict[str, Any]:
        async with self.session_factory() as session:
            doses = await self.container.medications.create_collect_dose_statistics_use_case(session).execute()
            appointments = await self.container.appointments.create_collect_appointment_statistics_use_case(
                session
            ).execute()
        return {"doses": doses, "appointments": appointments}

    async def _appointment_reminders(self) -> dict[str, Any]:
        async with self.session_factory() as session:
            use_case = self.container.appointments.create_send_appointment_reminders_use_case(session)
            result = await use_case.execute()
        return result.to_dict()

    async def _adherence_report(self) -> dict[str, Any]:
        async with self.session_factory() as session:
            use_case = self.container.medications.create_generate_adherence_report_use_case(session)
            report = await use_case.execute()
        return report.to_dict()
