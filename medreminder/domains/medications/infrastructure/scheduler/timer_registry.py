"""Per-medication reminder triggers.

Keeps one daily APScheduler cron job per (medication, time of day) and the
map from medication id to the jobs it owns, so triggers can be replaced or
cancelled when a medication or its patient changes.

Features:
- Replace semantics: existing triggers are removed before new ones are added
- Self-cancellation when a firing finds the medication inactive
- Firings of the same medication run one at a time
- Rebuild from persisted state at startup
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

from apscheduler.jobstores.base import JobLookupError  # type: ignore[import-not-found]
from apscheduler.schedulers.asyncio import AsyncIOScheduler  # type: ignore[import-not-found]
from apscheduler.triggers.cron import CronTrigger  # type: ignore[import-not-found]
from pytz import timezone

from medreminder.domains.medications.application.dto.reminder_dto import ReminderFireOutcome
from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.shared.domain.value_objects.time_of_day import TimeOfDay
from medreminder.domains.shared.domain.entities.user import User

logger = logging.getLogger(__name__)

FireHandler = Callable[[int, str], Awaitable[ReminderFireOutcome]]


@dataclass
class ReminderTimerEntry:
    """Triggers owned by one medication, keyed by HH:MM."""

    medication_id: int
    patient_id: int
    job_ids: dict[str, str] = field(default_factory=dict)


class MedicationTimerRegistry:
    """Registry of per-medication daily triggers.

    Attributes:
        scheduler: Shared APScheduler instance.
        tz: Timezone the cron triggers are evaluated in.
        _fire_handler: Coroutine called as handler(medication_id, scheduled_time).
        _entries: Medication id -> owned triggers.
    """

    def __init__(
        self,
        scheduler: AsyncIOScheduler,
        fire_handler: FireHandler,
        timezone_name: str = "UTC",
        misfire_grace_seconds: int = 300,
    ):
        self.scheduler = scheduler
        self.tz = timezone(timezone_name)
        self.misfire_grace_seconds = misfire_grace_seconds
        self._fire_handler = fire_handler
        self._entries: dict[int, ReminderTimerEntry] = {}
        self._locks: dict[int, asyncio.Lock] = {}

    @staticmethod
    def job_id(medication_id: int, scheduled_time: str) -> str:
        return f"medication_{medication_id}_{scheduled_time.replace(':', '')}"

    @property
    def entries(self) -> dict[int, ReminderTimerEntry]:
        return dict(self._entries)

    def schedule_for_medication(self, medication: Medication, patient: User | None) -> ReminderTimerEntry | None:
        """Replace the triggers of a medication.

        Existing triggers are cancelled first. Nothing is registered for an
        inactive medication or a patient without a linked channel. A time that
        cannot be scheduled is logged and skipped.

        Returns:
            The new entry, or None when no trigger was registered.
        """
        medication_id: int = medication.id  # type: ignore[assignment]
        self.cancel_for_medication(medication_id)

        if not medication.is_active:
            logger.debug(f"Medication {medication_id} inactive, no triggers registered")
            return None
        if patient is None or not patient.has_notification_channel():
            logger.debug(f"Patient of medication {medication_id} has no channel, no triggers registered")
            return None

        entry = ReminderTimerEntry(medication_id=medication_id, patient_id=medication.patient_id)
        for scheduled_time in medication.times:
            job_id = self.job_id(medication_id, scheduled_time)
            try:
                at = TimeOfDay.parse(scheduled_time)
                self.scheduler.add_job(
                    self._fire,
                    trigger=CronTrigger(hour=at.hour, minute=at.minute, timezone=self.tz),
                    id=job_id,
                    replace_existing=True,
                    name=f"Reminder {medication.name} at {at.label}",
                    kwargs={"medication_id": medication_id, "scheduled_time": at.label},
                    max_instances=1,
                    coalesce=True,
                    misfire_grace_time=self.misfire_grace_seconds,
                )
                entry.job_ids[at.label] = job_id
            except Exception as e:
                logger.error(f"Could not schedule reminder {scheduled_time} for medication {medication_id}: {e}")

        if not entry.job_ids:
            return None

        self._entries[medication_id] = entry
        logger.info(f"Scheduled {len(entry.job_ids)} daily reminders for medication {medication_id}")
        return entry

    def cancel_for_medication(self, medication_id: int) -> bool:
        """Cancel every trigger of a medication. Returns False if it had none."""
        entry = self._entries.pop(medication_id, None)
        self._discard_lock(medication_id)
        if entry is None:
            return False

        for job_id in entry.job_ids.values():
            self._remove_job(job_id)

        logger.info(f"Cancelled {len(entry.job_ids)} reminder triggers for medication {medication_id}")
        return True

    def cancel_for_patient(self, patient_id: int) -> int:
        """Cancel the triggers of every medication of a patient. Returns the medication count."""
        medication_ids = [mid for mid, entry in self._entries.items() if entry.patient_id == patient_id]
        for medication_id in medication_ids:
            self.cancel_for_medication(medication_id)
        return len(medication_ids)

    def cancel_all(self) -> None:
        for medication_id in list(self._entries):
            self.cancel_for_medication(medication_id)

    def rebuild(self, medications: Iterable[tuple[Medication, User | None]]) -> int:
        """Drop every trigger and register triggers for the given medications.

        Returns:
            Number of medications with at least one trigger.
        """
        self.cancel_all()
        scheduled = 0
        for medication, patient in medications:
            if self.schedule_for_medication(medication, patient) is not None:
                scheduled += 1
        logger.info(f"Timer registry rebuilt: {scheduled} medications with daily triggers")
        return scheduled

    def jobs_info(self) -> list[dict[str, Any]]:
        info = []
        for entry in self._entries.values():
            for scheduled_time, job_id in entry.job_ids.items():
                job = self.scheduler.get_job(job_id)
                next_run = getattr(job, "next_run_time", None) if job else None
                info.append(
                    {
                        "id": job_id,
                        "medication_id": entry.medication_id,
                        "patient_id": entry.patient_id,
                        "scheduled_time": scheduled_time,
                        "next_run": next_run.isoformat() if next_run else None,
                    }
                )
        return info

    async def _fire(self, medication_id: int, scheduled_time: str) -> ReminderFireOutcome | None:
        entry = self._entries.get(medication_id)
        lock = self._locks.setdefault(medication_id, asyncio.Lock())
        async with lock:
            try:
                outcome = await self._fire_handler(medication_id, scheduled_time)
            except Exception as e:
                logger.error(
                    f"Error firing reminder {scheduled_time} for medication {medication_id}: {e}",
                    exc_info=True,
                )
                return None

            if self._entries.get(medication_id) is not entry:
                logger.debug(f"Triggers of medication {medication_id} were replaced while firing, keeping them")
            elif outcome == ReminderFireOutcome.INACTIVE:
                self.cancel_for_medication(medication_id)
            elif outcome == ReminderFireOutcome.STALE:
                self._drop_time(medication_id, scheduled_time)

        if medication_id not in self._entries:
            self._discard_lock(medication_id)
        return outcome

    def _discard_lock(self, medication_id: int) -> None:
        lock = self._locks.get(medication_id)
        if lock is not None and not lock.locked():
            del self._locks[medication_id]

    def _drop_time(self, medication_id: int, scheduled_time: str) -> None:
        entry = self._entries.get(medication_id)
        if entry is None:
            return
        job_id = entry.job_ids.pop(scheduled_time, None)
        if job_id:
            self._remove_job(job_id)
        if not entry.job_ids:
            self._entries.pop(medication_id, None)

    def _remove_job(self, job_id: str) -> None:
        try:
            self.scheduler.remove_job(job_id)
        except JobLookupError:
            logger.debug(f"Job {job_id} already removed")
