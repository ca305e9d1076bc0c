"""
Run Reminder Pass Use Case

One evaluation of every active medication against the current time:
dispatches due reminders once per day and logs missed doses.
"""

import logging
from datetime import datetime

from medreminder.core.clock import IClock, to_local
from medreminder.domains.medications.application.dto.reminder_dto import ReminderFireOutcome, ReminderPassResult
from medreminder.domains.medications.application.ports.medication_repository import IMedicationRepository
from medreminder.domains.medications.application.services.missed_dose_detector import MissedDoseDetector
from medreminder.domains.medications.application.services.reminder_delivery import ReminderDelivery
from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.medications.domain.services.dedup_ledger import ReminderDedupLedger
from medreminder.domains.medications.domain.services.time_window import matching_times
from medreminder.domains.shared.application.ports.notification_dispatcher import INotificationDispatcher
from medreminder.domains.shared.application.ports.user_repository import IUserRepository
from medreminder.domains.shared.domain.entities.user import User

logger = logging.getLogger(__name__)


class RunReminderPassUseCase:
    """
    Reminder tick.

    Failures are isolated per medication: a lookup, dispatch or persistence
    error is logged and counted, and the pass moves on. Sending goes through
    the same claim as the per-medication triggers, and a failed dispatch
    releases it so the next pass inside the tolerance window retries.
    """

    def __init__(
        self,
        medication_repository: IMedicationRepository,
        user_repository: IUserRepository,
        dispatcher: INotificationDispatcher,
        clock: IClock,
        ledger: ReminderDedupLedger,
        missed_dose_detector: MissedDoseDetector,
        tolerance_minutes: int = 2,
        wrap_midnight: bool = False,
    ):
        self.medication_repo = medication_repository
        self.user_repo = user_repository
        self.dispatcher = dispatcher
        self.clock = clock
        self.ledger = ledger
        self.missed_dose_detector = missed_dose_detector
        self.tolerance_minutes = tolerance_minutes
        self.wrap_midnight = wrap_midnight
        self.delivery = ReminderDelivery(medication_repository, dispatcher, ledger)

    async def execute(self, now: datetime | None = None) -> ReminderPassResult:
        """
        Execute one pass.

        Args:
            now: Instant to evaluate (defaults to the clock)

        Returns:
            Counters for this pass
        """
        now = to_local(now, self.clock.tz) if now else self.clock.now()
        result = ReminderPassResult()

        try:
            medications = await self.medication_repo.find_active_on(now.date())
            patients = await self.user_repo.find_by_ids(sorted({m.patient_id for m in medications}))
        except Exception as e:
            logger.error(f"Could not load medications for reminder pass: {e}", exc_info=True)
            result.errors.append(str(e))
            return result

        for medication in medications:
            result.checked += 1
            patient = patients.get(medication.patient_id)
            if patient is None or not patient.is_active or not patient.has_notification_channel():
                result.skipped += 1
                continue

            try:
                await self._send_due_reminders(medication, patient, now, result)
            except Exception as e:
                result.failed += 1
                result.errors.append(f"medication {medication.id}: {e}")
                logger.error(f"Error sending reminders for medication {medication.id}: {e}", exc_info=True)

            try:
                result.missed_logged += await self.missed_dose_detector.detect(medication, now)
            except Exception as e:
                result.errors.append(f"medication {medication.id}: {e}")
                logger.error(f"Error checking missed doses for medication {medication.id}: {e}", exc_info=True)

        logger.info(
            f"Reminder pass {now:%Y-%m-%d %H:%M}: {result.sent} sent, {result.already_handled} already sent, "
            f"{result.skipped} skipped, {result.failed} failed, {result.missed_logged} missed doses logged "
            f"({result.checked} medications checked)"
        )
        return result

    async def _send_due_reminders(
        self,
        medication: Medication,
        patient: User,
        now: datetime,
        result: ReminderPassResult,
    ) -> None:
        for scheduled_time in matching_times(medication.times, now, self.tolerance_minutes, self.wrap_midnight):
            outcome = await self.delivery.deliver(medication, patient, scheduled_time, now)
            if outcome == ReminderFireOutcome.SENT:
                result.sent += 1
            elif outcome == ReminderFireOutcome.ALREADY_HANDLED:
                result.already_handled += 1
            else:
                result.failed += 1
