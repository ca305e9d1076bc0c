"""
Single-delivery of medication reminders.

The reminder pass and the per-medication triggers both send through here.
A slot is claimed in the repository before dispatch, so whichever path gets
there second sees the claim and backs off. A failed dispatch gives the claim
back so a later attempt can retry.
"""

import logging
from datetime import datetime

from medreminder.core.clock import to_local
from medreminder.domains.medications.application.dto.reminder_dto import ReminderFireOutcome
from medreminder.domains.medications.application.ports.medication_repository import IMedicationRepository
from medreminder.domains.medications.application.services.reminder_messages import build_medication_reminder
from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.medications.domain.services.dedup_ledger import ReminderDedupLedger
from medreminder.domains.shared.application.ports.notification_dispatcher import INotificationDispatcher
from medreminder.domains.shared.domain.entities.user import User

logger = logging.getLogger(__name__)


class ReminderDelivery:
    def __init__(
        self,
        medication_repository: IMedicationRepository,
        dispatcher: INotificationDispatcher,
        ledger: ReminderDedupLedger,
    ):
        self.medication_repo = medication_repository
        self.dispatcher = dispatcher
        self.ledger = ledger

    async def deliver(
        self,
        medication: Medication,
        patient: User,
        scheduled_time: str,
        now: datetime,
    ) -> ReminderFireOutcome:
        """
        Send one reminder unless it was already sent today.

        Returns:
            SENT, ALREADY_HANDLED or FAILED
        """
        if self.ledger.is_handled(medication, scheduled_time, now):
            return ReminderFireOutcome.ALREADY_HANDLED

        slot_key = self.ledger.slot_key(scheduled_time)
        day = to_local(now, self.ledger.tz).date()
        if not await self.medication_repo.claim_reminder(medication.id, slot_key, day, now):  # type: ignore[arg-type]
            logger.debug(f"Reminder {scheduled_time} for medication {medication.id} already claimed")
            return ReminderFireOutcome.ALREADY_HANDLED

        payload = build_medication_reminder(medication, scheduled_time, patient)
        try:
            delivered = await self.dispatcher.send(patient.notification_channel_id, payload)  # type: ignore[arg-type]
        except Exception:
            await self.medication_repo.release_reminder(medication.id, slot_key, day)  # type: ignore[arg-type]
            raise

        if not delivered:
            await self.medication_repo.release_reminder(medication.id, slot_key, day)  # type: ignore[arg-type]
            logger.warning(f"Reminder {scheduled_time} for medication {medication.id} not delivered, will retry")
            return ReminderFireOutcome.FAILED

        self.ledger.mark_handled(medication, scheduled_time, now)
        await self.medication_repo.update_reminder_markers(medication.id, scheduled_time, now)  # type: ignore[arg-type]
        logger.info(f"Reminder sent to patient {patient.id} for {medication.name} at {scheduled_time}")
        return ReminderFireOutcome.SENT
