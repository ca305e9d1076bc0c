"""
Fire Scheduled Reminder Use Case

Handler behind a per-medication daily trigger. The medication is re-read on
every firing so a trigger never acts on stale state, and delivery goes through
the same slot claim as the reminder pass so the two paths never double-send.
"""

import logging

from medreminder.core.clock import IClock
from medreminder.domains.medications.application.dto.reminder_dto import ReminderFireOutcome
from medreminder.domains.medications.application.ports.medication_repository import IMedicationRepository
from medreminder.domains.medications.application.services.reminder_delivery import ReminderDelivery
from medreminder.domains.medications.domain.services.dedup_ledger import ReminderDedupLedger
from medreminder.domains.shared.application.ports.notification_dispatcher import INotificationDispatcher
from medreminder.domains.shared.application.ports.user_repository import IUserRepository

logger = logging.getLogger(__name__)


class FireScheduledReminderUseCase:
    def __init__(
        self,
        medication_repository: IMedicationRepository,
        user_repository: IUserRepository,
        dispatcher: INotificationDispatcher,
        clock: IClock,
        ledger: ReminderDedupLedger,
    ):
        self.medication_repo = medication_repository
        self.user_repo = user_repository
        self.dispatcher = dispatcher
        self.clock = clock
        self.ledger = ledger
        self.delivery = ReminderDelivery(medication_repository, dispatcher, ledger)

    async def execute(self, medication_id: int, scheduled_time: str) -> ReminderFireOutcome:
        now = self.clock.now()
        today = now.date()

        medication = await self.medication_repo.find_by_id(medication_id)
        if medication is None or not medication.is_active or today > medication.end_date:
            logger.info(f"Medication {medication_id} is no longer active, trigger {scheduled_time} obsolete")
            return ReminderFireOutcome.INACTIVE
        if today < medication.start_date:
            return ReminderFireOutcome.NOT_STARTED
        if scheduled_time not in medication.times:
            logger.info(f"Time {scheduled_time} was removed from medication {medication_id}")
            return ReminderFireOutcome.STALE

        patient = await self.user_repo.find_by_id(medication.patient_id)
        if patient is None or not patient.is_active or not patient.has_notification_channel():
            return ReminderFireOutcome.NO_CHANNEL

        outcome = await self.delivery.deliver(medication, patient, scheduled_time, now)
        if outcome == ReminderFireOutcome.SENT:
            logger.info(f"Scheduled reminder sent for medication {medication_id} at {scheduled_time}")
        return outcome
