"""
Missed-dose detection.

A scheduled time is flagged once the pass instant is `offset` minutes past
it. Exact mode (window 0) only accepts elapsed == offset, which requires the
pass cadence to land on that minute. Window mode accepts
offset <= elapsed < offset + window; a window equal to the pass cadence
guarantees each slot is seen by exactly one pass. In both modes a record is
only created when none exists yet for (medication, time, day).
"""

import logging
from datetime import datetime

from pytz.tzinfo import BaseTzInfo

from medreminder.core.clock import local_day_bounds, to_local
from medreminder.domains.medications.application.ports.dose_record_repository import IDoseRecordRepository
from medreminder.domains.medications.domain.entities.dose_record import DoseRecord
from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.medications.domain.services.time_window import minutes_since

logger = logging.getLogger(__name__)


class MissedDoseDetector:
    def __init__(
        self,
        dose_record_repository: IDoseRecordRepository,
        tz: BaseTzInfo,
        offset_minutes: int = 30,
        window_minutes: int = 0,
    ):
        self.dose_record_repository = dose_record_repository
        self.tz = tz
        self.offset_minutes = offset_minutes
        self.window_minutes = window_minutes

    def is_due(self, elapsed_minutes: int) -> bool:
        if self.window_minutes <= 0:
            return elapsed_minutes == self.offset_minutes
        return self.offset_minutes <= elapsed_minutes < self.offset_minutes + self.window_minutes

    def due_times(self, medication: Medication, now: datetime) -> list[str]:
        local_now = to_local(now, self.tz)
        return [t for t in medication.times if self.is_due(minutes_since(t, local_now))]

    async def detect(self, medication: Medication, now: datetime) -> int:
        """
        Create "missed" records for due slots of a medication.

        Each slot is handled independently; a failing slot is logged and does
        not prevent the others.

        Returns:
            Number of records created
        """
        local_now = to_local(now, self.tz)
        day_start, day_end = local_day_bounds(local_now.date(), self.tz)
        created = 0

        for scheduled_time in self.due_times(medication, local_now):
            try:
                if await self.dose_record_repository.exists_for_slot(
                    medication.id, scheduled_time, day_start, day_end  # type: ignore[arg-type]
                ):
                    continue
                await self.dose_record_repository.add(
                    DoseRecord.missed(
                        medication_id=medication.id,  # type: ignore[arg-type]
                        patient_id=medication.patient_id,
                        scheduled_time=scheduled_time,
                        detected_at=local_now,
                    )
                )
                created += 1
                logger.info(f"Dose {scheduled_time} of medication {medication.id} marked as missed")
            except Exception as e:
                logger.error(
                    f"Error logging missed dose {scheduled_time} for medication {medication.id}: {e}",
                    exc_info=True,
                )

        return created
