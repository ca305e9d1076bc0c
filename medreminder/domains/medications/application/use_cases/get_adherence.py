"""
Adherence Use Cases

Adherence rate and weekday pattern of a patient over a trailing window.
"""

import logging
from datetime import timedelta

from medreminder.core.clock import IClock
from medreminder.core.domain import ValidationException
from medreminder.domains.medications.application.ports.dose_record_repository import IDoseRecordRepository
from medreminder.domains.medications.domain.services.adherence_calculator import (
    AdherenceCalculator,
    AdherenceStats,
    WeekdayAdherence,
)

logger = logging.getLogger(__name__)


class GetAdherenceUseCase:
    """
    Adherence rate over the last `days` days.

    rate = taken / total * 100, zero when there are no records.
    """

    def __init__(self, dose_record_repository: IDoseRecordRepository, clock: IClock):
        self.dose_record_repo = dose_record_repository
        self.clock = clock

    async def execute(self, patient_id: int, medication_id: int | None = None, days: int = 30) -> AdherenceStats:
        if days < 1:
            raise ValidationException("Window must be at least one day", field="days")

        since = self.clock.now() - timedelta(days=days)
        records = await self.dose_record_repo.find_by_patient(patient_id, since, medication_id)
        stats = AdherenceCalculator.summarize(records)

        logger.debug(f"Adherence for patient {patient_id} over {days} days: {stats.rate}% of {stats.total}")
        return stats


class GetWeeklyAdherencePatternUseCase:
    """Adherence per weekday over the last `weeks` weeks, Sunday first."""

    def __init__(self, dose_record_repository: IDoseRecordRepository, clock: IClock):
        self.dose_record_repo = dose_record_repository
        self.clock = clock

    async def execute(
        self,
        patient_id: int,
        medication_id: int | None = None,
        weeks: int = 4,
    ) -> list[WeekdayAdherence]:
        if weeks < 1:
            raise ValidationException("Window must be at least one week", field="weeks")

        since = self.clock.now() - timedelta(weeks=weeks)
        records = await self.dose_record_repo.find_by_patient(patient_id, since, medication_id)
        return AdherenceCalculator.weekly_pattern(records, self.clock.tz)
