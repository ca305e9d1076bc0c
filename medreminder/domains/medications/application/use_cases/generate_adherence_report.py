"""
Generate Adherence Report Use Case

Weekly report over every active medication; entries under the threshold are
logged as low adherence.
"""

import logging
from datetime import timedelta

from medreminder.core.clock import IClock
from medreminder.domains.medications.application.dto.reminder_dto import AdherenceReport, AdherenceReportEntry
from medreminder.domains.medications.application.ports.dose_record_repository import IDoseRecordRepository
from medreminder.domains.medications.application.ports.medication_repository import IMedicationRepository
from medreminder.domains.medications.domain.services.adherence_calculator import AdherenceCalculator

logger = logging.getLogger(__name__)


class GenerateAdherenceReportUseCase:
    def __init__(
        self,
        medication_repository: IMedicationRepository,
        dose_record_repository: IDoseRecordRepository,
        clock: IClock,
        window_days: int = 7,
        low_threshold: int = 80,
    ):
        self.medication_repo = medication_repository
        self.dose_record_repo = dose_record_repository
        self.clock = clock
        self.window_days = window_days
        self.low_threshold = low_threshold

    async def execute(self) -> AdherenceReport:
        now = self.clock.now()
        since = now - timedelta(days=self.window_days)
        report = AdherenceReport(window_days=self.window_days, threshold=self.low_threshold)

        medications = await self.medication_repo.find_active_on(now.date())
        for medication in medications:
            try:
                records = await self.dose_record_repo.find_by_patient(medication.patient_id, since, medication.id)
            except Exception as e:
                logger.error(f"Error loading dose history for medication {medication.id}: {e}", exc_info=True)
                continue

            stats = AdherenceCalculator.summarize(records)
            if stats.total == 0:
                continue
            report.entries.append(
                AdherenceReportEntry(
                    patient_id=medication.patient_id,
                    medication_id=medication.id,  # type: ignore[arg-type]
                    medication_name=medication.name,
                    stats=stats,
                )
            )

        for entry in report.low_adherence:
            logger.warning(
                f"Low adherence: patient {entry.patient_id} {entry.medication_name} "
                f"{entry.stats.rate}% ({entry.stats.taken}/{entry.stats.total})"
            )
        logger.info(
            f"Weekly adherence report: {len(report.entries)} medications, "
            f"{len(report.low_adherence)} below {self.low_threshold}%"
        )
        return report
