import logging
from datetime import timedelta

from medreminder.core.clock import IClock
from medreminder.domains.medications.application.ports.dose_record_repository import IDoseRecordRepository
from medreminder.domains.medications.application.ports.medication_repository import IMedicationRepository

logger = logging.getLogger(__name__)


class PurgeDoseHistoryUseCase:
    """Deletes dose records older than the retention horizon, and reminder claims of past days."""

    def __init__(
        self,
        dose_record_repository: IDoseRecordRepository,
        clock: IClock,
        retention_days: int = 365,
        medication_repository: IMedicationRepository | None = None,
    ):
        self.dose_record_repo = dose_record_repository
        self.clock = clock
        self.retention_days = retention_days
        self.medication_repo = medication_repository

    async def execute(self) -> int:
        now = self.clock.now()
        cutoff = now - timedelta(days=self.retention_days)
        deleted = await self.dose_record_repo.delete_older_than(cutoff)
        logger.info(f"Purged {deleted} dose records older than {cutoff:%Y-%m-%d}")

        if self.medication_repo is not None:
            claims = await self.medication_repo.delete_reminder_claims_before(now.date() - timedelta(days=1))
            logger.info(f"Purged {claims} reminder claims")
        return deleted
