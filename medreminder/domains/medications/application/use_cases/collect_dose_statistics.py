import logging
from datetime import date

from medreminder.core.clock import IClock, local_day_bounds
from medreminder.domains.medications.application.ports.dose_record_repository import IDoseRecordRepository
from medreminder.domains.medications.domain.value_objects.dose_status import DoseStatus

logger = logging.getLogger(__name__)


class CollectDoseStatisticsUseCase:
    """Counts one local day's dose records by status."""

    def __init__(self, dose_record_repository: IDoseRecordRepository, clock: IClock):
        self.dose_record_repo = dose_record_repository
        self.clock = clock

    async def execute(self, day: date | None = None) -> dict[str, int]:
        day = day or self.clock.now().date()
        start, end = local_day_bounds(day, self.clock.tz)
        counts = await self.dose_record_repo.count_by_status(start, end)
        stats = {status.value: counts.get(status, 0) for status in DoseStatus}
        logger.info(f"Dose statistics for {day}: {stats}")
        return stats
