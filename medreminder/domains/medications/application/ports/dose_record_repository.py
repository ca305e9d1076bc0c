"""
Dose Record Repository Port
"""

from datetime import datetime
from typing import Protocol, runtime_checkable

from medreminder.domains.medications.domain.entities.dose_record import DoseRecord
from medreminder.domains.medications.domain.value_objects.dose_status import DoseStatus


@runtime_checkable
class IDoseRecordRepository(Protocol):
    """
    Dose history repository interface.
    """

    async def exists_for_slot(
        self,
        medication_id: int,
        scheduled_time: str,
        day_start: datetime,
        day_end: datetime,
    ) -> bool:
        """
        Check whether any record exists for a scheduled slot on one day.

        Args:
            medication_id: Medication ID
            scheduled_time: HH:MM slot
            day_start: Start of the local day (inclusive)
            day_end: End of the local day (exclusive)
        """
        ...

    async def add(self, record: DoseRecord) -> DoseRecord:
        """Persist a new dose record."""
        ...

    async def find_by_patient(
        self,
        patient_id: int,
        since: datetime,
        medication_id: int | None = None,
    ) -> list[DoseRecord]:
        """
        Find a patient's records recorded at or after `since`.

        Args:
            patient_id: Patient ID
            since: Lower bound on taken_at
            medication_id: Optional medication filter
        """
        ...

    async def count_by_status(self, start: datetime, end: datetime) -> dict[DoseStatus, int]:
        """Count records per status with taken_at in [start, end)."""
        ...

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete records with taken_at before `cutoff`. Returns the number deleted."""
        ...
