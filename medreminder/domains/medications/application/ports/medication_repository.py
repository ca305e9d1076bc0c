"""
Medication Repository Port
"""

from datetime import date, datetime
from typing import Protocol, runtime_checkable

from medreminder.domains.medications.domain.entities.medication import Medication


@runtime_checkable
class IMedicationRepository(Protocol):
    """
    Medication repository interface.
    """

    async def find_by_id(self, medication_id: int) -> Medication | None:
        """
        Find medication by ID.

        Returns:
            Medication if found, None otherwise
        """
        ...

    async def find_active_on(self, day: date) -> list[Medication]:
        """
        Find medications that are active with `day` inside their date range.

        Args:
            day: Calendar day in the reference timezone

        Returns:
            Candidate medications for reminders and missed-dose detection
        """
        ...

    async def find_active_by_patient(self, patient_id: int) -> list[Medication]:
        """Find active medications of a patient, regardless of date range."""
        ...

    async def find_schedulable(self, from_day: date) -> list[Medication]:
        """Find active medications whose date range has not ended before `from_day`."""
        ...

    async def save(self, medication: Medication) -> Medication:
        """Create or update a medication."""
        ...

    async def update_reminder_markers(self, medication_id: int, scheduled_time: str, reminded_at: datetime) -> None:
        """
        Persist the marker of one scheduled time after a successful dispatch.

        Only that key and `last_reminded_at` are written, so concurrent
        markers for other times and schedule edits are kept.
        """
        ...

    async def claim_reminder(self, medication_id: int, slot_key: str, day: date, claimed_at: datetime) -> bool:
        """
        Atomically reserve the reminder of a slot for a local day.

        Returns:
            True if this caller owns the slot, False if it was already claimed
        """
        ...

    async def release_reminder(self, medication_id: int, slot_key: str, day: date) -> None:
        """Give a claimed slot back after a failed dispatch."""
        ...

    async def delete_reminder_claims_before(self, day: date) -> int:
        """Drop claims of local days before `day`. Returns the number deleted."""
        ...

    async def delete(self, medication_id: int) -> bool:
        """Delete a medication. Returns False if it did not exist."""
        ...
