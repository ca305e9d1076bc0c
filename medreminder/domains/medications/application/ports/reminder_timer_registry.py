"""
Reminder Timer Registry Port

Lets application code keep per-medication daily triggers in step with
medication and user changes without depending on the scheduler library.
"""

from typing import Any, Protocol, runtime_checkable

from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.shared.domain.entities.user import User


@runtime_checkable
class IReminderTimerRegistry(Protocol):
    def schedule_for_medication(self, medication: Medication, patient: User | None) -> Any:
        """Replace the triggers of a medication (cancel first, then create)."""
        ...

    def cancel_for_medication(self, medication_id: int) -> bool:
        """Cancel every trigger of a medication. No-op when none exist."""
        ...

    def cancel_for_patient(self, patient_id: int) -> int:
        """Cancel the triggers of every medication owned by a patient."""
        ...
