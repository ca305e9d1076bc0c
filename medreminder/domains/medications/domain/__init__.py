"""
Medications Domain Layer

Components:
- Entities: Medication, DoseRecord
- Value Objects: DoseStatus
- Domain Services: time-window matching, reminder dedup ledger, adherence
  calculator
"""

from medreminder.domains.medications.domain.entities import DoseRecord, Medication
from medreminder.domains.medications.domain.value_objects import DoseStatus

__all__ = [
    "Medication",
    "DoseRecord",
    "DoseStatus",
]
