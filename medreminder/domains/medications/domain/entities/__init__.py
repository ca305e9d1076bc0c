from medreminder.domains.medications.domain.entities.dose_record import DoseRecord
from medreminder.domains.medications.domain.entities.medication import Medication

__all__ = ["Medication", "DoseRecord"]
