from medreminder.domains.medications.infrastructure.repositories.dose_record_repository import (
    SQLAlchemyDoseRecordRepository,
)
from medreminder.domains.medications.infrastructure.repositories.medication_repository import (
    SQLAlchemyMedicationRepository,
)

__all__ = ["SQLAlchemyMedicationRepository", "SQLAlchemyDoseRecordRepository"]
