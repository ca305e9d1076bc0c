from medreminder.domains.medications.infrastructure.persistence.sqlalchemy.models import (
    DoseRecordModel,
    MedicationModel,
    ReminderClaimModel,
)

__all__ = ["MedicationModel", "DoseRecordModel", "ReminderClaimModel"]
