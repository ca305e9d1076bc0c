from medreminder.domains.medications.domain.value_objects.dose_status import DoseStatus

__all__ = ["DoseStatus"]
