from medreminder.domains.medications.infrastructure.scheduler.timer_registry import (
    MedicationTimerRegistry,
    ReminderTimerEntry,
)

__all__ = ["MedicationTimerRegistry", "ReminderTimerEntry"]
