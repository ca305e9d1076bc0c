"""
Medications Domain Ports
"""

from medreminder.domains.medications.application.ports.dose_record_repository import IDoseRecordRepository
from medreminder.domains.medications.application.ports.medication_repository import IMedicationRepository
from medreminder.domains.medications.application.ports.reminder_timer_registry import IReminderTimerRegistry

__all__ = ["IMedicationRepository", "IDoseRecordRepository", "IReminderTimerRegistry"]
