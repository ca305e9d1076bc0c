from medreminder.domains.medications.application.services.missed_dose_detector import MissedDoseDetector
from medreminder.domains.medications.application.services.reminder_delivery import ReminderDelivery
from medreminder.domains.medications.application.services.reminder_messages import build_medication_reminder

__all__ = ["MissedDoseDetector", "ReminderDelivery", "build_medication_reminder"]
