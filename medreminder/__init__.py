"""
MedReminder scheduling core.

Medication reminders, missed-dose tracking, adherence statistics and
appointment conflict resolution behind a FastAPI service.
"""

__version__ = "0.1.0"
