from medreminder.domains.medications.application.dto.reminder_dto import (
    AdherenceReport,
    AdherenceReportEntry,
    ReminderFireOutcome,
    ReminderPassResult,
)

__all__ = [
    "ReminderPassResult",
    "ReminderFireOutcome",
    "AdherenceReport",
    "AdherenceReportEntry",
]
