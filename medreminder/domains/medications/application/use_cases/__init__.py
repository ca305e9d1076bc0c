"""
Medications Domain Use Cases
"""

from medreminder.domains.medications.application.use_cases.collect_dose_statistics import (
    CollectDoseStatisticsUseCase,
)
from medreminder.domains.medications.application.use_cases.fire_scheduled_reminder import (
    FireScheduledReminderUseCase,
)
from medreminder.domains.medications.application.use_cases.generate_adherence_report import (
    GenerateAdherenceReportUseCase,
)
from medreminder.domains.medications.application.use_cases.get_adherence import (
    GetAdherenceUseCase,
    GetWeeklyAdherencePatternUseCase,
)
from medreminder.domains.medications.application.use_cases.manage_medication import (
    CreateMedicationRequest,
    CreateMedicationUseCase,
    DeleteMedicationUseCase,
    LinkNotificationChannelUseCase,
    UnlinkNotificationChannelUseCase,
    UpdateMedicationRequest,
    UpdateMedicationUseCase,
)
from medreminder.domains.medications.application.use_cases.purge_dose_history import PurgeDoseHistoryUseCase
from medreminder.domains.medications.application.use_cases.run_reminder_pass import RunReminderPassUseCase

__all__ = [
    "RunReminderPassUseCase",
    "FireScheduledReminderUseCase",
    "GetAdherenceUseCase",
    "GetWeeklyAdherencePatternUseCase",
    "GenerateAdherenceReportUseCase",
    "PurgeDoseHistoryUseCase",
    "CollectDoseStatisticsUseCase",
    "CreateMedicationRequest",
    "CreateMedicationUseCase",
    "UpdateMedicationRequest",
    "UpdateMedicationUseCase",
    "DeleteMedicationUseCase",
    "LinkNotificationChannelUseCase",
    "UnlinkNotificationChannelUseCase",
]
