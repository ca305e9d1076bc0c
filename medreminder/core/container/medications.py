"""
Medications Domain Container.

Single Responsibility: Wire all medication domain dependencies.
"""

import logging
from typing import TYPE_CHECKING

from medreminder.domains.medications.application.services import MissedDoseDetector
from medreminder.domains.medications.application.use_cases import (
    CollectDoseStatisticsUseCase,
    CreateMedicationUseCase,
    DeleteMedicationUseCase,
    FireScheduledReminderUseCase,
    GenerateAdherenceReportUseCase,
    GetAdherenceUseCase,
    GetWeeklyAdherencePatternUseCase,
    LinkNotificationChannelUseCase,
    PurgeDoseHistoryUseCase,
    RunReminderPassUseCase,
    UnlinkNotificationChannelUseCase,
    UpdateMedicationUseCase,
)
from medreminder.domains.medications.domain.services.dedup_ledger import ReminderDedupLedger
from medreminder.domains.medications.infrastructure.repositories import (
    SQLAlchemyDoseRecordRepository,
    SQLAlchemyMedicationRepository,
)

if TYPE_CHECKING:
    from medreminder.core.container.base import BaseContainer
    from medreminder.core.container.shared import SharedContainer

logger = logging.getLogger(__name__)


class MedicationsContainer:
    """
    Medications domain container.

    Single Responsibility: Create medication repositories, services and use cases.
    """

    def __init__(self, base: "BaseContainer", shared: "SharedContainer"):
        self._base = base
        self._shared = shared

    # ==================== REPOSITORIES ====================

    def create_medication_repository(self, db) -> SQLAlchemyMedicationRepository:
        """Create Medication Repository."""
        return SQLAlchemyMedicationRepository(session=db)

    def create_dose_record_repository(self, db) -> SQLAlchemyDoseRecordRepository:
        """Create DoseRecord Repository."""
        return SQLAlchemyDoseRecordRepository(session=db)

    # ==================== SERVICES ====================

    def create_dedup_ledger(self) -> ReminderDedupLedger:
        return ReminderDedupLedger(self._base.get_clock().tz, self._base.settings.REMINDER_DEDUP_SCOPE)

    def create_missed_dose_detector(self, db) -> MissedDoseDetector:
        settings = self._base.settings
        return MissedDoseDetector(
            self.create_dose_record_repository(db),
            self._base.get_clock().tz,
            offset_minutes=settings.MISSED_DOSE_OFFSET_MINUTES,
            window_minutes=settings.MISSED_DOSE_WINDOW_MINUTES,
        )

    # ==================== REMINDER USE CASES ====================

    def create_run_reminder_pass_use_case(self, db) -> RunReminderPassUseCase:
        """Create RunReminderPassUseCase with dependencies."""
        settings = self._base.settings
        return RunReminderPassUseCase(
            medication_repository=self.create_medication_repository(db),
            user_repository=self._shared.create_user_repository(db),
            dispatcher=self._base.get_dispatcher(),
            clock=self._base.get_clock(),
            ledger=self.create_dedup_ledger(),
            missed_dose_detector=self.create_missed_dose_detector(db),
            tolerance_minutes=settings.REMINDER_TOLERANCE_MINUTES,
            wrap_midnight=settings.REMINDER_WRAP_MIDNIGHT,
        )

    def create_fire_scheduled_reminder_use_case(self, db) -> FireScheduledReminderUseCase:
        """Create FireScheduledReminderUseCase with dependencies."""
        return FireScheduledReminderUseCase(
            medication_repository=self.create_medication_repository(db),
            user_repository=self._shared.create_user_repository(db),
            dispatcher=self._base.get_dispatcher(),
            clock=self._base.get_clock(),
            ledger=self.create_dedup_ledger(),
        )

    # ==================== ADHERENCE USE CASES ====================

    def create_get_adherence_use_case(self, db) -> GetAdherenceUseCase:
        return GetAdherenceUseCase(self.create_dose_record_repository(db), self._base.get_clock())

    def create_get_weekly_adherence_use_case(self, db) -> GetWeeklyAdherencePatternUseCase:
        return GetWeeklyAdherencePatternUseCase(self.create_dose_record_repository(db), self._base.get_clock())

    def create_generate_adherence_report_use_case(self, db) -> GenerateAdherenceReportUseCase:
        settings = self._base.settings
        return GenerateAdherenceReportUseCase(
            medication_repository=self.create_medication_repository(db),
            dose_record_repository=self.create_dose_record_repository(db),
            clock=self._base.get_clock(),
            window_days=settings.ADHERENCE_REPORT_WINDOW_DAYS,
            low_threshold=settings.ADHERENCE_LOW_THRESHOLD,
        )

    # ==================== MAINTENANCE USE CASES ====================

    def create_purge_dose_history_use_case(self, db) -> PurgeDoseHistoryUseCase:
        return PurgeDoseHistoryUseCase(
            self.create_dose_record_repository(db),
            self._base.get_clock(),
            retention_days=self._base.settings.DOSE_HISTORY_RETENTION_DAYS,
            medication_repository=self.create_medication_repository(db),
        )

    def create_collect_dose_statistics_use_case(self, db) -> CollectDoseStatisticsUseCase:
        return CollectDoseStatisticsUseCase(self.create_dose_record_repository(db), self._base.get_clock())

    # ==================== MANAGEMENT USE CASES ====================

    def create_create_medication_use_case(self, db) -> CreateMedicationUseCase:
        return CreateMedicationUseCase(
            medication_repository=self.create_medication_repository(db),
            user_repository=self._shared.create_user_repository(db),
            timer_registry=self._base.get_timer_registry(),
        )

    def create_update_medication_use_case(self, db) -> UpdateMedicationUseCase:
        return UpdateMedicationUseCase(
            medication_repository=self.create_medication_repository(db),
            user_repository=self._shared.create_user_repository(db),
            timer_registry=self._base.get_timer_registry(),
        )

    def create_delete_medication_use_case(self, db) -> DeleteMedicationUseCase:
        return DeleteMedicationUseCase(
            medication_repository=self.create_medication_repository(db),
            timer_registry=self._base.get_timer_registry(),
        )

    def create_link_notification_channel_use_case(self, db) -> LinkNotificationChannelUseCase:
        return LinkNotificationChannelUseCase(
            user_repository=self._shared.create_user_repository(db),
            medication_repository=self.create_medication_repository(db),
            timer_registry=self._base.get_timer_registry(),
        )

    def create_unlink_notification_channel_use_case(self, db) -> UnlinkNotificationChannelUseCase:
        return UnlinkNotificationChannelUseCase(
            user_repository=self._shared.create_user_repository(db),
            timer_registry=self._base.get_timer_registry(),
        )
