"""
Appointments Domain Container.

Single Responsibility: Wire all appointment domain dependencies.
"""

import logging
from typing import TYPE_CHECKING

from medreminder.domains.appointments.application.services.conflict_resolver import AppointmentConflictResolver
from medreminder.domains.appointments.application.use_cases import (
    BookAppointmentUseCase,
    CancelAppointmentUseCase,
    CollectAppointmentStatisticsUseCase,
    CompleteAppointmentUseCase,
    ConfirmAppointmentUseCase,
    GetAvailableSlotsUseCase,
    MarkNoShowsUseCase,
    PurgeCompletedAppointmentsUseCase,
    RescheduleAppointmentUseCase,
    SendAppointmentRemindersUseCase,
)
from medreminder.domains.appointments.domain.services.slot_finder import ClinicHours
from medreminder.domains.appointments.infrastructure.repositories import SQLAlchemyAppointmentRepository

if TYPE_CHECKING:
    from medreminder.core.container.base import BaseContainer
    from medreminder.core.container.shared import SharedContainer

logger = logging.getLogger(__name__)


class AppointmentsContainer:
    """
    Appointments domain container.

    Single Responsibility: Create appointment repositories and use cases.
    """

    def __init__(self, base: "BaseContainer", shared: "SharedContainer"):
        self._base = base
        self._shared = shared
        self._clinic_hours: ClinicHours | None = None

    def get_clinic_hours(self) -> ClinicHours:
        if self._clinic_hours is None:
            settings = self._base.settings
            self._clinic_hours = ClinicHours.from_strings(
                opening=settings.CLINIC_OPENING_TIME,
                closing=settings.CLINIC_CLOSING_TIME,
                break_start=settings.CLINIC_BREAK_START,
                break_end=settings.CLINIC_BREAK_END,
                step_minutes=settings.SLOT_STEP_MINUTES,
            )
        return self._clinic_hours

    # ==================== REPOSITORIES ====================

    def create_appointment_repository(self, db) -> SQLAlchemyAppointmentRepository:
        """Create Appointment Repository."""
        return SQLAlchemyAppointmentRepository(session=db)

    def create_conflict_resolver(self, db) -> AppointmentConflictResolver:
        return AppointmentConflictResolver(self.create_appointment_repository(db))

    # ==================== BOOKING USE CASES ====================

    def create_book_appointment_use_case(self, db) -> BookAppointmentUseCase:
        """Create BookAppointmentUseCase with dependencies."""
        return BookAppointmentUseCase(
            appointment_repository=self.create_appointment_repository(db),
            user_repository=self._shared.create_user_repository(db),
            clock=self._base.get_clock(),
        )

    def create_reschedule_appointment_use_case(self, db) -> RescheduleAppointmentUseCase:
        return RescheduleAppointmentUseCase(self.create_appointment_repository(db), self._base.get_clock())

    def create_confirm_appointment_use_case(self, db) -> ConfirmAppointmentUseCase:
        return ConfirmAppointmentUseCase(self.create_appointment_repository(db))

    def create_complete_appointment_use_case(self, db) -> CompleteAppointmentUseCase:
        return CompleteAppointmentUseCase(self.create_appointment_repository(db))

    def create_cancel_appointment_use_case(self, db) -> CancelAppointmentUseCase:
        return CancelAppointmentUseCase(self.create_appointment_repository(db))

    def create_get_available_slots_use_case(self, db) -> GetAvailableSlotsUseCase:
        return GetAvailableSlotsUseCase(self.create_appointment_repository(db), self.get_clinic_hours())

    # ==================== SCHEDULED USE CASES ====================

    def create_mark_no_shows_use_case(self, db) -> MarkNoShowsUseCase:
        return MarkNoShowsUseCase(
            self.create_appointment_repository(db),
            self._base.get_clock(),
            grace_hours=self._base.settings.NO_SHOW_GRACE_HOURS,
        )

    def create_send_appointment_reminders_use_case(self, db) -> SendAppointmentRemindersUseCase:
        return SendAppointmentRemindersUseCase(
            appointment_repository=self.create_appointment_repository(db),
            user_repository=self._shared.create_user_repository(db),
            dispatcher=self._base.get_dispatcher(),
            clock=self._base.get_clock(),
        )

    def create_purge_completed_appointments_use_case(self, db) -> PurgeCompletedAppointmentsUseCase:
        return PurgeCompletedAppointmentsUseCase(
            self.create_appointment_repository(db),
            self._base.get_clock(),
            retention_days=self._base.settings.COMPLETED_APPOINTMENT_RETENTION_DAYS,
        )

    def create_collect_appointment_statistics_use_case(self, db) -> CollectAppointmentStatisticsUseCase:
        return CollectAppointmentStatisticsUseCase(self.create_appointment_repository(db), self._base.get_clock())
