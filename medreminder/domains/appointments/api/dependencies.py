"""
Appointments API Dependencies

FastAPI dependencies for the appointments domain.
"""

from medreminder.api.dependencies import DbSession
from medreminder.core.container import get_container
from medreminder.domains.appointments.application.services.conflict_resolver import AppointmentConflictResolver
from medreminder.domains.appointments.application.use_cases import (
    BookAppointmentUseCase,
    CancelAppointmentUseCase,
    CompleteAppointmentUseCase,
    ConfirmAppointmentUseCase,
    GetAvailableSlotsUseCase,
    RescheduleAppointmentUseCase,
)


def get_book_appointment_use_case(db: DbSession) -> BookAppointmentUseCase:
    """Get BookAppointmentUseCase instance with database session."""
    return get_container().appointments.create_book_appointment_use_case(db)


def get_reschedule_appointment_use_case(db: DbSession) -> RescheduleAppointmentUseCase:
    return get_container().appointments.create_reschedule_appointment_use_case(db)


def get_confirm_appointment_use_case(db: DbSession) -> ConfirmAppointmentUseCase:
    return get_container().appointments.create_confirm_appointment_use_case(db)


def get_complete_appointment_use_case(db: DbSession) -> CompleteAppointmentUseCase:
    return get_container().appointments.create_complete_appointment_use_case(db)


def get_cancel_appointment_use_case(db: DbSession) -> CancelAppointmentUseCase:
    return get_container().appointments.create_cancel_appointment_use_case(db)


def get_available_slots_use_case(db: DbSession) -> GetAvailableSlotsUseCase:
    return get_container().appointments.create_get_available_slots_use_case(db)


def get_conflict_resolver(db: DbSession) -> AppointmentConflictResolver:
    return get_container().appointments.create_conflict_resolver(db)


__all__ = [
    "get_book_appointment_use_case",
    "get_reschedule_appointment_use_case",
    "get_confirm_appointment_use_case",
    "get_complete_appointment_use_case",
    "get_cancel_appointment_use_case",
    "get_available_slots_use_case",
    "get_conflict_resolver",
]
