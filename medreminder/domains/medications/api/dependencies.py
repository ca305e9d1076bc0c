"""
Medications API Dependencies

FastAPI dependencies for the medications domain.
"""

from medreminder.api.dependencies import DbSession
from medreminder.core.container import get_container
from medreminder.domains.medications.application.use_cases import (
    CreateMedicationUseCase,
    DeleteMedicationUseCase,
    GetAdherenceUseCase,
    GetWeeklyAdherencePatternUseCase,
    LinkNotificationChannelUseCase,
    UnlinkNotificationChannelUseCase,
    UpdateMedicationUseCase,
)


def get_create_medication_use_case(db: DbSession) -> CreateMedicationUseCase:
    return get_container().medications.create_create_medication_use_case(db)


def get_update_medication_use_case(db: DbSession) -> UpdateMedicationUseCase:
    return get_container().medications.create_update_medication_use_case(db)


def get_delete_medication_use_case(db: DbSession) -> DeleteMedicationUseCase:
    return get_container().medications.create_delete_medication_use_case(db)


def get_link_channel_use_case(db: DbSession) -> LinkNotificationChannelUseCase:
    return get_container().medications.create_link_notification_channel_use_case(db)


def get_unlink_channel_use_case(db: DbSession) -> UnlinkNotificationChannelUseCase:
    return get_container().medications.create_unlink_notification_channel_use_case(db)


def get_adherence_use_case(db: DbSession) -> GetAdherenceUseCase:
    return get_container().medications.create_get_adherence_use_case(db)


def get_weekly_adherence_use_case(db: DbSession) -> GetWeeklyAdherencePatternUseCase:
    return get_container().medications.create_get_weekly_adherence_use_case(db)


__all__ = [
    "get_create_medication_use_case",
    "get_update_medication_use_case",
    "get_delete_medication_use_case",
    "get_link_channel_use_case",
    "get_unlink_channel_use_case",
    "get_adherence_use_case",
    "get_weekly_adherence_use_case",
]
