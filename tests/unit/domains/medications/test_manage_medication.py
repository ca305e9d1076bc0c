"""
Unit tests for medication lifecycle use cases and their timer registry calls.
"""

from datetime import date
from unittest.mock import MagicMock

import pytest

from medreminder.core.domain import EntityNotFoundException, ValidationException
from medreminder.domains.medications.application.use_cases.manage_medication import (
    CreateMedicationRequest,
    CreateMedicationUseCase,
    DeleteMedicationUseCase,
    LinkNotificationChannelUseCase,
    UnlinkNotificationChannelUseCase,
    UpdateMedicationRequest,
    UpdateMedicationUseCase,
)


@pytest.fixture
def mock_timer_registry():
    """Create a mock reminder timer registry."""
    return MagicMock()


def _create_request(patient_id: int, **overrides) -> CreateMedicationRequest:
    fields = {
        "patient_id": patient_id,
        "name": "Omeprazole",
        "dosage": "20mg",
        "times": ["07:30"],
        "start_date": date(2025, 3, 10),
        "end_date": date(2025, 4, 10),
    }
    fields.update(overrides)
    return CreateMedicationRequest(**fields)


# ============================================================================
# CreateMedicationUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_medication_schedules_triggers(
    medication_repository, user_repository, patient, doctor, mock_timer_registry
):
    # Arrange
    use_case = CreateMedicationUseCase(medication_repository, user_repository, mock_timer_registry)

    # Act
    medication = await use_case.execute(_create_request(patient.id, doctor_id=doctor.id))

    # Assert
    assert medication.id is not None
    assert medication.times == ["07:30"]
    assert medication_repository.medications[medication.id] is medication
    mock_timer_registry.schedule_for_medication.assert_called_once_with(medication, patient)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_medication_without_registry(medication_repository, user_repository, patient):
    use_case = CreateMedicationUseCase(medication_repository, user_repository)

    medication = await use_case.execute(_create_request(patient.id))

    assert medication.is_active


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_medication_unknown_patient(medication_repository, user_repository, mock_timer_registry):
    use_case = CreateMedicationUseCase(medication_repository, user_repository, mock_timer_registry)

    with pytest.raises(ValidationException) as exc_info:
        await use_case.execute(_create_request(404))

    assert exc_info.value.field == "patient_id"
    mock_timer_registry.schedule_for_medication.assert_not_called()


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_medication_rejects_doctor_as_patient(medication_repository, user_repository, doctor):
    use_case = CreateMedicationUseCase(medication_repository, user_repository)

    with pytest.raises(ValidationException):
        await use_case.execute(_create_request(doctor.id))


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_medication_rejects_patient_as_doctor(medication_repository, user_repository, patient):
    use_case = CreateMedicationUseCase(medication_repository, user_repository)

    with pytest.raises(ValidationException) as exc_info:
        await use_case.execute(_create_request(patient.id, doctor_id=patient.id))

    assert exc_info.value.field == "doctor_id"


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_medication_invalid_time_is_not_saved(medication_repository, user_repository, patient):
    use_case = CreateMedicationUseCase(medication_repository, user_repository)

    with pytest.raises(ValidationException):
        await use_case.execute(_create_request(patient.id, times=["7:30", "31:00"]))

    assert medication_repository.medications == {}


# ============================================================================
# UpdateMedicationUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_medication_replaces_triggers(
    medication_repository, user_repository, make_medication, patient, mock_timer_registry
):
    # Arrange
    medication = make_medication()
    use_case = UpdateMedicationUseCase(medication_repository, user_repository, mock_timer_registry)

    # Act
    updated = await use_case.execute(medication.id, UpdateMedicationRequest(times=["09:00", "21:00"], dosage=" 1g "))

    # Assert
    assert updated.times == ["09:00", "21:00"]
    assert updated.dosage == "1g"
    mock_timer_registry.schedule_for_medication.assert_called_once_with(updated, patient)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_medication_deactivate(medication_repository, user_repository, make_medication):
    medication = make_medication()
    use_case = UpdateMedicationUseCase(medication_repository, user_repository)

    updated = await use_case.execute(medication.id, UpdateMedicationRequest(is_active=False))

    assert updated.is_active is False
    assert updated.times == ["08:00", "20:00"]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_missing_medication(medication_repository, user_repository):
    use_case = UpdateMedicationUseCase(medication_repository, user_repository)

    with pytest.raises(EntityNotFoundException) as exc_info:
        await use_case.execute(42, UpdateMedicationRequest(name="X"))

    assert exc_info.value.http_status == 404


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_update_medication_invalid_dates(medication_repository, user_repository, make_medication):
    medication = make_medication()
    use_case = UpdateMedicationUseCase(medication_repository, user_repository)

    with pytest.raises(ValidationException):
        await use_case.execute(medication.id, UpdateMedicationRequest(end_date=date(2025, 2, 1)))


# ============================================================================
# DeleteMedicationUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_medication_cancels_triggers(medication_repository, make_medication, mock_timer_registry):
    medication = make_medication()
    use_case = DeleteMedicationUseCase(medication_repository, mock_timer_registry)

    await use_case.execute(medication.id)

    assert medication.id not in medication_repository.medications
    mock_timer_registry.cancel_for_medication.assert_called_once_with(medication.id)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_delete_missing_medication(medication_repository, mock_timer_registry):
    use_case = DeleteMedicationUseCase(medication_repository, mock_timer_registry)

    with pytest.raises(EntityNotFoundException):
        await use_case.execute(42)

    mock_timer_registry.cancel_for_medication.assert_not_called()


# ============================================================================
# Notification channel Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_link_channel_schedules_active_medications(
    user_repository, medication_repository, patient, make_medication, mock_timer_registry
):
    # Arrange
    patient.unlink_channel()
    active = make_medication()
    make_medication(is_active=False)
    use_case = LinkNotificationChannelUseCase(user_repository, medication_repository, mock_timer_registry)

    # Act
    user = await use_case.execute(patient.id, " 8800 ")

    # Assert
    assert user.notification_channel_id == "8800"
    mock_timer_registry.schedule_for_medication.assert_called_once_with(active, user)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_link_channel_requires_value(user_repository, medication_repository, patient):
    use_case = LinkNotificationChannelUseCase(user_repository, medication_repository)

    with pytest.raises(ValidationException):
        await use_case.execute(patient.id, "  ")


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_link_channel_unknown_user(user_repository, medication_repository):
    use_case = LinkNotificationChannelUseCase(user_repository, medication_repository)

    with pytest.raises(EntityNotFoundException):
        await use_case.execute(99, "8800")


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_unlink_channel_cancels_patient_triggers(user_repository, patient, mock_timer_registry):
    mock_timer_registry.cancel_for_patient.return_value = 2
    use_case = UnlinkNotificationChannelUseCase(user_repository, mock_timer_registry)

    user = await use_case.execute(patient.id)

    assert user.has_notification_channel() is False
    mock_timer_registry.cancel_for_patient.assert_called_once_with(patient.id)
