"""
Unit tests for Medication Domain Repositories.

Tests the data access layer for medications and dose records.
"""

from datetime import UTC, date, datetime
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from medreminder.domains.medications.domain.entities.dose_record import DoseRecord
from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.medications.domain.value_objects.dose_status import DoseStatus
from medreminder.domains.medications.infrastructure.repositories.dose_record_repository import (
    SQLAlchemyDoseRecordRepository,
)
from medreminder.domains.medications.infrastructure.repositories.medication_repository import (
    SQLAlchemyMedicationRepository,
    deserialize_marks,
    serialize_marks,
)

# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def sample_medication_model():
    """Sample SQLAlchemy medication model."""
    model = MagicMock()
    model.id = 1
    model.patient_id = 10
    model.doctor_id = 20
    model.name = "Amoxicillin"
    model.dosage = "500mg"
    model.instructions = "After meals"
    model.times = ["08:00", "20:00"]
    model.start_date = date(2025, 3, 1)
    model.end_date = date(2025, 3, 31)
    model.is_active = True
    model.last_reminded_at = datetime(2025, 3, 10, 8, 0, tzinfo=UTC)
    model.reminder_marks = {"08:00": "2025-03-10T08:00:00+00:00"}
    model.created_at = datetime.now(UTC)
    model.updated_at = datetime.now(UTC)
    return model


@pytest.fixture
def sample_dose_record_model():
    """Sample SQLAlchemy dose record model."""
    model = MagicMock()
    model.id = 5
    model.medication_id = 1
    model.patient_id = 10
    model.status = DoseStatus.MISSED
    model.taken_at = datetime(2025, 3, 10, 8, 30, tzinfo=UTC)
    model.scheduled_time = "08:00"
    model.notes = ""
    model.created_at = datetime.now(UTC)
    return model


# ============================================================================
# Marker serialization
# ============================================================================


@pytest.mark.unit
def test_marks_serialization():
    moment = datetime(2025, 3, 10, 8, 0, tzinfo=UTC)

    raw = serialize_marks({"08:00": moment})

    assert raw == {"08:00": "2025-03-10T08:00:00+00:00"}
    assert deserialize_marks(raw) == {"08:00": moment}


@pytest.mark.unit
def test_malformed_marks_are_ignored():
    assert deserialize_marks({"08:00": "yesterday", "20:00": None}) == {}
    assert deserialize_marks(None) == {}


# ============================================================================
# Medication Repository Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_find_by_id_success(mock_async_session, sample_medication_model):
    """Test successfully getting a medication by ID."""
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_medication_model
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemyMedicationRepository(mock_async_session)

    # Act
    medication = await repository.find_by_id(1)

    # Assert
    assert medication is not None
    assert medication.name == "Amoxicillin"
    assert medication.times == ["08:00", "20:00"]
    assert medication.reminder_marks == {"08:00": datetime(2025, 3, 10, 8, 0, tzinfo=UTC)}
    mock_async_session.execute.assert_called_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_find_by_id_not_found(mock_async_session):
    """Test getting a medication that doesn't exist."""
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = None
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemyMedicationRepository(mock_async_session)

    assert await repository.find_by_id(999) is None


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_find_active_on(mock_async_session, sample_medication_model):
    """Test listing medications active on a day."""
    # Arrange
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = [sample_medication_model]
    mock_async_session.execute.return_value = mock_result

    repository = SQLAlchemyMedicationRepository(mock_async_session)

    # Act
    medications = await repository.find_active_on(date(2025, 3, 10))

    # Assert
    assert len(medications) == 1
    assert medications[0].patient_id == 10


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_save_new(mock_async_session):
    """Test saving a new medication adds a model and commits."""
    # Arrange
    medication = Medication(
        patient_id=10,
        name="Ibuprofen",
        dosage="400mg",
        times=["12:00"],
        start_date=date(2025, 3, 1),
        end_date=date(2025, 3, 8),
    )
    repository = SQLAlchemyMedicationRepository(mock_async_session)

    # Act
    saved = await repository.save(medication)

    # Assert
    mock_async_session.add.assert_called_once()
    mock_async_session.commit.assert_awaited_once()
    assert saved.name == "Ibuprofen"
    assert saved.times == ["12:00"]


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_save_existing_updates_model(mock_async_session, sample_medication_model):
    """Test saving an existing medication updates the loaded model."""
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_medication_model
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyMedicationRepository(mock_async_session)
    medication = await repository.find_by_id(1)
    medication.update_schedule(times=["09:00"])

    # Act
    await repository.save(medication)

    # Assert
    assert sample_medication_model.times == ["09:00"]
    assert sample_medication_model.reminder_marks == {}
    mock_async_session.add.assert_not_called()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_save_rolls_back_on_error(mock_async_session):
    """Test a failed commit is rolled back and re-raised."""
    mock_async_session.commit.side_effect = SQLAlchemyError("db down")
    repository = SQLAlchemyMedicationRepository(mock_async_session)
    medication = Medication(
        patient_id=10,
        name="Ibuprofen",
        dosage="400mg",
        times=["12:00"],
        start_date=date(2025, 3, 1),
        end_date=date(2025, 3, 8),
    )

    with pytest.raises(SQLAlchemyError):
        await repository.save(medication)

    mock_async_session.rollback.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_update_reminder_markers_writes_one_key(mock_async_session, sample_medication_model):
    """Test only the sent time is added to the stored markers."""
    # Arrange
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = sample_medication_model
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyMedicationRepository(mock_async_session)
    sent_at = datetime(2025, 3, 10, 20, 0, tzinfo=UTC)

    # Act
    await repository.update_reminder_markers(1, "20:00", sent_at)

    # Assert
    assert sample_medication_model.reminder_marks == {
        "08:00": "2025-03-10T08:00:00+00:00",
        "20:00": "2025-03-10T20:00:00+00:00",
    }
    assert sample_medication_model.last_reminded_at == sent_at
    mock_async_session.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_claim_reminder(mock_async_session):
    """Test a fresh slot is claimed with one INSERT."""
    repository = SQLAlchemyMedicationRepository(mock_async_session)

    claimed = await repository.claim_reminder(1, "08:00", date(2025, 3, 10), datetime(2025, 3, 10, 8, 0, tzinfo=UTC))

    assert claimed is True
    mock_async_session.execute.assert_awaited_once()
    mock_async_session.commit.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_claim_reminder_already_taken(mock_async_session):
    """Test a duplicate slot is reported as taken and the session rolled back."""
    mock_async_session.execute.side_effect = IntegrityError(
        "INSERT INTO reminder_claims", {}, Exception("duplicate key value violates unique constraint")
    )
    repository = SQLAlchemyMedicationRepository(mock_async_session)

    claimed = await repository.claim_reminder(1, "08:00", date(2025, 3, 10), datetime(2025, 3, 10, 8, 0, tzinfo=UTC))

    assert claimed is False
    mock_async_session.rollback.assert_awaited_once()
    mock_async_session.commit.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_claim_reminder_propagates_database_errors(mock_async_session):
    mock_async_session.execute.side_effect = SQLAlchemyError("db down")
    repository = SQLAlchemyMedicationRepository(mock_async_session)

    with pytest.raises(SQLAlchemyError):
        await repository.claim_reminder(1, "08:00", date(2025, 3, 10), datetime(2025, 3, 10, 8, 0, tzinfo=UTC))

    mock_async_session.rollback.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_release_and_purge_claims(mock_async_session):
    mock_result = MagicMock()
    mock_result.rowcount = 4
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyMedicationRepository(mock_async_session)

    await repository.release_reminder(1, "08:00", date(2025, 3, 10))
    deleted = await repository.delete_reminder_claims_before(date(2025, 3, 9))

    assert deleted == 4
    assert mock_async_session.execute.await_count == 2
    assert mock_async_session.commit.await_count == 2


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_medication_delete(mock_async_session, sample_medication_model):
    """Test deleting an existing and a missing medication."""
    # Arrange
    found = MagicMock()
    found.scalar_one_or_none.return_value = sample_medication_model
    missing = MagicMock()
    missing.scalar_one_or_none.return_value = None
    mock_async_session.execute.side_effect = [found, missing]
    repository = SQLAlchemyMedicationRepository(mock_async_session)

    # Act & Assert
    assert await repository.delete(1) is True
    mock_async_session.delete.assert_awaited_once_with(sample_medication_model)
    assert await repository.delete(2) is False


# ============================================================================
# Dose Record Repository Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_dose_record_exists_for_slot(mock_async_session):
    """Test slot lookup maps the first id to True."""
    mock_result = MagicMock()
    mock_result.scalar_one_or_none.return_value = 5
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyDoseRecordRepository(mock_async_session)

    exists = await repository.exists_for_slot(
        1, "08:00", datetime(2025, 3, 10, tzinfo=UTC), datetime(2025, 3, 11, tzinfo=UTC)
    )

    assert exists is True


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_dose_record_add(mock_async_session):
    """Test appending a dose record."""
    repository = SQLAlchemyDoseRecordRepository(mock_async_session)
    record = DoseRecord.missed(
        medication_id=1,
        patient_id=10,
        scheduled_time="08:00",
        detected_at=datetime(2025, 3, 10, 8, 30, tzinfo=UTC),
    )

    saved = await repository.add(record)

    mock_async_session.add.assert_called_once()
    assert saved.status == DoseStatus.MISSED
    assert saved.scheduled_time == "08:00"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_dose_record_find_by_patient(mock_async_session, sample_dose_record_model):
    """Test loading a patient's history."""
    mock_result = MagicMock()
    mock_result.scalars.return_value.all.return_value = [sample_dose_record_model]
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyDoseRecordRepository(mock_async_session)

    records = await repository.find_by_patient(10, datetime(2025, 3, 1, tzinfo=UTC), medication_id=1)

    assert len(records) == 1
    assert records[0].status == DoseStatus.MISSED
    assert records[0].id == 5


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_dose_record_count_by_status(mock_async_session):
    """Test grouping counts by status."""
    mock_result = MagicMock()
    mock_result.all.return_value = [(DoseStatus.TAKEN, 4), (DoseStatus.MISSED, 1)]
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyDoseRecordRepository(mock_async_session)

    counts = await repository.count_by_status(datetime(2025, 3, 10, tzinfo=UTC), datetime(2025, 3, 11, tzinfo=UTC))

    assert counts == {DoseStatus.TAKEN: 4, DoseStatus.MISSED: 1}


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_dose_record_delete_older_than(mock_async_session):
    """Test the purge returns the deleted row count."""
    mock_result = MagicMock()
    mock_result.rowcount = 12
    mock_async_session.execute.return_value = mock_result
    repository = SQLAlchemyDoseRecordRepository(mock_async_session)

    deleted = await repository.delete_older_than(datetime(2024, 3, 10, tzinfo=UTC))

    assert deleted == 12
    mock_async_session.commit.assert_awaited_once()
