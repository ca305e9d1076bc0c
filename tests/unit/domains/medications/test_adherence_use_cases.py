"""
Unit tests for adherence, reporting and dose maintenance use cases.
"""

from datetime import UTC, date, datetime, timedelta

import pytest

from medreminder.core.domain import ValidationException
from medreminder.domains.medications.application.use_cases.collect_dose_statistics import (
    CollectDoseStatisticsUseCase,
)
from medreminder.domains.medications.application.use_cases.generate_adherence_report import (
    GenerateAdherenceReportUseCase,
)
from medreminder.domains.medications.application.use_cases.get_adherence import (
    GetAdherenceUseCase,
    GetWeeklyAdherencePatternUseCase,
)
from medreminder.domains.medications.application.use_cases.purge_dose_history import PurgeDoseHistoryUseCase
from medreminder.domains.medications.domain.entities.dose_record import DoseRecord
from medreminder.domains.medications.domain.value_objects.dose_status import DoseStatus

NOW = datetime(2025, 3, 10, 8, 0, tzinfo=UTC)


def _record(medication_id: int, status: DoseStatus, days_ago: float, patient_id: int = 1) -> DoseRecord:
    return DoseRecord(
        medication_id=medication_id,
        patient_id=patient_id,
        status=status,
        taken_at=NOW - timedelta(days=days_ago),
        scheduled_time="08:00",
    )


@pytest.fixture
def history(dose_record_repository):
    """Seven recent doses of medication 1 (5 taken) plus older and foreign records."""
    dose_record_repository.records = [
        _record(1, DoseStatus.TAKEN, 1),
        _record(1, DoseStatus.TAKEN, 2),
        _record(1, DoseStatus.TAKEN, 3),
        _record(1, DoseStatus.TAKEN, 4),
        _record(1, DoseStatus.TAKEN, 5),
        _record(1, DoseStatus.MISSED, 5.5),
        _record(1, DoseStatus.SKIPPED, 6),
        _record(1, DoseStatus.MISSED, 40),
        _record(2, DoseStatus.MISSED, 1),
        _record(3, DoseStatus.TAKEN, 1, patient_id=9),
    ]
    return dose_record_repository


# ============================================================================
# GetAdherenceUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_adherence_for_one_medication(history, clock):
    use_case = GetAdherenceUseCase(history, clock)

    stats = await use_case.execute(patient_id=1, medication_id=1, days=30)

    assert stats.total == 7
    assert stats.taken == 5
    assert stats.rate == 71


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_adherence_for_all_medications(history, clock):
    use_case = GetAdherenceUseCase(history, clock)

    stats = await use_case.execute(patient_id=1, days=30)

    assert stats.total == 8
    assert stats.missed == 2
    assert stats.rate == 63  # 62.5 rounds up


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_adherence_window_excludes_old_records(history, clock):
    use_case = GetAdherenceUseCase(history, clock)

    stats = await use_case.execute(patient_id=1, medication_id=1, days=60)

    assert stats.total == 8


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_adherence_without_records_is_zero(dose_record_repository, clock):
    stats = await GetAdherenceUseCase(dose_record_repository, clock).execute(patient_id=1)

    assert stats.rate == 0
    assert stats.total == 0


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_adherence_rejects_empty_window(dose_record_repository, clock):
    with pytest.raises(ValidationException):
        await GetAdherenceUseCase(dose_record_repository, clock).execute(patient_id=1, days=0)


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_weekly_pattern(history, clock):
    use_case = GetWeeklyAdherencePatternUseCase(history, clock)

    pattern = await use_case.execute(patient_id=1, medication_id=1, weeks=1)

    assert len(pattern) == 7
    assert sum(day.stats.total for day in pattern) == 7
    # 2025-03-09 08:00 was a Sunday
    assert pattern[0].weekday == "Sunday"
    assert pattern[0].rate == 100


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_weekly_pattern_rejects_empty_window(dose_record_repository, clock):
    with pytest.raises(ValidationException):
        await GetWeeklyAdherencePatternUseCase(dose_record_repository, clock).execute(patient_id=1, weeks=0)


# ============================================================================
# GenerateAdherenceReportUseCase Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_weekly_report_flags_low_adherence(history, medication_repository, make_medication, clock):
    # Arrange
    make_medication(id=1)
    make_medication(id=2, name="Simvastatin")
    make_medication(id=5, name="Vitamin D")  # no records
    use_case = GenerateAdherenceReportUseCase(medication_repository, history, clock, window_days=7, low_threshold=80)

    # Act
    report = await use_case.execute()

    # Assert
    assert [entry.medication_id for entry in report.entries] == [1, 2]
    assert [entry.medication_id for entry in report.low_adherence] == [1, 2]
    assert report.entries[0].stats.rate == 71
    assert report.to_dict()["low_adherence"][1]["adherence_rate"] == 0


# ============================================================================
# Maintenance Tests
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_purge_dose_history(history, clock):
    use_case = PurgeDoseHistoryUseCase(history, clock, retention_days=30)

    deleted = await use_case.execute()

    assert deleted == 1
    assert len(history.records) == 9


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_purge_drops_reminder_claims_of_past_days(history, clock, medication_repository):
    medication_repository.claims = {
        (1, "08:00", date(2025, 3, 8)): NOW - timedelta(days=2),
        (1, "08:00", date(2025, 3, 9)): NOW - timedelta(days=1),
        (1, "08:00", date(2025, 3, 10)): NOW,
    }
    use_case = PurgeDoseHistoryUseCase(history, clock, retention_days=30, medication_repository=medication_repository)

    await use_case.execute()

    assert sorted(key[2] for key in medication_repository.claims) == [date(2025, 3, 9), date(2025, 3, 10)]


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_collect_dose_statistics(history, clock):
    use_case = CollectDoseStatisticsUseCase(history, clock)

    stats = await use_case.execute(day=date(2025, 3, 9))

    assert stats == {"taken": 2, "missed": 1, "skipped": 0, "delayed": 0}
