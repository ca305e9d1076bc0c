"""
Shared pytest fixtures for all tests.

Provides a pinned clock, in-memory repositories implementing the domain
ports, a mock notification dispatcher and small entity factories.
"""

import os
from datetime import date, datetime, time, timedelta
from unittest.mock import AsyncMock, MagicMock

import pytest
import pytz
from sqlalchemy.ext.asyncio import AsyncSession

from medreminder.domains.appointments.domain.entities.appointment import Appointment
from medreminder.domains.appointments.domain.value_objects.appointment_status import AppointmentStatus
from medreminder.domains.medications.domain.entities.dose_record import DoseRecord
from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.medications.domain.value_objects.dose_status import DoseStatus
from medreminder.domains.shared.domain.entities.user import User
from medreminder.domains.shared.domain.value_objects.user_role import UserRole

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"
os.environ["SCHEDULER_ENABLED"] = "false"


# ============================================================================
# CLOCK
# ============================================================================


class FixedClock:
    """Clock pinned to a wall-clock instant in a reference timezone."""

    def __init__(self, moment: datetime, timezone_name: str = "UTC"):
        self._tz = pytz.timezone(timezone_name)
        self._now = self._localize(moment)

    def _localize(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return self._tz.localize(moment)
        return moment.astimezone(self._tz)

    @property
    def tz(self):
        return self._tz

    def now(self) -> datetime:
        return self._now

    def set(self, moment: datetime) -> None:
        self._now = self._localize(moment)

    def advance(self, **kwargs) -> None:
        self._now = self._tz.normalize(self._now + timedelta(**kwargs))


# ============================================================================
# IN-MEMORY REPOSITORIES
# ============================================================================


class InMemoryUserRepository:
    def __init__(self):
        self.users: dict[int, User] = {}
        self._next_id = 1

    def add(self, user: User) -> User:
        if user.id is None:
            user.id = self._next_id
        self._next_id = max(self._next_id, user.id) + 1
        self.users[user.id] = user
        return user

    async def find_by_id(self, user_id: int) -> User | None:
        return self.users.get(user_id)

    async def find_by_ids(self, user_ids: list[int]) -> dict[int, User]:
        return {uid: self.users[uid] for uid in user_ids if uid in self.users}

    async def save(self, user: User) -> User:
        return self.add(user)


class InMemoryMedicationRepository:
    def __init__(self):
        self.medications: dict[int, Medication] = {}
        self.marker_updates: list[int] = []
        self.claims: dict[tuple[int, str, date], datetime] = {}
        self._next_id = 1

    def add(self, medication: Medication) -> Medication:
        if medication.id is None:
            medication.id = self._next_id
        self._next_id = max(self._next_id, medication.id) + 1
        self.medications[medication.id] = medication
        return medication

    async def find_by_id(self, medication_id: int) -> Medication | None:
        return self.medications.get(medication_id)

    async def find_active_on(self, day: date) -> list[Medication]:
        return [m for m in self.medications.values() if m.is_currently_active(day)]

    async def find_active_by_patient(self, patient_id: int) -> list[Medication]:
        return [m for m in self.medications.values() if m.patient_id == patient_id and m.is_active]

    async def find_schedulable(self, from_day: date) -> list[Medication]:
        return [m for m in self.medications.values() if m.is_active and m.end_date >= from_day]

    async def save(self, medication: Medication) -> Medication:
        return self.add(medication)

    async def update_reminder_markers(self, medication_id: int, scheduled_time: str, reminded_at: datetime) -> None:
        self.marker_updates.append(medication_id)

    async def claim_reminder(self, medication_id: int, slot_key: str, day: date, claimed_at: datetime) -> bool:
        key = (medication_id, slot_key, day)
        if key in self.claims:
            return False
        self.claims[key] = claimed_at
        return True

    async def release_reminder(self, medication_id: int, slot_key: str, day: date) -> None:
        self.claims.pop((medication_id, slot_key, day), None)

    async def delete_reminder_claims_before(self, day: date) -> int:
        stale = [key for key in self.claims if key[2] < day]
        for key in stale:
            del self.claims[key]
        return len(stale)

    async def delete(self, medication_id: int) -> bool:
        return self.medications.pop(medication_id, None) is not None


class InMemoryDoseRecordRepository:
    def __init__(self):
        self.records: list[DoseRecord] = []

    async def exists_for_slot(self, medication_id, scheduled_time, day_start, day_end) -> bool:
        return any(
            r.medication_id == medication_id
            and r.scheduled_time == scheduled_time
            and day_start <= r.taken_at < day_end
            for r in self.records
        )

    async def add(self, record: DoseRecord) -> DoseRecord:
        record.id = len(self.records) + 1
        self.records.append(record)
        return record

    async def find_by_patient(self, patient_id, since, medication_id=None) -> list[DoseRecord]:
        return [
            r
            for r in self.records
            if r.patient_id == patient_id
            and r.taken_at >= since
            and (medication_id is None or r.medication_id == medication_id)
        ]

    async def count_by_status(self, start, end) -> dict[DoseStatus, int]:
        counts: dict[DoseStatus, int] = {}
        for r in self.records:
            if start <= r.taken_at < end:
                counts[r.status] = counts.get(r.status, 0) + 1
        return counts

    async def delete_older_than(self, cutoff) -> int:
        before = len(self.records)
        self.records = [r for r in self.records if r.taken_at >= cutoff]
        return before - len(self.records)


class InMemoryAppointmentRepository:
    def __init__(self):
        self.appointments: dict[int, Appointment] = {}
        self._next_id = 1

    def add(self, appointment: Appointment) -> Appointment:
        if appointment.id is None:
            appointment.id = self._next_id
        self._next_id = max(self._next_id, appointment.id) + 1
        self.appointments[appointment.id] = appointment
        return appointment

    async def find_by_id(self, appointment_id: int) -> Appointment | None:
        return self.appointments.get(appointment_id)

    async def find_by_doctor_and_date(self, doctor_id, appointment_date, statuses=None) -> list[Appointment]:
        found = [
            a
            for a in self.appointments.values()
            if a.doctor_id == doctor_id
            and a.appointment_date == appointment_date
            and (not statuses or a.status in statuses)
        ]
        return sorted(found, key=lambda a: a.start_minutes)

    async def find_pending_reminders(self, appointment_date) -> list[Appointment]:
        return [
            a
            for a in self.appointments.values()
            if a.appointment_date == appointment_date and a.status.is_active() and not a.reminder_sent
        ]

    async def find_active_until(self, appointment_date) -> list[Appointment]:
        return [
            a
            for a in self.appointments.values()
            if a.appointment_date <= appointment_date and a.status.is_active()
        ]

    async def save(self, appointment: Appointment) -> Appointment:
        return self.add(appointment)

    async def delete_completed_before(self, cutoff) -> int:
        doomed = [
            a.id
            for a in self.appointments.values()
            if a.status == AppointmentStatus.COMPLETED and a.completed_at is not None and a.completed_at < cutoff
        ]
        for appointment_id in doomed:
            del self.appointments[appointment_id]
        return len(doomed)

    async def count_by_status(self, appointment_date) -> dict[AppointmentStatus, int]:
        counts: dict[AppointmentStatus, int] = {}
        for a in self.appointments.values():
            if a.appointment_date == appointment_date:
                counts[a.status] = counts.get(a.status, 0) + 1
        return counts


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def clock() -> FixedClock:
    """Clock pinned to Monday 2025-03-10 08:00 UTC."""
    return FixedClock(datetime(2025, 3, 10, 8, 0))


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def medication_repository() -> InMemoryMedicationRepository:
    return InMemoryMedicationRepository()


@pytest.fixture
def dose_record_repository() -> InMemoryDoseRecordRepository:
    return InMemoryDoseRecordRepository()


@pytest.fixture
def appointment_repository() -> InMemoryAppointmentRepository:
    return InMemoryAppointmentRepository()


@pytest.fixture
def mock_dispatcher():
    """Notification dispatcher that accepts every message."""
    dispatcher = MagicMock()
    dispatcher.send = AsyncMock(return_value=True)
    return dispatcher


@pytest.fixture
def mock_async_session():
    """Create a mock async session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.refresh = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def patient(user_repository) -> User:
    """Active patient with a linked channel."""
    return user_repository.add(
        User(id=1, name="Ana Pérez", email="ana@example.com", role=UserRole.PATIENT, notification_channel_id="5001")
    )


@pytest.fixture
def doctor(user_repository) -> User:
    return user_repository.add(User(id=2, name="Dr. Gómez", email="gomez@example.com", role=UserRole.DOCTOR))


@pytest.fixture
def make_medication(medication_repository, patient):
    """Factory storing a medication for the default patient."""

    def _make(**overrides) -> Medication:
        fields = {
            "patient_id": patient.id,
            "name": "Amoxicillin",
            "dosage": "500mg",
            "times": ["08:00", "20:00"],
            "start_date": date(2025, 3, 1),
            "end_date": date(2025, 3, 31),
        }
        fields.update(overrides)
        return medication_repository.add(Medication(**fields))

    return _make


@pytest.fixture
def make_appointment(appointment_repository, patient, doctor):
    """Factory storing an appointment with the default doctor and patient."""

    def _make(start: time = time(10, 0), duration: int = 30, **overrides) -> Appointment:
        fields = {
            "patient_id": patient.id,
            "doctor_id": doctor.id,
            "appointment_date": date(2025, 3, 11),
            "start_time": start,
            "duration_minutes": duration,
        }
        fields.update(overrides)
        return appointment_repository.add(Appointment(**fields))

    return _make


@pytest.fixture
def make_clock():
    """Factory for clocks in other timezones."""
    return FixedClock
