"""
Unit tests for appointment overlap rules and slot generation.
"""

from datetime import date, time

import pytest

from medreminder.domains.appointments.domain.entities.appointment import Appointment
from medreminder.domains.appointments.domain.services.conflict_rules import find_conflicts, intervals_overlap
from medreminder.domains.appointments.domain.services.slot_finder import ClinicHours, generate_slots
from medreminder.domains.appointments.domain.value_objects.appointment_status import AppointmentStatus


def _appointment(appointment_id: int, start: time, duration: int = 30, status=AppointmentStatus.SCHEDULED):
    return Appointment(
        id=appointment_id,
        patient_id=1,
        doctor_id=2,
        appointment_date=date(2025, 3, 11),
        start_time=start,
        duration_minutes=duration,
        status=status,
    )


# ============================================================================
# Overlap rules
# ============================================================================


@pytest.mark.unit
@pytest.mark.parametrize(
    "a,b,expected",
    [
        ((600, 630), (615, 645), True),
        ((600, 630), (630, 660), False),  # back to back
        ((600, 660), (610, 620), True),  # contained
        ((600, 630), (570, 600), False),
        ((600, 630), (600, 630), True),
        ((585, 605), (600, 630), True),  # 09:45-10:05 against 10:00-10:30
    ],
)
def test_intervals_overlap(a, b, expected):
    assert intervals_overlap(*a, *b) is expected
    assert intervals_overlap(*b, *a) is expected


@pytest.mark.unit
def test_find_conflicts_ignores_inactive_appointments():
    existing = [
        _appointment(1, time(10, 0), status=AppointmentStatus.CANCELLED),
        _appointment(2, time(10, 0), status=AppointmentStatus.COMPLETED),
        _appointment(3, time(10, 0), status=AppointmentStatus.NO_SHOW),
    ]
    assert find_conflicts(existing, 600, 30) == []


@pytest.mark.unit
def test_find_conflicts_returns_overlapping_active_appointments():
    existing = [
        _appointment(1, time(9, 0)),
        _appointment(2, time(10, 0), status=AppointmentStatus.CONFIRMED),
        _appointment(3, time(10, 30)),
    ]

    conflicts = find_conflicts(existing, 10 * 60 + 15, 30)

    assert [a.id for a in conflicts] == [2, 3]


@pytest.mark.unit
def test_find_conflicts_excludes_appointment_being_edited():
    existing = [_appointment(1, time(10, 0))]

    assert find_conflicts(existing, 600, 45, exclude_appointment_id=1) == []
    assert len(find_conflicts(existing, 600, 45)) == 1


# ============================================================================
# Slot generation
# ============================================================================


@pytest.fixture
def hours():
    return ClinicHours.from_strings()


@pytest.mark.unit
def test_slots_cover_clinic_hours_without_break(hours):
    slots = generate_slots([], hours, 30)
    starts = [slot.start.label for slot in slots]

    assert starts[0] == "09:00"
    assert starts[-1] == "16:30"
    assert slots[-1].end.label == "17:00"
    # 12:00, 12:15 and 12:30 fall entirely inside the break
    assert "12:00" not in starts
    assert "12:30" not in starts
    assert "11:45" in starts
    assert "12:45" in starts
    assert len(slots) == 28
    assert all(slot.available for slot in slots)


@pytest.mark.unit
def test_slots_overlapping_booking_are_unavailable(hours):
    slots = {slot.start.label: slot for slot in generate_slots([_appointment(1, time(10, 0))], hours, 30)}

    assert slots["09:30"].available
    assert not slots["09:45"].available
    assert not slots["10:00"].available
    assert not slots["10:15"].available
    assert slots["10:30"].available


@pytest.mark.unit
def test_cancelled_booking_frees_slot(hours):
    cancelled = _appointment(1, time(10, 0), status=AppointmentStatus.CANCELLED)
    slots = {slot.start.label: slot for slot in generate_slots([cancelled], hours, 30)}

    assert slots["10:00"].available


@pytest.mark.unit
def test_long_duration_must_end_by_closing(hours):
    slots = generate_slots([], hours, 60)
    assert slots[-1].start.label == "16:00"
    assert slots[-1].to_dict() == {"start": "16:00", "end": "17:00", "available": True}


@pytest.mark.unit
def test_custom_step():
    hours = ClinicHours.from_strings(
        opening="08:00", closing="10:00", break_start="09:00", break_end="09:00", step_minutes=30
    )
    slots = generate_slots([], hours, 30)
    assert [slot.start.label for slot in slots] == ["08:00", "08:30", "09:00", "09:30"]
