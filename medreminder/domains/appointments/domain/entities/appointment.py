"""
Appointment Entity

A doctor appointment occupying [start, start + duration) on one day.
"""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import Any

from pytz.tzinfo import BaseTzInfo

from medreminder.core.clock import localize
from medreminder.core.domain import Entity, InvalidOperationException, ValidationException
from medreminder.domains.appointments.domain.value_objects.appointment_status import (
    AppointmentStatus,
    AppointmentType,
)

MIN_DURATION_MINUTES = 15
MAX_DURATION_MINUTES = 240
DEFAULT_DURATION_MINUTES = 30


def minutes_of_day(value: time) -> int:
    return value.hour * 60 + value.minute


def duration_between(start_time: time, end_time: time) -> int:
    """Duration in minutes between two wall times of the same day."""
    return minutes_of_day(end_time) - minutes_of_day(start_time)


@dataclass(eq=False)
class Appointment(Entity[int]):
    """
    Appointment aggregate.

    Status changes go through the transition methods, which raise
    InvalidOperationException for a move the lifecycle does not allow.

    Example:
        ```python
        appointment = Appointment(
            patient_id=12,
            doctor_id=3,
            appointment_date=date(2025, 3, 10),
            start_time=time(10, 0),
        )
        appointment.confirm()
        appointment.complete(diagnosis="Seasonal allergy")
        ```
    """

    # References
    patient_id: int = 0
    doctor_id: int = 0

    # Scheduling
    appointment_date: date | None = None
    start_time: time | None = None
    duration_minutes: int = DEFAULT_DURATION_MINUTES

    # Details
    appointment_type: AppointmentType = AppointmentType.CONSULTATION
    location: str = ""
    reason: str = ""
    notes: str = ""
    diagnosis: str = ""
    treatment: str = ""

    # Status
    status: AppointmentStatus = AppointmentStatus.SCHEDULED

    # Reminders
    reminder_sent: bool = False
    reminder_sent_at: datetime | None = None

    # Timestamps
    confirmed_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None
    cancellation_reason: str = ""

    @staticmethod
    def validate_duration(duration_minutes: int) -> None:
        if not MIN_DURATION_MINUTES <= duration_minutes <= MAX_DURATION_MINUTES:
            raise ValidationException(
                f"Duration must be between {MIN_DURATION_MINUTES} and {MAX_DURATION_MINUTES} minutes",
                field="duration_minutes",
            )

    @property
    def start_minutes(self) -> int:
        return minutes_of_day(self.start_time) if self.start_time else 0

    @property
    def end_minutes(self) -> int:
        """Exclusive end, in minutes since midnight of the appointment date."""
        return self.start_minutes + self.duration_minutes

    @property
    def end_time(self) -> time | None:
        if self.start_time is None:
            return None
        end = datetime.combine(date.min, self.start_time) + timedelta(minutes=self.duration_minutes)
        return end.time()

    def ends_at(self, tz: BaseTzInfo) -> datetime | None:
        """Aware instant at which the appointment ends."""
        if self.appointment_date is None or self.start_time is None:
            return None
        return localize(self.appointment_date, self.start_time, tz) + timedelta(minutes=self.duration_minutes)

    def overlaps(self, start_minutes: int, end_minutes: int) -> bool:
        """Half-open interval overlap with [start_minutes, end_minutes)."""
        return start_minutes < self.end_minutes and end_minutes > self.start_minutes

    # Status Transitions

    def _transition(self, operation: str, new_status: AppointmentStatus) -> None:
        if not self.status.can_transition_to(new_status):
            raise InvalidOperationException(operation=operation, current_state=self.status.value)
        self.status = new_status
        self.touch()

    def confirm(self) -> None:
        self._transition("confirm", AppointmentStatus.CONFIRMED)
        self.confirmed_at = datetime.now(UTC)

    def complete(self, diagnosis: str = "", treatment: str = "") -> None:
        self._transition("complete", AppointmentStatus.COMPLETED)
        self.completed_at = datetime.now(UTC)
        if diagnosis:
            self.diagnosis = diagnosis
        if treatment:
            self.treatment = treatment

    def cancel(self, reason: str = "") -> None:
        self._transition("cancel", AppointmentStatus.CANCELLED)
        self.cancelled_at = datetime.now(UTC)
        self.cancellation_reason = reason

    def mark_no_show(self) -> None:
        self._transition("mark_no_show", AppointmentStatus.NO_SHOW)

    def is_overdue(self, now: datetime, tz: BaseTzInfo, grace: timedelta) -> bool:
        """Active and ended more than `grace` before `now`."""
        end = self.ends_at(tz)
        return self.status.is_active() and end is not None and end + grace < now

    def reschedule(
        self,
        appointment_date: date | None = None,
        start_time: time | None = None,
        duration_minutes: int | None = None,
    ) -> None:
        if not self.status.is_active():
            raise InvalidOperationException(operation="reschedule", current_state=self.status.value)
        if duration_minutes is not None:
            self.validate_duration(duration_minutes)
            self.duration_minutes = duration_minutes
        if appointment_date is not None:
            self.appointment_date = appointment_date
        if start_time is not None:
            self.start_time = start_time
        self.reminder_sent = False
        self.reminder_sent_at = None
        self.touch()

    # Reminders

    def mark_reminder_sent(self) -> None:
        self.reminder_sent = True
        self.reminder_sent_at = datetime.now(UTC)
        self.touch()

    def to_summary_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "patient_id": self.patient_id,
            "doctor_id": self.doctor_id,
            "date": self.appointment_date.isoformat() if self.appointment_date else None,
            "start_time": self.start_time.strftime("%H:%M") if self.start_time else None,
            "end_time": self.end_time.strftime("%H:%M") if self.end_time else None,
            "duration_minutes": self.duration_minutes,
            "status": self.status.value,
            "type": self.appointment_type.value,
            "location": self.location,
        }
