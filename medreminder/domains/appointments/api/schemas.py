"""
Appointments API Schemas

Pydantic schemas for API request/response validation.
"""

from datetime import date, datetime, time

from pydantic import BaseModel, Field


class AppointmentRequest(BaseModel):
    """
    Appointment booking schema.

    Either `duration_minutes` or `end_time` may be given; without both the
    default duration applies.
    """

    patient_id: int
    doctor_id: int
    appointment_date: date
    start_time: time
    duration_minutes: int | None = Field(default=None, ge=15, le=240)
    end_time: time | None = None
    appointment_type: str = "consultation"
    location: str = Field(default="", max_length=200)
    reason: str = Field(default="", max_length=500)
    notes: str = ""


class AppointmentUpdate(BaseModel):
    """Reschedule or edit an appointment. Omitted fields keep their value."""

    appointment_date: date | None = None
    start_time: time | None = None
    duration_minutes: int | None = Field(default=None, ge=15, le=240)
    end_time: time | None = None
    location: str | None = Field(default=None, max_length=200)
    notes: str | None = None


class CompleteAppointmentRequest(BaseModel):
    diagnosis: str = ""
    treatment: str = ""


class CancelAppointmentRequest(BaseModel):
    reason: str = Field(default="", max_length=500)


class AppointmentResponse(BaseModel):
    """Appointment response schema."""

    id: int
    patient_id: int
    doctor_id: int
    appointment_date: date
    start_time: time
    end_time: time
    duration_minutes: int
    appointment_type: str
    status: str
    location: str
    reason: str
    notes: str
    diagnosis: str
    treatment: str
    reminder_sent: bool
    cancellation_reason: str
    confirmed_at: datetime | None = None
    completed_at: datetime | None = None
    cancelled_at: datetime | None = None

    class Config:
        from_attributes = True


class AvailableSlotResponse(BaseModel):
    """Candidate appointment slot."""

    start: str
    end: str
    available: bool


class AvailableSlotsResponse(BaseModel):
    doctor_id: int
    date: date
    duration_minutes: int
    slots: list[AvailableSlotResponse]


class ConflictCheckResponse(BaseModel):
    """Result of checking a candidate interval against a doctor's calendar."""

    doctor_id: int
    date: date
    start_time: time
    duration_minutes: int
    has_conflict: bool
    conflicting_ids: list[int]


__all__ = [
    "AppointmentRequest",
    "AppointmentUpdate",
    "CompleteAppointmentRequest",
    "CancelAppointmentRequest",
    "AppointmentResponse",
    "AvailableSlotResponse",
    "AvailableSlotsResponse",
    "ConflictCheckResponse",
]
