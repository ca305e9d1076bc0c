"""
Medications API Schemas

Pydantic schemas for API request/response validation.
"""

from datetime import date, datetime

from pydantic import BaseModel, Field


class MedicationCreate(BaseModel):
    """Medication creation schema."""

    patient_id: int
    doctor_id: int | None = None
    name: str = Field(..., min_length=1, max_length=100)
    dosage: str = Field(..., min_length=1, max_length=50)
    instructions: str = Field(default="", max_length=1000)
    times: list[str] = Field(..., min_length=1, description="Times of day as HH:MM")
    start_date: date
    end_date: date


class MedicationUpdate(BaseModel):
    """Partial medication update. Omitted fields keep their value."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    dosage: str | None = Field(default=None, min_length=1, max_length=50)
    instructions: str | None = Field(default=None, max_length=1000)
    times: list[str] | None = Field(default=None, min_length=1)
    start_date: date | None = None
    end_date: date | None = None
    is_active: bool | None = None


class MedicationResponse(BaseModel):
    """Medication response schema."""

    id: int
    patient_id: int
    doctor_id: int | None = None
    name: str
    dosage: str
    instructions: str
    times: list[str]
    start_date: date
    end_date: date
    is_active: bool
    last_reminded_at: datetime | None = None
    next_dose_time: str | None = None
    days_remaining: int = 0

    class Config:
        from_attributes = True


class NotificationChannelLink(BaseModel):
    channel_id: str = Field(..., min_length=1, max_length=64)


class UserResponse(BaseModel):
    """User response schema."""

    id: int
    name: str
    email: str
    role: str
    notification_channel_id: str | None = None
    is_active: bool


class AdherenceResponse(BaseModel):
    """Adherence over a trailing window of days."""

    patient_id: int
    medication_id: int | None = None
    days: int
    adherence_rate: int
    exact_rate: float
    total_doses: int
    taken_doses: int
    missed_doses: int
    skipped_doses: int
    delayed_doses: int


class WeekdayAdherenceResponse(BaseModel):
    weekday: str
    adherence_rate: int
    total_doses: int
    taken_doses: int


class WeeklyAdherenceResponse(BaseModel):
    """Adherence per weekday, Sunday first."""

    patient_id: int
    medication_id: int | None = None
    weeks: int
    days: list[WeekdayAdherenceResponse]


__all__ = [
    "MedicationCreate",
    "MedicationUpdate",
    "MedicationResponse",
    "NotificationChannelLink",
    "UserResponse",
    "AdherenceResponse",
    "WeekdayAdherenceResponse",
    "WeeklyAdherenceResponse",
]
