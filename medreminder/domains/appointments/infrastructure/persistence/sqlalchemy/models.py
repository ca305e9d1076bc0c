"""
Appointments SQLAlchemy Models
"""

from typing import Any

from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Enum as SQLEnum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Time,
)

from medreminder.domains.appointments.domain.value_objects.appointment_status import (
    AppointmentStatus,
    AppointmentType,
)
from medreminder.models.db.base import Base, TimestampMixin


class AppointmentModel(Base, TimestampMixin):
    """SQLAlchemy model for Appointment entity."""

    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    doctor_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    # Scheduling
    appointment_date = Column(Date, nullable=False)
    start_time = Column(Time, nullable=False)
    duration_minutes = Column(Integer, default=30, nullable=False)

    # Details
    appointment_type = Column(
        SQLEnum(AppointmentType, name="appointment_type", values_callable=lambda enum: [e.value for e in enum]),
        default=AppointmentType.CONSULTATION,
        nullable=False,
    )
    location = Column(String(200), default="", nullable=False)
    reason = Column(String(500), default="", nullable=False)
    notes = Column(Text, default="", nullable=False)
    diagnosis = Column(Text, default="", nullable=False)
    treatment = Column(Text, default="", nullable=False)

    # Status
    status = Column(
        SQLEnum(AppointmentStatus, name="appointment_status", values_callable=lambda enum: [e.value for e in enum]),
        default=AppointmentStatus.SCHEDULED,
        nullable=False,
    )

    # Reminders
    reminder_sent = Column(Boolean, default=False, nullable=False)
    reminder_sent_at = Column(DateTime(timezone=True), nullable=True)

    # Status timestamps
    confirmed_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
    cancelled_at = Column(DateTime(timezone=True), nullable=True)
    cancellation_reason = Column(String(500), default="", nullable=False)

    __table_args__ = (
        Index("ix_appointments_doctor_date", "doctor_id", "appointment_date"),
        Index("ix_appointments_date_status", "appointment_date", "status"),
    )

    def __repr__(self) -> str:
        return f"<Appointment(id={self.id}, doctor_id={self.doctor_id}, date={self.appointment_date})>"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "patient_id": self.patient_id,
            "doctor_id": self.doctor_id,
            "appointment_date": self.appointment_date.isoformat() if self.appointment_date else None,
            "start_time": self.start_time.strftime("%H:%M") if self.start_time else None,
            "duration_minutes": self.duration_minutes,
            "status": self.status.value if self.status else None,
        }
