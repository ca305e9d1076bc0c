"""
Medications SQLAlchemy Models
"""

from typing import Any

from sqlalchemy import (
    JSON,
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
    UniqueConstraint,
)

from medreminder.domains.medications.domain.value_objects.dose_status import DoseStatus
from medreminder.models.db.base import Base, TimestampMixin


class MedicationModel(Base, TimestampMixin):
    """SQLAlchemy model for Medication entity."""

    __tablename__ = "medications"

    id = Column(Integer, primary_key=True, index=True)
    patient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    doctor_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    name = Column(String(100), nullable=False)
    dosage = Column(String(50), nullable=False)
    instructions = Column(Text, default="", nullable=False)

    # Sorted list of "HH:MM" strings
    times = Column(JSON, default=list, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    # Reminder markers
    last_reminded_at = Column(DateTime(timezone=True), nullable=True)
    reminder_marks = Column(JSON, default=dict, nullable=False)

    __table_args__ = (
        Index("ix_medications_patient_active", "patient_id", "is_active"),
        Index("ix_medications_date_range", "start_date", "end_date"),
    )

    def __repr__(self) -> str:
        return f"<Medication(id={self.id}, patient_id={self.patient_id}, name='{self.name}')>"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "patient_id": self.patient_id,
            "doctor_id": self.doctor_id,
            "name": self.name,
            "dosage": self.dosage,
            "instructions": self.instructions,
            "times": self.times or [],
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "is_active": self.is_active,
            "last_reminded_at": self.last_reminded_at.isoformat() if self.last_reminded_at else None,
        }


class DoseRecordModel(Base, TimestampMixin):
    """SQLAlchemy model for DoseRecord entity."""

    __tablename__ = "dose_records"

    id = Column(Integer, primary_key=True, index=True)
    medication_id = Column(Integer, ForeignKey("medications.id", ondelete="CASCADE"), nullable=False)
    patient_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    status = Column(
        SQLEnum(DoseStatus, name="dose_status", values_callable=lambda enum: [e.value for e in enum]),
        default=DoseStatus.TAKEN,
        nullable=False,
    )
    taken_at = Column(DateTime(timezone=True), nullable=False)
    scheduled_time = Column(String(5), nullable=True)
    notes = Column(String(200), default="", nullable=False)

    __table_args__ = (
        Index("ix_dose_records_medication_taken", "medication_id", "taken_at"),
        Index("ix_dose_records_patient_taken", "patient_id", "taken_at"),
        Index("ix_dose_records_status_taken", "status", "taken_at"),
    )

    def __repr__(self) -> str:
        return f"<DoseRecord(id={self.id}, medication_id={self.medication_id}, status={self.status})>"


class ReminderClaimModel(Base):
    """One row per reminder delivered (or in flight) for a medication slot on a local day."""

    __tablename__ = "reminder_claims"

    id = Column(Integer, primary_key=True)
    medication_id = Column(Integer, ForeignKey("medications.id", ondelete="CASCADE"), nullable=False)
    # "HH:MM", or "*" when one reminder per medication and day is allowed
    slot_key = Column(String(5), nullable=False)
    local_day = Column(Date, nullable=False)
    claimed_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        UniqueConstraint("medication_id", "slot_key", "local_day", name="uq_reminder_claims_slot"),
        Index("ix_reminder_claims_local_day", "local_day"),
    )

    def __repr__(self) -> str:
        return f"<ReminderClaim(medication_id={self.medication_id}, slot={self.slot_key}, day={self.local_day})>"
