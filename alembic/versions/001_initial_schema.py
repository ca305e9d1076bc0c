"""Initial schema - users, medications, dose records and appointments.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "001_initial_schema"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum("patient", "doctor", "admin", name="user_role")
dose_status = sa.Enum("taken", "missed", "skipped", "delayed", name="dose_status")
appointment_status = sa.Enum("scheduled", "confirmed", "completed", "cancelled", "no-show", name="appointment_status")
appointment_type = sa.Enum(
    "consultation", "follow-up", "check-up", "surgery", "therapy", "emergency", "other", name="appointment_type"
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", user_role, nullable=False),
        sa.Column("notification_channel_id", sa.String(64), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "medications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("doctor_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("dosage", sa.String(50), nullable=False),
        sa.Column("instructions", sa.Text(), nullable=False),
        sa.Column("times", sa.JSON(), nullable=False),
        sa.Column("start_date", sa.Date(), nullable=False),
        sa.Column("end_date", sa.Date(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("last_reminded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("reminder_marks", sa.JSON(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_medications_id", "medications", ["id"])
    op.create_index("ix_medications_doctor_id", "medications", ["doctor_id"])
    op.create_index("ix_medications_patient_active", "medications", ["patient_id", "is_active"])
    op.create_index("ix_medications_date_range", "medications", ["start_date", "end_date"])

    op.create_table(
        "dose_records",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "medication_id", sa.Integer(), sa.ForeignKey("medications.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", dose_status, nullable=False),
        sa.Column("taken_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("scheduled_time", sa.String(5), nullable=True),
        sa.Column("notes", sa.String(200), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_dose_records_id", "dose_records", ["id"])
    op.create_index("ix_dose_records_medication_taken", "dose_records", ["medication_id", "taken_at"])
    op.create_index("ix_dose_records_patient_taken", "dose_records", ["patient_id", "taken_at"])
    op.create_index("ix_dose_records_status_taken", "dose_records", ["status", "taken_at"])

    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("patient_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("doctor_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("appointment_date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        sa.Column("appointment_type", appointment_type, nullable=False),
        sa.Column("location", sa.String(200), nullable=False),
        sa.Column("reason", sa.String(500), nullable=False),
        sa.Column("notes", sa.Text(), nullable=False),
        sa.Column("diagnosis", sa.Text(), nullable=False),
        sa.Column("treatment", sa.Text(), nullable=False),
        sa.Column("status", appointment_status, nullable=False),
        sa.Column("reminder_sent", sa.Boolean(), nullable=False),
        sa.Column("reminder_sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancelled_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("cancellation_reason", sa.String(500), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_appointments_id", "appointments", ["id"])
    op.create_index("ix_appointments_patient_id", "appointments", ["patient_id"])
    op.create_index("ix_appointments_doctor_date", "appointments", ["doctor_id", "appointment_date"])
    op.create_index("ix_appointments_date_status", "appointments", ["appointment_date", "status"])


def downgrade() -> None:
    op.drop_table("appointments")
    op.drop_table("dose_records")
    op.drop_table("medications")
    op.drop_table("users")

    bind = op.get_bind()
    for enum in (appointment_type, appointment_status, dose_status, user_role):
        enum.drop(bind, checkfirst=True)
