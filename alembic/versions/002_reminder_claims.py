"""Reminder claims - one row per delivered medication reminder slot and local day.

Revision ID: 002_reminder_claims
Revises: 001_initial_schema
Create Date: 2026-10-19
"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "002_reminder_claims"
down_revision: Union[str, Sequence[str], None] = "001_initial_schema"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "reminder_claims",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "medication_id", sa.Integer(), sa.ForeignKey("medications.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("slot_key", sa.String(5), nullable=False),
        sa.Column("local_day", sa.Date(), nullable=False),
        sa.Column("claimed_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("medication_id", "slot_key", "local_day", name="uq_reminder_claims_slot"),
    )
    op.create_index("ix_reminder_claims_local_day", "reminder_claims", ["local_day"])


def downgrade() -> None:
    op.drop_index("ix_reminder_claims_local_day", table_name="reminder_claims")
    op.drop_table("reminder_claims")
