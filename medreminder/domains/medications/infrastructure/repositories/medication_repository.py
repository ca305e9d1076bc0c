"""
Medication Repository Implementation

SQLAlchemy implementation of IMedicationRepository.
"""

import logging
from datetime import date, datetime

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medreminder.domains.medications.application.ports.medication_repository import IMedicationRepository
from medreminder.domains.medications.domain.entities.medication import Medication
from medreminder.domains.medications.infrastructure.persistence.sqlalchemy.models import (
    MedicationModel,
    ReminderClaimModel,
)

logger = logging.getLogger(__name__)


def serialize_marks(marks: dict[str, datetime]) -> dict[str, str]:
    return {t: m.isoformat() for t, m in marks.items()}


def deserialize_marks(raw: dict[str, str] | None) -> dict[str, datetime]:
    marks: dict[str, datetime] = {}
    for scheduled_time, value in (raw or {}).items():
        try:
            marks[scheduled_time] = datetime.fromisoformat(value)
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed reminder marker {scheduled_time}={value!r}")
    return marks


class SQLAlchemyMedicationRepository(IMedicationRepository):
    """
    SQLAlchemy implementation of medication repository.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, medication_id: int) -> Medication | None:
        result = await self.session.execute(select(MedicationModel).where(MedicationModel.id == medication_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_active_on(self, day: date) -> list[Medication]:
        result = await self.session.execute(
            select(MedicationModel)
            .where(
                and_(
                    MedicationModel.is_active.is_(True),
                    MedicationModel.start_date <= day,
                    MedicationModel.end_date >= day,
                )
            )
            .order_by(MedicationModel.id)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_active_by_patient(self, patient_id: int) -> list[Medication]:
        result = await self.session.execute(
            select(MedicationModel)
            .where(
                and_(
                    MedicationModel.patient_id == patient_id,
                    MedicationModel.is_active.is_(True),
                )
            )
            .order_by(MedicationModel.id)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_schedulable(self, from_day: date) -> list[Medication]:
        result = await self.session.execute(
            select(MedicationModel)
            .where(
                and_(
                    MedicationModel.is_active.is_(True),
                    MedicationModel.end_date >= from_day,
                )
            )
            .order_by(MedicationModel.id)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def save(self, medication: Medication) -> Medication:
        """Save or update medication."""
        model = None
        if medication.id:
            result = await self.session.execute(select(MedicationModel).where(MedicationModel.id == medication.id))
            model = result.scalar_one_or_none()

        if model:
            self._update_model(model, medication)
        else:
            model = self._to_model(medication)
            self.session.add(model)

        try:
            await self.session.commit()
            await self.session.refresh(model)
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        return self._to_entity(model)

    async def update_reminder_markers(self, medication_id: int, scheduled_time: str, reminded_at: datetime) -> None:
        try:
            result = await self.session.execute(
                select(MedicationModel)
                .where(MedicationModel.id == medication_id)
                .with_for_update()
                .execution_options(populate_existing=True)
            )
            model = result.scalar_one_or_none()
            if model is not None:
                marks = dict(model.reminder_marks or {})
                marks[scheduled_time] = reminded_at.isoformat()
                model.reminder_marks = marks  # type: ignore[assignment]
                model.last_reminded_at = reminded_at  # type: ignore[assignment]
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    async def claim_reminder(self, medication_id: int, slot_key: str, day: date, claimed_at: datetime) -> bool:
        try:
            await self.session.execute(
                insert(ReminderClaimModel).values(
                    medication_id=medication_id,
                    slot_key=slot_key,
                    local_day=day,
                    claimed_at=claimed_at,
                )
            )
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.debug(f"Reminder {slot_key} of medication {medication_id} already claimed for {day}")
            return False
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return True

    async def release_reminder(self, medication_id: int, slot_key: str, day: date) -> None:
        try:
            await self.session.execute(
                delete(ReminderClaimModel).where(
                    and_(
                        ReminderClaimModel.medication_id == medication_id,
                        ReminderClaimModel.slot_key == slot_key,
                        ReminderClaimModel.local_day == day,
                    )
                )
            )
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    async def delete_reminder_claims_before(self, day: date) -> int:
        try:
            result = await self.session.execute(delete(ReminderClaimModel).where(ReminderClaimModel.local_day < day))
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def delete(self, medication_id: int) -> bool:
        result = await self.session.execute(select(MedicationModel).where(MedicationModel.id == medication_id))
        model = result.scalar_one_or_none()
        if model is None:
            return False
        try:
            await self.session.delete(model)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return True

    # Mapping methods

    def _to_entity(self, model: MedicationModel) -> Medication:
        medication = Medication(
            id=model.id,  # type: ignore[arg-type]
            patient_id=model.patient_id,  # type: ignore[arg-type]
            doctor_id=model.doctor_id,  # type: ignore[arg-type]
            name=model.name or "",  # type: ignore[arg-type]
            dosage=model.dosage or "",  # type: ignore[arg-type]
            instructions=model.instructions or "",  # type: ignore[arg-type]
            times=list(model.times or []),  # type: ignore[arg-type]
            start_date=model.start_date,  # type: ignore[arg-type]
            end_date=model.end_date,  # type: ignore[arg-type]
            is_active=bool(model.is_active),
            last_reminded_at=model.last_reminded_at,  # type: ignore[arg-type]
            reminder_marks=deserialize_marks(model.reminder_marks),  # type: ignore[arg-type]
        )
        if model.created_at:
            medication.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            medication.updated_at = model.updated_at  # type: ignore[assignment]
        return medication

    def _to_model(self, medication: Medication) -> MedicationModel:
        return MedicationModel(
            patient_id=medication.patient_id,
            doctor_id=medication.doctor_id,
            name=medication.name,
            dosage=medication.dosage,
            instructions=medication.instructions,
            times=list(medication.times),
            start_date=medication.start_date,
            end_date=medication.end_date,
            is_active=medication.is_active,
            last_reminded_at=medication.last_reminded_at,
            reminder_marks=serialize_marks(medication.reminder_marks),
        )

    def _update_model(self, model: MedicationModel, medication: Medication) -> None:
        model.name = medication.name  # type: ignore[assignment]
        model.dosage = medication.dosage  # type: ignore[assignment]
        model.instructions = medication.instructions  # type: ignore[assignment]
        model.times = list(medication.times)  # type: ignore[assignment]
        model.start_date = medication.start_date  # type: ignore[assignment]
        model.end_date = medication.end_date  # type: ignore[assignment]
        model.is_active = medication.is_active  # type: ignore[assignment]
        model.last_reminded_at = medication.last_reminded_at  # type: ignore[assignment]
        model.reminder_marks = serialize_marks(medication.reminder_marks)  # type: ignore[assignment]
