"""
Dose Record Repository Implementation
"""

import logging
from datetime import datetime

from sqlalchemy import and_, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medreminder.domains.medications.application.ports.dose_record_repository import IDoseRecordRepository
from medreminder.domains.medications.domain.entities.dose_record import DoseRecord
from medreminder.domains.medications.domain.value_objects.dose_status import DoseStatus
from medreminder.domains.medications.infrastructure.persistence.sqlalchemy.models import DoseRecordModel

logger = logging.getLogger(__name__)


class SQLAlchemyDoseRecordRepository(IDoseRecordRepository):
    """
    SQLAlchemy implementation of dose record repository.

    Records are append-only; the only destructive operation is the retention
    purge.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists_for_slot(
        self,
        medication_id: int,
        scheduled_time: str,
        day_start: datetime,
        day_end: datetime,
    ) -> bool:
        result = await self.session.execute(
            select(DoseRecordModel.id)
            .where(
                and_(
                    DoseRecordModel.medication_id == medication_id,
                    DoseRecordModel.scheduled_time == scheduled_time,
                    DoseRecordModel.taken_at >= day_start,
                    DoseRecordModel.taken_at < day_end,
                )
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def add(self, record: DoseRecord) -> DoseRecord:
        model = self._to_model(record)
        self.session.add(model)
        try:
            await self.session.commit()
            await self.session.refresh(model)
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return self._to_entity(model)

    async def find_by_patient(
        self,
        patient_id: int,
        since: datetime,
        medication_id: int | None = None,
    ) -> list[DoseRecord]:
        query = select(DoseRecordModel).where(
            and_(
                DoseRecordModel.patient_id == patient_id,
                DoseRecordModel.taken_at >= since,
            )
        )
        if medication_id:
            query = query.where(DoseRecordModel.medication_id == medication_id)

        query = query.order_by(DoseRecordModel.taken_at)

        result = await self.session.execute(query)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def count_by_status(self, start: datetime, end: datetime) -> dict[DoseStatus, int]:
        result = await self.session.execute(
            select(DoseRecordModel.status, func.count())
            .where(
                and_(
                    DoseRecordModel.taken_at >= start,
                    DoseRecordModel.taken_at < end,
                )
            )
            .group_by(DoseRecordModel.status)
        )
        return {status: count for status, count in result.all()}

    async def delete_older_than(self, cutoff: datetime) -> int:
        try:
            result = await self.session.execute(delete(DoseRecordModel).where(DoseRecordModel.taken_at < cutoff))
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return result.rowcount or 0  # type: ignore[attr-defined]

    # Mapping methods

    def _to_entity(self, model: DoseRecordModel) -> DoseRecord:
        record = DoseRecord(
            id=model.id,  # type: ignore[arg-type]
            medication_id=model.medication_id,  # type: ignore[arg-type]
            patient_id=model.patient_id,  # type: ignore[arg-type]
            status=model.status or DoseStatus.TAKEN,  # type: ignore[arg-type]
            taken_at=model.taken_at,  # type: ignore[arg-type]
            scheduled_time=model.scheduled_time,  # type: ignore[arg-type]
            notes=model.notes or "",  # type: ignore[arg-type]
        )
        if model.created_at:
            record.created_at = model.created_at  # type: ignore[assignment]
        return record

    def _to_model(self, record: DoseRecord) -> DoseRecordModel:
        return DoseRecordModel(
            medication_id=record.medication_id,
            patient_id=record.patient_id,
            status=record.status,
            taken_at=record.taken_at,
            scheduled_time=record.scheduled_time,
            notes=record.notes,
        )
