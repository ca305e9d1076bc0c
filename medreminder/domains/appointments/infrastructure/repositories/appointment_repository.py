"""
Appointment Repository Implementation

SQLAlchemy implementation of IAppointmentRepository.
"""

import logging
from datetime import date, datetime

from sqlalchemy import and_, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository
from medreminder.domains.appointments.domain.entities.appointment import Appointment
from medreminder.domains.appointments.domain.value_objects.appointment_status import (
    ACTIVE_STATUSES,
    AppointmentStatus,
    AppointmentType,
)
from medreminder.domains.appointments.infrastructure.persistence.sqlalchemy.models import AppointmentModel

logger = logging.getLogger(__name__)


class SQLAlchemyAppointmentRepository(IAppointmentRepository):
    """
    SQLAlchemy implementation of appointment repository.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_by_id(self, appointment_id: int) -> Appointment | None:
        result = await self.session.execute(select(AppointmentModel).where(AppointmentModel.id == appointment_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_doctor_and_date(
        self,
        doctor_id: int,
        appointment_date: date,
        statuses: tuple[AppointmentStatus, ...] | None = None,
    ) -> list[Appointment]:
        query = select(AppointmentModel).where(
            and_(
                AppointmentModel.doctor_id == doctor_id,
                AppointmentModel.appointment_date == appointment_date,
            )
        )
        if statuses:
            query = query.where(AppointmentModel.status.in_(statuses))

        query = query.order_by(AppointmentModel.start_time)

        result = await self.session.execute(query)
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_pending_reminders(self, appointment_date: date) -> list[Appointment]:
        result = await self.session.execute(
            select(AppointmentModel)
            .where(
                and_(
                    AppointmentModel.appointment_date == appointment_date,
                    AppointmentModel.status.in_(ACTIVE_STATUSES),
                    AppointmentModel.reminder_sent.is_(False),
                )
            )
            .order_by(AppointmentModel.start_time)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def find_active_until(self, appointment_date: date) -> list[Appointment]:
        result = await self.session.execute(
            select(AppointmentModel)
            .where(
                and_(
                    AppointmentModel.appointment_date <= appointment_date,
                    AppointmentModel.status.in_(ACTIVE_STATUSES),
                )
            )
            .order_by(AppointmentModel.appointment_date, AppointmentModel.start_time)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def save(self, appointment: Appointment) -> Appointment:
        """Save or update appointment."""
        model = None
        if appointment.id:
            result = await self.session.execute(
                select(AppointmentModel).where(AppointmentModel.id == appointment.id)
            )
            model = result.scalar_one_or_none()

        if model:
            self._update_model(model, appointment)
        else:
            model = self._to_model(appointment)
            self.session.add(model)

        try:
            await self.session.commit()
            await self.session.refresh(model)
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        return self._to_entity(model)

    async def delete_completed_before(self, cutoff: datetime) -> int:
        try:
            result = await self.session.execute(
                delete(AppointmentModel).where(
                    and_(
                        AppointmentModel.status == AppointmentStatus.COMPLETED,
                        AppointmentModel.completed_at < cutoff,
                    )
                )
            )
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return result.rowcount or 0  # type: ignore[attr-defined]

    async def count_by_status(self, appointment_date: date) -> dict[AppointmentStatus, int]:
        result = await self.session.execute(
            select(AppointmentModel.status, func.count())
            .where(AppointmentModel.appointment_date == appointment_date)
            .group_by(AppointmentModel.status)
        )
        return {status: count for status, count in result.all()}

    # Mapping methods

    def _to_entity(self, model: AppointmentModel) -> Appointment:
        appointment = Appointment(
            id=model.id,  # type: ignore[arg-type]
            patient_id=model.patient_id,  # type: ignore[arg-type]
            doctor_id=model.doctor_id,  # type: ignore[arg-type]
            appointment_date=model.appointment_date,  # type: ignore[arg-type]
            start_time=model.start_time,  # type: ignore[arg-type]
            duration_minutes=model.duration_minutes,  # type: ignore[arg-type]
            appointment_type=model.appointment_type or AppointmentType.CONSULTATION,  # type: ignore[arg-type]
            location=model.location or "",  # type: ignore[arg-type]
            reason=model.reason or "",  # type: ignore[arg-type]
            notes=model.notes or "",  # type: ignore[arg-type]
            diagnosis=model.diagnosis or "",  # type: ignore[arg-type]
            treatment=model.treatment or "",  # type: ignore[arg-type]
            status=model.status or AppointmentStatus.SCHEDULED,  # type: ignore[arg-type]
            reminder_sent=bool(model.reminder_sent),
            reminder_sent_at=model.reminder_sent_at,  # type: ignore[arg-type]
            confirmed_at=model.confirmed_at,  # type: ignore[arg-type]
            completed_at=model.completed_at,  # type: ignore[arg-type]
            cancelled_at=model.cancelled_at,  # type: ignore[arg-type]
            cancellation_reason=model.cancellation_reason or "",  # type: ignore[arg-type]
        )
        if model.created_at:
            appointment.created_at = model.created_at  # type: ignore[assignment]
        if model.updated_at:
            appointment.updated_at = model.updated_at  # type: ignore[assignment]
        return appointment

    def _to_model(self, appointment: Appointment) -> AppointmentModel:
        model = AppointmentModel(patient_id=appointment.patient_id, doctor_id=appointment.doctor_id)
        self._update_model(model, appointment)
        return model

    def _update_model(self, model: AppointmentModel, appointment: Appointment) -> None:
        model.appointment_date = appointment.appointment_date  # type: ignore[assignment]
        model.start_time = appointment.start_time  # type: ignore[assignment]
        model.duration_minutes = appointment.duration_minutes  # type: ignore[assignment]
        model.appointment_type = appointment.appointment_type  # type: ignore[assignment]
        model.location = appointment.location  # type: ignore[assignment]
        model.reason = appointment.reason  # type: ignore[assignment]
        model.notes = appointment.notes  # type: ignore[assignment]
        model.diagnosis = appointment.diagnosis  # type: ignore[assignment]
        model.treatment = appointment.treatment  # type: ignore[assignment]
        model.status = appointment.status  # type: ignore[assignment]
        model.reminder_sent = appointment.reminder_sent  # type: ignore[assignment]
        model.reminder_sent_at = appointment.reminder_sent_at  # type: ignore[assignment]
        model.confirmed_at = appointment.confirmed_at  # type: ignore[assignment]
        model.completed_at = appointment.completed_at  # type: ignore[assignment]
        model.cancelled_at = appointment.cancelled_at  # type: ignore[assignment]
        model.cancellation_reason = appointment.cancellation_reason  # type: ignore[assignment]
