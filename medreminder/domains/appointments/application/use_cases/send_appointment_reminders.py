"""
Send Appointment Reminders Use Case
"""

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any

from medreminder.core.clock import IClock
from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository
from medreminder.domains.appointments.domain.entities.appointment import Appointment
from medreminder.domains.shared.application.ports.notification_dispatcher import (
    INotificationDispatcher,
    NotificationPayload,
)
from medreminder.domains.shared.application.ports.user_repository import IUserRepository
from medreminder.domains.shared.domain.entities.user import User


@dataclass
class AppointmentReminderResult:
    checked: int = 0
    sent: int = 0
    skipped: int = 0
    failed: int = 0
    errors: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "checked": self.checked,
            "sent": self.sent,
            "skipped": self.skipped,
            "failed": self.failed,
            "errors": self.errors,
        }


logger = logging.getLogger(__name__)


def build_appointment_reminder(appointment: Appointment, patient: User, doctor: User | None) -> NotificationPayload:
    doctor_name = doctor.name if doctor else "your doctor"
    when = appointment.start_time.strftime("%H:%M") if appointment.start_time else ""
    lines = [
        f"Hello {patient.name},",
        f"Reminder: you have an appointment with {doctor_name} tomorrow at {when}.",
    ]
    if appointment.location:
        lines.append(f"Location: {appointment.location}")
    if appointment.reason:
        lines.append(f"Reason: {appointment.reason}")
    return NotificationPayload(
        kind="appointment_reminder",
        text="\n".join(lines),
        data={
            "appointment_id": appointment.id,
            "date": appointment.appointment_date.isoformat() if appointment.appointment_date else None,
            "start_time": when,
        },
    )


class SendAppointmentRemindersUseCase:
    """
    Notifies patients of their appointments on the following day.

    An appointment is flagged as reminded only after a successful send, so a
    failed delivery is retried on the next run.
    """

    def __init__(
        self,
        appointment_repository: IAppointmentRepository,
        user_repository: IUserRepository,
        dispatcher: INotificationDispatcher,
        clock: IClock,
    ):
        self.appointment_repo = appointment_repository
        self.user_repo = user_repository
        self.dispatcher = dispatcher
        self.clock = clock

    async def execute(self, target_date: date | None = None) -> AppointmentReminderResult:
        target_date = target_date or self.clock.now().date() + timedelta(days=1)
        result = AppointmentReminderResult()

        appointments = await self.appointment_repo.find_pending_reminders(target_date)
        if not appointments:
            return result

        user_ids = {a.patient_id for a in appointments} | {a.doctor_id for a in appointments}
        users = await self.user_repo.find_by_ids(list(user_ids))

        for appointment in appointments:
            result.checked += 1
            patient = users.get(appointment.patient_id)
            if patient is None or not patient.has_notification_channel():
                result.skipped += 1
                continue

            try:
                payload = build_appointment_reminder(appointment, patient, users.get(appointment.doctor_id))
                if await self.dispatcher.send(patient.notification_channel_id, payload):
                    appointment.mark_reminder_sent()
                    await self.appointment_repo.save(appointment)
                    result.sent += 1
                else:
                    result.failed += 1
            except Exception as e:
                result.failed += 1
                result.errors.append(f"appointment {appointment.id}: {e}")
                logger.error(f"Error sending reminder for appointment {appointment.id}: {e}", exc_info=True)

        logger.info(f"Appointment reminders for {target_date}: {result.to_dict()}")
        return result
