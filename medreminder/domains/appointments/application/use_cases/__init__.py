"""
Appointments Application Use Cases
"""

from .book_appointment import BookAppointmentRequest, BookAppointmentUseCase
from .change_appointment_status import (
    CancelAppointmentUseCase,
    CompleteAppointmentUseCase,
    ConfirmAppointmentUseCase,
)
from .collect_appointment_statistics import CollectAppointmentStatisticsUseCase
from .get_available_slots import GetAvailableSlotsUseCase
from .mark_no_shows import MarkNoShowsUseCase
from .purge_completed_appointments import PurgeCompletedAppointmentsUseCase
from .reschedule_appointment import RescheduleAppointmentRequest, RescheduleAppointmentUseCase
from .send_appointment_reminders import AppointmentReminderResult, SendAppointmentRemindersUseCase

__all__ = [
    "AppointmentReminderResult",
    "BookAppointmentRequest",
    "BookAppointmentUseCase",
    "CancelAppointmentUseCase",
    "CollectAppointmentStatisticsUseCase",
    "CompleteAppointmentUseCase",
    "ConfirmAppointmentUseCase",
    "GetAvailableSlotsUseCase",
    "MarkNoShowsUseCase",
    "PurgeCompletedAppointmentsUseCase",
    "RescheduleAppointmentRequest",
    "RescheduleAppointmentUseCase",
    "SendAppointmentRemindersUseCase",
]
