"""
Appointments Domain Ports
"""

from medreminder.domains.appointments.application.ports.appointment_repository import IAppointmentRepository

__all__ = ["IAppointmentRepository"]
