"""
Appointments Domain Layer

Components:
- Entities: Appointment
- Value Objects: AppointmentStatus, AppointmentType
- Domain Services: overlap rules, slot generation
"""

from medreminder.domains.appointments.domain.entities import Appointment
from medreminder.domains.appointments.domain.value_objects import (
    ACTIVE_STATUSES,
    AppointmentStatus,
    AppointmentType,
)

__all__ = ["Appointment", "AppointmentStatus", "AppointmentType", "ACTIVE_STATUSES"]
