from medreminder.domains.appointments.domain.value_objects.appointment_status import (
    ACTIVE_STATUSES,
    AppointmentStatus,
    AppointmentType,
)

__all__ = ["AppointmentStatus", "AppointmentType", "ACTIVE_STATUSES"]
