from medreminder.domains.appointments.domain.entities.appointment import Appointment

__all__ = ["Appointment"]
