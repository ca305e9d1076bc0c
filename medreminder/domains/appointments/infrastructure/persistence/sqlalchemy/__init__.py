from medreminder.domains.appointments.infrastructure.persistence.sqlalchemy.models import AppointmentModel

__all__ = ["AppointmentModel"]
