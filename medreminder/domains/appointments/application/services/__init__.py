from medreminder.domains.appointments.application.services.conflict_resolver import AppointmentConflictResolver

__all__ = ["AppointmentConflictResolver"]
