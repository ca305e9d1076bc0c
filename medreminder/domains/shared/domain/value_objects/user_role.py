from medreminder.core.domain import StatusEnum


class UserRole(StatusEnum):
    """Role of a user account."""

    PATIENT = "patient"
    DOCTOR = "doctor"
    ADMIN = "admin"
