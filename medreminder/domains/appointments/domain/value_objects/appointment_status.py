"""
Appointments Domain Value Objects
"""

from medreminder.core.domain import StatusEnum


class AppointmentStatus(StatusEnum):
    """
    Appointment lifecycle states.

    Valid transitions:
    - SCHEDULED -> CONFIRMED, COMPLETED, CANCELLED, NO_SHOW
    - CONFIRMED -> COMPLETED, CANCELLED, NO_SHOW
    - COMPLETED, CANCELLED, NO_SHOW -> (terminal)
    """

    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no-show"

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        return new_status in _TRANSITIONS[self]

    def is_terminal(self) -> bool:
        return not _TRANSITIONS[self]

    def is_active(self) -> bool:
        """Active appointments occupy the doctor's calendar."""
        return self in ACTIVE_STATUSES


_TRANSITIONS: dict[AppointmentStatus, frozenset[AppointmentStatus]] = {
    AppointmentStatus.SCHEDULED: frozenset(
        {
            AppointmentStatus.CONFIRMED,
            AppointmentStatus.COMPLETED,
            AppointmentStatus.CANCELLED,
            AppointmentStatus.NO_SHOW,
        }
    ),
    AppointmentStatus.CONFIRMED: frozenset(
        {
            AppointmentStatus.COMPLETED,
            AppointmentStatus.CANCELLED,
            AppointmentStatus.NO_SHOW,
        }
    ),
    AppointmentStatus.COMPLETED: frozenset(),
    AppointmentStatus.CANCELLED: frozenset(),
    AppointmentStatus.NO_SHOW: frozenset(),
}

ACTIVE_STATUSES: tuple[AppointmentStatus, ...] = (AppointmentStatus.SCHEDULED, AppointmentStatus.CONFIRMED)


class AppointmentType(StatusEnum):
    CONSULTATION = "consultation"
    FOLLOW_UP = "follow-up"
    CHECK_UP = "check-up"
    SURGERY = "surgery"
    THERAPY = "therapy"
    EMERGENCY = "emergency"
    OTHER = "other"
