"""
User Entity

A person known to the system. Patients receive reminders on their linked
notification channel; doctors own appointment calendars.
"""

from dataclasses import dataclass

from medreminder.core.domain import Entity
from medreminder.domains.shared.domain.value_objects.user_role import UserRole


@dataclass(eq=False)
class User(Entity[int]):
    """
    User account.

    `notification_channel_id` is the Telegram chat id; None means the user has
    no linked channel and is skipped by every reminder job.
    """

    name: str = ""
    email: str = ""
    role: UserRole = UserRole.PATIENT
    notification_channel_id: str | None = None
    is_active: bool = True

    @property
    def is_doctor(self) -> bool:
        return self.role == UserRole.DOCTOR

    @property
    def is_patient(self) -> bool:
        return self.role == UserRole.PATIENT

    def has_notification_channel(self) -> bool:
        return bool(self.notification_channel_id)

    def link_channel(self, channel_id: str) -> None:
        self.notification_channel_id = channel_id
        self.touch()

    def unlink_channel(self) -> None:
        self.notification_channel_id = None
        self.touch()
