"""
Notification Dispatcher Port
"""

from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class NotificationPayload:
    """
    Message handed to a dispatcher.

    Attributes:
        kind: Message category ("medication_reminder", "appointment_reminder", ...)
        text: Plain text body
        data: Structured fields for adapters that render their own layout
    """

    kind: str
    text: str
    data: dict[str, Any] = field(default_factory=dict)


@runtime_checkable
class INotificationDispatcher(Protocol):
    """
    Outbound notification channel.

    Implementations report delivery failure by returning False and never
    raise for delivery problems.
    """

    async def send(self, channel_id: str, payload: NotificationPayload) -> bool:
        """
        Deliver a payload to a channel.

        Args:
            channel_id: Recipient channel identifier (Telegram chat id)
            payload: Message to deliver

        Returns:
            True if the channel accepted the message
        """
        ...
