"""
Shared Domain Ports
"""

from medreminder.domains.shared.application.ports.notification_dispatcher import (
    INotificationDispatcher,
    NotificationPayload,
)
from medreminder.domains.shared.application.ports.user_repository import IUserRepository

__all__ = ["IUserRepository", "INotificationDispatcher", "NotificationPayload"]
