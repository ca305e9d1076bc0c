import logging

from medreminder.domains.shared.application.ports.notification_dispatcher import (
    INotificationDispatcher,
    NotificationPayload,
)

logger = logging.getLogger(__name__)


class LoggingNotificationDispatcher(INotificationDispatcher):
    """Writes notifications to the log instead of delivering them."""

    def __init__(self) -> None:
        logger.warning("TELEGRAM_BOT_TOKEN not configured - notifications will only be logged")

    async def send(self, channel_id: str, payload: NotificationPayload) -> bool:
        logger.info(f"[{payload.kind}] -> {channel_id}: {payload.text}")
        return True
