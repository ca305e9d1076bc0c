from medreminder.domains.shared.infrastructure.notifications.logging_dispatcher import LoggingNotificationDispatcher
from medreminder.domains.shared.infrastructure.notifications.telegram_dispatcher import TelegramNotificationDispatcher

__all__ = ["TelegramNotificationDispatcher", "LoggingNotificationDispatcher", "create_notification_dispatcher"]


def create_notification_dispatcher(settings):
    """Telegram when a bot token is configured, otherwise a log-only dispatcher."""
    if settings.TELEGRAM_BOT_TOKEN:
        return TelegramNotificationDispatcher(
            bot_token=settings.TELEGRAM_BOT_TOKEN,
            api_base=settings.TELEGRAM_API_BASE,
            timeout=settings.TELEGRAM_REQUEST_TIMEOUT,
        )
    return LoggingNotificationDispatcher()
