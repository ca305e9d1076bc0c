"""
Base Container - Shared Singletons.

Holds the settings, the reference clock, the notification dispatcher and,
once the scheduler is running, the per-medication timer registry.
"""

import logging

from medreminder.config.settings import Settings, get_settings
from medreminder.core.clock import IClock, SystemClock
from medreminder.domains.medications.application.ports.reminder_timer_registry import IReminderTimerRegistry
from medreminder.domains.shared.application.ports.notification_dispatcher import INotificationDispatcher
from medreminder.domains.shared.infrastructure.notifications import create_notification_dispatcher

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Base container for shared singletons.
    """

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()

        self._clock: IClock | None = None
        self._dispatcher: INotificationDispatcher | None = None
        self._timer_registry: IReminderTimerRegistry | None = None

        logger.info("BaseContainer initialized")

    def get_clock(self) -> IClock:
        """Get the reference clock (singleton)."""
        if self._clock is None:
            self._clock = SystemClock(self.settings.SCHEDULER_TIMEZONE)
        return self._clock

    def get_dispatcher(self) -> INotificationDispatcher:
        """Get the notification dispatcher (singleton)."""
        if self._dispatcher is None:
            self._dispatcher = create_notification_dispatcher(self.settings)
            logger.info(f"Notification dispatcher: {type(self._dispatcher).__name__}")
        return self._dispatcher

    def get_timer_registry(self) -> IReminderTimerRegistry | None:
        """Timer registry of the running scheduler, None when it is not running."""
        return self._timer_registry

    def set_timer_registry(self, registry: IReminderTimerRegistry | None) -> None:
        self._timer_registry = registry

    def set_clock(self, clock: IClock) -> None:
        self._clock = clock

    def set_dispatcher(self, dispatcher: INotificationDispatcher) -> None:
        self._dispatcher = dispatcher
