"""
Dependency Injection Container.

Facade composing the domain containers. Repositories and use cases are
created per database session; the clock, the dispatcher and the timer
registry are process-wide.
"""

from __future__ import annotations

import logging

from medreminder.config.settings import Settings
from medreminder.core.clock import IClock
from medreminder.domains.medications.application.ports.reminder_timer_registry import IReminderTimerRegistry
from medreminder.domains.shared.application.ports.notification_dispatcher import INotificationDispatcher

from .appointments import AppointmentsContainer
from .base import BaseContainer
from .medications import MedicationsContainer
from .shared import SharedContainer

logger = logging.getLogger(__name__)


class DependencyContainer:
    """
    Dependency Injection Container (Facade).

    Example:
        ```python
        container = get_container()
        use_case = container.medications.create_run_reminder_pass_use_case(session)
        result = await use_case.execute()
        ```
    """

    def __init__(self, settings: Settings | None = None):
        self._base = BaseContainer(settings)
        self._shared = SharedContainer(self._base)
        self._medications = MedicationsContainer(self._base, self._shared)
        self._appointments = AppointmentsContainer(self._base, self._shared)

        logger.info("DependencyContainer initialized with all domain containers")

    @property
    def settings(self) -> Settings:
        return self._base.settings

    @property
    def shared(self) -> SharedContainer:
        return self._shared

    @property
    def medications(self) -> MedicationsContainer:
        return self._medications

    @property
    def appointments(self) -> AppointmentsContainer:
        return self._appointments

    # ============================================================
    # SINGLETONS (delegated to BaseContainer)
    # ============================================================

    def get_clock(self) -> IClock:
        return self._base.get_clock()

    def get_dispatcher(self) -> INotificationDispatcher:
        return self._base.get_dispatcher()

    def get_timer_registry(self) -> IReminderTimerRegistry | None:
        return self._base.get_timer_registry()

    def set_timer_registry(self, registry: IReminderTimerRegistry | None) -> None:
        self._base.set_timer_registry(registry)

    def set_clock(self, clock: IClock) -> None:
        self._base.set_clock(clock)

    def set_dispatcher(self, dispatcher: INotificationDispatcher) -> None:
        self._base.set_dispatcher(dispatcher)


_container: DependencyContainer | None = None


def get_container(settings: Settings | None = None) -> DependencyContainer:
    """
    Get global container instance (singleton).

    Args:
        settings: Optional settings (only used on first call)
    """
    global _container

    if _container is None:
        logger.info("Initializing global DependencyContainer")
        _container = DependencyContainer(settings)
    elif settings is not None:
        logger.warning("Container already initialized, ignoring new settings. Call reset_container() first.")

    return _container


def reset_container() -> None:
    """Drop the global container (tests and reconfiguration)."""
    global _container
    _container = None
    logger.info("DependencyContainer reset")


__all__ = [
    "AppointmentsContainer",
    "BaseContainer",
    "DependencyContainer",
    "MedicationsContainer",
    "SharedContainer",
    "get_container",
    "reset_container",
]
