"""
Application lifecycle management using the FastAPI lifespan pattern.

Startup builds the scheduler context (periodic tasks plus per-medication
triggers rebuilt from the database); shutdown stops it and disposes the
database engine.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI

from medreminder.config.settings import Settings, get_settings
from medreminder.core.container import get_container
from medreminder.core.scheduler import SchedulerContext
from medreminder.database.async_db import dispose_engine, get_session_factory

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._scheduler_context: SchedulerContext | None = None
        self._initialized = False

    @property
    def scheduler_context(self) -> SchedulerContext | None:
        return self._scheduler_context

    async def startup(self, app: FastAPI) -> None:
        if self._initialized:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")
        self._verify_configurations()

        if self._settings.SCHEDULER_ENABLED:
            await self._start_scheduler()
        else:
            logger.info("Scheduler disabled via SCHEDULER_ENABLED=False")

        app.state.scheduler_context = self._scheduler_context
        self._initialized = True
        logger.info("Application lifecycle startup completed")

    async def shutdown(self, app: FastAPI) -> None:
        if not self._initialized:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")

        if self._scheduler_context is not None:
            try:
                await self._scheduler_context.stop()
            except Exception as e:
                logger.error(f"Error stopping scheduler: {e}", exc_info=True)
            self._scheduler_context = None
        app.state.scheduler_context = None

        await dispose_engine()

        self._initialized = False
        logger.info("Application lifecycle shutdown completed")

    def _verify_configurations(self) -> None:
        if not self._settings.TELEGRAM_BOT_TOKEN:
            logger.warning("TELEGRAM_BOT_TOKEN not configured - notifications will only be logged")
        if not self._settings.TIMER_REGISTRY_ENABLED:
            logger.info("Per-medication triggers disabled; reminders rely on the periodic pass")

    async def _start_scheduler(self) -> None:
        try:
            self._scheduler_context = SchedulerContext(
                settings=self._settings,
                container=get_container(),
                session_factory=get_session_factory(),
            )
            await self._scheduler_context.start()
        except Exception as e:
            logger.error(f"Failed to start scheduler: {e}", exc_info=True)
            self._scheduler_context = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = LifecycleManager()

    await lifecycle.startup(app)

    yield  # Application runs here

    await lifecycle.shutdown(app)
