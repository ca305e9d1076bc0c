"""
Shared FastAPI dependencies.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from medreminder.core.container import DependencyContainer, get_container
from medreminder.core.scheduler import SchedulerContext
from medreminder.database.async_db import get_async_db

# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_async_db)]


def get_di_container() -> DependencyContainer:
    """Get the dependency injection container singleton."""
    return get_container()


def get_scheduler_context(request: Request) -> SchedulerContext:
    """Scheduler context of the running application."""
    context = getattr(request.app.state, "scheduler_context", None)
    if context is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Scheduler is not running")
    return context


Container = Annotated[DependencyContainer, Depends(get_di_container)]
SchedulerContextDep = Annotated[SchedulerContext, Depends(get_scheduler_context)]
