"""
Scheduler admin API.

API Prefix: /api/v1/scheduler
"""

import logging
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel

from medreminder.api.dependencies import SchedulerContextDep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/scheduler", tags=["Scheduler"])


class TaskRunResponse(BaseModel):
    task: str
    skipped: bool
    result: dict[str, Any] | None = None


class JobInfo(BaseModel):
    id: str
    name: str
    next_run: str | None = None


class SchedulerJobsResponse(BaseModel):
    running: bool
    tasks: list[str]
    jobs: list[JobInfo]
    medication_triggers: list[dict[str, Any]]


@router.post("/run/{task}", response_model=TaskRunResponse)
async def run_task(task: str, context: SchedulerContextDep):
    """Run a periodic task immediately."""
    logger.info(f"Manual run of periodic task {task}")
    return await context.periodic_tasks.run_task(task)


@router.get("/jobs", response_model=SchedulerJobsResponse)
async def list_jobs(context: SchedulerContextDep):
    """List scheduled jobs and per-medication triggers."""
    return SchedulerJobsResponse(
        running=context.is_running,
        tasks=sorted(context.periodic_tasks.tasks),
        jobs=[JobInfo(**job) for job in context.jobs_info()],
        medication_triggers=context.timer_registry.jobs_info() if context.timer_registry else [],
    )
