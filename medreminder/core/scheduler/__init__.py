from medreminder.core.scheduler.context import SchedulerContext
from medreminder.core.scheduler.periodic_tasks import PeriodicTask, PeriodicTaskRunner

__all__ = ["PeriodicTask", "PeriodicTaskRunner", "SchedulerContext"]
