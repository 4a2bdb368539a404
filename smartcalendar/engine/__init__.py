"""Scheduling engine for smartcalendar."""

from smartcalendar.engine.ranking import prioritize_tasks, task_rank
from smartcalendar.engine.slots import generate_time_slots
from smartcalendar.engine.placement import (
    FixedTaskOutsideWorkdayError,
    can_fit_task,
    calculate_end_time,
    is_within_workday,
)
from smartcalendar.engine.scheduler import (
    auto_schedule,
    SchedulingConfig,
    SchedulingResult,
    UnplacedTask,
    PlacementFailure,
)

__all__ = [
    "prioritize_tasks",
    "task_rank",
    "generate_time_slots",
    "FixedTaskOutsideWorkdayError",
    "can_fit_task",
    "calculate_end_time",
    "is_within_workday",
    "auto_schedule",
    "SchedulingConfig",
    "SchedulingResult",
    "UnplacedTask",
    "PlacementFailure",
]
