"""Scheduling algorithm for smartcalendar.

Places a day's tasks into a fixed workday window. Tasks are prioritized once,
the window is cut into 30-minute slots once, and each task is then placed by
the strategy matching its constraints:

- fixed tasks with a start time keep that time (no slot is consumed)
- tasks with a preferred window take the first fitting slot inside it
- everything else takes the earliest fitting slot of the day

There is no backtracking: a task placed early is never moved to make room
for a later one.
"""

import logging
from datetime import date, datetime, time
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from smartcalendar.models.task import Task, TaskKind, to_naive_utc
from smartcalendar.models.time_slot import TimeSlot
from smartcalendar.models.constants import (
    SCHEDULING_GRANULARITY_MINUTES,
    DEFAULT_WORKDAY_START_HOUR,
    DEFAULT_WORKDAY_END_HOUR,
    DEFAULT_BREAK_BETWEEN_TASKS_MIN,
)
from smartcalendar.engine.ranking import prioritize_tasks
from smartcalendar.engine.slots import generate_time_slots
from smartcalendar.engine.placement import (
    FixedTaskOutsideWorkdayError,
    schedule_fixed_task,
    schedule_task_with_preference,
    schedule_flexible_task,
)

logger = logging.getLogger(__name__)


class SchedulingConfig(BaseModel):
    """Configuration for one scheduling run."""

    workday_start: datetime = Field(..., description="Workday window start")
    workday_end: datetime = Field(..., description="Workday window end")
    # Accepted and stored, but not applied to placement.
    break_between_tasks_min: int = Field(
        DEFAULT_BREAK_BETWEEN_TASKS_MIN, ge=0, description="Break between tasks (currently unused)"
    )
    slot_granularity_min: int = Field(
        SCHEDULING_GRANULARITY_MINUTES, gt=0, description="Slot length in minutes"
    )
    abort_on_fixed_violation: bool = Field(
        True,
        description="Raise on a fixed task outside the workday instead of reporting it as unplaced",
    )

    @field_validator("workday_start", "workday_end")
    @classmethod
    def _normalize_datetimes(cls, value):
        return to_naive_utc(value)

    @model_validator(mode="after")
    def _check_window(self):
        if self.workday_end <= self.workday_start:
            raise ValueError(
                f"workday_end ({self.workday_end}) must be after workday_start ({self.workday_start})"
            )
        return self

    @classmethod
    def for_day(
        cls,
        day: date,
        start_hour: int = DEFAULT_WORKDAY_START_HOUR,
        end_hour: int = DEFAULT_WORKDAY_END_HOUR,
        **overrides,
    ) -> "SchedulingConfig":
        """Build a config whose workday runs from start_hour to end_hour on the given day."""
        return cls(
            workday_start=datetime.combine(day, time(hour=start_hour)),
            workday_end=datetime.combine(day, time(hour=end_hour)),
            **overrides,
        )


class PlacementFailure(str, Enum):
    """Why a task was left out of the schedule."""
    FIXED_OUTSIDE_WORKDAY = "fixed_outside_workday"
    NO_SLOT_IN_PREFERRED_WINDOW = "no_slot_in_preferred_window"
    NO_AVAILABLE_SLOT = "no_available_slot"


class UnplacedTask(BaseModel):
    """A task the scheduler could not place, with the reason."""

    task: Task
    reason: PlacementFailure
    detail: str = ""

    class Config:
        """Pydantic configuration."""
        use_enum_values = True


class SchedulingResult:
    """Result of scheduling operation."""

    def __init__(self, config: SchedulingConfig):
        self.config = config
        self.placed_tasks: List[Task] = []
        self.unplaced_tasks: List[UnplacedTask] = []
        self.slots: List[TimeSlot] = []


def schedule_task(task: Task, available_slots: List[TimeSlot], config: SchedulingConfig) -> Optional[Task]:
    """Dispatch a single task to its placement strategy.

    Returns:
        Placed copy of the task, or None on a soft failure

    Raises:
        FixedTaskOutsideWorkdayError: For a fixed task outside the workday
    """
    if task.kind == TaskKind.FIXED and task.start_time:
        return schedule_fixed_task(task, config.workday_start, config.workday_end)

    if task.preferred_window:
        return schedule_task_with_preference(task, available_slots)

    return schedule_flexible_task(task, available_slots)


def _soft_failure(task: Task) -> UnplacedTask:
    if task.preferred_window:
        return UnplacedTask(
            task=task,
            reason=PlacementFailure.NO_SLOT_IN_PREFERRED_WINDOW,
            detail=(
                f"No available {task.duration_minutes}-minute slot between "
                f"{task.preferred_window.start.isoformat()} and {task.preferred_window.end.isoformat()}"
            ),
        )
    return UnplacedTask(
        task=task,
        reason=PlacementFailure.NO_AVAILABLE_SLOT,
        detail=f"No available {task.duration_minutes}-minute slot in the workday",
    )


def auto_schedule(tasks: List[Task], config: SchedulingConfig) -> SchedulingResult:
    """Assign start and end times to tasks within one workday.

    Args:
        tasks: Tasks to place (not modified)
        config: Workday window and run options

    Returns:
        SchedulingResult with placed tasks in priority order and unplaced
        tasks with their reasons

    Raises:
        FixedTaskOutsideWorkdayError: If a fixed task starts outside the workday
            and ``config.abort_on_fixed_violation`` is set. Nothing from the
            run is returned in that case.
    """
    result = SchedulingResult(config)

    prioritized = prioritize_tasks(tasks)
    available_slots = generate_time_slots(
        config.workday_start,
        config.workday_end,
        config.slot_granularity_min,
    )
    result.slots = available_slots

    for task in prioritized:
        try:
            scheduled_task = schedule_task(task, available_slots, config)
        except FixedTaskOutsideWorkdayError as e:
            if config.abort_on_fixed_violation:
                logger.error(f"Aborting scheduling run: {e}")
                raise
            logger.debug(f"Fixed task {task.id} left unplaced: {e}")
            result.unplaced_tasks.append(
                UnplacedTask(task=task, reason=PlacementFailure.FIXED_OUTSIDE_WORKDAY, detail=str(e))
            )
            continue

        if scheduled_task is None:
            unplaced = _soft_failure(task)
            logger.debug(f"Task {task.id} left unplaced: {unplaced.reason}")
            result.unplaced_tasks.append(unplaced)
            continue

        result.placed_tasks.append(scheduled_task)

    logger.debug(
        f"Scheduled {len(result.placed_tasks)} of {len(tasks)} tasks "
        f"({len(result.unplaced_tasks)} unplaced)"
    )
    return result
