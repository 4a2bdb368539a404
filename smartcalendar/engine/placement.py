"""Placement strategies for smartcalendar.

Each strategy takes one task and returns a placed copy of it, or None
when no suitable slot is left. Slot-based strategies mark the slot they
use as unavailable.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional

from smartcalendar.models.task import Task
from smartcalendar.models.time_slot import TimeSlot

logger = logging.getLogger(__name__)


class FixedTaskOutsideWorkdayError(ValueError):
    """Raised when a fixed task's start time lies outside the workday."""

    def __init__(self, task: Task, workday_start: datetime, workday_end: datetime):
        self.task = task
        self.workday_start = workday_start
        self.workday_end = workday_end
        super().__init__(
            f"Fixed task outside of workday: {task.id} starts at {task.start_time}, "
            f"workday is {workday_start} - {workday_end}"
        )


def can_fit_task(slot: TimeSlot, task: Task) -> bool:
    """Check whether a task's duration fits in a slot.

    Slots are never split, so the unused part of a larger slot is lost.
    """
    if task.duration_minutes <= 0:
        return False
    return slot.duration_minutes >= task.duration_minutes


def calculate_end_time(task: Task, start_time: datetime) -> datetime:
    return start_time + timedelta(minutes=task.duration_minutes)


def is_within_workday(time: datetime, workday_start: datetime, workday_end: datetime) -> bool:
    """Inclusive on both ends."""
    return workday_start <= time <= workday_end


def _place_in_slot(task: Task, slot: TimeSlot) -> Task:
    slot.is_available = False
    return task.model_copy(
        update={
            "start_time": slot.start,
            "end_time": calculate_end_time(task, slot.start),
        }
    )


def schedule_fixed_task(task: Task, workday_start: datetime, workday_end: datetime) -> Task:
    """Place a fixed task at its own start time.

    Fixed tasks do not use the slot grid, so they may overlap slots
    claimed later by other tasks.

    Args:
        task: Fixed task with start_time set
        workday_start: Workday window start
        workday_end: Workday window end

    Returns:
        Copy of the task with end_time filled in

    Raises:
        FixedTaskOutsideWorkdayError: If start_time is missing or outside the workday
    """
    if task.start_time and is_within_workday(task.start_time, workday_start, workday_end):
        return task.model_copy(update={"end_time": calculate_end_time(task, task.start_time)})
    raise FixedTaskOutsideWorkdayError(task, workday_start, workday_end)


def schedule_task_with_preference(task: Task, available_slots: List[TimeSlot]) -> Optional[Task]:
    """Place a task in the first fitting slot inside its preferred window.

    Args:
        task: Task with preferred_window set
        available_slots: Slot grid in chronological order

    Returns:
        Placed copy of the task, or None if no slot inside the window fits
    """
    window = task.preferred_window
    if window is None:
        return None

    preferred_slots = [
        slot for slot in available_slots
        if slot.start >= window.start and slot.end <= window.end and slot.is_available
    ]

    for slot in preferred_slots:
        if can_fit_task(slot, task):
            logger.debug(f"Placed task {task.id} in preferred slot {slot.start.isoformat()}")
            return _place_in_slot(task, slot)

    return None


def schedule_flexible_task(task: Task, available_slots: List[TimeSlot]) -> Optional[Task]:
    """Place a task in the earliest available slot that fits.

    Args:
        task: Task to place
        available_slots: Slot grid in chronological order

    Returns:
        Placed copy of the task, or None if no slot fits
    """
    for slot in available_slots:
        if slot.is_available and can_fit_task(slot, task):
            logger.debug(f"Placed task {task.id} in slot {slot.start.isoformat()}")
            return _place_in_slot(task, slot)

    return None
