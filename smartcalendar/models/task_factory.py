"""Task creation factory for smartcalendar.

This module centralizes task creation and validation logic so the API
and tests build tasks with consistent default values.
"""

import uuid
from datetime import datetime
from typing import Optional, Dict, Any, List

from smartcalendar.models.task import Task, TaskKind, TaskPriority, PreferredWindow
from smartcalendar.models.constants import (
    DEFAULT_TASK_NAME,
    DEFAULT_TASK_KIND,
    DEFAULT_TASK_PRIORITY,
    DEFAULT_DURATION_MINUTES,
)


def create_task_defaults() -> Dict[str, Any]:
    """Get default task values as a dictionary.

    Returns:
        Dictionary with default task field values using constants
    """
    return {
        "name": DEFAULT_TASK_NAME,
        "kind": DEFAULT_TASK_KIND,
        "priority": DEFAULT_TASK_PRIORITY,
        "duration_minutes": DEFAULT_DURATION_MINUTES,
        "start_time": None,
        "end_time": None,
        "preferred_window": None,
        "frequency": None,
    }


def create_task(
    name: Optional[str] = None,
    kind: Optional[TaskKind] = None,
    priority: Optional[TaskPriority] = None,
    duration_minutes: Optional[int] = None,
    start_time: Optional[datetime] = None,
    end_time: Optional[datetime] = None,
    preferred_window: Optional[PreferredWindow] = None,
    frequency: Optional[str] = None,
    task_id: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Task:
    """Create a task with defaults, allowing overrides.

    Only ``id``, ``name``, ``kind``, ``priority`` and ``duration_minutes``
    have defaults; time fields stay unset unless provided. The result is
    not validated, see ``validate_task``.

    Args:
        name: Display label (defaults to "Untitled Task")
        kind: Task kind (defaults to flexible)
        priority: Task priority (defaults to medium)
        duration_minutes: Required span in minutes (defaults to constant)
        start_time: Start time (required for fixed tasks)
        end_time: End time
        preferred_window: Preferred placement window
        frequency: Recurrence descriptor for routine tasks
        task_id: Explicit identifier (a new UUID v4 when omitted)
        created_at: Creation timestamp (defaults to now)

    Returns:
        Task object with defaults applied
    """
    now = datetime.utcnow()
    defaults = create_task_defaults()

    return Task(
        id=task_id or str(uuid.uuid4()),
        name=name if name is not None else defaults["name"],
        kind=kind if kind is not None else defaults["kind"],
        priority=priority if priority is not None else defaults["priority"],
        duration_minutes=duration_minutes if duration_minutes is not None else defaults["duration_minutes"],
        start_time=start_time if start_time is not None else defaults["start_time"],
        end_time=end_time if end_time is not None else defaults["end_time"],
        preferred_window=preferred_window if preferred_window is not None else defaults["preferred_window"],
        frequency=frequency if frequency is not None else defaults["frequency"],
        created_at=created_at or now,
        updated_at=now,
    )


def validate_task(task: Task) -> List[str]:
    """Return the list of validation errors for a task (empty when valid)."""
    errors: List[str] = []
    if not task.name or task.name.strip() == "":
        errors.append("Task name is required")
    if task.duration_minutes <= 0:
        errors.append("Task duration must be greater than 0 minutes")
    if task.kind == TaskKind.FIXED and not task.start_time:
        errors.append("Fixed tasks require a start time")
    if task.preferred_window and task.preferred_window.start >= task.preferred_window.end:
        errors.append("Preferred window start must be before its end")
    return errors


def is_valid_task(task: Task) -> bool:
    return not validate_task(task)
