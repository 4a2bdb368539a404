"""Task prioritization for smartcalendar.

Orders tasks so that the most constrained work is placed first:
Fixed > High priority > Routine > Flexible.
"""

from typing import List
from smartcalendar.models.task import Task, TaskKind, TaskPriority


# Rank looked up by task kind first
KIND_RANK = {
    TaskKind.FIXED.value: 4,
    TaskKind.ROUTINE.value: 2,
    TaskKind.FLEXIBLE.value: 1,
}

# Fallback rank when the kind does not resolve
PRIORITY_FALLBACK_RANK = {
    TaskPriority.HIGH.value: 3,
}

# Tie-breaker between tasks of equal rank
PRIORITY_RANK = {
    TaskPriority.HIGH.value: 3,
    TaskPriority.MEDIUM.value: 2,
    TaskPriority.LOW.value: 1,
}


def _value(enum_obj) -> str:
    # Pydantic with use_enum_values=True stores plain strings
    return getattr(enum_obj, "value", enum_obj)


def task_rank(task: Task) -> int:
    """Get the scheduling rank of a task (higher = placed earlier).

    The kind is checked before the priority: a task only falls back to
    its priority when its kind has no entry in ``KIND_RANK``.

    Args:
        task: Task to rank

    Returns:
        Rank (4 = fixed, 3 = high priority, 2 = routine, 1 = flexible, 0 = unknown)
    """
    rank = KIND_RANK.get(_value(task.kind))
    if rank is not None:
        return rank
    return PRIORITY_FALLBACK_RANK.get(_value(task.priority), 0)


def _priority_sort_key(task: Task) -> int:
    return PRIORITY_RANK.get(_value(task.priority), 0)


def prioritize_tasks(tasks: List[Task]) -> List[Task]:
    """Sort tasks into scheduling order.

    Tasks are sorted:
    1. By rank (see ``task_rank``), highest first
    2. Within a rank, by priority (high, medium, low)
    3. Remaining ties keep their input order

    The input list is left untouched; a new list is returned.

    Args:
        tasks: List of tasks to prioritize

    Returns:
        New list of tasks in scheduling order
    """
    return sorted(
        tasks,
        key=lambda task: (-task_rank(task), -_priority_sort_key(task)),
    )
