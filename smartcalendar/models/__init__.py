"""Data models for smartcalendar."""

from smartcalendar.models.task import Task, TaskKind, TaskPriority, PreferredWindow
from smartcalendar.models.time_slot import TimeSlot

__all__ = [
    "Task",
    "TaskKind",
    "TaskPriority",
    "PreferredWindow",
    "TimeSlot",
]
