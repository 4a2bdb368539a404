"""Constants for smartcalendar.

This module centralizes all magic numbers and default values used throughout the application.
"""

from smartcalendar.models.task import TaskKind, TaskPriority


# Task defaults
DEFAULT_TASK_NAME = "Untitled Task"
DEFAULT_TASK_KIND = TaskKind.FLEXIBLE
DEFAULT_TASK_PRIORITY = TaskPriority.MEDIUM
DEFAULT_DURATION_MINUTES = 30

# Scheduling
SCHEDULING_GRANULARITY_MINUTES = 30
DEFAULT_WORKDAY_START_HOUR = 8
DEFAULT_WORKDAY_END_HOUR = 20
DEFAULT_BREAK_BETWEEN_TASKS_MIN = 0

# Selectors
UPCOMING_DAYS = 7
