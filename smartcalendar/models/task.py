"""Task data model for smartcalendar.

All datetimes are stored as naive UTC. Timezone-aware input is converted
to UTC and its offset dropped when a model is built.
"""

from datetime import datetime, timezone
from typing import Optional
from enum import Enum
from pydantic import BaseModel, Field, field_validator


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Convert a timezone-aware datetime to naive UTC (naive values pass through)."""
    if value is not None and value.tzinfo:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class TaskKind(str, Enum):
    """Task kind enumeration (selects the placement strategy)."""
    FIXED = "fixed"
    ROUTINE = "routine"
    FLEXIBLE = "flexible"


class TaskPriority(str, Enum):
    """Task priority enumeration."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class PreferredWindow(BaseModel):
    """Sub-range of the workday a non-fixed task should be placed in."""

    start: datetime = Field(..., description="Earliest slot start")
    end: datetime = Field(..., description="Latest slot end")

    @field_validator("start", "end")
    @classmethod
    def _normalize_datetimes(cls, value):
        return to_naive_utc(value)


class Task(BaseModel):
    """Canonical Task model."""

    id: str = Field(..., description="Unique task identifier (UUID v4)")
    name: str = Field(..., description="Display label")
    kind: TaskKind = Field(TaskKind.FLEXIBLE, description="Task kind")
    priority: TaskPriority = Field(TaskPriority.MEDIUM, description="Task priority")
    duration_minutes: int = Field(30, description="Required span to reserve, in minutes")
    start_time: Optional[datetime] = Field(
        None,
        description="Placed start (required input for fixed tasks)",
    )
    end_time: Optional[datetime] = Field(None, description="Placed end")
    preferred_window: Optional[PreferredWindow] = Field(
        None,
        description="Preferred placement window",
    )
    frequency: Optional[str] = Field(
        None,
        description="Recurrence descriptor for routine tasks (not interpreted by the scheduler)",
    )
    created_at: datetime = Field(..., description="Task creation timestamp")
    updated_at: datetime = Field(..., description="Task last update timestamp")

    @field_validator("start_time", "end_time", "created_at", "updated_at")
    @classmethod
    def _normalize_datetimes(cls, value):
        return to_naive_utc(value)

    class Config:
        """Pydantic configuration."""
        use_enum_values = True
