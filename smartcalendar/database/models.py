"""SQLAlchemy database models for smartcalendar."""

from datetime import datetime
from typing import Union, TypeVar, Type
import uuid
from sqlalchemy import Column, String, Integer, DateTime, JSON

from smartcalendar.database.database import Base
from smartcalendar.models.task import TaskKind, TaskPriority

T = TypeVar('T')


def enum_to_value(enum_obj: Union[str, T]) -> str:
    """Convert enum to string value (handles both enum and string).

    Args:
        enum_obj: Enum instance or string value

    Returns:
        String value of the enum, or the string itself if already a string
    """
    if hasattr(enum_obj, 'value'):
        return enum_obj.value
    return str(enum_obj)


def value_to_enum(value: str, enum_class: Type[T], default: T) -> T:
    """Convert string to enum with fallback to default.

    Args:
        value: String value to convert
        enum_class: Enum class to convert to
        default: Default enum value if conversion fails

    Returns:
        Enum instance, or default if conversion fails
    """
    if not value:
        return default
    try:
        return enum_class(value.lower())
    except (ValueError, AttributeError):
        return default


def _window_to_json(window):
    if window is None:
        return None
    return [window.start.isoformat(), window.end.isoformat()]


class TaskDB(Base):
    """Database model for Task."""

    __tablename__ = "tasks"

    # Primary key
    id = Column(String, primary_key=True, default=lambda: str(uuid.uuid4()))

    # Basic fields
    name = Column(String, nullable=False)
    kind = Column(String, nullable=False, default=TaskKind.FLEXIBLE.value, index=True)
    priority = Column(String, nullable=False, default=TaskPriority.MEDIUM.value, index=True)
    duration_minutes = Column(Integer, nullable=False, default=30)
    frequency = Column(String, nullable=True)

    # Placement
    start_time = Column(DateTime, nullable=True, index=True)
    end_time = Column(DateTime, nullable=True)

    # Preferred window (stored as JSON [start, end])
    preferred_window = Column(JSON, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def to_pydantic(self):
        """Convert database model to Pydantic model."""
        from smartcalendar.models.task import Task, PreferredWindow

        window = None
        if self.preferred_window and len(self.preferred_window) == 2:
            window = PreferredWindow(
                start=datetime.fromisoformat(self.preferred_window[0]),
                end=datetime.fromisoformat(self.preferred_window[1]),
            )

        return Task(
            id=self.id,
            name=self.name,
            kind=value_to_enum(self.kind, TaskKind, TaskKind.FLEXIBLE),
            priority=value_to_enum(self.priority, TaskPriority, TaskPriority.MEDIUM),
            duration_minutes=self.duration_minutes,
            start_time=self.start_time,
            end_time=self.end_time,
            preferred_window=window,
            frequency=self.frequency,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    def apply(self, task) -> None:
        """Copy all mutable fields from a Pydantic task onto this row."""
        # Pydantic with use_enum_values=True returns strings
        self.name = task.name
        self.kind = enum_to_value(task.kind)
        self.priority = enum_to_value(task.priority)
        self.duration_minutes = task.duration_minutes
        self.frequency = task.frequency
        self.start_time = task.start_time
        self.end_time = task.end_time
        self.preferred_window = _window_to_json(task.preferred_window)
        self.updated_at = task.updated_at

    @classmethod
    def from_pydantic(cls, task):
        """Create database model from Pydantic model."""
        task_db = cls(id=task.id, created_at=task.created_at)
        task_db.apply(task)
        return task_db
