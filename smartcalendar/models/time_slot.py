"""TimeSlot data model for smartcalendar."""

from datetime import datetime
from pydantic import BaseModel, Field


class TimeSlot(BaseModel):
    """A candidate interval within the workday."""

    start: datetime = Field(..., description="Slot start time")
    end: datetime = Field(..., description="Slot end time")
    is_available: bool = Field(True, description="False once consumed by a placed task")

    @property
    def duration_minutes(self) -> float:
        return (self.end - self.start).total_seconds() / 60
