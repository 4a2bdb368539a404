"""Time slot generation for smartcalendar."""

from datetime import datetime, timedelta
from typing import List
from smartcalendar.models.time_slot import TimeSlot
from smartcalendar.models.constants import SCHEDULING_GRANULARITY_MINUTES


def generate_time_slots(
    workday_start: datetime,
    workday_end: datetime,
    granularity_minutes: int = SCHEDULING_GRANULARITY_MINUTES,
) -> List[TimeSlot]:
    """Split the workday into contiguous, fixed-size slots.

    A slot is emitted for every start time before ``workday_end``. When the
    window is not a multiple of the granularity, the last slot runs past
    ``workday_end`` (it is not clamped).

    Args:
        workday_start: First slot start
        workday_end: Slots start strictly before this time
        granularity_minutes: Slot length in minutes

    Returns:
        Slots in chronological order, all available
    """
    slots: List[TimeSlot] = []
    step = timedelta(minutes=granularity_minutes)
    current_time = workday_start

    while current_time < workday_end:
        slot_end = current_time + step
        slots.append(TimeSlot(start=current_time, end=slot_end, is_available=True))
        current_time = slot_end

    return slots
