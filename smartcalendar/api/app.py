"""FastAPI web application for smartcalendar."""

import logging
import os
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import List, Optional
from fastapi import Depends, FastAPI, HTTPException, Query
from pydantic import BaseModel, Field, ValidationError
from sqlalchemy.orm import Session
from dotenv import load_dotenv

from smartcalendar.models.task import Task, TaskKind, TaskPriority, PreferredWindow
from smartcalendar.models.task_factory import create_task, validate_task
from smartcalendar.models.constants import (
    DEFAULT_WORKDAY_START_HOUR,
    DEFAULT_WORKDAY_END_HOUR,
    DEFAULT_BREAK_BETWEEN_TASKS_MIN,
    UPCOMING_DAYS,
)
from smartcalendar.database.database import get_db, init_db
from smartcalendar.database.repository import TaskRepository
from smartcalendar.engine.placement import FixedTaskOutsideWorkdayError
from smartcalendar.engine.scheduler import auto_schedule, SchedulingConfig, UnplacedTask

load_dotenv()

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


# Initialize FastAPI app
app = FastAPI(
    title="smartcalendar API",
    description="Fits a day's tasks into the workday window",
    version="0.1.0",
    lifespan=lifespan,
)


def get_scheduling_config(day: date) -> SchedulingConfig:
    """Build the scheduling config for a day from environment settings."""
    return SchedulingConfig.for_day(
        day,
        start_hour=int(os.getenv("WORKDAY_START_HOUR", str(DEFAULT_WORKDAY_START_HOUR))),
        end_hour=int(os.getenv("WORKDAY_END_HOUR", str(DEFAULT_WORKDAY_END_HOUR))),
        break_between_tasks_min=int(os.getenv("BREAK_BETWEEN_TASKS_MIN", str(DEFAULT_BREAK_BETWEEN_TASKS_MIN))),
        abort_on_fixed_violation=os.getenv("ABORT_ON_FIXED_VIOLATION", "True").lower() == "true",
    )


# Request models
class TaskCreateRequest(BaseModel):
    """Request body for creating a task."""
    name: Optional[str] = None
    kind: Optional[TaskKind] = None
    priority: Optional[TaskPriority] = None
    duration_minutes: Optional[int] = None
    start_time: Optional[datetime] = None
    preferred_window: Optional[PreferredWindow] = None
    frequency: Optional[str] = None


class TaskUpdateRequest(BaseModel):
    """Request body for updating a task (only provided fields change)."""
    name: Optional[str] = None
    kind: Optional[TaskKind] = None
    priority: Optional[TaskPriority] = None
    duration_minutes: Optional[int] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    preferred_window: Optional[PreferredWindow] = None
    frequency: Optional[str] = None


# Response models
class TaskResponse(BaseModel):
    """Response for a single task."""
    task: Task


class TaskListResponse(BaseModel):
    """Response for a task list."""
    tasks: List[Task]
    count: int


class ScheduleResponse(BaseModel):
    """Response for an auto-schedule run."""
    workday_start: datetime
    workday_end: datetime
    placed_tasks: List[Task]
    unplaced_tasks: List[UnplacedTask] = Field(default_factory=list)


def _ensure_valid(task: Task) -> None:
    errors = validate_task(task)
    if errors:
        raise HTTPException(status_code=422, detail=errors)


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "healthy", "version": "0.1.0"}


@app.post("/tasks", response_model=TaskResponse, status_code=201)
def create_task_endpoint(payload: TaskCreateRequest, db: Session = Depends(get_db)):
    """Create a task, applying defaults for omitted fields."""
    task = create_task(
        name=payload.name,
        kind=payload.kind,
        priority=payload.priority,
        duration_minutes=payload.duration_minutes,
        start_time=payload.start_time,
        preferred_window=payload.preferred_window,
        frequency=payload.frequency,
    )
    _ensure_valid(task)

    try:
        created = TaskRepository(db).create(task)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to create task: {str(e)}")
    return TaskResponse(task=created)


@app.get("/tasks", response_model=TaskListResponse)
def list_tasks(
    kind: Optional[TaskKind] = None,
    priority: Optional[TaskPriority] = None,
    db: Session = Depends(get_db),
):
    """List tasks, optionally filtered by kind and/or priority."""
    repo = TaskRepository(db)
    if kind is None and priority is not None:
        tasks = repo.get_by_priority(priority)
    elif kind is not None:
        tasks = repo.get_by_kind(kind)
        if priority is not None:
            tasks = [t for t in tasks if t.priority == priority]
    else:
        tasks = repo.get_all()
    return TaskListResponse(tasks=tasks, count=len(tasks))


@app.get("/tasks/upcoming", response_model=TaskListResponse)
def list_upcoming_tasks(
    days: int = Query(UPCOMING_DAYS, ge=0),
    db: Session = Depends(get_db),
):
    """List placed tasks starting within the next `days` days."""
    tasks = TaskRepository(db).get_upcoming(datetime.utcnow(), days=days)
    return TaskListResponse(tasks=tasks, count=len(tasks))


@app.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: str, db: Session = Depends(get_db)):
    task = TaskRepository(db).get(task_id)
    if task is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")
    return TaskResponse(task=task)


@app.put("/tasks/{task_id}", response_model=TaskResponse)
def update_task(task_id: str, payload: TaskUpdateRequest, db: Session = Depends(get_db)):
    """Update the fields present in the request body."""
    repo = TaskRepository(db)
    existing = repo.get(task_id)
    if existing is None:
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")

    updates = {field: getattr(payload, field) for field in payload.model_fields_set}
    try:
        task = Task(**{**dict(existing), **updates})
    except ValidationError as e:
        raise HTTPException(
            status_code=422,
            detail=[f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()],
        )
    _ensure_valid(task)

    try:
        updated = repo.update(task)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to update task: {str(e)}")
    return TaskResponse(task=updated)


@app.delete("/tasks/{task_id}", status_code=204)
def delete_task(task_id: str, db: Session = Depends(get_db)):
    if not TaskRepository(db).delete(task_id):
        raise HTTPException(status_code=404, detail=f"Task {task_id} not found")


@app.post("/schedule", response_model=ScheduleResponse)
def build_schedule(day: Optional[date] = None, db: Session = Depends(get_db)):
    """Auto-schedule all stored tasks into the workday and persist the placements."""
    repo = TaskRepository(db)
    try:
        config = get_scheduling_config(day or datetime.utcnow().date())
    except ValueError as e:
        logger.error(f"Invalid workday settings: {e}")
        raise HTTPException(status_code=500, detail="Invalid workday settings")

    # Oldest first, so equally ranked tasks keep creation order.
    tasks = list(reversed(repo.get_all()))
    if not tasks:
        raise HTTPException(status_code=400, detail="No tasks available. Create tasks first.")

    try:
        result = auto_schedule(tasks, config)
    except FixedTaskOutsideWorkdayError as e:
        raise HTTPException(status_code=422, detail=str(e))

    try:
        placed = [repo.update(task) for task in result.placed_tasks]
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to save schedule: {str(e)}")

    logger.debug(f"Schedule for {config.workday_start.date()}: {len(placed)} placed, {len(result.unplaced_tasks)} unplaced")
    return ScheduleResponse(
        workday_start=config.workday_start,
        workday_end=config.workday_end,
        placed_tasks=placed,
        unplaced_tasks=result.unplaced_tasks,
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
