"""Repository layer for database operations."""

import logging
from datetime import datetime, timedelta
from typing import List, Optional
from sqlalchemy.orm import Session
from sqlalchemy import desc

from smartcalendar.models.task import Task, TaskKind, TaskPriority
from smartcalendar.models.constants import UPCOMING_DAYS
from smartcalendar.database.models import TaskDB, enum_to_value

logger = logging.getLogger(__name__)


class TaskRepository:
    """Repository for Task database operations."""

    def __init__(self, db: Session):
        self.db = db

    def create(self, task: Task) -> Task:
        """Create a new task."""
        try:
            task_db = TaskDB.from_pydantic(task)
            self.db.add(task_db)
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Created task {task.id}: {task.name[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to create task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def get(self, task_id: str) -> Optional[Task]:
        """Get task by ID."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        return task_db.to_pydantic() if task_db else None

    def get_all(self) -> List[Task]:
        """Get all tasks sorted by creation date (newest first)."""
        tasks_db = self.db.query(TaskDB).order_by(desc(TaskDB.created_at)).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def get_by_kind(self, kind: TaskKind) -> List[Task]:
        """Get all tasks of one kind."""
        tasks_db = self.db.query(TaskDB).filter(
            TaskDB.kind == enum_to_value(kind),
        ).order_by(desc(TaskDB.created_at)).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def get_by_priority(self, priority: TaskPriority) -> List[Task]:
        """Get all tasks with one priority."""
        tasks_db = self.db.query(TaskDB).filter(
            TaskDB.priority == enum_to_value(priority),
        ).order_by(desc(TaskDB.created_at)).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def get_upcoming(self, now: datetime, days: int = UPCOMING_DAYS) -> List[Task]:
        """Get placed tasks starting no later than `days` days from now, earliest first.

        Tasks already in the past are included: only the upper bound is applied.
        """
        horizon = now + timedelta(days=days)
        tasks_db = self.db.query(TaskDB).filter(
            TaskDB.start_time.isnot(None),
            TaskDB.start_time <= horizon,
        ).order_by(TaskDB.start_time).all()
        return [task_db.to_pydantic() for task_db in tasks_db]

    def update(self, task: Task) -> Task:
        """Update an existing task (updated_at is set to now)."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task.id).first()
        if not task_db:
            raise ValueError(f"Task {task.id} not found")

        task_db.apply(task.model_copy(update={"updated_at": datetime.utcnow()}))

        try:
            self.db.commit()
            self.db.refresh(task_db)
            logger.debug(f"Updated task {task.id}: {task.name[:50]}")
            return task_db.to_pydantic()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update task {task.id}: {type(e).__name__}: {str(e)}")
            raise

    def delete(self, task_id: str) -> bool:
        """Permanently delete a task by ID."""
        task_db = self.db.query(TaskDB).filter(TaskDB.id == task_id).first()
        if not task_db:
            return False

        try:
            self.db.delete(task_db)
            self.db.commit()
            logger.debug(f"Deleted task {task_id}")
            return True
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to delete task {task_id}: {type(e).__name__}: {str(e)}")
            raise

    def clear(self) -> int:
        """Delete every task. Returns the number of rows removed."""
        try:
            affected = self.db.query(TaskDB).delete(synchronize_session=False)
            self.db.commit()
            logger.debug(f"Cleared {affected} tasks")
            return int(affected)
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to clear tasks: {type(e).__name__}: {str(e)}")
            raise
