"""Tests for TaskRepository CRUD operations."""

import pytest
from datetime import datetime, timedelta, timezone
import uuid

from smartcalendar.models.task import Task, TaskKind, TaskPriority, PreferredWindow


class TestTaskRepository:
    """Test TaskRepository CRUD operations."""

    def test_create_task(self, task_repository, sample_task):
        """Test creating a task."""
        created = task_repository.create(sample_task)

        assert created.id == sample_task.id
        assert created.name == sample_task.name
        assert created.kind == TaskKind.FLEXIBLE
        assert created.priority == TaskPriority.MEDIUM

    def test_get_task_by_id(self, task_repository, sample_task):
        created = task_repository.create(sample_task)
        retrieved = task_repository.get(created.id)

        assert retrieved is not None
        assert retrieved.id == created.id
        assert retrieved.name == created.name

    def test_get_nonexistent_task(self, task_repository):
        assert task_repository.get("nonexistent-id") is None

    def test_preferred_window_round_trips(self, task_repository, sample_task_base):
        window = PreferredWindow(start=datetime(2024, 1, 1, 10), end=datetime(2024, 1, 1, 11))
        task = Task(**{**sample_task_base, "preferred_window": window})

        retrieved = task_repository.get(task_repository.create(task).id)

        assert retrieved.preferred_window == window

    def test_offset_times_are_stored_as_utc(self, task_repository, sample_task_base):
        plus_two = timezone(timedelta(hours=2))
        task = Task(**{
            **sample_task_base,
            "kind": TaskKind.FIXED,
            "start_time": datetime(2024, 1, 1, 9, tzinfo=plus_two),
            "preferred_window": PreferredWindow(
                start=datetime(2024, 1, 1, 10, tzinfo=plus_two),
                end=datetime(2024, 1, 1, 12, tzinfo=plus_two),
            ),
        })

        retrieved = task_repository.get(task_repository.create(task).id)

        assert retrieved.start_time == datetime(2024, 1, 1, 7)
        assert retrieved.preferred_window.start == datetime(2024, 1, 1, 8)
        assert retrieved.preferred_window.end == datetime(2024, 1, 1, 10)

    def test_get_all_sorted_by_creation_date(self, task_repository, sample_task_base):
        """Test that get_all() returns tasks sorted by creation date (newest first)."""
        now = datetime.utcnow()
        task1 = Task(**{**sample_task_base, "id": str(uuid.uuid4()), "created_at": now, "name": "Task 1"})
        task2 = Task(**{**sample_task_base, "id": str(uuid.uuid4()), "created_at": now - timedelta(minutes=1), "name": "Task 2"})
        task3 = Task(**{**sample_task_base, "id": str(uuid.uuid4()), "created_at": now - timedelta(minutes=2), "name": "Task 3"})

        # Create in reverse order
        task_repository.create(task3)
        task_repository.create(task2)
        task_repository.create(task1)

        all_tasks = task_repository.get_all()
        assert [t.name for t in all_tasks] == ["Task 1", "Task 2", "Task 3"]

    def test_update_task(self, task_repository, sample_task):
        created = task_repository.create(sample_task)
        start = datetime(2024, 1, 1, 8, 0)

        updated = task_repository.update(
            created.model_copy(update={"start_time": start, "end_time": start + timedelta(minutes=30)})
        )

        assert updated.start_time == start
        assert updated.end_time == start + timedelta(minutes=30)
        assert updated.updated_at >= created.updated_at
        assert task_repository.get(created.id).start_time == start

    def test_update_nonexistent_task_raises(self, task_repository, sample_task):
        with pytest.raises(ValueError):
            task_repository.update(sample_task)

    def test_delete_task(self, task_repository, sample_task):
        created = task_repository.create(sample_task)

        assert task_repository.delete(created.id) is True
        assert task_repository.get(created.id) is None
        assert task_repository.delete(created.id) is False

    def test_clear(self, task_repository, make_task):
        for _ in range(3):
            task_repository.create(make_task())

        assert task_repository.clear() == 3
        assert task_repository.get_all() == []


class TestTaskSelectors:
    """Test filtered task queries."""

    def test_get_by_kind(self, task_repository, make_task):
        fixed = task_repository.create(make_task(kind=TaskKind.FIXED, start_time=datetime(2024, 1, 1, 9)))
        task_repository.create(make_task(kind=TaskKind.FLEXIBLE))

        result = task_repository.get_by_kind(TaskKind.FIXED)

        assert [t.id for t in result] == [fixed.id]

    def test_get_by_priority(self, task_repository, make_task):
        high = task_repository.create(make_task(priority=TaskPriority.HIGH))
        task_repository.create(make_task(priority=TaskPriority.LOW))

        result = task_repository.get_by_priority(TaskPriority.HIGH)

        assert [t.id for t in result] == [high.id]

    def test_get_upcoming(self, task_repository, make_task):
        now = datetime(2024, 1, 1, 12, 0)
        soon = task_repository.create(make_task(start_time=now + timedelta(days=2)))
        later = task_repository.create(make_task(start_time=now + timedelta(days=10)))
        task_repository.create(make_task(start_time=None))

        upcoming = task_repository.get_upcoming(now)
        assert [t.id for t in upcoming] == [soon.id]

        assert [t.id for t in task_repository.get_upcoming(now, days=30)] == [soon.id, later.id]
