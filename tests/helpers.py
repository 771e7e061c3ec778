# tests/helpers.py

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from models import Task

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)


def make_task(
    task_id: str,
    *,
    duration: int = 30,
    importance: int = 3,
    deadline: datetime | None = None,
    created_at: datetime | None = None,
    completed: bool = False,
    title: str | None = None,
    description: str | None = None,
) -> Task:
    """Task with fixed timestamps relative to NOW."""
    return Task(
        id=task_id,
        title=title or f"task {task_id}",
        duration=duration,
        importance=importance,
        deadline=deadline or NOW + timedelta(days=1),
        created_at=created_at or NOW,
        completed=completed,
        description=description,
    )
