"""Data models for whatToDoNow."""

import uuid
from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional


IMPORTANCE_LABELS = {
    1: "Very Low",
    2: "Low",
    3: "Medium",
    4: "High",
    5: "Critical",
}

MIN_IMPORTANCE = 1
MAX_IMPORTANCE = 5


class ValidationError(ValueError):
    """Raised when task data violates a model invariant."""


def normalize_timestamp(value: datetime) -> datetime:
    """Return an aware timestamp truncated to whole milliseconds.

    Naive values are taken as local time.
    """
    if value.tzinfo is None:
        value = value.astimezone()
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def now() -> datetime:
    """Current local time, normalized like every stored timestamp."""
    return normalize_timestamp(datetime.now().astimezone())


@dataclass(frozen=True)
class Task:
    """Task data model.

    Instances are immutable; ``with_completed`` is the one sanctioned change.
    """
    id: str
    title: str
    duration: int
    importance: int
    deadline: datetime
    created_at: datetime
    description: Optional[str] = None
    completed: bool = False

    def __post_init__(self):
        for name in ("deadline", "created_at"):
            if not isinstance(getattr(self, name), datetime):
                raise ValidationError(f"Task {name} must be a timestamp")
        object.__setattr__(self, "deadline", normalize_timestamp(self.deadline))
        object.__setattr__(self, "created_at", normalize_timestamp(self.created_at))
        validate_task(self)

    def with_completed(self, completed: bool) -> "Task":
        """Copy of this task with only the completion flag changed."""
        return replace(self, completed=completed)


def validate_task(task: Task) -> None:
    """Check the invariants a single task must hold."""
    if not isinstance(task.id, str) or not task.id:
        raise ValidationError("Task id must be a non-empty string")
    if not isinstance(task.title, str) or not task.title.strip():
        raise ValidationError("Task title must not be empty")
    if task.description is not None and not isinstance(task.description, str):
        raise ValidationError("Task description must be text")
    # bool is an int subclass; True is not a duration.
    if isinstance(task.duration, bool) or not isinstance(task.duration, int):
        raise ValidationError("Task duration must be a whole number of minutes")
    if task.duration <= 0:
        raise ValidationError(f"Task duration must be positive, got {task.duration}")
    if isinstance(task.importance, bool) or not isinstance(task.importance, int):
        raise ValidationError("Task importance must be a whole number")
    if not MIN_IMPORTANCE <= task.importance <= MAX_IMPORTANCE:
        raise ValidationError(
            f"Task importance must be between {MIN_IMPORTANCE} and {MAX_IMPORTANCE}, "
            f"got {task.importance}"
        )
    if not isinstance(task.completed, bool):
        raise ValidationError("Task completed flag must be a boolean")


def new_task(
    title: str,
    duration: int,
    importance: int,
    deadline: Optional[datetime] = None,
    description: Optional[str] = None,
    created_at: Optional[datetime] = None,
) -> Task:
    """Create a fresh, incomplete task with a new id.

    The title and description are trimmed; an empty description is dropped.
    Without a deadline the task is due 24 hours after creation.
    """
    created = normalize_timestamp(created_at) if created_at else now()
    if deadline is None:
        deadline = created + timedelta(hours=24)
    if description is not None:
        description = description.strip() or None
    return Task(
        id=str(uuid.uuid4()),
        title=title.strip() if isinstance(title, str) else title,
        description=description,
        duration=duration,
        importance=importance,
        deadline=deadline,
        created_at=created,
        completed=False,
    )


def importance_label(importance: int) -> str:
    """Human label for an importance rating ("" when out of range)."""
    return IMPORTANCE_LABELS.get(importance, "")


def deadline_status(task: Task, at: Optional[datetime] = None) -> str:
    """Short relative description of a task's deadline."""
    current = at or now()
    hours_left = (task.deadline - current).total_seconds() / 3600
    if hours_left < 0:
        return "Overdue"
    if hours_left < 24:
        return "Due today"
    if hours_left < 48:
        return "Due tomorrow"
    local = task.deadline.astimezone()
    return f"Due {local.strftime('%b')} {local.day}"
