"""Task input form rules for whatToDoNow."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from models import (
    MAX_IMPORTANCE, MIN_IMPORTANCE, Task, ValidationError,
    new_task, normalize_timestamp, now as current_time
)


DURATION_MIN = 5
DURATION_MAX = 180
DURATION_STEP = 5
DEFAULT_DURATION = 30
DEFAULT_IMPORTANCE = 3

TITLE_REQUIRED_MESSAGE = "Please enter a task title"


def clamp_duration(value: int) -> int:
    """Snap a duration to the nearest value the form accepts."""
    value = max(DURATION_MIN, min(DURATION_MAX, int(value)))
    return round(value / DURATION_STEP) * DURATION_STEP


def clamp_importance(value: int) -> int:
    return max(MIN_IMPORTANCE, min(MAX_IMPORTANCE, int(value)))


def start_of_day(moment: datetime) -> datetime:
    """Local midnight of the day containing ``moment``."""
    local = moment.astimezone()
    return local.replace(hour=0, minute=0, second=0, microsecond=0)


@dataclass
class TaskFormData:
    """Raw values collected by the task input form.

    A ``deadline`` of None means "24 hours from submission".
    """
    title: str = ""
    description: str = ""
    duration: int = DEFAULT_DURATION
    importance: int = DEFAULT_IMPORTANCE
    deadline: Optional[datetime] = None

    def validate(self, at: Optional[datetime] = None) -> None:
        """Raise ValidationError if the form cannot be submitted."""
        if not self.title.strip():
            raise ValidationError(TITLE_REQUIRED_MESSAGE)
        if isinstance(self.duration, bool) or not isinstance(self.duration, int):
            raise ValidationError("Duration must be a whole number of minutes")
        if not DURATION_MIN <= self.duration <= DURATION_MAX:
            raise ValidationError(
                f"Duration must be between {DURATION_MIN} and {DURATION_MAX} minutes"
            )
        if self.duration % DURATION_STEP:
            raise ValidationError(f"Duration must be a multiple of {DURATION_STEP} minutes")
        if isinstance(self.importance, bool) or not isinstance(self.importance, int):
            raise ValidationError("Importance must be a whole number")
        if not MIN_IMPORTANCE <= self.importance <= MAX_IMPORTANCE:
            raise ValidationError(
                f"Importance must be between {MIN_IMPORTANCE} and {MAX_IMPORTANCE}"
            )
        if self.deadline is not None:
            current = at or current_time()
            if normalize_timestamp(self.deadline) < start_of_day(current):
                raise ValidationError("Deadline cannot be before today")

    def to_task(self, at: Optional[datetime] = None) -> Task:
        """Validate the form and build a new incomplete task from it."""
        current = normalize_timestamp(at) if at else current_time()
        self.validate(current)
        return new_task(
            title=self.title,
            description=self.description,
            duration=self.duration,
            importance=self.importance,
            deadline=self.deadline,
            created_at=current,
        )
