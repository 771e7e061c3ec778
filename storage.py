"""Local persistence for whatToDoNow.

Tasks are mirrored as a single JSON document in a named slot of a small
SQLite key/value table, the way a browser app would keep them in
``localStorage``.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from models import Task, ValidationError

logger = logging.getLogger(__name__)

TASKS_SLOT = "tasks"
CORRUPT_SUFFIX = ".corrupt"


class LocalStorage:
    """String key/value store backed by SQLite."""

    def __init__(self, db_path: str | Path):
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(str(self.db_path))
        self.conn.row_factory = sqlite3.Row
        self._create_tables()

    def _create_tables(self) -> None:
        """Create the key/value table if it doesn't exist."""
        cursor = self.conn.cursor()

        cursor.execute("""
            CREATE TABLE IF NOT EXISTS local_storage (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
        """)

        self.conn.commit()

    def get_item(self, key: str) -> Optional[str]:
        cursor = self.conn.cursor()
        cursor.execute("SELECT value FROM local_storage WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row["value"] if row else None

    def set_item(self, key: str, value: str) -> None:
        cursor = self.conn.cursor()
        cursor.execute(
            "INSERT INTO local_storage (key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value = excluded.value",
            (key, value)
        )
        self.conn.commit()

    def remove_item(self, key: str) -> None:
        cursor = self.conn.cursor()
        cursor.execute("DELETE FROM local_storage WHERE key = ?", (key,))
        self.conn.commit()

    def close(self) -> None:
        """Close database connection."""
        self.conn.close()


# Serialization

def format_timestamp(value: datetime) -> str:
    """UTC ISO-8601 with milliseconds and a ``Z`` suffix."""
    utc = value.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: Any) -> datetime:
    if not isinstance(raw, str):
        raise ValidationError(f"Expected a timestamp string, got {type(raw).__name__}")
    try:
        value = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as e:
        raise ValidationError(f"Invalid timestamp {raw!r}") from e
    if value.tzinfo is None:
        raise ValidationError(f"Timestamp {raw!r} has no UTC offset")
    # Must survive the trip back through format_timestamp.
    try:
        return value.astimezone(timezone.utc)
    except (OverflowError, ValueError) as e:
        raise ValidationError(f"Timestamp {raw!r} is out of range") from e


def encode_task(task: Task) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": task.id,
        "title": task.title,
    }
    if task.description is not None:
        record["description"] = task.description
    record.update({
        "duration": task.duration,
        "importance": task.importance,
        "deadline": format_timestamp(task.deadline),
        "completed": task.completed,
        "createdAt": format_timestamp(task.created_at),
    })
    return record


def encode_tasks(tasks: list[Task]) -> str:
    return json.dumps([encode_task(t) for t in tasks], ensure_ascii=False)


def decode_task(record: Any) -> Task:
    """Build a Task from one stored record, rejecting anything malformed."""
    if not isinstance(record, dict):
        raise ValidationError(f"Expected a task record, got {type(record).__name__}")
    missing = {"id", "title", "duration", "importance", "deadline", "completed", "createdAt"} - record.keys()
    if missing:
        raise ValidationError(f"Task record is missing {', '.join(sorted(missing))}")
    return Task(
        id=record["id"],
        title=record["title"],
        description=record.get("description"),
        duration=record["duration"],
        importance=record["importance"],
        deadline=parse_timestamp(record["deadline"]),
        created_at=parse_timestamp(record["createdAt"]),
        completed=record["completed"],
    )


def decode_tasks(payload: str) -> list[Task]:
    """Strictly decode a stored collection.

    Raises ValidationError if any part of the payload is unusable; there is
    no partial result.
    """
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise ValidationError(f"Stored tasks are not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise ValidationError("Stored tasks must be a list")

    tasks = [decode_task(record) for record in data]
    seen: set[str] = set()
    for task in tasks:
        if task.id in seen:
            raise ValidationError(f"Duplicate task id {task.id!r}")
        seen.add(task.id)
    return tasks


class TaskStore:
    """Ordered task collection mirrored to local storage on every change."""

    def __init__(self, storage: LocalStorage, slot: str = TASKS_SLOT):
        self.storage = storage
        self.slot = slot
        self._tasks: list[Task] = []

    @property
    def tasks(self) -> list[Task]:
        """Tasks in insertion order."""
        return list(self._tasks)

    def load(self) -> list[Task]:
        """Rehydrate from storage; empty when missing or unreadable."""
        raw = self.storage.get_item(self.slot)
        if raw is None:
            self._tasks = []
            return self.tasks

        try:
            self._tasks = decode_tasks(raw)
        except ValidationError as e:
            logger.warning("Ignoring unreadable tasks in slot %r: %s", self.slot, e)
            self.storage.set_item(self.slot + CORRUPT_SUFFIX, raw)
            self._tasks = []
        else:
            logger.info("Loaded %d tasks from %s", len(self._tasks), self.storage.db_path)
        return self.tasks

    def add(self, task: Task) -> list[Task]:
        """Append a task and persist the collection."""
        if any(t.id == task.id for t in self._tasks):
            raise ValidationError(f"A task with id {task.id!r} already exists")
        self._persist(self._tasks + [task])
        logger.debug("Added task %s (%r)", task.id, task.title)
        return self.tasks

    def set_completed(self, task_id: str, completed: bool) -> list[Task]:
        """Set a task's completion flag; unknown ids are ignored."""
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                updated = list(self._tasks)
                updated[i] = task.with_completed(completed)
                self._persist(updated)
                return self.tasks

        logger.debug("set_completed ignored unknown task id %s", task_id)
        return self.tasks

    def _persist(self, tasks: list[Task]) -> None:
        """Write ``tasks`` to the slot, then adopt them as the collection.

        A failed write leaves the in-memory collection untouched.
        """
        self.storage.set_item(self.slot, encode_tasks(tasks))
        self._tasks = tasks
