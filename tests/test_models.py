# tests/test_models.py

from __future__ import annotations

from dataclasses import FrozenInstanceError
from datetime import datetime, timedelta, timezone

import pytest

from models import (
    ValidationError, deadline_status, importance_label, new_task, normalize_timestamp
)

from .helpers import NOW, make_task


def test_new_task_trims_and_fills_defaults() -> None:
    task = new_task("  Write report  ", duration=45, importance=4, description="   ", created_at=NOW)

    assert task.title == "Write report"
    assert task.description is None
    assert task.duration == 45
    assert task.importance == 4
    assert task.completed is False
    assert task.created_at == NOW
    assert task.deadline == NOW + timedelta(hours=24)


def test_new_task_ids_are_unique() -> None:
    ids = {new_task("t", duration=5, importance=1).id for _ in range(50)}
    assert len(ids) == 50


def test_task_fields_cannot_be_reassigned() -> None:
    task = make_task("a", duration=30)

    with pytest.raises(FrozenInstanceError):
        task.duration = 0  # type: ignore[misc]

    done = task.with_completed(True)
    assert done.completed is True
    assert task.completed is False
    assert (done.id, done.duration, done.created_at) == (task.id, 30, task.created_at)


@pytest.mark.parametrize("title", ["", "   ", "\n\t"])
def test_blank_title_rejected(title: str) -> None:
    with pytest.raises(ValidationError):
        new_task(title, duration=30, importance=3)


@pytest.mark.parametrize("duration", [0, -5, True, 2.5, "30"])
def test_invalid_duration_rejected(duration) -> None:
    with pytest.raises(ValidationError):
        make_task("a", duration=duration)


@pytest.mark.parametrize("importance", [0, 6, -1, False, 3.0])
def test_invalid_importance_rejected(importance) -> None:
    with pytest.raises(ValidationError):
        make_task("a", importance=importance)


def test_validation_error_is_value_error() -> None:
    assert issubclass(ValidationError, ValueError)


def test_non_datetime_deadline_rejected() -> None:
    with pytest.raises(ValidationError):
        make_task("a", deadline="tomorrow")  # type: ignore[arg-type]


def test_timestamps_truncated_to_milliseconds() -> None:
    moment = datetime(2026, 10, 19, 12, 0, 0, 123456, tzinfo=timezone.utc)
    task = make_task("a", deadline=moment, created_at=moment)

    assert task.deadline.microsecond == 123000
    assert task.created_at.microsecond == 123000


def test_naive_timestamps_become_aware() -> None:
    assert normalize_timestamp(datetime(2026, 10, 19, 9, 30)).tzinfo is not None


def test_with_completed_changes_only_the_flag() -> None:
    task = make_task("a", duration=15, importance=5)
    done = task.with_completed(True)

    assert done.completed is True
    assert task.completed is False
    assert (done.id, done.title, done.duration, done.importance, done.deadline, done.created_at) == (
        task.id, task.title, task.duration, task.importance, task.deadline, task.created_at
    )


@pytest.mark.parametrize(
    "value,label",
    [(1, "Very Low"), (2, "Low"), (3, "Medium"), (4, "High"), (5, "Critical"), (9, "")],
)
def test_importance_label(value: int, label: str) -> None:
    assert importance_label(value) == label


@pytest.mark.parametrize(
    "offset,expected",
    [
        (timedelta(hours=-1), "Overdue"),
        (timedelta(hours=3), "Due today"),
        (timedelta(hours=30), "Due tomorrow"),
    ],
)
def test_deadline_status_relative(offset: timedelta, expected: str) -> None:
    task = make_task("a", deadline=NOW + offset)
    assert deadline_status(task, NOW) == expected


def test_deadline_status_far_future_names_the_date() -> None:
    task = make_task("a", deadline=NOW + timedelta(days=10))
    local = task.deadline.astimezone()
    assert deadline_status(task, NOW) == f"Due {local.strftime('%b')} {local.day}"
