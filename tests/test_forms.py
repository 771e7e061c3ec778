# tests/test_forms.py

from __future__ import annotations

from datetime import timedelta

import pytest

from forms import (
    TITLE_REQUIRED_MESSAGE, TaskFormData, clamp_duration, clamp_importance, start_of_day
)
from models import ValidationError

from .helpers import NOW


def test_defaults_build_a_task() -> None:
    task = TaskFormData(title="Plan sprint").to_task(NOW)

    assert task.title == "Plan sprint"
    assert task.duration == 30
    assert task.importance == 3
    assert task.deadline == NOW + timedelta(hours=24)
    assert task.created_at == NOW
    assert task.completed is False


def test_submitted_values_are_kept() -> None:
    deadline = NOW + timedelta(days=3)
    form = TaskFormData(
        title=" Review PR ", description=" check tests ", duration=120, importance=5, deadline=deadline
    )
    task = form.to_task(NOW)

    assert task.title == "Review PR"
    assert task.description == "check tests"
    assert task.duration == 120
    assert task.importance == 5
    assert task.deadline == deadline


def test_empty_title_message() -> None:
    with pytest.raises(ValidationError, match=TITLE_REQUIRED_MESSAGE):
        TaskFormData(title="   ").to_task(NOW)


@pytest.mark.parametrize("duration", [0, 4, 181, 200, 33])
def test_duration_outside_form_rules(duration: int) -> None:
    with pytest.raises(ValidationError):
        TaskFormData(title="x", duration=duration).to_task(NOW)


@pytest.mark.parametrize("duration", [5, 30, 180])
def test_duration_form_bounds_accepted(duration: int) -> None:
    assert TaskFormData(title="x", duration=duration).to_task(NOW).duration == duration


@pytest.mark.parametrize("importance", [0, 6])
def test_importance_outside_range(importance: int) -> None:
    with pytest.raises(ValidationError):
        TaskFormData(title="x", importance=importance).to_task(NOW)


def test_deadline_before_today_rejected() -> None:
    yesterday = start_of_day(NOW) - timedelta(minutes=1)
    with pytest.raises(ValidationError):
        TaskFormData(title="x", deadline=yesterday).to_task(NOW)


def test_deadline_earlier_today_accepted() -> None:
    earlier = start_of_day(NOW)
    task = TaskFormData(title="x", deadline=earlier).to_task(NOW)
    assert task.deadline == earlier


def test_clamp_duration() -> None:
    assert clamp_duration(0) == 5
    assert clamp_duration(32) == 30
    assert clamp_duration(33) == 35
    assert clamp_duration(999) == 180


def test_clamp_importance() -> None:
    assert clamp_importance(-3) == 1
    assert clamp_importance(4) == 4
    assert clamp_importance(10) == 5
