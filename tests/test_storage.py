# tests/test_storage.py

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timedelta, timezone

import pytest

from models import ValidationError, new_task
from storage import (
    CORRUPT_SUFFIX, TASKS_SLOT, LocalStorage, TaskStore, decode_tasks,
    encode_tasks, format_timestamp, parse_timestamp
)

from .helpers import NOW, make_task


def test_local_storage_set_get_remove(storage: LocalStorage) -> None:
    assert storage.get_item("k") is None

    storage.set_item("k", "v1")
    storage.set_item("k", "v2")
    assert storage.get_item("k") == "v2"

    storage.remove_item("k")
    assert storage.get_item("k") is None


def test_local_storage_persists_across_connections(tmp_path) -> None:
    path = tmp_path / "nested" / "store.db"
    first = LocalStorage(path)
    first.set_item("tasks", "[]")
    first.close()

    second = LocalStorage(path)
    try:
        assert second.get_item("tasks") == "[]"
    finally:
        second.close()


def test_timestamp_format_matches_iso_utc_with_millis() -> None:
    moment = datetime(2026, 10, 20, 9, 30, 0, 250000, tzinfo=timezone.utc)
    assert format_timestamp(moment) == "2026-10-20T09:30:00.250Z"


def test_parse_timestamp_accepts_offsets() -> None:
    parsed = parse_timestamp("2026-10-20T11:30:00.250+02:00")
    assert parsed == datetime(2026, 10, 20, 9, 30, 0, 250000, tzinfo=timezone.utc)


@pytest.mark.parametrize(
    "raw", [None, 17, "not a date", "2026-10-20T09:30:00", "9999-12-31T23:59:59.000-05:00"]
)
def test_parse_timestamp_rejects_garbage(raw) -> None:
    with pytest.raises(ValidationError):
        parse_timestamp(raw)


def test_encoded_layout() -> None:
    task = make_task("abc", duration=15, importance=4)
    described = make_task("def", description="notes")

    records = json.loads(encode_tasks([task, described]))

    assert records[0] == {
        "id": "abc",
        "title": "task abc",
        "duration": 15,
        "importance": 4,
        "deadline": format_timestamp(NOW + timedelta(days=1)),
        "completed": False,
        "createdAt": format_timestamp(NOW),
    }
    assert records[1]["description"] == "notes"


def test_serialization_keeps_timestamps_to_the_millisecond() -> None:
    task = new_task("Round trip", duration=25, importance=2, description="d")

    (decoded,) = decode_tasks(encode_tasks([task]))

    assert decoded == task
    assert decoded.deadline == task.deadline
    assert decoded.created_at == task.created_at


@pytest.mark.parametrize(
    "payload",
    [
        "{not json",
        json.dumps({"id": "a"}),
        json.dumps(["a string"]),
        json.dumps([{"id": "a", "title": "t"}]),
    ],
)
def test_decode_rejects_malformed_payloads(payload: str) -> None:
    with pytest.raises(ValidationError):
        decode_tasks(payload)


def test_decode_rejects_invalid_records() -> None:
    records = json.loads(encode_tasks([make_task("a")]))
    records[0]["duration"] = 0
    with pytest.raises(ValidationError):
        decode_tasks(json.dumps(records))


def test_decode_rejects_duplicate_ids() -> None:
    payload = encode_tasks([make_task("same"), make_task("same", title="other")])
    with pytest.raises(ValidationError, match="Duplicate"):
        decode_tasks(payload)


def test_load_missing_slot_is_empty(store: TaskStore) -> None:
    assert store.load() == []


def test_add_appends_and_persists(store: TaskStore, storage: LocalStorage) -> None:
    first = make_task("1")
    second = make_task("2", duration=90, importance=5)

    assert store.add(first) == [first]
    result = store.add(second)

    assert result == [first, second]
    assert len(result) == 2
    assert decode_tasks(storage.get_item(TASKS_SLOT)) == [first, second]


def test_add_returns_a_copy(store: TaskStore) -> None:
    result = store.add(make_task("1"))
    result.clear()
    assert len(store.tasks) == 1


def test_add_rejects_duplicate_id(store: TaskStore) -> None:
    store.add(make_task("1"))
    with pytest.raises(ValidationError):
        store.add(make_task("1"))
    assert len(store.tasks) == 1


def test_set_completed_round_trip(store: TaskStore) -> None:
    original = make_task("1", duration=40, importance=2)
    store.add(original)

    store.set_completed("1", True)
    assert store.tasks[0].completed is True

    store.set_completed("1", False)
    assert store.tasks[0] == original


def test_set_completed_persists(store: TaskStore, storage: LocalStorage) -> None:
    store.add(make_task("1"))
    store.set_completed("1", True)

    reloaded = TaskStore(storage)
    assert reloaded.load()[0].completed is True


def test_set_completed_unknown_id_is_noop(store: TaskStore, storage: LocalStorage) -> None:
    store.add(make_task("1"))
    before = storage.get_item(TASKS_SLOT)

    result = store.set_completed("missing", True)

    assert [t.completed for t in result] == [False]
    assert storage.get_item(TASKS_SLOT) == before


def test_reload_restores_order_and_fields(store: TaskStore, storage: LocalStorage) -> None:
    tasks = [make_task(str(i), duration=5 * (i + 1)) for i in range(4)]
    for task in tasks:
        store.add(task)

    assert TaskStore(storage).load() == tasks


def test_corrupt_payload_falls_back_to_empty(
    store: TaskStore, storage: LocalStorage, caplog: pytest.LogCaptureFixture
) -> None:
    storage.set_item(TASKS_SLOT, "[{broken")

    with caplog.at_level(logging.WARNING, logger="storage"):
        assert store.load() == []

    assert "unreadable" in caplog.text
    assert storage.get_item(TASKS_SLOT + CORRUPT_SUFFIX) == "[{broken"


def test_unwritable_timestamp_rejects_whole_payload(store: TaskStore, storage: LocalStorage) -> None:
    records = json.loads(encode_tasks([make_task("ok"), make_task("far")]))
    records[1]["deadline"] = "9999-12-31T23:59:59.000-05:00"
    storage.set_item(TASKS_SLOT, json.dumps(records))

    assert store.load() == []

    task = make_task("fresh")
    store.add(task)
    assert decode_tasks(storage.get_item(TASKS_SLOT)) == [task]


class _FailingWrites:
    """LocalStorage stand-in whose writes always fail."""

    def __init__(self, inner: LocalStorage):
        self.inner = inner
        self.db_path = inner.db_path

    def get_item(self, key: str):
        return self.inner.get_item(key)

    def set_item(self, key: str, value: str) -> None:
        raise sqlite3.OperationalError("disk I/O error")


def test_failed_add_leaves_collection_unchanged(storage: LocalStorage) -> None:
    store = TaskStore(storage)
    store.add(make_task("1"))
    before = storage.get_item(TASKS_SLOT)

    store.storage = _FailingWrites(storage)
    with pytest.raises(sqlite3.OperationalError):
        store.add(make_task("2"))

    assert [t.id for t in store.tasks] == ["1"]
    assert storage.get_item(TASKS_SLOT) == before


def test_failed_toggle_leaves_collection_unchanged(storage: LocalStorage) -> None:
    store = TaskStore(storage)
    store.add(make_task("1"))

    store.storage = _FailingWrites(storage)
    with pytest.raises(sqlite3.OperationalError):
        store.set_completed("1", True)

    assert store.tasks[0].completed is False
    assert decode_tasks(storage.get_item(TASKS_SLOT))[0].completed is False


def test_add_after_corrupt_load_overwrites_slot(store: TaskStore, storage: LocalStorage) -> None:
    storage.set_item(TASKS_SLOT, json.dumps({"tasks": []}))
    store.load()

    task = make_task("fresh")
    store.add(task)

    assert decode_tasks(storage.get_item(TASKS_SLOT)) == [task]
