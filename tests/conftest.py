# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from state import BoardState
from storage import LocalStorage, TaskStore


@pytest.fixture()
def storage(tmp_path: Path):
    """Real SQLite local storage in a per-test directory."""
    s = LocalStorage(tmp_path / "whattodonow.db")
    yield s
    s.close()


@pytest.fixture()
def store(storage: LocalStorage) -> TaskStore:
    return TaskStore(storage)


@pytest.fixture()
def board(store: TaskStore) -> BoardState:
    return BoardState(store)
