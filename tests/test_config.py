# tests/test_config.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

import config
from config import Config, ConfigManager, get_config


@pytest.fixture()
def config_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the singleton at a temporary config.json and reset it."""
    path = tmp_path / "config.json"
    monkeypatch.setattr(config, "CONFIG_FILE", path)
    monkeypatch.setattr(config, "DEFAULT_STORAGE_PATH", tmp_path / "data" / "whattodonow.db")
    monkeypatch.setattr(config, "DEFAULT_LOG_DIR", tmp_path / "data" / "logs")
    monkeypatch.setattr(ConfigManager, "_instance", None)
    return path


def test_defaults_written_on_first_run(config_file: Path) -> None:
    cfg = get_config()

    assert cfg.theme == "dark"
    assert cfg.default_duration == 30
    assert cfg.default_importance == 3
    assert json.loads(config_file.read_text())["storage_path"] == cfg.storage_path
    assert Path(cfg.log_dir).is_dir()


def test_saved_values_are_loaded(config_file: Path, tmp_path: Path) -> None:
    config_file.write_text(json.dumps({
        "storage_path": str(tmp_path / "custom.db"),
        "log_dir": str(tmp_path / "logs"),
        "theme": "light",
        "default_duration": 60,
        "default_importance": 5,
        "obsolete_key": True,
    }))

    cfg = get_config()

    assert cfg.theme == "light"
    assert cfg.default_duration == 60
    assert cfg.default_importance == 5
    assert cfg.storage_path == str(tmp_path / "custom.db")


def test_corrupt_config_falls_back_to_defaults(config_file: Path) -> None:
    config_file.write_text("{not json")

    manager = ConfigManager()

    assert manager.config.theme == "dark"
    assert json.loads(config_file.read_text())["theme"] == "dark"
    assert str(config_file) in manager.load_error


def test_readable_config_has_no_load_error(config_file: Path) -> None:
    config_file.write_text(json.dumps({"theme": "light"}))
    assert ConfigManager().load_error is None


def test_out_of_range_defaults_are_clamped(config_file: Path) -> None:
    config_file.write_text(json.dumps({"default_duration": 7, "default_importance": 42}))

    cfg = get_config()

    assert cfg.default_duration == 5
    assert cfg.default_importance == 5


def test_update_persists(config_file: Path) -> None:
    ConfigManager().update(theme="light", default_duration=90, unknown="ignored")

    saved = json.loads(config_file.read_text())
    assert saved["theme"] == "light"
    assert saved["default_duration"] == 90
    assert "unknown" not in saved


def test_singleton(config_file: Path) -> None:
    assert ConfigManager() is ConfigManager()


def test_from_dict_ignores_unknown_keys() -> None:
    cfg = Config.from_dict({"theme": "light", "frame_count": 3})
    assert cfg.theme == "light"
    assert not hasattr(cfg, "frame_count")
