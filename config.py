"""Configuration management for whatToDoNow."""

import json
import logging
import sys
from pathlib import Path
from dataclasses import dataclass, asdict, fields
from typing import Optional

from forms import (
    DEFAULT_DURATION, DEFAULT_IMPORTANCE, clamp_duration, clamp_importance
)

logger = logging.getLogger(__name__)


def _get_app_dir() -> Path:
    """Get the application directory, handling both script and frozen executable."""
    if getattr(sys, 'frozen', False):
        # Running as compiled executable (PyInstaller, cx_Freeze, etc.)
        return Path(sys.executable).parent
    else:
        # Running as script
        return Path(__file__).parent


# Default paths relative to application directory
APP_DIR = _get_app_dir()
DEFAULT_DATA_DIR = APP_DIR / "data"
DEFAULT_STORAGE_PATH = DEFAULT_DATA_DIR / "whattodonow.db"
DEFAULT_LOG_DIR = DEFAULT_DATA_DIR / "logs"
CONFIG_FILE = APP_DIR / "config.json"


@dataclass
class Config:
    """Application configuration."""
    storage_path: str
    log_dir: str
    theme: str = "dark"
    default_duration: int = DEFAULT_DURATION
    default_importance: int = DEFAULT_IMPORTANCE

    def __post_init__(self):
        self.default_duration = clamp_duration(self.default_duration)
        self.default_importance = clamp_importance(self.default_importance)

    @classmethod
    def default(cls) -> "Config":
        """Create default configuration."""
        return cls(
            storage_path=str(DEFAULT_STORAGE_PATH),
            log_dir=str(DEFAULT_LOG_DIR),
        )

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Build a config from saved values, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        values = asdict(cls.default())
        values.update({k: v for k, v in data.items() if k in known})
        return cls(**values)


class ConfigManager:
    """Singleton configuration manager."""

    _instance: Optional["ConfigManager"] = None

    def __new__(cls) -> "ConfigManager":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._initialized = True
            self._config: Optional[Config] = None
            # Set when config.json was unreadable and defaults were used.
            self.load_error: Optional[str] = None
            self._load_or_create()

    def _load_or_create(self) -> None:
        """Load config from file or create defaults."""
        if CONFIG_FILE.exists():
            try:
                with open(CONFIG_FILE, "r", encoding="utf-8") as f:
                    data = json.load(f)
                if not isinstance(data, dict):
                    raise ValueError("config root must be an object")
                self._config = Config.from_dict(data)
            except (OSError, ValueError, TypeError) as e:
                # Any error loading config falls back to defaults
                self.load_error = f"Could not read {CONFIG_FILE} ({e}); using defaults"
                logger.warning("%s", self.load_error)
                self._config = Config.default()
                self._save()
        else:
            self._config = Config.default()
            self._save()
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        """Create configured directories if they don't exist."""
        Path(self._config.storage_path).parent.mkdir(parents=True, exist_ok=True)
        Path(self._config.log_dir).mkdir(parents=True, exist_ok=True)

    def _save(self) -> None:
        """Save configuration to file."""
        with open(CONFIG_FILE, "w", encoding="utf-8") as f:
            json.dump(asdict(self._config), f, indent=2)

    @property
    def config(self) -> Config:
        """Get current configuration."""
        return self._config

    def update(self, **kwargs) -> None:
        """Update configuration values."""
        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
        # Re-run clamping on the defaults.
        self._config.__post_init__()
        self._save()


def get_config() -> Config:
    """Get the application configuration."""
    return ConfigManager().config
