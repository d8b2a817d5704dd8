"""JSON persistence for settings and cumulative statistics.

Both records are flat JSON documents in the config directory. Loading never
fails: a missing or unreadable file yields defaults. Saving raises ``OSError``
and callers decide whether that matters (the game treats it as best-effort).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import json
import logging
import os

from .types import DEFAULT_AI_LEVEL, Statistics

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "TOWER_OOPS_CONFIG_DIR"
APP_DIR_NAME = "tower-oops"
SETTINGS_FILE = "settings.json"
STATISTICS_FILE = "statistics.json"

DEFAULT_ANIMATION_SPEED = 0.2

_SETTINGS_KEYS = ("ai_level", "animation_speed", "window_width", "window_height")


def default_config_dir() -> Path:
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
    return Path(base) / APP_DIR_NAME


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass
class Settings:
    ai_level: int = DEFAULT_AI_LEVEL
    animation_speed: float = DEFAULT_ANIMATION_SPEED
    window_width: Optional[int] = None
    window_height: Optional[int] = None
    # Keys written by other collaborators; kept so a save does not drop them
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.extra)
        data.update(
            ai_level=self.ai_level,
            animation_speed=self.animation_speed,
            window_width=self.window_width,
            window_height=self.window_height,
        )
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        if not isinstance(data, dict):
            raise ValueError("settings document must be a JSON object")
        return cls(
            ai_level=int(data.get("ai_level", DEFAULT_AI_LEVEL)),
            animation_speed=float(data.get("animation_speed", DEFAULT_ANIMATION_SPEED)),
            window_width=_optional_int(data.get("window_width")),
            window_height=_optional_int(data.get("window_height")),
            extra={k: v for k, v in data.items() if k not in _SETTINGS_KEYS},
        )


class Storage:
    def __init__(self, directory: Optional[Path] = None) -> None:
        self.directory = Path(directory) if directory is not None else default_config_dir()

    @property
    def settings_path(self) -> Path:
        return self.directory / SETTINGS_FILE

    @property
    def statistics_path(self) -> Path:
        return self.directory / STATISTICS_FILE

    def load_settings(self) -> Settings:
        data = self._read(self.settings_path)
        if data is None:
            return Settings()
        try:
            return Settings.from_dict(data)
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed settings in %s: %s", self.settings_path, exc)
            return Settings()

    def save_settings(self, settings: Settings) -> None:
        self._write(self.settings_path, settings.to_dict())

    def load_statistics(self) -> Statistics:
        data = self._read(self.statistics_path)
        if data is None:
            return Statistics()
        try:
            if not isinstance(data, dict):
                raise ValueError("statistics document must be a JSON object")
            return Statistics.from_dict(data)
        except (TypeError, ValueError) as exc:
            logger.warning("Ignoring malformed statistics in %s: %s", self.statistics_path, exc)
            return Statistics()

    def save_statistics(self, statistics: Statistics) -> None:
        self._write(self.statistics_path, statistics.to_dict())

    def _read(self, path: Path) -> Optional[Any]:
        if not path.is_file():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Could not read %s: %s", path, exc)
            return None

    def _write(self, path: Path, data: Dict[str, Any]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        logger.debug("Wrote %s", path)
