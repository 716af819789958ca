# src/app/config.py
"""
Settings for grid-astar, loaded from config/pathfinding.yaml.

File layout:

    pathfinding:
      allow_diagonal_movement: true
      max_steps: null          # null = unbounded
      default_width: 20
      default_height: 10
      log_level: INFO
      event_log_path: logs/pathfinding/events.log   # optional
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .logging_config import resolve_level

PROJECT_ROOT = Path(__file__).resolve().parents[2]
CONFIG_ROOT = PROJECT_ROOT / "config"
DEFAULT_SETTINGS_PATH = CONFIG_ROOT / "pathfinding.yaml"


@dataclass
class PathfindingSettings:
    """Runtime knobs for the pathfinder and the CLI."""

    allow_diagonal_movement: bool = True
    max_steps: Optional[int] = None
    default_width: int = 20
    default_height: int = 10
    log_level: str = "INFO"
    event_log_path: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PathfindingSettings":
        """Convenience constructor from a plain dict (e.g. YAML)."""
        defaults = cls()
        settings = cls(
            allow_diagonal_movement=data.get(
                "allow_diagonal_movement", defaults.allow_diagonal_movement
            ),
            max_steps=data.get("max_steps", defaults.max_steps),
            default_width=data.get("default_width", defaults.default_width),
            default_height=data.get("default_height", defaults.default_height),
            log_level=str(data.get("log_level", defaults.log_level)).upper(),
            event_log_path=data.get("event_log_path", defaults.event_log_path),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        """Minimal sanity checks; raises ValueError on bad values."""
        if not isinstance(self.allow_diagonal_movement, bool):
            raise ValueError("allow_diagonal_movement must be a boolean")
        if self.max_steps is not None and (
            isinstance(self.max_steps, bool)
            or not isinstance(self.max_steps, int)
            or self.max_steps <= 0
        ):
            raise ValueError(f"max_steps must be a positive integer or null, got {self.max_steps!r}")
        for name in ("default_width", "default_height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        resolve_level(self.log_level)


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping; empty files give an empty dict."""
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected mapping at top of {path}, got {type(data).__name__}")
    return data


def load_settings(path: Optional[Path] = None) -> PathfindingSettings:
    """
    Main entry point: returns resolved PathfindingSettings.

    With no path, config/pathfinding.yaml is used when present and the
    defaults otherwise. An explicit path must exist.
    """
    if path is None:
        if not DEFAULT_SETTINGS_PATH.exists():
            return PathfindingSettings()
        path = DEFAULT_SETTINGS_PATH

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing config file: {path}")

    raw = _load_yaml(path)
    section = raw.get("pathfinding", {}) or {}
    if not isinstance(section, dict):
        raise ValueError(f"'pathfinding' in {path} must be a mapping")
    return PathfindingSettings.from_dict(section)
