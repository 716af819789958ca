# src/app/__init__.py
"""
Application wiring for grid-astar.

Exposes:
- PathfindingSettings / load_settings: YAML-backed settings
- configure_logging: root logging setup for entrypoints
"""

from __future__ import annotations

from .config import PathfindingSettings, load_settings
from .logging_config import configure_logging

__all__ = [
    "PathfindingSettings",
    "configure_logging",
    "load_settings",
]
