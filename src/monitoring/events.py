# path: src/monitoring/events.py
"""
Event schema for grid-astar monitoring.

This module defines:
- EventType enum
- MonitoringEvent (structured system events)

All events are JSON-serializable via `.to_dict()` and are intended
for use with monitoring.bus.EventBus and monitoring.logger.JsonFileLogger.
"""

from __future__ import annotations

from dataclasses import dataclass, asdict
from enum import Enum, auto
from typing import Any, Dict, Optional


# ============================================================
# Event Types
# ============================================================

class EventType(Enum):
    """Typed monitoring events emitted by the engine and the map editor."""

    # Grid lifecycle
    GRID_INITIALIZED = auto()
    GRID_INIT_FAILED = auto()

    # Obstacle / endpoint sweep before a search
    WALKABILITY_REFRESHED = auto()

    # Search outcomes
    PATH_FOUND = auto()
    PATH_NOT_FOUND = auto()

    # Map editor session
    MAP_GENERATED = auto()
    PLACEMENT_CHANGED = auto()

    # Generic log messages
    LOG = auto()


# ============================================================
# Monitoring Event Structure
# ============================================================

@dataclass
class MonitoringEvent:
    """
    Runtime event emitted by the pathfinder or the map editor session.

    All fields must be JSON-safe.
    """

    ts: float                   # UNIX timestamp (seconds)
    module: str                 # Source module string ("gridnav.pathfinder", ...)
    event_type: EventType       # Enum describing the event class
    message: str                # Short human-readable description
    payload: Dict[str, Any]     # Structured data (path, reason, bounds)
    correlation_id: Optional[str] = None  # Search id from Pathfinder.find_path

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-safe dict for loggers."""
        data = asdict(self)
        data["event_type"] = self.event_type.name  # store name, not enum
        return data
