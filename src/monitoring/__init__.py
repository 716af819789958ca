# monitoring package
"""
In-process monitoring for grid-astar: event schema, bus, JSONL logger.
"""

from __future__ import annotations

from .bus import EventBus
from .events import EventType, MonitoringEvent
from .logger import JsonFileLogger, log_event

__all__ = [
    "EventBus",
    "EventType",
    "JsonFileLogger",
    "MonitoringEvent",
    "log_event",
]
