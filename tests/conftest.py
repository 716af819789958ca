# tests/conftest.py

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

import pytest

# Ensure src/ is on sys.path for test imports like `import gridnav`, `import mapedit`.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"

if str(SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(SRC_ROOT))

from monitoring.bus import EventBus  # noqa: E402
from monitoring.events import MonitoringEvent  # noqa: E402


@pytest.fixture
def scenario_dir() -> Path:
    """Bundled example scenarios under config/scenarios/."""
    return PROJECT_ROOT / "config" / "scenarios"


@pytest.fixture
def recorded_events():
    """An EventBus plus the list every published event lands in."""
    bus = EventBus()
    received: List[MonitoringEvent] = []
    bus.subscribe(received.append)
    return bus, received
