# mapedit package
# src/mapedit/__init__.py
"""
Host-side map editing around the gridnav pathfinder.

Provides:
- TileMap / TileKind: sparse tile storage
- MapEditorSession / PlacementMode: map generation, placements, runs
- Scenario / load_scenario: YAML scenario files
- render_tilemap / render_panel: rich text views
"""

from __future__ import annotations

from .render import render_panel, render_tilemap
from .scenario import Scenario, ScenarioError, load_scenario
from .session import MapEditorSession, PlacementMode
from .tilemap import TileKind, TileMap

__all__ = [
    "MapEditorSession",
    "PlacementMode",
    "Scenario",
    "ScenarioError",
    "TileKind",
    "TileMap",
    "load_scenario",
    "render_panel",
    "render_tilemap",
]
