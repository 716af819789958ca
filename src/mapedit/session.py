# map editor session driving the pathfinder
# src/mapedit/session.py
"""
MapEditorSession: the host side of the pathfinder.

Owns a TileMap and a Pathfinder and keeps the editing state a UI would
otherwise hold:
- generated map bounds
- placement mode (start / end / obstacle)
- start, end, obstacle set
- the currently displayed path

It does not draw anything or translate screen coordinates; callers hand it
cell coordinates directly. mapedit.render turns its TileMap into text.
"""

from __future__ import annotations

import logging
from enum import Enum, auto
from typing import List, Optional, Sequence, Set

from gridnav.grid import GridBounds
from gridnav.node import Coord, as_coord
from gridnav.pathfinder import Pathfinder, PathfindingResult
from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event

from .scenario import Scenario, ScenarioError
from .tilemap import TileKind, TileMap

logger = logging.getLogger(__name__)

_MODULE = "mapedit.session"


class PlacementMode(Enum):
    NONE = auto()
    PLACING_START = auto()
    PLACING_END = auto()
    PLACING_OBSTACLE = auto()


class MapEditorSession:
    """
    Editing state + pathfinder wiring for one map.

    Typical flow:

        session = MapEditorSession()
        session.generate_map(20, 10)
        session.set_mode(PlacementMode.PLACING_START)
        session.place((0, 0))
        session.set_mode(PlacementMode.PLACING_END)
        session.place((19, 9))
        result = session.run()
    """

    def __init__(
        self,
        *,
        allow_diagonal_movement: bool = True,
        max_steps: Optional[int] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        self.tilemap = TileMap()
        self.pathfinder = Pathfinder(
            self.tilemap,
            allow_diagonal_movement=allow_diagonal_movement,
            max_steps=max_steps,
            bus=bus,
        )
        self._bus = bus

        self.mode = PlacementMode.NONE
        self.bounds: Optional[GridBounds] = None
        self.start: Optional[Coord] = None
        self.end: Optional[Coord] = None
        self.obstacles: Set[Coord] = set()
        self.current_path: Optional[List[Coord]] = None
        self.last_result: Optional[PathfindingResult] = None

    @classmethod
    def from_scenario(
        cls,
        scenario: Scenario,
        *,
        allow_diagonal_movement: bool = True,
        max_steps: Optional[int] = None,
        bus: Optional[EventBus] = None,
    ) -> "MapEditorSession":
        """
        Build a session with the scenario's map, holes, endpoints and obstacles.

        A diagonal setting inside the scenario wins over the argument.
        """
        if scenario.allow_diagonal_movement is not None:
            allow_diagonal_movement = scenario.allow_diagonal_movement

        session = cls(
            allow_diagonal_movement=allow_diagonal_movement,
            max_steps=max_steps,
            bus=bus,
        )
        if not session.generate_map(scenario.width, scenario.height, origin=scenario.origin):
            raise ScenarioError(f"Scenario '{scenario.name}' could not generate a map")

        for hole in scenario.holes:
            session.tilemap.remove_tile(hole)

        for mode, cell in (
            (PlacementMode.PLACING_START, scenario.start),
            (PlacementMode.PLACING_END, scenario.end),
        ):
            session.set_mode(mode)
            if not session.place(cell):
                raise ScenarioError(
                    f"Scenario '{scenario.name}': {cell} lies outside the "
                    f"{scenario.width}x{scenario.height} map"
                )

        session.set_mode(PlacementMode.PLACING_OBSTACLE)
        for cell in scenario.obstacles:
            if session.bounds is None or not session.bounds.contains(cell):
                raise ScenarioError(
                    f"Scenario '{scenario.name}': obstacle {cell} lies outside the "
                    f"{scenario.width}x{scenario.height} map"
                )
            if cell not in session.obstacles:
                session.place(cell)
        session.set_mode(PlacementMode.NONE)
        return session

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    @property
    def allow_diagonal_movement(self) -> bool:
        return self.pathfinder.allow_diagonal_movement

    @allow_diagonal_movement.setter
    def allow_diagonal_movement(self, value: bool) -> None:
        self.pathfinder.allow_diagonal_movement = bool(value)
        logger.info("Diagonal movement %s", "allowed" if value else "disallowed")

    def set_mode(self, mode: PlacementMode) -> None:
        self.mode = mode
        logger.debug("Placement mode: %s", mode.name)

    # ------------------------------------------------------------------
    # Map generation
    # ------------------------------------------------------------------

    def generate_map(
        self,
        width: int,
        height: int,
        origin: Sequence[int] = (0, 0),
    ) -> bool:
        """
        Replace the map with a width x height block of default tiles.

        Non-positive sizes are rejected and leave the current map untouched.
        """
        if width <= 0 or height <= 0:
            logger.error(
                "Width and height must be positive integers, got %s x %s", width, height
            )
            return False

        self.tilemap.clear_all_tiles()
        self.obstacles.clear()
        self.start = None
        self.end = None
        self.current_path = None
        self.last_result = None

        self.tilemap.fill(width, height, TileKind.DEFAULT, origin)
        self.bounds = GridBounds(origin=as_coord(origin), width=width, height=height)
        self.pathfinder.initialize_grid(self.bounds, self.tilemap.has_tile)
        self.mode = PlacementMode.NONE

        logger.info("Map generated with width=%d height=%d", width, height)
        self._emit(
            EventType.MAP_GENERATED,
            "Map generated",
            {"width": width, "height": height, "origin": list(self.bounds.origin)},
        )
        return True

    # ------------------------------------------------------------------
    # Placement
    # ------------------------------------------------------------------

    def place(self, cell: Sequence[int]) -> bool:
        """
        Apply the current placement mode at a cell.

        Returns True when the map changed.
        """
        if self.mode is PlacementMode.NONE:
            return False

        coord = as_coord(cell)
        if self.bounds is None or not self.bounds.contains(coord):
            logger.warning("Cell %s is outside of the generated map bounds", coord)
            return False

        if self.mode is PlacementMode.PLACING_START:
            if self.start is not None and self.start != self.end:
                self.tilemap.set_tile(self.start, TileKind.DEFAULT)
            self.start = coord
            self.obstacles.discard(coord)
            self.tilemap.set_tile(coord, TileKind.START)
            logger.info("Start point set at %s", coord)

        elif self.mode is PlacementMode.PLACING_END:
            if self.end is not None and self.end != self.start:
                self.tilemap.set_tile(self.end, TileKind.DEFAULT)
            self.end = coord
            self.obstacles.discard(coord)
            self.tilemap.set_tile(coord, TileKind.END)
            logger.info("End point set at %s", coord)

        elif self.mode is PlacementMode.PLACING_OBSTACLE:
            if coord == self.start or coord == self.end:
                logger.warning("Cannot place an obstacle on the start or end point")
                return False
            if coord in self.obstacles:
                self.obstacles.remove(coord)
                self.tilemap.set_tile(coord, TileKind.DEFAULT)
            else:
                self.obstacles.add(coord)
                self.tilemap.set_tile(coord, TileKind.OBSTACLE)
            logger.debug("Obstacle toggled at %s", coord)

        self._emit(
            EventType.PLACEMENT_CHANGED,
            "Placement changed",
            {"mode": self.mode.name, "cell": list(coord)},
        )
        return True

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def run(self) -> Optional[PathfindingResult]:
        """
        Refresh walkability and search from start to end.

        Returns None when start or end has not been placed yet.
        """
        if self.start is None or self.end is None:
            logger.error("Set both start and end points before running A*")
            return None

        self.clear_displayed_path()
        if not self.pathfinder.refresh_walkability(self.obstacles, self.start, self.end):
            logger.error("Walkability refresh failed; is a map generated?")

        result = self.pathfinder.find_path(self.start, self.end)
        self.last_result = result

        if result.success and result.path:
            logger.info("Path found. length=%d cost=%s", len(result.path), result.cost)
            self._display_path(result.path)
        else:
            reason = result.reason.value if result.reason is not None else "unknown"
            logger.warning("Path not found (%s)", reason)

        self.mode = PlacementMode.NONE
        return result

    def _display_path(self, path: List[Coord]) -> None:
        for cell in path:
            if cell != self.start and cell != self.end:
                self.tilemap.set_tile(cell, TileKind.PATH)
        self.current_path = list(path)

    def clear_displayed_path(self) -> None:
        """Restore painted path cells to default tiles."""
        if self.current_path is not None:
            for cell in self.current_path:
                if cell != self.start and cell != self.end and cell not in self.obstacles:
                    self.tilemap.set_tile(cell, TileKind.DEFAULT)
        self.current_path = None

    def _emit(self, event_type: EventType, message: str, payload: dict) -> None:
        if self._bus is None:
            return
        log_event(
            bus=self._bus,
            module=_MODULE,
            event_type=event_type,
            message=message,
            payload=payload,
        )
