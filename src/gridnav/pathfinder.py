# A* search over Grid with an indexed open set
# src/gridnav/pathfinder.py
"""
A* pathfinding over a Grid.

- Octile distance heuristic (admissible and consistent for 10/14 weights).
- 4-directional neighbors, plus diagonals when allow_diagonal_movement is on.
- Indexed binary heap for the open set, coordinate set for the closed set.
- Optional max_steps guard to bound very large searches.

The engine owns the Grid. Hosts talk to it through three calls:

    finder = Pathfinder(host_map)
    finder.initialize_grid()
    finder.refresh_walkability(obstacles, start, end)
    result = finder.find_path(start, end)

Nothing here raises for expected failures; every outcome is a
PathfindingResult carrying a FailureReason.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, List, Optional, Protocol, Sequence, Set, Tuple

from monitoring.bus import EventBus
from monitoring.events import EventType
from monitoring.logger import log_event

from .grid import Grid, GridBounds, GridConfigError
from .heuristics import octile_distance
from .node import Coord, Node, as_coord
from .open_set import NodePriorityQueue

logger = logging.getLogger(__name__)

# Signature for the host's tile presence query:
#   tile_exists_at((x, y)) -> bool
TileExistsFn = Callable[[Coord], bool]

CARDINAL_OFFSETS: Tuple[Coord, ...] = ((0, 1), (0, -1), (1, 0), (-1, 0))
DIAGONAL_OFFSETS: Tuple[Coord, ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))

_MODULE = "gridnav.pathfinder"


class HostMap(Protocol):
    """What the engine needs from the map it searches over."""

    def cell_bounds(self) -> Optional[GridBounds]:
        ...

    def has_tile(self, coord: Coord) -> bool:
        ...


class FailureReason(Enum):
    """Why find_path returned no path."""

    GRID_NOT_INITIALIZED = "grid_not_initialized"
    OUT_OF_BOUNDS = "out_of_bounds"
    NO_PATH = "no_path_found"
    MAX_STEPS_EXHAUSTED = "max_steps_exhausted"


@dataclass
class PathfindingResult:
    """Structured result for a pathfinding attempt."""

    path: Optional[List[Coord]]
    success: bool
    reason: Optional[FailureReason] = None
    cost: Optional[int] = None
    expanded: int = 0
    search_id: Optional[str] = None  # correlation id on this search's events

    def to_dict(self) -> dict:
        return {
            "path": [list(cell) for cell in self.path] if self.path is not None else None,
            "success": self.success,
            "reason": self.reason.value if self.reason is not None else None,
            "cost": self.cost,
            "expanded": self.expanded,
            "search_id": self.search_id,
        }


def _failure(
    reason: FailureReason, search_id: str, expanded: int = 0
) -> PathfindingResult:
    return PathfindingResult(
        path=None, success=False, reason=reason, expanded=expanded, search_id=search_id
    )


def new_search_id() -> str:
    """Short random id grouping the events of one find_path call."""
    return uuid.uuid4().hex[:8]


class Pathfinder:
    """
    Single-threaded A* engine over one Grid.

    Not reentrant: refresh_walkability and find_path must not run
    concurrently against the same instance. allow_diagonal_movement may be
    toggled between searches; it is read once when a search starts.
    """

    def __init__(
        self,
        host_map: Optional[HostMap] = None,
        *,
        allow_diagonal_movement: bool = True,
        max_steps: Optional[int] = None,
        bus: Optional[EventBus] = None,
    ) -> None:
        if max_steps is not None and max_steps <= 0:
            raise ValueError(f"max_steps must be positive, got {max_steps}")
        self.host_map = host_map
        self.allow_diagonal_movement = allow_diagonal_movement
        self.max_steps = max_steps
        self._bus = bus
        self._grid: Optional[Grid] = None
        self._tile_exists_at: Optional[TileExistsFn] = None

    @property
    def grid(self) -> Optional[Grid]:
        return self._grid

    # ------------------------------------------------------------------
    # Grid lifecycle
    # ------------------------------------------------------------------

    def initialize_grid(
        self,
        bounds: Optional[GridBounds] = None,
        tile_exists_at: Optional[TileExistsFn] = None,
    ) -> bool:
        """
        (Re)build the Grid from map bounds and per-cell tile presence.

        Missing arguments are taken from host_map. On any configuration
        problem the engine is left without a grid and False is returned.
        """
        self._grid = None

        if bounds is None or tile_exists_at is None:
            if self.host_map is None:
                return self._init_failed("No host map attached and no bounds given")
            if bounds is None:
                bounds = self.host_map.cell_bounds()
            if tile_exists_at is None:
                tile_exists_at = self.host_map.has_tile

        if bounds is None:
            return self._init_failed("Host map has no tiles; grid not initialized")

        try:
            grid = Grid.build(bounds.width, bounds.height, bounds.origin, tile_exists_at)
        except GridConfigError as exc:
            return self._init_failed(str(exc))

        self._grid = grid
        self._tile_exists_at = tile_exists_at
        logger.info(
            "Pathfinding grid initialized. origin=%s size=(%d, %d)",
            grid.origin,
            grid.width,
            grid.height,
        )
        self._emit(
            EventType.GRID_INITIALIZED,
            "Pathfinding grid initialized",
            {"origin": list(grid.origin), "width": grid.width, "height": grid.height},
        )
        return True

    def _init_failed(self, message: str) -> bool:
        logger.warning("%s", message)
        self._emit(EventType.GRID_INIT_FAILED, message, {})
        return False

    def refresh_walkability(
        self,
        obstacles: Iterable[Sequence[int]],
        start: Sequence[int],
        end: Sequence[int],
    ) -> bool:
        """
        Reset every node and recompute walkability for the next search.

        A node is unwalkable when it is an obstacle, or when the host map has
        no tile there and it is neither start nor end. Start and end are then
        forced walkable regardless.
        """
        if self._grid is None:
            logger.warning("Grid is missing in refresh_walkability; initializing it first")
            if not self.initialize_grid():
                logger.error("Could not initialize the grid in refresh_walkability")
                return False

        grid = self._grid
        tile_exists_at = self._tile_exists_at
        if grid is None or tile_exists_at is None:
            return False

        blocked = {as_coord(cell) for cell in obstacles}
        endpoints = {as_coord(start), as_coord(end)}

        walkable_count = 0
        for node in grid.all_nodes():
            node.reset_costs()
            if node.position in blocked:
                node.walkable = False
            elif not tile_exists_at(node.position) and node.position not in endpoints:
                node.walkable = False
            else:
                node.walkable = True

            if node.position in endpoints:
                node.walkable = True

            if node.walkable:
                walkable_count += 1

        logger.info(
            "Walkable nodes updated from obstacles. walkable=%d blocked=%d",
            walkable_count,
            len(grid) - walkable_count,
        )
        self._emit(
            EventType.WALKABILITY_REFRESHED,
            "Walkable nodes updated",
            {
                "walkable": walkable_count,
                "blocked": len(grid) - walkable_count,
                "obstacles": len(blocked),
            },
        )
        return True

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def find_path(self, start: Sequence[int], end: Sequence[int]) -> PathfindingResult:
        """
        A* search from start to end on the current walkability.

        Returns a PathfindingResult with:
          - path: start..end inclusive, or None
          - success: bool
          - reason: FailureReason when not successful
          - search_id: correlation id carried by this search's events
        """
        search_id = new_search_id()
        grid = self._grid
        if grid is None:
            logger.error("Grid is not initialized; cannot search for a path")
            return self._not_found(
                _failure(FailureReason.GRID_NOT_INITIALIZED, search_id), start, end
            )

        start_node = grid.lookup(start)
        end_node = grid.lookup(end)
        if start_node is None or end_node is None:
            logger.error(
                "Start %s or end %s lies outside the grid bounds", tuple(start), tuple(end)
            )
            return self._not_found(_failure(FailureReason.OUT_OF_BOUNDS, search_id), start, end)

        if not start_node.walkable:
            logger.warning("Start node %s is not walkable", start_node.position)
        if not end_node.walkable:
            logger.warning("End node %s is not walkable", end_node.position)

        allow_diagonal = self.allow_diagonal_movement
        open_set = NodePriorityQueue()
        closed: Set[Coord] = set()

        start_node.g_cost = 0
        start_node.h_cost = octile_distance(start_node.position, end_node.position)
        start_node.parent = None
        open_set.insert(start_node)

        expanded = 0
        while open_set:
            if self.max_steps is not None and expanded >= self.max_steps:
                logger.warning(
                    "Search budget of %d steps exhausted before reaching %s",
                    self.max_steps,
                    end_node.position,
                )
                return self._not_found(
                    _failure(FailureReason.MAX_STEPS_EXHAUSTED, search_id, expanded), start, end
                )

            current = open_set.extract_min()
            expanded += 1

            if current is end_node:
                path = self._retrace_path(grid, start_node, end_node)
                result = PathfindingResult(
                    path=path,
                    success=True,
                    cost=int(end_node.g_cost),
                    expanded=expanded,
                    search_id=search_id,
                )
                logger.debug(
                    "Path found: %d cells, cost=%s, expanded=%d",
                    len(path),
                    result.cost,
                    expanded,
                )
                self._emit(
                    EventType.PATH_FOUND,
                    "Path found",
                    {
                        "start": list(start_node.position),
                        "end": list(end_node.position),
                        "length": len(path),
                        "cost": result.cost,
                        "expanded": expanded,
                    },
                    correlation_id=search_id,
                )
                return result

            closed.add(current.position)

            for neighbour in self.neighbours(current, allow_diagonal):
                if not neighbour.walkable or neighbour.position in closed:
                    continue

                tentative_g = current.g_cost + octile_distance(
                    current.position, neighbour.position
                )
                in_open = neighbour in open_set
                if tentative_g < neighbour.g_cost or not in_open:
                    neighbour.g_cost = tentative_g
                    neighbour.h_cost = octile_distance(neighbour.position, end_node.position)
                    neighbour.parent = current.position

                    if in_open:
                        open_set.decrease_key(neighbour)
                    else:
                        open_set.insert(neighbour)

        logger.warning(
            "No path found. start=%s end=%s", start_node.position, end_node.position
        )
        return self._not_found(_failure(FailureReason.NO_PATH, search_id, expanded), start, end)

    def neighbours(self, node: Node, allow_diagonal: Optional[bool] = None) -> List[Node]:
        """
        Candidate neighbors of a node, before walkability/closed filtering.

        Cardinal cells are always considered. A diagonal cell is admitted
        when at least one of the two cardinal cells it passes between is
        walkable or off the map. Cells off the map are skipped.
        """
        if self._grid is None:
            return []
        if allow_diagonal is None:
            allow_diagonal = self.allow_diagonal_movement

        x, y = node.position
        result: List[Node] = []

        for dx, dy in CARDINAL_OFFSETS:
            candidate = self._grid.lookup((x + dx, y + dy))
            if candidate is not None:
                result.append(candidate)

        if not allow_diagonal:
            return result

        for dx, dy in DIAGONAL_OFFSETS:
            candidate = self._grid.lookup((x + dx, y + dy))
            if candidate is None:
                continue

            horizontal = self._grid.lookup((x + dx, y))
            vertical = self._grid.lookup((x, y + dy))
            horizontal_open = horizontal is None or horizontal.walkable
            vertical_open = vertical is None or vertical.walkable

            # Either corner open is enough; only a fully blocked corner is refused.
            if horizontal_open or vertical_open:
                result.append(candidate)

        return result

    @staticmethod
    def _retrace_path(grid: Grid, start_node: Node, end_node: Node) -> List[Coord]:
        """Walk parent links from end back to start and return start..end."""
        path: List[Coord] = []
        current: Optional[Node] = end_node

        while current is not None and current is not start_node:
            path.append(current.position)
            current = grid.lookup(current.parent) if current.parent is not None else None

        if current is start_node:
            path.append(start_node.position)

        path.reverse()
        return path

    # ------------------------------------------------------------------
    # Monitoring
    # ------------------------------------------------------------------

    def _not_found(
        self,
        result: PathfindingResult,
        start: Sequence[int],
        end: Sequence[int],
    ) -> PathfindingResult:
        self._emit(
            EventType.PATH_NOT_FOUND,
            "Path not found",
            {
                "start": list(start),
                "end": list(end),
                "reason": result.reason.value if result.reason is not None else None,
                "expanded": result.expanded,
            },
            correlation_id=result.search_id,
        )
        return result

    def _emit(
        self,
        event_type: EventType,
        message: str,
        payload: dict,
        correlation_id: Optional[str] = None,
    ) -> None:
        if self._bus is None:
            return
        log_event(
            bus=self._bus,
            module=_MODULE,
            event_type=event_type,
            message=message,
            payload=payload,
            correlation_id=correlation_id,
        )
