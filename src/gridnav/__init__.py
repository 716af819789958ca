# gridnav package
# src/gridnav/__init__.py
"""
Grid navigation core.

Provides:
- Node / Coord: per-cell search state and cell coordinates
- Grid / GridBounds: fixed-shape node storage with origin offset
- NodePriorityQueue: indexed binary min-heap used as the A* open set
- octile_distance: heuristic and edge cost
- Pathfinder: initialize_grid / refresh_walkability / find_path
"""

from __future__ import annotations

from .grid import Grid, GridBounds, GridConfigError
from .heuristics import CARDINAL_COST, DIAGONAL_COST, octile_distance, path_cost
from .node import INFINITE_COST, Coord, Node, as_coord
from .open_set import NodePriorityQueue
from .pathfinder import FailureReason, HostMap, Pathfinder, PathfindingResult

__all__ = [
    "CARDINAL_COST",
    "DIAGONAL_COST",
    "INFINITE_COST",
    "Coord",
    "FailureReason",
    "Grid",
    "GridBounds",
    "GridConfigError",
    "HostMap",
    "Node",
    "NodePriorityQueue",
    "Pathfinder",
    "PathfindingResult",
    "as_coord",
    "octile_distance",
    "path_cost",
]
