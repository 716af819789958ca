# per-cell search state
# src/gridnav/node.py
"""
Node: per-cell A* state owned by a Grid.

Coordinates are plain (x, y) integer tuples. Hosts that work with layered
cells may pass (x, y, z); the layer is dropped on the way in and never
takes part in identity or distance math.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

# (x, y) integer cell coordinates
Coord = Tuple[int, int]

# g_cost of a node that has not been reached in the current search.
INFINITE_COST = math.inf


def as_coord(value: Sequence[int]) -> Coord:
    """
    Normalize an (x, y) or (x, y, z) sequence into a Coord.

    Raises ValueError for anything shorter than two components.
    """
    if len(value) < 2:
        raise ValueError(f"Cell coordinate needs at least x and y, got {value!r}")
    return int(value[0]), int(value[1])


@dataclass(eq=False)
class Node:
    """
    Search state for a single grid cell.

    - position: fixed cell coordinate
    - walkable: set by Pathfinder.refresh_walkability only
    - g_cost: best known cost from the start cell
    - h_cost: heuristic estimate to the current goal
    - parent: coordinate of the predecessor on the best known path

    f_cost is derived on every read so it can never go stale.
    """

    position: Coord
    walkable: bool = True
    g_cost: float = INFINITE_COST
    h_cost: float = 0
    parent: Optional[Coord] = None

    @property
    def f_cost(self) -> float:
        return self.g_cost + self.h_cost

    def reset_costs(self) -> None:
        """Clear everything a previous search wrote into this node."""
        self.g_cost = INFINITE_COST
        self.h_cost = 0
        self.parent = None

    def __repr__(self) -> str:
        return (
            f"Node(position={self.position}, walkable={self.walkable}, "
            f"g={self.g_cost}, h={self.h_cost})"
        )
