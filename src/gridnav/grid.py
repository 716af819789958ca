# fixed-size node storage with origin offset
# src/gridnav/grid.py
"""
Grid: fixed-shape 2D array of Nodes anchored at an origin cell.

This module does not know about tiles or obstacles. It only:
- Allocates one Node per cell in [origin, origin + size).
- Seeds initial walkability from a caller-supplied predicate.
- Answers O(1) coordinate lookups, returning None off the map.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional, Sequence

from .node import Coord, Node, as_coord

# Signature for a walkability seed callback:
#   is_walkable((x, y)) -> bool
WalkableFn = Callable[[Coord], bool]


class GridConfigError(ValueError):
    """Raised when a grid cannot be built from the given bounds."""


@dataclass(frozen=True)
class GridBounds:
    """Rectangular cell extent: origin plus width/height in cells."""

    origin: Coord
    width: int
    height: int

    @property
    def max_x(self) -> int:
        return self.origin[0] + self.width - 1

    @property
    def max_y(self) -> int:
        return self.origin[1] + self.height - 1

    @property
    def size(self) -> int:
        return self.width * self.height

    def contains(self, coord: Sequence[int]) -> bool:
        x, y = as_coord(coord)
        return (
            self.origin[0] <= x <= self.max_x
            and self.origin[1] <= y <= self.max_y
        )


class Grid:
    """
    Node storage for one generated map.

    Built once per map and reused across searches; searches only mutate
    the Nodes, never the shape.
    """

    def __init__(self, bounds: GridBounds, columns: List[List[Node]]) -> None:
        self._bounds = bounds
        # columns[ix][iy], ix/iy relative to origin
        self._columns = columns

    @classmethod
    def build(
        cls,
        width: int,
        height: int,
        origin: Sequence[int],
        is_walkable: WalkableFn,
    ) -> "Grid":
        """
        Allocate width x height Nodes and seed walkability.

        The predicate is queried exactly once per cell. Raises GridConfigError
        for non-positive sizes so no half-built grid ever escapes.
        """
        if width <= 0 or height <= 0:
            raise GridConfigError(
                f"Grid size must be positive, got width={width}, height={height}"
            )

        ox, oy = as_coord(origin)
        columns: List[List[Node]] = []
        for ix in range(width):
            column: List[Node] = []
            for iy in range(height):
                cell = (ox + ix, oy + iy)
                column.append(Node(position=cell, walkable=bool(is_walkable(cell))))
            columns.append(column)

        return cls(GridBounds(origin=(ox, oy), width=width, height=height), columns)

    # ------------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------------

    @property
    def bounds(self) -> GridBounds:
        return self._bounds

    @property
    def origin(self) -> Coord:
        return self._bounds.origin

    @property
    def width(self) -> int:
        return self._bounds.width

    @property
    def height(self) -> int:
        return self._bounds.height

    def __len__(self) -> int:
        return self._bounds.size

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def lookup(self, coord: Sequence[int]) -> Optional[Node]:
        """
        Return the Node at a world coordinate, or None outside the grid.

        Callers treat None as "no neighbor / off the map", never as a fault.
        """
        x, y = as_coord(coord)
        ix = x - self._bounds.origin[0]
        iy = y - self._bounds.origin[1]
        if 0 <= ix < self._bounds.width and 0 <= iy < self._bounds.height:
            return self._columns[ix][iy]
        return None

    def all_nodes(self) -> Iterator[Node]:
        """Yield every Node, column by column (x outer, y inner)."""
        for column in self._columns:
            yield from column

    def __iter__(self) -> Iterator[Node]:
        return self.all_nodes()
