# sparse in-memory tile map
# src/mapedit/tilemap.py
"""
TileMap: sparse cell -> TileKind storage for the map editor.

The pathfinder only asks two things of it: the bounding box of placed
tiles and whether a tile exists at a cell. Everything else is editor
bookkeeping (which cells show start/end/obstacle/path markers).
"""

from __future__ import annotations

from enum import Enum
from typing import Dict, Iterator, Optional, Sequence, Tuple

from gridnav.grid import GridBounds
from gridnav.node import Coord, as_coord


class TileKind(Enum):
    DEFAULT = "default"
    START = "start"
    END = "end"
    OBSTACLE = "obstacle"
    PATH = "path"


class TileMap:
    """Sparse tile storage; cells without an entry have no tile."""

    def __init__(self) -> None:
        self._tiles: Dict[Coord, TileKind] = {}

    def __len__(self) -> int:
        return len(self._tiles)

    def __contains__(self, coord: Sequence[int]) -> bool:
        return self.has_tile(coord)

    def items(self) -> Iterator[Tuple[Coord, TileKind]]:
        return iter(self._tiles.items())

    def set_tile(self, coord: Sequence[int], kind: TileKind) -> None:
        self._tiles[as_coord(coord)] = kind

    def get_tile(self, coord: Sequence[int]) -> Optional[TileKind]:
        return self._tiles.get(as_coord(coord))

    def has_tile(self, coord: Sequence[int]) -> bool:
        return as_coord(coord) in self._tiles

    def remove_tile(self, coord: Sequence[int]) -> None:
        self._tiles.pop(as_coord(coord), None)

    def clear_all_tiles(self) -> None:
        self._tiles.clear()

    def fill(
        self,
        width: int,
        height: int,
        kind: TileKind = TileKind.DEFAULT,
        origin: Sequence[int] = (0, 0),
    ) -> None:
        """Place `kind` on every cell of a width x height block."""
        ox, oy = as_coord(origin)
        for x in range(ox, ox + width):
            for y in range(oy, oy + height):
                self._tiles[(x, y)] = kind

    def cell_bounds(self) -> Optional[GridBounds]:
        """Tight bounding box of all placed tiles, or None when empty."""
        if not self._tiles:
            return None
        xs = [x for x, _ in self._tiles]
        ys = [y for _, y in self._tiles]
        min_x, min_y = min(xs), min(ys)
        return GridBounds(
            origin=(min_x, min_y),
            width=max(xs) - min_x + 1,
            height=max(ys) - min_y + 1,
        )
