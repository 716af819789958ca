# rich text view of a tile map
# src/mapedit/render.py
"""
Terminal rendering of a TileMap using `rich`.

Rows are printed top-down (highest y first) so the picture matches a
y-up map. Legend:

    .  default tile       #  obstacle
    S  start              E  end
    *  path               (space) no tile
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional, Tuple

from rich.panel import Panel
from rich.text import Text

from gridnav.grid import GridBounds
from gridnav.node import Coord

from .tilemap import TileKind, TileMap

_GLYPHS: Dict[Optional[TileKind], Tuple[str, str]] = {
    TileKind.DEFAULT: (".", "dim"),
    TileKind.OBSTACLE: ("#", "bold red"),
    TileKind.START: ("S", "bold green"),
    TileKind.END: ("E", "bold magenta"),
    TileKind.PATH: ("*", "bold cyan"),
    None: (" ", ""),
}


def render_tilemap(
    tilemap: TileMap,
    path: Optional[Iterable[Coord]] = None,
    bounds: Optional[GridBounds] = None,
) -> Text:
    """
    Render a TileMap as styled text.

    `path` cells are drawn as path markers on top of default tiles even if
    the map has not been painted. `bounds` defaults to the map's own extent.
    """
    bounds = bounds or tilemap.cell_bounds()
    text = Text()
    if bounds is None:
        text.append("<empty map>", style="italic")
        return text

    path_cells = set(path or ())
    ox, oy = bounds.origin
    for y in range(bounds.max_y, oy - 1, -1):
        for x in range(ox, bounds.max_x + 1):
            kind = tilemap.get_tile((x, y))
            if (x, y) in path_cells and kind in (TileKind.DEFAULT, None):
                kind = TileKind.PATH
            glyph, style = _GLYPHS[kind]
            text.append(glyph, style=style)
        if y != oy:
            text.append("\n")
    return text


def render_panel(
    tilemap: TileMap,
    path: Optional[Iterable[Coord]] = None,
    title: str = "Map",
    bounds: Optional[GridBounds] = None,
) -> Panel:
    """Wrap render_tilemap in a bordered panel for Console output."""
    return Panel(render_tilemap(tilemap, path, bounds), title=title, border_style="cyan", expand=False)
