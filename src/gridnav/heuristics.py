# octile distance used as heuristic and edge cost
# src/gridnav/heuristics.py
"""
Octile distance on an 8-connected grid.

A cardinal step costs 10 and a diagonal step 14 (10 * sqrt(2), rounded).
The same function is the A* heuristic and the exact cost between adjacent
cells, so it never overestimates and stays consistent across edges.
"""

from __future__ import annotations

from typing import Iterable

from .node import Coord

CARDINAL_COST = 10
DIAGONAL_COST = 14


def octile_distance(a: Coord, b: Coord) -> int:
    """Octile distance between two cells; the z layer is ignored."""
    dx = abs(a[0] - b[0])
    dy = abs(a[1] - b[1])
    if dx > dy:
        return DIAGONAL_COST * dy + CARDINAL_COST * (dx - dy)
    return DIAGONAL_COST * dx + CARDINAL_COST * (dy - dx)


def path_cost(path: Iterable[Coord]) -> int:
    """Sum of octile edge costs along consecutive cells of a path."""
    total = 0
    previous = None
    for cell in path:
        if previous is not None:
            total += octile_distance(previous, cell)
        previous = cell
    return total
