"""
Tests for gridnav.heuristics (octile distance and path cost).
"""

from __future__ import annotations

import pytest

from gridnav import CARDINAL_COST, DIAGONAL_COST, octile_distance, path_cost


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ((0, 0), (0, 0), 0),
        ((0, 0), (1, 0), 10),
        ((0, 0), (0, -1), 10),
        ((0, 0), (1, 1), 14),
        ((0, 0), (3, 0), 30),
        ((0, 0), (4, 4), 56),
        ((0, 0), (5, 2), 58),
        ((-2, 7), (1, 3), 14 * 3 + 10 * 1),
    ],
)
def test_octile_distance_values(a, b, expected) -> None:
    assert octile_distance(a, b) == expected
    assert octile_distance(b, a) == expected


def test_adjacent_cells_cost_one_step() -> None:
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx == dy == 0:
                continue
            expected = DIAGONAL_COST if dx and dy else CARDINAL_COST
            assert octile_distance((5, 5), (5 + dx, 5 + dy)) == expected


def test_triangle_inequality_on_small_window() -> None:
    cells = [(x, y) for x in range(-2, 3) for y in range(-2, 3)]
    for a in cells:
        for b in cells:
            for c in cells:
                assert octile_distance(a, c) <= octile_distance(a, b) + octile_distance(b, c)


def test_path_cost_sums_edges() -> None:
    assert path_cost([]) == 0
    assert path_cost([(0, 0)]) == 0
    assert path_cost([(0, 0), (1, 1), (2, 1), (2, 2)]) == 14 + 10 + 10
