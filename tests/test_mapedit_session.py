"""
Tests for mapedit.session.MapEditorSession and mapedit.tilemap.TileMap.

Covers:
- map generation and rejection of bad sizes
- start/end/obstacle placement rules
- run(): walkability refresh, path painting, repeated runs
- scenario wiring and monitoring events
"""

from __future__ import annotations

import pytest

from gridnav import FailureReason, GridBounds
from mapedit import (
    MapEditorSession,
    PlacementMode,
    Scenario,
    ScenarioError,
    TileKind,
    TileMap,
)
from monitoring.events import EventType


def make_session(width: int = 5, height: int = 5, **kwargs) -> MapEditorSession:
    session = MapEditorSession(**kwargs)
    assert session.generate_map(width, height)
    return session


def place(session: MapEditorSession, mode: PlacementMode, cell) -> bool:
    session.set_mode(mode)
    return session.place(cell)


# ---------------------------------------------------------------------------
# TileMap
# ---------------------------------------------------------------------------


def test_tilemap_bounds_follow_placed_tiles() -> None:
    tiles = TileMap()
    assert tiles.cell_bounds() is None

    tiles.set_tile((2, -1), TileKind.DEFAULT)
    tiles.set_tile((4, 3), TileKind.OBSTACLE)

    assert tiles.cell_bounds() == GridBounds(origin=(2, -1), width=3, height=5)
    assert tiles.has_tile((4, 3))
    assert (4, 3, 0) in tiles
    assert tiles.get_tile((3, 3)) is None

    tiles.remove_tile((4, 3))
    tiles.remove_tile((9, 9))
    assert tiles.cell_bounds() == GridBounds(origin=(2, -1), width=1, height=1)


def test_tilemap_fill_and_clear() -> None:
    tiles = TileMap()
    tiles.fill(3, 2, origin=(1, 1))

    assert len(tiles) == 6
    assert tiles.get_tile((3, 2)) is TileKind.DEFAULT

    tiles.clear_all_tiles()
    assert len(tiles) == 0


# ---------------------------------------------------------------------------
# Map generation
# ---------------------------------------------------------------------------


def test_generate_map_fills_tiles_and_builds_grid() -> None:
    session = make_session(4, 3)

    assert len(session.tilemap) == 12
    assert session.bounds == GridBounds(origin=(0, 0), width=4, height=3)
    assert session.pathfinder.grid is not None
    assert session.pathfinder.grid.width == 4
    assert session.mode is PlacementMode.NONE


@pytest.mark.parametrize("width,height", [(0, 5), (5, -2)])
def test_generate_map_rejects_bad_sizes_and_keeps_previous_map(width, height) -> None:
    session = make_session(3, 3)
    place(session, PlacementMode.PLACING_START, (0, 0))

    assert session.generate_map(width, height) is False
    assert len(session.tilemap) == 9
    assert session.start == (0, 0)


def test_generate_map_resets_previous_state() -> None:
    session = make_session(3, 3)
    place(session, PlacementMode.PLACING_START, (0, 0))
    place(session, PlacementMode.PLACING_END, (2, 2))
    place(session, PlacementMode.PLACING_OBSTACLE, (1, 1))
    session.run()

    session.generate_map(2, 2)

    assert session.start is None
    assert session.end is None
    assert session.obstacles == set()
    assert session.current_path is None
    assert len(session.tilemap) == 4


# ---------------------------------------------------------------------------
# Placement
# ---------------------------------------------------------------------------


def test_place_is_ignored_without_a_mode() -> None:
    session = make_session()

    assert session.place((1, 1)) is False
    assert session.tilemap.get_tile((1, 1)) is TileKind.DEFAULT


def test_place_outside_map_is_rejected() -> None:
    session = make_session(3, 3)

    assert place(session, PlacementMode.PLACING_START, (5, 5)) is False
    assert session.start is None


def test_moving_start_restores_previous_cell() -> None:
    session = make_session()
    place(session, PlacementMode.PLACING_START, (0, 0))
    session.place((1, 0))

    assert session.start == (1, 0)
    assert session.tilemap.get_tile((0, 0)) is TileKind.DEFAULT
    assert session.tilemap.get_tile((1, 0)) is TileKind.START


def test_obstacle_toggles_and_refuses_endpoints() -> None:
    session = make_session()
    place(session, PlacementMode.PLACING_START, (0, 0))
    place(session, PlacementMode.PLACING_END, (4, 4))

    session.set_mode(PlacementMode.PLACING_OBSTACLE)
    assert session.place((2, 2)) is True
    assert (2, 2) in session.obstacles
    assert session.tilemap.get_tile((2, 2)) is TileKind.OBSTACLE

    assert session.place((2, 2)) is True
    assert (2, 2) not in session.obstacles
    assert session.tilemap.get_tile((2, 2)) is TileKind.DEFAULT

    assert session.place((0, 0)) is False
    assert session.place((4, 4)) is False
    assert session.obstacles == set()


def test_placing_endpoint_on_obstacle_clears_it() -> None:
    session = make_session()
    place(session, PlacementMode.PLACING_OBSTACLE, (3, 3))
    place(session, PlacementMode.PLACING_END, (3, 3))

    assert (3, 3) not in session.obstacles
    assert session.tilemap.get_tile((3, 3)) is TileKind.END


# ---------------------------------------------------------------------------
# Running searches
# ---------------------------------------------------------------------------


def test_run_requires_both_endpoints() -> None:
    session = make_session()
    place(session, PlacementMode.PLACING_START, (0, 0))

    assert session.run() is None


def test_run_paints_interior_path_cells() -> None:
    session = make_session()
    place(session, PlacementMode.PLACING_START, (0, 0))
    place(session, PlacementMode.PLACING_END, (4, 4))
    session.set_mode(PlacementMode.PLACING_OBSTACLE)

    result = session.run()

    assert result is not None and result.success
    assert result.cost == 56
    assert session.current_path == [(0, 0), (1, 1), (2, 2), (3, 3), (4, 4)]
    for cell in [(1, 1), (2, 2), (3, 3)]:
        assert session.tilemap.get_tile(cell) is TileKind.PATH
    assert session.tilemap.get_tile((0, 0)) is TileKind.START
    assert session.tilemap.get_tile((4, 4)) is TileKind.END
    assert session.mode is PlacementMode.NONE


def test_rerun_clears_previous_path_before_painting() -> None:
    session = make_session()
    place(session, PlacementMode.PLACING_START, (0, 0))
    place(session, PlacementMode.PLACING_END, (4, 4))
    session.run()

    place(session, PlacementMode.PLACING_OBSTACLE, (2, 2))
    result = session.run()

    assert result.success
    assert (2, 2) not in result.path
    assert session.tilemap.get_tile((2, 2)) is TileKind.OBSTACLE
    painted = {cell for cell, kind in session.tilemap.items() if kind is TileKind.PATH}
    assert painted == set(result.path[1:-1])


def test_clear_displayed_path_restores_default_tiles() -> None:
    session = make_session()
    place(session, PlacementMode.PLACING_START, (0, 0))
    place(session, PlacementMode.PLACING_END, (4, 0))
    session.run()

    session.clear_displayed_path()

    assert session.current_path is None
    assert all(kind is not TileKind.PATH for _, kind in session.tilemap.items())


def test_run_reports_blocked_map() -> None:
    session = make_session(5, 1)
    place(session, PlacementMode.PLACING_START, (0, 0))
    place(session, PlacementMode.PLACING_END, (4, 0))
    place(session, PlacementMode.PLACING_OBSTACLE, (2, 0))

    result = session.run()

    assert result.reason is FailureReason.NO_PATH
    assert session.current_path is None


def test_diagonal_toggle_forwards_to_pathfinder() -> None:
    session = make_session()
    place(session, PlacementMode.PLACING_START, (0, 0))
    place(session, PlacementMode.PLACING_END, (4, 4))

    session.allow_diagonal_movement = False
    assert session.pathfinder.allow_diagonal_movement is False
    assert session.run().cost == 80


# ---------------------------------------------------------------------------
# Scenarios and events
# ---------------------------------------------------------------------------


def test_from_scenario_applies_holes_obstacles_and_diagonal_flag() -> None:
    scenario = Scenario(
        width=4,
        height=3,
        start=(0, 0),
        end=(3, 0),
        obstacles=[(1, 0), (1, 1)],
        holes=[(2, 1)],
        allow_diagonal_movement=False,
    )

    session = MapEditorSession.from_scenario(scenario, allow_diagonal_movement=True)

    assert session.allow_diagonal_movement is False
    assert session.obstacles == {(1, 0), (1, 1)}
    assert not session.tilemap.has_tile((2, 1))

    result = session.run()
    assert result.success
    assert (2, 1) not in result.path
    assert result.path == [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2), (3, 2), (3, 1), (3, 0)]


def test_from_scenario_rejects_endpoints_outside_map() -> None:
    scenario = Scenario(width=3, height=3, start=(0, 0), end=(7, 7))

    with pytest.raises(ScenarioError):
        MapEditorSession.from_scenario(scenario)


def test_session_publishes_editor_events(recorded_events) -> None:
    bus, received = recorded_events
    session = MapEditorSession(bus=bus)
    session.generate_map(3, 3)
    place(session, PlacementMode.PLACING_START, (0, 0))

    kinds = [evt.event_type for evt in received]
    assert EventType.MAP_GENERATED in kinds
    assert EventType.GRID_INITIALIZED in kinds
    assert kinds[-1] is EventType.PLACEMENT_CHANGED
    assert received[-1].payload == {"mode": "PLACING_START", "cell": [0, 0]}


def test_from_scenario_rejects_obstacles_outside_map() -> None:
    scenario = Scenario(width=3, height=3, start=(0, 0), end=(2, 2), obstacles=[(1, 1), (8, 0)])

    with pytest.raises(ScenarioError):
        MapEditorSession.from_scenario(scenario)
