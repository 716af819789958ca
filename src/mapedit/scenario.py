# YAML scenario files
# src/mapedit/scenario.py
"""
Scenario: a map plus endpoints and obstacles, loaded from YAML.

Example file:

    width: 5               # optional when a default size is supplied
    height: 5
    origin: [0, 0]          # optional
    holes: [[2, 2]]         # optional, cells with no tile
    start: [0, 0]
    end: [4, 4]
    obstacles:
      - [1, 1]
      - [3, 2]
    allow_diagonal_movement: true   # optional
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from gridnav.node import Coord


class ScenarioError(ValueError):
    """Raised when a scenario file is malformed."""


@dataclass
class Scenario:
    width: int
    height: int
    start: Coord
    end: Coord
    origin: Coord = (0, 0)
    obstacles: List[Coord] = field(default_factory=list)
    holes: List[Coord] = field(default_factory=list)
    allow_diagonal_movement: Optional[bool] = None
    name: str = "scenario"

    @classmethod
    def from_dict(
        cls,
        data: Dict[str, Any],
        name: str = "scenario",
        default_size: Optional[Tuple[int, int]] = None,
    ) -> "Scenario":
        """
        Build and validate a Scenario from a plain mapping (e.g. YAML).

        width and height fall back to default_size when it is given.
        """
        required = ["start", "end"]
        if default_size is None:
            required = ["width", "height"] + required
        for key in required:
            if key not in data:
                raise ScenarioError(f"Scenario '{name}' is missing required key '{key}'")

        default_width, default_height = default_size or (None, None)
        width = _positive_int(data.get("width", default_width), "width", name)
        height = _positive_int(data.get("height", default_height), "height", name)

        diagonal = data.get("allow_diagonal_movement")
        if diagonal is not None and not isinstance(diagonal, bool):
            raise ScenarioError(
                f"Scenario '{name}': allow_diagonal_movement must be a boolean"
            )

        return cls(
            width=width,
            height=height,
            start=_cell(data["start"], "start", name),
            end=_cell(data["end"], "end", name),
            origin=_cell(data.get("origin", (0, 0)), "origin", name),
            obstacles=[_cell(c, "obstacles", name) for c in data.get("obstacles") or []],
            holes=[_cell(c, "holes", name) for c in data.get("holes") or []],
            allow_diagonal_movement=diagonal,
            name=str(data.get("name", name)),
        )


def _positive_int(value: Any, key: str, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ScenarioError(f"Scenario '{name}': {key} must be a positive integer, got {value!r}")
    return value


def _cell(value: Any, key: str, name: str) -> Coord:
    if (
        not isinstance(value, (list, tuple))
        or len(value) not in (2, 3)
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        raise ScenarioError(
            f"Scenario '{name}': {key} entries must be [x, y] integer pairs, got {value!r}"
        )
    return int(value[0]), int(value[1])


def load_scenario(path: Path, default_size: Optional[Tuple[int, int]] = None) -> Scenario:
    """Load a scenario YAML file; see Scenario.from_dict for default_size."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Missing scenario file: {path}")
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ScenarioError(f"Expected mapping at top of {path}, got {type(data).__name__}")
    return Scenario.from_dict(data, name=path.stem, default_size=default_size)
