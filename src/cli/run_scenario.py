# src/cli/run_scenario.py
"""
Run A* on a YAML scenario and show the result.

    python -m cli.run_scenario config/scenarios/wall_detour.yaml
    python -m cli.run_scenario my_map.yaml --no-diagonal --json

Exit codes: 0 path found, 1 no path, 2 bad config/scenario.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from app.config import load_settings
from app.logging_config import configure_logging
from mapedit.render import render_panel
from mapedit.scenario import ScenarioError, load_scenario
from mapedit.session import MapEditorSession
from monitoring.bus import EventBus
from monitoring.logger import JsonFileLogger

logger = logging.getLogger(__name__)

EXIT_FOUND = 0
EXIT_NO_PATH = 1
EXIT_CONFIG_ERROR = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run A* grid pathfinding on a scenario file."
    )
    parser.add_argument("scenario", type=Path, help="Scenario YAML file")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Settings YAML (default: config/pathfinding.yaml)",
    )
    diagonal = parser.add_mutually_exclusive_group()
    diagonal.add_argument(
        "--diagonal",
        dest="diagonal",
        action="store_true",
        default=None,
        help="Allow diagonal moves",
    )
    diagonal.add_argument(
        "--no-diagonal",
        dest="diagonal",
        action="store_false",
        help="Cardinal moves only",
    )
    parser.set_defaults(diagonal=None)
    parser.add_argument("--max-steps", type=int, default=None, help="Search step budget")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--event-log", type=Path, default=None, help="JSONL monitoring log")
    parser.add_argument("--log-level", default=None, help="Logging level (e.g. INFO, DEBUG)")
    return parser


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()

    try:
        settings = load_settings(args.config)
        configure_logging(args.log_level or settings.log_level)
        scenario = load_scenario(
            args.scenario,
            default_size=(settings.default_width, settings.default_height),
        )
    except (OSError, ValueError) as exc:
        console.print(f"[bold red]Configuration error:[/bold red] {exc}")
        return EXIT_CONFIG_ERROR

    allow_diagonal = settings.allow_diagonal_movement
    if args.diagonal is not None:
        allow_diagonal = args.diagonal
        # An explicit flag beats the scenario file too.
        scenario.allow_diagonal_movement = args.diagonal

    max_steps = args.max_steps if args.max_steps is not None else settings.max_steps
    if max_steps is not None and max_steps <= 0:
        console.print("[bold red]Configuration error:[/bold red] --max-steps must be positive")
        return EXIT_CONFIG_ERROR

    bus = EventBus()
    event_log = args.event_log or (
        Path(settings.event_log_path) if settings.event_log_path else None
    )
    sink: Optional[JsonFileLogger] = None
    if event_log is not None:
        try:
            sink = JsonFileLogger(event_log, bus)
        except OSError as exc:
            console.print(f"[bold red]Configuration error:[/bold red] cannot open event log: {exc}")
            return EXIT_CONFIG_ERROR

    try:
        try:
            session = MapEditorSession.from_scenario(
                scenario,
                allow_diagonal_movement=allow_diagonal,
                max_steps=max_steps,
                bus=bus,
            )
        except ScenarioError as exc:
            console.print(f"[bold red]Scenario error:[/bold red] {exc}")
            return EXIT_CONFIG_ERROR

        result = session.run()
    finally:
        if sink is not None:
            sink.close()

    if result is None:
        return EXIT_CONFIG_ERROR

    if args.json:
        console.print_json(json.dumps(result.to_dict()))
    else:
        console.print(
            render_panel(session.tilemap, title=scenario.name, bounds=session.bounds)
        )
        if result.success:
            console.print(
                f"[bold green]Path found[/bold green]: {len(result.path or [])} cells, "
                f"cost {result.cost}, expanded {result.expanded}"
            )
        else:
            reason = result.reason.value if result.reason is not None else "unknown"
            console.print(f"[bold yellow]No path[/bold yellow] ({reason})")

    return EXIT_FOUND if result.success else EXIT_NO_PATH


def run() -> None:
    """Console-script entry point."""
    raise SystemExit(main())


if __name__ == "__main__":
    run()
