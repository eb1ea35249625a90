"""Command line entry point rendering a destination body in the terminal."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Sequence

from loguru import logger
from rich.console import Console

from .config_store import load_universe_config
from .ui.render import pattern_text, planet_panel, scan_table
from .world.config import format_coordinate
from .world.map import ChunkManager, Destination


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xeil", description="Jump to a named body and print its picture and scan."
    )
    parser.add_argument("name", nargs="?", help="destination name, e.g. Mao")
    parser.add_argument(
        "--at",
        nargs=2,
        type=float,
        metavar=("X", "Y"),
        default=None,
        help="world position (a coordinate destination when no name is given)",
    )
    parser.add_argument("--phase", type=float, default=0.0, help="animation phase of the patterns")
    parser.add_argument("--moons", action="store_true", help="also render every moon")
    parser.add_argument(
        "--json", action="store_true", help="print the planet and scan records as JSON"
    )
    parser.add_argument("--config", type=Path, default=None, help="universe configuration file")
    parser.add_argument("-v", "--verbose", action="store_true", help="log generation details")
    return parser


def _jump(manager: ChunkManager, args: argparse.Namespace) -> Destination:
    x, y = args.at if args.at is not None else (0.0, 0.0)
    if args.name:
        return manager.request_named_destination(args.name, x, y, phase=args.phase)
    return manager.request_coordinate_destination(x, y, phase=args.phase)


def main(argv: Sequence[str] | None = None) -> int:
    """Render the requested destination; return the process exit code."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.name and args.at is None:
        parser.error("give a destination name or --at X Y")

    if args.verbose:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG")
        logger.enable("xeil")

    console = Console()
    manager = ChunkManager(load_universe_config(args.config))
    try:
        destination = _jump(manager, args)
    except ValueError as exc:
        console.print(f"[red]error:[/red] {exc}")
        return 2

    planet = destination.planet
    if args.json:
        payload: dict[str, Any] = {
            "planet": planet.to_dict(),
            "scan": manager.scan_data(planet).to_dict(),
        }
        if args.moons:
            payload["moons"] = {
                moon.identifier: manager.scan_data(moon).to_dict() for moon in planet.moons
            }
        console.print_json(data=payload)
        return 0

    console.print(planet_panel(planet, manager.scan_data(planet)))
    if args.moons:
        for moon in planet.moons:
            console.print(moon.identifier, style="bold")
            console.print(pattern_text(moon.pattern))
            console.print(scan_table(manager.scan_data(moon)))
    console.print(
        f"{len(manager.planets)} planets and {len(manager.stars)} stars around "
        f"({format_coordinate(destination.target_x)}, {format_coordinate(destination.target_y)})"
    )
    return 0


if __name__ == "__main__":  # pragma: no cover - module entry point
    raise SystemExit(main())
