#!/usr/bin/env python3
"""
Factory Planner - Main Entry Point

Inspect the sample catalog, a demo layout and belt routes from the command line.
"""

import argparse
import logging
import sys

from factory_planner.config import POWER_RANGE


def run_catalog():
    """List the sample blueprints and recipes."""
    from factory_planner.data.sample_data import PYLON_BLUEPRINT, SAMPLE_BLUEPRINTS, SAMPLE_RECIPES

    print("Machines:")
    print()
    for bp in SAMPLE_BLUEPRINTS + [PYLON_BLUEPRINT]:
        print(f"  {bp.id:18s} - {bp.width}x{bp.height}, "
              f"{len(bp.input_ports)} in / {len(bp.output_ports)} out, "
              f"{bp.power_consumption:g} kW")
    print()
    print("Recipes:")
    print()
    for recipe in SAMPLE_RECIPES:
        inputs = ", ".join(f"{io.amount:g} {io.item_id}" for io in recipe.inputs) or "-"
        outputs = ", ".join(f"{io.amount:g} {io.item_id}" for io in recipe.outputs) or "-"
        print(f"  {recipe.id:22s} [{recipe.machine_type}] {recipe.duration:g}s: "
              f"{inputs} -> {outputs}")
    return 0


def run_demo(args):
    """Build the demo layout and print its report."""
    from factory_planner.config import PlannerConfig
    from factory_planner.data.sample_data import create_demo_layout
    from factory_planner.visualization.layout_display import LayoutDisplay

    layout = create_demo_layout()
    config = PlannerConfig(power_range=args.power_range)
    print(LayoutDisplay(layout, config).report())
    return 0


def _parse_port(spec):
    """Parse ``x,y,D`` into ((x, y), Direction)."""
    from factory_planner.blueprint.building_types import Direction

    parts = [p.strip() for p in spec.split(',')]
    if len(parts) != 3:
        raise ValueError(f"Invalid port spec '{spec}'. Format: X,Y,Dir")
    return (int(parts[0]), int(parts[1])), Direction(parts[2].upper())


def run_route(args):
    """Route one belt between two port cells."""
    from factory_planner.blueprint.router import route_belt

    try:
        start, start_dir = _parse_port(args.start)
        end, end_dir = _parse_port(args.end)
        obstacles = {_parse_cell(c) for c in args.block} if args.block else None
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    result = route_belt(start, start_dir, end, end_dir, obstacles=obstacles)

    print("=" * 60)
    print("  Belt Route")
    print("=" * 60)
    print(f"From: {start} facing {start_dir.label}")
    print(f"To:   {end} facing {end_dir.label}")
    if result.used_astar:
        print(f"A* nodes explored: {result.nodes_explored}")
    print("Path: " + " ".join(f"({p.x:g},{p.y:g})" for p in result.points))

    if not result.success:
        print("\n✗ No clear route, showing direct path")
        return 1
    print(f"\n✓ Route found ({len(result.cells)} belt cells)")
    return 0


def _parse_cell(spec):
    parts = spec.split(',')
    if len(parts) != 2:
        raise ValueError(f"Invalid cell '{spec}'. Format: X,Y")
    return int(parts[0]), int(parts[1])


def build_parser():
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Factory Planner - placement, belts, power and throughput"
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)"
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    subparsers.add_parser("catalog", help="List sample machines and recipes")

    demo_parser = subparsers.add_parser("demo", help="Show the demo layout report")
    demo_parser.add_argument(
        "-r", "--power-range",
        type=int,
        default=POWER_RANGE,
        help=f"Pylon power range in cells (default: {POWER_RANGE})"
    )

    route_parser = subparsers.add_parser("route", help="Route a belt between two ports")
    route_parser.add_argument("start", help="Source port: X,Y,Dir (e.g., 0,0,E)")
    route_parser.add_argument("end", help="Target port: X,Y,Dir (e.g., 6,0,W)")
    route_parser.add_argument(
        "-b", "--block",
        action="append",
        help="Blocked cell X,Y (repeatable; enables obstacle avoidance)"
    )

    return parser


def main(argv=None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == "catalog":
        return run_catalog()
    elif args.command == "demo":
        return run_demo(args)
    elif args.command == "route":
        return run_route(args)

    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
