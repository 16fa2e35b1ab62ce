"""
1) Load people and relationships from a GEDCOM or JSON file.
2) Build the family graph and assign generations.
3) Validate the data for cycles, impossible ages and split couples.
4) Compute the layout and write it as JSON.
5) Optionally write a preview image and a Graphviz DOT file.
"""

import argparse
import json
import logging
from pathlib import Path
import sys

from graph import assign_generations, build_graph
from layout import compute_layout
from models import DEFAULT_LAYOUT_CONFIG
from parsing import load_input
from plotting import plot_layout, write_dot
from validation import validate_config, validate_graph

MAX_WARNINGS_SHOWN = 10


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Compute a family tree layout.")
    parser.add_argument("input", type=Path, help="GEDCOM (.ged) or JSON input file.")
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("layout.json"),
        help="Path to the layout JSON (default: layout.json).",
    )
    parser.add_argument("--root", help="Person id to place at generation 0.")
    parser.add_argument("--node-width", type=float)
    parser.add_argument("--node-height", type=float)
    parser.add_argument("--horizontal-spacing", type=float)
    parser.add_argument("--vertical-spacing", type=float)
    parser.add_argument("--plot", type=Path, help="Write a preview image (.png, .svg, .pdf).")
    parser.add_argument("--dot", type=Path, help="Write a Graphviz DOT file with pinned positions.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    return parser.parse_args(argv)


def _config_overrides(args: argparse.Namespace) -> dict[str, float]:
    names = ("node_width", "node_height", "horizontal_spacing", "vertical_spacing")
    return {name: getattr(args, name) for name in names if getattr(args, name) is not None}


def _print_warnings(warnings: list[str]) -> None:
    if not warnings:
        print("  No validation issues found")
        return
    print(f"  Found {len(warnings)} validation warnings:")
    for w in warnings[:MAX_WARNINGS_SHOWN]:
        print(f"    - {w}")
    if len(warnings) > MAX_WARNINGS_SHOWN:
        print(f"    ... and {len(warnings) - MAX_WARNINGS_SHOWN} more")


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    print(f"Loading: {args.input}")
    try:
        people, relationships = load_input(args.input)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"  Found {len(people)} people and {len(relationships)} relationships")

    # Validation runs on its own graph; compute_layout builds a fresh one
    print("Validating...")
    graph = build_graph(people, relationships)
    assign_generations(graph, args.root)

    config_overrides = _config_overrides(args)
    config = DEFAULT_LAYOUT_CONFIG.with_overrides(config_overrides)
    _print_warnings(validate_graph(graph) + validate_config(config))

    print("Computing layout...")
    layout = compute_layout(people, relationships, args.root, config)
    print(f"  {len(layout.nodes)} nodes, {len(layout.edges)} edges, {layout.width} x {layout.height}")

    args.output.write_text(json.dumps(layout.to_dict(), indent=2), encoding="utf-8")
    print(f"Layout saved to {args.output}")

    if args.plot:
        plot_layout(layout, config, args.plot)
    if args.dot:
        write_dot(layout, config, args.dot)

    print("Done!")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
