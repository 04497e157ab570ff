"""
1) Read the family document ("family.json") into Person records.
2) Index people, synthesize unions and number generations from the anchor.
3) Validate the data for cycles, impossible ages and date ordering.
4) Build the person/union forest and lay it out.
5) Write the render contract as JSON and, optionally, a debug plot.
"""

from pathlib import Path
import argparse
import json
import logging
import sys

from config import LayoutConfig
from errors import FamilyTreeError
from parsing import load_people
from plotting import plot_layout
from session import FamilyTreeSession


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Lay out a family tree for rendering.")
    parser.add_argument("input", type=Path, nargs="?", default=Path("family.json"))
    parser.add_argument("--anchor", help="Id of the person on generation 0")
    parser.add_argument("--config", type=Path, help="JSON file with layout options")
    parser.add_argument("--output", type=Path, default=Path("layout.json"))
    parser.add_argument("--plot", type=Path, help="Also draw the layout (png, svg, pdf or dot)")
    parser.add_argument("--expand-all", action="store_true", help="Start with every node expanded")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)


def load_config(args: argparse.Namespace) -> LayoutConfig:
    options = {}
    if args.config:
        with open(args.config, encoding="utf-8") as f:
            options = json.load(f)
    if args.anchor:
        options["anchor_id"] = args.anchor
    return LayoutConfig.from_mapping(options)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        config = load_config(args)

        print(f"Reading family document: {args.input}")
        people = load_people(args.input)
        print(f"  Found {len(people)} people")

        print("Building layout...")
        session = FamilyTreeSession(config)
        result = session.load(people)
        if args.expand_all:
            result = session.expand_all()
    except (FamilyTreeError, OSError, json.JSONDecodeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"  {len(session.unions)} unions, {result.forest_count} trees")
    print(f"  {len(result.nodes)} nodes and {len(result.edges)} edges")

    if session.warnings:
        print(f"  Found {len(session.warnings)} warnings:")
        for w in session.warnings[:10]:  # Show first 10 warnings
            print(f"    - {w}")
        if len(session.warnings) > 10:
            print(f"    ... and {len(session.warnings) - 10} more")
    else:
        print("  No data issues found")

    with open(args.output, "w", encoding="utf-8") as f:
        json.dump(session.render(), f, indent=2, ensure_ascii=False)
    print(f"Render contract saved to {args.output}")

    if args.plot:
        plot_layout(result, args.plot, node_width=config.node_width, node_height=config.node_height)

    print("Done!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
