#!/usr/bin/env python3
"""
Render an org chart from a JSON file of people.

The input is a list of person objects in the data-layer shape (``id``,
``firstName``, ``lastName``, ``fullName``, ``role``, ``department``,
``primaryManagers``, ``secondaryManagers``), or an object with a
``"people"`` list.

Usage:
    uv run python scripts/render_orgchart.py PEOPLE.json [--mode MODE] [--direction DIR]

Examples:
    uv run python scripts/render_orgchart.py people.json -o chart.svg
    uv run python scripts/render_orgchart.py people.json --mode departmental --direction vertical
    uv run python scripts/render_orgchart.py people.json --format dot -o chart.dot
    uv run python scripts/render_orgchart.py people.json --format json
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any

from orgchart_layout import ViewMode, build_org_chart
from orgchart_layout.export import to_dot, to_svg


def load_people(filepath: Path) -> list[dict[str, Any]]:
    """Load people from a JSON file."""
    with open(filepath) as f:
        data = json.load(f)
    if isinstance(data, dict):
        data = data.get("people", [])
    return data


def main():
    parser = argparse.ArgumentParser(description="Render an org chart from people JSON")
    parser.add_argument("input", type=Path, help="JSON file with the people list")
    parser.add_argument(
        "--mode",
        default=ViewMode.ORGANIZATIONAL.value,
        choices=[m.value for m in ViewMode],
        help="View mode",
    )
    parser.add_argument(
        "--direction",
        default="horizontal",
        help="'horizontal' (LR) or 'vertical' (TB)",
    )
    parser.add_argument(
        "--format", default="svg", choices=["svg", "dot", "json"], help="Output format"
    )
    parser.add_argument("-o", "--output", help="Output file (default: stdout)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log layout summaries")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    chart = build_org_chart(load_people(args.input), args.mode, args.direction)

    if args.format == "svg":
        content = to_svg(chart)
    elif args.format == "dot":
        content = to_dot(chart, direction=args.direction)
    else:
        content = json.dumps(chart.to_dict(), indent=2)

    if args.output:
        with open(args.output, "w") as f:
            f.write(content)
        print(f"Chart saved to {args.output} ({len(chart.nodes)} nodes)", file=sys.stderr)
    else:
        print(content)


if __name__ == "__main__":
    main()
