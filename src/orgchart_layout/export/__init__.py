"""
Export functionality for org charts.

This module provides functions to export charts to:
- SVG: Scalable Vector Graphics for web and print
- DOT: Graphviz format for graph visualization tools

Example usage:
    from orgchart_layout import build_org_chart
    from orgchart_layout.export import to_svg, to_dot

    chart = build_org_chart(people, "departmental")

    with open("chart.svg", "w") as f:
        f.write(to_svg(chart))

    with open("chart.dot", "w") as f:
        f.write(to_dot(chart))
"""

from .dot import to_dot
from .svg import to_svg

__all__ = [
    "to_svg",
    "to_dot",
]
