"""Tests for export functionality (SVG, DOT)."""

import pytest

from orgchart_layout import ViewMode, build_org_chart
from orgchart_layout.export import to_dot, to_svg
from orgchart_layout.types import GraphNode, OrgGraph
from orgchart_layout.validation import InvalidDirectionError, UnpositionedNodeError

# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def dotted_chart():
    """Positioned chart with a primary, a secondary and an overlapping pair."""
    boss = {"id": 1, "fullName": "Ada", "role": "CTO", "department": "Engineering"}
    pm = {"id": 2, "fullName": "Bob & Co", "role": "PM"}
    dev = {
        "id": 3,
        "fullName": "Cy",
        "role": "Dev",
        "primaryManagers": [boss],
        "secondaryManagers": [pm, boss],
    }
    return build_org_chart([boss, pm, dev], ViewMode.DOTTED_LINE)


@pytest.fixture
def departmental_chart():
    boss = {"id": 1, "fullName": "Ada", "role": "CTO", "department": "Engineering"}
    dev = {"id": 2, "fullName": "Cy", "department": "Engineering", "primaryManagers": [boss]}
    return build_org_chart([boss, dev], ViewMode.DEPARTMENTAL)


# =============================================================================
# SVG Export
# =============================================================================


class TestSvgExport:
    """Tests for SVG export."""

    def test_basic_structure(self, dotted_chart):
        svg = to_svg(dotted_chart)
        assert svg.startswith("<svg")
        assert svg.endswith("</svg>")
        assert 'xmlns="http://www.w3.org/2000/svg"' in svg
        assert '<g class="edges">' in svg
        assert '<g class="nodes">' in svg

    def test_one_card_per_node(self, dotted_chart):
        svg = to_svg(dotted_chart)
        for node in dotted_chart.nodes:
            assert f'id="node-{node.id}"' in svg
        assert svg.count("<rect") == len(dotted_chart.nodes)

    def test_one_line_per_edge(self, dotted_chart):
        svg = to_svg(dotted_chart)
        assert svg.count("<line") == len(dotted_chart.edges)
        for edge in dotted_chart.edges:
            assert f'id="{edge.id}"' in svg

    def test_dashed_secondary_edges(self, dotted_chart):
        svg = to_svg(dotted_chart)
        assert svg.count('stroke-dasharray="6,4"') == 2

    def test_overlap_width(self, dotted_chart):
        svg = to_svg(dotted_chart)
        # reporting-1-3 and dotted-1-3 overlap
        assert svg.count('stroke-width="3.0"') == 2
        assert 'stroke="#263238"' in svg

    def test_markers_defined(self, dotted_chart):
        svg = to_svg(dotted_chart)
        assert "<defs>" in svg
        assert 'id="arrow-263238"' in svg
        assert 'marker-end="url(#arrow-263238)"' in svg

    def test_labels_escaped(self, dotted_chart):
        svg = to_svg(dotted_chart)
        assert "Bob &amp; Co" in svg
        assert "Bob & Co" not in svg

    def test_badge_for_managers(self, dotted_chart):
        svg = to_svg(dotted_chart)
        assert svg.count("<circle") == 2
        assert to_svg(dotted_chart, show_badges=False).count("<circle") == 0

    def test_fill_colors(self, departmental_chart):
        svg = to_svg(departmental_chart)
        assert 'fill="#DDEDFB"' in svg
        assert 'stroke="#1E88E5"' in svg

    def test_default_fill(self, dotted_chart):
        svg = to_svg(dotted_chart, default_fill="#FAFAFA")
        assert 'fill="#FAFAFA"' in svg

    def test_background(self, dotted_chart):
        svg = to_svg(dotted_chart, background="#ffffff")
        assert 'fill="#ffffff"' in svg

    def test_dimensions_include_padding(self):
        chart = build_org_chart([{"id": 1}])
        svg = to_svg(chart, padding=10)
        assert 'width="266.0" height="100.0"' in svg

    def test_empty_graph(self):
        svg = to_svg(OrgGraph())
        assert svg.startswith("<svg")
        assert "<rect" not in svg

    def test_unpositioned_node(self):
        graph = OrgGraph(nodes=[GraphNode(id="1")])
        with pytest.raises(UnpositionedNodeError, match="'1'"):
            to_svg(graph)


# =============================================================================
# DOT Export
# =============================================================================


class TestDotExport:
    """Tests for DOT export."""

    def test_basic_structure(self, dotted_chart):
        dot = to_dot(dotted_chart)
        assert dot.startswith("digraph OrgChart {")
        assert dot.endswith("}")
        assert 'rankdir="LR"' in dot

    def test_vertical_rankdir(self, dotted_chart):
        assert 'rankdir="TB"' in to_dot(dotted_chart, direction="vertical")

    def test_invalid_direction(self, dotted_chart):
        with pytest.raises(InvalidDirectionError):
            to_dot(dotted_chart, direction="BT")

    def test_edges(self, dotted_chart):
        dot = to_dot(dotted_chart)
        assert dot.count(" -> ") == len(dotted_chart.edges)
        assert '  2 -> 3 [id="dotted-2-3", color="#B0BEC5", style="dashed", penwidth="1.0"];' in dot

    def test_overlap_penwidth(self, dotted_chart):
        dot = to_dot(dotted_chart)
        assert dot.count('penwidth="2.5"') == 2

    def test_positions(self):
        chart = build_org_chart([{"id": 1}])
        dot = to_dot(chart)
        # centre of the box at (50, 50), y flipped
        assert 'pos="173.00,-90.00!"' in dot

    def test_no_positions(self, dotted_chart):
        assert "pos=" not in to_dot(dotted_chart, include_positions=False)

    def test_labels(self, dotted_chart):
        dot = to_dot(dotted_chart)
        assert 'label="Ada\\nCTO (1)"' in dot
        assert 'label="Cy\\nDev"' in dot

    def test_custom_label(self, dotted_chart):
        dot = to_dot(dotted_chart, get_node_label=lambda n: n.id)
        assert 'label="3"' in dot

    def test_quotes_escaped(self):
        graph = OrgGraph(nodes=[GraphNode(id="a-b", display_name='Say "hi"')])
        dot = to_dot(graph)
        assert '"a-b" [' in dot
        assert 'Say \\"hi\\"' in dot

    def test_graph_attrs(self, dotted_chart):
        dot = to_dot(dotted_chart, name="Team", graph_attrs={"splines": "ortho"})
        assert dot.startswith("digraph Team {")
        assert 'splines="ortho"' in dot

    def test_unpositioned_graph(self):
        dot = to_dot(OrgGraph(nodes=[GraphNode(id="1")]))
        assert "pos=" not in dot
