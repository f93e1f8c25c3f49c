"""
Tests for the layered hierarchy layout.
"""

import pytest

from orgchart_layout.hierarchical import GraphStructureWarning, LayeredLayout
from orgchart_layout.types import EventType, GraphNode, Position
from orgchart_layout.validation import (
    InvalidDirectionError,
    InvalidEdgeError,
    InvalidLayoutConfigError,
)

# =============================================================================
# Test Fixtures
# =============================================================================


def create_nodes(*ids):
    return [{"id": i} for i in ids]


def create_chain():
    """A -> B -> C."""
    nodes = create_nodes("A", "B", "C")
    edges = [
        {"source": "A", "target": "B"},
        {"source": "B", "target": "C"},
    ]
    return nodes, edges


def create_fork():
    """One manager with two reports."""
    #      0
    #     / \
    #    1   2
    nodes = create_nodes("0", "1", "2")
    edges = [
        {"source": "0", "target": "1"},
        {"source": "0", "target": "2"},
    ]
    return nodes, edges


def create_dag():
    """A report with two managers."""
    #     0
    #    / \
    #   1   2
    #    \ /
    #     3
    nodes = create_nodes("0", "1", "2", "3")
    edges = [
        {"source": "0", "target": "1"},
        {"source": "0", "target": "2"},
        {"source": "1", "target": "3"},
        {"source": "2", "target": "3"},
    ]
    return nodes, edges


# =============================================================================
# Coordinates
# =============================================================================


class TestLayeredCoordinates:
    """Tests for rank and slot placement."""

    def test_chain_horizontal(self):
        nodes, edges = create_chain()
        layout = LayeredLayout(nodes=nodes, edges=edges).run()
        assert layout.positions == {
            "A": Position(50.0, 50.0),
            "B": Position(366.0, 50.0),
            "C": Position(682.0, 50.0),
        }

    def test_chain_vertical(self):
        nodes, edges = create_chain()
        layout = LayeredLayout(nodes=nodes, edges=edges, direction="vertical").run()
        assert layout.positions["A"] == Position(50.0, 50.0)
        assert layout.positions["B"] == Position(50.0, 200.0)
        assert layout.positions["C"] == Position(50.0, 350.0)

    def test_fork_horizontal_centred(self):
        nodes, edges = create_fork()
        layout = LayeredLayout(nodes=nodes, edges=edges).run()
        assert layout.positions["0"] == Position(50.0, 100.0)
        assert layout.positions["1"] == Position(366.0, 50.0)
        assert layout.positions["2"] == Position(366.0, 150.0)

    def test_fork_vertical_centred(self):
        nodes, edges = create_fork()
        layout = LayeredLayout(nodes=nodes, edges=edges, direction="TB").run()
        assert layout.positions["0"] == Position(183.0, 50.0)
        assert layout.positions["1"] == Position(50.0, 200.0)
        assert layout.positions["2"] == Position(316.0, 200.0)

    def test_managers_before_reports(self):
        nodes, edges = create_dag()
        layout = LayeredLayout(nodes=nodes, edges=edges, direction="LR").run()
        pos = layout.positions
        assert pos["0"].x < pos["1"].x
        assert pos["1"].x == pos["2"].x
        assert pos["3"].x > pos["1"].x

    def test_custom_spacing_and_origin(self):
        nodes, edges = create_chain()
        layout = LayeredLayout(
            nodes=nodes,
            edges=edges,
            node_size=(100, 40),
            origin=(0, 0),
            rank_separation=10,
        ).run()
        assert layout.positions["B"] == Position(110.0, 0.0)
        assert layout.positions["C"] == Position(220.0, 0.0)

    def test_bounding_box_starts_at_origin(self):
        nodes, edges = create_fork()
        layout = LayeredLayout(nodes=nodes, edges=edges).run()
        bbox = layout.bounding_box()
        assert (bbox.min_x, bbox.min_y) == (50.0, 50.0)
        assert (bbox.max_x, bbox.max_y) == (612.0, 230.0)
        assert bbox.width == 562.0
        assert bbox.height == 180.0

    def test_no_overlaps(self):
        nodes, edges = create_dag()
        layout = LayeredLayout(nodes=nodes, edges=edges).run()
        width, height = layout.node_size
        placed = list(layout.positions.values())
        for i, a in enumerate(placed):
            for b in placed[i + 1 :]:
                assert abs(a.x - b.x) >= width or abs(a.y - b.y) >= height

    def test_idempotent(self):
        nodes, edges = create_dag()
        layout = LayeredLayout(nodes=nodes, edges=edges)
        first = dict(layout.run().positions)
        second = dict(layout.run().positions)
        assert first == second

    def test_layers(self):
        nodes, edges = create_dag()
        layout = LayeredLayout(nodes=nodes, edges=edges).run()
        assert layout.layers == [["0"], ["1", "2"], ["3"]]


# =============================================================================
# Graph Structure
# =============================================================================


class TestLayeredStructure:
    """Tests for cycles, self-loops and unusual input."""

    def test_empty_graph(self):
        layout = LayeredLayout(nodes=[], edges=[]).run()
        assert layout.positions == {}
        assert layout.bounding_box() is None

    def test_single_node(self):
        layout = LayeredLayout(nodes=create_nodes("x")).run()
        assert layout.positions == {"x": Position(50.0, 50.0)}

    def test_self_loop_ignored(self):
        layout = LayeredLayout(
            nodes=create_nodes("x"), edges=[{"source": "x", "target": "x"}]
        ).run()
        assert layout.positions == {"x": Position(50.0, 50.0)}

    def test_cycle_warns_and_places_all(self):
        nodes = create_nodes("1", "2")
        edges = [{"source": "1", "target": "2"}, {"source": "2", "target": "1"}]
        with pytest.warns(GraphStructureWarning, match="cycle"):
            layout = LayeredLayout(nodes=nodes, edges=edges).run()
        assert set(layout.positions) == {"1", "2"}
        assert layout.positions["1"] != layout.positions["2"]

    def test_dangling_edges_tolerated(self):
        layout = LayeredLayout(
            nodes=create_nodes("a"), edges=[{"source": "a", "target": "missing"}]
        ).run()
        assert layout.positions == {"a": Position(50.0, 50.0)}

    def test_validate_rejects_dangling_edges(self):
        layout = LayeredLayout(
            nodes=create_nodes("a"), edges=[{"source": "a", "target": "missing"}]
        )
        with pytest.raises(InvalidEdgeError):
            layout.validate()

    def test_duplicate_node_ids_keep_first(self):
        layout = LayeredLayout(
            nodes=[{"id": "a", "displayName": "First"}, {"id": "a", "displayName": "Second"}]
        )
        assert len(layout.nodes) == 1
        assert layout.nodes[0].display_name == "First"


# =============================================================================
# Configuration and Lifecycle
# =============================================================================


class TestLayeredConfiguration:
    """Tests for constructor options, properties and events."""

    def test_configuration_properties(self):
        layout = LayeredLayout(
            direction="vertical",
            node_separation=30,
            rank_separation=90,
            crossing_iterations=5,
        )
        assert layout.direction == "vertical"
        assert layout.node_separation == 30
        assert layout.rank_separation == 90
        assert layout.crossing_iterations == 5

    def test_property_setters(self):
        layout = LayeredLayout()
        layout.direction = "TB"
        layout.node_separation = 0
        assert layout.direction == "vertical"
        assert layout.node_separation == 0.0

    def test_invalid_direction(self):
        with pytest.raises(InvalidDirectionError):
            LayeredLayout(direction="diagonal")

    def test_negative_separation(self):
        with pytest.raises(InvalidLayoutConfigError):
            LayeredLayout(rank_separation=-1)

    def test_invalid_node_size(self):
        with pytest.raises(InvalidLayoutConfigError):
            LayeredLayout(node_size=(0, 80))

    def test_events(self):
        nodes, edges = create_chain()
        seen = []
        layout = LayeredLayout(
            nodes=nodes,
            edges=edges,
            on_start=lambda e: seen.append((e["type"], e["node_count"])),
        )
        layout.on("end", lambda e: seen.append((e["type"], e["node_count"])))
        layout.run()
        assert seen == [(EventType.start, 3), (EventType.end, 3)]

    def test_apply_returns_copies(self):
        nodes = [GraphNode(id="a"), GraphNode(id="b")]
        layout = LayeredLayout(nodes=nodes, edges=[{"source": "a", "target": "b"}]).run()
        placed = layout.apply()
        assert [n.position for n in placed] == [Position(50.0, 50.0), Position(366.0, 50.0)]
        assert nodes[0].position is None
        assert placed[0] is not nodes[0]
