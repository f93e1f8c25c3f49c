"""
Tests for the end-to-end chart pipeline.
"""

from dataclasses import replace

from orgchart_layout import (
    ColorAssigner,
    ColorCache,
    GraphBuilder,
    LayoutConfig,
    LayoutEngine,
    Position,
    ViewMode,
    build_org_chart,
    chart_changed,
)


def create_people():
    ada = {"id": 1, "fullName": "Ada", "department": "Engineering", "role": "CTO"}
    bob = {
        "id": 2,
        "fullName": "Bob",
        "department": "Sales",
        "primaryManagers": [ada],
        "secondaryManagers": [{"id": 3, "fullName": "Cy"}],
    }
    return [ada, bob]


class TestBuildOrgChart:
    """Tests for build + layout in one call."""

    def test_two_person_chart(self):
        people = [
            {"id": 1, "fullName": "Ada"},
            {"id": 2, "fullName": "Bob", "primaryManagers": [{"id": 1}]},
        ]
        chart = build_org_chart(people, ViewMode.ORGANIZATIONAL, "horizontal")

        assert [n.id for n in chart.nodes] == ["1", "2"]
        assert [e.id for e in chart.edges] == ["reporting-1-2"]
        assert chart.node("1").position == Position(50.0, 50.0)
        assert chart.node("2").position == Position(366.0, 50.0)
        assert chart.node("1").immediate_child_count == 1

    def test_unrelated_people_in_grid(self):
        chart = build_org_chart([{"id": 1}, {"id": 2}])
        assert chart.node("1").position == Position(50.0, 50.0)
        assert chart.node("2").position == Position(350.0, 50.0)

    def test_dotted_line_mode(self):
        chart = build_org_chart(create_people(), "dottedLine", "vertical")
        assert [n.id for n in chart.nodes] == ["1", "2", "3"]
        assert chart.edge("dotted-3-2").dashed
        # Bob has two managers, so he sits one rank below both
        assert chart.node("2").position.y > chart.node("1").position.y
        assert chart.node("2").position.y > chart.node("3").position.y

    def test_departmental_mode(self):
        chart = build_org_chart(create_people(), ViewMode.DEPARTMENTAL)
        assert chart.node("1").border_color == "#1E88E5"
        assert chart.node("2").border_color == "#3949AB"
        assert chart.edge("dotted-3-2") is None

    def test_injected_builder_and_engine(self):
        cache = ColorCache()
        builder = GraphBuilder(color_assigner=ColorAssigner(cache=cache))
        engine = LayoutEngine(LayoutConfig(origin=(0, 0)))
        chart = build_org_chart(
            create_people(), ViewMode.DEPARTMENTAL, builder=builder, engine=engine
        )
        assert chart.node("1").position == Position(0.0, 0.0)
        assert "Engineering" in cache

    def test_empty(self):
        chart = build_org_chart([], ViewMode.DOTTED_LINE)
        assert chart.nodes == []
        assert chart.edges == []


class TestChartChanged:
    """Tests for visual change detection."""

    def test_no_previous(self):
        assert chart_changed(build_org_chart(create_people()), None)

    def test_same_input_unchanged(self):
        first = build_org_chart(create_people(), ViewMode.DOTTED_LINE)
        second = build_org_chart(create_people(), ViewMode.DOTTED_LINE)
        assert not chart_changed(second, first)

    def test_positions_ignored(self):
        horizontal = build_org_chart(create_people(), direction="horizontal")
        vertical = build_org_chart(create_people(), direction="vertical")
        assert not chart_changed(vertical, horizontal)

    def test_mode_change_detected(self):
        organizational = build_org_chart(create_people(), ViewMode.ORGANIZATIONAL)
        departmental = build_org_chart(create_people(), ViewMode.DEPARTMENTAL)
        assert chart_changed(departmental, organizational)

    def test_new_edges_detected(self):
        organizational = build_org_chart(create_people(), ViewMode.ORGANIZATIONAL)
        dotted = build_org_chart(create_people(), ViewMode.DOTTED_LINE)
        assert chart_changed(dotted, organizational)

    def test_node_payload_change_detected(self):
        chart = build_org_chart(create_people())
        nodes = [replace(chart.nodes[0], display_name="Ada L.")] + chart.nodes[1:]
        renamed = replace(chart, nodes=nodes)
        assert chart_changed(renamed, chart)

    def test_replaced_id_detected(self):
        chart = build_org_chart(create_people())
        swapped = replace(chart, nodes=[replace(chart.nodes[0], id="99")] + chart.nodes[1:])
        assert chart_changed(swapped, chart)
