"""Tests for view mode policies."""

import pytest

from orgchart_layout.types import ViewMode
from orgchart_layout.views import ViewPolicy, policy_for


class TestPolicyFor:
    """Tests for mode -> policy selection."""

    def test_organizational(self):
        assert policy_for(ViewMode.ORGANIZATIONAL) == ViewPolicy(
            include_secondary_edges=False,
            count_secondary_as_children=False,
            color_by_department=False,
        )

    def test_departmental(self):
        policy = policy_for(ViewMode.DEPARTMENTAL)
        assert policy.color_by_department
        assert not policy.include_secondary_edges
        assert not policy.count_secondary_as_children

    def test_dotted_line(self):
        policy = policy_for(ViewMode.DOTTED_LINE)
        assert policy.include_secondary_edges
        assert policy.count_secondary_as_children
        assert not policy.color_by_department

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("organizational", ViewMode.ORGANIZATIONAL),
            ("departmental", ViewMode.DEPARTMENTAL),
            ("dottedLine", ViewMode.DOTTED_LINE),
            ("dotted-line", ViewMode.DOTTED_LINE),
            ("DOTTED_LINE", ViewMode.DOTTED_LINE),
        ],
    )
    def test_string_values(self, value, expected):
        assert policy_for(value) is policy_for(expected)

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            policy_for("matrix")

    def test_policies_frozen(self):
        policy = policy_for(ViewMode.ORGANIZATIONAL)
        with pytest.raises(AttributeError):
            policy.include_secondary_edges = True
