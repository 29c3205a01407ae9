import pytest

from graphical_utils import axis_intercepts, candidate_points, line_intersection
from lp_types import Constraint, Point


def test_axis_intercepts_both_axes():
    assert axis_intercepts(Constraint(2, 1, 15, "<=")) == [Point(7.5, 0.0), Point(0.0, 15.0)]


def test_axis_intercepts_horizontal_line_has_no_x_intercept():
    assert axis_intercepts(Constraint(0, 1, 3, "<=")) == [Point(0.0, 3.0)]


def test_axis_intercepts_vertical_line_has_no_y_intercept():
    assert axis_intercepts(Constraint(1, 0, 4, ">=")) == [Point(4.0, 0.0)]


def test_negative_intercepts_are_dropped():
    assert axis_intercepts(Constraint(1, -1, 2, ">=")) == [Point(2.0, 0.0)]
    assert axis_intercepts(Constraint(1, 1, -5, "<=")) == []


def test_degenerate_constraint_has_no_intercepts():
    assert axis_intercepts(Constraint(0, 0, 5, "<=")) == []


def test_line_intersection(scenario_a):
    p = line_intersection(*scenario_a)
    assert p.x == pytest.approx(5.0)
    assert p.y == pytest.approx(5.0)


@pytest.mark.parametrize(
    "c2",
    [
        Constraint(1, 1, 5, "<="),
        Constraint(2, 2, 20, "<="),
        Constraint(1, 1.0005, 5, "<="),
        Constraint(0, 0, 1, "<="),
    ],
    ids=["parallel", "coincident", "nearly-parallel", "degenerate"],
)
def test_line_intersection_without_single_point(c2):
    assert line_intersection(Constraint(1, 1, 10, "<="), c2) is None


def test_candidate_order(scenario_a):
    pts = candidate_points(scenario_a)
    expected = [(0, 0), (10, 0), (0, 10), (7.5, 0), (0, 15), (5, 5)]
    assert len(pts) == len(expected)
    for p, e in zip(pts, expected):
        assert p == pytest.approx(e)


def test_candidate_intersections_outside_quadrant_are_dropped():
    pts = candidate_points([Constraint(1, 0, -2, "<="), Constraint(0, 1, 1, "<=")])
    assert pts == [Point(0.0, 0.0), Point(0.0, 1.0)]
