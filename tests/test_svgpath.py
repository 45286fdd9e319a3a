"""Tests for waypoint simplification and path command generation."""

import pytest

from edgeroute.models import PathResult, Position
from edgeroute.svgpath import (
    compute_polyline,
    compute_rounded_polyline,
    compute_spline,
    dedupe_points,
    simplify_collinear,
    to_svg_path,
)


def _types(commands):
    return [command["type"] for command in commands]


def _endpoints(commands):
    return commands[0]["points"][-1], commands[-1]["points"][-1]


class TestSimplifyCollinear:
    """Tests for removing redundant waypoints."""

    def test_removes_straight_runs_and_duplicates(self):
        points = [Position(0, 0), Position(10, 0), Position(20, 0), Position(20, 10), Position(20, 10)]
        assert simplify_collinear(points) == [Position(0, 0), Position(20, 0), Position(20, 10)]

    def test_keeps_reversals(self):
        """A point where the path turns back is a real corner."""
        points = [Position(0, 0), Position(10, 0), Position(5, 0)]
        assert simplify_collinear(points) == points

    def test_keeps_diagonal_corners(self):
        points = [Position(0, 0), Position(10, 10), Position(20, 10)]
        assert simplify_collinear(points) == points

    def test_short_inputs(self):
        assert simplify_collinear([]) == []
        assert simplify_collinear([Position(1, 1), Position(1, 1)]) == [Position(1, 1)]

    def test_dedupe_points(self):
        """Only consecutive repeats are dropped."""
        points = [Position(0, 0), Position(0, 0), Position(5, 0), Position(0, 0)]
        assert dedupe_points(points) == [Position(0, 0), Position(5, 0), Position(0, 0)]


class TestPolyline:
    """Tests for straight and rounded polylines."""

    def test_polyline(self):
        commands = compute_polyline([Position(0, 0), Position(10, 0), Position(10, 10)])
        assert _types(commands) == ["M", "L", "L"]
        assert commands[-1]["points"] == [Position(10, 10)]

    def test_rounded_corner(self):
        """Each corner is trimmed by the radius and bridged by a curve through it."""
        commands = compute_rounded_polyline([Position(0, 0), Position(100, 0), Position(100, 100)], 10)
        assert commands == [
            {"type": "M", "points": [Position(0, 0)]},
            {"type": "L", "points": [Position(90, 0)]},
            {"type": "Q", "points": [Position(100, 0), Position(100, 10)]},
            {"type": "L", "points": [Position(100, 100)]},
        ]

    def test_radius_limited_by_short_segment(self):
        """The radius shrinks to half of the shorter adjacent segment."""
        commands = compute_rounded_polyline([Position(0, 0), Position(4, 0), Position(4, 100)], 10)
        assert commands[1] == {"type": "L", "points": [Position(2, 0)]}
        assert commands[2] == {"type": "Q", "points": [Position(4, 0), Position(4, 2)]}

    def test_rounded_keeps_endpoints(self):
        points = [Position(0, 50), Position(20, 40), Position(20, -20), Position(180, -20), Position(200, 50)]
        commands = compute_rounded_polyline(points, 5)
        assert _endpoints(commands) == (points[0], points[-1])

    def test_rounded_two_points_is_plain_line(self):
        assert _types(compute_rounded_polyline([Position(0, 0), Position(10, 0)])) == ["M", "L"]

    def test_rounded_degenerate_corner(self):
        """Repeated points fall back to a straight line."""
        commands = compute_rounded_polyline([Position(0, 0), Position(0, 0), Position(10, 0)], 5)
        assert _types(commands) == ["M", "L", "L"]

    def test_empty(self):
        assert compute_polyline([]) == []
        assert compute_rounded_polyline([]) == []


class TestSpline:
    """Tests for the smooth curve used with diagonal paths."""

    def test_one_cubic_per_segment(self):
        points = [Position(0, 0), Position(20, 20), Position(40, 20), Position(60, 40)]
        commands = compute_spline(points)
        assert _types(commands) == ["M", "C", "C", "C"]
        assert _endpoints(commands) == (points[0], points[-1])

    def test_zero_tension_is_angular(self):
        """With no tension the control points sit on the segment ends."""
        points = [Position(0, 0), Position(20, 20), Position(40, 20)]
        commands = compute_spline(points, tension=0)
        assert commands[1]["points"] == [Position(0, 0), Position(20, 20), Position(20, 20)]

    def test_control_distance_constrained(self):
        points = [Position(0, 0), Position(1000, 0), Position(2000, 0)]
        commands = compute_spline(points, tension=1, max_control_distance=50)
        c1 = commands[1]["points"][0]
        assert c1.x == pytest.approx(50)
        assert c1.y == 0


class TestSvgPath:
    """Tests for drawsvg serialization."""

    def test_path_data(self):
        commands = compute_rounded_polyline([Position(0, 0), Position(100, 0), Position(100, 100)], 10)
        path = to_svg_path(commands, stroke="black", fill="none")
        d = path.args["d"]
        assert d.startswith("M")
        assert "Q" in d
        assert path.args["stroke"] == "black"

    def test_cubic_path_data(self):
        d = to_svg_path(compute_spline([Position(0, 0), Position(20, 20)])).args["d"]
        assert d.startswith("M")
        assert "C" in d

    def test_unknown_command(self):
        with pytest.raises(ValueError):
            to_svg_path([{"type": "Z", "points": []}])

    def test_path_result_svg(self):
        waypoints = [Position(0, 0), Position(100, 0)]
        result = PathResult(waypoints=waypoints, commands=compute_polyline(waypoints))
        assert result.svg_path.startswith("M")
        assert result.to_drawing_path(stroke="red").args["stroke"] == "red"
