"""Tests for strategy dispatch and the direct strategy."""

import itertools
import logging

import pytest

from edgeroute import (
    BBox,
    PathfindingMethod,
    PathResult,
    Position,
    RouteEndpoints,
    RoutingConfig,
    Side,
    compute_route,
    route_direct,
    should_update_edge,
)


@pytest.fixture
def direct_endpoints(make_endpoints):
    return make_endpoints(
        BBox(-100, -50, 0, 50),
        "right",
        BBox(100, -50, 200, 50),
        "left",
    )


class TestDirect:
    """Tests for the straight-line strategy."""

    def test_direct_line(self, direct_endpoints):
        result = compute_route(RoutingConfig(strategy="direct"), direct_endpoints)
        assert result.waypoints == [Position(0, 0), Position(100, 0)]
        assert result.center == Position(50, 0)
        assert result.rotate_arrows is True
        assert [command["type"] for command in result.commands] == ["M", "L"]

    def test_direct_ignores_obstacles(self, make_request):
        request = make_request(
            BBox(-100, -50, 0, 50),
            "right",
            BBox(100, -50, 200, 50),
            "left",
            obstacles=[BBox(40, -10, 60, 10)],
        )
        assert route_direct(request).waypoints == [Position(0, 0), Position(100, 0)]


class TestComputeRoute:
    """Tests for selecting a strategy."""

    def test_bezier_keeps_host_default(self, direct_endpoints):
        assert compute_route(RoutingConfig(strategy="bezier"), direct_endpoints) is None
        assert compute_route(RoutingConfig(), direct_endpoints) is None

    def test_square(self, direct_endpoints):
        result = compute_route(RoutingConfig(strategy=PathfindingMethod.SQUARE), direct_endpoints)
        assert result.waypoints[0] == Position(0, 0)
        assert result.waypoints[-1] == Position(100, 0)
        assert result.rotate_arrows is False

    def test_a_star(self, direct_endpoints, frozen_clock):
        config = RoutingConfig(strategy="a-star", grid_resolution=20)
        result = compute_route(config, direct_endpoints, [BBox(40, -30, 60, 30)], clock=frozen_clock)
        assert result.waypoints[0] == Position(0, 0)
        assert result.waypoints[-1] == Position(100, 0)

    def test_a_star_failure_returns_none(self, direct_endpoints, fake_clock, caplog):
        config = RoutingConfig(strategy="a-star", grid_resolution=20)
        with caplog.at_level(logging.DEBUG, logger="edgeroute.router"):
            result = compute_route(config, direct_endpoints, [BBox(40, -30, 60, 30)], clock=fake_clock(1.0))
        assert result is None
        assert "keeping default path" in caplog.text

    def test_obstacles_not_modified(self, direct_endpoints, frozen_clock):
        obstacles = [BBox(40, -30, 60, 30), BBox(-100, -50, 0, 50)]
        compute_route(RoutingConfig(strategy="a-star", grid_resolution=20), direct_endpoints, obstacles, clock=frozen_clock)
        assert obstacles == [BBox(40, -30, 60, 30), BBox(-100, -50, 0, 50)]


class TestDegenerateGeometry:
    """Zero-size nodes and coincident endpoints never break a strategy."""

    @pytest.mark.parametrize("strategy", ["direct", "square", "a-star"])
    @pytest.mark.parametrize("from_side,to_side", list(itertools.product(Side, Side)))
    def test_point_nodes(self, strategy, from_side, to_side, fake_clock):
        point = Position(0, 0)
        endpoints = RouteEndpoints(BBox(0, 0, 0, 0), point, from_side, BBox(0, 0, 0, 0), point, to_side)
        config = RoutingConfig(strategy=strategy)
        result = compute_route(config, endpoints, [BBox(0, 0, 0, 0)], clock=fake_clock(0.001))
        if result is None:
            return
        assert isinstance(result, PathResult)
        assert result.svg_path.startswith("M")
        assert result.waypoints[0] == point
        assert result.waypoints[-1] == point


class TestShouldUpdateEdge:
    """Tests for the drag gate."""

    @pytest.mark.parametrize(
        "live,dragging,connecting,expected",
        [
            (False, False, False, True),
            (False, True, False, False),
            (False, True, True, True),
            (True, True, False, True),
            (True, False, False, True),
        ],
    )
    def test_gate(self, live, dragging, connecting, expected):
        config = RoutingConfig(live_update_during_drag=live)
        assert should_update_edge(config, dragging, connecting) is expected
