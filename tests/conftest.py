"""Pytest configuration and shared fixtures for edgeroute tests."""

import pytest

from edgeroute import BBox, Position, RouteEndpoints, RouteRequest, RoutingConfig
from edgeroute.geometry import get_center_of_bbox_side
from edgeroute.models import parse_side


class FakeClock:
    """Clock that advances by a fixed step on every call."""

    def __init__(self, step: float):
        self.now = 0.0
        self.step = step

    def __call__(self) -> float:
        self.now += self.step
        return self.now


@pytest.fixture
def fake_clock():
    """Factory for deterministic clocks (step in seconds)."""
    return FakeClock


@pytest.fixture
def frozen_clock():
    """Clock that never advances, so the time budget never runs out."""
    return FakeClock(0.0)


@pytest.fixture
def make_endpoints():
    """Build RouteEndpoints attached at the side centers of two bboxes."""

    def _make(from_bbox, from_side, to_bbox, to_side, from_pos=None, to_pos=None):
        from_side = parse_side(from_side)
        to_side = parse_side(to_side)
        return RouteEndpoints(
            from_node_bbox=from_bbox,
            from_pos=from_pos or get_center_of_bbox_side(from_bbox, from_side),
            from_side=from_side,
            to_node_bbox=to_bbox,
            to_pos=to_pos or get_center_of_bbox_side(to_bbox, to_side),
            to_side=to_side,
        )

    return _make


@pytest.fixture
def make_request(make_endpoints):
    """Build a resolved RouteRequest between two bboxes."""

    def _make(from_bbox, from_side, to_bbox, to_side, obstacles=(), **kwargs):
        return RouteRequest.resolve(make_endpoints(from_bbox, from_side, to_bbox, to_side, **kwargs), obstacles)

    return _make


@pytest.fixture
def obstacle_scenario(make_request):
    """Two nodes left and right of a single obstacle between them."""
    return make_request(
        BBox(-100, 0, 0, 100),
        "right",
        BBox(200, 0, 300, 100),
        "left",
        obstacles=[BBox(80, 0, 120, 100)],
        from_pos=Position(0, 50),
        to_pos=Position(200, 50),
    )


@pytest.fixture
def square_config():
    return RoutingConfig(strategy="square", grid_resolution=10, round_corners=False)
