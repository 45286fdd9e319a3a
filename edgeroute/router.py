"""Strategy dispatch for edge routing."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from .config import PathfindingMethod
from .models import PathResult, Position, RouteRequest
from .pathfinding import route_a_star
from .square import route_square
from .svgpath import compute_polyline

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .config import RoutingConfig
    from .models import BBox, RouteEndpoints

logger = logging.getLogger(__name__)


def route_direct(request: RouteRequest) -> PathResult:
    """Straight line between both endpoints, ignoring obstacles."""
    waypoints = [request.from_pos, request.to_pos]
    return PathResult(
        waypoints=waypoints,
        commands=compute_polyline(waypoints),
        center=Position(
            (request.from_pos.x + request.to_pos.x) / 2,
            (request.from_pos.y + request.to_pos.y) / 2,
        ),
        rotate_arrows=True,
    )


def compute_route(
    config: RoutingConfig,
    endpoints: RouteEndpoints,
    obstacles: Iterable[BBox] = (),
    clock: Callable[[], float] = time.perf_counter,
) -> PathResult | None:
    """Compute the path of one edge with the configured strategy.

    Args:
        config: Routing configuration (selects the strategy)
        endpoints: Node bboxes, positions and sides of both edge ends
        obstacles: Bboxes to route around, already filtered by the caller
        clock: Monotonic clock for the A* time budget

    Returns:
        PathResult, or None when the host should keep its default curve
        (bezier method, no route found, or search timeout)
    """
    request = RouteRequest.resolve(endpoints, obstacles)
    method = config.strategy

    if method is PathfindingMethod.DIRECT:
        result = route_direct(request)
    elif method is PathfindingMethod.SQUARE:
        result = route_square(request, config)
    elif method is PathfindingMethod.A_STAR:
        result = route_a_star(request, config, clock=clock)
    else:
        return None

    if result is None:
        logger.debug(f"No {method.value} route from {request.from_pos} to {request.to_pos}, keeping default path")
    return result


def should_update_edge(config: RoutingConfig, is_dragging: bool, is_connecting: bool = False) -> bool:
    """Whether edges should be re-routed right now.

    While nodes are dragged, routing only runs if live updates are enabled
    or an edge is currently being connected.
    """
    return not is_dragging or config.live_update_during_drag or is_connecting
