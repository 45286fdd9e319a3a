"""Orthogonal ("square") edge routing by geometric case analysis."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .geometry import combine_bboxes, get_center_of_bbox_side, segment_crosses_bbox, snap_to_grid
from .models import PathResult, Position, Side
from .svgpath import compute_polyline, compute_rounded_polyline, dedupe_points, simplify_collinear

if TYPE_CHECKING:
    from .config import RoutingConfig
    from .models import BBox, RouteRequest

logger = logging.getLogger(__name__)


def route_square(request: RouteRequest, config: RoutingConfig) -> PathResult:
    """Route an edge with horizontal and vertical segments only.

    - Same side: U shape one grid cell beyond the outermost endpoint
    - Same axis, different sides: Z shape with the jog halfway between
    - Different axes: L shape, or a detour when the bend would point back
      into one of the nodes

    Args:
        request: Resolved endpoint geometry
        config: Routing configuration

    Returns:
        PathResult (square routing always succeeds)
    """
    if request.from_side is request.to_side:
        bends, center = _u_shape(request, config.grid_resolution)
    elif request.from_side.is_horizontal == request.to_side.is_horizontal:
        bends, center = _z_shape(request)
    else:
        bends, center = _bend(request, config.grid_resolution)

    waypoints = dedupe_points([request.from_pos, *bends, request.to_pos])
    simplified = simplify_collinear(waypoints)
    if config.round_corners:
        commands = compute_rounded_polyline(simplified, config.corner_radius)
    else:
        commands = compute_polyline(simplified)

    return PathResult(waypoints=waypoints, commands=commands, center=center, rotate_arrows=False)


def _u_shape(request: RouteRequest, grid: float) -> tuple[list[Position], Position]:
    side = request.from_side
    fa, ta = request.from_bbox_side_pos, request.to_bbox_side_pos

    common = _beyond(side, _coord(fa, side), _coord(ta, side), grid)
    bends = [_point(side, common, _cross(fa, side)), _point(side, common, _cross(ta, side))]
    return bends, _midpoint(bends[0], bends[1])


def _z_shape(request: RouteRequest) -> tuple[list[Position], Position]:
    side = request.from_side
    fa, ta = request.from_bbox_side_pos, request.to_bbox_side_pos

    mid = _coord(fa, side) + (_coord(ta, side) - _coord(fa, side)) / 2
    bends = [_point(side, mid, _cross(fa, side)), _point(side, mid, _cross(ta, side))]
    return bends, _midpoint(fa, ta)


def _bend(request: RouteRequest, grid: float) -> tuple[list[Position], Position]:
    """L shape between perpendicular sides, with detours on collision.

    The detour is ``P1 -> P2 -> P3`` where ``a`` is the distance travelled
    out of the from node along its axis and ``b`` the level at which the
    path approaches the to node along the other axis.
    """
    fs, ts = request.from_side, request.to_side
    fa, ta = request.from_bbox_side_pos, request.to_bbox_side_pos

    ideal = _point(fs, _coord(ta, fs), _coord(fa, ts))
    from_collides = _is_behind(ideal, request.from_pos, fs)
    to_collides = _is_behind(ideal, request.to_pos, ts)

    if not from_collides and not to_collides:
        return [ideal], ideal

    if from_collides:
        a = _beyond(fs, _coord(fa, fs), _coord(ta, fs), grid)
    else:
        a = (_coord(fa, fs) + _coord(ta, fs)) / 2

    if to_collides:
        b = _beyond(ts, _coord(fa, ts), _coord(ta, ts), grid)
    else:
        b = (_coord(fa, ts) + _coord(ta, ts)) / 2

    nodes = (request.from_node_bbox, request.to_node_bbox)
    combined = combine_bboxes(nodes)
    candidates = [
        (a, b),
        # One grid cell out of each node side
        (
            snap_to_grid(_coord(fa, fs) + fs.direction * grid, grid),
            snap_to_grid(_coord(ta, ts) + ts.direction * grid, grid),
        ),
        # Around both nodes
        (
            snap_to_grid(_coord(get_center_of_bbox_side(combined, fs), fs) + fs.direction * grid, grid),
            snap_to_grid(_coord(get_center_of_bbox_side(combined, ts), ts) + ts.direction * grid, grid),
        ),
    ]

    for a, b in candidates:
        bends = _detour_points(fs, fa, ta, a, b)
        if not _crosses_any([request.from_pos, *bends, request.to_pos], nodes):
            break
    else:
        logger.debug(f"No square detour from {request.from_pos} to {request.to_pos} clears both nodes")

    return bends, bends[1]


def _detour_points(fs: Side, fa: Position, ta: Position, a: float, b: float) -> list[Position]:
    return [
        _point(fs, a, _cross(fa, fs)),
        _point(fs, a, b),
        _point(fs, _coord(ta, fs), b),
    ]


def _crosses_any(points: list[Position], bboxes: tuple[BBox, ...]) -> bool:
    return any(
        segment_crosses_bbox(start, end, bbox)
        for start, end in zip(points, points[1:])
        for bbox in bboxes
    )


def _coord(pos: Position, side: Side) -> float:
    """Coordinate of ``pos`` along the axis ``side`` points in."""
    return pos.x if side.is_horizontal else pos.y


def _cross(pos: Position, side: Side) -> float:
    """Coordinate of ``pos`` along the axis perpendicular to ``side``."""
    return pos.y if side.is_horizontal else pos.x


def _point(side: Side, along: float, across: float) -> Position:
    """Build a point from coordinates relative to ``side``'s axis."""
    return Position(along, across) if side.is_horizontal else Position(across, along)


def _beyond(side: Side, first: float, second: float, grid: float) -> float:
    """Grid-snapped coordinate one cell past the outermost of two values."""
    outermost = max(first, second) if side.direction > 0 else min(first, second)
    return snap_to_grid(outermost + side.direction * grid, grid)


def _is_behind(point: Position, pos: Position, side: Side) -> bool:
    """True if ``point`` lies on the node's side of ``pos`` (against the outward direction)."""
    vector = side.vector
    return (point.x - pos.x) * vector.x + (point.y - pos.y) * vector.y < 0


def _midpoint(a: Position, b: Position) -> Position:
    return Position((a.x + b.x) / 2, (a.y + b.y) / 2)
