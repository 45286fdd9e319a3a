"""Conversion of waypoint sequences into renderable path commands.

Path commands are dicts of the form ``{'type': 'M'|'L'|'Q'|'C', 'points': [...]}``
where the last point of each command is the pen position after it.
"""

from __future__ import annotations

import math
from typing import Any

import drawsvg as draw

from .models import Position


def dedupe_points(points: list[Position]) -> list[Position]:
    """Drop points equal to their predecessor."""
    result: list[Position] = []
    for point in points:
        if not result or point != result[-1]:
            result.append(point)
    return result


def simplify_collinear(points: list[Position]) -> list[Position]:
    """Remove duplicate points and interior points that don't change direction."""
    deduplicated = dedupe_points(points)

    if len(deduplicated) <= 2:
        return deduplicated

    result = [deduplicated[0]]
    for i in range(1, len(deduplicated) - 1):
        prev = result[-1]
        curr = deduplicated[i]
        nxt = deduplicated[i + 1]
        dx1, dy1 = curr.x - prev.x, curr.y - prev.y
        dx2, dy2 = nxt.x - curr.x, nxt.y - curr.y
        # Keep point if direction changes
        is_straight = dx1 * dy2 - dy1 * dx2 == 0 and dx1 * dx2 + dy1 * dy2 > 0
        if not is_straight:
            result.append(curr)
    result.append(deduplicated[-1])
    return result


def compute_polyline(points: list[Position]) -> list[dict]:
    """Move to the first point, then draw straight lines through the rest."""
    if not points:
        return []
    commands = [{'type': 'M', 'points': [points[0]]}]
    commands.extend({'type': 'L', 'points': [p]} for p in points[1:])
    return commands


def compute_rounded_polyline(
    points: list[Position],
    corner_radius: float = 5.0,
) -> list[dict]:
    """Convert path points to a polyline with rounded corners.

    Each interior corner is trimmed by the radius on both adjacent segments
    and replaced by a quadratic curve through the corner point. The
    radius is limited to half of the shorter adjacent segment.

    Args:
        points: List of waypoints
        corner_radius: Radius for rounded corners

    Returns:
        List of path commands
    """
    if len(points) < 2:
        return [{'type': 'M', 'points': [points[0]]}] if points else []

    if len(points) == 2:
        return compute_polyline(points)

    commands = []
    commands.append({'type': 'M', 'points': [points[0]]})

    for i in range(1, len(points) - 1):
        prev = points[i - 1]
        curr = points[i]
        next_pt = points[i + 1]

        # Calculate vectors
        v1x, v1y = curr.x - prev.x, curr.y - prev.y
        v2x, v2y = next_pt.x - curr.x, next_pt.y - curr.y

        # Lengths
        len1 = math.hypot(v1x, v1y)
        len2 = math.hypot(v2x, v2y)

        if len1 < 0.001 or len2 < 0.001:
            # Degenerate case - just line to point
            commands.append({'type': 'L', 'points': [curr]})
            continue

        # Normalize
        v1x, v1y = v1x / len1, v1y / len1
        v2x, v2y = v2x / len2, v2y / len2

        # Calculate how much we can round (limited by segment lengths)
        radius = min(corner_radius, len1 / 2, len2 / 2)

        if radius <= 0:
            commands.append({'type': 'L', 'points': [curr]})
            continue

        # Points where the curve starts and ends
        arc_start = Position(curr.x - v1x * radius, curr.y - v1y * radius)
        arc_end = Position(curr.x + v2x * radius, curr.y + v2y * radius)

        # Line to arc start
        commands.append({'type': 'L', 'points': [arc_start]})

        # Quadratic bezier for the rounded corner (control point is the corner itself)
        commands.append({'type': 'Q', 'points': [curr, arc_end]})

    # Final line to last point
    commands.append({'type': 'L', 'points': [points[-1]]})

    return commands


def compute_spline(
    points: list[Position],
    tension: float = 0.3,
    max_control_distance: float = 50.0,
) -> list[dict]:
    """Fit a smooth curve through the waypoints.

    Uses Catmull-Rom spline converted to cubic Bezier for smooth curves.
    Control point offsets are constrained to prevent wild curves on long segments.

    Args:
        points: Path waypoints
        tension: Curve tension (0 = angular, 1 = very smooth)
        max_control_distance: Maximum distance control points can be from endpoints

    Returns:
        List of path commands (one cubic 'C' per segment)
    """
    if len(points) < 2:
        return compute_polyline(points)

    def constrain_offset(ox: float, oy: float) -> tuple[float, float]:
        dist = math.hypot(ox, oy)
        if dist > max_control_distance:
            scale = max_control_distance / dist
            return ox * scale, oy * scale
        return ox, oy

    commands = [{'type': 'M', 'points': [points[0]]}]

    for i in range(1, len(points)):
        p0 = points[max(0, i - 2)]
        p1 = points[i - 1]
        p2 = points[i]
        p3 = points[min(len(points) - 1, i + 1)]

        # Catmull-Rom to Bezier conversion
        c1_offset_x, c1_offset_y = constrain_offset(
            (p2.x - p0.x) * tension / 3,
            (p2.y - p0.y) * tension / 3,
        )
        c2_offset_x, c2_offset_y = constrain_offset(
            (p3.x - p1.x) * tension / 3,
            (p3.y - p1.y) * tension / 3,
        )

        c1 = Position(p1.x + c1_offset_x, p1.y + c1_offset_y)
        c2 = Position(p2.x - c2_offset_x, p2.y - c2_offset_y)
        commands.append({'type': 'C', 'points': [c1, c2, p2]})

    return commands


def to_svg_path(commands: list[dict], **attrs: Any) -> draw.Path:
    """Build a drawsvg path from path commands.

    Args:
        commands: Path commands from one of the compute_* functions
        **attrs: SVG attributes for the path element (stroke, fill, ...)

    Returns:
        drawsvg Path element
    """
    path = draw.Path(**attrs)
    for command in commands:
        pts = command['points']
        kind = command['type']
        if kind == 'M':
            path.M(pts[0].x, pts[0].y)
        elif kind == 'L':
            path.L(pts[0].x, pts[0].y)
        elif kind == 'Q':
            path.Q(pts[0].x, pts[0].y, pts[1].x, pts[1].y)
        elif kind == 'C':
            path.C(pts[0].x, pts[0].y, pts[1].x, pts[1].y, pts[2].x, pts[2].y)
        else:
            raise ValueError(f"Unknown path command '{kind}'")
    return path
