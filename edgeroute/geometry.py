"""Bounding box and side helpers shared by the routing strategies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .models import BBox, Position, Side

if TYPE_CHECKING:
    from collections.abc import Iterable


def inside_bbox(item: Position | BBox, bbox: BBox, can_touch_edge: bool) -> bool:
    """Check whether a point or a nested bbox lies within ``bbox``.

    Args:
        item: Point or bbox to test
        bbox: Containing bbox
        can_touch_edge: If True, items on the boundary count as inside

    Returns:
        True if ``item`` is fully contained
    """
    if isinstance(item, Position):
        min_x = max_x = item.x
        min_y = max_y = item.y
    else:
        min_x, min_y, max_x, max_y = item.min_x, item.min_y, item.max_x, item.max_y

    if can_touch_edge:
        return min_x >= bbox.min_x and max_x <= bbox.max_x and min_y >= bbox.min_y and max_y <= bbox.max_y
    return min_x > bbox.min_x and max_x < bbox.max_x and min_y > bbox.min_y and max_y < bbox.max_y


def is_colliding(a: BBox, b: BBox) -> bool:
    """AABB overlap test, inclusive bounds."""
    return a.min_x <= b.max_x and a.max_x >= b.min_x and a.min_y <= b.max_y and a.max_y >= b.min_y


def combine_bboxes(bboxes: Iterable[BBox]) -> BBox:
    """Smallest bbox containing all given bboxes. Requires at least one bbox."""
    bboxes = list(bboxes)
    return BBox(
        min_x=min(b.min_x for b in bboxes),
        min_y=min(b.min_y for b in bboxes),
        max_x=max(b.max_x for b in bboxes),
        max_y=max(b.max_y for b in bboxes),
    )


def scale_bbox(bbox: BBox, factor: float) -> BBox:
    """Grow (or shrink) a bbox around its center by ``factor``."""
    diff_x = (factor - 1) * bbox.width
    diff_y = (factor - 1) * bbox.height
    return BBox(
        min_x=bbox.min_x - diff_x / 2,
        min_y=bbox.min_y - diff_y / 2,
        max_x=bbox.max_x + diff_x / 2,
        max_y=bbox.max_y + diff_y / 2,
    )


def enlarge_bbox(bbox: BBox, padding: float) -> BBox:
    return BBox(bbox.min_x - padding, bbox.min_y - padding, bbox.max_x + padding, bbox.max_y + padding)


def bbox_from_points(points: Iterable[Position]) -> BBox:
    """Smallest bbox containing all points. Requires at least one point."""
    points = list(points)
    return BBox(
        min_x=min(p.x for p in points),
        min_y=min(p.y for p in points),
        max_x=max(p.x for p in points),
        max_y=max(p.y for p in points),
    )


def get_center_of_bbox_side(bbox: BBox, side: Side) -> Position:
    """Midpoint of the named edge of ``bbox``."""
    if side is Side.TOP:
        return Position((bbox.min_x + bbox.max_x) / 2, bbox.min_y)
    if side is Side.RIGHT:
        return Position(bbox.max_x, (bbox.min_y + bbox.max_y) / 2)
    if side is Side.BOTTOM:
        return Position((bbox.min_x + bbox.max_x) / 2, bbox.max_y)
    if side is Side.LEFT:
        return Position(bbox.min_x, (bbox.min_y + bbox.max_y) / 2)
    raise ValueError(f"Unknown side: {side!r}")


def move_in_direction(pos: Position, side: Side, distance: float) -> Position:
    """Offset ``pos`` outward from a node edge named ``side``."""
    vector = side.vector
    return Position(pos.x + vector.x * distance, pos.y + vector.y * distance)


def snap_to_grid(value: float, grid_size: float) -> float:
    """Round ``value`` to the nearest multiple of ``grid_size``."""
    return round(value / grid_size) * grid_size


def segment_crosses_bbox(start: Position, end: Position, bbox: BBox) -> bool:
    """Check whether an axis-aligned segment passes through the interior of ``bbox``.

    Segments running along the boundary do not count as crossing.
    """
    min_x, max_x = sorted((start.x, end.x))
    min_y, max_y = sorted((start.y, end.y))
    return min_x < bbox.max_x and max_x > bbox.min_x and min_y < bbox.max_y and max_y > bbox.min_y
