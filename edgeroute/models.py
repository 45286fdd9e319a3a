"""Data models for edge routing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Iterable

    import drawsvg as draw


@dataclass(frozen=True)
class Position:
    """A point in canvas space."""

    x: float
    y: float


@dataclass(frozen=True)
class BBox:
    """Axis-aligned bounding box of a node or obstacle."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_rect(cls, x: float, y: float, width: float, height: float) -> BBox:
        """Build a bbox from a node's top-left corner and size."""
        return cls(min_x=x, min_y=y, max_x=x + width, max_y=y + height)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Position:
        return Position((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)


class Side(Enum):
    """Edge of a node bbox that a connection attaches to."""

    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"

    @property
    def opposite(self) -> Side:
        return _OPPOSITE_SIDES[self]

    @property
    def is_horizontal(self) -> bool:
        """True for sides whose outward direction runs along the x axis."""
        return self in (Side.LEFT, Side.RIGHT)

    @property
    def direction(self) -> int:
        """Sign of the outward direction along the side's axis."""
        return 1 if self in (Side.RIGHT, Side.BOTTOM) else -1

    @property
    def vector(self) -> Position:
        """Outward unit normal (canvas y grows downward)."""
        if self.is_horizontal:
            return Position(self.direction, 0)
        return Position(0, self.direction)


_OPPOSITE_SIDES = {
    Side.TOP: Side.BOTTOM,
    Side.BOTTOM: Side.TOP,
    Side.LEFT: Side.RIGHT,
    Side.RIGHT: Side.LEFT,
}


def parse_side(value: str | Side) -> Side:
    """Convert a side name to ``Side``."""
    if isinstance(value, Side):
        return value
    return Side(value)


@dataclass
class RouteEndpoints:
    """Geometry of both ends of one edge, as supplied by the host canvas."""

    from_node_bbox: BBox
    from_pos: Position
    from_side: Side
    to_node_bbox: BBox
    to_pos: Position
    to_side: Side

    def __post_init__(self) -> None:
        self.from_side = parse_side(self.from_side)
        self.to_side = parse_side(self.to_side)


@dataclass(frozen=True)
class RouteRequest:
    """Resolved endpoint geometry handed to a routing strategy."""

    from_node_bbox: BBox
    from_pos: Position
    from_bbox_side_pos: Position
    from_side: Side
    to_node_bbox: BBox
    to_pos: Position
    to_bbox_side_pos: Position
    to_side: Side
    obstacles: tuple[BBox, ...] = ()

    @classmethod
    def resolve(cls, endpoints: RouteEndpoints, obstacles: Iterable[BBox] = ()) -> RouteRequest:
        """Compute side-center anchors once and snapshot the obstacle list."""
        from .geometry import get_center_of_bbox_side

        return cls(
            from_node_bbox=endpoints.from_node_bbox,
            from_pos=endpoints.from_pos,
            from_bbox_side_pos=get_center_of_bbox_side(endpoints.from_node_bbox, endpoints.from_side),
            from_side=endpoints.from_side,
            to_node_bbox=endpoints.to_node_bbox,
            to_pos=endpoints.to_pos,
            to_bbox_side_pos=get_center_of_bbox_side(endpoints.to_node_bbox, endpoints.to_side),
            to_side=endpoints.to_side,
            obstacles=tuple(obstacles),
        )


@dataclass
class PathResult:
    """A computed edge path.

    ``waypoints`` is the raw route, ``commands`` the renderable curve built
    from it, ``center`` the label anchor.
    """

    waypoints: list[Position]
    commands: list[dict[str, Any]] = field(default_factory=list)
    center: Position = field(default_factory=lambda: Position(0, 0))
    rotate_arrows: bool = False

    def to_drawing_path(self, **attrs: Any) -> draw.Path:
        """Build a drawsvg path element for the curve."""
        from .svgpath import to_svg_path

        return to_svg_path(self.commands, **attrs)

    @property
    def svg_path(self) -> str:
        """SVG path data (the ``d`` attribute) of the curve."""
        return self.to_drawing_path().args["d"]
