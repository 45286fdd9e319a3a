"""edgeroute - Edge routing for infinite 2-D canvases.

Example usage:
    from edgeroute import BBox, Position, RouteEndpoints, RoutingConfig, compute_route

    config = RoutingConfig(strategy="a-star", grid_resolution=20)
    endpoints = RouteEndpoints(
        from_node_bbox=BBox(-100, 0, 0, 100), from_pos=Position(0, 50), from_side="right",
        to_node_bbox=BBox(200, 0, 300, 100), to_pos=Position(200, 50), to_side="left",
    )
    result = compute_route(config, endpoints, obstacles=[BBox(80, 0, 120, 100)])
    if result is not None:
        print(result.svg_path, result.center)
"""

from .canvas import (
    Canvas,
)
from .config import (
    PathfindingMethod,
    RoutingConfig,
)
from .geometry import (
    combine_bboxes,
    get_center_of_bbox_side,
    inside_bbox,
    is_colliding,
    move_in_direction,
    scale_bbox,
)
from .models import (
    BBox,
    PathResult,
    Position,
    RouteEndpoints,
    RouteRequest,
    Side,
)
from .pathfinding import (
    GridSearch,
    route_a_star,
)
from .router import (
    compute_route,
    route_direct,
    should_update_edge,
)
from .square import (
    route_square,
)
from .svgpath import (
    compute_polyline,
    compute_rounded_polyline,
    compute_spline,
    to_svg_path,
)

__version__ = "0.1.0"

__all__ = [
    # Routing
    "compute_route",
    "route_direct",
    "route_square",
    "route_a_star",
    "should_update_edge",
    "GridSearch",
    "Canvas",
    # Configuration
    "RoutingConfig",
    "PathfindingMethod",
    # Models
    "BBox",
    "Position",
    "Side",
    "RouteEndpoints",
    "RouteRequest",
    "PathResult",
    # Geometry
    "inside_bbox",
    "is_colliding",
    "combine_bboxes",
    "scale_bbox",
    "get_center_of_bbox_side",
    "move_in_direction",
    # Path serialization
    "compute_polyline",
    "compute_rounded_polyline",
    "compute_spline",
    "to_svg_path",
    # Version
    "__version__",
]
