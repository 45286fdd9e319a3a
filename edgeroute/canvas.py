"""In-memory canvas snapshot for routing many edges back to back."""

from __future__ import annotations

import dataclasses
import logging
import time
from typing import TYPE_CHECKING, Any

import networkx as nx

from .config import PathfindingMethod
from .geometry import bbox_from_points, combine_bboxes, get_center_of_bbox_side, inside_bbox, is_colliding
from .models import RouteEndpoints, parse_side
from .router import compute_route, should_update_edge

if TYPE_CHECKING:
    from collections.abc import Callable

    from .config import RoutingConfig
    from .models import BBox, PathResult, Position, Side

logger = logging.getLogger(__name__)

GROUP_NODE_TYPE = "group"
NO_END = "none"


class Canvas:
    """Nodes and edges of a host canvas held in a NetworkX multigraph.

    Graph nodes are keyed by node id and carry ``bbox``, ``node_type`` and
    ``is_open_portal``. Graph edges are keyed by edge id and carry the
    connection sides, line ends, optional rendered endpoints, an optional
    per-edge pathfinding method and the last computed ``path``.
    """

    def __init__(self) -> None:
        self.graph: nx.MultiDiGraph = nx.MultiDiGraph()
        self._edge_nodes: dict[str, tuple[str, str]] = {}

    def add_node(
        self,
        node_id: str,
        bbox: BBox,
        node_type: str = "text",
        is_open_portal: bool = False,
    ) -> None:
        self.graph.add_node(node_id, bbox=bbox, node_type=node_type, is_open_portal=is_open_portal)

    def move_node(self, node_id: str, bbox: BBox) -> BBox:
        """Change a node's bbox.

        Returns:
            Area covering the old and new bbox (edges in it need re-routing)
        """
        old_bbox = self._node_data(node_id)["bbox"]
        self.graph.nodes[node_id]["bbox"] = bbox
        return combine_bboxes([old_bbox, bbox])

    def remove_node(self, node_id: str) -> BBox:
        """Remove a node and its edges.

        Returns:
            The removed node's bbox
        """
        bbox = self._node_data(node_id)["bbox"]
        for _, _, edge_id in list(self.graph.in_edges(node_id, keys=True)) + list(self.graph.out_edges(node_id, keys=True)):
            self._edge_nodes.pop(edge_id, None)
        self.graph.remove_node(node_id)
        return bbox

    def add_edge(
        self,
        edge_id: str,
        from_node: str,
        from_side: str | Side,
        to_node: str,
        to_side: str | Side,
        *,
        from_end: str = NO_END,
        to_end: str = "arrow",
        from_pos: Position | None = None,
        to_pos: Position | None = None,
        pathfinding_method: str | PathfindingMethod | None = None,
    ) -> None:
        """Add an edge between two existing nodes.

        Args:
            edge_id: Unique edge id
            from_node: Source node id
            from_side: Side of the source node the edge attaches to
            to_node: Target node id
            to_side: Side of the target node the edge attaches to
            from_end: Line end at the source ("none" or an arrow style)
            to_end: Line end at the target
            from_pos: Rendered source endpoint (used when from_end has an arrow)
            to_pos: Rendered target endpoint (used when to_end has an arrow)
            pathfinding_method: Per-edge strategy overriding the config

        Raises:
            KeyError: If a node id is unknown
            ValueError: If the edge id exists or a side or method is invalid
        """
        for node_id in (from_node, to_node):
            self._node_data(node_id)
        if edge_id in self._edge_nodes:
            raise ValueError(f"Edge '{edge_id}' already exists")

        method = PathfindingMethod.parse(pathfinding_method) if pathfinding_method is not None else None
        self.graph.add_edge(
            from_node,
            to_node,
            key=edge_id,
            from_side=parse_side(from_side),
            to_side=parse_side(to_side),
            from_end=from_end,
            to_end=to_end,
            from_pos=from_pos,
            to_pos=to_pos,
            pathfinding_method=method,
            path=None,
        )
        self._edge_nodes[edge_id] = (from_node, to_node)

    def endpoints(self, edge_id: str) -> RouteEndpoints:
        """Resolve the routing endpoints of an edge.

        An end without a line end attaches at the center of its node side;
        otherwise the rendered endpoint (which leaves room for the arrow) is used.
        """
        from_node, to_node = self._edge_ids(edge_id)
        data = self._edge_data(edge_id)
        from_bbox = self.graph.nodes[from_node]["bbox"]
        to_bbox = self.graph.nodes[to_node]["bbox"]

        return RouteEndpoints(
            from_node_bbox=from_bbox,
            from_pos=_resolve_end(from_bbox, data["from_side"], data["from_end"], data["from_pos"]),
            from_side=data["from_side"],
            to_node_bbox=to_bbox,
            to_pos=_resolve_end(to_bbox, data["to_side"], data["to_end"], data["to_pos"]),
            to_side=data["to_side"],
        )

    def obstacles_for(self, edge_id: str) -> list[BBox]:
        """Node bboxes an edge must avoid.

        Open portals never block. Groups that contain either endpoint are
        skipped, since the edge has to start or end inside them.
        """
        endpoints = self.endpoints(edge_id)
        obstacles = []
        for _, attrs in self.graph.nodes(data=True):
            if attrs["is_open_portal"]:
                continue
            bbox = attrs["bbox"]
            if attrs["node_type"] == GROUP_NODE_TYPE and (
                inside_bbox(endpoints.from_pos, bbox, True) or inside_bbox(endpoints.to_pos, bbox, True)
            ):
                continue
            obstacles.append(bbox)
        return obstacles

    def route_edge(
        self,
        edge_id: str,
        config: RoutingConfig,
        clock: Callable[[], float] = time.perf_counter,
    ) -> PathResult | None:
        """Route one edge and remember the result.

        A failed route leaves the previously stored path untouched.
        """
        data = self._edge_data(edge_id)
        if data["pathfinding_method"] is not None:
            config = dataclasses.replace(config, strategy=data["pathfinding_method"])

        result = compute_route(config, self.endpoints(edge_id), self.obstacles_for(edge_id), clock=clock)
        if result is not None:
            data["path"] = result
        return result

    def path(self, edge_id: str) -> PathResult | None:
        """Last successfully computed path of an edge."""
        return self._edge_data(edge_id)["path"]

    def edge_bbox(self, edge_id: str) -> BBox:
        """Bbox of the edge's current path, or of its endpoints if never routed."""
        path = self.path(edge_id)
        if path is not None:
            return bbox_from_points(path.waypoints)
        endpoints = self.endpoints(edge_id)
        return bbox_from_points([endpoints.from_pos, endpoints.to_pos])

    def edges_in_area(self, area: BBox) -> list[str]:
        return [edge_id for edge_id in self._edge_nodes if is_colliding(self.edge_bbox(edge_id), area)]

    def reroute_area(
        self,
        area: BBox,
        config: RoutingConfig,
        is_dragging: bool = False,
        is_connecting: bool = False,
        clock: Callable[[], float] = time.perf_counter,
    ) -> dict[str, PathResult | None]:
        """Re-route every edge whose path collides with ``area``.

        Returns:
            Mapping of edge id to the new result (None where routing failed)
        """
        if not should_update_edge(config, is_dragging, is_connecting):
            logger.debug("Skipping edge re-routing while dragging")
            return {}
        return {edge_id: self.route_edge(edge_id, config, clock=clock) for edge_id in self.edges_in_area(area)}

    def _node_data(self, node_id: str) -> dict[str, Any]:
        if node_id not in self.graph:
            raise KeyError(f"Unknown node '{node_id}'")
        return self.graph.nodes[node_id]

    def _edge_ids(self, edge_id: str) -> tuple[str, str]:
        try:
            return self._edge_nodes[edge_id]
        except KeyError:
            raise KeyError(f"Unknown edge '{edge_id}'") from None

    def _edge_data(self, edge_id: str) -> dict[str, Any]:
        from_node, to_node = self._edge_ids(edge_id)
        return self.graph.edges[from_node, to_node, edge_id]


def _resolve_end(bbox: BBox, side: Side, end: str, rendered_pos: Position | None) -> Position:
    side_center = get_center_of_bbox_side(bbox, side)
    if end == NO_END or rendered_pos is None:
        return side_center
    return rendered_pos
