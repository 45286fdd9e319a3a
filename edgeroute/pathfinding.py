"""Grid-based A* pathfinding for edge routing."""

from __future__ import annotations

import heapq
import logging
import math
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .geometry import inside_bbox, move_in_direction
from .models import PathResult, Position, Side
from .svgpath import compute_polyline, compute_rounded_polyline, compute_spline, simplify_collinear

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from .config import RoutingConfig
    from .models import BBox, RouteRequest

logger = logging.getLogger(__name__)

DIAGONAL_COST = math.sqrt(2)
ORTHOGONAL_DIRECTIONS = ((1, 0), (-1, 0), (0, 1), (0, -1))
DIAGONAL_DIRECTIONS = ((1, 1), (-1, 1), (1, -1), (-1, -1))

Cell = tuple[int, int]


@dataclass
class SearchNode:
    """A grid cell visited by one search.

    Cells are addressed by integer (col, row); canvas coordinates are
    ``col * grid_resolution``, ``row * grid_resolution``. ``parent`` is the
    index of the predecessor in the search arena.
    """

    col: int
    row: int
    g_cost: float = 0.0
    h_cost: float = 0.0
    parent: int | None = None

    @property
    def f_cost(self) -> float:
        return self.g_cost + self.h_cost

    @property
    def cell(self) -> Cell:
        return (self.col, self.row)


class GridSearch:
    """Time-boxed A* search over an unbounded uniform grid.

    Nodes are kept in an arena list owned by a single ``find_path`` call.
    The open list is a heap of ``(f_cost, arena_index)``; among equal
    f-costs the node created first is expanded first.
    """

    def __init__(
        self,
        obstacles: Iterable[BBox],
        grid_resolution: float,
        allow_diagonal: bool = False,
        time_budget_ms: float = 100.0,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """Initialize the search.

        Args:
            obstacles: Bboxes that paths must not enter
            grid_resolution: Cell size in canvas units
            allow_diagonal: Also move along the four diagonals
            time_budget_ms: Give up after this much wall-clock time
            clock: Monotonic clock returning seconds
        """
        self.obstacles = tuple(obstacles)
        self.grid_resolution = grid_resolution
        self.allow_diagonal = allow_diagonal
        self.time_budget_ms = time_budget_ms
        self.clock = clock
        self.directions = ORTHOGONAL_DIRECTIONS + DIAGONAL_DIRECTIONS if allow_diagonal else ORTHOGONAL_DIRECTIONS

    def snap(self, pos: Position, side: Side) -> Cell:
        """Snap a position to the grid cell just outside the node on ``side``.

        Coordinates are floored; for right and bottom sides an unaligned
        coordinate is advanced by one cell so the cell lies outside the node.
        """
        col = math.floor(pos.x / self.grid_resolution)
        row = math.floor(pos.y / self.grid_resolution)
        if side is Side.RIGHT and col * self.grid_resolution != pos.x:
            col += 1
        if side is Side.BOTTOM and row * self.grid_resolution != pos.y:
            row += 1
        return (col, row)

    def to_position(self, cell: Cell) -> Position:
        return Position(cell[0] * self.grid_resolution, cell[1] * self.grid_resolution)

    def is_inside_obstacle(self, cell: Cell) -> bool:
        pos = self.to_position(cell)
        return any(inside_bbox(pos, obstacle, False) for obstacle in self.obstacles)

    def is_touching_obstacle(self, cell: Cell) -> bool:
        pos = self.to_position(cell)
        return any(inside_bbox(pos, obstacle, True) for obstacle in self.obstacles)

    def heuristic(self, cell: Cell, end: Cell) -> float:
        """Manhattan distance in canvas units (also used with diagonal moves)."""
        return (abs(cell[0] - end[0]) + abs(cell[1] - end[1])) * self.grid_resolution

    def find_path(
        self,
        start_pos: Position,
        start_side: Side,
        end_pos: Position,
        end_side: Side,
    ) -> list[Position] | None:
        """Find a grid path between two positions.

        Args:
            start_pos: Search start in canvas coordinates
            start_side: Side of the start node the search leaves from
            end_pos: Search goal in canvas coordinates
            end_side: Side of the end node the search arrives at

        Returns:
            Grid cell positions from start to end, or None if there is no
            path or the time budget ran out
        """
        start = self.snap(start_pos, start_side)
        end = self.snap(end_pos, end_side)

        if self.is_inside_obstacle(start) or self.is_inside_obstacle(end):
            logger.debug(f"A* start {start} or end {end} lies inside an obstacle")
            return None

        arena = [SearchNode(start[0], start[1], h_cost=self.heuristic(start, end))]
        best: dict[Cell, int] = {start: 0}
        closed: set[Cell] = set()
        open_heap: list[tuple[float, int]] = [(arena[0].f_cost, 0)]

        deadline = self.clock() + self.time_budget_ms / 1000

        while open_heap:
            if self.clock() > deadline:
                logger.debug(f"A* gave up after {self.time_budget_ms}ms with {len(closed)} cells closed")
                return None

            _, index = heapq.heappop(open_heap)
            current = arena[index]
            cell = current.cell

            # Superseded by a cheaper entry for the same cell
            if cell in closed or best[cell] != index:
                continue
            closed.add(cell)

            if cell == end:
                return self._reconstruct(arena, index)

            # Cells touching an obstacle may be reached but not passed through
            if cell != start and self.is_touching_obstacle(cell):
                continue

            for dc, dr in self.directions:
                neighbor = (cell[0] + dc, cell[1] + dr)
                if neighbor in closed or self.is_inside_obstacle(neighbor):
                    continue

                g_cost = current.g_cost + (DIAGONAL_COST if dc and dr else 1.0)
                known = best.get(neighbor)
                if known is not None and g_cost >= arena[known].g_cost:
                    continue

                node = SearchNode(
                    neighbor[0],
                    neighbor[1],
                    g_cost=g_cost,
                    h_cost=self.heuristic(neighbor, end),
                    parent=index,
                )
                arena.append(node)
                best[neighbor] = len(arena) - 1
                heapq.heappush(open_heap, (node.f_cost, len(arena) - 1))

        logger.debug(f"A* exhausted the open list after closing {len(closed)} cells")
        return None

    def _reconstruct(self, arena: list[SearchNode], index: int) -> list[Position]:
        """Walk parent indices back to the start."""
        path: list[Position] = []
        current: int | None = index
        while current is not None:
            node = arena[current]
            path.append(self.to_position(node.cell))
            current = node.parent
        path.reverse()
        return path


def route_a_star(
    request: RouteRequest,
    config: RoutingConfig,
    clock: Callable[[], float] = time.perf_counter,
) -> PathResult | None:
    """Route an edge around obstacles with a grid A* search.

    Args:
        request: Resolved endpoint geometry and obstacles
        config: Routing configuration
        clock: Monotonic clock for the time budget

    Returns:
        PathResult, or None if no path was found in time
    """
    from_anchor = move_in_direction(request.from_pos, request.from_side, config.margin)
    to_anchor = move_in_direction(request.to_pos, request.to_side, config.margin)

    # Obstacles enclosing an anchor (e.g. a surrounding group) would make the search unsolvable
    obstacles = [
        obstacle
        for obstacle in request.obstacles
        if not inside_bbox(from_anchor, obstacle, True) and not inside_bbox(to_anchor, obstacle, True)
    ]

    search = GridSearch(
        obstacles,
        config.grid_resolution,
        allow_diagonal=config.allow_diagonal,
        time_budget_ms=config.time_budget_ms,
        clock=clock,
    )
    cells = search.find_path(from_anchor, request.from_side, to_anchor, request.to_side)
    if cells is None:
        return None

    waypoints = [request.from_pos, *cells, request.to_pos]
    simplified = simplify_collinear(waypoints)

    if config.round_corners and config.allow_diagonal:
        commands = compute_spline(simplified, config.spline_tension)
    elif config.round_corners:
        commands = compute_rounded_polyline(simplified, config.corner_radius)
    else:
        commands = compute_polyline(simplified)

    return PathResult(
        waypoints=waypoints,
        commands=commands,
        center=waypoints[len(waypoints) // 2],
        rotate_arrows=False,
    )
