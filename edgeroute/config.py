"""Routing configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping


class PathfindingMethod(Enum):
    """Available edge routing strategies."""

    BEZIER = "bezier"  # host keeps its default curve
    DIRECT = "direct"
    SQUARE = "square"
    A_STAR = "a-star"

    @classmethod
    def parse(cls, value: str | PathfindingMethod | None) -> PathfindingMethod:
        """Convert a method name to ``PathfindingMethod``. ``None`` means bezier."""
        if isinstance(value, PathfindingMethod):
            return value
        if value is None:
            return cls.BEZIER
        try:
            return cls(value)
        except ValueError:
            valid = ", ".join(m.value for m in cls)
            raise ValueError(f"Invalid pathfinding method '{value}', must be one of: {valid}") from None


# Host setting keys read by RoutingConfig.from_settings
SETTING_GRID_RESOLUTION = "edgeStylePathfinderGridResolution"
SETTING_PATH_ROUNDED = "edgeStylePathfinderPathRounded"
SETTING_ALLOW_DIAGONAL = "edgeStylePathfinderAllowDiagonal"
SETTING_UPDATE_WHILE_DRAGGING = "edgeStyleUpdateWhileDragging"
SETTING_PATHFINDING_METHOD = "edgeStylePathfindingMethod"

MIN_GRID_RESOLUTION = 5


@dataclass
class RoutingConfig:
    """Configuration for edge routing."""

    strategy: PathfindingMethod = PathfindingMethod.BEZIER
    grid_resolution: float = 10
    allow_diagonal: bool = False
    round_corners: bool = True
    live_update_during_drag: bool = False
    # Outward offset applied to A* endpoints before grid snapping
    margin: float = 10.0
    # Wall-clock budget for one A* search
    time_budget_ms: float = 100.0
    corner_radius: float = 5.0
    # Catmull-Rom tension for diagonal A* paths (0 = angular, 1 = loose)
    spline_tension: float = 0.3

    def __post_init__(self) -> None:
        self.strategy = PathfindingMethod.parse(self.strategy)
        if self.grid_resolution <= 0:
            raise ValueError(f"grid_resolution must be positive, got {self.grid_resolution}")
        if self.margin < 0:
            raise ValueError(f"margin must not be negative, got {self.margin}")
        if self.time_budget_ms < 0:
            raise ValueError(f"time_budget_ms must not be negative, got {self.time_budget_ms}")
        if self.corner_radius < 0:
            raise ValueError(f"corner_radius must not be negative, got {self.corner_radius}")
        if not 0 <= self.spline_tension <= 1:
            raise ValueError(f"spline_tension must be within [0, 1], got {self.spline_tension}")

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any]) -> RoutingConfig:
        """Build a config from host plugin settings.

        Missing keys fall back to defaults; unknown keys are ignored.

        Args:
            settings: Mapping of host setting keys to values

        Returns:
            Validated RoutingConfig
        """
        kwargs: dict[str, Any] = {}

        if SETTING_GRID_RESOLUTION in settings:
            kwargs["grid_resolution"] = _parse_grid_resolution(settings[SETTING_GRID_RESOLUTION])
        if SETTING_PATH_ROUNDED in settings:
            kwargs["round_corners"] = bool(settings[SETTING_PATH_ROUNDED])
        if SETTING_ALLOW_DIAGONAL in settings:
            kwargs["allow_diagonal"] = bool(settings[SETTING_ALLOW_DIAGONAL])
        if SETTING_UPDATE_WHILE_DRAGGING in settings:
            kwargs["live_update_during_drag"] = bool(settings[SETTING_UPDATE_WHILE_DRAGGING])
        if SETTING_PATHFINDING_METHOD in settings:
            kwargs["strategy"] = settings[SETTING_PATHFINDING_METHOD]

        return cls(**kwargs)


def _parse_grid_resolution(value: Any) -> int:
    """Parse a grid resolution the way the host settings field does (min 5)."""
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        parsed = 0
    return max(MIN_GRID_RESOLUTION, parsed)
