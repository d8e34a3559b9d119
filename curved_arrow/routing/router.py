"""
Greedy obstacle router for connector paths.

Single forward pass over the obstacles in input order: each obstacle whose
margin-expanded box overlaps the span between the running point and the end
gets exactly one detour waypoint, and routing continues from there. This is
a local heuristic, not a path planner: overlapping or chained obstacles can
still be crossed, which is reported through RouteResult.clear.
"""

import logging
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass, field

from ..core.geometry import AnchorPoint, EntityRect
from .clearance import blocking_obstacles, remove_duplicate_points

logger = logging.getLogger(__name__)

OBSTACLE_MARGIN = 25.0
HORIZONTAL_CLEARANCE = 20.0
VERTICAL_CLEARANCE = 10.0


@dataclass
class RouteResult:
    """Outcome of a routing pass."""
    waypoints: List[AnchorPoint] = field(default_factory=list)
    control_anchor: Optional[AnchorPoint] = None
    clear: bool = True
    blocked: List[int] = field(default_factory=list)

    @property
    def detoured(self) -> bool:
        return bool(self.waypoints)

    def polyline(self, start: AnchorPoint, end: AnchorPoint) -> List[Tuple[float, float]]:
        """Full point sequence start -> waypoints -> end."""
        points = [start.as_tuple()] + [w.as_tuple() for w in self.waypoints] + [end.as_tuple()]
        return remove_duplicate_points(points)


def span_intersects(current: AnchorPoint, end: AnchorPoint, box: EntityRect) -> bool:
    """
    True when the bounding span of current -> end overlaps the box on both axes.
    """
    x_overlap = min(current.x, end.x) < box.right and max(current.x, end.x) > box.left
    y_overlap = min(current.y, end.y) < box.bottom and max(current.y, end.y) > box.top
    return x_overlap and y_overlap


def detour_waypoint(obstacle: EntityRect, box: EntityRect, end: AnchorPoint) -> AnchorPoint:
    """
    Place a waypoint that clears the expanded box on the side facing the end.
    """
    center = obstacle.center
    go_right = end.x > center.x
    go_up = end.y < center.y
    way_x = box.right + HORIZONTAL_CLEARANCE if go_right else box.left - HORIZONTAL_CLEARANCE
    way_y = box.top - VERTICAL_CLEARANCE if go_up else box.bottom + VERTICAL_CLEARANCE
    return AnchorPoint(way_x, way_y)


def route(
    start: AnchorPoint,
    end: AnchorPoint,
    obstacles: Sequence[EntityRect],
    margin: float = OBSTACLE_MARGIN
) -> RouteResult:
    """
    Route from start to end around obstacles

    Args:
        start: Start anchor
        end: End anchor
        obstacles: Obstacle rects, visited in the given order
        margin: Clearance added around each obstacle before testing

    Returns:
        RouteResult with the inserted waypoints and the control anchor used
        for end tangents (the last waypoint). With no detour, waypoints is
        empty and control_anchor is None so the caller can fall back to a
        smooth curve.
    """
    waypoints: List[AnchorPoint] = []
    current = start

    for obstacle in obstacles:
        box = obstacle.expand(margin)
        if span_intersects(current, end, box):
            waypoint = detour_waypoint(obstacle, box, end)
            waypoints.append(waypoint)
            current = waypoint

    if not waypoints:
        return RouteResult()

    result = RouteResult(waypoints=waypoints, control_anchor=waypoints[-1])

    blocked = blocking_obstacles(result.polyline(start, end), obstacles)
    if blocked:
        result.clear = False
        result.blocked = blocked
        logger.warning(
            f"Obstacle routing left {len(blocked)} obstacle(s) in the path "
            f"(indexes {blocked}); using best-effort route"
        )

    return result
