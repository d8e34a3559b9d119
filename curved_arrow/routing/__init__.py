"""
Obstacle routing for connector paths.

Provides a single-pass detour heuristic and clearance checks used to
report when the heuristic could not clear every obstacle.
"""

from .router import route, RouteResult, OBSTACLE_MARGIN
from .clearance import validate_clearance, segment_intersects_box, blocking_obstacles

__all__ = [
    'route',
    'RouteResult',
    'OBSTACLE_MARGIN',
    'validate_clearance',
    'segment_intersects_box',
    'blocking_obstacles',
]
