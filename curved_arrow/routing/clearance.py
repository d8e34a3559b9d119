"""
Clearance validation for routed connector paths.

Checks whether a polyline keeps clear of obstacle boxes so the router can
report when its single-pass heuristic left an obstacle in the way.
"""

from typing import List, Sequence, Tuple

from ..core.geometry import EntityRect

Point = Tuple[float, float]


def remove_duplicate_points(points: Sequence[Point], tolerance: float = 0.1) -> List[Point]:
    """
    Remove consecutive duplicate points.

    Args:
        points: List of (x, y) coordinates
        tolerance: Distance threshold for considering points duplicate

    Returns:
        Deduplicated point list (the final point is always kept)
    """
    if not points:
        return []

    cleaned = [points[0]]

    for point in points[1:]:
        x1, y1 = cleaned[-1]
        x2, y2 = point
        if abs(x2 - x1) > tolerance or abs(y2 - y1) > tolerance:
            cleaned.append(point)

    if cleaned[-1] != points[-1]:
        cleaned[-1] = points[-1]

    return cleaned


def segment_intersects_box(p1: Point, p2: Point, box: EntityRect) -> bool:
    """
    Check if a line segment touches the interior of an axis-aligned box.

    Liang-Barsky clipping of the parametric segment P = P1 + t * (P2 - P1)
    against the box slabs.
    """
    x1, y1 = p1
    x2, y2 = p2
    dx = x2 - x1
    dy = y2 - y1

    t_min, t_max = 0.0, 1.0

    for p, q in (
        (-dx, x1 - box.left),
        (dx, box.right - x1),
        (-dy, y1 - box.top),
        (dy, box.bottom - y1),
    ):
        if p == 0:
            # Parallel to this slab: outside means no hit
            if q <= 0:
                return False
            continue
        t = q / p
        if p < 0:
            t_min = max(t_min, t)
        else:
            t_max = min(t_max, t)
        if t_min >= t_max:
            return False

    return True


def validate_clearance(
    points: Sequence[Point],
    obstacles: Sequence[EntityRect],
    margin: float = 0.0
) -> bool:
    """
    Validate that a polyline keeps clear of every obstacle.

    Args:
        points: List of (x, y) waypoints
        obstacles: Obstacle rects (container-relative)
        margin: Required clearance around each obstacle

    Returns:
        True if the path is clear, False if any segment crosses an obstacle
    """
    if len(points) < 2:
        return True

    boxes = [obstacle.expand(margin) for obstacle in obstacles]

    for i in range(len(points) - 1):
        for box in boxes:
            if segment_intersects_box(points[i], points[i + 1], box):
                return False

    return True


def blocking_obstacles(
    points: Sequence[Point],
    obstacles: Sequence[EntityRect],
    margin: float = 0.0
) -> List[int]:
    """Indexes of obstacles crossed by the polyline."""
    blocked = []
    for index, obstacle in enumerate(obstacles):
        if not validate_clearance(points, [obstacle], margin):
            blocked.append(index)
    return blocked
