"""
Arrowhead glyph geometry

Every shape is a fixed trigonometric formula over the tip point, the total
orientation angle and the head size. Shapes register by name; unknown names
fall back to the open triangle.
"""

import logging
import math
from typing import Callable, Dict, List, Optional, Tuple

from .geometry import AnchorPoint
from .path import PathBuilder, PathDescription

logger = logging.getLogger(__name__)

WING_ANGLE = math.pi / 6
CHEVRON_ANGLE = math.pi / 4
HOLLOW_INNER_SCALE = 0.6

ShapeFunction = Callable[[float, float, float, float], PathBuilder]

# Global registry mapping head shape names to glyph formulas
HEAD_REGISTRY: Dict[str, ShapeFunction] = {}

# Stroked shapes that become a closed triangle when a fill is forced
FILLABLE_TRIANGLES = ('triangle', 'arrow', 'hollow-triangle')


def register_head(*names: str):
    """Decorator to register a glyph formula under one or more shape names

    Raises:
        ValueError: If a shape name is already registered
    """
    def decorator(func: ShapeFunction):
        for name in names:
            if name in HEAD_REGISTRY:
                raise ValueError(
                    f"Head shape '{name}' is already registered by {HEAD_REGISTRY[name].__name__}"
                )
            HEAD_REGISTRY[name] = func
        return func

    return decorator


def get_head(name: str) -> Optional[ShapeFunction]:
    return HEAD_REGISTRY.get(name)


def list_heads() -> List[str]:
    """List registered head shapes in registration order"""
    return list(HEAD_REGISTRY.keys())


# ============================================================================
# Tangents
# ============================================================================

def start_tangent(start: AnchorPoint, control: AnchorPoint) -> float:
    """Direction of travel leaving the start anchor toward the control anchor."""
    return math.atan2(control.y - start.y, control.x - start.x)


def end_tangent(end: AnchorPoint, control: AnchorPoint) -> float:
    """Direction of travel arriving at the end anchor from the control anchor."""
    return math.atan2(end.y - control.y, end.x - control.x)


def start_head_angle(start: AnchorPoint, control: AnchorPoint) -> float:
    """Start heads point away from the line, against the direction of travel."""
    return start_tangent(start, control) + math.pi


def end_head_angle(end: AnchorPoint, control: AnchorPoint) -> float:
    return end_tangent(end, control)


# ============================================================================
# Shape helpers
# ============================================================================

def _wings(x: float, y: float, angle: float, size: float) -> Tuple[Tuple[float, float], Tuple[float, float]]:
    """Two points at +/-30 degrees behind the tip at radius size."""
    return (
        (x - size * math.cos(angle - WING_ANGLE), y - size * math.sin(angle - WING_ANGLE)),
        (x - size * math.cos(angle + WING_ANGLE), y - size * math.sin(angle + WING_ANGLE)),
    )


def _polygon(builder: PathBuilder, points) -> PathBuilder:
    first, rest = points[0], points[1:]
    builder.move_to(*first)
    for point in rest:
        builder.line_to(*point)
    return builder.close()


def _scale_about(points, cx: float, cy: float, factor: float):
    return [(cx + (px - cx) * factor, cy + (py - cy) * factor) for px, py in points]


def _circle(builder: PathBuilder, x: float, y: float, radius: float, cos: float, sin: float,
            sweep: bool = True) -> PathBuilder:
    """Full circle as two half arcs, starting on the orientation axis."""
    return (
        builder
        .move_to(x + radius * cos, y + radius * sin)
        .arc_to(radius, radius, 0, True, sweep, x - radius * cos, y - radius * sin)
        .arc_to(radius, radius, 0, True, sweep, x + radius * cos, y + radius * sin)
    )


def _square_points(x: float, y: float, half: float, cos: float, sin: float):
    return [
        (x + half * cos - half * sin, y + half * sin + half * cos),
        (x + half * cos + half * sin, y + half * sin - half * cos),
        (x - half * cos + half * sin, y - half * sin - half * cos),
        (x - half * cos - half * sin, y - half * sin + half * cos),
    ]


def _diamond_points(x: float, y: float, d: float, cos: float, sin: float):
    return [
        (x + d * cos, y + d * sin),
        (x + d * sin, y - d * cos),
        (x - d * cos, y - d * sin),
        (x - d * sin, y + d * cos),
    ]


# ============================================================================
# Shapes
# ============================================================================

@register_head('triangle', 'arrow')
def open_wings(x: float, y: float, angle: float, size: float) -> PathBuilder:
    (x1, y1), (x2, y2) = _wings(x, y, angle, size)
    return PathBuilder().move_to(x, y).line_to(x1, y1).move_to(x, y).line_to(x2, y2)


@register_head('filled-triangle')
def closed_triangle(x: float, y: float, angle: float, size: float) -> PathBuilder:
    (x1, y1), (x2, y2) = _wings(x, y, angle, size)
    return PathBuilder().move_to(x, y).line_to(x1, y1).line_to(x2, y2).close()


@register_head('hollow-triangle')
def hollow_triangle(x: float, y: float, angle: float, size: float) -> PathBuilder:
    outer = [(x, y), *_wings(x, y, angle, size)]
    cx = sum(p[0] for p in outer) / 3
    cy = sum(p[1] for p in outer) / 3
    builder = _polygon(PathBuilder(), outer)
    return _polygon(builder, _scale_about(outer, cx, cy, HOLLOW_INNER_SCALE))


@register_head('circle', 'filled-circle')
def circle(x: float, y: float, angle: float, size: float) -> PathBuilder:
    return _circle(PathBuilder(), x, y, size, math.cos(angle), math.sin(angle))


@register_head('hollow-circle')
def hollow_circle(x: float, y: float, angle: float, size: float) -> PathBuilder:
    cos, sin = math.cos(angle), math.sin(angle)
    builder = _circle(PathBuilder(), x, y, size, cos, sin)
    # Inner contour runs the other way so nonzero fills leave a hole
    return _circle(builder, x, y, size * HOLLOW_INNER_SCALE, cos, sin, sweep=False)


@register_head('square', 'filled-square')
def square(x: float, y: float, angle: float, size: float) -> PathBuilder:
    return _polygon(PathBuilder(), _square_points(x, y, size * 0.7, math.cos(angle), math.sin(angle)))


@register_head('hollow-square')
def hollow_square(x: float, y: float, angle: float, size: float) -> PathBuilder:
    cos, sin = math.cos(angle), math.sin(angle)
    half = size * 0.7
    builder = _polygon(PathBuilder(), _square_points(x, y, half, cos, sin))
    return _polygon(builder, list(reversed(_square_points(x, y, half * HOLLOW_INNER_SCALE, cos, sin))))


@register_head('diamond', 'filled-diamond')
def diamond(x: float, y: float, angle: float, size: float) -> PathBuilder:
    return _polygon(PathBuilder(), _diamond_points(x, y, size * 0.8, math.cos(angle), math.sin(angle)))


@register_head('hollow-diamond')
def hollow_diamond(x: float, y: float, angle: float, size: float) -> PathBuilder:
    cos, sin = math.cos(angle), math.sin(angle)
    d = size * 0.8
    builder = _polygon(PathBuilder(), _diamond_points(x, y, d, cos, sin))
    return _polygon(builder, list(reversed(_diamond_points(x, y, d * HOLLOW_INNER_SCALE, cos, sin))))


@register_head('star')
def star(x: float, y: float, angle: float, size: float) -> PathBuilder:
    """Ten points alternating radius 1.0 / 0.4 of size."""
    points = []
    for i in range(10):
        a = angle + i * math.pi / 5
        r = size if i % 2 == 0 else size * 0.4
        points.append((x + r * math.cos(a), y + r * math.sin(a)))
    return _polygon(PathBuilder(), points)


@register_head('heart')
def heart(x: float, y: float, angle: float, size: float) -> PathBuilder:
    cos, sin = math.cos(angle), math.sin(angle)
    s = size * 0.6
    hx1 = x - s * 0.5 * cos + s * 0.8 * sin
    hy1 = y - s * 0.5 * sin - s * 0.8 * cos
    hx2 = x + s * 0.5 * cos + s * 0.8 * sin
    hy2 = y + s * 0.5 * sin - s * 0.8 * cos
    return (
        PathBuilder()
        .move_to(x, y)
        .cubic_to(hx1, hy1, x - s * cos, y - s * sin, x - s * 0.5 * cos, y - s * 0.5 * sin)
        .cubic_to(x, y - s * sin, x + s * 0.5 * cos, y + s * 0.5 * sin, x + s * cos, y + s * sin)
        .cubic_to(hx2, hy2, x, y, x, y)
    )


@register_head('cross')
def cross(x: float, y: float, angle: float, size: float) -> PathBuilder:
    cos, sin = math.cos(angle), math.sin(angle)
    s = size * 0.8
    return (
        PathBuilder()
        .move_to(x - s * cos, y - s * sin).line_to(x + s * cos, y + s * sin)
        .move_to(x - s * sin, y + s * cos).line_to(x + s * sin, y - s * cos)
    )


@register_head('plus')
def plus(x: float, y: float, angle: float, size: float) -> PathBuilder:
    # Only the first bar follows the orientation; the second stays vertical
    cos, sin = math.cos(angle), math.sin(angle)
    s = size * 0.8
    return (
        PathBuilder()
        .move_to(x - s * cos, y - s * sin).line_to(x + s * cos, y + s * sin)
        .move_to(x, y - s).line_to(x, y + s)
    )


@register_head('chevron')
def chevron(x: float, y: float, angle: float, size: float) -> PathBuilder:
    c = size * 0.8
    x1 = x - c * math.cos(angle - CHEVRON_ANGLE)
    y1 = y - c * math.sin(angle - CHEVRON_ANGLE)
    x2 = x - c * math.cos(angle + CHEVRON_ANGLE)
    y2 = y - c * math.sin(angle + CHEVRON_ANGLE)
    return PathBuilder().move_to(x1, y1).line_to(x, y).line_to(x2, y2)


@register_head('double-chevron')
def double_chevron(x: float, y: float, angle: float, size: float) -> PathBuilder:
    c = size * 0.6
    x1 = x - c * math.cos(angle - CHEVRON_ANGLE)
    y1 = y - c * math.sin(angle - CHEVRON_ANGLE)
    x2 = x - c * math.cos(angle + CHEVRON_ANGLE)
    y2 = y - c * math.sin(angle + CHEVRON_ANGLE)
    x3 = x - c * 1.6 * math.cos(angle - CHEVRON_ANGLE)
    y3 = y - c * 1.6 * math.sin(angle - CHEVRON_ANGLE)
    x4 = x - c * 1.6 * math.cos(angle + CHEVRON_ANGLE)
    y4 = y - c * 1.6 * math.sin(angle + CHEVRON_ANGLE)
    cx = x - c * 0.8 * math.cos(angle)
    cy = y - c * 0.8 * math.sin(angle)
    return (
        PathBuilder()
        .move_to(x1, y1).line_to(x, y).line_to(x2, y2)
        .move_to(x3, y3).line_to(cx, cy).line_to(x4, y4)
    )


@register_head('line')
def line(x: float, y: float, angle: float, size: float) -> PathBuilder:
    """Bar across the line direction."""
    cos, sin = math.cos(angle), math.sin(angle)
    s = size * 0.8
    return PathBuilder().move_to(x - s * sin, y + s * cos).line_to(x + s * sin, y - s * cos)


@register_head('dot')
def dot(x: float, y: float, angle: float, size: float) -> PathBuilder:
    r = size * 0.3
    return (
        PathBuilder()
        .move_to(x + r, y)
        .arc_to(r, r, 0, True, True, x - r, y)
        .arc_to(r, r, 0, True, True, x + r, y)
    )


@register_head('dash')
def dash(x: float, y: float, angle: float, size: float) -> PathBuilder:
    """Short bar along the line direction."""
    s = size * 0.6
    cos, sin = math.cos(angle), math.sin(angle)
    return PathBuilder().move_to(x - s * cos, y - s * sin).line_to(x + s * cos, y + s * sin)


def build_head(
    point: AnchorPoint,
    tangent_angle: float,
    size: float,
    shape: str,
    rotation_degrees: float = 0.0,
    force_filled: bool = False
) -> PathDescription:
    """
    Build the glyph path for one arrowhead

    Args:
        point: Tip position (the connector anchor)
        tangent_angle: Head orientation in radians
        size: Base glyph size
        shape: Shape preset name
        rotation_degrees: Extra rotation applied around the tip
        force_filled: Turn stroked triangle-like shapes into a closed triangle

    Returns:
        PathDescription of the glyph (style is the shape actually drawn)

    Examples:
        >>> build_head(AnchorPoint(50, 50), 0.0, 20, 'filled-triangle').to_svg()
        'M 50 50 L 32.679 60 L 32.679 40 Z'
    """
    total_angle = tangent_angle + math.radians(rotation_degrees)

    if force_filled and shape in FILLABLE_TRIANGLES:
        drawn = 'filled-triangle'
    elif shape in HEAD_REGISTRY:
        drawn = shape
    else:
        logger.debug(f"Unknown head shape '{shape}', drawing an open triangle")
        drawn = 'triangle'

    builder = HEAD_REGISTRY[drawn](point.x, point.y, total_angle, size)
    return builder.build(style=drawn)
