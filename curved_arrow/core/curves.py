"""
Curve path generation for connector lines

Each curve style is a deterministic formula over the start anchor, the end
anchor and a bow offset. Styles register themselves by name; unknown names
render as 'smooth'.
"""

import logging
import math
from typing import Callable, Dict, List, Optional, Sequence
from dataclasses import dataclass

from .config import CurveSpec
from .geometry import AnchorPoint, EntityRect
from .path import PathBuilder, PathDescription
from ..routing import route

logger = logging.getLogger(__name__)

MAX_OFFSET = 150.0
WAVE_SEGMENTS = 8
ZIGZAG_SEGMENTS = 6


@dataclass(frozen=True)
class CurveFrame:
    """
    Shared inputs of every curve formula.

    Attributes:
        start, end: Path endpoints
        dx, dy: end - start
        distance: Chord length
        direction: Resolved bow direction (never 'auto')
        offset: min(distance * intensity, 150)
        offset_x, offset_y: Offset applied along the direction axis
    """
    start: AnchorPoint
    end: AnchorPoint
    dx: float
    dy: float
    distance: float
    direction: str
    offset: float
    offset_x: float
    offset_y: float


CurveFunction = Callable[[CurveFrame, Sequence[EntityRect]], PathDescription]

# Global registry mapping curve style names to path formulas
CURVE_REGISTRY: Dict[str, CurveFunction] = {}


def register_curve(*names: str):
    """Decorator to register a curve formula under one or more style names

    Usage:
        @register_curve("smooth")
        def smooth(frame, obstacles):
            ...

    Raises:
        ValueError: If a style name is already registered
    """
    def decorator(func: CurveFunction):
        for name in names:
            if name in CURVE_REGISTRY:
                raise ValueError(
                    f"Curve style '{name}' is already registered by {CURVE_REGISTRY[name].__name__}"
                )
            CURVE_REGISTRY[name] = func
        return func

    return decorator


def get_curve(name: str) -> Optional[CurveFunction]:
    return CURVE_REGISTRY.get(name)


def list_curves() -> List[str]:
    """List registered curve styles in registration order"""
    return list(CURVE_REGISTRY.keys())


def resolve_direction(direction: str, dx: float, dy: float) -> str:
    """
    Resolve 'auto' onto a concrete bow direction.

    A mostly horizontal chord bows vertically (up when dy > 0, else down);
    otherwise it bows horizontally (left when dx > 0, else right).
    """
    if direction != 'auto':
        return direction
    if abs(dx) > abs(dy):
        return 'up' if dy > 0 else 'down'
    return 'left' if dx > 0 else 'right'


def build_frame(start: AnchorPoint, end: AnchorPoint, spec: CurveSpec) -> CurveFrame:
    """Compute deltas, resolved direction and bow offset for a curve"""
    dx = end.x - start.x
    dy = end.y - start.y
    distance = math.hypot(dx, dy)
    direction = resolve_direction(spec.direction, dx, dy)
    offset = min(distance * spec.intensity, MAX_OFFSET)

    offset_x, offset_y = {
        'up': (0.0, -offset),
        'down': (0.0, offset),
        'left': (-offset, 0.0),
        'right': (offset, 0.0),
    }[direction]

    return CurveFrame(
        start=start,
        end=end,
        dx=dx,
        dy=dy,
        distance=distance,
        direction=direction,
        offset=offset,
        offset_x=offset_x,
        offset_y=offset_y,
    )


def _cubic(frame: CurveFrame, pull: float, bow: float, style: str, opposing: bool = False) -> PathDescription:
    """Single cubic with controls at pull / 1 - pull of the chord plus a bow."""
    s, e = frame.start, frame.end
    sign = -1.0 if opposing else 1.0
    c1x = s.x + frame.dx * pull + frame.offset_x * bow
    c1y = s.y + frame.dy * pull + frame.offset_y * bow
    c2x = e.x - frame.dx * pull + sign * frame.offset_x * bow
    c2y = e.y - frame.dy * pull + sign * frame.offset_y * bow
    return (
        PathBuilder()
        .move_to(s.x, s.y)
        .cubic_to(c1x, c1y, c2x, c2y, e.x, e.y)
        .build(control_anchor=AnchorPoint(c2x, c2y), style=style, offset=frame.offset)
    )


@register_curve('smooth')
def smooth(frame: CurveFrame, obstacles: Sequence[EntityRect]) -> PathDescription:
    return _cubic(frame, pull=0.3, bow=0.5, style='smooth')


@register_curve('dramatic')
def dramatic(frame: CurveFrame, obstacles: Sequence[EntityRect]) -> PathDescription:
    return _cubic(frame, pull=0.1, bow=1.5, style='dramatic')


@register_curve('s-curve')
def s_curve(frame: CurveFrame, obstacles: Sequence[EntityRect]) -> PathDescription:
    # Controls bow in opposing directions, producing an inflection
    return _cubic(frame, pull=0.25, bow=0.8, style='s-curve', opposing=True)


@register_curve('wave')
def wave(frame: CurveFrame, obstacles: Sequence[EntityRect]) -> PathDescription:
    """Eight quadratic segments following sin(t * 4pi) * offset * 0.3."""
    s, e = frame.start, frame.end
    amplitude = frame.offset * 0.3

    def sample(i: int):
        if i == WAVE_SEGMENTS:
            return (e.x, e.y)
        t = i / WAVE_SEGMENTS
        return (s.x + frame.dx * t, s.y + frame.dy * t + math.sin(t * math.pi * 4) * amplitude)

    builder = PathBuilder().move_to(s.x, s.y)
    prev_x, prev_y = s.x, s.y
    for i in range(1, WAVE_SEGMENTS + 1):
        x, y = sample(i)
        builder.quad_to((prev_x + x) / 2, (prev_y + y) / 2, x, y)
        prev_x, prev_y = x, y

    # Tangent approximation taken on the chord at the 7th of 8 samples
    t = (WAVE_SEGMENTS - 1) / WAVE_SEGMENTS
    control = AnchorPoint(s.x + frame.dx * t, s.y + frame.dy * t)
    return builder.build(control_anchor=control, style='wave', offset=frame.offset)


@register_curve('elegant')
def elegant(frame: CurveFrame, obstacles: Sequence[EntityRect]) -> PathDescription:
    """Two cubics joined smoothly at a midpoint pulled by 0.8x offset."""
    s, e = frame.start, frame.end
    mid_x = (s.x + e.x) / 2 + frame.offset_x * 0.8
    mid_y = (s.y + e.y) / 2 + frame.offset_y * 0.8
    c1x = s.x + frame.dx * 0.2 + frame.offset_x * 0.4
    c1y = s.y + frame.dy * 0.2 + frame.offset_y * 0.4
    c2x = e.x - frame.dx * 0.2 + frame.offset_x * 0.4
    c2y = e.y - frame.dy * 0.2 + frame.offset_y * 0.4
    # The second cubic's first control reflects the first cubic's last
    # control about the join; both equal the midpoint here.
    return (
        PathBuilder()
        .move_to(s.x, s.y)
        .cubic_to(c1x, c1y, mid_x, mid_y, mid_x, mid_y)
        .cubic_to(mid_x, mid_y, c2x, c2y, e.x, e.y)
        .build(control_anchor=AnchorPoint(c2x, c2y), style='elegant', offset=frame.offset)
    )


@register_curve('zigzag')
def zigzag(frame: CurveFrame, obstacles: Sequence[EntityRect]) -> PathDescription:
    """Six straight segments alternating -/+ 0.4x offset, closed onto the end."""
    s, e = frame.start, frame.end
    swing = frame.offset * 0.4
    builder = PathBuilder().move_to(s.x, s.y)
    for i in range(1, ZIGZAG_SEGMENTS + 1):
        t = i / ZIGZAG_SEGMENTS
        zz = swing if i % 2 == 0 else -swing
        builder.line_to(s.x + frame.dx * t, s.y + frame.dy * t + zz)
    builder.line_to(e.x, e.y)

    t = (ZIGZAG_SEGMENTS - 1) / ZIGZAG_SEGMENTS
    control = AnchorPoint(s.x + frame.dx * t, s.y + frame.dy * t)
    return builder.build(control_anchor=control, style='zigzag', offset=frame.offset)


def _unbowed_smooth(frame: CurveFrame, style: str) -> PathDescription:
    s, e = frame.start, frame.end
    c1x = s.x + frame.dx * 0.3
    c1y = s.y + frame.dy * 0.3
    c2x = e.x - frame.dx * 0.3
    c2y = e.y - frame.dy * 0.3
    return (
        PathBuilder()
        .move_to(s.x, s.y)
        .cubic_to(c1x, c1y, c2x, c2y, e.x, e.y)
        .build(control_anchor=AnchorPoint(c2x, c2y), style=style, offset=frame.offset)
    )


@register_curve('around-obstacle', 'shortest-path')
def around_obstacle(frame: CurveFrame, obstacles: Sequence[EntityRect]) -> PathDescription:
    """Polyline through router waypoints; smooth cubic when nothing is in the way."""
    style = 'around-obstacle'
    if not obstacles:
        return _unbowed_smooth(frame, style)

    result = route(frame.start, frame.end, obstacles)
    if not result.detoured:
        return _unbowed_smooth(frame, style)

    s, e = frame.start, frame.end
    builder = PathBuilder().move_to(s.x, s.y)
    for waypoint in result.waypoints:
        builder.line_to(waypoint.x, waypoint.y)
    builder.line_to(e.x, e.y)

    path = builder.build(control_anchor=result.control_anchor, style=style, offset=frame.offset)
    path.route_clear = result.clear
    return path


def generate(
    start: AnchorPoint,
    end: AnchorPoint,
    spec: Optional[CurveSpec] = None,
    obstacles: Optional[Sequence[EntityRect]] = None
) -> PathDescription:
    """
    Generate the connector path between two anchors

    Args:
        start: Start anchor (first path point, exactly)
        end: End anchor (last path point, exactly)
        spec: Curve style, intensity and direction (defaults when None)
        obstacles: Container-relative obstacle rects for routing styles

    Returns:
        PathDescription with a control anchor for tangent derivation
    """
    spec = spec or CurveSpec()
    frame = build_frame(start, end, spec)

    curve = get_curve(spec.type)
    if curve is None:
        logger.debug(f"No formula registered for curve type '{spec.type}', using smooth")
        curve = smooth

    path = curve(frame, list(obstacles or []))
    if spec.type == 'shortest-path':
        path.style = 'shortest-path'
    return path
