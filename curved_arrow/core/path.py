"""
Vector path description used for connector lines and arrowhead glyphs

A path is an ordered list of absolute-coordinate segments drawn from a
minimal command set (moveto, lineto, cubic, quadratic, arc, close) that
serializes directly to the SVG path mini-language.
"""

from typing import List, Optional, Tuple, Union
from dataclasses import dataclass, field

from .geometry import AnchorPoint


def format_number(value: float, digits: int = 3) -> str:
    """
    Format a coordinate for path output.

    Integral values drop the decimal part, others are rounded to `digits`.

    Examples:
        >>> format_number(50.0)
        '50'
        >>> format_number(32.67949192431123)
        '32.679'
    """
    rounded = round(float(value), digits)
    if rounded == 0:
        rounded = 0.0  # avoid "-0"
    if rounded == int(rounded):
        return str(int(rounded))
    return repr(rounded)


@dataclass(frozen=True)
class MoveTo:
    x: float
    y: float
    command = 'M'

    def end_point(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def values(self) -> Tuple[float, ...]:
        return (self.x, self.y)


@dataclass(frozen=True)
class LineTo:
    x: float
    y: float
    command = 'L'

    def end_point(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def values(self) -> Tuple[float, ...]:
        return (self.x, self.y)


@dataclass(frozen=True)
class CubicTo:
    c1x: float
    c1y: float
    c2x: float
    c2y: float
    x: float
    y: float
    command = 'C'

    def end_point(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def values(self) -> Tuple[float, ...]:
        return (self.c1x, self.c1y, self.c2x, self.c2y, self.x, self.y)


@dataclass(frozen=True)
class QuadTo:
    cx: float
    cy: float
    x: float
    y: float
    command = 'Q'

    def end_point(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def values(self) -> Tuple[float, ...]:
        return (self.cx, self.cy, self.x, self.y)


@dataclass(frozen=True)
class ArcTo:
    rx: float
    ry: float
    rotation: float
    large_arc: bool
    sweep: bool
    x: float
    y: float
    command = 'A'

    def end_point(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def values(self) -> Tuple[float, ...]:
        return (self.rx, self.ry, self.rotation, int(self.large_arc), int(self.sweep), self.x, self.y)


@dataclass(frozen=True)
class ClosePath:
    command = 'Z'

    def end_point(self) -> Optional[Tuple[float, float]]:
        return None

    def values(self) -> Tuple[float, ...]:
        return ()


Segment = Union[MoveTo, LineTo, CubicTo, QuadTo, ArcTo, ClosePath]


@dataclass
class PathDescription:
    """
    Ordered path segments plus the control anchor used for end tangents.

    Attributes:
        segments: Absolute-coordinate path segments
        control_anchor: Synthetic point used only to derive tangent angles
            at the path ends (a true bezier control for cubic styles)
        style: Curve style or glyph shape that produced the path
        offset: Bow offset applied by the curve generator (0 for glyphs)
        route_clear: False when obstacle routing could not clear every obstacle
    """
    segments: List[Segment] = field(default_factory=list)
    control_anchor: Optional[AnchorPoint] = None
    style: str = ''
    offset: float = 0.0
    route_clear: bool = True

    @property
    def first_point(self) -> Optional[AnchorPoint]:
        for segment in self.segments:
            if isinstance(segment, MoveTo):
                return AnchorPoint(segment.x, segment.y)
        return None

    @property
    def last_point(self) -> Optional[AnchorPoint]:
        for segment in reversed(self.segments):
            point = segment.end_point()
            if point is not None:
                return AnchorPoint(*point)
        return None

    @property
    def is_closed(self) -> bool:
        return bool(self.segments) and isinstance(self.segments[-1], ClosePath)

    def is_empty(self) -> bool:
        return not self.segments

    def commands(self) -> List[Tuple[str, Tuple[float, ...]]]:
        """Return (command letter, values) pairs."""
        return [(segment.command, segment.values()) for segment in self.segments]

    def to_svg(self, digits: int = 3) -> str:
        """Serialize to an SVG path "d" string."""
        parts = []
        for segment in self.segments:
            numbers = [format_number(value, digits) for value in segment.values()]
            parts.append(" ".join([segment.command] + numbers))
        return " ".join(parts)

    def to_dict(self) -> dict:
        return {
            'style': self.style,
            'offset': self.offset,
            'd': self.to_svg(),
            'commands': [
                {'command': command, 'values': list(values)}
                for command, values in self.commands()
            ],
            'control_anchor': (
                {'x': self.control_anchor.x, 'y': self.control_anchor.y}
                if self.control_anchor else None
            ),
        }


class PathBuilder:
    """Small fluent helper for assembling a PathDescription."""

    def __init__(self):
        self._segments: List[Segment] = []

    def move_to(self, x: float, y: float) -> 'PathBuilder':
        self._segments.append(MoveTo(x, y))
        return self

    def line_to(self, x: float, y: float) -> 'PathBuilder':
        self._segments.append(LineTo(x, y))
        return self

    def cubic_to(self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float) -> 'PathBuilder':
        self._segments.append(CubicTo(c1x, c1y, c2x, c2y, x, y))
        return self

    def quad_to(self, cx: float, cy: float, x: float, y: float) -> 'PathBuilder':
        self._segments.append(QuadTo(cx, cy, x, y))
        return self

    def arc_to(self, rx: float, ry: float, rotation: float, large_arc: bool, sweep: bool,
               x: float, y: float) -> 'PathBuilder':
        self._segments.append(ArcTo(rx, ry, rotation, large_arc, sweep, x, y))
        return self

    def close(self) -> 'PathBuilder':
        self._segments.append(ClosePath())
        return self

    def build(self, control_anchor: Optional[AnchorPoint] = None, style: str = '',
              offset: float = 0.0) -> PathDescription:
        return PathDescription(
            segments=list(self._segments),
            control_anchor=control_anchor,
            style=style,
            offset=offset
        )
