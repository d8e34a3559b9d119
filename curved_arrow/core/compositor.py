"""
Layer compositor: assembles the connector into two ordered drawable layers

The 'under' layer carries the main line (with its optional glow and dash
overlay) plus heads assigned to it; the 'over' layer carries heads assigned
to it. The layers are independent render targets with fixed stacking:

    under-tier content (1) < under layer (2) < over layer (4) < over-tier content (5)
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass, field

from .config import ArrowConfig, HeadSpec, parse_css_time
from .geometry import AnchorPoint
from .path import PathBuilder, PathDescription

logger = logging.getLogger(__name__)

UNDER_TIER_Z = 1
UNDER_LAYER_Z = 2
OVER_LAYER_Z = 4
OVER_TIER_Z = 5

LAYER_ORDER = ('under', 'over')

GLOW_VARIANTS = frozenset({'glow', 'neon', 'fire', 'electric', 'cosmic'})
GLOW_EXTRA_WIDTH = 4.0
GLOW_OPACITY = 0.4
GLOW_BLUR = 3.0

DASH_COLOR = '#ffffff'
DASH_WIDTH = 2.0
DASH_ARRAY = '12,8'
DASH_OPACITY = 0.8
DASH_CYCLE = 20.0

REVERSED_DIRECTIONS = ('reverse', 'alternate-reverse')


@dataclass(frozen=True)
class DashAnimation:
    """
    Time-based dash offset cycling over the main line.

    The offset moves linearly from values[0] to values[1] once per
    duration, repeating indefinitely after the delay.
    """
    values: Tuple[float, float]
    duration: float
    delay: float = 0.0
    direction: str = 'forward'

    @classmethod
    def from_spec(cls, duration: str, delay: str, direction: str) -> 'DashAnimation':
        values = (DASH_CYCLE, 0.0) if direction in REVERSED_DIRECTIONS else (0.0, DASH_CYCLE)
        return cls(
            values=values,
            duration=parse_css_time(duration),
            delay=parse_css_time(delay),
            direction=direction,
        )

    @property
    def keyframes(self) -> str:
        """Values attribute, e.g. '0;20'"""
        return ';'.join(str(int(v)) if v == int(v) else str(v) for v in self.values)

    def offset_at(self, t: float) -> float:
        """Dash offset at time t (seconds since the overlay appeared)."""
        start, stop = self.values
        elapsed = t - self.delay
        if elapsed <= 0:
            return start
        phase = math.fmod(elapsed, self.duration) / self.duration
        return start + (stop - start) * phase


@dataclass
class Drawable:
    """One stroked/filled path inside a layer, in paint order."""
    kind: str
    path: PathDescription
    stroke: str
    stroke_width: float
    fill: str = 'none'
    opacity: float = 1.0
    linecap: str = 'round'
    filter_id: Optional[str] = None
    dasharray: Optional[str] = None
    animation: Optional[DashAnimation] = None
    end: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            'kind': self.kind,
            'd': self.path.to_svg(),
            'stroke': self.stroke,
            'stroke_width': self.stroke_width,
            'fill': self.fill,
            'opacity': self.opacity,
            'linecap': self.linecap,
        }
        if self.end:
            data['end'] = self.end
        if self.filter_id:
            data['filter'] = self.filter_id
        if self.dasharray:
            data['dasharray'] = self.dasharray
        if self.animation:
            data['animation'] = {
                'values': self.animation.keyframes,
                'duration': self.animation.duration,
                'delay': self.animation.delay,
                'direction': self.animation.direction,
            }
        return data


@dataclass
class Layer:
    """
    One composited render target.

    Attributes:
        name: 'under' or 'over'
        z_index: Stacking value (2 for under, 4 for over)
        role: Accessibility role ('img' on the under layer)
        aria_label: Accessible label (under layer only)
        aria_hidden: True when hidden from assistive technology
        gradient_id: Instance-scoped id of this layer's stroke gradient
        filter_id: Instance-scoped id of this layer's blur filter
        gradient: (from, to) colors, or None for a solid stroke
        drawables: Paths in paint order
    """
    name: str
    z_index: int
    role: Optional[str] = None
    aria_label: Optional[str] = None
    aria_hidden: bool = False
    gradient_id: str = ''
    filter_id: str = ''
    gradient: Optional[Tuple[str, str]] = None
    glow_blur: float = GLOW_BLUR
    drawables: List[Drawable] = field(default_factory=list)

    def is_empty(self) -> bool:
        return not self.drawables

    def kinds(self) -> List[str]:
        return [d.kind for d in self.drawables]

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'z_index': self.z_index,
            'role': self.role,
            'aria_label': self.aria_label,
            'aria_hidden': self.aria_hidden,
            'gradient_id': self.gradient_id,
            'filter_id': self.filter_id,
            'gradient': list(self.gradient) if self.gradient else None,
            'drawables': [d.to_dict() for d in self.drawables],
        }


@dataclass(frozen=True)
class HeadPlacement:
    """A built head glyph positioned at one connector end."""
    end: str
    spec: HeadSpec
    path: PathDescription
    anchor: AnchorPoint
    angle: float


def resource_id(instance_id: str, kind: str, layer: str) -> str:
    """Scope a paint resource id under the connector instance and layer."""
    return f"{instance_id}-{kind}-{layer}"


def overlay_length(stroke_width: float) -> float:
    return max(stroke_width * 2 + 6, 12.0)


def overlay_segment(anchor: AnchorPoint, angle: float, length: float) -> PathDescription:
    """Short straight segment running into the anchor from `length` back along the line."""
    return (
        PathBuilder()
        .move_to(anchor.x - math.cos(angle) * length, anchor.y - math.sin(angle) * length)
        .line_to(anchor.x, anchor.y)
        .build(style='overlay')
    )


def empty_layers(instance_id: str, aria_label: str) -> Tuple[Layer, Layer]:
    """Both layers with their accessibility and stacking attributes but nothing to draw."""
    under = Layer(
        name='under',
        z_index=UNDER_LAYER_Z,
        role='img',
        aria_label=aria_label,
        aria_hidden=False,
        gradient_id=resource_id(instance_id, 'gradient', 'under'),
        filter_id=resource_id(instance_id, 'filter', 'under'),
    )
    over = Layer(
        name='over',
        z_index=OVER_LAYER_Z,
        aria_hidden=True,
        gradient_id=resource_id(instance_id, 'gradient', 'over'),
        filter_id=resource_id(instance_id, 'filter', 'over'),
    )
    return under, over


def _head_drawable(head: HeadPlacement, default_paint: str, stroke_width: float) -> Drawable:
    spec = head.spec
    stroke = spec.stroke_color or default_paint
    fill = (spec.fill_color or default_paint) if spec.is_filled else 'none'
    return Drawable(
        kind='head',
        path=head.path,
        stroke=stroke,
        stroke_width=spec.stroke_width if spec.stroke_width is not None else stroke_width,
        fill=fill,
        opacity=spec.opacity,
        end=head.end,
    )


def composite(
    path: PathDescription,
    heads: Sequence[HeadPlacement],
    config: ArrowConfig,
    instance_id: str
) -> Tuple[Layer, Layer]:
    """
    Assemble the under and over layers for one connector

    Args:
        path: Main connector path
        heads: Visible heads, start before end
        config: Connector configuration (paint, variant, animation)
        instance_id: Unique connector id used to scope resource ids

    Returns:
        (under, over) layers, always in that order
    """
    under, over = empty_layers(instance_id, config.aria_label)
    stroke = config.stroke
    layers = {'under': under, 'over': over}

    for layer in layers.values():
        if stroke.has_gradient:
            layer.gradient = (stroke.gradient_from, stroke.gradient_to)
    default_paint = f"url(#{under.gradient_id})" if stroke.has_gradient else stroke.color

    if config.variant in GLOW_VARIANTS:
        under.drawables.append(Drawable(
            kind='glow',
            path=path,
            stroke=default_paint,
            stroke_width=stroke.stroke_width + GLOW_EXTRA_WIDTH,
            opacity=GLOW_OPACITY,
            filter_id=under.filter_id,
        ))

    under.drawables.append(Drawable(
        kind='line',
        path=path,
        stroke=default_paint,
        stroke_width=stroke.stroke_width,
    ))

    if config.animation.enabled:
        animation = config.animation
        under.drawables.append(Drawable(
            kind='dash',
            path=path,
            stroke=DASH_COLOR,
            stroke_width=DASH_WIDTH,
            opacity=DASH_OPACITY,
            dasharray=DASH_ARRAY,
            animation=DashAnimation.from_spec(animation.duration, animation.delay, animation.direction),
        ))

    overlay_len = overlay_length(stroke.stroke_width)
    for head in heads:
        layer = layers[head.spec.layer]
        # Paint references resolve against the gradient defined in the same layer
        paint = f"url(#{layer.gradient_id})" if stroke.has_gradient else stroke.color
        layer.drawables.append(_head_drawable(head, paint, stroke.stroke_width))

        if head.spec.line_over_head:
            layer.drawables.append(Drawable(
                kind='overlay',
                path=overlay_segment(head.anchor, head.angle, overlay_len),
                stroke=paint,
                stroke_width=stroke.stroke_width,
                end=head.end,
            ))

    logger.debug(
        f"Composited connector {instance_id}: under={under.kinds()} over={over.kinds()}"
    )
    return under, over
