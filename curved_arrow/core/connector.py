"""
Curved arrow connector: the per-instance pipeline owner

A CurvedArrow resolves anchors for its endpoints and obstacles, generates
the connector path, builds the arrowheads and composites the two layers.
It owns its subscriptions, its scheduler and its last committed state;
nothing is shared between instances.
"""

import logging
import uuid
from enum import Enum
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union
from dataclasses import dataclass, field

from .anchors import resolve_in_container
from .compositor import HeadPlacement, Layer, composite, empty_layers
from .config import ArrowConfig
from .curves import generate
from .geometry import AnchorPoint, EntityRect, ORIGIN, to_container_space
from .heads import build_head, end_head_angle, start_head_angle
from .observe import Signal, Subscription, Trackable, Viewport, entity_signals
from .path import PathDescription
from .scheduler import FrameClock, GeometryScheduler, GeometrySnapshot, ManualFrameClock

logger = logging.getLogger(__name__)

Endpoint = Union[Trackable, AnchorPoint, Tuple[float, float]]


class Diagnostic(str, Enum):
    """Conditions absorbed while producing a drawable state."""
    MISSING_CONTAINER = 'missing-container'
    MISSING_ENTITY = 'missing-entity'
    UNRECOGNIZED_CURVE_TYPE = 'unrecognized-curve-type'
    ROUTER_NO_CLEAR_PATH = 'router-no-clear-path'


@dataclass
class DrawableState:
    """Everything a rendering surface needs for one connector."""
    instance_id: str
    under: Layer
    over: Layer
    start: Optional[AnchorPoint] = None
    end: Optional[AnchorPoint] = None
    path: Optional[PathDescription] = None
    start_head: Optional[PathDescription] = None
    end_head: Optional[PathDescription] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)

    @property
    def layers(self) -> Tuple[Layer, Layer]:
        """Layers in fixed stacking order: under, then over."""
        return (self.under, self.over)

    @property
    def is_empty(self) -> bool:
        return self.under.is_empty() and self.over.is_empty()

    def to_dict(self) -> Dict:
        def point(p: Optional[AnchorPoint]):
            return {'x': p.x, 'y': p.y} if p else None

        return {
            'instance_id': self.instance_id,
            'start': point(self.start),
            'end': point(self.end),
            'path': self.path.to_dict() if self.path else None,
            'start_head': self.start_head.to_svg() if self.start_head else None,
            'end_head': self.end_head.to_svg() if self.end_head else None,
            'layers': [layer.to_dict() for layer in self.layers],
            'diagnostics': [d.value for d in self.diagnostics],
        }


def new_instance_id() -> str:
    return f"curved-arrow-{uuid.uuid4().hex[:12]}"


class CurvedArrow:
    """
    One curved connector between two endpoints

    Endpoints are tracked entities (anything with get_rect() returning a
    page-space rect) docked according to the configuration, or fixed
    container-relative points.

    Args:
        start: Start endpoint
        end: End endpoint
        config: Connector configuration (defaults when None)
        obstacles: Tracked entities the routing styles should avoid
        container: Entity whose rect is the coordinate origin
        viewport: Window-level resize/scroll source
        clock: Frame clock for coalesced updates (manual clock when None)
        on_update: Called with each newly committed DrawableState
        instance_id: Override the generated unique id
    """

    def __init__(
        self,
        start: Endpoint,
        end: Endpoint,
        config: Optional[ArrowConfig] = None,
        obstacles: Optional[Sequence[Trackable]] = None,
        container: Optional[Trackable] = None,
        viewport: Optional[Viewport] = None,
        clock: Optional[FrameClock] = None,
        on_update: Optional[Callable[[DrawableState], None]] = None,
        instance_id: Optional[str] = None
    ):
        self.instance_id = instance_id or new_instance_id()
        self.config = config or ArrowConfig()
        self.start = start
        self.end = end
        self.obstacles = list(obstacles or [])
        self.container = container
        self.viewport = viewport
        self.on_update = on_update

        self.state: Optional[DrawableState] = None
        self.scheduler = GeometryScheduler(
            compute=self.compute_snapshot,
            commit=self._commit,
            clock=clock or ManualFrameClock(),
            tolerance=self.config.tolerance,
        )
        self._watched: Dict[str, List[Subscription]] = {}
        self._attached = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def attach(self) -> 'CurvedArrow':
        """Subscribe to every observation source and schedule a first render."""
        if self.scheduler.closed:
            raise RuntimeError(f"Connector {self.instance_id} is closed")
        self._attached = True
        self._observe('start', [self.start])
        self._observe('end', [self.end])
        self._observe('obstacles', self.obstacles)
        self._observe('container', [self.container])
        if self.viewport is not None:
            self._watch_signals('viewport', [self.viewport.resized, self.viewport.scrolled])
        self.scheduler.schedule(force=True)
        return self

    def close(self) -> None:
        """Unsubscribe everything; no recomputation fires afterwards."""
        self.scheduler.close()
        self._watched.clear()
        self._attached = False
        logger.debug(f"Connector {self.instance_id} closed")

    @property
    def closed(self) -> bool:
        return self.scheduler.closed

    def __enter__(self) -> 'CurvedArrow':
        return self.attach()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _observe(self, role: str, entities: Sequence) -> None:
        self._watch_signals(role, [signal for entity in entities for signal in entity_signals(entity)])

    def _watch_signals(self, role: str, signals: Sequence[Signal]) -> None:
        for subscription in self._watched.pop(role, []):
            self.scheduler.unwatch(subscription)
        if not self._attached:
            return
        self._watched[role] = [self.scheduler.watch(signal) for signal in signals]

    # ------------------------------------------------------------------
    # Direct prop changes
    # ------------------------------------------------------------------

    def set_config(self, config: ArrowConfig) -> None:
        self.config = config
        self.scheduler.tolerance = config.tolerance
        self.scheduler.schedule(force=True)

    def set_endpoints(self, start: Optional[Endpoint] = None, end: Optional[Endpoint] = None) -> None:
        if start is not None:
            self.start = start
            self._observe('start', [start])
        if end is not None:
            self.end = end
            self._observe('end', [end])
        self.scheduler.schedule(force=True)

    def set_obstacles(self, obstacles: Sequence[Trackable]) -> None:
        self.obstacles = list(obstacles)
        self._observe('obstacles', self.obstacles)
        self.scheduler.schedule(force=True)

    def refresh(self) -> bool:
        """Recompute synchronously, bypassing the frame clock."""
        return self.scheduler.run()

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def _resolve_endpoint(
        self,
        endpoint: Endpoint,
        dock: str,
        container: Optional[EntityRect],
        diagnostics: List[Diagnostic]
    ) -> Optional[AnchorPoint]:
        if isinstance(endpoint, AnchorPoint):
            return endpoint
        if isinstance(endpoint, tuple):
            return AnchorPoint(float(endpoint[0]), float(endpoint[1]))

        if container is None:
            return ORIGIN

        rect = endpoint.get_rect() if endpoint is not None else None
        if rect is None:
            logger.debug(f"Connector {self.instance_id}: endpoint has no rect, anchor not computed")
            if Diagnostic.MISSING_ENTITY not in diagnostics:
                diagnostics.append(Diagnostic.MISSING_ENTITY)
            return None
        return resolve_in_container(rect, container, dock, self.config.padding)

    def compute_snapshot(self) -> GeometrySnapshot:
        """Read the live layout into a snapshot of anchors and obstacle rects."""
        diagnostics: List[Diagnostic] = []
        container = self.container.get_rect() if self.container is not None else None
        if container is None:
            logger.debug(f"Connector {self.instance_id}: no container rect, using origin fallback")
            diagnostics.append(Diagnostic.MISSING_CONTAINER)

        start = self._resolve_endpoint(self.start, self.config.start_position, container, diagnostics)
        end = self._resolve_endpoint(self.end, self.config.end_position, container, diagnostics)

        obstacles = []
        if container is not None:
            for obstacle in self.obstacles:
                rect = to_container_space(obstacle.get_rect(), container)
                if rect is not None:
                    obstacles.append(rect)

        return GeometrySnapshot(
            start=start,
            end=end,
            obstacles=tuple(obstacles),
            container=container,
            diagnostics=tuple(diagnostics),
        )

    def build_state(self, snapshot: GeometrySnapshot) -> DrawableState:
        """Run curve generation, head building and compositing for a snapshot."""
        config = self.config
        diagnostics = list(snapshot.diagnostics)

        if snapshot.start is None or snapshot.end is None:
            under, over = empty_layers(self.instance_id, config.aria_label)
            return DrawableState(
                instance_id=self.instance_id,
                under=under,
                over=over,
                start=snapshot.start,
                end=snapshot.end,
                diagnostics=diagnostics,
            )

        if config.curve.fell_back:
            diagnostics.append(Diagnostic.UNRECOGNIZED_CURVE_TYPE)

        start, end = snapshot.start, snapshot.end
        path = generate(start, end, config.curve, snapshot.obstacles)
        if not path.route_clear:
            diagnostics.append(Diagnostic.ROUTER_NO_CLEAR_PATH)

        control = path.control_anchor or end
        placements = []
        head_paths: Dict[str, Optional[PathDescription]] = {'start': None, 'end': None}
        for name, spec, anchor, angle in (
            ('start', config.start_head, start, start_head_angle(start, control)),
            ('end', config.end_head, end, end_head_angle(end, control)),
        ):
            if not spec.visible:
                continue
            glyph = build_head(
                anchor,
                angle,
                config.head_size(spec),
                spec.shape,
                rotation_degrees=spec.rotation,
                force_filled=spec.filled,
            )
            head_paths[name] = glyph
            placements.append(HeadPlacement(end=name, spec=spec, path=glyph, anchor=anchor, angle=angle))

        under, over = composite(path, placements, config, self.instance_id)
        return DrawableState(
            instance_id=self.instance_id,
            under=under,
            over=over,
            start=start,
            end=end,
            path=path,
            start_head=head_paths['start'],
            end_head=head_paths['end'],
            diagnostics=diagnostics,
        )

    def compute_state(self) -> DrawableState:
        """Compute a drawable state from the current layout without committing it."""
        return self.build_state(self.compute_snapshot())

    def _commit(self, snapshot: GeometrySnapshot) -> None:
        self.state = self.build_state(snapshot)
        if self.on_update is not None:
            self.on_update(self.state)
