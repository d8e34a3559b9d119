"""
Geometry update scheduling

Layout triggers (entity resize or mutation, viewport resize or scroll,
direct prop changes) are coalesced into at most one recomputation per
frame. A recomputation whose anchors and obstacle rects all moved by less
than the tolerance is discarded so the committed state stays untouched.
"""

import asyncio
import itertools
import logging
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple
from dataclasses import dataclass, field

from .geometry import AnchorPoint, EntityRect, points_close
from .observe import Signal, Subscription

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 0.5
FRAME_INTERVAL = 1.0 / 60.0

FrameCallback = Callable[[], None]


# ============================================================================
# Frame clocks
# ============================================================================

class FrameClock(Protocol):
    """Source of "next frame" callbacks."""

    def request_frame(self, callback: FrameCallback) -> Any:
        ...

    def cancel_frame(self, handle: Any) -> None:
        ...


class ManualFrameClock:
    """
    Frame clock driven by explicit advance() calls.

    Callbacks requested while a frame is running are deferred to the next
    advance().
    """

    def __init__(self):
        self._queue: Dict[int, FrameCallback] = {}
        self._handles = itertools.count(1)
        self.frame = 0

    def request_frame(self, callback: FrameCallback) -> int:
        handle = next(self._handles)
        self._queue[handle] = callback
        return handle

    def cancel_frame(self, handle: int) -> None:
        self._queue.pop(handle, None)

    @property
    def pending(self) -> int:
        return len(self._queue)

    def advance(self) -> int:
        """Run every callback queued before this call; return how many ran."""
        self.frame += 1
        due = list(self._queue.items())
        ran = 0
        for handle, callback in due:
            # A callback earlier in this frame may have cancelled this one
            if self._queue.pop(handle, None) is None:
                continue
            callback()
            ran += 1
        return ran


class AsyncioFrameClock:
    """Frame clock backed by an asyncio event loop with a fixed frame interval."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None, interval: float = FRAME_INTERVAL):
        self._loop = loop
        self.interval = interval

    def request_frame(self, callback: FrameCallback) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(self.interval, callback)

    def cancel_frame(self, handle: asyncio.TimerHandle) -> None:
        handle.cancel()


# ============================================================================
# Snapshots and tolerance
# ============================================================================

@dataclass(frozen=True)
class GeometrySnapshot:
    """Resolved geometry inputs of one recomputation."""
    start: Optional[AnchorPoint]
    end: Optional[AnchorPoint]
    obstacles: Tuple[EntityRect, ...] = ()
    container: Optional[EntityRect] = None
    diagnostics: Tuple[Any, ...] = field(default=(), compare=False)


def _optional_points_close(a: Optional[AnchorPoint], b: Optional[AnchorPoint], tolerance: float) -> bool:
    if a is None or b is None:
        return a is None and b is None
    return points_close(a, b, tolerance)


def _rects_close(a: EntityRect, b: EntityRect, tolerance: float) -> bool:
    return all(abs(p - q) < tolerance for p, q in zip(a.as_tuple(), b.as_tuple()))


def is_within_tolerance(
    previous: Optional[GeometrySnapshot],
    current: GeometrySnapshot,
    tolerance: float = DEFAULT_TOLERANCE
) -> bool:
    """
    True when current differs from previous by less than tolerance everywhere

    Anchors and every obstacle coordinate must move by less than the
    tolerance and the obstacle count must be unchanged. Nothing is within
    tolerance of a missing previous snapshot.
    """
    if previous is None:
        return False
    if len(previous.obstacles) != len(current.obstacles):
        return False
    if not _optional_points_close(previous.start, current.start, tolerance):
        return False
    if not _optional_points_close(previous.end, current.end, tolerance):
        return False
    return all(
        _rects_close(a, b, tolerance) for a, b in zip(previous.obstacles, current.obstacles)
    )


# ============================================================================
# Scheduler
# ============================================================================

class GeometryScheduler:
    """
    Coalescing, tolerance-suppressing driver for one connector instance

    Args:
        compute: Produces a fresh GeometrySnapshot from the live layout
        commit: Receives snapshots that passed change detection
        clock: Frame clock used to defer recomputation to the next frame
        tolerance: Coordinate delta below which changes are ignored
    """

    def __init__(
        self,
        compute: Callable[[], GeometrySnapshot],
        commit: Callable[[GeometrySnapshot], None],
        clock: FrameClock,
        tolerance: float = DEFAULT_TOLERANCE
    ):
        self._compute = compute
        self._commit = commit
        self.clock = clock
        self.tolerance = tolerance

        self.committed: Optional[GeometrySnapshot] = None
        self._pending: Any = None
        self._in_flight = False
        self._force = False
        self._closed = False
        self._subscriptions: List[Subscription] = []

        self.runs = 0
        self.commits = 0
        self.suppressed = 0

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def has_pending_frame(self) -> bool:
        return self._pending is not None

    def watch(self, signal: Signal) -> Subscription:
        """Schedule a recomputation whenever the signal fires."""
        subscription = signal.connect(self.schedule)
        self._subscriptions.append(subscription)
        return subscription

    def unwatch(self, subscription: Subscription) -> None:
        """Stop scheduling on a watched signal and forget its subscription."""
        subscription.unsubscribe()
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    @property
    def subscriptions(self) -> Tuple[Subscription, ...]:
        return tuple(self._subscriptions)

    def schedule(self, force: bool = False) -> None:
        """
        Request a recomputation on the next frame.

        Bursts of calls before the frame runs share one pending frame.
        force=True commits the next snapshot even when it is within tolerance.
        """
        if self._closed:
            return
        if force:
            self._force = True
        if self._pending is not None:
            return
        self._pending = self.clock.request_frame(self._on_frame)

    def _on_frame(self) -> None:
        self._pending = None
        self.run()

    def run(self) -> bool:
        """
        Recompute now

        Returns:
            True if a new snapshot was committed
        """
        if self._closed:
            return False
        if self._in_flight:
            logger.debug("Recomputation already in flight, ignoring re-entrant call")
            return False

        self._in_flight = True
        try:
            self.runs += 1
            snapshot = self._compute()
            if not self._force and is_within_tolerance(self.committed, snapshot, self.tolerance):
                self.suppressed += 1
                logger.debug("Geometry unchanged within tolerance, skipping commit")
                return False

            self._force = False
            self.committed = snapshot
            self.commits += 1
            self._commit(snapshot)
            logger.debug(f"Committed geometry snapshot #{self.commits}")
            return True
        finally:
            self._in_flight = False

    def close(self) -> None:
        """Cancel the pending frame and drop every subscription."""
        if self._closed:
            return
        self._closed = True
        if self._pending is not None:
            self.clock.cancel_frame(self._pending)
            self._pending = None
        for subscription in self._subscriptions:
            subscription.unsubscribe()
        self._subscriptions.clear()
        logger.debug("Geometry scheduler closed")
