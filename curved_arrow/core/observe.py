"""
Layout observation with explicit subscription lifecycles

The engine only needs one capability from a tracked entity: report its
current rect. Change notifications are plain signals; every connection
returns a Subscription that the owner must unsubscribe on teardown.
"""

import logging
from typing import Callable, List, Optional, Protocol, runtime_checkable

from .geometry import EntityRect

logger = logging.getLogger(__name__)

Listener = Callable[[], None]


class Subscription:
    """Handle returned by Signal.connect; unsubscribing is idempotent."""

    def __init__(self, signal: 'Signal', listener: Listener):
        self._signal = signal
        self._listener = listener
        self.active = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self.active = False
        self._signal._disconnect(self._listener)


class Signal:
    """Minimal synchronous notifier."""

    def __init__(self, name: str = ''):
        self.name = name
        self._listeners: List[Listener] = []

    def connect(self, listener: Listener) -> Subscription:
        self._listeners.append(listener)
        return Subscription(self, listener)

    def _disconnect(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    def emit(self) -> None:
        # Copy so listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            listener()


@runtime_checkable
class Trackable(Protocol):
    """Anything that can report its current container-relative rect."""

    def get_rect(self) -> Optional[EntityRect]:
        ...


class TrackedEntity:
    """
    A layout entity whose rect can change.

    move/resize update the rect and emit `resized`; `mutated` stands in for
    subtree changes that may affect layout without a rect change.
    """

    def __init__(self, rect: Optional[EntityRect] = None, name: str = ''):
        self.name = name
        self._rect = rect
        self.resized = Signal(f"{name}.resized")
        self.mutated = Signal(f"{name}.mutated")

    def get_rect(self) -> Optional[EntityRect]:
        return self._rect

    def set_rect(self, rect: Optional[EntityRect]) -> None:
        self._rect = rect
        self.resized.emit()

    def move_to(self, x: float, y: float) -> None:
        if self._rect is None:
            logger.debug(f"Entity '{self.name}' has no rect to move")
            return
        self.set_rect(EntityRect(x, y, self._rect.width, self._rect.height))

    def resize(self, width: float, height: float) -> None:
        if self._rect is None:
            logger.debug(f"Entity '{self.name}' has no rect to resize")
            return
        self.set_rect(EntityRect(self._rect.x, self._rect.y, width, height))

    def notify_mutation(self) -> None:
        self.mutated.emit()

    def __repr__(self) -> str:
        return f"TrackedEntity(name={self.name!r}, rect={self._rect!r})"


class StaticEntity:
    """A fixed rect with no change notifications."""

    def __init__(self, rect: Optional[EntityRect]):
        self._rect = rect

    def get_rect(self) -> Optional[EntityRect]:
        return self._rect


class Viewport:
    """Window-level resize and scroll notifications."""

    def __init__(self):
        self.resized = Signal('viewport.resized')
        self.scrolled = Signal('viewport.scrolled')

    def resize(self) -> None:
        self.resized.emit()

    def scroll(self) -> None:
        self.scrolled.emit()


def entity_signals(entity) -> List[Signal]:
    """Change signals exposed by an entity (none for static ones)."""
    return [
        signal for signal in (getattr(entity, 'resized', None), getattr(entity, 'mutated', None))
        if isinstance(signal, Signal)
    ]
