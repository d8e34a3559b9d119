"""
Geometry primitives shared by the connector pipeline
"""

from typing import Optional, Tuple
from dataclasses import dataclass


@dataclass(frozen=True)
class AnchorPoint:
    """A container-relative point where a connector touches an entity."""
    x: float
    y: float

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


ORIGIN = AnchorPoint(0.0, 0.0)


@dataclass(frozen=True)
class EntityRect:
    """Axis-aligned rectangle, container-relative unless stated otherwise."""
    x: float
    y: float
    width: float
    height: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> AnchorPoint:
        return AnchorPoint(self.x + self.width / 2, self.y + self.height / 2)

    def expand(self, margin: float) -> 'EntityRect':
        """Grow the rect by margin on every side."""
        return EntityRect(
            self.x - margin,
            self.y - margin,
            self.width + 2 * margin,
            self.height + 2 * margin
        )

    def relative_to(self, container: 'EntityRect') -> 'EntityRect':
        """Translate a page-space rect into the container's coordinate space."""
        return EntityRect(
            self.x - container.x,
            self.y - container.y,
            self.width,
            self.height
        )

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)


def to_container_space(rect: Optional[EntityRect], container: Optional[EntityRect]) -> Optional[EntityRect]:
    """
    Convert a page-space rect to container space.

    Returns None when either the rect or the container is missing.
    """
    if rect is None or container is None:
        return None
    return rect.relative_to(container)


def points_close(a: AnchorPoint, b: AnchorPoint, tolerance: float) -> bool:
    """True when both coordinate deltas are strictly below tolerance."""
    return abs(a.x - b.x) < tolerance and abs(a.y - b.y) < tolerance
