"""
Anchor resolution: entity rect + dock position -> container-relative point
"""

import logging
from typing import Dict, List, Literal, Optional, Tuple

from .geometry import AnchorPoint, EntityRect, ORIGIN, to_container_space

logger = logging.getLogger(__name__)

DEFAULT_PADDING = 5.0

DockPosition = Literal[
    'top', 'bottom', 'left', 'right', 'center',
    'top-left', 'top-right', 'bottom-left', 'bottom-right',
    'top-center', 'bottom-center', 'left-center', 'right-center',
    'middle-left', 'middle-right', 'middle-top', 'middle-bottom',
]

# dock -> (x fraction of width, y fraction of height, x padding sign, y padding sign)
DOCK_TABLE: Dict[str, Tuple[float, float, int, int]] = {
    'top': (0.5, 0.0, 0, -1),
    'bottom': (0.5, 1.0, 0, 1),
    'left': (0.0, 0.5, -1, 0),
    'right': (1.0, 0.5, 1, 0),
    'center': (0.5, 0.5, 0, 0),
    'top-left': (0.0, 0.0, 0, 0),
    'top-right': (1.0, 0.0, 0, 0),
    'bottom-left': (0.0, 1.0, 0, 0),
    'bottom-right': (1.0, 1.0, 0, 0),
    'top-center': (0.5, 0.0, 0, -1),
    'bottom-center': (0.5, 1.0, 0, 1),
    'left-center': (0.0, 0.5, -1, 0),
    'right-center': (1.0, 0.5, 1, 0),
    'middle-left': (0.0, 0.5, 0, 0),
    'middle-right': (1.0, 0.5, 0, 0),
    'middle-top': (0.5, 0.0, 0, 0),
    'middle-bottom': (0.5, 1.0, 0, 0),
}

# Alternate spellings accepted from configuration
DOCK_ALIASES: Dict[str, str] = {
    'center-left': 'middle-left',
    'center-right': 'middle-right',
    'center-top': 'middle-top',
    'center-bottom': 'middle-bottom',
}


def list_docks() -> List[str]:
    """List the canonical dock positions."""
    return list(DOCK_TABLE.keys())


def normalize_dock(dock: str) -> str:
    """
    Map a dock spelling onto its canonical table entry.

    Unknown docks resolve to 'center'.
    """
    key = (dock or '').strip().lower()
    key = DOCK_ALIASES.get(key, key)
    if key not in DOCK_TABLE:
        logger.debug(f"Unknown dock position '{dock}', using center")
        return 'center'
    return key


def resolve(rect: Optional[EntityRect], dock: str, padding: float = DEFAULT_PADDING) -> AnchorPoint:
    """
    Resolve the anchor point for a dock position on a container-relative rect.

    Edge docks sit `padding` units outside the rect along the edge normal,
    corner and middle-* docks sit exactly on the boundary, and 'center'
    is the centroid. A missing rect yields the origin.

    Args:
        rect: Container-relative entity rect (None when unavailable)
        dock: Dock position name (aliases accepted)
        padding: Outward offset applied on edge docks

    Returns:
        Resolved anchor point

    Examples:
        >>> resolve(EntityRect(10, 10, 20, 10), 'top')
        AnchorPoint(x=20.0, y=5.0)
    """
    if rect is None:
        return ORIGIN

    fx, fy, px, py = DOCK_TABLE[normalize_dock(dock)]
    x = rect.x + rect.width * fx + px * padding
    y = rect.y + rect.height * fy + py * padding
    return AnchorPoint(float(x), float(y))


def resolve_in_container(
    rect: Optional[EntityRect],
    container: Optional[EntityRect],
    dock: str,
    padding: float = DEFAULT_PADDING
) -> AnchorPoint:
    """
    Resolve an anchor from a page-space rect, relative to a container.

    A missing container is not an error: the anchor degenerates to the origin.
    """
    if container is None:
        logger.debug("No container rect available, anchor falls back to origin")
        return ORIGIN
    return resolve(to_container_space(rect, container), dock, padding)
