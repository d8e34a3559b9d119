"""
Shared pytest fixtures and utilities for testing
"""

import math

import pytest

from curved_arrow.core.config import ArrowConfig
from curved_arrow.core.geometry import AnchorPoint, EntityRect
from curved_arrow.core.observe import StaticEntity, TrackedEntity, Viewport
from curved_arrow.core.scheduler import ManualFrameClock


@pytest.fixture
def sample_rect():
    """Small rect used by the dock table examples"""
    return EntityRect(10, 10, 20, 10)


@pytest.fixture
def container():
    """Container placed away from the page origin"""
    return StaticEntity(EntityRect(100, 50, 800, 600))


@pytest.fixture
def source_entity():
    """Tracked entity on the left side of the container (page space)"""
    return TrackedEntity(EntityRect(140, 210, 120, 60), name='source')


@pytest.fixture
def target_entity():
    """Tracked entity on the right side of the container (page space)"""
    return TrackedEntity(EntityRect(640, 210, 120, 60), name='target')


@pytest.fixture
def clock():
    return ManualFrameClock()


@pytest.fixture
def viewport():
    return Viewport()


@pytest.fixture
def quiet_config():
    """Connector config without the dash animation, end head only"""
    return ArrowConfig(animation={'enabled': False})


# Helper functions for tests

def assert_point_close(actual, expected, tol=1e-9):
    """
    Assert that two points match within tolerance

    Args:
        actual: AnchorPoint or (x, y)
        expected: AnchorPoint or (x, y)
        tol: Allowed absolute difference per coordinate
    """
    ax, ay = actual.as_tuple() if isinstance(actual, AnchorPoint) else actual
    ex, ey = expected.as_tuple() if isinstance(expected, AnchorPoint) else expected
    assert math.isclose(ax, ex, abs_tol=tol) and math.isclose(ay, ey, abs_tol=tol), \
        f"Expected ({ex}, {ey}), got ({ax}, {ay})"


def assert_exact_endpoints(path, start, end):
    """Assert that a path starts and ends exactly on the anchors"""
    assert path.first_point == start, f"Path starts at {path.first_point}, expected {start}"
    assert path.last_point == end, f"Path ends at {path.last_point}, expected {end}"


def get_drawables(layer, kind):
    """Get all drawables of a kind in a layer"""
    return [d for d in layer.drawables if d.kind == kind]


def get_drawable(layer, kind):
    """Get the single drawable of a kind in a layer"""
    matches = get_drawables(layer, kind)
    assert len(matches) == 1, f"Expected one '{kind}' drawable, got {len(matches)}"
    return matches[0]
