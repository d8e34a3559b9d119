"""
Tests for the CurvedArrow pipeline owner
"""

import logging

import pytest

from curved_arrow.core.config import ArrowConfig
from curved_arrow.core.connector import CurvedArrow, Diagnostic
from curved_arrow.core.geometry import AnchorPoint, EntityRect, ORIGIN
from curved_arrow.core.observe import StaticEntity, TrackedEntity
from tests.conftest import assert_exact_endpoints, get_drawable


@pytest.fixture
def docked_config():
    return ArrowConfig(start_position='right', end_position='left')


@pytest.fixture
def arrow(source_entity, target_entity, container, viewport, clock, docked_config):
    connector = CurvedArrow(
        source_entity, target_entity,
        config=docked_config,
        container=container,
        viewport=viewport,
        clock=clock,
    )
    yield connector
    connector.close()


class TestComputeState:
    """Test suite for one-shot state computation"""

    def test_anchors_are_container_relative(self, arrow):
        state = arrow.compute_state()
        assert state.start == AnchorPoint(165, 190)
        assert state.end == AnchorPoint(535, 190)
        assert_exact_endpoints(state.path, state.start, state.end)
        assert state.diagnostics == []

    def test_default_layers(self, arrow):
        state = arrow.compute_state()
        assert state.under.kinds() == ['line', 'dash']
        assert state.over.kinds() == ['head']
        assert state.start_head is None
        assert state.end_head is not None
        assert state.layers == (state.under, state.over)

    def test_start_head(self, source_entity, target_entity, container):
        config = ArrowConfig(start_head={'shape': 'dot', 'layer': 'under'}, animation={'enabled': False})
        state = CurvedArrow(source_entity, target_entity, config=config, container=container).compute_state()
        assert state.start_head.style == 'dot'
        assert get_drawable(state.under, 'head').end == 'start'

    def test_head_size_override(self, source_entity, target_entity, container):
        config = ArrowConfig(end_head={'shape': 'circle', 'size': 7}, arrow_size=30)
        state = CurvedArrow(source_entity, target_entity, config=config, container=container).compute_state()
        assert state.end_head.segments[1].rx == 7

    def test_fixed_point_endpoints(self, container):
        arrow = CurvedArrow(AnchorPoint(10, 20), (300, 40), container=container)
        state = arrow.compute_state()
        assert state.start == AnchorPoint(10, 20)
        assert state.end == AnchorPoint(300, 40)

    def test_to_dict(self, arrow):
        data = arrow.compute_state().to_dict()
        assert data['instance_id'] == arrow.instance_id
        assert [layer['name'] for layer in data['layers']] == ['under', 'over']
        assert data['path']['d'].startswith('M 165 190 C')


class TestDegradedStates:
    """Test suite for absorbed failure modes"""

    def test_missing_entity_renders_nothing(self, target_entity, container):
        arrow = CurvedArrow(TrackedEntity(None, name='ghost'), target_entity, container=container)
        state = arrow.compute_state()
        assert state.is_empty
        assert state.path is None
        assert state.under.role == 'img'
        assert state.over.aria_hidden
        assert state.diagnostics == [Diagnostic.MISSING_ENTITY]

    def test_missing_container_falls_back_to_origin(self, source_entity, target_entity):
        obstacle = StaticEntity(EntityRect(0, 0, 10, 10))
        arrow = CurvedArrow(source_entity, target_entity, obstacles=[obstacle])
        snapshot = arrow.compute_snapshot()
        assert snapshot.start == ORIGIN and snapshot.end == ORIGIN
        assert snapshot.obstacles == ()
        state = arrow.build_state(snapshot)
        assert Diagnostic.MISSING_CONTAINER in state.diagnostics
        assert not state.is_empty

    def test_reserved_curve_type(self, source_entity, target_entity, container):
        config = ArrowConfig(curve={'type': 'spiral'})
        state = CurvedArrow(source_entity, target_entity, config=config, container=container).compute_state()
        assert state.path.style == 'smooth'
        assert state.diagnostics == [Diagnostic.UNRECOGNIZED_CURVE_TYPE]

    def test_router_no_clear_path(self, caplog):
        container = StaticEntity(EntityRect(0, 0, 400, 300))
        blocker = StaticEntity(EntityRect(90, 40, 20, 20))
        config = ArrowConfig(curve={'type': 'around-obstacle'})
        arrow = CurvedArrow(AnchorPoint(0, 50), AnchorPoint(100, 50), config=config,
                            obstacles=[blocker], container=container)
        with caplog.at_level(logging.WARNING):
            state = arrow.compute_state()
        assert Diagnostic.ROUTER_NO_CLEAR_PATH in state.diagnostics
        assert state.path.last_point == AnchorPoint(100, 50)
        assert any('best-effort' in r.message for r in caplog.records)


class TestLiveUpdates:
    """Test suite for attach/update/close"""

    def test_attach_renders_on_next_frame(self, arrow, clock):
        arrow.attach()
        assert arrow.state is None
        clock.advance()
        assert arrow.state is not None
        assert arrow.state.end == AnchorPoint(535, 190)

    def test_entity_move_updates_state(self, arrow, clock, target_entity):
        updates = []
        arrow.on_update = updates.append
        arrow.attach()
        clock.advance()
        target_entity.move_to(700, 300)
        target_entity.resize(120, 80)
        assert clock.pending == 1
        clock.advance()
        assert len(updates) == 2
        assert arrow.state.end == AnchorPoint(595, 290)

    def test_sub_tolerance_move_keeps_state(self, arrow, clock, target_entity):
        arrow.attach()
        clock.advance()
        committed = arrow.state
        target_entity.move_to(640.3, 210.2)
        clock.advance()
        assert arrow.state is committed
        assert arrow.scheduler.suppressed == 1

    def test_viewport_and_mutation_triggers(self, arrow, clock, viewport, source_entity):
        arrow.attach()
        clock.advance()
        for trigger in (viewport.resize, viewport.scroll, source_entity.notify_mutation):
            trigger()
            assert clock.pending == 1
            clock.advance()

    def test_config_change_forces_render(self, arrow, clock):
        arrow.attach()
        clock.advance()
        before = arrow.state
        arrow.set_config(ArrowConfig(start_position='right', end_position='left', variant='neon'))
        clock.advance()
        assert arrow.state is not before
        assert arrow.state.under.kinds()[0] == 'glow'

    def test_swapping_endpoint_rewires_subscriptions(self, arrow, clock, target_entity):
        arrow.attach()
        clock.advance()
        replacement = TrackedEntity(EntityRect(640, 400, 120, 60), name='replacement')
        arrow.set_endpoints(end=replacement)
        clock.advance()
        assert target_entity.resized.listener_count == 0
        assert replacement.resized.listener_count == 1
        assert arrow.state.end == AnchorPoint(535, 380)

    def test_rewiring_keeps_subscriptions_bounded(self, arrow, clock, target_entity):
        obstacles = [TrackedEntity(EntityRect(300 + i * 60, 100, 20, 20), name=f'wall-{i}') for i in range(3)]
        arrow.attach()
        arrow.set_obstacles(obstacles)
        # start, end and obstacles expose two signals each, plus the two viewport signals
        assert len(arrow.scheduler.subscriptions) == 12
        for _ in range(100):
            arrow.set_obstacles(obstacles)
            arrow.set_endpoints(end=target_entity)
            arrow.attach()
        assert len(arrow.scheduler.subscriptions) == 12
        assert all(subscription.active for subscription in arrow.scheduler.subscriptions)
        assert obstacles[0].resized.listener_count == 1
        assert target_entity.mutated.listener_count == 1

    def test_close_stops_updates(self, arrow, clock, target_entity, viewport):
        arrow.attach()
        clock.advance()
        committed = arrow.state
        target_entity.move_to(0, 0)
        arrow.close()
        assert clock.pending == 0
        assert target_entity.resized.listener_count == 0
        assert viewport.scrolled.listener_count == 0
        viewport.scroll()
        clock.advance()
        assert arrow.state is committed
        assert arrow.closed

    def test_attach_after_close_raises(self, arrow):
        arrow.close()
        with pytest.raises(RuntimeError, match="closed"):
            arrow.attach()

    def test_context_manager(self, source_entity, target_entity, container, clock):
        with CurvedArrow(source_entity, target_entity, container=container, clock=clock) as arrow:
            assert arrow.refresh()
            assert source_entity.resized.listener_count == 1
        assert source_entity.resized.listener_count == 0


class TestInstanceScoping:
    """Test suite for per-instance resource ids"""

    def test_unique_instance_ids(self, source_entity, target_entity, container):
        a = CurvedArrow(source_entity, target_entity, container=container)
        b = CurvedArrow(source_entity, target_entity, container=container)
        assert a.instance_id != b.instance_id
        state_a, state_b = a.compute_state(), b.compute_state()
        assert state_a.under.gradient_id != state_b.under.gradient_id
        assert state_a.under.gradient_id.startswith(a.instance_id)

    def test_explicit_instance_id(self, source_entity, target_entity, container):
        arrow = CurvedArrow(source_entity, target_entity, container=container, instance_id='demo')
        assert arrow.compute_state().over.filter_id == 'demo-filter-over'
