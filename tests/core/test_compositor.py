"""
Tests for the two-layer compositor and dash animation timing
"""

import math

import pytest

from curved_arrow.core.compositor import (
    GLOW_VARIANTS, OVER_LAYER_Z, OVER_TIER_Z, UNDER_LAYER_Z, UNDER_TIER_Z,
    DashAnimation, HeadPlacement, composite, empty_layers, overlay_length
)
from curved_arrow.core.config import ArrowConfig, HeadSpec
from curved_arrow.core.geometry import AnchorPoint
from curved_arrow.core.heads import build_head
from curved_arrow.core.path import PathBuilder
from tests.conftest import assert_point_close, get_drawable, get_drawables

START = AnchorPoint(0, 0)
END = AnchorPoint(100, 0)


@pytest.fixture
def line_path():
    return PathBuilder().move_to(0, 0).cubic_to(30, 20, 70, 20, 100, 0).build(
        control_anchor=AnchorPoint(70, 20), style='smooth'
    )


def placement(end='end', anchor=END, angle=0.0, **spec):
    head = HeadSpec(**spec)
    return HeadPlacement(end=end, spec=head, path=build_head(anchor, angle, 20, head.shape),
                         anchor=anchor, angle=angle)


class TestStacking:
    """Test suite for the layer stacking contract"""

    def test_z_order_is_fixed(self):
        assert UNDER_TIER_Z < UNDER_LAYER_Z < OVER_LAYER_Z < OVER_TIER_Z

    def test_layers_returned_under_then_over(self, line_path):
        under, over = composite(line_path, [], ArrowConfig(), 'inst')
        assert (under.name, over.name) == ('under', 'over')
        assert (under.z_index, over.z_index) == (2, 4)

    def test_accessibility_attributes(self, line_path):
        under, over = composite(line_path, [], ArrowConfig(aria_label='Flow'), 'inst')
        assert under.role == 'img'
        assert under.aria_label == 'Flow'
        assert not under.aria_hidden
        assert over.aria_hidden
        assert over.role is None and over.aria_label is None

    def test_empty_layers_keep_attributes(self):
        under, over = empty_layers('inst', 'Label')
        assert under.is_empty() and over.is_empty()
        assert under.role == 'img' and over.aria_hidden


class TestUnderLayer:
    """Test suite for the line, glow and dash overlay"""

    def test_default_paint_order(self, line_path):
        under, over = composite(line_path, [placement()], ArrowConfig(), 'inst')
        assert under.kinds() == ['line', 'dash']
        assert over.kinds() == ['head']

    def test_main_line_uses_layer_gradient(self, line_path):
        under, _ = composite(line_path, [], ArrowConfig(), 'inst')
        line = get_drawable(under, 'line')
        assert line.stroke == 'url(#inst-gradient-under)'
        assert line.stroke_width == 4
        assert line.fill == 'none'
        assert line.linecap == 'round'
        assert under.gradient == ('#ffffff', '#852DEE')

    def test_solid_color_without_gradient(self, line_path):
        config = ArrowConfig(stroke={'color': '#ff0000', 'gradient_from': None})
        under, over = composite(line_path, [], config, 'inst')
        assert get_drawable(under, 'line').stroke == '#ff0000'
        assert under.gradient is None and over.gradient is None

    @pytest.mark.parametrize('variant', sorted(GLOW_VARIANTS))
    def test_glow_variants_add_halo_first(self, line_path, variant):
        under, _ = composite(line_path, [], ArrowConfig(variant=variant), 'inst')
        assert under.kinds()[0] == 'glow'
        glow = get_drawable(under, 'glow')
        assert glow.stroke_width == 8
        assert glow.opacity == 0.4
        assert glow.filter_id == 'inst-filter-under'

    def test_plain_variant_has_no_glow(self, line_path):
        under, _ = composite(line_path, [], ArrowConfig(variant='ocean'), 'inst')
        assert not get_drawables(under, 'glow')

    def test_dash_overlay(self, line_path):
        under, _ = composite(line_path, [], ArrowConfig(), 'inst')
        dash = get_drawable(under, 'dash')
        assert dash.stroke == '#ffffff'
        assert dash.stroke_width == 2
        assert dash.dasharray == '12,8'
        assert dash.opacity == 0.8
        assert dash.animation.keyframes == '0;20'
        assert dash.animation.duration == 2.0

    @pytest.mark.parametrize('direction,keyframes', [
        ('forward', '0;20'),
        ('alternate', '0;20'),
        ('reverse', '20;0'),
        ('alternate-reverse', '20;0'),
    ])
    def test_dash_direction(self, line_path, direction, keyframes):
        config = ArrowConfig(animation={'direction': direction})
        under, _ = composite(line_path, [], config, 'inst')
        assert get_drawable(under, 'dash').animation.keyframes == keyframes

    def test_disabled_animation_has_no_dash(self, line_path):
        under, _ = composite(line_path, [], ArrowConfig(animation={'enabled': False}), 'inst')
        assert under.kinds() == ['line']


class TestHeads:
    """Test suite for head placement and paint"""

    def test_head_on_under_layer_follows_line(self, line_path):
        under, over = composite(line_path, [placement(layer='under')], ArrowConfig(), 'inst')
        assert under.kinds() == ['line', 'dash', 'head']
        assert over.is_empty()

    def test_heads_split_across_layers(self, line_path):
        heads = [placement('start', START, math.pi, layer='under'), placement('end', END, 0.0, layer='over')]
        under, over = composite(line_path, heads, ArrowConfig(), 'inst')
        assert get_drawable(under, 'head').end == 'start'
        assert get_drawable(over, 'head').end == 'end'

    def test_head_paint_uses_own_layer_gradient(self, line_path):
        _, over = composite(line_path, [placement()], ArrowConfig(), 'inst')
        assert get_drawable(over, 'head').stroke == 'url(#inst-gradient-over)'

    def test_open_shape_is_not_filled(self, line_path):
        _, over = composite(line_path, [placement(shape='triangle')], ArrowConfig(), 'inst')
        assert get_drawable(over, 'head').fill == 'none'

    def test_filled_shape_uses_stroke_paint(self, line_path):
        config = ArrowConfig(stroke={'gradient_from': None})
        _, over = composite(line_path, [placement(shape='filled-circle')], config, 'inst')
        head = get_drawable(over, 'head')
        assert head.fill == '#852DEE'

    def test_head_overrides(self, line_path):
        head = placement(filled=True, fill_color='#00ff00', stroke_color='#0000ff', stroke_width=1.5, opacity=0.5)
        _, over = composite(line_path, [head], ArrowConfig(), 'inst')
        drawable = get_drawable(over, 'head')
        assert drawable.fill == '#00ff00'
        assert drawable.stroke == '#0000ff'
        assert drawable.stroke_width == 1.5
        assert drawable.opacity == 0.5

    def test_line_over_head_overlay(self, line_path):
        angle = math.atan2(-20, 30)
        head = placement(angle=angle, line_over_head=True)
        _, over = composite(line_path, [head], ArrowConfig(), 'inst')
        assert over.kinds() == ['head', 'overlay']
        overlay = get_drawable(over, 'overlay')
        length = overlay_length(4)
        assert length == 14
        assert_point_close(overlay.path.first_point,
                           (100 - math.cos(angle) * length, -math.sin(angle) * length))
        assert overlay.path.last_point == END
        assert overlay.stroke_width == 4

    def test_start_head_overlay_runs_along_the_line(self, line_path):
        # Start heads face back along the path, so the overlay lies on the line just after the start
        head = placement('start', START, math.pi, layer='under', line_over_head=True)
        under, _ = composite(line_path, [head], ArrowConfig(animation={'enabled': False}), 'inst')
        assert under.kinds() == ['line', 'head', 'overlay']
        overlay = get_drawable(under, 'overlay')
        assert overlay.end == 'start'
        assert_point_close(overlay.path.first_point, (14, 0))
        assert overlay.path.last_point == START

    def test_overlay_length_floor(self):
        assert overlay_length(1) == 12
        assert overlay_length(10) == 26


class TestResourceIds:
    """Test suite for per-instance resource scoping"""

    def test_ids_are_scoped_per_instance_and_layer(self, line_path):
        a_under, a_over = composite(line_path, [], ArrowConfig(), 'a')
        b_under, b_over = composite(line_path, [], ArrowConfig(), 'b')
        ids = {layer.gradient_id for layer in (a_under, a_over, b_under, b_over)}
        ids |= {layer.filter_id for layer in (a_under, a_over, b_under, b_over)}
        assert len(ids) == 8
        assert a_over.filter_id == 'a-filter-over'


class TestDashAnimation:
    """Test suite for dash offset timing"""

    def test_offset_cycles_linearly(self):
        animation = DashAnimation.from_spec('2s', '0s', 'forward')
        assert animation.offset_at(0) == 0
        assert animation.offset_at(1) == pytest.approx(10)
        assert animation.offset_at(2.5) == pytest.approx(5)

    def test_reverse_runs_down(self):
        animation = DashAnimation.from_spec('2s', '0s', 'reverse')
        assert animation.offset_at(0.5) == pytest.approx(15)

    def test_delay_holds_start_value(self):
        animation = DashAnimation.from_spec('1s', '500ms', 'forward')
        assert animation.delay == 0.5
        assert animation.offset_at(0.25) == 0
        assert animation.offset_at(1.0) == pytest.approx(10)
