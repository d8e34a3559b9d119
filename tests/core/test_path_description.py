"""
Tests for path segments, PathDescription and PathBuilder
"""

from curved_arrow.core.geometry import AnchorPoint, EntityRect, points_close, to_container_space
from curved_arrow.core.path import (
    ArcTo, ClosePath, CubicTo, LineTo, MoveTo, PathBuilder, PathDescription, format_number
)


class TestFormatNumber:
    """Test suite for coordinate formatting"""

    def test_integral_values_drop_decimals(self):
        assert format_number(50.0) == '50'
        assert format_number(-3.0) == '-3'

    def test_rounds_to_three_digits(self):
        assert format_number(32.67949192431123) == '32.679'
        assert format_number(0.1 + 0.2) == '0.3'

    def test_negative_zero_is_zero(self):
        assert format_number(-0.0) == '0'
        assert format_number(-0.0001) == '0'

    def test_custom_precision(self):
        assert format_number(1.23456, digits=1) == '1.2'


class TestPathDescription:
    """Test suite for PathDescription"""

    def test_svg_serialization(self):
        path = (
            PathBuilder()
            .move_to(0, 0)
            .cubic_to(30, 20, 70, 20, 100, 0)
            .build(control_anchor=AnchorPoint(70, 20), style='smooth')
        )
        assert path.to_svg() == 'M 0 0 C 30 20 70 20 100 0'

    def test_arc_flags_serialize_as_integers(self):
        path = PathBuilder().move_to(10, 0).arc_to(10, 10, 0, True, False, -10, 0).build()
        assert path.to_svg() == 'M 10 0 A 10 10 0 1 0 -10 0'

    def test_first_and_last_point(self):
        path = PathBuilder().move_to(1, 2).line_to(3, 4).quad_to(5, 6, 7, 8).build()
        assert path.first_point == AnchorPoint(1, 2)
        assert path.last_point == AnchorPoint(7, 8)

    def test_last_point_skips_close(self):
        path = PathBuilder().move_to(0, 0).line_to(5, 5).line_to(5, 0).close().build()
        assert path.is_closed
        assert path.last_point == AnchorPoint(5, 0)

    def test_empty_path(self):
        path = PathDescription()
        assert path.is_empty()
        assert path.first_point is None
        assert path.last_point is None
        assert not path.is_closed
        assert path.to_svg() == ''

    def test_commands(self):
        path = PathBuilder().move_to(0, 0).line_to(1, 1).close().build()
        assert path.commands() == [('M', (0, 0)), ('L', (1, 1)), ('Z', ())]

    def test_segment_types(self):
        path = PathBuilder().move_to(0, 0).line_to(1, 0).cubic_to(1, 1, 2, 2, 3, 3).arc_to(
            1, 1, 0, False, True, 4, 4).close().build()
        assert [type(s) for s in path.segments] == [MoveTo, LineTo, CubicTo, ArcTo, ClosePath]

    def test_to_dict(self):
        path = PathBuilder().move_to(0, 0).line_to(10, 0).build(
            control_anchor=AnchorPoint(5, 0), style='test', offset=2.5
        )
        data = path.to_dict()
        assert data['d'] == 'M 0 0 L 10 0'
        assert data['style'] == 'test'
        assert data['offset'] == 2.5
        assert data['control_anchor'] == {'x': 5, 'y': 0}
        assert data['commands'][1] == {'command': 'L', 'values': [10, 0]}

    def test_builder_returns_independent_paths(self):
        builder = PathBuilder().move_to(0, 0)
        first = builder.build()
        builder.line_to(1, 1)
        assert len(first.segments) == 1
        assert len(builder.build().segments) == 2


class TestGeometry:
    """Test suite for rect helpers"""

    def test_rect_edges_and_center(self):
        rect = EntityRect(10, 20, 30, 40)
        assert (rect.left, rect.right, rect.top, rect.bottom) == (10, 40, 20, 60)
        assert rect.center == AnchorPoint(25, 40)

    def test_expand(self):
        assert EntityRect(40, 40, 20, 20).expand(25) == EntityRect(15, 15, 70, 70)

    def test_container_space(self):
        rect = EntityRect(150, 80, 10, 10)
        assert to_container_space(rect, EntityRect(100, 50, 800, 600)) == EntityRect(50, 30, 10, 10)

    def test_container_space_missing_inputs(self):
        assert to_container_space(None, EntityRect(0, 0, 1, 1)) is None
        assert to_container_space(EntityRect(0, 0, 1, 1), None) is None

    def test_points_close_is_strict(self):
        assert points_close(AnchorPoint(0, 0), AnchorPoint(0.49, -0.49), 0.5)
        assert not points_close(AnchorPoint(0, 0), AnchorPoint(0.5, 0), 0.5)
