"""
Tests for the single-pass obstacle router
"""

import logging

from curved_arrow.core.geometry import AnchorPoint, EntityRect
from curved_arrow.routing import OBSTACLE_MARGIN, route
from curved_arrow.routing.router import detour_waypoint, span_intersects

START = AnchorPoint(0, 50)
END = AnchorPoint(100, 50)


class TestSpanIntersects:
    """Test suite for span_intersects()"""

    def test_obstacle_on_the_chord(self):
        assert span_intersects(START, END, EntityRect(40, 40, 20, 20))

    def test_span_is_symmetric(self):
        box = EntityRect(40, 40, 20, 20)
        assert span_intersects(END, START, box)

    def test_obstacle_beside_the_span(self):
        assert not span_intersects(START, END, EntityRect(40, 80, 20, 20))
        assert not span_intersects(START, END, EntityRect(150, 40, 20, 20))

    def test_touching_edge_is_not_an_overlap(self):
        assert not span_intersects(START, AnchorPoint(40, 50), EntityRect(40, 40, 20, 20))


class TestDetourWaypoint:
    """Test suite for waypoint placement"""

    def test_end_below_right_of_centre(self):
        obstacle = EntityRect(40, 40, 20, 20)
        box = obstacle.expand(OBSTACLE_MARGIN)
        assert detour_waypoint(obstacle, box, AnchorPoint(100, 50)) == AnchorPoint(105, 95)

    def test_end_above_left_of_centre(self):
        obstacle = EntityRect(40, 40, 20, 20)
        box = obstacle.expand(OBSTACLE_MARGIN)
        assert detour_waypoint(obstacle, box, AnchorPoint(0, 0)) == AnchorPoint(-5, 5)


class TestRoute:
    """Test suite for route()"""

    def test_no_obstacles(self):
        result = route(START, END, [])
        assert not result.detoured
        assert result.control_anchor is None
        assert result.clear

    def test_obstacle_out_of_the_way(self):
        result = route(START, END, [EntityRect(40, 300, 20, 20)])
        assert not result.detoured

    def test_single_detour(self):
        result = route(START, END, [EntityRect(40, 40, 20, 20)])
        assert result.waypoints == [AnchorPoint(105, 95)]
        assert result.control_anchor == AnchorPoint(105, 95)
        assert result.clear
        assert result.blocked == []

    def test_polyline(self):
        result = route(START, END, [EntityRect(40, 40, 20, 20)])
        assert result.polyline(START, END) == [(0, 50), (105, 95), (100, 50)]

    def test_routing_continues_from_waypoint(self):
        # Second obstacle sits between the first waypoint and the end
        obstacles = [EntityRect(40, 40, 20, 20), EntityRect(200, 140, 20, 20)]
        result = route(START, AnchorPoint(300, 150), obstacles)
        assert len(result.waypoints) == 2
        assert result.control_anchor == result.waypoints[-1]

    def test_obstacle_is_visited_once(self):
        obstacle = EntityRect(40, 40, 20, 20)
        result = route(START, END, [obstacle])
        assert len(result.waypoints) == 1

    def test_blocked_route_is_reported(self, caplog):
        with caplog.at_level(logging.WARNING, logger='curved_arrow.routing.router'):
            result = route(START, END, [EntityRect(90, 40, 20, 20)])
        assert result.waypoints == [AnchorPoint(45, 95)]
        assert not result.clear
        assert result.blocked == [0]
        assert any('best-effort' in record.message for record in caplog.records)

    def test_custom_margin(self):
        result = route(START, END, [EntityRect(40, 40, 20, 20)], margin=0)
        assert result.waypoints == [AnchorPoint(80, 70)]
