"""Tests for coordinate transforms."""

import pytest
from pymindlayout.coordinates import (
    Viewport, screen_to_world, world_to_screen,
    get_node_edge_point, rendered_edge_point,
    clamp_zoom, fit_to_view, MIN_ZOOM, MAX_ZOOM
)
from pymindlayout.geom import Point
from pymindlayout.layout import RenderedNode
from pymindlayout.model import Node
from pymindlayout.rectangle import Rectangle


VIEWS = [
    (Viewport(0, 0, 800, 600), 1.0, 0.0, 0.0),
    (Viewport(10, 20, 800, 600), 2.0, 5.0, -5.0),
    (Viewport(-30, 45, 1024, 768), 0.35, -120.5, 300.25),
    (Viewport(200, 100, 333, 211), 4.7, 12.0, 0.5),
]

POINTS = [(0, 0), (123.4, -56.7), (-1000, 2500), (400, 300)]


class TestTransforms:
    """Test screen/world conversion."""

    def test_world_to_screen_value(self):
        """Test forward transform against a hand-computed value."""
        vp = Viewport(10, 20, 800, 600)
        p = world_to_screen(400, 300, vp, 2.0, 5.0, -5.0)
        assert p.x == pytest.approx(420.0)
        assert p.y == pytest.approx(310.0)

    def test_identity_view(self):
        """Zoom 1, no pan, viewport at origin maps points to themselves."""
        vp = Viewport(0, 0, 800, 600)
        p = screen_to_world(Point(123, 456), vp, 1.0, 0.0, 0.0)
        assert p.x == pytest.approx(123)
        assert p.y == pytest.approx(456)

    @pytest.mark.parametrize("view", VIEWS)
    @pytest.mark.parametrize("xy", POINTS)
    def test_screen_world_round_trip(self, view, xy):
        """world_to_screen(screen_to_world(p)) == p."""
        vp, zoom, pan_x, pan_y = view
        world = screen_to_world(Point(*xy), vp, zoom, pan_x, pan_y)
        back = world_to_screen(world.x, world.y, vp, zoom, pan_x, pan_y)
        assert back.x == pytest.approx(xy[0])
        assert back.y == pytest.approx(xy[1])

    @pytest.mark.parametrize("view", VIEWS)
    @pytest.mark.parametrize("xy", POINTS)
    def test_world_screen_round_trip(self, view, xy):
        """screen_to_world(world_to_screen(p)) == p."""
        vp, zoom, pan_x, pan_y = view
        screen = world_to_screen(xy[0], xy[1], vp, zoom, pan_x, pan_y)
        back = screen_to_world(screen, vp, zoom, pan_x, pan_y)
        assert back.x == pytest.approx(xy[0])
        assert back.y == pytest.approx(xy[1])

    def test_missing_viewport(self):
        """Without a viewport both directions return the origin."""
        assert screen_to_world(Point(50, 50), None, 1.0, 0, 0) == Point(0, 0)
        assert world_to_screen(50, 50, None, 1.0, 0, 0) == Point(0, 0)

    def test_zero_zoom(self):
        """A zero zoom cannot be inverted and yields the origin."""
        assert screen_to_world(Point(50, 50), Viewport(0, 0, 100, 100), 0.0, 0, 0) == Point(0, 0)


class TestEdgePoint:
    """Test ray/box edge intersection."""

    def test_target_at_center(self):
        """Degenerate ray returns the centre."""
        p = get_node_edge_point(10, 20, 50, 20, 10, 20)
        assert p == Point(10, 20)

    def test_horizontal(self):
        """Ray to the right exits through the padded right edge."""
        p = get_node_edge_point(0, 0, 50, 20, 200, 0, padding=4)
        assert p.x == pytest.approx(54)
        assert p.y == pytest.approx(0)

    def test_vertical(self):
        """Ray upward exits through the padded top edge."""
        p = get_node_edge_point(0, 0, 50, 20, 0, -100, padding=4)
        assert p.x == pytest.approx(0)
        assert p.y == pytest.approx(-24)

    def test_diagonal(self):
        """Diagonal ray hits the nearer (top/bottom) edge of a wide box."""
        p = get_node_edge_point(0, 0, 50, 20, 100, 100, padding=4)
        assert p.x == pytest.approx(24)
        assert p.y == pytest.approx(24)

    def test_target_inside_box(self):
        """A target inside the padded box is returned unchanged."""
        p = get_node_edge_point(0, 0, 50, 20, 10, 5, padding=4)
        assert p.x == pytest.approx(10)
        assert p.y == pytest.approx(5)

    @pytest.mark.parametrize("target", [
        (300, 7), (-300, 7), (13, 200), (-13, -200), (80, 80), (-91, 33), (57, -24.5)
    ])
    def test_point_on_padded_boundary(self, target):
        """Outside targets yield a point on the padded boundary."""
        hw, hh, pad = 50, 20, 4
        p = get_node_edge_point(0, 0, hw, hh, target[0], target[1], padding=pad)
        on_x = abs(abs(p.x) - (hw + pad)) < 1e-9
        on_y = abs(abs(p.y) - (hh + pad)) < 1e-9
        assert on_x or on_y
        assert abs(p.x) <= hw + pad + 1e-9
        assert abs(p.y) <= hh + pad + 1e-9

    def test_rendered_edge_point(self):
        """Rendered node variant uses the node box."""
        r = RenderedNode(Node('a'), 0, 0, 100, 40, 0)
        p = rendered_edge_point(r, 500, 20, padding=0)
        assert p.x == pytest.approx(100)
        assert p.y == pytest.approx(20)


class TestZoom:
    """Test zoom helpers."""

    def test_clamp_zoom(self):
        assert clamp_zoom(0.01) == MIN_ZOOM
        assert clamp_zoom(50) == MAX_ZOOM
        assert clamp_zoom(1.5) == 1.5

    def test_fit_to_view_centres_content(self):
        """The box centre lands at the viewport centre."""
        bounds = Rectangle(100, 500, -50, 150)
        vp = Viewport(0, 0, 800, 600)
        zoom, pan_x, pan_y = fit_to_view(bounds, vp.width, vp.height)
        centre = world_to_screen(bounds.cx(), bounds.cy(), vp, zoom, pan_x, pan_y)
        assert centre.x == pytest.approx(400)
        assert centre.y == pytest.approx(300)

    def test_fit_to_view_zoom(self):
        """Zoom is the tighter of the two axis ratios."""
        bounds = Rectangle(0, 400, 0, 100)
        zoom, _, _ = fit_to_view(bounds, 900, 600, padding=50)
        assert zoom == pytest.approx(2.0)

    def test_fit_to_view_clamps(self):
        """Tiny content does not zoom past the limit."""
        zoom, _, _ = fit_to_view(Rectangle(0, 1, 0, 1), 800, 600)
        assert zoom == MAX_ZOOM

    def test_fit_to_view_degenerate(self):
        """Zero-area boxes keep zoom 1."""
        zoom, pan_x, pan_y = fit_to_view(Rectangle(0, 0, 0, 0), 800, 600)
        assert zoom == 1.0
        assert (pan_x, pan_y) == (400, 300)
        assert fit_to_view(Rectangle.empty(), 800, 600) == (1.0, 0.0, 0.0)
