"""Tests for rectangle module."""

import pytest
from pymindlayout.rectangle import Rectangle


class TestRectangle:
    """Test Rectangle class."""

    def test_create_rectangle(self):
        """Test rectangle creation."""
        r = Rectangle(0, 10, 0, 5)
        assert r.x == 0
        assert r.X == 10
        assert r.y == 0
        assert r.Y == 5

    def test_from_size(self):
        """Test creation from corner and size."""
        r = Rectangle.from_size(5, 10, 20, 30)
        assert r == Rectangle(5, 25, 10, 40)

    def test_empty_rectangle(self):
        """Test empty rectangle creation."""
        r = Rectangle.empty()
        assert r.x == float('inf')
        assert r.X == -float('inf')
        assert r.is_empty()
        assert not Rectangle(0, 0, 0, 0).is_empty()

    def test_center(self):
        """Test center calculation."""
        r = Rectangle(0, 10, 0, 20)
        assert r.cx() == 5
        assert r.cy() == 10

    def test_dimensions(self):
        """Test width and height."""
        r = Rectangle(0, 10, 0, 5)
        assert r.width() == 10
        assert r.height() == 5

    def test_union(self):
        """Test rectangle union."""
        r1 = Rectangle(0, 10, 0, 10)
        r2 = Rectangle(5, 15, 5, 15)

        u = r1.union(r2)

        assert u.x == 0
        assert u.X == 15
        assert u.y == 0
        assert u.Y == 15

    def test_union_with_empty(self):
        """Union with the empty rectangle is the identity."""
        r = Rectangle(1, 2, 3, 4)
        assert Rectangle.empty().union(r) == r

    def test_inflate(self):
        """Test rectangle inflation."""
        r = Rectangle(0, 10, 0, 10)
        r2 = r.inflate(2)

        assert r2.x == -2
        assert r2.X == 12
        assert r2.y == -2
        assert r2.Y == 12

    def test_contains(self):
        """Containment includes the edges."""
        r = Rectangle(0, 10, 0, 5)
        assert r.contains(5, 2)
        assert r.contains(0, 0)
        assert r.contains(10, 5)
        assert not r.contains(10.01, 5)
        assert not r.contains(5, -0.01)
