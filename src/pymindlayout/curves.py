"""
Relationship curve geometry.

A relationship is drawn as a cubic Bezier from the source centre to the
target centre. Its two control points are stored as offsets from the
chord midpoint; when absent they are derived from the curvature.
"""

from __future__ import annotations

import math

from .geom import Point, bezier_point
from .model import Relationship


class ControlPoints:
    """
    Bezier handles of one relationship.

    Attributes:
        cp1: First control point (near the source)
        cp2: Second control point (near the target)
        mid: Curve point at t = 0.5
    """

    def __init__(self, cp1: Point, cp2: Point, mid: Point):
        self.cp1 = cp1
        self.cp2 = cp2
        self.mid = mid

    def __repr__(self) -> str:
        return f"ControlPoints(cp1={self.cp1!r}, cp2={self.cp2!r}, mid={self.mid!r})"


def default_control_offsets(
    curvature: float,
    start_x: float,
    start_y: float,
    end_x: float,
    end_y: float
) -> tuple[Point, Point]:
    """
    Control point offsets, relative to the chord midpoint, of an unedited curve.

    The handles sit a sixth of the chord either side of the midpoint and
    are pushed along the chord normal by ``curvature`` times its length.
    """
    dx = end_x - start_x
    dy = end_y - start_y
    length = math.hypot(dx, dy)
    if length == 0:
        return Point(0.0, 0.0), Point(0.0, 0.0)

    bend = curvature * length
    nx = -dy / length * bend
    ny = dx / length * bend
    return (
        Point(-dx / 6 + nx, -dy / 6 + ny),
        Point(dx / 6 + nx, dy / 6 + ny)
    )


def get_relationship_control_points(
    rel: Relationship,
    start_x: float,
    start_y: float,
    end_x: float,
    end_y: float
) -> ControlPoints:
    """
    Resolve the Bezier control points of a relationship.

    Args:
        rel: Relationship
        start_x, start_y: Curve start (source centre)
        end_x, end_y: Curve end (target centre)

    Returns:
        Control points and the curve midpoint
    """
    mid_x = (start_x + end_x) / 2
    mid_y = (start_y + end_y) / 2
    off1, off2 = default_control_offsets(rel.curvature, start_x, start_y, end_x, end_y)
    if rel.control_point1 is not None:
        off1 = rel.control_point1
    if rel.control_point2 is not None:
        off2 = rel.control_point2

    cp1 = Point(mid_x + off1.x, mid_y + off1.y)
    cp2 = Point(mid_x + off2.x, mid_y + off2.y)
    mid = bezier_point(Point(start_x, start_y), cp1, cp2, Point(end_x, end_y), 0.5)
    return ControlPoints(cp1, cp2, mid)


def get_relationship_label_position(
    rel: Relationship,
    start_x: float,
    start_y: float,
    end_x: float,
    end_y: float
) -> Point:
    """Label anchor: the curve midpoint shifted by the stored label offset."""
    mid = get_relationship_control_points(rel, start_x, start_y, end_x, end_y).mid
    if rel.label_offset is None:
        return mid
    return Point(mid.x + rel.label_offset.x, mid.y + rel.label_offset.y)
