"""
Geometric primitives for mind map rendering.

This module provides the 2D point type shared by every component and
the cubic Bezier sampling used to hit-test relationship curves.
"""

from __future__ import annotations

import math
import numpy as np


# Number of parameter steps used when sampling a relationship curve
BEZIER_SAMPLES = 20


class Point:
    """2D point."""

    def __init__(self, x: float = 0.0, y: float = 0.0):
        self.x = x
        self.y = y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Point):
            return NotImplemented
        return self.x == other.x and self.y == other.y

    def __repr__(self) -> str:
        return f"Point({self.x!r}, {self.y!r})"


def distance(a: Point, b: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(a.x - b.x, a.y - b.y)


def bezier_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """
    Evaluate a cubic Bezier curve.

    Args:
        p0, p3: Curve endpoints
        p1, p2: Control points
        t: Curve parameter in [0, 1]

    Returns:
        Point on the curve
    """
    u = 1.0 - t
    a = u * u * u
    b = 3 * u * u * t
    c = 3 * u * t * t
    d = t * t * t
    return Point(
        a * p0.x + b * p1.x + c * p2.x + d * p3.x,
        a * p0.y + b * p1.y + c * p2.y + d * p3.y
    )


def sample_bezier(
    p0: Point, p1: Point, p2: Point, p3: Point,
    samples: int = BEZIER_SAMPLES
) -> np.ndarray:
    """
    Sample a cubic Bezier curve at equally spaced parameters.

    The parameters are ``i / samples`` for ``i`` in ``range(samples)``,
    so the end point itself (t = 1) is not included.

    Args:
        p0, p3: Curve endpoints
        p1, p2: Control points
        samples: Number of parameter steps

    Returns:
        Array of shape (samples, 2) with x, y columns
    """
    t = np.arange(samples, dtype=float) / samples
    u = 1.0 - t
    weights = np.stack([u ** 3, 3 * u ** 2 * t, 3 * u * t ** 2, t ** 3], axis=1)
    controls = np.array([
        [p0.x, p0.y],
        [p1.x, p1.y],
        [p2.x, p2.y],
        [p3.x, p3.y]
    ], dtype=float)
    return weights @ controls


def is_point_near_bezier(
    point: Point,
    p0: Point, p1: Point, p2: Point, p3: Point,
    threshold: float,
    samples: int = BEZIER_SAMPLES
) -> bool:
    """
    Test whether a point lies close to a cubic Bezier curve.

    Args:
        point: Point to test
        p0, p1, p2, p3: Curve definition
        threshold: Hit distance (exclusive)
        samples: Number of parameter steps

    Returns:
        True if any sampled curve point is closer than threshold
    """
    pts = sample_bezier(p0, p1, p2, p3, samples)
    dists = np.hypot(pts[:, 0] - point.x, pts[:, 1] - point.y)
    return bool(np.any(dists < threshold))
