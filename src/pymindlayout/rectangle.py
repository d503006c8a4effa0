"""
Axis-aligned rectangles for node boxes and framing.

World space has y growing downward, so ``y`` is the top edge and ``Y``
the bottom edge.
"""

from __future__ import annotations


class Rectangle:
    """Axis-aligned rectangle."""

    def __init__(self, x: float, X: float, y: float, Y: float):
        """
        Initialize rectangle.

        Args:
            x: Left edge
            X: Right edge
            y: Top edge
            Y: Bottom edge
        """
        self.x = x
        self.X = X
        self.y = y
        self.Y = Y

    @staticmethod
    def empty() -> Rectangle:
        """Create an empty rectangle."""
        inf = float('inf')
        return Rectangle(inf, -inf, inf, -inf)

    @staticmethod
    def from_size(x: float, y: float, width: float, height: float) -> Rectangle:
        """Create a rectangle from its top-left corner and size."""
        return Rectangle(x, x + width, y, y + height)

    def is_empty(self) -> bool:
        """True if the rectangle encloses nothing."""
        return self.X < self.x or self.Y < self.y

    def cx(self) -> float:
        """Get x center."""
        return (self.x + self.X) / 2.0

    def cy(self) -> float:
        """Get y center."""
        return (self.y + self.Y) / 2.0

    def width(self) -> float:
        """Get width."""
        return self.X - self.x

    def height(self) -> float:
        """Get height."""
        return self.Y - self.y

    def union(self, r: Rectangle) -> Rectangle:
        """Get union with another rectangle."""
        return Rectangle(
            min(self.x, r.x),
            max(self.X, r.X),
            min(self.y, r.y),
            max(self.Y, r.Y)
        )

    def inflate(self, pad: float) -> Rectangle:
        """
        Inflate rectangle by padding.

        Args:
            pad: Padding amount

        Returns:
            Inflated rectangle
        """
        return Rectangle(self.x - pad, self.X + pad, self.y - pad, self.Y + pad)

    def contains(self, px: float, py: float) -> bool:
        """Point containment, edges included."""
        return self.x <= px <= self.X and self.y <= py <= self.Y

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Rectangle):
            return NotImplemented
        return (self.x, self.X, self.y, self.Y) == (other.x, other.X, other.y, other.Y)

    def __repr__(self) -> str:
        return f"Rectangle(x={self.x!r}, X={self.X!r}, y={self.y!r}, Y={self.Y!r})"
