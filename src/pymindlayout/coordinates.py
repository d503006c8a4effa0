"""
Screen <-> world coordinate transforms.

The forward transform translates a world point so the viewport centre is
the origin, applies the pan offset, scales by zoom and translates back
into viewport-relative screen space plus the viewport's screen offset.
``screen_to_world`` is its exact inverse for the same snapshot.
"""

from __future__ import annotations

from typing import Optional, TYPE_CHECKING

from .geom import Point
from .rectangle import Rectangle

if TYPE_CHECKING:
    from .layout import RenderedNode


# Zoom limits enforced by the view
MIN_ZOOM = 0.1
MAX_ZOOM = 5.0

# Gap left between a node's border and a relationship endpoint
EDGE_PADDING = 4.0

# Margin kept around the content when fitting it into the viewport
FIT_PADDING = 50.0


class Viewport:
    """
    Screen rectangle the diagram is drawn into.

    Attributes:
        left: Screen x of the viewport's left edge
        top: Screen y of the viewport's top edge
        width: Viewport width in screen units
        height: Viewport height in screen units
    """

    def __init__(self, left: float = 0.0, top: float = 0.0, width: float = 0.0, height: float = 0.0):
        self.left = left
        self.top = top
        self.width = width
        self.height = height

    def __repr__(self) -> str:
        return f"Viewport(left={self.left!r}, top={self.top!r}, width={self.width!r}, height={self.height!r})"


def screen_to_world(
    pointer: Point,
    viewport: Optional[Viewport],
    zoom: float,
    pan_x: float,
    pan_y: float
) -> Point:
    """
    Convert a pointer position to world coordinates.

    Args:
        pointer: Pointer position in screen (client) coordinates
        viewport: Viewport rectangle, or None when not mounted yet
        zoom: Current zoom factor
        pan_x, pan_y: Current pan offset

    Returns:
        World point, or the origin if the viewport is unavailable
    """
    if viewport is None or zoom <= 0:
        return Point(0.0, 0.0)

    half_w = viewport.width / 2
    half_h = viewport.height / 2
    x = (pointer.x - viewport.left - half_w) / zoom + half_w - pan_x
    y = (pointer.y - viewport.top - half_h) / zoom + half_h - pan_y
    return Point(x, y)


def world_to_screen(
    world_x: float,
    world_y: float,
    viewport: Optional[Viewport],
    zoom: float,
    pan_x: float,
    pan_y: float
) -> Point:
    """
    Convert a world point to screen coordinates.

    Returns the origin if the viewport is unavailable.
    """
    if viewport is None:
        return Point(0.0, 0.0)

    half_w = viewport.width / 2
    half_h = viewport.height / 2
    x = (world_x - half_w + pan_x) * zoom + half_w + viewport.left
    y = (world_y - half_h + pan_y) * zoom + half_h + viewport.top
    return Point(x, y)


def get_node_edge_point(
    center_x: float,
    center_y: float,
    half_width: float,
    half_height: float,
    target_x: float,
    target_y: float,
    padding: float = EDGE_PADDING
) -> Point:
    """
    Find where the ray from a box centre towards a target leaves the box.

    The box is expanded by ``padding`` on every side. The ray parameter
    is clamped to 1, so the result never lies beyond the target.

    Args:
        center_x, center_y: Box centre
        half_width, half_height: Box half extents
        target_x, target_y: Point the ray heads towards
        padding: Extra margin around the box

    Returns:
        Crossing point, or the centre when the target is the centre
    """
    dx = target_x - center_x
    dy = target_y - center_y

    if dx == 0 and dy == 0:
        return Point(center_x, center_y)

    hw = half_width + padding
    hh = half_height + padding

    t = 1.0
    for d, half in ((dx, hw), (dy, hh)):
        if d == 0:
            continue
        for candidate in (-half / d, half / d):
            if candidate > 0:
                t = min(t, candidate)

    return Point(center_x + dx * t, center_y + dy * t)


def rendered_edge_point(
    rendered: RenderedNode,
    target_x: float,
    target_y: float,
    padding: float = EDGE_PADDING
) -> Point:
    """Edge point of a rendered node's box towards a target."""
    return get_node_edge_point(
        rendered.cx(), rendered.cy(),
        rendered.width / 2, rendered.height / 2,
        target_x, target_y,
        padding
    )


def clamp_zoom(zoom: float) -> float:
    """Clamp a zoom factor to the supported range."""
    return max(MIN_ZOOM, min(MAX_ZOOM, zoom))


def fit_to_view(
    bounds: Rectangle,
    viewport_width: float,
    viewport_height: float,
    padding: float = FIT_PADDING
) -> tuple[float, float, float]:
    """
    Compute the view that frames a bounding box.

    Args:
        bounds: Content bounding box in world coordinates
        viewport_width, viewport_height: Viewport size
        padding: Screen margin kept on every side

    Returns:
        (zoom, pan_x, pan_y) placing the box centre at the viewport centre
    """
    if bounds.is_empty():
        return 1.0, 0.0, 0.0

    pan_x = viewport_width / 2 - bounds.cx()
    pan_y = viewport_height / 2 - bounds.cy()

    w = bounds.width()
    h = bounds.height()
    avail_w = viewport_width - 2 * padding
    avail_h = viewport_height - 2 * padding
    if w <= 0 or h <= 0 or avail_w <= 0 or avail_h <= 0:
        return 1.0, pan_x, pan_y

    zoom = clamp_zoom(min(avail_w / w, avail_h / h))
    return zoom, pan_x, pan_y
