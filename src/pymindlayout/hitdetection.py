"""
Hit detection over rendered geometry.

Answers "what is under this world point": a topic, a relationship curve,
one of the selected curve's control handles, a relationship label or a
boundary. Every query is a pure read and degrades to ``None`` when the
geometry it needs is missing; these run on every pointer event.
"""

from __future__ import annotations

from typing import Iterable, Mapping, Optional
import logging

from .curves import ControlPoints, get_relationship_control_points
from .geom import Point, distance, is_point_near_bezier
from .layout import (
    ConfigLike,
    RenderedNode,
    find_rendered_node_by_id,
    get_all_rendered_nodes,
    layout_floating_topics,
)
from .model import Boundary, Node, Relationship
from .rectangle import Rectangle

logger = logging.getLogger(__name__)


# Distance from a relationship curve that still counts as a hit
CURVE_HIT_THRESHOLD = 10.0

# Default radius of a drawn control handle, and the extra grab margin
CONTROL_POINT_RADIUS = 6.0
CONTROL_POINT_TOLERANCE = 4.0

# Label box estimate
LABEL_CHAR_WIDTH = 7
LABEL_PADDING = 6
LABEL_HEIGHT = 20
LABEL_BASELINE_SHIFT = 2
LABEL_PLACEHOLDER = 'Double-click to add label'

BOUNDARY_PADDING = 10.0


class ControlPointHit:
    """Control handle under the pointer: relationship id and handle number (1 or 2)."""

    def __init__(self, relationship_id: str, point: int):
        self.relationship_id = relationship_id
        self.point = point

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ControlPointHit):
            return NotImplemented
        return self.relationship_id == other.relationship_id and self.point == other.point

    def __repr__(self) -> str:
        return f"ControlPointHit({self.relationship_id!r}, {self.point})"


class HitDetector:
    """
    Point queries against one snapshot of rendered geometry.

    Floating topics are laid out once here, as independent mind map
    trees, and are tested before the main tree because they draw on top.

    Args:
        rendered_root: Root of the main rendered tree, or None
        floating_topics: Floating topic nodes (laid out here)
        relationships: Relationships in draw order
        selected_relationship_id: Currently selected relationship, if any
        label_positions: Cached label anchors by relationship id, owned by
            the presentation layer; may be empty or partial
        control_point_radius: Drawn radius of a control handle
        config: Layout configuration used for floating topics
        boundaries: Boundaries in draw order
    """

    def __init__(
        self,
        rendered_root: Optional[RenderedNode],
        floating_topics: Iterable[Node] = (),
        relationships: Iterable[Relationship] = (),
        selected_relationship_id: Optional[str] = None,
        label_positions: Optional[Mapping[str, Point]] = None,
        control_point_radius: float = CONTROL_POINT_RADIUS,
        config: ConfigLike = None,
        boundaries: Iterable[Boundary] = ()
    ):
        self.rendered_root = rendered_root
        self.floating_roots = layout_floating_topics(floating_topics, config)
        self.relationships: list[Relationship] = list(relationships)
        self.selected_relationship_id = selected_relationship_id
        self.label_positions: Mapping[str, Point] = label_positions if label_positions is not None else {}
        self.control_point_radius = control_point_radius
        self.boundaries: list[Boundary] = list(boundaries)

        self._main_nodes = get_all_rendered_nodes(rendered_root)
        self._floating_nodes: list[RenderedNode] = []
        for froot in self.floating_roots:
            self._floating_nodes.extend(get_all_rendered_nodes(froot))

    # ------------------------------------------------------------------
    # Nodes
    # ------------------------------------------------------------------

    def find_node_at_position(self, point: Point) -> Optional[RenderedNode]:
        """
        Topmost rendered node containing a point.

        Floating trees come first; within each collection the last drawn
        node wins.
        """
        for nodes in (self._floating_nodes, self._main_nodes):
            for n in reversed(nodes):
                if n.contains(point.x, point.y):
                    return n
        return None

    def find_rendered_node(self, node_id: str) -> Optional[RenderedNode]:
        """Rendered node of a topic id, main tree first, then floating trees."""
        found = find_rendered_node_by_id(self.rendered_root, node_id)
        if found is not None:
            return found
        for froot in self.floating_roots:
            found = find_rendered_node_by_id(froot, node_id)
            if found is not None:
                return found
        return None

    def get_node_bounds(self, node_id: str) -> Optional[Rectangle]:
        n = self.find_rendered_node(node_id)
        return n.bounds() if n is not None else None

    # ------------------------------------------------------------------
    # Relationships
    # ------------------------------------------------------------------

    def _curve(self, rel: Relationship) -> Optional[tuple[Point, Point, ControlPoints]]:
        """Endpoints and handles of a relationship, or None for a broken reference."""
        source = self.find_rendered_node(rel.source_id)
        target = self.find_rendered_node(rel.target_id)
        if source is None or target is None:
            logger.debug(
                "relationship %s skipped: missing endpoint (source=%s, target=%s)",
                rel.id, rel.source_id, rel.target_id
            )
            return None

        start = Point(source.cx(), source.cy())
        end = Point(target.cx(), target.cy())
        cps = get_relationship_control_points(rel, start.x, start.y, end.x, end.y)
        return start, end, cps

    def _relationship(self, relationship_id: str) -> Optional[Relationship]:
        for rel in self.relationships:
            if rel.id == relationship_id:
                return rel
        return None

    def find_relationship_at_position(self, point: Point) -> Optional[str]:
        """
        Id of the first relationship whose curve passes near a point.

        Relationships are tested in iteration order, not depth order.
        """
        for rel in self.relationships:
            curve = self._curve(rel)
            if curve is None:
                continue
            start, end, cps = curve
            if is_point_near_bezier(point, start, cps.cp1, cps.cp2, end, CURVE_HIT_THRESHOLD):
                return rel.id
        return None

    def find_control_point_at_position(self, point: Point) -> Optional[ControlPointHit]:
        """
        Control handle of the selected relationship under a point.

        Unselected relationships have no interactive handles. Handle 1 is
        checked before handle 2.
        """
        if not self.selected_relationship_id:
            return None
        rel = self._relationship(self.selected_relationship_id)
        if rel is None:
            return None
        curve = self._curve(rel)
        if curve is None:
            return None

        _, _, cps = curve
        reach = self.control_point_radius + CONTROL_POINT_TOLERANCE
        if distance(point, cps.cp1) <= reach:
            return ControlPointHit(rel.id, 1)
        if distance(point, cps.cp2) <= reach:
            return ControlPointHit(rel.id, 2)
        return None

    def label_text(self, rel: Relationship) -> str:
        """Text shown for a relationship label; the selected empty label gets a prompt."""
        if rel.label:
            return rel.label
        if rel.id == self.selected_relationship_id:
            return LABEL_PLACEHOLDER
        return ''

    def find_relationship_label_at_position(self, point: Point) -> Optional[str]:
        """Id of the relationship whose cached label box contains a point."""
        for rel_id, anchor in list(self.label_positions.items()):
            rel = self._relationship(rel_id)
            if rel is None:
                continue
            text = self.label_text(rel)
            if not text:
                continue

            half_w = (len(text) * LABEL_CHAR_WIDTH + LABEL_PADDING * 2) / 2
            half_h = LABEL_HEIGHT / 2
            box = Rectangle(
                anchor.x - half_w, anchor.x + half_w,
                anchor.y - half_h - LABEL_BASELINE_SHIFT, anchor.y + half_h - LABEL_BASELINE_SHIFT
            )
            if box.contains(point.x, point.y):
                return rel_id
        return None

    # ------------------------------------------------------------------
    # Boundaries
    # ------------------------------------------------------------------

    def get_boundary_bounds(self, boundary: Boundary, padding: float = BOUNDARY_PADDING) -> Optional[Rectangle]:
        """
        Box drawn around a boundary's member topics.

        Members missing from the geometry are ignored; None when none resolve.
        """
        bounds = Rectangle.empty()
        for node_id in boundary.node_ids:
            member = self.find_rendered_node(node_id)
            if member is not None:
                bounds = bounds.union(member.bounds())
        if bounds.is_empty():
            return None
        return bounds.inflate(padding)

    def find_boundary_at_position(self, point: Point) -> Optional[str]:
        """Id of the last-drawn boundary whose box contains a point."""
        for boundary in reversed(self.boundaries):
            box = self.get_boundary_bounds(boundary)
            if box is not None and box.contains(point.x, point.y):
                return boundary.id
        return None
