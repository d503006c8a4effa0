"""
PyMindLayout: layout and hit detection for mind map diagrams

Turns a topic tree into positioned boxes under several diagram styles
and resolves pointer positions into topics, relationship curves, curve
handles and labels.
"""

__version__ = "0.1.0"

from .geom import Point
from .rectangle import Rectangle
from .model import Node, Relationship, Boundary
from .coordinates import (
    Viewport, screen_to_world, world_to_screen,
    get_node_edge_point, rendered_edge_point, clamp_zoom, fit_to_view
)
from .layout import (
    StructureType, LayoutConfig, LayoutWarning, RenderedNode,
    layout, layout_floating_topics, subtree_height, subtree_heights, subtree_widths,
    get_all_rendered_nodes, find_rendered_node_by_id, get_bounding_box
)
from .curves import ControlPoints, get_relationship_control_points, get_relationship_label_position
from .hitdetection import HitDetector, ControlPointHit

__all__ = [
    'Point', 'Rectangle',
    'Node', 'Relationship', 'Boundary',
    'Viewport', 'screen_to_world', 'world_to_screen',
    'get_node_edge_point', 'rendered_edge_point', 'clamp_zoom', 'fit_to_view',
    'StructureType', 'LayoutConfig', 'LayoutWarning', 'RenderedNode',
    'layout', 'layout_floating_topics', 'subtree_height', 'subtree_heights', 'subtree_widths',
    'get_all_rendered_nodes', 'find_rendered_node_by_id', 'get_bounding_box',
    'ControlPoints', 'get_relationship_control_points', 'get_relationship_label_position',
    'HitDetector', 'ControlPointHit',
]
