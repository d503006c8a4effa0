"""
Document-side types consumed by the layout core.

These mirror what the document store owns: the topic tree, floating
topics, relationships and boundaries. The layout core only ever reads
them.
"""

from __future__ import annotations

from typing import Any, Optional, Mapping

from .geom import Point


# Default bend of a freshly created relationship
DEFAULT_CURVATURE = 0.3


def _to_point(value: Any) -> Optional[Point]:
    """Coerce a stored position/offset into a Point."""
    if value is None or isinstance(value, Point):
        return value
    if isinstance(value, Mapping):
        return Point(value.get('x', 0.0), value.get('y', 0.0))
    x, y = value
    return Point(x, y)


class Node:
    """
    Topic in the mind map document.

    Attributes:
        id: Stable identifier, unique within a document
        text: Display text
        children: Ordered child topics
        position: Manual override, or None. The top-left corner of a
            placed topic, the centre of a tree root
        collapsed: True hides the children from layout
        is_floating: True for topics detached from the main tree
        structure: Style used for this topic's children, inherited by its
            descendants; None inherits from the parent

    Any other keyword argument (markers, notes, ...) is stored as an
    attribute and ignored by layout.
    """

    def __init__(
        self,
        id: str,
        text: str = '',
        children: Optional[list[Node]] = None,
        position: Any = None,
        collapsed: bool = False,
        is_floating: bool = False,
        structure: Optional[str] = None,
        **kwargs
    ):
        self.id = id
        self.text = text
        self.children: list[Node] = list(children) if children else []
        self.position: Optional[Point] = _to_point(position)
        self.collapsed = bool(collapsed)
        self.is_floating = is_floating
        self.structure = structure

        # Copy over any additional properties
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Node:
        """
        Build a node tree from a nested mapping.

        Accepts the store's camelCase ``isFloating`` key as well as
        ``is_floating``. Positions may be ``{'x': .., 'y': ..}`` mappings
        or pairs.
        """
        fields = dict(data)
        children = [cls.from_dict(c) for c in fields.pop('children', None) or []]
        if 'isFloating' in fields:
            fields['is_floating'] = fields.pop('isFloating')
        return cls(children=children, **fields)

    def __repr__(self) -> str:
        return f"Node(id={self.id!r}, text={self.text!r}, children={len(self.children)})"


class Relationship:
    """
    Labelled curve between two topics, independent of the tree.

    Attributes:
        id: Relationship identifier
        source_id: Id of the source topic
        target_id: Id of the target topic
        label: Display text, may be empty
        curvature: Bend of the default curve
        control_point1: Offset of the first Bezier handle from the chord midpoint
        control_point2: Offset of the second Bezier handle from the chord midpoint
        label_offset: Offset of the label from the curve midpoint
    """

    def __init__(
        self,
        id: str,
        source_id: str,
        target_id: str,
        label: str = '',
        curvature: float = DEFAULT_CURVATURE,
        control_point1: Any = None,
        control_point2: Any = None,
        label_offset: Any = None,
        **kwargs
    ):
        self.id = id
        self.source_id = source_id
        self.target_id = target_id
        self.label = label or ''
        self.curvature = curvature
        self.control_point1: Optional[Point] = _to_point(control_point1)
        self.control_point2: Optional[Point] = _to_point(control_point2)
        self.label_offset: Optional[Point] = _to_point(label_offset)

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    _KEYS = {
        'sourceId': 'source_id',
        'targetId': 'target_id',
        'controlPoint1': 'control_point1',
        'controlPoint2': 'control_point2',
        'labelOffset': 'label_offset',
    }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Relationship:
        """Build a relationship from a store mapping (camelCase or snake_case keys)."""
        fields = {cls._KEYS.get(k, k): v for k, v in data.items()}
        return cls(**fields)

    def __repr__(self) -> str:
        return f"Relationship(id={self.id!r}, {self.source_id!r} -> {self.target_id!r})"


class Boundary:
    """Grouping annotation drawn around a set of topics."""

    def __init__(self, id: str, node_ids: Optional[list[str]] = None, label: str = '', **kwargs):
        self.id = id
        self.node_ids: list[str] = list(node_ids) if node_ids else []
        self.label = label or ''

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Boundary:
        fields = dict(data)
        if 'nodeIds' in fields:
            fields['node_ids'] = fields.pop('nodeIds')
        return cls(**fields)
