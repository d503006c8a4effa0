"""Tests for document-side types."""

import pytest
from pymindlayout.model import Node, Relationship, Boundary, DEFAULT_CURVATURE
from pymindlayout.geom import Point


class TestNode:
    """Test Node class."""

    def test_defaults(self):
        node = Node('n1')
        assert node.id == 'n1'
        assert node.text == ''
        assert node.children == []
        assert node.position is None
        assert node.collapsed is False
        assert node.is_floating is False

    def test_position_coercion(self):
        """Positions may be given as Points, mappings or pairs."""
        assert Node('a', position=Point(1, 2)).position == Point(1, 2)
        assert Node('a', position={'x': 3, 'y': 4}).position == Point(3, 4)
        assert Node('a', position=(5, 6)).position == Point(5, 6)

    def test_custom_properties(self):
        """Content metadata is kept but opaque."""
        node = Node('a', markers=['star'], notes='remember')
        assert node.markers == ['star']
        assert node.notes == 'remember'

    def test_from_dict(self):
        node = Node.from_dict({
            'id': 'root',
            'text': 'Root',
            'children': [
                {'id': 'c1', 'collapsed': True, 'children': [{'id': 'c11'}]},
                {'id': 'f', 'isFloating': True, 'position': {'x': 10, 'y': 20}},
            ],
            'markers': [],
        })
        assert node.text == 'Root'
        assert [c.id for c in node.children] == ['c1', 'f']
        assert node.children[0].collapsed is True
        assert node.children[0].children[0].id == 'c11'
        assert node.children[1].is_floating is True
        assert node.children[1].position == Point(10, 20)
        assert node.markers == []

    def test_structure(self):
        """A topic may pick the style of its own children."""
        assert Node('a').structure is None
        node = Node.from_dict({'id': 'a', 'structure': 'fishbone', 'children': [{'id': 'b'}]})
        assert node.structure == 'fishbone'
        assert node.children[0].structure is None


class TestRelationship:
    """Test Relationship class."""

    def test_defaults(self):
        rel = Relationship('r', 'a', 'b')
        assert rel.label == ''
        assert rel.curvature == DEFAULT_CURVATURE
        assert rel.control_point1 is None
        assert rel.control_point2 is None
        assert rel.label_offset is None

    def test_none_label(self):
        assert Relationship('r', 'a', 'b', label=None).label == ''

    def test_from_dict_camel_case(self):
        rel = Relationship.from_dict({
            'id': 'r',
            'sourceId': 'a',
            'targetId': 'b',
            'label': 'causes',
            'curvature': 0.5,
            'controlPoint1': {'x': 1, 'y': 2},
            'labelOffset': {'x': -3, 'y': 4},
            'color': '#3b82f6',
        })
        assert (rel.source_id, rel.target_id) == ('a', 'b')
        assert rel.curvature == 0.5
        assert rel.control_point1 == Point(1, 2)
        assert rel.control_point2 is None
        assert rel.label_offset == Point(-3, 4)
        assert rel.color == '#3b82f6'


class TestBoundary:
    """Test Boundary class."""

    def test_from_dict(self):
        b = Boundary.from_dict({'id': 'g', 'nodeIds': ['a', 'b'], 'shape': 'rounded'})
        assert b.node_ids == ['a', 'b']
        assert b.label == ''
        assert b.shape == 'rounded'
