"""
Layout engine for mind map structures.

This module turns a topic tree into a tree of rendered nodes under one
of six structure types:
- mindmap: radial, children split left/right of the root
- orgchart / tree: top-down, children centred under their parent
- logic: left-to-right stacking
- fishbone: ribs alternating above/below a horizontal spine
- timeline: items at fixed steps along a horizontal or vertical axis

Inside the mindmap, logic and org chart styles a topic's ``structure``
switches the style of its own children, and its descendants inherit it.

Every pass is a pure function of its inputs and builds a fresh tree.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping, Optional, TypedDict, Union
from enum import Enum
import logging
import math
import warnings
import weakref

import numpy as np

from .model import Node
from .rectangle import Rectangle

logger = logging.getLogger(__name__)


# Root box scaling relative to the base node size
ROOT_WIDTH_SCALE = 1.5
ROOT_HEIGHT_SCALE = 1.2

# Box scaling for second-level items in fishbone and timeline
SUB_NODE_SCALE = 0.8

LOGIC_ROOT_OFFSET = 300

FISHBONE_ROOT_OFFSET = 250
FISHBONE_SPINE_SPACING = 150
FISHBONE_BRANCH_OFFSET = 80
FISHBONE_SUB_X = 40
FISHBONE_SUB_Y = 35

TIMELINE_ROOT_OFFSET_X = 350
TIMELINE_ROOT_OFFSET_Y = 250
TIMELINE_BRANCH_OFFSET = 60
TIMELINE_SUB_STEP_Y = 35
TIMELINE_SUB_STEP_X = 60


class LayoutWarning(UserWarning):
    """Warning about layout input that was replaced by a fallback."""
    pass


class StructureType(str, Enum):
    """Diagram style used to place a tree."""
    MINDMAP = 'mindmap'
    ORGCHART = 'orgchart'
    TREE = 'tree'
    LOGIC = 'logic'
    FISHBONE = 'fishbone'
    TIMELINE = 'timeline'

    @classmethod
    def coerce(cls, value: Union[StructureType, str, None]) -> StructureType:
        """
        Resolve a structure name, falling back to mindmap.

        Unknown names emit a LayoutWarning instead of failing.
        """
        if isinstance(value, cls):
            return value
        if value is None:
            return cls.MINDMAP
        try:
            return cls(value)
        except ValueError:
            warnings.warn(
                f"Unknown structure type {value!r}, using 'mindmap' layout",
                LayoutWarning,
                stacklevel=3
            )
            return cls.MINDMAP


class InputLayoutConfig(TypedDict, total=False):
    """
    Layout options accepted as a mapping or keyword overrides.

    Attributes:
        horizontal_spacing: Gap between sibling subtrees in top-down styles
        vertical_spacing: Gap between siblings in radial and left-right styles
        level_spacing: Distance between successive depth levels
        node_width: Base node box width
        node_height: Base node box height
        center_x: World x of the root anchor
        center_y: World y of the root anchor
        start_level: Level assigned to the root (1 for floating topics)
        timeline_horizontal: Timeline runs left-to-right when True
    """
    horizontal_spacing: float
    vertical_spacing: float
    level_spacing: float
    node_width: float
    node_height: float
    center_x: float
    center_y: float
    start_level: int
    timeline_horizontal: bool


class LayoutConfig:
    """
    Spacing and sizing for a layout pass.

    Every field has a default; callers override any subset by keyword.
    Values are not validated.
    """

    def __init__(self, **kwargs):
        self.horizontal_spacing: float = kwargs.get('horizontal_spacing', 20.0)
        self.vertical_spacing: float = kwargs.get('vertical_spacing', 20.0)
        self.level_spacing: float = kwargs.get('level_spacing', 80.0)
        self.node_width: float = kwargs.get('node_width', 140.0)
        self.node_height: float = kwargs.get('node_height', 36.0)
        self.center_x: float = kwargs.get('center_x', 0.0)
        self.center_y: float = kwargs.get('center_y', 0.0)
        self.start_level: int = kwargs.get('start_level', 0)
        self.timeline_horizontal: bool = kwargs.get('timeline_horizontal', True)

    def replace(self, **overrides) -> LayoutConfig:
        """Return a copy with some fields replaced."""
        values = dict(vars(self))
        values.update(overrides)
        return LayoutConfig(**values)

    def root_size(self) -> tuple[float, float]:
        """Box size of the tree's root; floating roots use the base size."""
        if self.start_level >= 1:
            return self.node_width, self.node_height
        return self.node_width * ROOT_WIDTH_SCALE, self.node_height * ROOT_HEIGHT_SCALE

    def __repr__(self) -> str:
        fields = ', '.join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"LayoutConfig({fields})"


ConfigLike = Union[LayoutConfig, Mapping[str, Any], None]


def _coerce_config(config: ConfigLike, **overrides) -> LayoutConfig:
    if config is None:
        cfg = LayoutConfig()
    elif isinstance(config, LayoutConfig):
        cfg = config
    else:
        cfg = LayoutConfig(**config)
    if overrides:
        cfg = cfg.replace(**overrides)
    return cfg


class RenderedNode:
    """
    Computed geometry of one topic for one layout pass.

    Attributes:
        node: Source topic (read-only back-reference)
        x, y: Top-left corner in world coordinates
        width, height: Box size
        collapsed: Whether the source topic is collapsed
        level: Depth, 0 for the main root
        children: Rendered children in placement order

    The parent link is a weak back-reference; ownership flows from
    parent to children only.
    """

    def __init__(
        self,
        node: Node,
        x: float,
        y: float,
        width: float,
        height: float,
        level: int,
        parent: Optional[RenderedNode] = None
    ):
        self.node = node
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.collapsed: bool = bool(node.collapsed)
        self.level = level
        self._parent = weakref.ref(parent) if parent is not None else None
        self.children: tuple[RenderedNode, ...] = ()

    @property
    def parent(self) -> Optional[RenderedNode]:
        return self._parent() if self._parent is not None else None

    @property
    def id(self) -> str:
        return self.node.id

    def cx(self) -> float:
        return self.x + self.width / 2

    def cy(self) -> float:
        return self.y + self.height / 2

    def bounds(self) -> Rectangle:
        return Rectangle.from_size(self.x, self.y, self.width, self.height)

    def contains(self, px: float, py: float) -> bool:
        """Point containment against the node box, edges included."""
        return self.x <= px <= self.x + self.width and self.y <= py <= self.y + self.height

    def __repr__(self) -> str:
        return (
            f"RenderedNode(id={self.id!r}, x={self.x!r}, y={self.y!r}, "
            f"width={self.width!r}, height={self.height!r}, level={self.level})"
        )


def _expanded(node: Node) -> bool:
    return not node.collapsed and len(node.children) > 0


def _effective(node: Node, inherited: StructureType) -> StructureType:
    """Style governing a node's children: its own, else the inherited one."""
    if node.structure is None:
        return inherited
    return StructureType.coerce(node.structure)


def _place(
    node: Node,
    x: float,
    y: float,
    width: float,
    height: float,
    level: int,
    parent: Optional[RenderedNode]
) -> RenderedNode:
    """Create a rendered node; a manual position replaces the computed corner."""
    if node.position is not None:
        x, y = node.position.x, node.position.y
    return RenderedNode(node, x, y, width, height, level, parent)


def _place_root(node: Node, cx: float, cy: float, config: LayoutConfig) -> RenderedNode:
    """Create a root box; a manual position replaces the computed centre."""
    if node.position is not None:
        cx, cy = node.position.x, node.position.y
    w, h = config.root_size()
    return RenderedNode(node, cx - w / 2, cy - h / 2, w, h, config.start_level)


# ============================================
# Subtree sizing
# ============================================

# Styles that place children by index, two levels deep
_INDEXED = (StructureType.FISHBONE, StructureType.TIMELINE)

# Styles that place children below their parent
_TOP_DOWN = (StructureType.ORGCHART, StructureType.TREE)

_Offsets = list[tuple[Node, float, float, list[tuple[Node, float, float]]]]


def _indexed_offsets(node: Node, kind: StructureType, config: LayoutConfig) -> _Offsets:
    """
    Centre offsets of a fishbone or timeline branch inside another style.

    Offsets are relative to the branch node's centre with the spine
    running towards +x; left-hand branches mirror the x offsets.

    Returns:
        One (child, dx, dy, sub_items) row per child, where sub_items
        holds (grandchild, dx, dy) for an expanded child
    """
    rows = []
    for i, child in enumerate(node.children):
        y_dir = -1 if i % 2 == 0 else 1
        if kind is StructureType.FISHBONE:
            dx = (i + 1) * FISHBONE_SPINE_SPACING
            dy = y_dir * (i // 2 + 1) * FISHBONE_SUB_Y
            step_x, step_y = FISHBONE_SUB_X, FISHBONE_SUB_Y
        else:
            dx = (i + 1) * config.level_spacing
            dy = y_dir * TIMELINE_BRANCH_OFFSET
            step_x, step_y = 0.0, TIMELINE_SUB_STEP_Y

        subs = []
        if _expanded(child):
            subs = [
                (sub, dx + (j + 1) * step_x, dy + y_dir * (j + 1) * step_y)
                for j, sub in enumerate(child.children)
            ]
        rows.append((child, dx, dy, subs))
    return rows


def _indexed_height(node: Node, kind: StructureType, config: LayoutConfig) -> float:
    sub_h = config.node_height * SUB_NODE_SCALE
    reach = config.node_height / 2
    for _, _, dy, subs in _indexed_offsets(node, kind, config):
        reach = max(reach, abs(dy) + config.node_height / 2)
        for _, _, sub_dy in subs:
            reach = max(reach, abs(sub_dy) + sub_h / 2)
    return 2 * reach + config.vertical_spacing


def subtree_heights(
    root: Node,
    config: LayoutConfig,
    structure: Union[StructureType, str, None] = None
) -> dict[str, float]:
    """
    Vertical space taken by every visible subtree, keyed by node id.

    A collapsed or childless node takes one slot of
    ``node_height + vertical_spacing``. A fishbone or timeline branch
    spans the reach of its items on both sides of its centre. Any other
    node spans the sum of its children's subtree heights.

    Args:
        root: Subtree root
        config: Layout configuration
        structure: Style of the root's children. Defaults to the root's
            own structure, then mindmap

    Returns:
        Lookup table of subtree heights
    """
    if structure is None:
        kind = _effective(root, StructureType.MINDMAP)
    else:
        kind = StructureType.coerce(structure)

    heights: dict[str, float] = {}
    slot = config.node_height + config.vertical_spacing
    stack = [(root, kind, False)]
    while stack:
        node, kind, ready = stack.pop()
        if not _expanded(node):
            heights[node.id] = slot
        elif kind in _INDEXED:
            heights[node.id] = _indexed_height(node, kind, config)
        elif ready:
            heights[node.id] = sum(heights[child.id] for child in node.children)
        else:
            stack.append((node, kind, True))
            stack.extend((child, _effective(child, kind), False) for child in node.children)
    return heights


def subtree_height(
    node: Node,
    config: LayoutConfig,
    structure: Union[StructureType, str, None] = None
) -> float:
    """Vertical space taken by a node and its visible descendants."""
    return subtree_heights(node, config, structure)[node.id]


def subtree_widths(root: Node, config: LayoutConfig) -> dict[str, float]:
    """
    Horizontal space taken by every visible subtree, keyed by node id.

    Args:
        root: Tree root
        config: Layout configuration

    Returns:
        Lookup table of subtree widths
    """
    widths: dict[str, float] = {}
    slot = config.node_width + config.horizontal_spacing
    stack = [(root, False)]
    while stack:
        node, ready = stack.pop()
        if not _expanded(node):
            widths[node.id] = slot
        elif ready:
            widths[node.id] = max(slot, sum(widths[child.id] for child in node.children))
        else:
            stack.append((node, True))
            stack.extend((child, False) for child in node.children)
    return widths


# ============================================
# Recursive placement (mindmap, logic, org chart)
# ============================================

_RIGHT = 1
_LEFT = -1


class _Pass:
    """Sizing tables shared by one layout pass."""

    def __init__(self, root: Node, structure: StructureType, config: LayoutConfig):
        self.root = root
        self.config = config
        self.heights = subtree_heights(root, config, structure)
        self._widths: Optional[dict[str, float]] = None

    @property
    def widths(self) -> dict[str, float]:
        if self._widths is None:
            self._widths = subtree_widths(self.root, self.config)
        return self._widths


# (rendered node, computed x, computed y)
_Placed = list[tuple[RenderedNode, float, float]]


def _stack_row(
    parent: RenderedNode,
    children: list[Node],
    side: int,
    ctx: _Pass
) -> _Placed:
    """Stack children vertically on one side of the rendered parent box."""
    config = ctx.config
    total = sum(ctx.heights[child.id] for child in children)
    cursor = parent.cy() - total / 2
    if side == _RIGHT:
        child_x = parent.x + parent.width + config.level_spacing
    else:
        child_x = parent.x - config.level_spacing - config.node_width

    placed = []
    for child in children:
        h = ctx.heights[child.id]
        child_y = cursor + h / 2 - config.node_height / 2
        rendered = _place(
            child, child_x, child_y,
            config.node_width, config.node_height, parent.level + 1, parent
        )
        placed.append((rendered, child_x, child_y))
        cursor += h
    return placed


def _org_row(parent: RenderedNode, x: float, y: float, ctx: _Pass) -> _Placed:
    """Centre children under the parent's computed box (x, y)."""
    config = ctx.config
    widths = ctx.widths
    children = parent.node.children
    total = sum(widths[child.id] for child in children)
    cursor = x + parent.width / 2 - total / 2
    child_y = y + parent.height + config.level_spacing

    placed = []
    for child in children:
        child_width = widths[child.id]
        child_x = cursor + child_width / 2 - config.node_width / 2
        rendered = _place(
            child, child_x, child_y,
            config.node_width, config.node_height, parent.level + 1, parent
        )
        placed.append((rendered, child_x, child_y))
        cursor += child_width
    return placed


def _indexed_row(
    parent: RenderedNode,
    kind: StructureType,
    side: int,
    config: LayoutConfig
) -> tuple[RenderedNode, ...]:
    """Place a fishbone or timeline branch around the rendered parent."""
    sub_w = config.node_width * SUB_NODE_SCALE
    sub_h = config.node_height * SUB_NODE_SCALE
    pcx = parent.cx()
    pcy = parent.cy()

    items = []
    for child, dx, dy, subs in _indexed_offsets(parent.node, kind, config):
        item = _place(
            child,
            pcx + side * dx - config.node_width / 2,
            pcy + dy - config.node_height / 2,
            config.node_width, config.node_height, parent.level + 1, parent
        )
        item.children = tuple(
            _place(
                sub,
                pcx + side * sub_dx - sub_w / 2,
                pcy + sub_dy - sub_h / 2,
                sub_w, sub_h, item.level + 1, item
            )
            for sub, sub_dx, sub_dy in subs
        )
        items.append(item)
    return tuple(items)


def _grow(seeds: Iterable[tuple[RenderedNode, float, float, StructureType, int]], ctx: _Pass) -> None:
    """
    Place the descendants of already placed nodes.

    Each seed is (rendered, computed x, computed y, structure, side).
    Stacked and indexed children measure from the rendered parent, so
    they follow a dragged parent; org chart children measure from the
    computed box. Uses an explicit stack so depth is unbounded.
    """
    stack = list(seeds)
    while stack:
        parent, x, y, kind, side = stack.pop()
        if not _expanded(parent.node):
            continue
        if kind in _INDEXED:
            parent.children = _indexed_row(parent, kind, side, ctx.config)
            continue

        if kind in _TOP_DOWN:
            placed = _org_row(parent, x, y, ctx)
        else:
            placed = _stack_row(parent, parent.node.children, side, ctx)
        parent.children = tuple(rendered for rendered, _, _ in placed)
        stack.extend(
            (rendered, cx, cy, _effective(rendered.node, kind), side)
            for rendered, cx, cy in placed
        )


def _layout_mindmap(root: Node, config: LayoutConfig) -> RenderedNode:
    rendered = _place_root(root, config.center_x, config.center_y, config)
    if not _expanded(root):
        return rendered

    ctx = _Pass(root, StructureType.MINDMAP, config)
    half = math.ceil(len(root.children) / 2)
    right = _stack_row(rendered, root.children[:half], _RIGHT, ctx)
    left = _stack_row(rendered, root.children[half:], _LEFT, ctx)
    rendered.children = tuple(r for r, _, _ in right + left)
    _grow(
        [(r, x, y, _effective(r.node, StructureType.MINDMAP), _RIGHT) for r, x, y in right]
        + [(r, x, y, _effective(r.node, StructureType.MINDMAP), _LEFT) for r, x, y in left],
        ctx
    )
    return rendered


def _layout_logic(root: Node, config: LayoutConfig) -> RenderedNode:
    w, _ = config.root_size()
    rendered = _place_root(root, config.center_x - LOGIC_ROOT_OFFSET + w / 2, config.center_y, config)
    ctx = _Pass(root, StructureType.LOGIC, config)
    _grow([(rendered, rendered.x, rendered.y, StructureType.LOGIC, _RIGHT)], ctx)
    return rendered


def _layout_orgchart(root: Node, config: LayoutConfig) -> RenderedNode:
    rendered = _place_root(root, config.center_x, config.center_y, config)
    ctx = _Pass(root, StructureType.ORGCHART, config)
    _grow([(rendered, rendered.x, rendered.y, StructureType.ORGCHART, _RIGHT)], ctx)
    return rendered


# ============================================
# Fishbone
# ============================================

def _layout_fishbone(root: Node, config: LayoutConfig) -> RenderedNode:
    w, _ = config.root_size()
    rendered = _place_root(root, config.center_x + FISHBONE_ROOT_OFFSET + w / 2, config.center_y, config)
    if not _expanded(root):
        return rendered

    head_x = rendered.x
    head_cy = rendered.cy()
    sub_w = config.node_width * SUB_NODE_SCALE
    sub_h = config.node_height * SUB_NODE_SCALE

    ribs = []
    for i, child in enumerate(root.children):
        y_dir = -1 if i % 2 == 0 else 1
        rib_x = head_x - (i + 1) * FISHBONE_SPINE_SPACING
        rib_cy = head_cy + y_dir * FISHBONE_BRANCH_OFFSET
        rib = _place(
            child, rib_x, rib_cy - config.node_height / 2,
            config.node_width, config.node_height, rendered.level + 1, rendered
        )
        if _expanded(child):
            rib.children = tuple(
                _place(
                    sub,
                    rib_x - (j + 1) * FISHBONE_SUB_X,
                    rib_cy + y_dir * (j + 1) * FISHBONE_SUB_Y - sub_h / 2,
                    sub_w, sub_h, rib.level + 1, rib
                )
                for j, sub in enumerate(child.children)
            )
        ribs.append(rib)

    rendered.children = tuple(ribs)
    return rendered


# ============================================
# Timeline
# ============================================

def _layout_timeline(root: Node, config: LayoutConfig) -> RenderedNode:
    horizontal = config.timeline_horizontal
    if horizontal:
        anchor_x, anchor_y = config.center_x - TIMELINE_ROOT_OFFSET_X, config.center_y
    else:
        anchor_x, anchor_y = config.center_x, config.center_y - TIMELINE_ROOT_OFFSET_Y

    rendered = _place_root(root, anchor_x, anchor_y, config)
    if not _expanded(root):
        return rendered

    root_cx = rendered.cx()
    root_cy = rendered.cy()
    sub_w = config.node_width * SUB_NODE_SCALE
    sub_h = config.node_height * SUB_NODE_SCALE

    items = []
    for i, child in enumerate(root.children):
        alt = -1 if i % 2 == 0 else 1
        step = (i + 1) * config.level_spacing
        if horizontal:
            cx, cy = root_cx + step, root_cy + alt * TIMELINE_BRANCH_OFFSET
        else:
            cx, cy = root_cx, root_cy + step

        item = _place(
            child, cx - config.node_width / 2, cy - config.node_height / 2,
            config.node_width, config.node_height, rendered.level + 1, rendered
        )
        if _expanded(child):
            subs = []
            for j, sub in enumerate(child.children):
                if horizontal:
                    sx, sy = cx, cy + alt * (j + 1) * TIMELINE_SUB_STEP_Y
                else:
                    sx, sy = cx + alt * (j + 1) * TIMELINE_SUB_STEP_X, cy
                subs.append(_place(sub, sx - sub_w / 2, sy - sub_h / 2, sub_w, sub_h, item.level + 1, item))
            item.children = tuple(subs)
        items.append(item)

    rendered.children = tuple(items)
    return rendered


# ============================================
# Main entry point
# ============================================

_STRATEGIES: dict[StructureType, Callable[[Node, LayoutConfig], RenderedNode]] = {
    StructureType.MINDMAP: _layout_mindmap,
    StructureType.ORGCHART: _layout_orgchart,
    # tree reuses the org chart placement
    StructureType.TREE: _layout_orgchart,
    StructureType.LOGIC: _layout_logic,
    StructureType.FISHBONE: _layout_fishbone,
    StructureType.TIMELINE: _layout_timeline,
}


def layout(
    root: Node,
    structure: Union[StructureType, str] = StructureType.MINDMAP,
    config: ConfigLike = None,
    **overrides
) -> RenderedNode:
    """
    Lay out a topic tree.

    Args:
        root: Tree root
        structure: Structure type or its name
        config: LayoutConfig, a mapping of its fields, or None for defaults
        **overrides: Individual config fields to override

    Returns:
        Root of a freshly built rendered tree
    """
    cfg = _coerce_config(config, **overrides)
    kind = StructureType.coerce(structure)
    rendered = _STRATEGIES[kind](root, cfg)
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "layout pass: structure=%s root=%s nodes=%d",
            kind.value, root.id, len(get_all_rendered_nodes(rendered))
        )
    return rendered


def layout_floating_topics(topics: Iterable[Node], config: ConfigLike = None) -> list[RenderedNode]:
    """
    Lay out floating topics as independent mind map trees.

    Each topic is centred on its stored position and starts at level 1
    so it is sized and styled like a branch. Topics without a position
    are skipped.
    """
    cfg = _coerce_config(config, start_level=1)
    return [
        layout(topic, StructureType.MINDMAP, cfg)
        for topic in topics
        if topic.position is not None
    ]


# ============================================
# Utilities
# ============================================

def get_all_rendered_nodes(root: Optional[RenderedNode]) -> list[RenderedNode]:
    """Flatten a rendered tree in pre-order (parent before children)."""
    if root is None:
        return []
    nodes = []
    stack = [root]
    while stack:
        n = stack.pop()
        nodes.append(n)
        stack.extend(reversed(n.children))
    return nodes


def find_rendered_node_by_id(root: Optional[RenderedNode], node_id: str) -> Optional[RenderedNode]:
    """Pre-order search for the rendered node of a topic id."""
    for n in get_all_rendered_nodes(root):
        if n.node.id == node_id:
            return n
    return None


def get_bounding_box(nodes: Iterable[RenderedNode]) -> Rectangle:
    """
    Axis-aligned bounding box of a set of rendered nodes.

    Args:
        nodes: Rendered nodes

    Returns:
        Bounding rectangle, or a zero rectangle at the origin for no nodes
    """
    nodes = list(nodes)
    if len(nodes) == 0:
        return Rectangle(0.0, 0.0, 0.0, 0.0)

    boxes = np.array(
        [[n.x, n.y, n.x + n.width, n.y + n.height] for n in nodes],
        dtype=float
    )
    lo = boxes.min(axis=0)
    hi = boxes.max(axis=0)
    return Rectangle(float(lo[0]), float(hi[2]), float(lo[1]), float(hi[3]))
