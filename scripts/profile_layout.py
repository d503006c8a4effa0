"""
Profiling script for PyMindLayout layout and hit detection.

This script profiles layout passes and pointer queries over random
topic trees to identify bottlenecks.
"""

import cProfile
import pstats
import io
from pstats import SortKey
import time
import sys
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import numpy as np
from pymindlayout import (
    Node, Point, Relationship, StructureType, HitDetector,
    layout, get_all_rendered_nodes
)


def create_tree(n_nodes, max_children=6, seed=42):
    """Create a random topic tree with n nodes."""
    rng = np.random.default_rng(seed)
    nodes = [Node('n0')]
    for i in range(1, n_nodes):
        # attach to a random earlier node, preferring ones with room
        for _ in range(10):
            parent = nodes[int(rng.integers(0, len(nodes)))]
            if len(parent.children) < max_children:
                break
        child = Node(f'n{i}')
        parent.children.append(child)
        nodes.append(child)
    return nodes[0], nodes


def create_relationships(nodes, n_rels, seed=7):
    rng = np.random.default_rng(seed)
    rels = []
    for i in range(n_rels):
        a, b = rng.integers(0, len(nodes), size=2)
        rels.append(Relationship(f'r{i}', nodes[int(a)].id, nodes[int(b)].id))
    return rels


def profile_layouts(n_nodes):
    """Profile every structure type on one tree."""
    root, _ = create_tree(n_nodes)
    for structure in StructureType:
        layout(root, structure)


def profile_hit_detection(n_nodes, n_rels, n_queries=200):
    """Profile pointer queries against a laid out tree."""
    root, nodes = create_tree(n_nodes)
    rendered = layout(root)
    rels = create_relationships(nodes, n_rels)
    hd = HitDetector(rendered, relationships=rels, selected_relationship_id=rels[0].id)

    pool = get_all_rendered_nodes(rendered)
    rng = np.random.default_rng(3)
    for _ in range(n_queries):
        target = pool[int(rng.integers(0, len(pool)))]
        p = Point(target.cx() + rng.normal(0, 20), target.cy() + rng.normal(0, 20))
        hd.find_node_at_position(p)
        hd.find_relationship_at_position(p)
        hd.find_control_point_at_position(p)


def run_profile(func, *args, name=""):
    """Run a function with profiling and print results."""
    print(f"\n{'='*80}")
    print(f"Profiling: {name}")
    print('='*80)

    pr = cProfile.Profile()
    start = time.time()
    pr.enable()
    func(*args)
    pr.disable()
    elapsed = time.time() - start

    print(f"Total time: {elapsed:.3f}s")

    s = io.StringIO()
    ps = pstats.Stats(pr, stream=s).sort_stats(SortKey.CUMULATIVE)
    ps.print_stats(20)
    print(s.getvalue())

    return elapsed


def main():
    results = {}
    results['layouts (100 nodes)'] = run_profile(profile_layouts, 100, name="All layouts, 100 nodes")
    results['layouts (2000 nodes)'] = run_profile(profile_layouts, 2000, name="All layouts, 2000 nodes")
    results['hit detection (500 nodes, 50 rels)'] = run_profile(
        profile_hit_detection, 500, 50, name="Hit detection, 500 nodes, 50 relationships"
    )

    print(f"\n{'='*80}")
    print("Summary")
    print('='*80)
    for name, elapsed in results.items():
        print(f"{name:40s} {elapsed:.3f}s")


if __name__ == "__main__":
    main()
