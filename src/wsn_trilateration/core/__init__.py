"""Node model, topology generation and reachability graph"""

from .topology import (
    Node, NodeState, Located, Unlocalized, UNLOCALIZED,
    count_anchors, generate_nodes, generate_topology
)
from .graph import DistanceGraph, build_distance_graph

__all__ = [
    'Node', 'NodeState', 'Located', 'Unlocalized', 'UNLOCALIZED',
    'count_anchors', 'generate_nodes', 'generate_topology',
    'DistanceGraph', 'build_distance_graph',
]
