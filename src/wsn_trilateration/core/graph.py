"""
Reachability graph for sensor networks

Unit Disk Graph model: node i hears node j iff their true distance is at most
the maximum sensor range. Both directions are stored as separate edges keyed
by integer node id, each carrying the true distance.
"""

import logging
from typing import Dict, List, Sequence, Tuple

import networkx as nx
import numpy as np
from scipy.spatial.distance import cdist

from .topology import Node

logger = logging.getLogger(__name__)


class DistanceGraph:
    """Read-only directed adjacency of true distances between nodes in range"""

    def __init__(self, graph: nx.DiGraph, max_range: float):
        self.graph = nx.freeze(graph)
        self.max_range = max_range

    @classmethod
    def build(cls, nodes: Sequence[Node], max_range: float) -> 'DistanceGraph':
        """
        Build graph from true node positions

        Args:
            nodes: Nodes indexed by node_id
            max_range: Maximum sensor range R

        Returns:
            Frozen DistanceGraph
        """
        graph = nx.DiGraph()
        graph.add_nodes_from(node.node_id for node in nodes)

        if nodes:
            positions = np.vstack([node.position for node in nodes])
            distances = cdist(positions, positions)

            in_range = distances <= max_range
            np.fill_diagonal(in_range, False)
            for i, j in zip(*np.nonzero(in_range)):
                graph.add_edge(nodes[i].node_id, nodes[j].node_id, distance=float(distances[i, j]))

        distance_graph = cls(graph, max_range)
        logger.debug(f"Built reachability graph: {graph.number_of_nodes()} nodes, "
                     f"{graph.number_of_edges()} directed edges, "
                     f"average degree {distance_graph.average_degree():.2f} (R={max_range})")
        return distance_graph

    def neighbors(self, node_id: int) -> Dict[int, float]:
        """Neighbor id -> true distance, in ascending neighbor id order"""
        return {j: data['distance'] for j, data in sorted(self.graph.adj[node_id].items())}

    def distance(self, i: int, j: int) -> float:
        """True distance of edge i -> j; KeyError if j is out of range of i"""
        return self.graph.edges[i, j]['distance']

    def has_edge(self, i: int, j: int) -> bool:
        return self.graph.has_edge(i, j)

    def edges(self) -> List[Tuple[int, int, float]]:
        """Sorted (i, j, distance) triples"""
        return sorted((i, j, data['distance']) for i, j, data in self.graph.edges(data=True))

    def average_degree(self) -> float:
        n = self.graph.number_of_nodes()
        return self.graph.number_of_edges() / n if n else 0.0

    @property
    def number_of_edges(self) -> int:
        return self.graph.number_of_edges()

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, node_id: int) -> bool:
        return node_id in self.graph


def build_distance_graph(nodes: Sequence[Node], max_range: float) -> DistanceGraph:
    """Compute true distances for every ordered node pair within max_range"""
    return DistanceGraph.build(nodes, max_range)
