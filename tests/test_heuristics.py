"""
Unit tests for reference selection heuristics
"""

import numpy as np
import pytest

from wsn_trilateration.core.graph import build_distance_graph
from wsn_trilateration.core.topology import Node, Located
from wsn_trilateration.localization.heuristics import (
    Heuristic, rank_references, select_references
)


def located(node_id, position, depth):
    position = np.array(position, dtype=float)
    return Node(node_id=node_id, position=position, estimate=Located(position.copy()), depth=depth)


@pytest.fixture
def crafted_neighborhood():
    """Target at the origin with candidates at distances 1..5 and mixed depths"""
    target = Node(node_id=0, position=[0.0, 0.0])
    candidates = [
        located(1, [1.0, 0.0], depth=5),
        located(2, [0.0, 2.0], depth=0),
        located(3, [3.0, 0.0], depth=0),
        located(4, [0.0, 4.0], depth=1),
        located(5, [5.0, 0.0], depth=0),
    ]
    graph = build_distance_graph([target] + candidates, max_range=10.0)
    return target, candidates, graph


class TestHeuristics:
    """Test candidate ranking"""

    def test_from_name(self):
        assert Heuristic.from_name("CLOSEST_NEIGHBOR") is Heuristic.CLOSEST_NEIGHBOR
        assert Heuristic.from_name("most_relevant_neighbor") is Heuristic.MOST_RELEVANT_NEIGHBOR
        assert Heuristic.from_name(Heuristic.CLOSEST_NEIGHBOR) is Heuristic.CLOSEST_NEIGHBOR
        with pytest.raises(ValueError):
            Heuristic.from_name("FARTHEST_NEIGHBOR")

    def test_closest_orders_by_distance(self, crafted_neighborhood):
        target, candidates, graph = crafted_neighborhood
        ranked = rank_references(Heuristic.CLOSEST_NEIGHBOR, target, candidates, graph)
        assert [n.node_id for n in ranked] == [1, 2, 3, 4, 5]

    def test_most_relevant_orders_by_depth_then_distance(self, crafted_neighborhood):
        target, candidates, graph = crafted_neighborhood
        ranked = rank_references(Heuristic.MOST_RELEVANT_NEIGHBOR, target, candidates, graph)
        assert [n.node_id for n in ranked] == [2, 3, 5, 4, 1]

    def test_heuristics_select_different_triples(self, crafted_neighborhood):
        target, candidates, graph = crafted_neighborhood
        closest = select_references(Heuristic.CLOSEST_NEIGHBOR, target, candidates, graph)
        relevant = select_references(Heuristic.MOST_RELEVANT_NEIGHBOR, target, candidates, graph)
        assert [n.node_id for n in closest] == [1, 2, 3]
        assert [n.node_id for n in relevant] == [2, 3, 5]

    def test_select_fewer_than_three(self, crafted_neighborhood):
        target, candidates, graph = crafted_neighborhood
        selected = select_references(Heuristic.CLOSEST_NEIGHBOR, target, candidates[:2], graph)
        assert len(selected) == 2

    def test_distance_ties_broken_by_id(self):
        target = Node(node_id=0, position=[0.0, 0.0])
        candidates = [
            located(3, [0.0, 1.0], depth=0),
            located(1, [1.0, 0.0], depth=0),
            located(2, [-1.0, 0.0], depth=0),
        ]
        nodes = [target, candidates[1], candidates[2], candidates[0]]
        graph = build_distance_graph(nodes, max_range=2.0)
        for heuristic in Heuristic:
            ranked = rank_references(heuristic, target, candidates, graph)
            assert [n.node_id for n in ranked] == [1, 2, 3]
