"""
Reference-node selection heuristics

Both strategies rank already located neighbors of a target node; the engine
keeps the top three.
"""

from enum import Enum
from typing import Callable, Iterable, List, Tuple

from ..core.graph import DistanceGraph
from ..core.topology import Node


class Heuristic(Enum):
    """Ranking strategy for reference candidates"""
    CLOSEST_NEIGHBOR = "closest_neighbor"
    MOST_RELEVANT_NEIGHBOR = "most_relevant_neighbor"

    @classmethod
    def from_name(cls, name) -> 'Heuristic':
        if isinstance(name, cls):
            return name
        try:
            return cls[str(name).strip().upper()]
        except KeyError:
            valid = ", ".join(h.name for h in cls)
            raise ValueError(f"Unknown heuristic '{name}', expected one of: {valid}") from None

    def sort_key(self, target_id: int, graph: DistanceGraph) -> Callable[[Node], Tuple]:
        """Key function ordering candidates best-first; node id breaks remaining ties"""
        if self is Heuristic.CLOSEST_NEIGHBOR:
            return lambda n: (graph.distance(target_id, n.node_id), n.node_id)
        return lambda n: (n.depth, graph.distance(target_id, n.node_id), n.node_id)


def rank_references(heuristic: Heuristic, target: Node,
                    candidates: Iterable[Node], graph: DistanceGraph) -> List[Node]:
    """Order candidates best-first by the heuristic"""
    return sorted(candidates, key=heuristic.sort_key(target.node_id, graph))


def select_references(heuristic: Heuristic, target: Node, candidates: Iterable[Node],
                      graph: DistanceGraph, count: int = 3) -> List[Node]:
    """Top `count` candidates; fewer if not enough are available"""
    return rank_references(heuristic, target, candidates, graph)[:count]
