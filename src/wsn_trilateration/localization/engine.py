"""
Iterative Localization Engine

Each round tries to localize every pending node from its already located
neighbors. Nodes located earlier in a round are usable as references for the
rest of that round. A round that locates nothing is the fixed point.

The non-iterative variant is the same machinery restricted to anchor
references, exact reference positions and a single round.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from ..core.graph import DistanceGraph
from ..core.topology import Node, NodeState
from ..exceptions import SolverDivergence
from .heuristics import Heuristic, select_references
from .ranging import RangingModel
from .solver import MultilaterationSolver

logger = logging.getLogger(__name__)


@dataclass
class LocalizationResult:
    """Outcome of one engine run"""
    rounds: int = 0
    located_per_round: List[List[int]] = field(default_factory=list)
    halted_reason: str = "fixed_point"

    @property
    def total_located(self) -> int:
        return sum(len(r) for r in self.located_per_round)

    def cumulative_located(self) -> List[set]:
        """Located set after each round"""
        sets, current = [], set()
        for located in self.located_per_round:
            current = current | set(located)
            sets.append(current)
        return sets


class LocalizationEngine:
    """Round-based multilateration with anchor propagation"""

    REFERENCE_COUNT = 3

    def __init__(self, heuristic: Heuristic = Heuristic.CLOSEST_NEIGHBOR,
                 max_signal_error: float = 0.0,
                 rng: Optional[np.random.Generator] = None,
                 iterative: bool = True,
                 solver: Optional[MultilaterationSolver] = None,
                 dimension: int = 2):
        """
        Initialize engine

        Args:
            heuristic: Reference ranking strategy
            max_signal_error: Maximum relative range error r
            rng: Random generator for range noise
            iterative: Propagate through localized nodes over multiple rounds
            solver: Multilateration solver (built for `dimension` if omitted)
            dimension: 2D or 3D
        """
        self.heuristic = Heuristic.from_name(heuristic)
        self.iterative = iterative
        self.rng = rng if rng is not None else np.random.default_rng()
        self.ranging = RangingModel(max_signal_error, self.rng, use_estimated_reference=iterative)
        self.solver = solver or MultilaterationSolver(dimension=dimension)

    @classmethod
    def from_config(cls, config, rng: np.random.Generator) -> 'LocalizationEngine':
        """Build an engine from a SimulationConfig"""
        localization = config.localization
        solver = MultilaterationSolver(
            dimension=config.network.dimension,
            max_iterations=localization.max_iterations,
            tolerance=localization.tolerance,
        )
        return cls(
            heuristic=localization.heuristic_enum,
            max_signal_error=config.ranging.max_signal_error,
            rng=rng,
            iterative=localization.iterative,
            solver=solver,
        )

    def eligible_references(self, node: Node, nodes: Sequence[Node],
                            graph: DistanceGraph) -> List[Node]:
        """Located neighbors of node (anchors only in non-iterative mode)"""
        neighbors = [nodes[j] for j in graph.neighbors(node.node_id)]
        if self.iterative:
            return [n for n in neighbors if n.is_located]
        return [n for n in neighbors if n.is_anchor]

    def localize_node(self, node: Node, nodes: Sequence[Node], graph: DistanceGraph) -> bool:
        """
        Try to localize a single pending node

        Returns:
            True if the node was localized
        """
        candidates = self.eligible_references(node, nodes, graph)
        if len(candidates) < self.REFERENCE_COUNT:
            return False

        references = select_references(self.heuristic, node, candidates, graph,
                                       count=self.REFERENCE_COUNT)
        positions = np.vstack([ref.position for ref in references])
        distances = self.ranging.measure_all(references, node)

        try:
            estimate, info = self.solver.solve(positions, distances)
        except SolverDivergence as e:
            ref_ids = [ref.node_id for ref in references]
            raise SolverDivergence(f"Node {node.node_id} with references {ref_ids}: {e}") from e

        depth = 1 + sum(ref.depth for ref in references)
        node.locate(estimate, depth)
        logger.debug(f"Located node {node.node_id} from {[ref.node_id for ref in references]} "
                     f"(depth {depth}, {info['evaluations']} evaluations, "
                     f"error {node.localization_error():.4f})")
        return True

    def run_round(self, nodes: Sequence[Node], graph: DistanceGraph) -> List[int]:
        """One pass over all currently pending nodes; returns newly located ids"""
        pending = [n for n in nodes if n.state is NodeState.PENDING]
        return [n.node_id for n in pending if self.localize_node(n, nodes, graph)]

    def run(self, nodes: Sequence[Node], graph: DistanceGraph) -> LocalizationResult:
        """
        Localize as many nodes as possible

        Args:
            nodes: Nodes indexed by node_id
            graph: Reachability graph of the same nodes

        Returns:
            LocalizationResult with the nodes located in each round
        """
        result = LocalizationResult()

        n_anchors = sum(1 for n in nodes if n.is_anchor)
        if n_anchors < self.REFERENCE_COUNT:
            logger.info(f"Only {n_anchors} anchors, no node can be localized")
            result.halted_reason = "insufficient_anchors"
            return result

        # The located set grows every productive round, so at most N rounds run
        max_rounds = len(nodes) + 1 if self.iterative else 1
        while result.rounds < max_rounds:
            located = self.run_round(nodes, graph)
            result.rounds += 1
            result.located_per_round.append(located)
            logger.debug(f"Round {result.rounds}: located {len(located)} nodes")
            if not located:
                break
        else:
            result.halted_reason = "single_pass" if not self.iterative else "round_limit"

        logger.info(f"Localization finished after {result.rounds} rounds: "
                    f"{result.total_located} nodes located ({result.halted_reason})")
        return result
