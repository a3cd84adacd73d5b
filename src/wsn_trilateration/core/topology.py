"""
Node model and random topology generation

Nodes are identified by their index in the node list. Anchors know their
position exactly from creation; every other node starts Unlocalized and may
become Located exactly once.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union

import numpy as np

from ..exceptions import PrematureQueryError, LocalizationStateError

logger = logging.getLogger(__name__)


class NodeState(Enum):
    """Localization state of a node"""
    ANCHOR = "anchor"
    PENDING = "pending"
    LOCATED = "located"


@dataclass(frozen=True)
class Unlocalized:
    """No position estimate yet"""


@dataclass(frozen=True, eq=False)
class Located:
    """Position estimate produced by construction (anchors) or by the solver"""
    position: np.ndarray


UNLOCALIZED = Unlocalized()

Estimate = Union[Unlocalized, Located]


@dataclass(eq=False)
class Node:
    """A sensor node in the field"""
    node_id: int
    position: np.ndarray
    is_anchor: bool = False
    estimate: Estimate = UNLOCALIZED
    depth: int = 0  # propagation depth, 0 for anchors
    state: NodeState = field(init=False)

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=np.float64)
        if self.is_anchor:
            self.estimate = Located(self.position.copy())
            self.depth = 0
            self.state = NodeState.ANCHOR
        elif isinstance(self.estimate, Located):
            self.state = NodeState.LOCATED
        else:
            self.state = NodeState.PENDING

    @property
    def dimension(self) -> int:
        return len(self.position)

    @property
    def is_located(self) -> bool:
        """True for anchors and localized nodes"""
        return isinstance(self.estimate, Located)

    @property
    def estimated_position(self) -> np.ndarray:
        if not isinstance(self.estimate, Located):
            raise PrematureQueryError(f"Node {self.node_id} location was never predicted")
        return self.estimate.position

    def locate(self, position: np.ndarray, depth: int):
        """PENDING -> LOCATED; both ANCHOR and LOCATED are terminal"""
        if self.state is not NodeState.PENDING:
            raise LocalizationStateError(
                f"Node {self.node_id} is {self.state.value}, its estimate cannot be overwritten")
        self.estimate = Located(np.asarray(position, dtype=np.float64))
        self.depth = depth
        self.state = NodeState.LOCATED

    def distance_to(self, other: 'Node') -> float:
        """True Euclidean distance"""
        return float(np.linalg.norm(self.position - other.position))

    def localization_error(self) -> float:
        """Euclidean distance between estimate and true position"""
        return float(np.linalg.norm(self.estimated_position - self.position))

    def __repr__(self) -> str:
        coords = ", ".join(f"{c:.3f}" for c in self.position)
        return f"Node[{self.node_id}: ({coords}){', Anchor' if self.is_anchor else ''}]"


def count_anchors(n_nodes: int, anchor_fraction: float) -> int:
    """round(N*f) with halves rounded up"""
    return int(n_nodes * anchor_fraction + 0.5)


def generate_nodes(n_nodes: int, anchor_fraction: float, field_size: float,
                   dimension: int, rng: np.random.Generator) -> List[Node]:
    """
    Place nodes uniformly at random in [0, field_size) per axis

    The first round(N*f) nodes are anchors.

    Args:
        n_nodes: Number of nodes N
        anchor_fraction: Fraction of anchors f
        field_size: Side length L of the field
        dimension: 2 or 3
        rng: Random generator

    Returns:
        List of nodes, node_id == list index
    """
    positions = rng.uniform(0.0, field_size, size=(n_nodes, dimension))
    n_anchors = count_anchors(n_nodes, anchor_fraction)

    nodes = [
        Node(node_id=i, position=positions[i], is_anchor=i < n_anchors)
        for i in range(n_nodes)
    ]
    logger.debug(f"Generated {n_nodes} nodes ({n_anchors} anchors) in {dimension}D field of size {field_size}")
    return nodes


def generate_topology(network, rng: np.random.Generator) -> List[Node]:
    """Generate nodes from a NetworkConfig"""
    return generate_nodes(network.n_nodes, network.anchor_fraction,
                          network.field_size, network.dimension, rng)
