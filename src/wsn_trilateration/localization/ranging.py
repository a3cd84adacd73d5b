"""
Range measurement model

observed = d * (1 + s * e), with s = +1 or -1 with equal probability and
e uniform in [0, max_signal_error).

In iterative mode d is measured from the reference's *estimated* position to
the target's true position, so the error of a localized reference carries into
every node it helps localize.
"""

from typing import List, Sequence

import numpy as np

from ..core.topology import Node


class RangingModel:
    """Synthesizes noisy distances between reference nodes and a target"""

    def __init__(self, max_signal_error: float, rng: np.random.Generator,
                 use_estimated_reference: bool = True):
        """
        Args:
            max_signal_error: Maximum relative range error r
            rng: Random generator
            use_estimated_reference: Measure from the reference estimate
                (iterative mode) instead of its true position
        """
        self.max_signal_error = max_signal_error
        self.rng = rng
        self.use_estimated_reference = use_estimated_reference

    def base_distance(self, reference: Node, target: Node) -> float:
        origin = reference.estimated_position if self.use_estimated_reference else reference.position
        return float(np.linalg.norm(target.position - origin))

    def apply_error(self, distance: float) -> float:
        sign = 1 if self.rng.random() > 0.5 else -1
        error = sign * (self.max_signal_error * self.rng.random())
        return distance + distance * error

    def measure(self, reference: Node, target: Node) -> float:
        """Noisy distance from reference to target"""
        return self.apply_error(self.base_distance(reference, target))

    def measure_all(self, references: Sequence[Node], target: Node) -> List[float]:
        return [self.measure(reference, target) for reference in references]
