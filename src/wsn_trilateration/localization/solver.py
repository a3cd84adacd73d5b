"""
Multilateration Solver
Levenberg-Marquardt least squares on range residuals (MINPACK via scipy)
"""

import logging
from typing import Dict, Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import least_squares

from ..exceptions import SolverDivergence

logger = logging.getLogger(__name__)

EPS = np.finfo(np.float64).eps


class MultilaterationSolver:
    """
    Estimate a position from reference positions and measured ranges

    Minimizes sum_i (||x - p_i|| - d_i)^2 starting from the centroid of the
    references unless an initial guess is given.
    """

    MIN_REFERENCES = 3

    def __init__(self, dimension: int = 2, max_iterations: int = 1000,
                 tolerance: float = 1e-10):
        """
        Initialize solver

        Args:
            dimension: 2D or 3D localization
            max_iterations: Residual evaluation budget before declaring divergence
            tolerance: Relative cost, step and gradient threshold for convergence
        """
        if tolerance < EPS:
            raise ValueError(f"tolerance must be at least {EPS:.3e}, got {tolerance}")
        self.d = dimension
        self.max_iterations = max_iterations
        self.tolerance = tolerance
        self.epsilon = 1e-12  # For numerical stability

    def compute_residuals(self, x: np.ndarray, references: np.ndarray,
                          distances: np.ndarray) -> np.ndarray:
        """
        Residuals between estimated and measured distances

        Args:
            x: Current position estimate
            references: Reference positions, shape (k, d)
            distances: Measured distances, shape (k,)

        Returns:
            Array of residuals ||x - p_i|| - d_i
        """
        return np.linalg.norm(x - references, axis=1) - distances

    def compute_jacobian(self, x: np.ndarray, references: np.ndarray,
                         distances: Optional[np.ndarray] = None) -> np.ndarray:
        """
        Jacobian of the residuals: unit vectors from each reference towards x

        Args:
            x: Current position estimate
            references: Reference positions, shape (k, d)
            distances: Unused, the Jacobian does not depend on the ranges

        Returns:
            Jacobian matrix, shape (k, d)
        """
        diff = x - references
        norms = np.linalg.norm(diff, axis=1)
        # Zero-distance edge case: the gradient is undefined, leave the row empty
        norms = np.where(norms > self.epsilon, norms, np.inf)
        return diff / norms[:, None]

    def solve(self, reference_positions: Sequence[Sequence[float]],
              distances: Sequence[float],
              initial_guess: Optional[np.ndarray] = None) -> Tuple[np.ndarray, Dict]:
        """
        Solve the multilateration problem

        Args:
            reference_positions: At least three positions of dimension d
            distances: Measured distance to each reference
            initial_guess: Starting point (defaults to reference centroid)

        Returns:
            Estimated position and convergence info

        Raises:
            SolverDivergence: Non-finite input or result, or no convergence
                within the evaluation budget
        """
        references = np.asarray(reference_positions, dtype=np.float64)
        ranges = np.asarray(distances, dtype=np.float64)

        if references.ndim != 2 or references.shape[1] != self.d:
            raise ValueError(f"Reference positions must have shape (k, {self.d}), got {references.shape}")
        if len(references) < self.MIN_REFERENCES:
            raise ValueError(f"Need at least {self.MIN_REFERENCES} references, got {len(references)}")
        if ranges.shape != (len(references),):
            raise ValueError(f"Expected {len(references)} distances, got {ranges.shape}")

        if initial_guess is None:
            x0 = references.mean(axis=0)
        else:
            x0 = np.array(initial_guess, dtype=np.float64)

        if not np.all(np.isfinite(self.compute_residuals(x0, references, ranges))):
            raise SolverDivergence(
                f"Multilateration residuals are not finite at the starting point "
                f"(references={references.tolist()}, distances={ranges.tolist()})")

        result = least_squares(
            self.compute_residuals, x0,
            jac=self.compute_jacobian,
            args=(references, ranges),
            method='lm',
            ftol=self.tolerance, xtol=self.tolerance, gtol=self.tolerance,
            max_nfev=self.max_iterations,
        )

        cost = float(result.fun @ result.fun)
        if result.status <= 0 or not np.all(np.isfinite(result.x)) or not np.isfinite(cost):
            raise SolverDivergence(
                f"Multilateration did not converge after {result.nfev} evaluations: {result.message} "
                f"(cost={cost:.3e}, references={references.tolist()}, distances={ranges.tolist()})")

        return result.x, self._info(result.nfev, cost, result.message)

    @staticmethod
    def _info(evaluations: int, cost: float, criterion: str) -> Dict:
        return {
            'evaluations': evaluations,
            'final_cost': cost,
            'criterion': criterion,
            'converged': True,
        }
