"""
WSN Trilateration Simulator

Range-based localization of sensor nodes from a small set of anchors, with
iterative anchor propagation and Monte-Carlo statistics.
"""

from .exceptions import (
    TrilaterationError,
    ConfigurationError,
    PrematureQueryError,
    SolverDivergence,
    EmptyResultError,
    LocalizationStateError,
)
from .config import SimulationConfig
from .localization import Heuristic, LocalizationEngine, MultilaterationSolver
from .simulation import TrilaterationSimulation, ExperimentSummary, RunStatistics

__version__ = "1.0.0"

__all__ = [
    "TrilaterationError",
    "ConfigurationError",
    "PrematureQueryError",
    "SolverDivergence",
    "EmptyResultError",
    "LocalizationStateError",
    "SimulationConfig",
    "Heuristic",
    "LocalizationEngine",
    "MultilaterationSolver",
    "TrilaterationSimulation",
    "ExperimentSummary",
    "RunStatistics",
]
