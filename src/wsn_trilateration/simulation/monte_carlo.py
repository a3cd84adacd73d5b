"""
Monte-Carlo trilateration experiment

Every run draws a fresh topology from its own random generator. Generators are
spawned from one SeedSequence, so a seeded experiment is reproducible and runs
share no state.
"""

import logging
import time
from typing import List, Optional, Tuple

import numpy as np

from ..config import SimulationConfig
from ..core.graph import DistanceGraph, build_distance_graph
from ..core.topology import Node, generate_topology
from ..localization.engine import LocalizationEngine, LocalizationResult
from .statistics import RunStatistics, ExperimentSummary, compute_run_statistics, aggregate

logger = logging.getLogger(__name__)


class TrilaterationSimulation:
    """Runs E independent localization runs and aggregates their statistics"""

    def __init__(self, config: Optional[SimulationConfig] = None):
        """
        Args:
            config: Simulation configuration (defaults if omitted)

        Raises:
            ConfigurationError: Configuration is invalid
        """
        self.config = (config or SimulationConfig()).ensure_valid()
        self.runs: List[RunStatistics] = []

    def spawn_generators(self) -> List[np.random.Generator]:
        seed_sequence = np.random.SeedSequence(self.config.system.seed)
        return [np.random.default_rng(s) for s in seed_sequence.spawn(self.config.system.repetitions)]

    def setup_run(self, rng: np.random.Generator) -> Tuple[List[Node], DistanceGraph]:
        """Generate a topology and its reachability graph"""
        nodes = generate_topology(self.config.network, rng)
        graph = build_distance_graph(nodes, self.config.network.max_range)
        return nodes, graph

    def localize(self, rng: np.random.Generator) -> Tuple[List[Node], LocalizationResult]:
        """Generate a topology and localize it without computing statistics"""
        nodes, graph = self.setup_run(rng)
        engine = LocalizationEngine.from_config(self.config, rng)
        return nodes, engine.run(nodes, graph)

    def run_once(self, rng: np.random.Generator) -> RunStatistics:
        """
        Single run: topology, graph, localization, statistics

        Raises:
            SolverDivergence: A multilateration solve failed
            EmptyResultError: No non-anchor node was located
        """
        nodes, _ = self.localize(rng)
        return compute_run_statistics(nodes)

    def run(self) -> ExperimentSummary:
        """Execute all repetitions and return the cross-run means"""
        start = time.time()
        self.runs = []
        for i, rng in enumerate(self.spawn_generators()):
            stats = self.run_once(rng)
            self.runs.append(stats)
            logger.info(f"Run {i + 1}/{self.config.system.repetitions}: "
                        f"{stats.located_count}/{stats.n_non_anchor} located "
                        f"({stats.percent_located:.1f}%), avg error {stats.average_error:.4f}")

        summary = aggregate(self.runs)
        logger.info(f"Experiment finished: {summary.runs} runs in {time.time() - start:.2f}s")
        return summary


def run_experiment(config: Optional[SimulationConfig] = None) -> ExperimentSummary:
    """Convenience wrapper around TrilaterationSimulation"""
    return TrilaterationSimulation(config).run()
