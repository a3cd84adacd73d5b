"""
Per-run and cross-run localization statistics
"""

from dataclasses import dataclass
from typing import Sequence, TextIO

import numpy as np

from ..core.topology import Node
from ..exceptions import EmptyResultError


@dataclass(frozen=True)
class RunStatistics:
    """Localization outcome of a single topology"""
    n_non_anchor: int
    located_count: int
    percent_located: float
    average_error: float


@dataclass(frozen=True)
class ExperimentSummary:
    """Means over all runs of an experiment (no variance)"""
    n_non_anchor: int
    mean_located: float
    mean_percent_located: float
    mean_error: float
    runs: int

    def report_lines(self):
        return [
            f"Number of non-anchor nodes = {self.n_non_anchor}",
            f"Number of located nodes = {self.mean_located}",
            f"Fraction of located nodes = {self.mean_percent_located}%",
            f"Average localization error = {self.mean_error}",
        ]

    def write(self, stream: TextIO):
        """Write the four labeled result lines"""
        for line in self.report_lines():
            stream.write(line + "\n")


def compute_run_statistics(nodes: Sequence[Node]) -> RunStatistics:
    """
    Count located non-anchor nodes and their mean localization error

    Raises:
        EmptyResultError: No non-anchor node was located
    """
    non_anchors = [n for n in nodes if not n.is_anchor]
    located = [n for n in non_anchors if n.is_located]
    if not located:
        raise EmptyResultError(
            f"No nodes were located ({len(non_anchors)} non-anchor nodes)")

    errors = np.array([n.localization_error() for n in located])
    return RunStatistics(
        n_non_anchor=len(non_anchors),
        located_count=len(located),
        percent_located=len(located) * 100.0 / len(non_anchors),
        average_error=float(errors.mean()),
    )


def aggregate(runs: Sequence[RunStatistics]) -> ExperimentSummary:
    """Arithmetic means of located count, percent located and average error"""
    if not runs:
        raise ValueError("Cannot aggregate an empty list of runs")
    return ExperimentSummary(
        n_non_anchor=runs[0].n_non_anchor,
        mean_located=float(np.mean([r.located_count for r in runs])),
        mean_percent_located=float(np.mean([r.percent_located for r in runs])),
        mean_error=float(np.mean([r.average_error for r in runs])),
        runs=len(runs),
    )
