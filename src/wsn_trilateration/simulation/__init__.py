"""Monte-Carlo driver and statistics"""

from .statistics import RunStatistics, ExperimentSummary, compute_run_statistics, aggregate
from .monte_carlo import TrilaterationSimulation, run_experiment

__all__ = [
    'RunStatistics',
    'ExperimentSummary',
    'compute_run_statistics',
    'aggregate',
    'TrilaterationSimulation',
    'run_experiment',
]
