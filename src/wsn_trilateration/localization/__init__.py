"""Reference selection, range measurement, multilateration and the localization engine"""

from .heuristics import Heuristic, rank_references, select_references
from .ranging import RangingModel
from .solver import MultilaterationSolver
from .engine import LocalizationEngine, LocalizationResult

__all__ = [
    'Heuristic',
    'rank_references',
    'select_references',
    'RangingModel',
    'MultilaterationSolver',
    'LocalizationEngine',
    'LocalizationResult',
]
