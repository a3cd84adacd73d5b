"""Errors raised by the trilateration simulator"""


class TrilaterationError(Exception):
    """Base class for all simulator errors"""


class ConfigurationError(TrilaterationError):
    """Simulation parameters are invalid; raised before a run starts"""


class PrematureQueryError(TrilaterationError):
    """Estimate or error requested for a node that was never localized"""


class SolverDivergence(TrilaterationError):
    """Multilateration solve failed to converge for the chosen references"""


class EmptyResultError(TrilaterationError):
    """A run localized no non-anchor nodes, so its average error is undefined"""


class LocalizationStateError(TrilaterationError):
    """Attempt to overwrite the estimate of an anchor or an already located node"""
