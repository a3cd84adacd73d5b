"""Configuration management for the trilateration simulator"""

from .yaml_config import (
    SimulationConfig,
    SystemConfig,
    NetworkConfig,
    RangingConfig,
    LocalizationConfig,
    create_example_config
)

__all__ = [
    'SimulationConfig',
    'SystemConfig',
    'NetworkConfig',
    'RangingConfig',
    'LocalizationConfig',
    'create_example_config'
]
