"""
YAML Configuration Manager for the trilateration simulator
Provides centralized configuration loading, overrides and validation
"""

import yaml
from pathlib import Path
from typing import Dict, Any, Optional, List
from dataclasses import dataclass, asdict, replace

from ..exceptions import ConfigurationError
from ..core.topology import count_anchors
from ..localization.heuristics import Heuristic
from ..localization.solver import EPS


@dataclass(frozen=True)
class SystemConfig:
    """Experiment-wide configuration"""
    seed: Optional[int] = None
    repetitions: int = 50  # E, executions on different topologies
    verbose: bool = False

    @classmethod
    def from_dict(cls, d: dict) -> 'SystemConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__annotations__})


@dataclass(frozen=True)
class NetworkConfig:
    """Network topology configuration"""
    n_nodes: int = 300  # N
    anchor_fraction: float = 0.15  # f
    field_size: float = 100.0  # L
    dimension: int = 2
    max_range: float = 15.0  # R

    @property
    def n_anchors(self) -> int:
        return count_anchors(self.n_nodes, self.anchor_fraction)

    @property
    def n_non_anchors(self) -> int:
        return self.n_nodes - self.n_anchors

    @classmethod
    def from_dict(cls, d: dict) -> 'NetworkConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__annotations__})


@dataclass(frozen=True)
class RangingConfig:
    """Range measurement configuration"""
    max_signal_error: float = 0.15  # r, 0.15 means at most 15% range error

    @classmethod
    def from_dict(cls, d: dict) -> 'RangingConfig':
        return cls(**{k: v for k, v in d.items() if k in cls.__annotations__})


@dataclass(frozen=True)
class LocalizationConfig:
    """Localization engine and solver configuration"""
    heuristic: str = "CLOSEST_NEIGHBOR"
    iterative: bool = True
    max_iterations: int = 1000
    tolerance: float = 1e-10

    @property
    def heuristic_enum(self) -> Heuristic:
        return Heuristic.from_name(self.heuristic)

    @classmethod
    def from_dict(cls, d: dict) -> 'LocalizationConfig':
        params = {k: v for k, v in d.items() if k in cls.__annotations__}
        # PyYAML reads exponents without a dot (1e-10) as strings
        if isinstance(params.get('tolerance'), str):
            try:
                params['tolerance'] = float(params['tolerance'])
            except ValueError:
                raise ConfigurationError(f"tolerance must be a number, got {params['tolerance']!r}") from None
        return cls(**params)


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_integer(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_SECTIONS = {
    'system': SystemConfig,
    'network': NetworkConfig,
    'ranging': RangingConfig,
    'localization': LocalizationConfig,
}


class SimulationConfig:
    """Main configuration manager for the simulator"""

    def __init__(self, config_path: Optional[str] = None,
                 system: Optional[SystemConfig] = None,
                 network: Optional[NetworkConfig] = None,
                 ranging: Optional[RangingConfig] = None,
                 localization: Optional[LocalizationConfig] = None):
        """
        Initialize configuration

        Args:
            config_path: Path to YAML config file
            system, network, ranging, localization: Section overrides
        """
        self.config_path = config_path
        self.raw_config: Dict[str, Any] = {}

        self.system = system or SystemConfig()
        self.network = network or NetworkConfig()
        self.ranging = ranging or RangingConfig()
        self.localization = localization or LocalizationConfig()

        if config_path:
            self.load(config_path)

    def load(self, config_path: str):
        """
        Load configuration from YAML file

        Args:
            config_path: Path to YAML file
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r') as f:
            self.raw_config = yaml.safe_load(f) or {}

        if not isinstance(self.raw_config, dict):
            raise ConfigurationError(f"Config file {config_path} must contain a mapping")

        for section, section_cls in _SECTIONS.items():
            if section in self.raw_config:
                setattr(self, section, section_cls.from_dict(self.raw_config[section] or {}))

        self.config_path = config_path

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {section: asdict(getattr(self, section)) for section in _SECTIONS}

    def save(self, output_path: Optional[str] = None):
        """
        Save configuration to YAML file

        Args:
            output_path: Path to save to (uses original path if not specified)
        """
        if output_path is None and self.config_path is None:
            raise ValueError("No output path specified")

        output_path = Path(output_path or self.config_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, 'w') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)

    def with_overrides(self, overrides: Dict[str, Any]) -> 'SimulationConfig':
        """
        Return a copy with dot-notation overrides applied,
        e.g. {'network.n_nodes': 100, 'localization.iterative': False}
        """
        sections = {section: getattr(self, section) for section in _SECTIONS}
        for key, value in overrides.items():
            if value is None:
                continue
            section, _, field_name = key.partition('.')
            if section not in sections or field_name not in _SECTIONS[section].__annotations__:
                raise ConfigurationError(f"Unknown configuration key: {key}")
            sections[section] = replace(sections[section], **{field_name: value})

        config = SimulationConfig(**sections)
        config.config_path = self.config_path
        return config

    def validate(self) -> List[str]:
        """
        Validate configuration

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []
        network = self.network

        if not _is_integer(network.n_nodes) or network.n_nodes < 1:
            errors.append(f"n_nodes must be a positive integer, got {network.n_nodes!r}")
        if not _is_number(network.anchor_fraction):
            errors.append(f"anchor_fraction must be a number, got {network.anchor_fraction!r}")
        elif not 0 < network.anchor_fraction < 1:
            errors.append(f"anchor_fraction must be in (0, 1), got {network.anchor_fraction}")
        for name in ('field_size', 'max_range'):
            value = getattr(network, name)
            if not _is_number(value):
                errors.append(f"{name} must be a number, got {value!r}")
            elif value <= 0:
                errors.append(f"{name} must be positive, got {value}")
        if not _is_integer(network.dimension) or network.dimension not in (2, 3):
            errors.append(f"dimension must be 2 or 3, got {network.dimension!r}")

        max_signal_error = self.ranging.max_signal_error
        if not _is_number(max_signal_error):
            errors.append(f"max_signal_error must be a number, got {max_signal_error!r}")
        elif max_signal_error < 0:
            errors.append(f"max_signal_error must be non-negative, got {max_signal_error}")

        if not _is_integer(self.system.repetitions) or self.system.repetitions < 1:
            errors.append(f"repetitions must be a positive integer, got {self.system.repetitions!r}")
        if self.system.seed is not None and (not _is_integer(self.system.seed) or self.system.seed < 0):
            errors.append(f"seed must be a non-negative integer or null, got {self.system.seed!r}")

        localization = self.localization
        try:
            Heuristic.from_name(localization.heuristic)
        except ValueError as e:
            errors.append(str(e))
        if not isinstance(localization.iterative, bool):
            errors.append(f"iterative must be true or false, got {localization.iterative!r}")
        if not _is_integer(localization.max_iterations) or localization.max_iterations < 1:
            errors.append(f"max_iterations must be a positive integer, got {localization.max_iterations!r}")
        if not _is_number(localization.tolerance):
            errors.append(f"tolerance must be a number, got {localization.tolerance!r}")
        elif localization.tolerance < EPS:
            errors.append(f"tolerance must be at least {EPS:.3e}, got {localization.tolerance}")

        return errors

    def ensure_valid(self) -> 'SimulationConfig':
        """Raise ConfigurationError listing every problem found by validate()"""
        errors = self.validate()
        if errors:
            raise ConfigurationError("Invalid configuration: " + "; ".join(errors))
        return self

    def summary(self) -> str:
        """Get configuration summary"""
        network = self.network
        return f"""
Trilateration Configuration Summary
===================================
Nodes: {network.n_nodes} ({network.n_anchors} anchors, {network.n_non_anchors} non-anchor)
Field: {network.field_size} per axis, {network.dimension}D, range {network.max_range}
Ranging: max signal error {self.ranging.max_signal_error:.0%}
Localization: {self.localization.heuristic}, {'iterative' if self.localization.iterative else 'non-iterative'}
Runs: {self.system.repetitions} (seed {self.system.seed})
Config file: {self.config_path}
"""


def create_example_config(output_path: str = "configs/example.yaml") -> SimulationConfig:
    """Create an example configuration file"""
    config = SimulationConfig(
        system=SystemConfig(seed=42, repetitions=20),
        network=NetworkConfig(n_nodes=200, anchor_fraction=0.1, field_size=100.0, max_range=20.0),
        ranging=RangingConfig(max_signal_error=0.1),
        localization=LocalizationConfig(heuristic="MOST_RELEVANT_NEIGHBOR"),
    )
    config.save(output_path)
    return config
