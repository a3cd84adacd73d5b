"""
Unit tests for YAML configuration
"""

import pytest
import yaml

from wsn_trilateration.config import (
    SimulationConfig, NetworkConfig, LocalizationConfig, create_example_config
)
from wsn_trilateration.exceptions import ConfigurationError
from wsn_trilateration.localization.heuristics import Heuristic


class TestDefaults:
    """Defaults follow the classic 300-node experiment"""

    def test_default_values(self):
        config = SimulationConfig()
        assert config.network.n_nodes == 300
        assert config.network.anchor_fraction == 0.15
        assert config.network.n_anchors == 45
        assert config.network.n_non_anchors == 255
        assert config.network.max_range == 15.0
        assert config.ranging.max_signal_error == 0.15
        assert config.localization.heuristic_enum is Heuristic.CLOSEST_NEIGHBOR
        assert config.localization.iterative
        assert config.system.repetitions == 50
        assert config.validate() == []

    def test_sections_are_immutable(self):
        config = SimulationConfig()
        with pytest.raises(AttributeError):
            config.network.n_nodes = 10


class TestValidation:
    """Invalid parameters are rejected"""

    @pytest.mark.parametrize("key,value", [
        ('network.n_nodes', 0),
        ('network.anchor_fraction', 0.0),
        ('network.anchor_fraction', 1.0),
        ('network.field_size', -1.0),
        ('network.max_range', 0.0),
        ('network.dimension', 4),
        ('ranging.max_signal_error', -0.1),
        ('system.repetitions', 0),
        ('localization.heuristic', 'RANDOM_NEIGHBOR'),
        ('localization.max_iterations', 0),
    ])
    def test_invalid(self, key, value):
        config = SimulationConfig().with_overrides({key: value})
        assert config.validate()
        with pytest.raises(ConfigurationError):
            config.ensure_valid()

    @pytest.mark.parametrize("key,value", [
        ('network.n_nodes', 'many'),
        ('network.n_nodes', 12.5),
        ('network.anchor_fraction', 'half'),
        ('network.field_size', 'big'),
        ('network.max_range', [15]),
        ('network.dimension', True),
        ('ranging.max_signal_error', 'low'),
        ('system.repetitions', '50'),
        ('system.seed', 'abc'),
        ('localization.iterative', 'yes'),
        ('localization.max_iterations', 'lots'),
        ('localization.tolerance', False),
    ])
    def test_wrong_type_reported(self, key, value):
        config = SimulationConfig().with_overrides({key: value})
        errors = config.validate()
        assert any(key.split('.')[1] in error for error in errors)
        with pytest.raises(ConfigurationError):
            config.ensure_valid()

    def test_tolerance_below_machine_epsilon(self):
        config = SimulationConfig().with_overrides({'localization.tolerance': 1e-20})
        with pytest.raises(ConfigurationError, match="tolerance"):
            config.ensure_valid()

    def test_non_numeric_yaml_value(self, tmp_path):
        path = tmp_path / "words.yaml"
        path.write_text("network:\n  field_size: big\n")
        config = SimulationConfig(str(path))
        assert config.validate() == ["field_size must be a number, got 'big'"]
        with pytest.raises(ConfigurationError, match="field_size"):
            config.ensure_valid()

    def test_unparseable_tolerance(self, tmp_path):
        path = tmp_path / "tolerance.yaml"
        path.write_text("localization:\n  tolerance: tight\n")
        with pytest.raises(ConfigurationError, match="tolerance"):
            SimulationConfig(str(path))

    def test_unknown_override_key(self):
        with pytest.raises(ConfigurationError):
            SimulationConfig().with_overrides({'network.n_sensors': 10})

    def test_none_overrides_ignored(self):
        config = SimulationConfig().with_overrides({'network.n_nodes': None, 'system.seed': 5})
        assert config.network.n_nodes == 300
        assert config.system.seed == 5


class TestYaml:
    """Load and save"""

    def test_round_trip(self, tmp_path):
        config = SimulationConfig(
            network=NetworkConfig(n_nodes=120, anchor_fraction=0.2, dimension=3, max_range=25.0),
            localization=LocalizationConfig(heuristic="MOST_RELEVANT_NEIGHBOR", iterative=False),
        )
        path = tmp_path / "config.yaml"
        config.save(str(path))

        loaded = SimulationConfig(str(path))
        assert loaded.to_dict() == config.to_dict()

    def test_partial_file_keeps_defaults(self, tmp_path):
        path = tmp_path / "partial.yaml"
        path.write_text(yaml.dump({'network': {'n_nodes': 42}, 'localization': {'tolerance': '1e-8'}}))
        config = SimulationConfig(str(path))
        assert config.network.n_nodes == 42
        assert config.network.max_range == 15.0
        assert config.localization.tolerance == pytest.approx(1e-8)

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "extra.yaml"
        path.write_text("network:\n  n_nodes: 20\n  color: blue\n")
        assert SimulationConfig(str(path)).network.n_nodes == 20

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            SimulationConfig(str(tmp_path / "nope.yaml"))

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            SimulationConfig(str(path))

    def test_create_example(self, tmp_path):
        path = tmp_path / "configs" / "example.yaml"
        config = create_example_config(str(path))
        assert path.exists()
        assert SimulationConfig(str(path)).to_dict() == config.to_dict()
        assert config.validate() == []

    def test_summary_mentions_heuristic(self):
        assert "CLOSEST_NEIGHBOR" in SimulationConfig().summary()
