"""Tests for engine configuration loading."""

import pytest

from bsm_calculator.config import DEFAULT_CONFIG, EngineConfig, load_config
from bsm_calculator.utils.error_handling import ConfigurationError


class TestEngineConfig:
    """Test suite for EngineConfig."""

    def test_defaults(self):
        """Test defaults match the calculator's constants."""
        config = EngineConfig()
        assert config.day_count == 365.25
        assert config.min_year_fraction == 0.001
        assert config.sweep_steps == 200
        assert config.sweep_width == 0.5
        assert config.initial_vol == 0.30
        assert config.tolerance == 1e-4
        assert config.max_iterations == 100
        assert (config.min_vol, config.max_vol) == (0.001, 5.0)

    def test_from_dict_sections(self):
        """Test nested sections override defaults."""
        config = EngineConfig.from_dict({
            'time': {'day_count': 365},
            'curve': {'sweep_steps': 50},
            'solver': {'tolerance': 1e-6, 'max_iterations': 200},
        })
        assert config.day_count == 365
        assert config.sweep_steps == 50
        assert config.tolerance == 1e-6
        assert config.max_iterations == 200
        assert config.max_vol == 5.0

    def test_from_empty_dict(self):
        config = EngineConfig.from_dict({})
        assert config.sweep_steps == DEFAULT_CONFIG.sweep_steps

    @pytest.mark.parametrize("kwargs", [
        {'day_count': 0},
        {'min_year_fraction': 0},
        {'sweep_width': 1.5},
        {'sweep_steps': 0},
        {'sweep_steps': 2.5},
        {'tolerance': -1e-4},
        {'max_iterations': 0},
        {'min_vol': 5.0, 'max_vol': 1.0},
        {'initial_vol': 10.0},
    ])
    def test_invalid(self, kwargs):
        """Test inconsistent settings raise ConfigurationError."""
        with pytest.raises(ConfigurationError):
            EngineConfig(**kwargs)


class TestLoadConfig:
    """Test suite for YAML loading."""

    def test_load_yaml(self, tmp_path):
        path = tmp_path / "engine.yaml"
        path.write_text("""
time:
  day_count: 360
curve:
  sweep_width: 0.25
  sweep_steps: 100
solver:
  initial_vol: 0.2
""")
        config = load_config(path)

        assert config.day_count == 360
        assert config.sweep_width == 0.25
        assert config.sweep_steps == 100
        assert config.initial_vol == 0.2

    def test_empty_file_gives_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_config(path).day_count == 365.25

    def test_non_mapping_rejected(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- 1\n- 2\n")
        with pytest.raises(ConfigurationError):
            load_config(path)

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")
