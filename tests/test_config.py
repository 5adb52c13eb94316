# tests/test_config.py
import pytest

from dcsim_core.constants import PENALTY_CONDUCTANCE_SIEMENS
from dcsim_core.geometry import ClusteringMode
from dcsim_core.simulation import ConfigParsingError, SimulationConfig, parse_simulation_config


class TestSimulationConfig:

    def test_defaults(self):
        config = SimulationConfig()
        assert config.cluster_tolerance == 15.0
        assert config.clustering_mode is ClusteringMode.SINGLE_SEED
        assert config.penalty_conductance == PENALTY_CONDUCTANCE_SIEMENS
        assert config.pivot_threshold == 1e-10
        assert config.high_current_threshold == 10.0

    def test_mode_from_string(self):
        assert SimulationConfig(clustering_mode="transitive").clustering_mode is ClusteringMode.TRANSITIVE

    @pytest.mark.parametrize("kwargs", [
        {"cluster_tolerance": -1.0},
        {"penalty_conductance": 0.0},
        {"pivot_threshold": -1e-10},
        {"high_current_threshold": float("inf")},
    ])
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValueError):
            SimulationConfig(**kwargs)

    def test_to_dict_round_trip(self):
        config = SimulationConfig(cluster_tolerance=5.0, clustering_mode=ClusteringMode.TRANSITIVE)
        assert parse_simulation_config(config.to_dict()) == config


class TestParseSimulationConfig:

    @pytest.mark.parametrize("raw", [None, {}])
    def test_empty_gives_defaults(self, raw):
        assert parse_simulation_config(raw) == SimulationConfig()

    def test_quantity_strings(self):
        config = parse_simulation_config({
            "penalty_conductance": "1e6 S",
            "high_current_threshold": "500 mA",
            "cluster_tolerance": 20,
            "clustering_mode": "TRANSITIVE",
        })
        assert config.penalty_conductance == pytest.approx(1e6)
        assert config.high_current_threshold == pytest.approx(0.5)
        assert config.cluster_tolerance == 20.0
        assert config.clustering_mode is ClusteringMode.TRANSITIVE

    @pytest.mark.parametrize("raw", [
        {"penalty_conductance": "5 V"},
        {"high_current_threshold": "lots"},
        {"cluster_tolerance": "15"},
        {"pivot_threshold": -1},
        {"clustering_mode": "fuzzy"},
        {"bogus_setting": 1},
    ])
    def test_errors(self, raw):
        with pytest.raises(ConfigParsingError, match="Failed to parse simulation configuration"):
            parse_simulation_config(raw)
