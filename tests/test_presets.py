"""
Tests for Metric Presets

Run with: pytest tests/test_presets.py -v
"""

import random

import pytest
from core.config import TrendDirection
from core.errors import InvalidConfigurationError
from engine.presets import PresetLibrary, PresetType, create_preset_series
from engine.series import SeriesSimulator


class TestPresetLibrary:
    """Test preset lookup and contents."""

    def test_all_presets(self):
        presets = PresetLibrary.get_all_presets()

        assert len(presets) == 6
        assert {p.preset_type for p in presets} == set(PresetType)

    @pytest.mark.parametrize("preset_type", list(PresetType))
    def test_get_preset_by_type(self, preset_type):
        preset = PresetLibrary.get_preset_by_type(preset_type)

        assert preset.preset_type == preset_type
        assert preset.config.name == preset.name
        assert preset.config.min_value < preset.config.max_value

    def test_unknown_type_returns_none(self):
        assert PresetLibrary.get_preset_by_type("not-a-preset") is None

    def test_energy_consumption(self):
        preset = PresetLibrary.energy_consumption()

        assert preset.config.unit == "kWh"
        assert preset.config.trend == TrendDirection.UP
        assert preset.config.seasonality is True

    def test_cost_savings_has_no_anomalies(self):
        assert PresetLibrary.cost_savings().config.anomaly_probability == 0.0

    def test_overrides(self):
        preset = PresetLibrary.network_load(point_count=60, volatility=5.0)

        assert preset.config.point_count == 60
        assert preset.config.volatility == 5.0
        assert preset.config.unit == "Mbps"

    def test_invalid_override_rejected(self):
        with pytest.raises(InvalidConfigurationError):
            PresetLibrary.grid_efficiency(min_value=500)

    def test_to_dict(self):
        d = PresetLibrary.equipment_temperature().to_dict()

        assert d["type"] == "equipment_temperature"
        assert d["config"]["trend_threshold"] == 2.0
        assert d["config"]["trend"] == "stable"


class TestCreatePresetSeries:
    """Test building series from presets."""

    def setup_method(self):
        self.sim = SeriesSimulator(rng=random.Random(12))

    def test_series_uses_preset(self):
        series = create_preset_series(PresetType.RENEWABLE_GENERATION, self.sim)

        assert series.name == "Renewable Generation"
        assert series.unit == "kW"
        assert len(series) == 24
        assert all(0.0 <= v <= 500.0 for v in series.values)

    def test_custom_name_and_override(self):
        series = create_preset_series(
            PresetType.COST_SAVINGS, self.sim, name="Q3 Savings", point_count=6
        )

        assert series.name == "Q3 Savings"
        assert len(series) == 6

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            create_preset_series("bogus", self.sim)

    def test_preset_series_advances(self):
        series = create_preset_series(PresetType.NETWORK_LOAD, self.sim)
        advanced = self.sim.advance_series(series)

        assert len(advanced) == 30
        assert advanced.config.unit == "Mbps"
