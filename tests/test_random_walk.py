"""
Tests for the Bounded Random-Walk Step

These tests verify each term of a step (trend, seasonality, noise,
anomaly), clamping, and fail-fast handling of broken random sources.

Run with: pytest tests/test_random_walk.py -v
"""

import math
import random

import pytest
from core.config import SimulationConfig, UPDATE_STEP_FRACTION
from core.errors import FatalConfigurationError
from core.random_walk import (
    compute_step,
    draw_trend_factor,
    next_value,
    resolve_random_source,
    seasonal_phase,
    seasonality_effect,
)
from tests.helpers import FailingRandom, FixedRandom


def quiet_config(**kwargs) -> SimulationConfig:
    """Config with every random term switched off unless overridden."""
    defaults = dict(
        min_value=0.0,
        max_value=100.0,
        volatility=0.0,
        trend="stable",
        seasonality=False,
        anomaly_probability=0.0,
    )
    defaults.update(kwargs)
    return SimulationConfig(**defaults)


class TestTrendTerm:
    """Test the directional trend term."""

    def test_up_trend(self):
        config = quiet_config(trend="up", trend_strength=0.4)
        step = compute_step(50.0, config, 0.0, 0.1, FixedRandom())

        # 0.4 × 100 × 0.1
        assert step.trend == pytest.approx(4.0)
        assert step.value == pytest.approx(54.0)

    def test_down_trend(self):
        config = quiet_config(trend="down", trend_strength=0.4)
        step = compute_step(50.0, config, 0.0, 0.1, FixedRandom())

        assert step.trend == pytest.approx(-4.0)
        assert step.value == pytest.approx(46.0)

    def test_stable_trend(self):
        step = compute_step(50.0, quiet_config(), 0.0, 0.1, FixedRandom())
        assert step.trend == 0.0
        assert step.value == 50.0

    def test_random_trend_bounds(self):
        """Random bias stays within ±trend_strength / 2."""
        config = quiet_config(trend="random", trend_strength=0.4)

        assert draw_trend_factor(config, FixedRandom(0.0)) == pytest.approx(-0.2)
        assert draw_trend_factor(config, FixedRandom(0.75)) == pytest.approx(0.1)

        rng = random.Random(7)
        for _ in range(200):
            assert -0.2 <= draw_trend_factor(config, rng) <= 0.2

    def test_random_trend_redrawn_each_step(self):
        """Each call draws a fresh bias."""
        config = quiet_config(trend="random", trend_strength=0.4)
        rng = FixedRandom(0.0, 0.5, 0.5, 1 - 1e-9, 0.5, 0.5)

        first = compute_step(50.0, config, 0.0, 0.1, rng)
        second = compute_step(50.0, config, 0.0, 0.1, rng)

        assert first.trend < 0
        assert second.trend > 0

    def test_explicit_trend_factor(self):
        config = quiet_config(trend="random", trend_strength=0.4)
        step = compute_step(50.0, config, 0.0, UPDATE_STEP_FRACTION, FixedRandom(), trend_factor=0.1)

        # 0.1 × 100 × 0.05
        assert step.trend == pytest.approx(0.5)

    def test_degenerate_range_trend_is_zero(self):
        config = quiet_config(min_value=5.0, max_value=5.0, trend="up", trend_strength=1.0)
        step = compute_step(5.0, config, 0.0, 1.0, FixedRandom())

        assert step.trend == 0.0
        assert step.value == 5.0


class TestSeasonalityTerm:
    """Test the seasonal term."""

    def test_phase(self):
        assert seasonal_phase(0, 4) == 0.0
        assert seasonal_phase(1, 4) == 0.25
        assert seasonal_phase(5, 4) == 0.25

    def test_disabled(self):
        assert seasonality_effect(quiet_config(), 0.25) == 0.0

    def test_peak_and_trough(self):
        config = quiet_config(seasonality=True, seasonality_amplitude=10.0)

        assert seasonality_effect(config, 0.25) == pytest.approx(10.0)
        assert seasonality_effect(config, 0.75) == pytest.approx(-10.0)
        assert seasonality_effect(config, 0.0) == pytest.approx(0.0)


class TestNoiseAndAnomaly:
    """Test volatility noise and anomaly spikes."""

    def test_noise_bounds(self):
        config = quiet_config(volatility=3.0)

        low = compute_step(50.0, config, 0.0, 0.0, FixedRandom(0.0, 0.99))
        assert low.noise == pytest.approx(-3.0)

        rng = random.Random(11)
        for _ in range(200):
            step = compute_step(50.0, config, 0.0, 0.0, rng)
            assert -3.0 <= step.noise <= 3.0

    def test_anomaly_never_fires_at_zero_probability(self):
        config = quiet_config(volatility=1.0, anomaly_probability=0.0)
        step = compute_step(50.0, config, 0.0, 0.0, FixedRandom(0.0))

        assert not step.is_anomaly
        assert step.anomaly == 0.0

    def test_anomaly_always_fires_at_full_probability(self):
        config = quiet_config(volatility=2.0, anomaly_probability=1.0, anomaly_magnitude=3.0)
        # noise draw, anomaly trial, anomaly size
        step = compute_step(50.0, config, 0.0, 0.0, FixedRandom(0.5, 0.9, 1 - 1e-12))

        assert step.is_anomaly
        assert step.anomaly == pytest.approx(6.0)

    def test_anomaly_scales_with_volatility(self):
        """With zero volatility a spike has zero size."""
        config = quiet_config(volatility=0.0, anomaly_probability=1.0, anomaly_magnitude=5.0)
        step = compute_step(50.0, config, 0.0, 0.0, random.Random(3))

        assert step.is_anomaly
        assert step.anomaly == 0.0
        assert step.value == 50.0


class TestClamping:
    """Test bounds enforcement."""

    def test_clamped_to_max(self):
        config = quiet_config(trend="up", trend_strength=1.0)
        step = compute_step(99.0, config, 0.0, 1.0, FixedRandom())

        assert step.raw_value == pytest.approx(199.0)
        assert step.value == 100.0
        assert step.was_clamped

    def test_clamped_to_min(self):
        config = quiet_config(trend="down", trend_strength=1.0)
        assert next_value(1.0, config, 0.0, 1.0, FixedRandom()) == 0.0

    def test_extreme_volatility_stays_in_bounds(self):
        config = quiet_config(volatility=1000.0, anomaly_probability=1.0, anomaly_magnitude=10.0)
        rng = random.Random(5)

        value = 50.0
        for _ in range(500):
            value = next_value(value, config, 0.0, UPDATE_STEP_FRACTION, rng)
            assert 0.0 <= value <= 100.0


class TestRandomSource:
    """Test random source handling."""

    def test_default_source(self):
        rng = resolve_random_source(None)
        assert 0.0 <= rng.random() < 1.0

    def test_source_without_random_method(self):
        with pytest.raises(FatalConfigurationError):
            resolve_random_source(object())

    def test_failing_source(self):
        with pytest.raises(FatalConfigurationError):
            compute_step(50.0, quiet_config(), 0.0, 0.1, FailingRandom())

    @pytest.mark.parametrize("bad_value", [1.0, -0.1, math.nan, "0.5"])
    def test_out_of_range_draw(self, bad_value):
        with pytest.raises(FatalConfigurationError):
            compute_step(50.0, quiet_config(), 0.0, 0.1, FixedRandom(bad_value))
