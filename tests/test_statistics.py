"""
Tests for Series Statistics

Run with: pytest tests/test_statistics.py -v
"""

import pytest
from core.config import SeriesTrend
from core.errors import InvalidConfigurationError
from core.statistics import calculate_statistics, change_percentage, classify_trend


class TestClassifyTrend:
    """Test the dead-zone trend classifier."""

    def test_up(self):
        assert classify_trend(10.0, 20.0, 5.0) == SeriesTrend.UP

    def test_down(self):
        assert classify_trend(20.0, 10.0, 5.0) == SeriesTrend.DOWN

    def test_within_dead_zone(self):
        assert classify_trend(10.0, 13.0, 5.0) == SeriesTrend.STABLE
        assert classify_trend(13.0, 10.0, 5.0) == SeriesTrend.STABLE

    def test_boundary_is_stable(self):
        """A change exactly equal to the threshold is not a trend."""
        assert classify_trend(10.0, 15.0, 5.0) == SeriesTrend.STABLE
        assert classify_trend(15.0, 10.0, 5.0) == SeriesTrend.STABLE

    def test_zero_threshold(self):
        assert classify_trend(10.0, 10.0, 0.0) == SeriesTrend.STABLE
        assert classify_trend(10.0, 10.001, 0.0) == SeriesTrend.UP


class TestCalculateStatistics:
    """Test window statistics."""

    def test_basic_statistics(self):
        stats = calculate_statistics([10.0, 30.0, 20.0, 40.0], threshold=5.0)

        assert stats.total == pytest.approx(100.0)
        assert stats.average == pytest.approx(25.0)
        assert stats.min == 10.0
        assert stats.max == 40.0
        assert stats.trend == SeriesTrend.UP

    def test_single_value(self):
        stats = calculate_statistics([42.0], threshold=1.0)

        assert stats.total == 42.0
        assert stats.average == 42.0
        assert stats.min == stats.max == 42.0
        assert stats.trend == SeriesTrend.STABLE

    def test_accepts_points_with_value(self):
        class Point:
            def __init__(self, value):
                self.value = value

        stats = calculate_statistics([Point(1.0), Point(3.0)], threshold=0.5)
        assert stats.average == pytest.approx(2.0)

    def test_empty_rejected(self):
        with pytest.raises(InvalidConfigurationError):
            calculate_statistics([], threshold=1.0)

    def test_to_dict(self):
        d = calculate_statistics([5.0, 1.0], threshold=1.0).to_dict()
        assert d["trend"] == "down"
        assert d["min"] == 1.0


class TestChangePercentage:
    """Test percentage change guarding."""

    def test_increase(self):
        assert change_percentage(110.0, 100.0) == pytest.approx(10.0)

    def test_decrease(self):
        assert change_percentage(75.0, 100.0) == pytest.approx(-25.0)

    def test_zero_previous_value(self):
        assert change_percentage(5.0, 0.0) == 0.0

    def test_near_zero_previous_value(self):
        assert change_percentage(5.0, 1e-12) == 0.0

    def test_negative_previous_value(self):
        assert change_percentage(-5.0, -10.0) == pytest.approx(-50.0)
