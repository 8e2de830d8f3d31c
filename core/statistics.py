"""
Series Statistics and Trend Classification

Pure functions computing the derived statistics of a series window:
total, average, min, max and a coarse trend classification.

The trend classifier compares the net movement of the window
(last value - first value) against a dead zone:

    change >  threshold  →  up
    change < -threshold  →  down
    otherwise            →  stable
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List

from .config import CHANGE_PERCENT_EPSILON, SeriesTrend
from .errors import InvalidConfigurationError


@dataclass(frozen=True)
class SeriesStatistics:
    """Derived statistics over the current window."""
    total: float
    average: float
    min: float
    max: float
    trend: SeriesTrend

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "average": self.average,
            "min": self.min,
            "max": self.max,
            "trend": self.trend.value,
        }


def classify_trend(first_value: float, last_value: float, threshold: float) -> SeriesTrend:
    """
    Classify the net movement between the first and last value.

    Args:
        first_value: Oldest value in the window
        last_value: Newest value in the window
        threshold: Dead zone half-width

    Returns:
        SeriesTrend.UP, SeriesTrend.DOWN or SeriesTrend.STABLE
    """
    change = last_value - first_value
    if change > threshold:
        return SeriesTrend.UP
    if change < -threshold:
        return SeriesTrend.DOWN
    return SeriesTrend.STABLE


def calculate_statistics(data: Iterable[Any], threshold: float) -> SeriesStatistics:
    """
    Compute statistics over a window of values.

    Args:
        data: Numbers, or objects with a ``value`` attribute (data points)
        threshold: Dead zone for the trend classifier

    Returns:
        SeriesStatistics for the window

    Raises:
        InvalidConfigurationError: If the window is empty
    """
    values: List[float] = [
        point if isinstance(point, (int, float)) else point.value
        for point in data
    ]
    if not values:
        raise InvalidConfigurationError("Cannot compute statistics of an empty series", field="data")

    total = sum(values)
    return SeriesStatistics(
        total=total,
        average=total / len(values),
        min=min(values),
        max=max(values),
        trend=classify_trend(values[0], values[-1], threshold),
    )


def change_percentage(value: float, previous_value: float) -> float:
    """
    Percentage change from previous_value to value.

    Returns 0.0 when previous_value is zero (or nearly so) instead of
    leaking inf/nan to display layers.
    """
    if abs(previous_value) < CHANGE_PERCENT_EPSILON:
        return 0.0
    return (value - previous_value) / previous_value * 100.0
