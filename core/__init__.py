"""
Core Module - Metric Stream Simulator

This module contains the pure building blocks of the simulation engine:
- Configuration (validated, immutable, single source of defaults)
- Bounded random-walk step (trend, seasonality, volatility, anomalies)
- Window statistics and trend classification
- Error types

These components perform no I/O and can be used by both the engine
and the API.
"""

from .config import (
    CHANGE_PERCENT_EPSILON,
    DEFAULT_CONFIG,
    SERIES_WINDOW_MS,
    UPDATE_STEP_FRACTION,
    RandomTrendMode,
    SeriesTrend,
    SimulationConfig,
    TrendDirection,
    initial_step_fraction,
    resolve_config,
)
from .errors import (
    FatalConfigurationError,
    InvalidConfigurationError,
    SeriesNotFoundError,
    SimulationError,
)
from .random_walk import StepComponents, compute_step, next_value, resolve_random_source
from .statistics import SeriesStatistics, calculate_statistics, change_percentage, classify_trend

__all__ = [
    # Configuration
    "SimulationConfig",
    "DEFAULT_CONFIG",
    "TrendDirection",
    "SeriesTrend",
    "RandomTrendMode",
    "resolve_config",
    "initial_step_fraction",
    "UPDATE_STEP_FRACTION",
    "SERIES_WINDOW_MS",
    "CHANGE_PERCENT_EPSILON",

    # Errors
    "SimulationError",
    "InvalidConfigurationError",
    "FatalConfigurationError",
    "SeriesNotFoundError",

    # Random walk
    "StepComponents",
    "compute_step",
    "next_value",
    "resolve_random_source",

    # Statistics
    "SeriesStatistics",
    "calculate_statistics",
    "change_percentage",
    "classify_trend",
]

__version__ = "0.1.0"
