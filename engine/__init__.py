"""
Engine Module - Synthetic Metric Streams

This module builds, advances and serves simulated metric series for
dashboards and demos.

Key Components:
- SeriesSimulator: Creates and advances series (sliding window)
- PresetLibrary: Ready-made configurations for common dashboard metrics
- SeriesStore / LiveSeriesFeed: In-memory live telemetry
- datasets: Random data for pie, heatmap, network, radar, bubble,
  waterfall and sankey charts

Usage:
    from engine import SeriesSimulator, PresetLibrary, PresetType

    sim = SeriesSimulator()

    # Create a series and advance it one tick
    series = sim.create_series("Load", {"min_value": 0, "max_value": 100})
    series = sim.advance_series(series)

    # Create from a preset
    preset = PresetLibrary.get_preset_by_type(PresetType.NETWORK_LOAD)
    network = sim.create_series(preset.name, preset.config)
"""

from .series import (
    SeriesSimulator,
    SimulatedDataPoint,
    SimulatedTimeSeries,
    advance_series,
    create_multiple_series,
    create_series,
)
from .presets import (
    MetricPreset,
    PresetLibrary,
    PresetType,
    create_preset_series,
)
from .live import LiveSeriesFeed, SeriesStore

__all__ = [
    # Series
    "SeriesSimulator",
    "SimulatedDataPoint",
    "SimulatedTimeSeries",
    "create_series",
    "advance_series",
    "create_multiple_series",

    # Presets
    "MetricPreset",
    "PresetLibrary",
    "PresetType",
    "create_preset_series",

    # Live feed
    "SeriesStore",
    "LiveSeriesFeed",
]

__version__ = "0.1.0"
