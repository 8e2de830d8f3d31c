"""
Metric Presets for Dashboard Streams

Each preset bundles a ready-made SimulationConfig for one kind of
metric a monitoring dashboard shows. The values are chosen to look
plausible on a chart, not to model any real physical process:

- Energy consumption climbs slowly with a daily cycle
- Renewable generation swings strongly with the time of day
- Grid efficiency hovers in a narrow high band
- Network load wanders with frequent spikes
- Cost savings accumulate upward
- Equipment temperature is steady with rare excursions
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

from core.config import SimulationConfig, TrendDirection
from .series import SeriesSimulator, SimulatedTimeSeries


class PresetType(Enum):
    """Kinds of metric streams with a built-in preset."""
    ENERGY_CONSUMPTION = "energy_consumption"
    RENEWABLE_GENERATION = "renewable_generation"
    GRID_EFFICIENCY = "grid_efficiency"
    NETWORK_LOAD = "network_load"
    COST_SAVINGS = "cost_savings"
    EQUIPMENT_TEMPERATURE = "equipment_temperature"


@dataclass
class MetricPreset:
    """
    A named simulation configuration for one metric stream.

    Attributes:
        name: Human-readable metric name
        preset_type: Which preset this is
        description: What the stream looks like
        config: Simulation configuration for the stream
    """
    name: str
    preset_type: PresetType
    description: str
    config: SimulationConfig

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.preset_type.value,
            "description": self.description,
            "config": self.config.to_dict(),
        }


class PresetLibrary:
    """
    Library of pre-defined metric presets.

    Usage:
        # Get a specific preset, overriding a field
        preset = PresetLibrary.network_load(point_count=60)

        # Get all available presets
        all_presets = PresetLibrary.get_all_presets()

        # Get preset by type
        preset = PresetLibrary.get_preset_by_type(PresetType.GRID_EFFICIENCY)
    """

    @staticmethod
    def energy_consumption(**overrides) -> MetricPreset:
        """Site energy draw with a daily cycle and a slow upward drift."""
        config = SimulationConfig(
            name="Energy Consumption",
            point_count=24,
            min_value=200.0,
            max_value=800.0,
            volatility=15.0,
            trend=TrendDirection.UP,
            trend_strength=0.2,
            seasonality=True,
            seasonality_period=24,
            seasonality_amplitude=25.0,
            anomaly_probability=0.05,
            anomaly_magnitude=2.5,
            unit="kWh",
            color="#3b82f6",
        )
        return MetricPreset(
            name="Energy Consumption",
            preset_type=PresetType.ENERGY_CONSUMPTION,
            description="Hourly site consumption with a daily load cycle and gradual growth",
            config=config.with_overrides(overrides),
        )

    @staticmethod
    def renewable_generation(**overrides) -> MetricPreset:
        """Solar-like output: large seasonal swing, no net drift."""
        config = SimulationConfig(
            name="Renewable Generation",
            point_count=24,
            min_value=0.0,
            max_value=500.0,
            volatility=10.0,
            trend=TrendDirection.STABLE,
            trend_strength=0.0,
            seasonality=True,
            seasonality_period=24,
            seasonality_amplitude=40.0,
            anomaly_probability=0.02,
            anomaly_magnitude=3.0,
            unit="kW",
            color="#10b981",
        )
        return MetricPreset(
            name="Renewable Generation",
            preset_type=PresetType.RENEWABLE_GENERATION,
            description="Generation output following the daylight cycle",
            config=config.with_overrides(overrides),
        )

    @staticmethod
    def grid_efficiency(**overrides) -> MetricPreset:
        """Efficiency percentage in a tight high band."""
        config = SimulationConfig(
            name="Grid Efficiency",
            point_count=24,
            min_value=60.0,
            max_value=100.0,
            volatility=1.5,
            trend=TrendDirection.RANDOM,
            trend_strength=0.3,
            seasonality=False,
            anomaly_probability=0.03,
            anomaly_magnitude=4.0,
            unit="%",
            color="#8b5cf6",
        )
        return MetricPreset(
            name="Grid Efficiency",
            preset_type=PresetType.GRID_EFFICIENCY,
            description="Transmission efficiency with small random drift",
            config=config.with_overrides(overrides),
        )

    @staticmethod
    def network_load(**overrides) -> MetricPreset:
        """Bursty network throughput."""
        config = SimulationConfig(
            name="Network Load",
            point_count=30,
            min_value=0.0,
            max_value=1000.0,
            volatility=40.0,
            trend=TrendDirection.RANDOM,
            trend_strength=0.4,
            seasonality=True,
            seasonality_period=12,
            seasonality_amplitude=30.0,
            anomaly_probability=0.1,
            anomaly_magnitude=3.0,
            unit="Mbps",
            color="#06b6d4",
        )
        return MetricPreset(
            name="Network Load",
            preset_type=PresetType.NETWORK_LOAD,
            description="Throughput with short cycles and frequent traffic spikes",
            config=config.with_overrides(overrides),
        )

    @staticmethod
    def cost_savings(**overrides) -> MetricPreset:
        """Savings that grow steadily."""
        config = SimulationConfig(
            name="Cost Savings",
            point_count=12,
            min_value=0.0,
            max_value=100000.0,
            volatility=1500.0,
            trend=TrendDirection.UP,
            trend_strength=0.4,
            seasonality=False,
            anomaly_probability=0.0,
            anomaly_magnitude=0.0,
            unit="INR",
            color="#f59e0b",
        )
        return MetricPreset(
            name="Cost Savings",
            preset_type=PresetType.COST_SAVINGS,
            description="Cumulative savings trending upward",
            config=config.with_overrides(overrides),
        )

    @staticmethod
    def equipment_temperature(**overrides) -> MetricPreset:
        """Steady operating temperature with rare overheating spikes."""
        config = SimulationConfig(
            name="Equipment Temperature",
            point_count=24,
            min_value=20.0,
            max_value=95.0,
            volatility=0.8,
            trend=TrendDirection.STABLE,
            trend_strength=0.0,
            seasonality=True,
            seasonality_period=24,
            seasonality_amplitude=1.5,
            anomaly_probability=0.02,
            anomaly_magnitude=10.0,
            unit="°C",
            color="#ef4444",
            trend_threshold=2.0,
        )
        return MetricPreset(
            name="Equipment Temperature",
            preset_type=PresetType.EQUIPMENT_TEMPERATURE,
            description="Operating temperature with occasional overheating events",
            config=config.with_overrides(overrides),
        )

    @classmethod
    def get_all_presets(cls) -> List[MetricPreset]:
        """Get all available presets with default settings."""
        return [
            cls.energy_consumption(),
            cls.renewable_generation(),
            cls.grid_efficiency(),
            cls.network_load(),
            cls.cost_savings(),
            cls.equipment_temperature(),
        ]

    @classmethod
    def get_preset_by_type(
        cls,
        preset_type: PresetType,
        **overrides
    ) -> Optional[MetricPreset]:
        """
        Get a preset by its type.

        Args:
            preset_type: The type of preset to retrieve
            **overrides: Configuration field overrides

        Returns:
            MetricPreset or None if type not found
        """
        preset_map = {
            PresetType.ENERGY_CONSUMPTION: cls.energy_consumption,
            PresetType.RENEWABLE_GENERATION: cls.renewable_generation,
            PresetType.GRID_EFFICIENCY: cls.grid_efficiency,
            PresetType.NETWORK_LOAD: cls.network_load,
            PresetType.COST_SAVINGS: cls.cost_savings,
            PresetType.EQUIPMENT_TEMPERATURE: cls.equipment_temperature,
        }

        factory = preset_map.get(preset_type)
        if factory:
            return factory(**overrides)
        return None


def create_preset_series(
    preset_type: PresetType,
    simulator: Optional[SeriesSimulator] = None,
    name: Optional[str] = None,
    **overrides
) -> SimulatedTimeSeries:
    """
    Create a series from a preset.

    Args:
        preset_type: Preset to use
        simulator: Simulator to draw with (a fresh one if None)
        name: Series name (preset name if None)
        **overrides: Configuration field overrides

    Returns:
        A new SimulatedTimeSeries

    Raises:
        ValueError: If preset type is unknown
    """
    preset = PresetLibrary.get_preset_by_type(preset_type, **overrides)
    if not preset:
        raise ValueError(f"Unknown preset type: {preset_type}")

    simulator = simulator or SeriesSimulator()
    return simulator.create_series(name or preset.name, preset.config)
