"""
Synthetic Metric Series Simulator

Builds and advances fixed-length windows of simulated metric values
(energy consumption, efficiency, network load, ...) for dashboards
and demos.

Features:
- Bounded random walk with trend, seasonality, noise and anomalies
- Fixed-size sliding window: each advance drops the oldest point
- Statistics (total, average, min, max, trend) recomputed on every change
- Immutable series values: advancing returns a new series
- Export to dict, JSON, or a pandas DataFrame
"""

import json
import random
import logging
import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Generator, Iterator, List, Mapping, Optional, Sequence, Tuple

import pandas as pd

from core.config import (
    SERIES_WINDOW_MS,
    UPDATE_STEP_FRACTION,
    PartialConfig,
    RandomTrendMode,
    SeriesTrend,
    SimulationConfig,
    TrendDirection,
    initial_step_fraction,
    resolve_config,
)
from core.errors import InvalidConfigurationError
from core.random_walk import (
    compute_step,
    draw_trend_factor,
    draw_uniform,
    resolve_random_source,
    seasonal_phase,
)
from core.statistics import SeriesStatistics, calculate_statistics, change_percentage

logger = logging.getLogger(__name__)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class SimulatedDataPoint:
    """
    One timestamped value of a simulated series.

    Attributes:
        timestamp: When the value was observed (UTC)
        value: Simulated value, always within the configured bounds
        previous_value: Value of the preceding point (own value for the first point)
        change: value - previous_value
        change_percentage: change relative to previous_value, in percent
        is_anomaly: Whether an anomaly spike was injected into this value
    """
    timestamp: datetime
    value: float
    previous_value: float
    change: float
    change_percentage: float
    is_anomaly: bool = False

    @classmethod
    def build(
        cls,
        timestamp: datetime,
        value: float,
        previous_value: float,
        is_anomaly: bool = False
    ) -> "SimulatedDataPoint":
        """Create a point, deriving change and change_percentage."""
        return cls(
            timestamp=timestamp,
            value=value,
            previous_value=previous_value,
            change=value - previous_value,
            change_percentage=change_percentage(value, previous_value),
            is_anomaly=is_anomaly,
        )

    @property
    def timestamp_ms(self) -> int:
        """Timestamp as milliseconds since the Unix epoch."""
        return int(round(self.timestamp.timestamp() * 1000))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "timestamp_ms": self.timestamp_ms,
            "value": self.value,
            "previous_value": self.previous_value,
            "change": self.change,
            "change_percentage": self.change_percentage,
            "is_anomaly": self.is_anomaly,
        }


@dataclass(frozen=True)
class SimulatedTimeSeries:
    """
    A fixed-length window of simulated data points with derived statistics.

    Series are immutable: SeriesSimulator.advance_series returns a new
    series and leaves this one untouched, so readers of an older value
    always see a consistent snapshot.

    Attributes:
        id: Unique series identifier
        name: Display name
        data: Points in chronological order (len == config.point_count)
        color: Display colour
        unit: Display unit
        total: Sum of values in the window
        average: Mean of values in the window
        min: Smallest value in the window
        max: Largest value in the window
        trend: Derived net-movement classification
        config: Configuration the series was last generated with
        step_count: Number of steps generated so far
        trend_bias: Sticky random-trend draw (per-series random trend only)
    """
    id: str
    name: str
    data: Tuple[SimulatedDataPoint, ...]
    color: str
    unit: str
    total: float
    average: float
    min: float
    max: float
    trend: SeriesTrend
    config: SimulationConfig = field(repr=False, compare=False, default_factory=SimulationConfig)
    step_count: int = 0
    trend_bias: Optional[float] = None

    @property
    def values(self) -> List[float]:
        return [point.value for point in self.data]

    @property
    def latest(self) -> SimulatedDataPoint:
        return self.data[-1]

    @property
    def statistics(self) -> SeriesStatistics:
        return SeriesStatistics(
            total=self.total,
            average=self.average,
            min=self.min,
            max=self.max,
            trend=self.trend,
        )

    def __len__(self) -> int:
        return len(self.data)

    def to_dict(self, include_config: bool = False) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result = {
            "id": self.id,
            "name": self.name,
            "data": [point.to_dict() for point in self.data],
            "color": self.color,
            "unit": self.unit,
            "total": self.total,
            "average": self.average,
            "min": self.min,
            "max": self.max,
            "trend": self.trend.value,
            "step_count": self.step_count,
        }
        if include_config:
            result["config"] = self.config.to_dict()
        return result

    def to_json(self, filepath: Optional[str] = None, indent: int = 2) -> str:
        """
        Serialize the series as JSON.

        Args:
            filepath: Optional file path to save JSON
            indent: JSON indentation (default 2)

        Returns:
            JSON string
        """
        json_str = json.dumps(self.to_dict(include_config=True), indent=indent, default=str)

        if filepath:
            with open(filepath, 'w') as f:
                f.write(json_str)

        return json_str

    def to_dataframe(self) -> pd.DataFrame:
        """Return the window as a DataFrame indexed by timestamp."""
        frame = pd.DataFrame(
            [
                {
                    "timestamp": point.timestamp,
                    "value": point.value,
                    "previous_value": point.previous_value,
                    "change": point.change,
                    "change_percentage": point.change_percentage,
                    "is_anomaly": point.is_anomaly,
                }
                for point in self.data
            ]
        )
        return frame.set_index("timestamp")


class SeriesSimulator:
    """
    Creates and advances simulated metric series.

    The simulator holds only its random source and clock; every series
    it produces is an independent value owned by the caller.

    Example:
        sim = SeriesSimulator(random_seed=42)

        # 24 points spread over the trailing hour
        series = sim.create_series("Energy Consumption", {"unit": "kWh"})

        # One live tick: drop the oldest point, append a new one
        series = sim.advance_series(series)
    """

    def __init__(
        self,
        rng: Any = None,
        random_seed: Optional[int] = None,
        clock: Optional[Callable[[], datetime]] = None
    ):
        """
        Initialize the simulator.

        Args:
            rng: Random source with a random() method (random.Random if None)
            random_seed: Seed for a fresh random.Random when rng is None
            clock: Callable returning the current UTC datetime
        """
        if rng is None and random_seed is not None:
            rng = random.Random(random_seed)
        self.rng = resolve_random_source(rng)
        self.clock = clock or utc_now

    def create_series(
        self,
        name: str,
        config: PartialConfig = None,
        **overrides
    ) -> SimulatedTimeSeries:
        """
        Generate a complete series from a (partial) configuration.

        The walk starts from a value drawn from the middle 40% of the
        range and runs point_count steps. Points are spread evenly over
        the trailing hour, oldest first.

        Args:
            name: Display name of the series
            config: SimulationConfig or mapping of overrides over the defaults
            **overrides: Extra field overrides

        Returns:
            A new SimulatedTimeSeries

        Raises:
            InvalidConfigurationError: If the configuration is invalid
        """
        config = resolve_config(config, **overrides)
        count = config.point_count

        margin = config.value_range * 0.3
        current = draw_uniform(self.rng, config.min_value + margin, config.max_value - margin)

        trend_bias = self._sticky_trend_bias(config, None)
        step_fraction = initial_step_fraction(count)
        interval_ms = SERIES_WINDOW_MS / count
        now = self.clock()

        points: List[SimulatedDataPoint] = []
        for i in range(count):
            step = compute_step(
                current,
                config,
                seasonal_phase(i, config.seasonality_period),
                step_fraction,
                self.rng,
                trend_bias,
            )
            previous_value = points[-1].value if points else step.value
            points.append(SimulatedDataPoint.build(
                timestamp=now - timedelta(milliseconds=(count - i) * interval_ms),
                value=step.value,
                previous_value=previous_value,
                is_anomaly=step.is_anomaly,
            ))
            current = step.value

        stats = calculate_statistics(points, config.effective_trend_threshold)
        series = SimulatedTimeSeries(
            id=str(uuid.uuid4()),
            name=name,
            data=tuple(points),
            color=config.color,
            unit=config.unit,
            total=stats.total,
            average=stats.average,
            min=stats.min,
            max=stats.max,
            trend=stats.trend,
            config=config,
            step_count=count,
            trend_bias=trend_bias,
        )

        logger.debug(
            f"Created series '{name}' ({series.id}) with {count} points, "
            f"trend={stats.trend.value}"
        )
        return series

    def advance_series(
        self,
        series: SimulatedTimeSeries,
        config: PartialConfig = None,
        **overrides
    ) -> SimulatedTimeSeries:
        """
        Advance a series by exactly one step.

        The oldest point is dropped and a new point is appended; all
        other points are carried over unchanged and statistics are
        recomputed over the new window.

        Args:
            series: Series to advance (not modified)
            config: SimulationConfig or mapping of overrides over the
                series' own configuration
            **overrides: Extra field overrides

        Returns:
            A new SimulatedTimeSeries

        Raises:
            InvalidConfigurationError: If the configuration is invalid or
                would change the window size
        """
        config = resolve_config(config, base=series.config, **overrides)
        if config.point_count != len(series.data):
            raise InvalidConfigurationError(
                f"Cannot resize a series window from {len(series.data)} to "
                f"{config.point_count} points while advancing",
                field="point_count",
                value=config.point_count
            )

        last = series.data[-1]
        trend_bias = self._sticky_trend_bias(config, series.trend_bias)
        step = compute_step(
            last.value,
            config,
            seasonal_phase(series.step_count, config.seasonality_period),
            UPDATE_STEP_FRACTION,
            self.rng,
            trend_bias,
        )

        new_point = SimulatedDataPoint.build(
            timestamp=max(self.clock(), last.timestamp),
            value=step.value,
            previous_value=last.value,
            is_anomaly=step.is_anomaly,
        )
        data = series.data[1:] + (new_point,)
        stats = calculate_statistics(data, config.effective_trend_threshold)

        if step.is_anomaly:
            logger.debug(f"Anomaly injected into series '{series.name}': {step.anomaly:+.3f}")

        return replace(
            series,
            data=data,
            color=config.color,
            unit=config.unit,
            total=stats.total,
            average=stats.average,
            min=stats.min,
            max=stats.max,
            trend=stats.trend,
            config=config,
            step_count=series.step_count + 1,
            trend_bias=trend_bias,
        )

    def create_multiple_series(
        self,
        names: Sequence[str],
        configs: Optional[Sequence[PartialConfig]] = None
    ) -> List[SimulatedTimeSeries]:
        """
        Create one series per name.

        Args:
            names: Series names
            configs: Configuration per name, matched by position; names
                without a configuration use the defaults

        Returns:
            List of series in the same order as names
        """
        configs = list(configs or [])
        return [
            self.create_series(name, configs[index] if index < len(configs) else None)
            for index, name in enumerate(names)
        ]

    def run(
        self,
        series: SimulatedTimeSeries,
        steps: int,
        config: PartialConfig = None
    ) -> Iterator[SimulatedTimeSeries]:
        """
        Advance a series repeatedly.

        Args:
            series: Starting series
            steps: Number of advances
            config: Overrides applied on every advance

        Returns:
            Iterator over each successive series state

        Raises:
            InvalidConfigurationError: If steps is negative
        """
        if steps < 0:
            raise InvalidConfigurationError("steps must be non-negative", field="steps", value=steps)
        return self._advance_steps(series, steps, config)

    def _advance_steps(
        self,
        series: SimulatedTimeSeries,
        steps: int,
        config: PartialConfig
    ) -> Generator[SimulatedTimeSeries, None, None]:
        current = series
        for _ in range(steps):
            current = self.advance_series(current, config)
            yield current

    def _sticky_trend_bias(
        self,
        config: SimulationConfig,
        existing: Optional[float]
    ) -> Optional[float]:
        """Trend bias to reuse across steps, or None to draw per step."""
        if config.trend != TrendDirection.RANDOM or config.random_trend != RandomTrendMode.PER_SERIES:
            return None
        if existing is not None:
            return existing
        return draw_trend_factor(config, self.rng)


# =========================================
# Convenience Functions
# =========================================

def create_series(
    name: str,
    config: PartialConfig = None,
    rng: Any = None,
    **overrides
) -> SimulatedTimeSeries:
    """
    Create a series with a one-off simulator.

    Args:
        name: Display name
        config: SimulationConfig or mapping of overrides over the defaults
        rng: Optional random source
        **overrides: Extra field overrides

    Returns:
        A new SimulatedTimeSeries
    """
    return SeriesSimulator(rng=rng).create_series(name, config, **overrides)


def advance_series(
    series: SimulatedTimeSeries,
    config: PartialConfig = None,
    rng: Any = None,
    **overrides
) -> SimulatedTimeSeries:
    """Advance a series by one step with a one-off simulator."""
    return SeriesSimulator(rng=rng).advance_series(series, config, **overrides)


def create_multiple_series(
    names: Sequence[str],
    configs: Optional[Sequence[Optional[Mapping[str, Any]]]] = None,
    rng: Any = None
) -> List[SimulatedTimeSeries]:
    """Create one series per name with a one-off simulator."""
    return SeriesSimulator(rng=rng).create_multiple_series(names, configs)
