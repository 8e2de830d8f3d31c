"""
Simulation Configuration

Defines the immutable configuration for a simulated metric stream and
the single place where its default values live.

A configuration is fully validated when it is constructed. Callers
usually start from DEFAULT_CONFIG (or a preset) and override a few
fields with a plain mapping:

    config = resolve_config({"min_value": 10, "max_value": 50})

Constants:
    SERIES_WINDOW_MS: Time span covered by a freshly created series
    UPDATE_STEP_FRACTION: Trend step fraction used when advancing a series
    initial_step_fraction(): Trend step fraction used when creating a series
    CHANGE_PERCENT_EPSILON: |previous value| below which change percentage is 0
"""

import math
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from .errors import InvalidConfigurationError


# One hour, oldest point first
SERIES_WINDOW_MS: int = 3_600_000

# Incremental updates move the trend by a fixed slice of the range
UPDATE_STEP_FRACTION: float = 0.05

CHANGE_PERCENT_EPSILON: float = 1e-9


def initial_step_fraction(point_count: int) -> float:
    """Trend step fraction used while building a series of point_count points."""
    return 1.0 / point_count


def _coerce_enum(enum_cls, field_name: str, value):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_cls)
        raise InvalidConfigurationError(
            f"{field_name} must be one of: {allowed}", field=field_name, value=value
        ) from exc


def _require_finite(field_name: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidConfigurationError(
            f"{field_name} must be a finite number", field=field_name, value=value
        )


class TrendDirection(str, Enum):
    """Generative directional bias applied on every step."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"
    RANDOM = "random"


class SeriesTrend(str, Enum):
    """Derived classification of a series' net movement."""
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


class RandomTrendMode(str, Enum):
    """
    How the RANDOM trend direction draws its bias.

    PER_STEP redraws the bias on every step. PER_SERIES draws it once when
    the series is created and reuses it for every later advance.
    """
    PER_STEP = "per_step"
    PER_SERIES = "per_series"


@dataclass(frozen=True)
class SimulationConfig:
    """
    Configuration for one simulated metric stream.

    Attributes:
        point_count: Points retained in the sliding window
        min_value: Lower clamp bound for every generated value
        max_value: Upper clamp bound for every generated value
        volatility: Scale of per-step uniform noise
        trend: Directional bias (up, down, stable, random)
        trend_strength: Magnitude of the trend bias
        seasonality: Whether a sinusoidal component is added
        seasonality_period: Steps per full seasonal cycle
        seasonality_amplitude: Peak deviation of the sinusoid
        anomaly_probability: Per-step chance of an injected spike
        anomaly_magnitude: Spike size as a multiple of volatility
        unit: Display unit (opaque to the engine)
        color: Display colour (opaque to the engine)
        name: Display name (opaque to the engine)
        update_frequency_ms: Cadence of live updates for this stream
        trend_threshold: Dead zone of the trend classifier (None = volatility)
        random_trend: Whether a random trend is redrawn per step or per series
    """
    point_count: int = 24
    min_value: float = 0.0
    max_value: float = 100.0
    volatility: float = 5.0
    trend: TrendDirection = TrendDirection.RANDOM
    trend_strength: float = 0.2
    seasonality: bool = False
    seasonality_period: int = 24
    seasonality_amplitude: float = 10.0
    anomaly_probability: float = 0.05
    anomaly_magnitude: float = 2.5
    unit: str = ""
    color: str = "#3b82f6"
    name: Optional[str] = None
    update_frequency_ms: int = 5000
    trend_threshold: Optional[float] = None
    random_trend: RandomTrendMode = RandomTrendMode.PER_STEP

    def __post_init__(self):
        # Accept plain strings for the enum fields
        object.__setattr__(self, "trend", _coerce_enum(TrendDirection, "trend", self.trend))
        object.__setattr__(
            self, "random_trend",
            _coerce_enum(RandomTrendMode, "random_trend", self.random_trend)
        )
        self._validate()

    @property
    def value_range(self) -> float:
        """Width of the clamp range (0 for a degenerate range)."""
        return self.max_value - self.min_value

    @property
    def effective_trend_threshold(self) -> float:
        """Dead zone used when classifying the derived trend."""
        if self.trend_threshold is None:
            return self.volatility
        return self.trend_threshold

    def with_overrides(self, overrides: Optional[Mapping[str, Any]] = None, **kwargs) -> "SimulationConfig":
        """Return a copy with the given fields replaced (validated)."""
        changes: Dict[str, Any] = dict(overrides or {})
        changes.update(kwargs)
        unknown = sorted(set(changes) - CONFIG_FIELDS)
        if unknown:
            raise InvalidConfigurationError(
                f"Unknown configuration field(s): {', '.join(unknown)}",
                field=unknown[0],
                value=changes[unknown[0]]
            )
        if not changes:
            return self
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["trend"] = self.trend.value
        data["random_trend"] = self.random_trend.value
        return data

    def _validate(self) -> None:
        if isinstance(self.point_count, bool) or not isinstance(self.point_count, int):
            raise InvalidConfigurationError(
                "point_count must be an integer", field="point_count", value=self.point_count
            )
        if self.point_count < 1:
            raise InvalidConfigurationError(
                "point_count must be at least 1", field="point_count", value=self.point_count
            )

        for name in ("min_value", "max_value", "volatility", "trend_strength",
                     "seasonality_amplitude", "anomaly_probability", "anomaly_magnitude"):
            _require_finite(name, getattr(self, name))

        if self.min_value > self.max_value:
            raise InvalidConfigurationError(
                f"min_value ({self.min_value}) must not exceed max_value ({self.max_value})",
                field="min_value",
                value=self.min_value
            )

        for name in ("volatility", "seasonality_amplitude", "anomaly_magnitude"):
            if getattr(self, name) < 0:
                raise InvalidConfigurationError(
                    f"{name} must be non-negative", field=name, value=getattr(self, name)
                )

        if not 0.0 <= self.anomaly_probability <= 1.0:
            raise InvalidConfigurationError(
                "anomaly_probability must be within [0, 1]",
                field="anomaly_probability",
                value=self.anomaly_probability
            )

        for name in ("seasonality_period", "update_frequency_ms"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise InvalidConfigurationError(
                    f"{name} must be a positive integer", field=name, value=value
                )

        if self.trend_threshold is not None:
            _require_finite("trend_threshold", self.trend_threshold)
            if self.trend_threshold < 0:
                raise InvalidConfigurationError(
                    "trend_threshold must be non-negative",
                    field="trend_threshold",
                    value=self.trend_threshold
                )


CONFIG_FIELDS = frozenset(f.name for f in fields(SimulationConfig))

DEFAULT_CONFIG = SimulationConfig()


PartialConfig = Union[SimulationConfig, Mapping[str, Any], None]


def resolve_config(
    partial: PartialConfig = None,
    base: Optional[SimulationConfig] = None,
    **overrides
) -> SimulationConfig:
    """
    Merge a partial configuration over a base configuration.

    Args:
        partial: A complete SimulationConfig (used as-is), a mapping of
            field overrides, or None
        base: Configuration to merge onto (DEFAULT_CONFIG if None)
        **overrides: Extra field overrides applied last

    Returns:
        A validated SimulationConfig

    Raises:
        InvalidConfigurationError: On unknown fields or invalid values
    """
    if isinstance(partial, SimulationConfig):
        config = partial
    else:
        config = (base or DEFAULT_CONFIG).with_overrides(partial)
    return config.with_overrides(overrides)
