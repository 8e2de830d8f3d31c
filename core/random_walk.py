"""
Bounded Random-Walk Step

Produces the next value of a simulated metric from its current value.
Each step is the sum of four independent terms, clamped to the
configured bounds:

    next = clamp(current + trend + seasonality + noise + anomaly)

Where:
    trend       = trend_factor × (max_value - min_value) × step_fraction
    seasonality = sin(2π × phase) × seasonality_amplitude   (if enabled)
    noise       = U(-volatility, +volatility)
    anomaly     = U(-1, 1) × anomaly_magnitude × volatility (with p = anomaly_probability)

The step has no memory beyond the value carried forward. Randomness
comes from an injected source exposing random() -> float in [0, 1),
such as random.Random. A missing or broken source raises
FatalConfigurationError; it is never replaced with fixed values.
"""

import math
import random
from dataclasses import dataclass
from typing import Any, Optional

from .config import SimulationConfig, TrendDirection
from .errors import FatalConfigurationError


@dataclass(frozen=True)
class StepComponents:
    """
    Breakdown of a single random-walk step.

    Attributes:
        previous_value: Value the step started from
        trend: Trend contribution
        seasonality: Seasonal contribution
        noise: Volatility contribution
        anomaly: Anomaly contribution (0 when no spike fired)
        is_anomaly: Whether the anomaly trial fired
        value: Final value after clamping
    """
    previous_value: float
    trend: float
    seasonality: float
    noise: float
    anomaly: float
    is_anomaly: bool
    value: float

    @property
    def raw_value(self) -> float:
        """Sum of all terms before clamping."""
        return self.previous_value + self.trend + self.seasonality + self.noise + self.anomaly

    @property
    def was_clamped(self) -> bool:
        return self.raw_value != self.value


def resolve_random_source(rng: Any = None) -> Any:
    """
    Return a usable random source.

    Args:
        rng: Object exposing a callable random() method, or None for a
            fresh random.Random instance

    Raises:
        FatalConfigurationError: If rng has no callable random() method
    """
    if rng is None:
        return random.Random()
    if not callable(getattr(rng, "random", None)):
        raise FatalConfigurationError(
            f"Random source {type(rng).__name__} does not provide a random() method"
        )
    return rng


def draw_unit(rng: Any) -> float:
    """Draw one value in [0, 1) from the source, failing fast on misbehaviour."""
    try:
        value = rng.random()
    except Exception as exc:
        raise FatalConfigurationError(f"Random source failed: {exc}") from exc

    if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value < 1.0:
        raise FatalConfigurationError(
            f"Random source returned {value!r}, expected a float in [0, 1)"
        )
    return float(value)


def draw_uniform(rng: Any, low: float, high: float) -> float:
    """Uniform draw in [low, high)."""
    return low + (high - low) * draw_unit(rng)


def draw_symmetric(rng: Any, scale: float) -> float:
    """Uniform draw in [-scale, +scale)."""
    return (draw_unit(rng) - 0.5) * 2.0 * scale


def draw_trend_factor(config: SimulationConfig, rng: Any) -> float:
    """
    Resolve the directional bias for one step.

    UP and DOWN give ±trend_strength, STABLE gives 0, and RANDOM draws
    uniformly from [-trend_strength/2, +trend_strength/2].
    """
    if config.trend == TrendDirection.UP:
        return config.trend_strength
    if config.trend == TrendDirection.DOWN:
        return -config.trend_strength
    if config.trend == TrendDirection.RANDOM:
        return draw_symmetric(rng, config.trend_strength / 2.0)
    return 0.0


def seasonal_phase(step_index: int, period: int) -> float:
    """Position of a step within its seasonal cycle, in [0, 1)."""
    return (step_index % period) / period


def seasonality_effect(config: SimulationConfig, phase: float) -> float:
    """Seasonal contribution at the given phase (0 when disabled)."""
    if not config.seasonality:
        return 0.0
    return math.sin(2.0 * math.pi * phase) * config.seasonality_amplitude


def clamp(value: float, min_value: float, max_value: float) -> float:
    return max(min_value, min(max_value, value))


def compute_step(
    current_value: float,
    config: SimulationConfig,
    phase: float,
    step_fraction: float,
    rng: Any,
    trend_factor: Optional[float] = None
) -> StepComponents:
    """
    Compute one random-walk step with its full breakdown.

    Args:
        current_value: Value to step from
        config: Simulation configuration
        phase: Seasonal phase of this step, in [0, 1)
        step_fraction: Share of the value range one unit of trend moves per step
        rng: Random source (see resolve_random_source)
        trend_factor: Fixed trend bias; drawn from config when None

    Returns:
        StepComponents with each term and the clamped value
    """
    if trend_factor is None:
        trend_factor = draw_trend_factor(config, rng)

    trend = trend_factor * config.value_range * step_fraction
    seasonal = seasonality_effect(config, phase)
    noise = draw_symmetric(rng, config.volatility)

    is_anomaly = draw_unit(rng) < config.anomaly_probability
    anomaly = 0.0
    if is_anomaly:
        anomaly = draw_symmetric(rng, config.anomaly_magnitude * config.volatility)

    raw = current_value + trend + seasonal + noise + anomaly
    value = clamp(raw, config.min_value, config.max_value)

    return StepComponents(
        previous_value=current_value,
        trend=trend,
        seasonality=seasonal,
        noise=noise,
        anomaly=anomaly,
        is_anomaly=is_anomaly,
        value=value,
    )


def next_value(
    current_value: float,
    config: SimulationConfig,
    phase: float,
    step_fraction: float,
    rng: Any,
    trend_factor: Optional[float] = None
) -> float:
    """Convenience wrapper returning only the clamped next value."""
    return compute_step(current_value, config, phase, step_fraction, rng, trend_factor).value
