"""
Pydantic Models for API Request/Response Validation

This module defines all the data models used by the API for:
- Request body validation
- Response serialization
- Documentation generation (OpenAPI/Swagger)

All models use Pydantic v2 syntax for validation and serialization.
"""

from datetime import datetime
from typing import Optional, List, Dict, Any
from enum import Enum
from pydantic import BaseModel, Field, model_validator

from core.config import RandomTrendMode, SeriesTrend, TrendDirection


# =========================================
# Enums
# =========================================

class PresetKind(str, Enum):
    """Available metric presets."""
    ENERGY_CONSUMPTION = "energy_consumption"
    RENEWABLE_GENERATION = "renewable_generation"
    GRID_EFFICIENCY = "grid_efficiency"
    NETWORK_LOAD = "network_load"
    COST_SAVINGS = "cost_savings"
    EQUIPMENT_TEMPERATURE = "equipment_temperature"


# =========================================
# Configuration Models
# =========================================

class SimulationConfigInput(BaseModel):
    """
    Partial simulation configuration.

    Every field is optional; fields left out keep their value from the
    base configuration (defaults on create, the series' own
    configuration on advance).
    """
    point_count: Optional[int] = Field(
        default=None,
        description="Points retained in the sliding window",
        ge=1, le=10000
    )
    min_value: Optional[float] = Field(
        default=None,
        description="Lower clamp bound for generated values"
    )
    max_value: Optional[float] = Field(
        default=None,
        description="Upper clamp bound for generated values"
    )
    volatility: Optional[float] = Field(
        default=None,
        description="Scale of per-step random noise",
        ge=0
    )
    trend: Optional[TrendDirection] = Field(
        default=None,
        description="Directional bias: up, down, stable or random"
    )
    trend_strength: Optional[float] = Field(
        default=None,
        description="Magnitude of the trend bias"
    )
    seasonality: Optional[bool] = Field(
        default=None,
        description="Add a periodic sinusoidal component"
    )
    seasonality_period: Optional[int] = Field(
        default=None,
        description="Steps per full seasonal cycle",
        ge=1
    )
    seasonality_amplitude: Optional[float] = Field(
        default=None,
        description="Peak deviation of the seasonal component",
        ge=0
    )
    anomaly_probability: Optional[float] = Field(
        default=None,
        description="Per-step chance of an injected spike",
        ge=0, le=1
    )
    anomaly_magnitude: Optional[float] = Field(
        default=None,
        description="Spike size as a multiple of volatility",
        ge=0
    )
    unit: Optional[str] = Field(default=None, max_length=20)
    color: Optional[str] = Field(default=None, max_length=32)
    update_frequency_ms: Optional[int] = Field(
        default=None,
        description="Live update cadence in milliseconds",
        ge=100, le=3_600_000
    )
    trend_threshold: Optional[float] = Field(
        default=None,
        description="Dead zone of the trend classifier (defaults to volatility)",
        ge=0
    )
    random_trend: Optional[RandomTrendMode] = Field(
        default=None,
        description="Redraw a random trend per step or once per series"
    )

    @model_validator(mode="after")
    def check_bounds(self):
        if self.min_value is not None and self.max_value is not None:
            if self.min_value > self.max_value:
                raise ValueError("min_value must not exceed max_value")
        return self

    def to_overrides(self) -> Dict[str, Any]:
        """Fields explicitly set by the client."""
        return self.model_dump(exclude_none=True)

    class Config:
        json_schema_extra = {
            "example": {
                "point_count": 24,
                "min_value": 0,
                "max_value": 100,
                "volatility": 5,
                "trend": "up",
                "trend_strength": 0.3,
                "seasonality": True,
                "seasonality_period": 24,
                "seasonality_amplitude": 10,
                "anomaly_probability": 0.05,
                "anomaly_magnitude": 2.5,
                "unit": "kWh"
            }
        }


# =========================================
# Series Request Models
# =========================================

class CreateSeriesRequest(BaseModel):
    """Request to create a simulated series."""
    name: str = Field(
        ...,
        description="Display name of the series",
        min_length=1,
        max_length=100
    )
    config: Optional[SimulationConfigInput] = Field(
        default=None,
        description="Configuration overrides (defaults are used for missing fields)"
    )


class BatchCreateRequest(BaseModel):
    """Request to create several series at once."""
    names: List[str] = Field(
        ...,
        description="Series names",
        min_length=1,
        max_length=50
    )
    configs: List[SimulationConfigInput] = Field(
        default_factory=list,
        description="Configuration per name, matched by position"
    )
    store: bool = Field(
        default=True,
        description="Keep the created series in the live store"
    )


class AdvanceRequest(BaseModel):
    """Request to advance a stored series."""
    config: Optional[SimulationConfigInput] = Field(
        default=None,
        description="Overrides applied over the series' own configuration"
    )
    steps: int = Field(
        default=1,
        description="Number of steps to advance",
        ge=1, le=1000
    )


# =========================================
# Series Response Models
# =========================================

class DataPointResponse(BaseModel):
    """A single simulated data point."""
    timestamp: datetime
    timestamp_ms: int
    value: float
    previous_value: float
    change: float
    change_percentage: float
    is_anomaly: bool = False


class SeriesResponse(BaseModel):
    """Complete simulated series."""
    id: str = Field(..., description="Series identifier")
    name: str = Field(..., description="Display name")
    color: str
    unit: str
    total: float = Field(..., description="Sum of values in the window")
    average: float = Field(..., description="Mean of values in the window")
    min: float = Field(..., description="Smallest value in the window")
    max: float = Field(..., description="Largest value in the window")
    trend: SeriesTrend = Field(..., description="Derived trend: up, down or stable")
    step_count: int = Field(..., description="Steps generated so far")
    data: List[DataPointResponse] = Field(default_factory=list)
    config: Dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_series(cls, series) -> "SeriesResponse":
        return cls(**series.to_dict(include_config=True))


class SeriesSummary(BaseModel):
    """Short description of a stored series."""
    id: str
    name: str
    unit: str
    color: str
    point_count: int
    latest_value: float
    latest_timestamp: datetime
    average: float
    min: float
    max: float
    trend: SeriesTrend

    @classmethod
    def from_series(cls, series) -> "SeriesSummary":
        return cls(
            id=series.id,
            name=series.name,
            unit=series.unit,
            color=series.color,
            point_count=len(series.data),
            latest_value=series.latest.value,
            latest_timestamp=series.latest.timestamp,
            average=series.average,
            min=series.min,
            max=series.max,
            trend=series.trend,
        )


class SeriesListResponse(BaseModel):
    """Response listing stored series."""
    count: int
    series: List[SeriesSummary]


class BatchCreateResponse(BaseModel):
    """Response from batch series creation."""
    count: int
    stored: bool
    series: List[SeriesResponse]


# =========================================
# Preset Models
# =========================================

class PresetInfo(BaseModel):
    """Information about a metric preset."""
    name: str
    type: str
    description: str
    config: Dict[str, Any]


class PresetListResponse(BaseModel):
    """Response listing available presets."""
    presets: List[PresetInfo]


# =========================================
# System Status Models
# =========================================

class SystemHealth(BaseModel):
    """System health check response."""
    status: str = Field(..., description="ok, degraded, or error")
    version: str = Field(..., description="API version")
    timestamp: datetime = Field(..., description="Current server time")
    live_feed: str = Field(..., description="running or stopped")
    series_count: int = Field(..., description="Series held in the live store")
    components: Dict[str, str] = Field(
        default_factory=dict,
        description="Status of system components"
    )


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: bool = True
    message: str
    detail: Optional[Any] = None
    status_code: int
    timestamp: datetime = Field(default_factory=datetime.utcnow)
