"""
Preset Endpoints

List the built-in metric presets and create series from them.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.models import PresetInfo, PresetKind, PresetListResponse, SeriesResponse
from api.store import get_simulator, get_store
from engine.live import SeriesStore
from engine.presets import MetricPreset, PresetLibrary, PresetType
from engine.series import SeriesSimulator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/presets", tags=["Presets"])


def preset_kind_to_type(kind: PresetKind) -> PresetType:
    """Convert API PresetKind to engine PresetType."""
    mapping = {
        PresetKind.ENERGY_CONSUMPTION: PresetType.ENERGY_CONSUMPTION,
        PresetKind.RENEWABLE_GENERATION: PresetType.RENEWABLE_GENERATION,
        PresetKind.GRID_EFFICIENCY: PresetType.GRID_EFFICIENCY,
        PresetKind.NETWORK_LOAD: PresetType.NETWORK_LOAD,
        PresetKind.COST_SAVINGS: PresetType.COST_SAVINGS,
        PresetKind.EQUIPMENT_TEMPERATURE: PresetType.EQUIPMENT_TEMPERATURE,
    }
    return mapping[kind]


def _preset_info(preset: MetricPreset) -> PresetInfo:
    return PresetInfo(**preset.to_dict())


@router.get(
    "",
    response_model=PresetListResponse,
    summary="List available presets"
)
async def list_presets():
    """List all metric presets."""
    return PresetListResponse(
        presets=[_preset_info(preset) for preset in PresetLibrary.get_all_presets()]
    )


@router.get(
    "/{preset_kind}",
    response_model=PresetInfo,
    summary="Get preset details"
)
async def get_preset(preset_kind: PresetKind):
    """Get the configuration of one preset."""
    preset = PresetLibrary.get_preset_by_type(preset_kind_to_type(preset_kind))

    if not preset:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Preset not found: {preset_kind}"
        )

    return _preset_info(preset)


@router.post(
    "/{preset_kind}/series",
    response_model=SeriesResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a series from a preset",
    description="""
    Create a series using a preset configuration.

    **Options:**
    - `name`: Series name (defaults to the preset name)
    - `point_count`: Window size override
    - `store`: Keep the series in the live store (default: true)
    """
)
async def create_preset_series(
    preset_kind: PresetKind,
    name: Optional[str] = Query(default=None, min_length=1, max_length=100),
    point_count: Optional[int] = Query(default=None, ge=1, le=10000),
    store_series: bool = Query(default=True, alias="store"),
    store: SeriesStore = Depends(get_store),
    simulator: SeriesSimulator = Depends(get_simulator)
):
    """Create a series from a preset."""
    overrides = {"point_count": point_count} if point_count is not None else {}
    preset = PresetLibrary.get_preset_by_type(preset_kind_to_type(preset_kind), **overrides)

    if not preset:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Preset not found: {preset_kind}"
        )

    series = simulator.create_series(name or preset.name, preset.config)
    if store_series:
        store.add(series)

    logger.info(f"Created series '{series.name}' from preset {preset_kind.value}")
    return SeriesResponse.from_series(series)
