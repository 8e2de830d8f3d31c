"""
Series Endpoints

This module exposes the simulation engine over HTTP:
- Create a series (stored in the live store) or preview one (not stored)
- Create several series at once
- List, fetch and delete stored series
- Advance a stored series by one or more steps

Stored series are also advanced in the background by the live feed on
their own update_frequency_ms cadence.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from api.models import (
    AdvanceRequest,
    BatchCreateRequest,
    BatchCreateResponse,
    CreateSeriesRequest,
    SeriesListResponse,
    SeriesResponse,
    SeriesSummary,
)
from api.store import get_simulator, get_store
from core.errors import SeriesNotFoundError
from engine.live import SeriesStore
from engine.series import SeriesSimulator

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/series", tags=["Series"])


def _lookup(store: SeriesStore, series_id: str):
    try:
        return store.get(series_id)
    except SeriesNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Series not found: {series_id}"
        )


# =========================================
# Creation Endpoints
# =========================================

@router.post(
    "",
    response_model=SeriesResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a series",
    description="""
    Generate a full series from a (partial) configuration and keep it in
    the live store. Missing configuration fields use the defaults.
    """
)
async def create_series(
    request: CreateSeriesRequest,
    store: SeriesStore = Depends(get_store),
    simulator: SeriesSimulator = Depends(get_simulator)
):
    """Create and store a series."""
    overrides = request.config.to_overrides() if request.config else None
    series = simulator.create_series(request.name, overrides)
    store.add(series)

    logger.info(f"Created series '{series.name}' ({series.id}) with {len(series.data)} points")
    return SeriesResponse.from_series(series)


@router.post(
    "/preview",
    response_model=SeriesResponse,
    summary="Preview a series",
    description="Generate a series without storing it."
)
async def preview_series(
    request: CreateSeriesRequest,
    simulator: SeriesSimulator = Depends(get_simulator)
):
    """Generate a series without keeping it."""
    overrides = request.config.to_overrides() if request.config else None
    return SeriesResponse.from_series(simulator.create_series(request.name, overrides))


@router.post(
    "/batch",
    response_model=BatchCreateResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create multiple series",
    description="""
    Create one series per name. Configurations are matched to names by
    position; names without a configuration use the defaults.
    """
)
async def create_multiple_series(
    request: BatchCreateRequest,
    store: SeriesStore = Depends(get_store),
    simulator: SeriesSimulator = Depends(get_simulator)
):
    """Create several series."""
    configs = [config.to_overrides() for config in request.configs]
    created = simulator.create_multiple_series(request.names, configs)

    if request.store:
        for series in created:
            store.add(series)

    logger.info(f"Created {len(created)} series (stored: {request.store})")
    return BatchCreateResponse(
        count=len(created),
        stored=request.store,
        series=[SeriesResponse.from_series(series) for series in created]
    )


# =========================================
# Query Endpoints
# =========================================

@router.get(
    "",
    response_model=SeriesListResponse,
    summary="List stored series"
)
async def list_series(store: SeriesStore = Depends(get_store)):
    """List all series in the live store."""
    stored = store.list()
    return SeriesListResponse(
        count=len(stored),
        series=[SeriesSummary.from_series(series) for series in stored]
    )


@router.get(
    "/{series_id}",
    response_model=SeriesResponse,
    summary="Get a stored series"
)
async def get_series(series_id: str, store: SeriesStore = Depends(get_store)):
    """Get the current state of a stored series."""
    return SeriesResponse.from_series(_lookup(store, series_id))


# =========================================
# Update Endpoints
# =========================================

@router.post(
    "/{series_id}/advance",
    response_model=SeriesResponse,
    summary="Advance a series",
    description="""
    Advance a stored series by one or more steps. Each step drops the
    oldest point and appends a new one; statistics are recomputed.

    Configuration overrides are merged over the series' own
    configuration and kept for later advances. The window size
    (point_count) cannot change.
    """
)
async def advance_series(
    series_id: str,
    request: Optional[AdvanceRequest] = None,
    store: SeriesStore = Depends(get_store),
    simulator: SeriesSimulator = Depends(get_simulator)
):
    """Advance a stored series."""
    request = request or AdvanceRequest()
    series = _lookup(store, series_id)
    overrides = request.config.to_overrides() if request.config else None

    for _ in range(request.steps):
        series = simulator.advance_series(series, overrides)

    try:
        store.replace(series)
    except SeriesNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Series was deleted while advancing: {series_id}"
        )

    return SeriesResponse.from_series(series)


@router.delete(
    "/{series_id}",
    summary="Delete a stored series"
)
async def delete_series(series_id: str, store: SeriesStore = Depends(get_store)):
    """Remove a series from the live store."""
    try:
        removed = store.remove(series_id)
    except SeriesNotFoundError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Series not found: {series_id}"
        )

    logger.info(f"Deleted series '{removed.name}' ({removed.id})")
    return {"deleted": True, "id": removed.id, "name": removed.name}
