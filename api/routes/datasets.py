"""
Chart Dataset Endpoints

Random datasets for pie, heatmap, network, radar, bubble, waterfall and
sankey charts. Pass `seed` to get the same dataset on every call.
"""

import random
from typing import List, Optional

from fastapi import APIRouter, Query

from engine import datasets

router = APIRouter(prefix="/datasets", tags=["Chart Datasets"])

DEFAULT_CATEGORIES = ["Solar", "Wind", "Hydro", "Grid", "Battery"]


def _rng(seed: Optional[int]) -> random.Random:
    return random.Random(seed)


@router.get("/pie", summary="Pie/donut chart data")
async def pie_data(
    categories: List[str] = Query(default=DEFAULT_CATEGORIES),
    total: int = Query(default=100, ge=0, le=1_000_000),
    seed: Optional[int] = Query(default=None)
):
    return datasets.generate_pie_chart_data(categories, total, rng=_rng(seed))


@router.get("/heatmap", summary="Heatmap data")
async def heatmap_data(
    rows: int = Query(default=7, ge=0, le=100),
    columns: int = Query(default=24, ge=0, le=100),
    min_value: float = Query(default=0.0),
    max_value: float = Query(default=100.0),
    seed: Optional[int] = Query(default=None)
):
    return datasets.generate_heatmap_data(rows, columns, min_value, max_value, rng=_rng(seed))


@router.get("/network", summary="Force-directed network data")
async def network_data(
    node_count: int = Query(default=10, ge=0, le=200),
    density: float = Query(default=0.2, ge=0, le=1),
    seed: Optional[int] = Query(default=None)
):
    return datasets.generate_network_data(node_count, density, rng=_rng(seed))


@router.get("/radar", summary="Radar chart data")
async def radar_data(
    categories: List[str] = Query(default=DEFAULT_CATEGORIES),
    series_count: int = Query(default=1, ge=0, le=20),
    seed: Optional[int] = Query(default=None)
):
    return datasets.generate_radar_chart_data(categories, series_count, rng=_rng(seed))


@router.get("/bubble", summary="Bubble chart data")
async def bubble_data(
    point_count: int = Query(default=20, ge=0, le=500),
    seed: Optional[int] = Query(default=None)
):
    return datasets.generate_bubble_chart_data(point_count, rng=_rng(seed))


@router.get("/waterfall", summary="Waterfall chart data")
async def waterfall_data(
    categories: List[str] = Query(default=DEFAULT_CATEGORIES),
    seed: Optional[int] = Query(default=None)
):
    return datasets.generate_waterfall_chart_data(categories, rng=_rng(seed))


@router.get("/sankey", summary="Sankey diagram data")
async def sankey_data(
    node_count: int = Query(default=6, ge=2, le=100),
    link_count: int = Query(default=8, ge=0, le=500),
    seed: Optional[int] = Query(default=None)
):
    return datasets.generate_sankey_data(node_count, link_count, rng=_rng(seed))
