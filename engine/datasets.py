"""
Chart Dataset Generators

Random datasets for the non-time-series charts of a dashboard:
pie/donut, heatmap, network graph, radar, bubble, waterfall and
sankey. Each generator returns plain lists/dicts ready for JSON.

All generators accept an optional random.Random for reproducibility.
Node and bubble labels come from Faker company names.
"""

import math
import random
from typing import Any, Dict, List, Optional, Sequence

from faker import Faker

from core.errors import InvalidConfigurationError

PALETTE: List[str] = [
    "#10b981",  # emerald
    "#3b82f6",  # blue
    "#8b5cf6",  # violet
    "#ec4899",  # pink
    "#f59e0b",  # amber
    "#06b6d4",  # cyan
    "#ef4444",  # red
    "#84cc16",  # lime
    "#6366f1",  # indigo
]


def _rng(rng: Optional[random.Random]) -> random.Random:
    return rng or random.Random()


def _faker(rng: random.Random) -> Faker:
    fake = Faker()
    fake.seed_instance(rng.getrandbits(32))
    return fake


def _require_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise InvalidConfigurationError(f"{name} must be non-negative", field=name, value=value)


def _require_finite(name: str, value: float) -> None:
    if not math.isfinite(value):
        raise InvalidConfigurationError(f"{name} must be a finite number", field=name, value=value)


def random_color(rng: Optional[random.Random] = None) -> str:
    """Pick a colour from the dashboard palette."""
    return _rng(rng).choice(PALETTE)


def generate_pie_chart_data(
    categories: Sequence[str],
    total: int = 100,
    rng: Optional[random.Random] = None
) -> List[Dict[str, Any]]:
    """
    Split a total into integer slices, one per category.

    Each slice takes a random share (up to 70%) of what is left; the
    last category takes the remainder, so slices always sum to total.
    """
    _require_non_negative("total", total)
    rng = _rng(rng)

    remaining = total
    result = []
    for index, category in enumerate(categories):
        is_last = index == len(categories) - 1
        value = remaining if is_last else int(rng.random() * remaining * 0.7)
        remaining -= value
        result.append({"name": category, "value": value, "color": random_color(rng)})

    return result


def generate_heatmap_data(
    rows: int,
    columns: int,
    min_value: float = 0.0,
    max_value: float = 100.0,
    rng: Optional[random.Random] = None
) -> List[Dict[str, Any]]:
    """Grid of cells (row-major) with values rounded to 0.01 within bounds."""
    _require_non_negative("rows", rows)
    _require_non_negative("columns", columns)
    _require_finite("min_value", min_value)
    _require_finite("max_value", max_value)
    if min_value > max_value:
        raise InvalidConfigurationError(
            "min_value must not exceed max_value", field="min_value", value=min_value
        )
    rng = _rng(rng)

    result = []
    for y in range(rows):
        for x in range(columns):
            value = round(rng.uniform(min_value, max_value), 2)
            result.append({"x": x, "y": y, "value": max(min_value, min(max_value, value))})
    return result


def generate_network_data(
    node_count: int,
    density: float = 0.2,
    rng: Optional[random.Random] = None
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Random graph for force-directed layouts.

    Every node gets up to node_count × density outgoing links to random
    targets; self links are skipped.
    """
    _require_non_negative("node_count", node_count)
    if not 0.0 <= density <= 1.0:
        raise InvalidConfigurationError("density must be within [0, 1]", field="density", value=density)
    rng = _rng(rng)
    fake = _faker(rng)

    nodes = [
        {
            "id": f"node-{i}",
            "name": fake.company(),
            "group": rng.randrange(5),
            "value": rng.uniform(10, 100),
        }
        for i in range(node_count)
    ]

    links = []
    for i in range(node_count):
        link_count = int(rng.random() * node_count * density)
        for _ in range(link_count):
            target = rng.randrange(node_count)
            if target != i:
                links.append({
                    "source": f"node-{i}",
                    "target": f"node-{target}",
                    "value": rng.uniform(1, 10),
                })

    return {"nodes": nodes, "links": links}


def generate_radar_chart_data(
    categories: Sequence[str],
    series_count: int = 1,
    rng: Optional[random.Random] = None
) -> List[Dict[str, Any]]:
    """One radar series per count, each scoring every category 20-100."""
    _require_non_negative("series_count", series_count)
    rng = _rng(rng)

    return [
        {
            "name": f"Series {i + 1}",
            "data": [
                {"category": category, "value": round(rng.uniform(20, 100), 1)}
                for category in categories
            ],
            "color": random_color(rng),
        }
        for i in range(series_count)
    ]


def generate_bubble_chart_data(
    point_count: int,
    rng: Optional[random.Random] = None
) -> List[Dict[str, Any]]:
    """Bubbles with x/y in 0-100 and size z in 5-50."""
    _require_non_negative("point_count", point_count)
    rng = _rng(rng)
    fake = _faker(rng)

    return [
        {
            "x": round(rng.uniform(0, 100), 1),
            "y": round(rng.uniform(0, 100), 1),
            "z": round(rng.uniform(5, 50), 1),
            "name": fake.company(),
            "color": random_color(rng),
        }
        for _ in range(point_count)
    ]


def generate_waterfall_chart_data(
    categories: Sequence[str],
    rng: Optional[random.Random] = None
) -> List[Dict[str, Any]]:
    """
    Waterfall steps between a Start and an End total.

    End equals Start plus the sum of all category changes.
    """
    rng = _rng(rng)

    start = round(rng.uniform(1000, 5000), 2)
    running_total = start
    result: List[Dict[str, Any]] = [{"name": "Start", "value": start, "is_total": True}]

    for category in categories:
        change = round(rng.uniform(-1000, 1000), 2)
        running_total += change
        result.append({"name": category, "value": change, "is_total": False})

    result.append({"name": "End", "value": round(running_total, 2), "is_total": True})
    return result


def generate_sankey_data(
    node_count: int,
    link_count: int,
    rng: Optional[random.Random] = None
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Acyclic flow graph: every link goes from a lower to a higher node index.
    """
    if node_count < 2:
        raise InvalidConfigurationError(
            "sankey data needs at least 2 nodes", field="node_count", value=node_count
        )
    _require_non_negative("link_count", link_count)
    rng = _rng(rng)
    fake = _faker(rng)

    nodes = [{"id": f"node-{i}", "name": fake.company()} for i in range(node_count)]

    links = []
    for _ in range(link_count):
        source = rng.randrange(node_count - 1)
        target = rng.randrange(source + 1, node_count)
        links.append({
            "source": f"node-{source}",
            "target": f"node-{target}",
            "value": rng.uniform(100, 1000),
        })

    return {"nodes": nodes, "links": links}
