"""
API Routes Module

This module contains all API endpoint implementations organized by function:
- series.py: Create, advance, query and delete simulated series
- presets.py: Built-in metric presets
- datasets.py: Random chart datasets

All routers are combined in main.py to create the complete API.
"""

from .series import router as series_router
from .presets import router as presets_router
from .datasets import router as datasets_router

__all__ = [
    "series_router",
    "presets_router",
    "datasets_router",
]
