"""
API Module - FastAPI Backend

This module provides the REST API for the Metric Stream Simulator.
It lets dashboards create simulated series, advance them, and receive
live updates from an in-memory store.

Key Components:
- main.py: FastAPI application and root endpoints
- models.py: Pydantic schemas for request/response validation
- store.py: Shared simulator, in-memory series store and live feed
- routes/: API endpoint implementations

Endpoints:
- POST /api/v1/series: Create a series
- POST /api/v1/series/batch: Create multiple series
- POST /api/v1/series/{series_id}/advance: Advance a series
- GET /api/v1/presets: List metric presets
- GET /api/v1/datasets/{chart}: Random chart datasets
"""

__version__ = "0.1.0"
