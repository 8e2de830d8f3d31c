"""
Series Store and Simulator Wiring

This module holds the process-wide simulator, the in-memory series
store and the live feed used by the FastAPI application, and exposes
them as FastAPI dependencies.

Nothing is persisted: restarting the service starts from an empty store.
"""

import os
import logging
from typing import Optional, Dict, Any

from engine.live import LiveSeriesFeed, SeriesStore
from engine.series import SeriesSimulator

logger = logging.getLogger(__name__)

# =========================================
# Service Configuration
# =========================================

def get_simulation_seed() -> Optional[int]:
    """Get the optional simulator seed from environment."""
    seed = os.getenv("SIMULATION_SEED")
    if seed is None or seed == "":
        return None
    return int(seed)


def live_updates_enabled() -> bool:
    return os.getenv("LIVE_UPDATES", "true").lower() == "true"


def get_poll_interval() -> float:
    return float(os.getenv("LIVE_POLL_SECONDS", "1.0"))


simulator = SeriesSimulator(random_seed=get_simulation_seed())
series_store = SeriesStore()
live_feed = LiveSeriesFeed(series_store, simulator, poll_interval=get_poll_interval())


# =========================================
# Dependencies for FastAPI
# =========================================

def get_store() -> SeriesStore:
    """
    FastAPI dependency returning the series store.

    Usage:
        @app.get("/endpoint")
        def endpoint(store: SeriesStore = Depends(get_store)):
            ...
    """
    return series_store


def get_simulator() -> SeriesSimulator:
    """FastAPI dependency returning the shared simulator."""
    return simulator


# =========================================
# Health Check
# =========================================

def check_store_health() -> Dict[str, Any]:
    """
    Report the state of the store and live feed.

    Returns:
        Dictionary with health status information
    """
    return {
        "status": "healthy",
        "series_count": len(series_store),
        "live_updates": live_updates_enabled(),
        "live_feed": "running" if live_feed.running else "stopped",
        "poll_interval": live_feed.poll_interval,
    }
