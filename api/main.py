"""
Metric Stream Simulator - FastAPI Application

This is the main entry point for the FastAPI backend.
It combines all route modules and provides system-wide endpoints.

Features:
- Simulated metric series with trend, seasonality, noise and anomalies
- Sliding-window advancing with recomputed statistics
- Live in-memory updates on a per-series cadence
- Metric presets and random chart datasets
- Interactive API documentation (Swagger/OpenAPI)

Access Points:
- API Root: http://localhost:8000
- Swagger Docs: http://localhost:8000/docs
- ReDoc: http://localhost:8000/redoc
- OpenAPI JSON: http://localhost:8000/openapi.json
"""

import os
import logging
from datetime import datetime
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.store import check_store_health, live_feed, live_updates_enabled
from api.routes import series_router, presets_router, datasets_router
from api.models import SystemHealth
from core.errors import FatalConfigurationError, InvalidConfigurationError

# =========================================
# Logging Configuration
# =========================================

logging.basicConfig(
    level=getattr(logging, os.getenv("LOG_LEVEL", "INFO")),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

API_VERSION = "0.1.0"


# =========================================
# Application Lifespan
# =========================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Starts the live feed on startup and stops it on shutdown.
    """
    logger.info("Starting Metric Stream Simulator API...")

    if live_updates_enabled():
        live_feed.start()
        logger.info(f"Live updates enabled (poll interval {live_feed.poll_interval}s)")
    else:
        logger.info("Live updates disabled")

    logger.info("API documentation: http://localhost:8000/docs")

    yield  # Application runs here

    logger.info("Shutting down Metric Stream Simulator API...")
    await live_feed.stop()


# =========================================
# FastAPI Application
# =========================================

app = FastAPI(
    title="Metric Stream Simulator API",
    description="""
## Synthetic Metric Streams for Dashboards

This API generates plausible-looking metric streams (energy consumption,
efficiency, network load, ...) and keeps them moving like live telemetry.

### Core Concepts

#### Series
A fixed-length window of timestamped values. Each advance drops the oldest
point and appends a new one; total, average, min, max and trend are
recomputed every time.

#### Step
Every new value is the previous value plus a trend term, an optional
seasonal term, uniform noise and an occasional anomaly spike, clamped to
`[min_value, max_value]`.

### Quick Start

1. **Create a series**: `POST /api/v1/series`
2. **Advance it**: `POST /api/v1/series/{series_id}/advance`
3. **Use a preset**: `POST /api/v1/presets/energy_consumption/series`
4. **Watch it move**: `GET /api/v1/series/{series_id}`
    """,
    version=API_VERSION,
    license_info={
        "name": "MIT",
        "url": "https://opensource.org/licenses/MIT"
    },
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)


# =========================================
# CORS Middleware
# =========================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",  # Dashboard dev server
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
        "*"  # Allow all for development - restrict in production
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =========================================
# Exception Handlers
# =========================================

def _error_body(status_code: int, message, detail=None) -> dict:
    return {
        "error": True,
        "message": message,
        "detail": detail,
        "status_code": status_code,
        "timestamp": datetime.utcnow().isoformat()
    }


@app.exception_handler(HTTPException)
async def http_exception_handler(request, exc):
    """Handle HTTP exceptions with consistent format."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, exc.detail)
    )


@app.exception_handler(InvalidConfigurationError)
async def invalid_configuration_handler(request, exc):
    """Reject invalid simulation configurations."""
    logger.warning(f"Invalid configuration: {exc}")
    code = status.HTTP_422_UNPROCESSABLE_ENTITY
    return JSONResponse(status_code=code, content=_error_body(code, str(exc), exc.to_dict()))


@app.exception_handler(FatalConfigurationError)
async def fatal_configuration_handler(request, exc):
    """Random source failures are server errors."""
    logger.error(f"Fatal configuration error: {exc}")
    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(status_code=code, content=_error_body(code, str(exc)))


@app.exception_handler(Exception)
async def general_exception_handler(request, exc):
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled exception: {exc}")
    code = status.HTTP_500_INTERNAL_SERVER_ERROR
    return JSONResponse(
        status_code=code,
        content=_error_body(
            code,
            "An unexpected error occurred",
            str(exc) if os.getenv("DEBUG", "false").lower() == "true" else None
        )
    )


# =========================================
# Include Routers
# =========================================

# API v1 routes
app.include_router(series_router, prefix="/api/v1")
app.include_router(presets_router, prefix="/api/v1")
app.include_router(datasets_router, prefix="/api/v1")


# =========================================
# Root Endpoints
# =========================================

@app.get(
    "/",
    tags=["System"],
    summary="API Root",
    description="Welcome endpoint with API information"
)
async def root():
    """API root endpoint."""
    return {
        "name": "Metric Stream Simulator API",
        "version": API_VERSION,
        "description": "Synthetic metric streams for dashboards",
        "documentation": "/docs",
        "health_check": "/health",
        "api_base": "/api/v1"
    }


@app.get(
    "/health",
    response_model=SystemHealth,
    tags=["System"],
    summary="System Health Check",
    description="Check the health status of the API and the live feed"
)
async def health_check():
    """System health check endpoint."""
    store_health = check_store_health()

    feed_ok = store_health["live_feed"] == "running" or not store_health["live_updates"]
    overall_status = "ok" if feed_ok else "degraded"

    return SystemHealth(
        status=overall_status,
        version=API_VERSION,
        timestamp=datetime.utcnow(),
        live_feed=store_health["live_feed"],
        series_count=store_health["series_count"],
        components={
            "api": "ok",
            "store": store_health["status"],
            "live_feed": store_health["live_feed"],
            "simulation_engine": "ok"
        }
    )


@app.get(
    "/info",
    tags=["System"],
    summary="System Information",
    description="Get detailed system information"
)
async def system_info():
    """Get system information."""
    store_health = check_store_health()

    return {
        "api": {
            "name": "Metric Stream Simulator API",
            "version": API_VERSION,
            "environment": os.getenv("ENVIRONMENT", "development")
        },
        "store": {
            "type": "in-memory",
            "series_count": store_health["series_count"],
        },
        "live_feed": {
            "enabled": store_health["live_updates"],
            "status": store_health["live_feed"],
            "poll_interval": store_health["poll_interval"],
        },
        "endpoints": {
            "series": "/api/v1/series",
            "advance": "/api/v1/series/{series_id}/advance",
            "presets": "/api/v1/presets",
            "datasets": "/api/v1/datasets"
        },
        "documentation": {
            "swagger": "/docs",
            "redoc": "/redoc",
            "openapi": "/openapi.json"
        }
    }


@app.get(
    "/ready",
    tags=["System"],
    summary="Readiness Check",
    description="Check if the API is ready to receive traffic"
)
async def readiness_check():
    """Kubernetes-style readiness probe."""
    store_health = check_store_health()

    if store_health["live_updates"] and store_health["live_feed"] != "running":
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Live feed not running"
        )

    return {"ready": True}


@app.get(
    "/live",
    tags=["System"],
    summary="Liveness Check",
    description="Check if the API process is alive"
)
async def liveness_check():
    """Kubernetes-style liveness probe."""
    return {"alive": True}


# =========================================
# Run with Uvicorn (for development)
# =========================================

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "api.main:app",
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=int(os.getenv("API_PORT", 8000)),
        reload=os.getenv("API_RELOAD", "true").lower() == "true",
        log_level=os.getenv("LOG_LEVEL", "info").lower()
    )
