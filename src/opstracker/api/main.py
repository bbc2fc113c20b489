"""
OpsTracker API Main Application

Entry point for the FastAPI application.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import make_asgi_app

from opstracker.platform.config import settings
from opstracker.platform.logging import configure_logging, get_logger
from opstracker.api.routers import tracker
from opstracker.api.dependencies import (
    init_resources,
    close_resources,
    get_blob_store,
)

# Configure logging on import
configure_logging(settings)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting OpsTracker API...")
    try:
        init_resources()
        logger.info("Resources initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize resources: {e}")
        raise

    yield

    logger.info("Shutting down OpsTracker API...")
    close_resources()
    logger.info("Resources closed.")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.VERSION,
    description="Operational checklist tracker for monthly planning, sprints and reporting",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS.split(",") if settings.CORS_ORIGINS else ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# =============================================================================
# OBSERVABILITY
# =============================================================================

metrics_app = make_asgi_app()
app.mount("/metrics", metrics_app)


# =============================================================================
# HEALTH ENDPOINTS
# =============================================================================


@app.get("/health/live", tags=["Health"])
async def liveness() -> dict:
    """Liveness check: is the service running?"""
    return {"status": "alive"}


@app.get("/health/ready", tags=["Health"])
async def readiness() -> dict:
    """Readiness check: can the blob store be reached?"""
    store_healthy = get_blob_store().health_check()

    return {
        "status": "ready" if store_healthy else "not_ready",
        "version": settings.VERSION,
        "checks": {
            "blob_store": "healthy" if store_healthy else "unhealthy",
        },
    }


# =============================================================================
# API ROUTERS
# =============================================================================

app.include_router(tracker.router, prefix="/api/v1", tags=["Tracker"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "opstracker.api.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.DEBUG,
    )
