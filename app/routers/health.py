# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Provides health check endpoints for monitoring and load balancers.
# =============================================================================

import logging
from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.config import settings
from app.dependencies import RecordStoreDep
from app.exceptions import DatabaseError

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response."""
    status: str
    database: str
    timestamp: str


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """
    Health check endpoint.

    Returns basic health status without touching the database.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
        environment=settings.ENVIRONMENT,
        version="1.0.0",
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check(store: RecordStoreDep):
    """
    Readiness check endpoint.

    Leases a pooled connection and runs a trivial query; 503 when that fails.
    """
    try:
        await store.ping()
    except DatabaseError:
        body = ReadinessResponse(
            status="degraded",
            database="unhealthy",
            timestamp=datetime.now(timezone.utc).isoformat(),
        )
        return JSONResponse(status_code=503, content=body.model_dump())

    return ReadinessResponse(
        status="ready",
        database="healthy",
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
