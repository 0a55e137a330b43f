# =============================================================================
# app/routers/health.py - Health Check Endpoints
# =============================================================================
# Liveness / readiness probes for the Catalog API.
#
# Readiness looks at the three collaborators a catalog request can touch:
# - database: the categories table answers a query
# - storage: the product image bucket exists
# - email: a SendGrid key is configured (informational, never blocks)
# =============================================================================

import logging
from datetime import datetime, timezone
from typing import Callable

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from lib.supabase_client import SupabaseClient

logger = logging.getLogger(__name__)

router = APIRouter()

API_VERSION = "1.0.0"

HEALTHY = "healthy"


# =============================================================================
# Response Models
# =============================================================================

class HealthResponse(BaseModel):
    """Basic health check response."""
    status: str
    timestamp: str
    environment: str
    version: str


class ChecksResponse(BaseModel):
    """Result of each readiness check ("healthy" or the failure reason)."""
    database: str
    storage: str
    email: str


class ReadinessResponse(BaseModel):
    status: str
    checks: ChecksResponse
    timestamp: str


class LivenessResponse(BaseModel):
    status: str
    timestamp: str


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


def _run_check(name: str, check: Callable[[], None]) -> str:
    try:
        check()
        return HEALTHY
    except Exception as e:
        logger.warning(f"Readiness check '{name}' failed: {e}")
        return f"unhealthy: {str(e)[:50]}"


def _check_database() -> None:
    SupabaseClient.get_client().table("categories").select("id").limit(1).execute()


def _check_storage() -> None:
    SupabaseClient.get_client().storage.get_bucket(settings.STORAGE_BUCKET)


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic status for load balancers and monitoring."""
    return HealthResponse(
        status=HEALTHY,
        timestamp=_now(),
        environment=settings.ENVIRONMENT,
        version=API_VERSION,
    )


@router.get("/health/ready", response_model=ReadinessResponse)
async def readiness_check():
    """
    Readiness check endpoint.

    `ready` when the database and the image bucket answer. A missing email
    key is reported as `disabled` but does not make the API degraded, since
    quotation notifications are best-effort.
    """
    checks = ChecksResponse(
        database=_run_check("database", _check_database),
        storage=_run_check("storage", _check_storage),
        email="configured" if settings.SENDGRID_API_KEY else "disabled",
    )

    ready = checks.database == HEALTHY and checks.storage == HEALTHY

    return ReadinessResponse(
        status="ready" if ready else "degraded",
        checks=checks,
        timestamp=_now(),
    )


@router.get("/health/live", response_model=LivenessResponse)
async def liveness_check():
    """Whether the process is alive."""
    return LivenessResponse(status="alive", timestamp=_now())
