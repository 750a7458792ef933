"""
Health check endpoints with dependency monitoring

Provides two endpoints:
- GET /api/v1/health - Basic health check
- GET /api/v1/health/dependencies - Supabase database and auth status
"""
import asyncio
import time
from datetime import datetime
from typing import Dict, Optional

import httpx
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from helpdesk import __version__
from helpdesk.config import get_settings
from helpdesk.dependencies import get_ticket_repository
from helpdesk.repositories.ticket_repository import TicketRepository
from helpdesk.utils.logger import get_logger

settings = get_settings()
logger = get_logger(__name__)

router = APIRouter(prefix="/api/v1/health", tags=["health"])

APP_START_TIME = time.time()

# Dependency check results are cached for 30 seconds
_dependency_cache: Optional["DependencyHealth"] = None
_cache_timestamp: float = 0.0
CACHE_TTL_SECONDS = 30.0
CHECK_TIMEOUT_SECONDS = 5.0


# ============================================================================
# Pydantic Models
# ============================================================================

class HealthResponse(BaseModel):
    """Basic health check response"""
    status: str = Field(..., description="Overall status: healthy, degraded, unhealthy")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")
    version: str = Field(..., description="Application version")
    uptime_seconds: float = Field(..., description="Application uptime in seconds")


class DependencyStatus(BaseModel):
    """Status of a single dependency"""
    name: str = Field(..., description="Dependency name")
    status: str = Field(..., description="Status: healthy, degraded, unhealthy")
    latency_ms: Optional[float] = Field(None, description="Response latency in milliseconds")
    error_message: Optional[str] = Field(None, description="Error message if unhealthy")


class DependencyHealth(BaseModel):
    """Dependency health check response"""
    overall_status: str = Field(..., description="Overall status: healthy, degraded, unhealthy")
    dependencies: Dict[str, DependencyStatus] = Field(..., description="Individual dependency statuses")
    checked_at: datetime = Field(default_factory=datetime.utcnow, description="Check timestamp")


# ============================================================================
# Dependency Check Functions
# ============================================================================

async def check_supabase_db(ticket_repo: TicketRepository) -> DependencyStatus:
    """Run a one-row query against the tickets table."""
    try:
        start = time.time()
        await asyncio.wait_for(
            asyncio.to_thread(
                lambda: ticket_repo.table().select("id").limit(1).execute()
            ),
            timeout=CHECK_TIMEOUT_SECONDS
        )
        latency = (time.time() - start) * 1000
        return DependencyStatus(name="supabase_db", status="healthy", latency_ms=round(latency, 2))

    except asyncio.TimeoutError:
        logger.error("Supabase database health check timed out")
        return DependencyStatus(
            name="supabase_db",
            status="unhealthy",
            error_message="Request timed out after 5 seconds"
        )
    except Exception as e:
        logger.error(f"Supabase database health check failed: {e}")
        return DependencyStatus(name="supabase_db", status="unhealthy", error_message=str(e))


async def check_supabase_auth() -> DependencyStatus:
    """Ping the Supabase auth service health endpoint."""
    try:
        if not settings.supabase_url or not settings.supabase_key:
            return DependencyStatus(
                name="supabase_auth",
                status="degraded",
                error_message="Supabase URL or key not configured"
            )

        start = time.time()
        async with httpx.AsyncClient(timeout=CHECK_TIMEOUT_SECONDS) as client:
            response = await client.get(
                f"{settings.supabase_url.rstrip('/')}/auth/v1/health",
                headers={"apikey": settings.supabase_key}
            )
            response.raise_for_status()

        latency = (time.time() - start) * 1000
        return DependencyStatus(name="supabase_auth", status="healthy", latency_ms=round(latency, 2))

    except httpx.TimeoutException:
        logger.error("Supabase auth health check timed out")
        return DependencyStatus(
            name="supabase_auth",
            status="unhealthy",
            error_message="Request timed out after 5 seconds"
        )
    except httpx.HTTPStatusError as e:
        logger.error(f"Supabase auth health check failed: {e}")
        return DependencyStatus(
            name="supabase_auth",
            status="unhealthy",
            error_message=f"HTTP {e.response.status_code}: {str(e)}"
        )
    except Exception as e:
        logger.error(f"Supabase auth health check failed: {e}")
        return DependencyStatus(name="supabase_auth", status="unhealthy", error_message=str(e))


def determine_overall_status(dependencies: Dict[str, DependencyStatus]) -> str:
    """
    Determine overall system status

    Rules:
    - Database unhealthy → "unhealthy"
    - Any other check degraded/unhealthy → "degraded"
    - All healthy → "healthy"
    """
    db = dependencies.get("supabase_db")
    if db is not None and db.status == "unhealthy":
        return "unhealthy"

    if any(dep.status in ("degraded", "unhealthy") for dep in dependencies.values()):
        return "degraded"
    return "healthy"


# ============================================================================
# API Endpoints
# ============================================================================

@router.get(
    "",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Basic health check"
)
async def basic_health_check() -> HealthResponse:
    """Always 200; does not touch external dependencies."""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        version=__version__,
        uptime_seconds=round(time.time() - APP_START_TIME, 2)
    )


@router.get(
    "/dependencies",
    response_model=DependencyHealth,
    status_code=status.HTTP_200_OK,
    summary="Dependency health check"
)
async def dependency_health_check(
    ticket_repo: TicketRepository = Depends(get_ticket_repository)
) -> DependencyHealth:
    """
    Check Supabase database and auth.

    Results are cached for 30 seconds. Always returns 200 with details.
    """
    global _dependency_cache, _cache_timestamp

    current_time = time.time()
    if _dependency_cache and (current_time - _cache_timestamp) < CACHE_TTL_SECONDS:
        logger.debug("Returning cached dependency health check results")
        return _dependency_cache

    logger.info("Performing dependency health checks")
    db_status, auth_status = await asyncio.gather(
        check_supabase_db(ticket_repo),
        check_supabase_auth()
    )
    dependencies = {db_status.name: db_status, auth_status.name: auth_status}

    response = DependencyHealth(
        overall_status=determine_overall_status(dependencies),
        dependencies=dependencies,
        checked_at=datetime.utcnow()
    )
    _dependency_cache = response
    _cache_timestamp = current_time

    unhealthy = [name for name, dep in dependencies.items() if dep.status == "unhealthy"]
    if unhealthy:
        logger.warning(f"Unhealthy dependencies: {', '.join(unhealthy)}")

    return response
