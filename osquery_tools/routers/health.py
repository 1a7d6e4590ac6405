"""Health-check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from osquery_tools import __version__
from osquery_tools.models.responses import HealthResponse, OsqueryHealthResponse
from osquery_tools.services.tools import OsqueryTools, get_tools

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def service_health() -> HealthResponse:
    """Basic liveness probe."""
    return HealthResponse(status="ok", version=__version__)


@router.get("/osquery/health", response_model=OsqueryHealthResponse)
async def osquery_health(
    tools: OsqueryTools = Depends(get_tools),
) -> OsqueryHealthResponse:
    """Check that osqueryi is installed and runnable."""
    available, detail = await tools.executor.check_availability()
    if available:
        return OsqueryHealthResponse(available=True, version=detail)
    return OsqueryHealthResponse(available=False, error=detail)
