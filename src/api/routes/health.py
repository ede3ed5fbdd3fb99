"""Health check endpoints for the Discovery API.

Reports whether the text-completion provider is configured and the state of
its circuit breaker. The engine runs on its keyword fallback without a
provider, so a missing key is "degraded", never "unhealthy".
"""

from datetime import datetime, timezone
import time
from typing import Optional

import structlog
from fastapi import APIRouter, Depends

from src.api.models import HealthCheckResponse, HealthStatus
from src.config.settings import get_settings, Settings
from src.core.circuit_breaker import get_all_circuit_breakers
from src.discovery.analyzer import CIRCUIT_NAME

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["Health"])

API_VERSION = "1.0.0"

# Track server start time for uptime calculation
_server_start_time: Optional[float] = None


def set_server_start_time() -> None:
    """Set the server start time. Called on application startup."""
    global _server_start_time
    _server_start_time = time.time()


def get_uptime_seconds() -> Optional[float]:
    """Get server uptime in seconds."""
    if _server_start_time is None:
        return None
    return time.time() - _server_start_time


def check_text_completion(settings: Settings) -> HealthStatus:
    """Provider configuration plus circuit breaker state."""
    if not settings.ai_configured:
        return HealthStatus(
            status="degraded",
            message="Text completion not configured; using keyword fallback",
            details={"ai_enabled": settings.ai_enabled},
        )

    breaker = get_all_circuit_breakers().get(CIRCUIT_NAME)
    if breaker is None:
        return HealthStatus(status="healthy", message="Provider configured, not yet called")

    snapshot = breaker.snapshot()
    if breaker.is_open:
        return HealthStatus(
            status="degraded",
            message="Circuit open; using keyword fallback",
            details=snapshot,
        )
    return HealthStatus(status="healthy", message="Provider available", details=snapshot)


@router.get(
    "/health",
    response_model=HealthCheckResponse,
    summary="Health Check",
    description="Check the health status of the API and the text-completion provider.",
)
async def health_check(
    settings: Settings = Depends(get_settings),
) -> HealthCheckResponse:
    services = {"text_completion": check_text_completion(settings)}

    statuses = [s.status for s in services.values()]
    if all(s == "healthy" for s in statuses):
        overall_status = "healthy"
    elif any(s == "unhealthy" for s in statuses):
        overall_status = "unhealthy"
    else:
        overall_status = "degraded"

    return HealthCheckResponse(
        status=overall_status,
        version=API_VERSION,
        timestamp=datetime.now(timezone.utc),
        ai_configured=settings.ai_configured,
        services=services,
        uptime_seconds=get_uptime_seconds(),
    )


@router.get(
    "/health/live",
    summary="Liveness Check",
    description="Simple liveness check for container orchestration.",
)
async def liveness() -> dict:
    """Returns 200 if the service is alive."""
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}
