"""Health check route handlers.

``/health`` answers as long as the process serves requests; ``/health/ready`` also
requires the database to respond.
"""

from fastapi import APIRouter, status
from fastapi.responses import PlainTextResponse
from prometheus_client import Counter, Histogram

from recipe_manager.db.session import check_database_health

router = APIRouter(tags=["health"])

# Prometheus metrics
health_check_counter = Counter(
    "health_checks_total", "Total number of health checks", ["endpoint", "status"]
)

health_check_duration = Histogram(
    "health_check_duration_seconds", "Time spent on health checks", ["endpoint"]
)


@router.get(
    "/health",
    summary="Liveness probe",
    description="Returns `ok` while the service is running.",
    response_class=PlainTextResponse,
)
async def liveness_probe() -> PlainTextResponse:
    health_check_counter.labels(endpoint="liveness", status="success").inc()
    return PlainTextResponse("ok")


@router.get(
    "/health/ready",
    summary="Readiness probe",
    description="Returns `ok` when the database responds, 503 otherwise.",
    response_class=PlainTextResponse,
    responses={503: {"description": "Database unavailable"}},
)
def readiness_probe() -> PlainTextResponse:
    with health_check_duration.labels(endpoint="readiness").time():
        if check_database_health():
            health_check_counter.labels(endpoint="readiness", status="success").inc()
            return PlainTextResponse("ok")
        health_check_counter.labels(endpoint="readiness", status="degraded").inc()
        return PlainTextResponse(
            "database unavailable", status_code=status.HTTP_503_SERVICE_UNAVAILABLE
        )
