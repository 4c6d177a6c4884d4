"""
Health check - dependency status for load balancers, Kubernetes, and monitoring.
Always 200: the body reports facts, the status code does not signal dependency failure.
"""

from fastapi import APIRouter

from app.core.dependencies import Prober
from app.schemas.health import HealthReport

router = APIRouter()


@router.get("/health", response_model=HealthReport)
async def health(prober: Prober):
    """Probe database and Redis now and report both."""
    return await prober.build_report()
