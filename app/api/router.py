"""
Top-level router - aggregates the endpoint modules.
"""

from fastapi import APIRouter

from app.api.endpoints import health, home, metrics

api_router = APIRouter()

api_router.include_router(home.router, tags=["home"])
api_router.include_router(health.router, tags=["health"])
api_router.include_router(metrics.router, tags=["metrics"])
