"""
Health schemas - response shape for /health.
Both services are required fields: a failed probe changes the value, never drops the key.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel

ServiceStatus = Literal["connected", "disconnected"]

CONNECTED: ServiceStatus = "connected"
DISCONNECTED: ServiceStatus = "disconnected"


class ServiceStatuses(BaseModel):
    database: ServiceStatus
    redis: ServiceStatus


class HealthReport(BaseModel):
    """Point-in-time view of dependency health. Built per request, never cached."""

    status: Literal["ok"] = "ok"
    timestamp: datetime
    services: ServiceStatuses
