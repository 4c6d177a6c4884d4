"""
Root page - greeting plus dependency statuses for humans.
Health is informational here: the page renders with 200 whatever the probes say.
"""

from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from app.config import Settings, get_settings
from app.core.dependencies import Prober

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).resolve().parents[2] / "templates"))


@router.get("/", response_class=HTMLResponse)
async def index(
    request: Request,
    prober: Prober,
    settings: Annotated[Settings, Depends(get_settings)],
):
    """Render the greeting and the current database/Redis status."""
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "message": settings.greeting,
            "db_status": await prober.check_database(),
            "redis_status": await prober.check_redis(),
        },
    )
