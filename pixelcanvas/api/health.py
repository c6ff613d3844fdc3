"""Health check + meta endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from pixelcanvas.config import Settings
from pixelcanvas.dependencies import get_settings
from pixelcanvas.models.responses import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_settings)) -> HealthResponse:
    return HealthResponse(
        status="ok",
        version="0.1.0",
        grid_width=settings.grid_width,
        grid_height=settings.grid_height,
    )


@router.get("/prompts")
async def prompts() -> dict[str, str]:
    from pixelcanvas.llm.prompts import get_all_templates

    return get_all_templates()
