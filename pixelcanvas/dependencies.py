"""FastAPI dependency injection.

Canvas dependencies are ``async def`` so they run on the event loop alongside the
handlers instead of in a worker thread.
"""

from __future__ import annotations

from fastapi import HTTPException

from pixelcanvas.canvas.session import CanvasRegistry, CanvasSession
from pixelcanvas.config import Settings, settings

_registry = CanvasRegistry(
    width=settings.grid_width,
    height=settings.grid_height,
    highlight_duration_s=settings.highlight_duration_ms / 1000,
)


def get_settings() -> Settings:
    return settings


async def get_registry() -> CanvasRegistry:
    return _registry


async def get_canvas(session_id: str) -> CanvasSession:
    return _registry.get(session_id)


async def find_canvas(session_id: str) -> CanvasSession:
    """Lookup for read-only routes: unknown ids are a 404, not a new session."""
    session = _registry.find(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Unknown canvas session: {session_id}")
    return session
