"""API response models."""

from __future__ import annotations

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    grid_width: int = 0
    grid_height: int = 0


class PixelEntryModel(BaseModel):
    coord: str
    color: str | None = None


class CanvasResponse(BaseModel):
    pixels: dict[str, str] = Field(default_factory=dict)
    width: int
    height: int
    pixel_count: int = 0
    highlighted: list[str] = Field(default_factory=list)
    active_operations: list[str] = Field(default_factory=list)


class PixelsChangedResponse(BaseModel):
    changed: list[PixelEntryModel] = Field(default_factory=list)
    pixel_count: int = 0


class ToolCallLogResponse(BaseModel):
    tool_call_id: str
    buffer: str
    completed: bool = False
    timestamp: float = 0.0
