"""API request models."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ToolCallArgsRequest(BaseModel):
    buffer: str = Field(..., description="Full accumulated argument text of the tool call so far")


class ToolCallEndRequest(BaseModel):
    args: Any = Field(default=None, description="Final resolved tool-call arguments")


class SnapshotRequest(BaseModel):
    pixels: dict[str, str | None] = Field(
        default_factory=dict,
        description="Complete pixel map (\"x,y\" -> \"#RRGGBB\") replacing the canvas",
    )


class SetPixelRequest(BaseModel):
    x: int = Field(..., ge=0, description="Column, 0 = left edge")
    y: int = Field(..., ge=0, description="Row, 0 = top edge")
    color: str | None = Field(default=None, description="#RRGGBB, or null to clear the pixel")


class FillRequest(BaseModel):
    color: str = Field(..., description="#RRGGBB applied to every pixel")


class ChatRequest(BaseModel):
    message: str = Field(..., description="User's drawing request or question")
    mode: Literal["draw", "chat"] = Field(default="draw", description="draw may change the canvas, chat only reads it")
    history: list[dict[str, str]] = Field(
        default_factory=list,
        description="Chat history (role/content pairs)",
    )
