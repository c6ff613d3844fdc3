"""Canvas endpoints — tool-call streaming events, snapshots, and direct painting.

Handlers are ``async def`` so every event for a session is handled on the event loop,
one at a time, which is the serialization the reconciler relies on.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException

from pixelcanvas.canvas.extractor import PixelEntry
from pixelcanvas.canvas.session import CanvasError, CanvasRegistry, CanvasSession
from pixelcanvas.dependencies import find_canvas, get_canvas, get_registry
from pixelcanvas.models.requests import (
    FillRequest,
    SetPixelRequest,
    SnapshotRequest,
    ToolCallArgsRequest,
    ToolCallEndRequest,
)
from pixelcanvas.models.responses import (
    CanvasResponse,
    PixelEntryModel,
    PixelsChangedResponse,
    ToolCallLogResponse,
)

router = APIRouter(prefix="/canvas")
logger = logging.getLogger(__name__)


def _changed(session: CanvasSession, entries: list[PixelEntry]) -> PixelsChangedResponse:
    return PixelsChangedResponse(
        changed=[PixelEntryModel(coord=e.coord, color=e.color) for e in entries],
        pixel_count=len(session.pixels),
    )


@router.get("/{session_id}", response_model=CanvasResponse)
async def get_canvas_state(session: CanvasSession = Depends(find_canvas)) -> CanvasResponse:
    pixels = session.pixels
    return CanvasResponse(
        pixels=pixels,
        width=session.width,
        height=session.height,
        pixel_count=len(pixels),
        highlighted=sorted(session.highlights.active()),
        active_operations=session.reconciler.active_operations,
    )


@router.delete("/{session_id}")
async def drop_canvas(session_id: str, registry: CanvasRegistry = Depends(get_registry)) -> dict[str, bool]:
    return {"dropped": registry.drop(session_id)}


@router.post("/{session_id}/tool-calls/{tool_call_id}/args", response_model=PixelsChangedResponse)
async def tool_call_args(
    tool_call_id: str,
    req: ToolCallArgsRequest,
    session: CanvasSession = Depends(get_canvas),
) -> PixelsChangedResponse:
    entries = session.on_tool_call_args(tool_call_id, req.buffer)
    return _changed(session, entries)


@router.post("/{session_id}/tool-calls/{tool_call_id}/end")
async def tool_call_end(
    tool_call_id: str,
    req: ToolCallEndRequest,
    session: CanvasSession = Depends(get_canvas),
) -> dict[str, str]:
    session.on_tool_call_end(tool_call_id, req.args)
    return {"status": "completed", "tool_call_id": tool_call_id}


@router.get("/{session_id}/tool-calls", response_model=list[ToolCallLogResponse])
async def list_tool_calls(session: CanvasSession = Depends(find_canvas)) -> list[ToolCallLogResponse]:
    return [
        ToolCallLogResponse(
            tool_call_id=log.tool_call_id,
            buffer=log.buffer,
            completed=log.completed,
            timestamp=log.timestamp,
        )
        for log in session.tool_calls.entries()
    ]


@router.delete("/{session_id}/tool-calls")
async def clear_tool_calls(session: CanvasSession = Depends(get_canvas)) -> dict[str, str]:
    session.tool_calls.clear()
    return {"status": "cleared"}


@router.post("/{session_id}/snapshot", response_model=PixelsChangedResponse)
async def load_snapshot(
    req: SnapshotRequest,
    session: CanvasSession = Depends(get_canvas),
) -> PixelsChangedResponse:
    entries = session.on_state_snapshot({"pixels": req.pixels})
    logger.info("Session %s: loaded snapshot with %d pixels", session.session_id, len(entries))
    return _changed(session, entries)


@router.post("/{session_id}/pixels", response_model=PixelsChangedResponse)
async def set_pixel(
    req: SetPixelRequest,
    session: CanvasSession = Depends(get_canvas),
) -> PixelsChangedResponse:
    try:
        entry = session.set_pixel(req.x, req.y, req.color)
    except CanvasError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _changed(session, [entry])


@router.post("/{session_id}/clear", response_model=PixelsChangedResponse)
async def clear_canvas(session: CanvasSession = Depends(get_canvas)) -> PixelsChangedResponse:
    session.clear()
    return _changed(session, [])


@router.post("/{session_id}/fill", response_model=PixelsChangedResponse)
async def fill_canvas(
    req: FillRequest,
    session: CanvasSession = Depends(get_canvas),
) -> PixelsChangedResponse:
    try:
        session.fill(req.color)
    except CanvasError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return _changed(session, [])
