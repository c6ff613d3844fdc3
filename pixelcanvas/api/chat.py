"""POST /api/canvas/{session_id}/chat/stream — drawing agent over SSE."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from pixelcanvas.canvas.session import CanvasSession
from pixelcanvas.dependencies import get_canvas
from pixelcanvas.models.requests import ChatRequest

router = APIRouter(prefix="/canvas")


@router.post("/{session_id}/chat/stream")
async def chat_stream(req: ChatRequest, session: CanvasSession = Depends(get_canvas)) -> StreamingResponse:
    from pixelcanvas.llm.stream import stream_draw_response

    return StreamingResponse(
        stream_draw_response(
            session=session,
            message=req.message,
            history=req.history,
            task=req.mode,
        ),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
