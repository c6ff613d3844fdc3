"""Streaming drawing agent via SSE.

Tool-call arguments arrive as JSON fragments. Each ``update_canvas`` call's fragments
are accumulated and the whole buffer is handed to the canvas session on every chunk,
so pixels appear while the model is still writing the call.
"""

from __future__ import annotations

import json
import logging
from collections.abc import AsyncGenerator
from typing import Any

from pixelcanvas.canvas.session import CanvasSession
from pixelcanvas.config import settings
from pixelcanvas.llm.model_router import get_model_for_task
from pixelcanvas.llm.prompts import render_prompt
from pixelcanvas.llm.tools import GET_CANVAS_STATE, GET_CANVAS_STATE_TOOL, TOOLS, UPDATE_CANVAS

logger = logging.getLogger(__name__)


def _sse(event: str, payload: dict[str, Any]) -> str:
    return f"event: {event}\ndata: {json.dumps(payload)}\n\n"


def _text_of(content: Any) -> str:
    if isinstance(content, str):
        return content
    parts = []
    for block in content or []:
        if isinstance(block, dict) and block.get("type") == "text":
            parts.append(block.get("text", ""))
    return "".join(parts)


def _parse_args(tool_call_id: str, raw: str) -> dict[str, Any]:
    if not raw.strip():
        return {}
    try:
        args = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Tool call %s: unparseable final arguments (%s)", tool_call_id, e)
        return {}
    return args if isinstance(args, dict) else {}


def _abandon_open_calls(session: CanvasSession, calls: dict[int, dict[str, str]]) -> None:
    """Complete any update_canvas call the stream never finished, so its state is released."""
    active = set(session.reconciler.active_operations)
    for call in calls.values():
        if call["id"] in active:
            logger.info("Abandoning unfinished tool call %s", call["id"])
            session.on_tool_call_end(call["id"], None)


async def stream_draw_response(
    session: CanvasSession,
    message: str,
    history: list[dict[str, str]],
    task: str = "draw",
    llm: Any = None,
) -> AsyncGenerator[str, None]:
    """Stream SSE events: response text, pixel changes, tool-call completions."""
    if llm is None:
        if not settings.anthropic_api_key:
            yield _sse("response", {"type": "response", "content": "[LLM not configured — set ANTHROPIC_API_KEY in .env]"})
            yield _sse("done", {"type": "done"})
            return

        from langchain_anthropic import ChatAnthropic

        llm = ChatAnthropic(
            model=get_model_for_task(task),
            api_key=settings.anthropic_api_key,
            max_tokens=16000,
        )

    from langchain_core.messages import AIMessage, HumanMessage, SystemMessage, ToolMessage

    # Read-only chat never sees the drawing tool, and never draws even if the model tries
    can_draw = task == "draw"
    model = llm.bind_tools(TOOLS if can_draw else [GET_CANVAS_STATE_TOOL])

    messages: list = [SystemMessage(content=render_prompt(task, session.width, session.height))]
    for msg in history:
        if msg.get("role") == "user":
            messages.append(HumanMessage(content=msg["content"]))
        elif msg.get("role") == "assistant":
            messages.append(AIMessage(content=msg["content"]))
    messages.append(HumanMessage(content=message))

    calls: dict[int, dict[str, str]] = {}
    try:
        for step in range(settings.agent_max_steps):
            calls = {}
            text_parts: list[str] = []

            async for chunk in model.astream(messages):
                text = _text_of(chunk.content)
                if text:
                    text_parts.append(text)
                    yield _sse("response", {"type": "response", "content": text})

                for tc in chunk.tool_call_chunks:
                    index = tc.get("index") or 0
                    call = calls.get(index)
                    if call is None:
                        call = calls[index] = {
                            "id": tc.get("id") or f"{session.session_id}-{step}-{index}",
                            "name": "",
                            "args": "",
                        }
                    if tc.get("name"):
                        call["name"] = tc["name"]
                    if not tc.get("args"):
                        continue
                    call["args"] += tc["args"]
                    if not can_draw or call["name"] != UPDATE_CANVAS:
                        continue
                    changed = session.on_tool_call_args(call["id"], call["args"])
                    if changed:
                        yield _sse("pixels", {
                            "type": "pixels",
                            "tool_call_id": call["id"],
                            "pixels": [{"coord": e.coord, "color": e.color} for e in changed],
                        })

            if not calls:
                break

            tool_calls = [
                {"name": c["name"], "args": _parse_args(c["id"], c["args"]), "id": c["id"], "type": "tool_call"}
                for c in calls.values()
            ]
            messages.append(AIMessage(content="".join(text_parts), tool_calls=tool_calls))

            for tc in tool_calls:
                if can_draw and tc["name"] == UPDATE_CANVAS:
                    session.on_tool_call_end(tc["id"], tc["args"])
                    yield _sse("tool_call_end", {"type": "tool_call_end", "tool_call_id": tc["id"]})
                    result = f"Canvas updated: {len(session.pixels)} pixels set."
                elif tc["name"] == GET_CANVAS_STATE:
                    result = json.dumps(session.state())
                else:
                    logger.warning("Agent called unknown tool %r", tc["name"])
                    result = f"Unknown tool: {tc['name']}"
                messages.append(ToolMessage(content=result, tool_call_id=tc["id"]))
        else:
            logger.warning("Session %s: agent stopped after %d steps", session.session_id, settings.agent_max_steps)
    except Exception as e:
        logger.exception("Agent stream failed for session %s", session.session_id)
        yield _sse("error", {"type": "error", "content": str(e)})
    finally:
        _abandon_open_calls(session, calls)

    yield _sse("done", {"type": "done"})
