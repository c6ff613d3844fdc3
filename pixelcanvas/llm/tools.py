"""Tool schemas exposed to the drawing agent (Anthropic tool format)."""

from __future__ import annotations

UPDATE_CANVAS = "update_canvas"
GET_CANVAS_STATE = "get_canvas_state"

_PATCH_OP_SCHEMA = {
    "type": "object",
    "properties": {
        "op": {"type": "string", "enum": ["add", "remove"]},
        "path": {
            "type": "string",
            "description": 'JSON pointer "/pixels/x,y" for one pixel, or "/pixels" with an object value',
        },
        "value": {
            "description": '"#RRGGBB" for one pixel, or an object of "x,y" -> "#RRGGBB"',
        },
    },
    "required": ["op", "path"],
}

UPDATE_CANVAS_TOOL = {
    "name": UPDATE_CANVAS,
    "description": (
        "Change the pixel canvas. Send either `delta`, a list of JSON Patch operations on "
        "/pixels, or `snapshot`, the complete new pixel map. Never send both."
    ),
    "input_schema": {
        "type": "object",
        "properties": {
            "delta": {"type": "array", "items": _PATCH_OP_SCHEMA},
            "snapshot": {
                "type": "object",
                "properties": {
                    "pixels": {
                        "type": "object",
                        "additionalProperties": {"type": "string", "pattern": "^#[0-9A-Fa-f]{6}$"},
                    },
                },
                "required": ["pixels"],
            },
        },
    },
}

GET_CANVAS_STATE_TOOL = {
    "name": GET_CANVAS_STATE,
    "description": "Get the current canvas state as JSON",
    "input_schema": {
        "type": "object",
        "properties": {
            "title": {"type": "string", "description": "Brief description of what you're looking for"},
        },
        "required": ["title"],
    },
}

TOOLS = [UPDATE_CANVAS_TOOL, GET_CANVAS_STATE_TOOL]
