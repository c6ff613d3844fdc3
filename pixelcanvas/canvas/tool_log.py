"""Debug log of tool-call argument buffers, one row per tool call."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass
from typing import Any


@dataclass
class ToolCallLog:
    tool_call_id: str
    buffer: str
    completed: bool = False
    timestamp: float = 0.0


class ToolCallLogBook:
    def __init__(self) -> None:
        self._logs: dict[str, ToolCallLog] = {}

    def record_growth(self, tool_call_id: str, buffer: str) -> ToolCallLog:
        log = self._logs.get(tool_call_id)
        if log is None:
            log = self._logs[tool_call_id] = ToolCallLog(tool_call_id, buffer, timestamp=time.time())
        else:
            log.buffer = buffer
        return log

    def record_complete(self, tool_call_id: str, final_value: Any) -> ToolCallLog:
        """Replace the streamed buffer with the resolved arguments, pretty-printed."""
        text = json.dumps(final_value, indent=2)
        log = self._logs.get(tool_call_id)
        if log is None:
            log = self._logs[tool_call_id] = ToolCallLog(tool_call_id, text, timestamp=time.time())
        log.buffer = text
        log.completed = True
        return log

    def entries(self) -> list[ToolCallLog]:
        return list(self._logs.values())

    def clear(self) -> None:
        self._logs.clear()
