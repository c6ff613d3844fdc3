"""Canvas session — hosts the reconciler next to a fixed-size grid.

The session is where the outside world meets the reconciler: tool-call streaming
events from the agent, out-of-band state snapshots, and the user painting on the
grid directly.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping
from typing import Any

from pixelcanvas.canvas.coords import format_coord, is_valid_color
from pixelcanvas.canvas.extractor import PixelEntry
from pixelcanvas.canvas.highlight import HighlightTracker
from pixelcanvas.canvas.reconciler import StreamReconciler
from pixelcanvas.canvas.tool_log import ToolCallLogBook

logger = logging.getLogger(__name__)


class CanvasError(ValueError):
    """Rejected user edit (out of bounds, malformed color)."""


class CanvasSession:
    def __init__(
        self,
        session_id: str,
        width: int = 32,
        height: int = 32,
        highlight_duration_s: float = 0.8,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.session_id = session_id
        self.width = width
        self.height = height
        self.reconciler = StreamReconciler()
        self.highlights = HighlightTracker(highlight_duration_s, clock=clock)
        self.tool_calls = ToolCallLogBook()
        self.reconciler.subscribe(self._on_pixels_changed)

    # -- agent transport --------------------------------------------------

    def on_tool_call_args(self, tool_call_id: str, buffer: str) -> list[PixelEntry]:
        self.tool_calls.record_growth(tool_call_id, buffer)
        return self.reconciler.on_buffer_growth(tool_call_id, buffer)

    def on_tool_call_end(self, tool_call_id: str, final_args: Any) -> None:
        self.reconciler.on_operation_complete(tool_call_id, final_args)
        self.tool_calls.record_complete(tool_call_id, final_args)

    def on_state_snapshot(self, state: Mapping[str, Any] | None) -> list[PixelEntry]:
        """Load ``{"pixels": {...}}`` wholesale. States without a pixel map are ignored."""
        pixels = state.get("pixels") if isinstance(state, Mapping) else None
        if not isinstance(pixels, Mapping):
            logger.debug("Session %s: snapshot without pixels ignored", self.session_id)
            return []
        return self.reconciler.on_full_snapshot_load(pixels)

    # -- user painting ----------------------------------------------------

    def set_pixel(self, x: int, y: int, color: str | None) -> PixelEntry:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise CanvasError(f"Pixel ({x}, {y}) is outside the {self.width}x{self.height} grid")
        if color is not None and not is_valid_color(color):
            raise CanvasError(f"Invalid color {color!r}; expected #RRGGBB")
        entry = PixelEntry(format_coord(x, y), color)
        self.reconciler.apply([entry])
        return entry

    def clear(self) -> None:
        self.reconciler.clear()
        self.highlights.reset()

    def fill(self, color: str) -> None:
        if not is_valid_color(color):
            raise CanvasError(f"Invalid color {color!r}; expected #RRGGBB")
        self.reconciler.clear()
        self.reconciler.apply(
            PixelEntry(format_coord(x, y), color)
            for y in range(self.height)
            for x in range(self.width)
        )

    # -- views ------------------------------------------------------------

    @property
    def pixels(self) -> dict[str, str]:
        return self.reconciler.get_canonical_map()

    def state(self) -> dict[str, Any]:
        """The state object the agent reads and writes."""
        return {"pixels": self.pixels, "width": self.width, "height": self.height}

    def _on_pixels_changed(self, entries: list[PixelEntry]) -> None:
        self.highlights.mark(entry.coord for entry in entries)


class CanvasRegistry:
    """Canvas sessions keyed by id, created on first use."""

    def __init__(self, width: int = 32, height: int = 32, highlight_duration_s: float = 0.8) -> None:
        self.width = width
        self.height = height
        self.highlight_duration_s = highlight_duration_s
        self._sessions: dict[str, CanvasSession] = {}
        self._lock = threading.Lock()

    def get(self, session_id: str) -> CanvasSession:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                session = self._sessions[session_id] = CanvasSession(
                    session_id, self.width, self.height, self.highlight_duration_s,
                )
                logger.info("Created canvas session %s (%dx%d)", session_id, self.width, self.height)
            return session

    def find(self, session_id: str) -> CanvasSession | None:
        """Existing session or None; never creates one."""
        with self._lock:
            return self._sessions.get(session_id)

    def drop(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def ids(self) -> list[str]:
        with self._lock:
            return list(self._sessions)
