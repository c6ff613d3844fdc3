"""Stream reconciler — folds extraction results from in-flight tool calls into one pixel map.

Each tool call (operation) gets a counter of entries already consumed. Because the
extractor is prefix-stable, the entries beyond that counter are exactly the new ones,
so every growth tick costs O(new entries) on top of the re-scan.

    INCREMENTAL: apply only ``entries[consumed:]`` in order.
    SNAPSHOT:    re-write every entry seen so far (later writes win), without clearing
                 keys the snapshot has not reached yet; report only ``entries[consumed:]``.

All calls are expected on a single logical thread (the event loop). Growth events for
one operation arrive in non-decreasing buffer length; a shorter buffer is logged and
tolerated, and the counter never moves backwards.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from pixelcanvas.canvas.coords import is_valid_color, parse_coord
from pixelcanvas.canvas.extractor import (
    EncodingKind,
    ExtractionResult,
    PixelEntry,
    extract_pixel_updates,
)

logger = logging.getLogger(__name__)

PixelsChangedListener = Callable[[list[PixelEntry]], None]


@dataclass
class StreamState:
    """Progress of one in-flight operation."""

    consumed: int = 0
    buffer_length: int = 0
    kind: EncodingKind = EncodingKind.INCREMENTAL


class StreamReconciler:
    def __init__(
        self,
        pixels: Mapping[str, str] | None = None,
        extractor: Callable[[str], ExtractionResult] = extract_pixel_updates,
    ) -> None:
        self._pixels: dict[str, str] = dict(pixels or {})
        self._streams: dict[str, StreamState] = {}
        self._listeners: list[PixelsChangedListener] = []
        self._extract = extractor

    # -- transport events -------------------------------------------------

    def on_buffer_growth(self, operation_id: str, buffer: str) -> list[PixelEntry]:
        """Process one growth tick and return the entries that are new for this operation."""
        state = self._streams.get(operation_id)
        if state is None:
            state = self._streams[operation_id] = StreamState()
            logger.debug("Tracking operation %s", operation_id)

        if len(buffer) < state.buffer_length:
            logger.warning(
                "Operation %s: buffer shrank from %d to %d chars; keeping consumed=%d",
                operation_id, state.buffer_length, len(buffer), state.consumed,
            )

        result = self._extract(buffer)
        new_entries = list(result.entries[state.consumed:])

        if result.is_snapshot:
            self.apply(result.entries)
        else:
            self.apply(new_entries)

        if state.kind is not result.kind and state.consumed:
            logger.warning(
                "Operation %s: encoding changed from %s to %s mid-stream",
                operation_id, state.kind.value, result.kind.value,
            )
        state.consumed = max(state.consumed, len(result))
        state.buffer_length = max(state.buffer_length, len(buffer))
        state.kind = result.kind

        self._notify(new_entries)
        return new_entries

    def on_operation_complete(self, operation_id: str, final_value: Any = None) -> None:
        """Terminal transition: forget the operation's progress.

        ``final_value`` is the far side's resolved arguments. It may not match any
        scanned buffer textually and is not re-applied.
        """
        state = self._streams.pop(operation_id, None)
        if state is None:
            logger.debug("Completion for unknown operation %s", operation_id)
            return
        logger.debug(
            "Operation %s complete after %d %s entries",
            operation_id, state.consumed, state.kind.value,
        )

    def on_full_snapshot_load(self, pixels: Mapping[str, str | None]) -> list[PixelEntry]:
        """Replace the whole map out of band (session restore), bypassing extraction."""
        loaded: dict[str, str] = {}
        skipped = 0
        for coord, color in pixels.items():
            if color is None:
                continue
            try:
                parse_coord(coord)
            except ValueError:
                skipped += 1
                continue
            if not is_valid_color(color):
                skipped += 1
                continue
            loaded[coord] = color
        if skipped:
            logger.warning("Snapshot load skipped %d malformed entries", skipped)

        self._pixels = loaded
        entries = [PixelEntry(coord, color) for coord, color in loaded.items()]
        self._notify(entries)
        return entries

    # -- map access -------------------------------------------------------

    def apply(self, entries: Iterable[PixelEntry]) -> None:
        """Write entries in order: a color sets the key, ``None`` removes it."""
        for entry in entries:
            if entry.color is None:
                self._pixels.pop(entry.coord, None)
            else:
                self._pixels[entry.coord] = entry.color

    def clear(self) -> None:
        self._pixels.clear()

    def get_canonical_map(self) -> dict[str, str]:
        return dict(self._pixels)

    @property
    def active_operations(self) -> list[str]:
        return list(self._streams)

    def stream_state(self, operation_id: str) -> StreamState | None:
        return self._streams.get(operation_id)

    # -- change notifications ---------------------------------------------

    def subscribe(self, listener: PixelsChangedListener) -> Callable[[], None]:
        """Register a pixels-changed listener. Returns a callable that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, entries: list[PixelEntry]) -> None:
        for listener in list(self._listeners):
            try:
                listener(list(entries))
            except Exception:
                logger.exception("Pixels-changed listener %r failed", listener)
