"""Transient highlight of freshly streamed pixels, cleared after an idle delay."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable


class HighlightTracker:
    """Debounced highlight set.

    Every ``mark`` pushes the shared deadline out by ``duration_s``; once the deadline
    passes with no new marks, the whole set is dropped at once.
    """

    def __init__(self, duration_s: float = 0.8, clock: Callable[[], float] = time.monotonic) -> None:
        self.duration_s = duration_s
        self._clock = clock
        self._coords: set[str] = set()
        self._deadline = 0.0

    def mark(self, coords: Iterable[str]) -> None:
        coords = set(coords)
        if not coords:
            return
        self._expire()
        self._coords |= coords
        self._deadline = self._clock() + self.duration_s

    def active(self) -> set[str]:
        self._expire()
        return set(self._coords)

    def reset(self) -> None:
        self._coords.clear()
        self._deadline = 0.0

    def _expire(self) -> None:
        if self._coords and self._clock() >= self._deadline:
            self._coords.clear()
