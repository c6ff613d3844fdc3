"""Shared test fixtures."""

from __future__ import annotations

import pytest

from pixelcanvas.canvas.reconciler import StreamReconciler
from pixelcanvas.canvas.session import CanvasSession


# Tool-call argument buffers in the four recognized shapes

ADD_OPS_BUFFER = (
    '{"delta": ['
    '{"op": "add", "path": "/pixels/3,4", "value": "#FF0000"}, '
    '{"op": "add", "path": "/pixels/4,4", "value": "#00FF00"}, '
    '{"op": "add", "path": "/pixels/5,4", "value": "#0000FF"}'
    ']}'
)

MIXED_OPS_BUFFER = (
    '{"delta":['
    '{"op":"add","path":"/pixels/1,1","value":"#111111"},'
    '{"op":"remove","path":"/pixels/2,2"},'
    '{"op":"add","path":"/pixels/3,3","value":"#333333"}'
    ']}'
)

BULK_BUFFER = (
    '{"delta":[{"op":"add","path":"/pixels","value":'
    '{"1,1":"#00FF00","2,2":"#0000FF","3,3":"#FF00FF"}}]}'
)

SNAPSHOT_BUFFER = '{"snapshot":{"pixels":{"0,0":"#FFFFFF","0,1":"#000000","7,7":"#abcdef"}}}'


def prefixes(buffer: str, step: int = 1) -> list[str]:
    """Every prefix of ``buffer`` (by ``step`` chars), ending with the full buffer."""
    out = [buffer[:i] for i in range(1, len(buffer), step)]
    out.append(buffer)
    return out


@pytest.fixture
def reconciler() -> StreamReconciler:
    return StreamReconciler()


class FakeClock:
    def __init__(self, now: float = 100.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def session(clock: FakeClock) -> CanvasSession:
    return CanvasSession("test", width=8, height=8, highlight_duration_s=0.8, clock=clock)
