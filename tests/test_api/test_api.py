"""Tests for API endpoints (no LLM calls)."""

from __future__ import annotations

import uuid

import pytest
from fastapi.testclient import TestClient

from pixelcanvas.config import settings
from pixelcanvas.dependencies import _registry
from pixelcanvas.main import app
from tests.conftest import SNAPSHOT_BUFFER


client = TestClient(app)


@pytest.fixture
def sid() -> str:
    return f"test-{uuid.uuid4().hex[:8]}"


def test_health():
    response = client.get("/api/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["grid_width"] == settings.grid_width


def test_prompts():
    response = client.get("/api/prompts")
    assert response.status_code == 200
    assert set(response.json()) == {"draw", "chat"}


def test_unknown_canvas_is_not_found(sid):
    assert client.get(f"/api/canvas/{sid}").status_code == 404
    assert client.get(f"/api/canvas/{sid}/tool-calls").status_code == 404
    assert _registry.find(sid) is None


def test_empty_canvas(sid):
    client.post(f"/api/canvas/{sid}/clear")
    data = client.get(f"/api/canvas/{sid}").json()
    assert data["pixels"] == {}
    assert data["pixel_count"] == 0
    assert data["width"] == settings.grid_width


def test_streamed_tool_call_args(sid):
    url = f"/api/canvas/{sid}/tool-calls/tc1/args"
    first = client.post(url, json={"buffer": '{"delta":[{"op":"add","path":"/pixels","value":{"1,1":"#00FF00"'})
    assert first.status_code == 200
    assert first.json()["changed"] == [{"coord": "1,1", "color": "#00FF00"}]

    second = client.post(url, json={"buffer": '{"delta":[{"op":"add","path":"/pixels","value":{"1,1":"#00FF00","2,2":"#0000FF"}}]}'})
    assert second.json()["changed"] == [{"coord": "2,2", "color": "#0000FF"}]
    assert second.json()["pixel_count"] == 2

    canvas = client.get(f"/api/canvas/{sid}").json()
    assert canvas["active_operations"] == ["tc1"]
    assert set(canvas["highlighted"]) == {"1,1", "2,2"}

    end = client.post(f"/api/canvas/{sid}/tool-calls/tc1/end", json={"args": {"delta": []}})
    assert end.status_code == 200
    assert client.get(f"/api/canvas/{sid}").json()["active_operations"] == []


def test_snapshot_tool_call(sid):
    response = client.post(f"/api/canvas/{sid}/tool-calls/tc1/args", json={"buffer": SNAPSHOT_BUFFER})
    assert len(response.json()["changed"]) == 3


def test_tool_call_log(sid):
    client.post(f"/api/canvas/{sid}/tool-calls/tc1/args", json={"buffer": '{"delta":['})
    client.post(f"/api/canvas/{sid}/tool-calls/tc1/end", json={"args": {"delta": []}})
    logs = client.get(f"/api/canvas/{sid}/tool-calls").json()
    assert len(logs) == 1
    assert logs[0]["completed"] is True
    assert '"delta"' in logs[0]["buffer"]

    client.delete(f"/api/canvas/{sid}/tool-calls")
    assert client.get(f"/api/canvas/{sid}/tool-calls").json() == []


def test_load_snapshot(sid):
    client.post(f"/api/canvas/{sid}/pixels", json={"x": 0, "y": 0, "color": "#000000"})
    response = client.post(f"/api/canvas/{sid}/snapshot", json={"pixels": {"3,3": "#333333"}})
    assert response.status_code == 200
    assert client.get(f"/api/canvas/{sid}").json()["pixels"] == {"3,3": "#333333"}


def test_set_pixel(sid):
    response = client.post(f"/api/canvas/{sid}/pixels", json={"x": 1, "y": 2, "color": "#ABCDEF"})
    assert response.status_code == 200
    assert response.json()["changed"] == [{"coord": "1,2", "color": "#ABCDEF"}]


def test_set_pixel_out_of_bounds(sid):
    response = client.post(f"/api/canvas/{sid}/pixels", json={"x": settings.grid_width, "y": 0, "color": "#000000"})
    assert response.status_code == 422


def test_set_pixel_bad_color(sid):
    response = client.post(f"/api/canvas/{sid}/pixels", json={"x": 0, "y": 0, "color": "red"})
    assert response.status_code == 422


def test_fill_and_clear(sid):
    response = client.post(f"/api/canvas/{sid}/fill", json={"color": "#00FF00"})
    assert response.json()["pixel_count"] == settings.grid_width * settings.grid_height
    response = client.post(f"/api/canvas/{sid}/clear")
    assert response.json()["pixel_count"] == 0


def test_drop_canvas(sid):
    client.post(f"/api/canvas/{sid}/pixels", json={"x": 0, "y": 0, "color": "#000000"})
    assert client.delete(f"/api/canvas/{sid}").json() == {"dropped": True}
    assert client.get(f"/api/canvas/{sid}").status_code == 404


def test_chat_stream_without_api_key(sid, monkeypatch):
    """Chat stream should report the missing key and finish cleanly."""
    monkeypatch.setattr(settings, "anthropic_api_key", "")
    response = client.post(f"/api/canvas/{sid}/chat/stream", json={"message": "Draw a cat"})
    assert response.status_code == 200
    assert "LLM not configured" in response.text
    assert "event: done" in response.text
