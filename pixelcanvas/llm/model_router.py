"""Task → model selection. Cheap models for Q&A, mid-tier for drawing."""

from __future__ import annotations

from pixelcanvas.config import settings

_TASK_MODEL_MAP = {
    "chat": "cheap",
    "draw": "mid",
}


def get_model_for_task(task: str) -> str:
    tier = _TASK_MODEL_MAP.get(task, "cheap")
    if tier == "cheap":
        return settings.model_cheap
    elif tier == "mid":
        return settings.model_mid
    else:
        return settings.model_frontier
