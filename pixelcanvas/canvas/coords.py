"""Coordinate keys and color values shared by the extractor, reconciler and API.

A coordinate is serialized as ``"x,y"`` (no whitespace, no sign). A color is
``"#RRGGBB"`` (case-insensitive) or ``None`` for "revert to background".
"""

from __future__ import annotations

import re

COORD_PATTERN = r"[0-9]+,[0-9]+"
COLOR_PATTERN = r"#[0-9A-Fa-f]{6}"

_COORD_RE = re.compile(COORD_PATTERN)
_COLOR_RE = re.compile(COLOR_PATTERN)


def format_coord(x: int, y: int) -> str:
    if x < 0 or y < 0:
        raise ValueError(f"Coordinates must be non-negative, got ({x}, {y})")
    return f"{int(x)},{int(y)}"


def parse_coord(key: str) -> tuple[int, int]:
    """Parse a ``"x,y"`` key. Anything but two unsigned integers is rejected."""
    if not isinstance(key, str) or not _COORD_RE.fullmatch(key):
        raise ValueError(f"Malformed coordinate key: {key!r}")
    x, y = key.split(",")
    return int(x), int(y)


def is_valid_color(value: object) -> bool:
    return isinstance(value, str) and _COLOR_RE.fullmatch(value) is not None


def in_bounds(coord: str, width: int, height: int) -> bool:
    try:
        x, y = parse_coord(coord)
    except ValueError:
        return False
    return x < width and y < height
