"""Patch extractor — pulls complete pixel entries out of a still-growing JSON buffer.

The buffer is the accumulated argument text of one tool call and may be cut off
anywhere, including mid-token. Nothing here parses JSON: four fixed textual shapes
are recognized with regular expressions, and only lexically complete entries are
returned. Re-scanning a longer prefix of the same buffer always returns the earlier
result as a prefix, so callers can track progress with a plain counter.

Shapes, first match wins:
    1. {"snapshot":{"pixels":{"4,11":"#FF0000",...}}}           -> SNAPSHOT
    2. {"op":"add","path":"/pixels/4,11","value":"#FF0000"}     -> INCREMENTAL
    3. {"op":"remove","path":"/pixels/4,11"}                    -> INCREMENTAL
    4. {"op":"add","path":"/pixels","value":{"4,11":"#FF0000"}} -> INCREMENTAL
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass

from pixelcanvas.canvas.coords import COLOR_PATTERN, COORD_PATTERN


class EncodingKind(enum.Enum):
    INCREMENTAL = "incremental"
    SNAPSHOT = "snapshot"


@dataclass(frozen=True)
class PixelEntry:
    coord: str
    color: str | None  # None = remove / background


@dataclass(frozen=True)
class ExtractionResult:
    entries: tuple[PixelEntry, ...] = ()
    kind: EncodingKind = EncodingKind.INCREMENTAL

    @property
    def is_snapshot(self) -> bool:
        return self.kind is EncodingKind.SNAPSHOT

    def __len__(self) -> int:
        return len(self.entries)


_SNAPSHOT_RE = re.compile(r'"snapshot"\s*:\s*\{\s*"pixels"\s*:\s*\{')

_ADD_OP_RE = re.compile(
    r'\{\s*"op"\s*:\s*"add"\s*,\s*"path"\s*:\s*"/pixels/(' + COORD_PATTERN + r')"'
    r'\s*,\s*"value"\s*:\s*"(' + COLOR_PATTERN + r')"\s*\}'
)

_REMOVE_OP_RE = re.compile(
    r'\{\s*"op"\s*:\s*"remove"\s*,\s*"path"\s*:\s*"/pixels/(' + COORD_PATTERN + r')"\s*\}'
)

_BULK_RE = re.compile(r'"path"\s*:\s*"/pixels"\s*,\s*"value"\s*:\s*\{')

_PAIR_RE = re.compile(r'"(' + COORD_PATTERN + r')"\s*:\s*"(' + COLOR_PATTERN + r')"')


def extract_pixel_updates(buffer: str) -> ExtractionResult:
    """Return every lexically complete pixel entry in ``buffer`` and its encoding kind."""
    snapshot = _SNAPSHOT_RE.search(buffer)
    if snapshot is not None:
        body = _object_body(buffer, snapshot.end())
        return ExtractionResult(_scan_pairs(body), EncodingKind.SNAPSHOT)

    # Adds and removes are scanned independently and concatenated, not interleaved.
    entries = [PixelEntry(m.group(1), m.group(2)) for m in _ADD_OP_RE.finditer(buffer)]
    entries.extend(PixelEntry(m.group(1), None) for m in _REMOVE_OP_RE.finditer(buffer))
    if entries:
        return ExtractionResult(tuple(entries), EncodingKind.INCREMENTAL)

    bulk = _BULK_RE.search(buffer)
    if bulk is not None:
        body = _object_body(buffer, bulk.end())
        return ExtractionResult(_scan_pairs(body), EncodingKind.INCREMENTAL)

    return ExtractionResult()


def _scan_pairs(text: str) -> tuple[PixelEntry, ...]:
    return tuple(PixelEntry(m.group(1), m.group(2)) for m in _PAIR_RE.finditer(text))


def _object_body(buffer: str, start: int) -> str:
    """Text of the object literal opened just before ``start``, up to its closing brace.

    An unterminated object runs to the end of the buffer. Braces inside string
    literals are ignored.
    """
    depth = 1
    in_string = False
    escaped = False
    for i in range(start, len(buffer)):
        ch = buffer[i]
        if in_string:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == '"':
                in_string = False
        elif ch == '"':
            in_string = True
        elif ch == "{":
            depth += 1
        elif ch == "}":
            depth -= 1
            if depth == 0:
                return buffer[start:i]
    return buffer[start:]
