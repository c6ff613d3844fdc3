"""Streaming pixel-map reconstruction from partial tool-call JSON."""

from pixelcanvas.canvas.extractor import EncodingKind, ExtractionResult, PixelEntry, extract_pixel_updates
from pixelcanvas.canvas.reconciler import StreamReconciler, StreamState
from pixelcanvas.canvas.session import CanvasError, CanvasRegistry, CanvasSession

__all__ = [
    "EncodingKind",
    "ExtractionResult",
    "PixelEntry",
    "extract_pixel_updates",
    "StreamReconciler",
    "StreamState",
    "CanvasError",
    "CanvasRegistry",
    "CanvasSession",
]
