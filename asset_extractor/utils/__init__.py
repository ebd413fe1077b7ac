"""Utility modules (capability probe, PDF rendering).

pdf_render imports PyMuPDF at import time; it is loaded lazily so the
capability probe can run in environments where PyMuPDF fails to load.
"""

from .capabilities import Capabilities, probe_capabilities

_RENDER_NAMES = {
    "PageRenderer",
    "open_document",
    "render_page",
    "render_page_to_jpeg_bytes",
    "encode_page_preview",
}


def __getattr__(name):
    """Lazy import for the PyMuPDF-backed render helpers."""
    if name in _RENDER_NAMES:
        from . import pdf_render
        return getattr(pdf_render, name)
    raise AttributeError(f"module 'asset_extractor.utils' has no attribute {name!r}")


__all__ = [
    "Capabilities",
    "probe_capabilities",
    "PageRenderer",
    "open_document",
    "render_page",
    "render_page_to_jpeg_bytes",
    "encode_page_preview",
]
