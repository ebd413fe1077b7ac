"""Page signal and vision extractors for the asset extractor."""

from .vision_classifier import VisionClassifier, parse_label


def __getattr__(name):
    """Lazy import for the PyMuPDF-backed introspector."""
    if name in {"PageIntrospector", "page_signal"}:
        from . import page_signals
        return getattr(page_signals, name)
    raise AttributeError(f"module 'asset_extractor.extractors' has no attribute {name!r}")


__all__ = [
    "PageIntrospector",
    "page_signal",
    "VisionClassifier",
    "parse_label",
]
