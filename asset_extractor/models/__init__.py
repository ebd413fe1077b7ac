"""Data models for the asset extractor."""

from .page import PageSignal
from .classification import (
    PageCategory,
    VisionLabel,
    ClassificationResult,
    resolve_vision_label,
)
from .asset import AssetRecord, ExtractionResult

__all__ = [
    "PageSignal",
    "PageCategory",
    "VisionLabel",
    "ClassificationResult",
    "resolve_vision_label",
    "AssetRecord",
    "ExtractionResult",
]
