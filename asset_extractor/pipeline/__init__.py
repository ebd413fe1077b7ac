"""Pipeline orchestration for the asset extractor."""

from .orchestrator import (
    ExtractionOrchestrator,
    analyze_pages_by_content,
    convert_pages_to_images,
    extract_all_assets,
    extract_images_from_pdf,
    get_default_orchestrator,
    is_extraction_available,
)

__all__ = [
    "ExtractionOrchestrator",
    "analyze_pages_by_content",
    "convert_pages_to_images",
    "extract_all_assets",
    "extract_images_from_pdf",
    "get_default_orchestrator",
    "is_extraction_available",
]
