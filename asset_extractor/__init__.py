"""
Work-Package Asset Extractor v1.0

Content-based page triage for utility work-order PDF packages.

Page categories (decided by content, never by page position):
- DRAWING: Construction sketches, pole sheets, plan views
- MAP: Circuit map change sheets, location maps
- PHOTO: Site photographs
- FORM: Administrative forms (never extracted)

Ambiguous image pages go to an OpenAI vision model; if it fails they are
kept as photos.
"""

__version__ = "1.0.0"


def __getattr__(name):
    """Lazy imports so the capability probe runs before PyMuPDF is needed."""

    _classifier_names = {"HeuristicClassifier", "classify_page"}
    _model_names = {
        "PageSignal", "PageCategory", "VisionLabel", "ClassificationResult",
        "AssetRecord", "ExtractionResult",
    }
    _pipeline_names = {
        "ExtractionOrchestrator", "analyze_pages_by_content", "convert_pages_to_images",
        "extract_all_assets", "extract_images_from_pdf", "is_extraction_available",
    }

    if name in _classifier_names:
        from . import classifier
        return getattr(classifier, name)
    elif name in _model_names:
        from . import models
        return getattr(models, name)
    elif name in _pipeline_names:
        from . import pipeline
        return getattr(pipeline, name)
    elif name in {"Config", "default_config"}:
        from . import config
        return getattr(config, name)

    raise AttributeError(f"module 'asset_extractor' has no attribute {name!r}")
