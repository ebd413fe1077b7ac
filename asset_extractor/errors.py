"""Exceptions raised by the asset extraction engine.

None of these escape the public orchestrator operations; they mark the
boundary where a failure is caught and turned into an empty or partial
result.
"""


class AssetExtractionError(Exception):
    """Base error for the extraction engine."""


class DocumentOpenError(AssetExtractionError):
    """The PDF could not be opened or parsed at all."""


class PageRenderError(AssetExtractionError):
    """A single page could not be rasterized."""
