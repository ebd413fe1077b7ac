"""Per-page signal model produced by the page introspector."""

from dataclasses import dataclass


@dataclass
class PageSignal:
    """
    Lightweight content signals for a single PDF page.

    Created by extractors/page_signals.py, one per readable page, and
    never persisted. Only ``needs_vision`` changes after construction;
    the heuristic classifier sets it for pages deferred to the vision
    fallback.

    Attributes:
        page_number: 1-based page number
        text: Lower-cased text-layer tokens joined by single spaces
        text_length: Length of ``text``
        image_count: Number of raster image placements on the page
        needs_vision: Whether the page is ambiguous and needs the vision model
    """

    page_number: int
    text: str
    text_length: int
    image_count: int
    needs_vision: bool = False

    @property
    def has_images(self) -> bool:
        return self.image_count > 0
