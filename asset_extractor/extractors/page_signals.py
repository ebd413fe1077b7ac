"""
Page Introspection

Extracts lightweight per-page signals (text and raster image count) from
a PDF without rendering or OCR. These signals drive the heuristic page
classifier.
"""

import logging
from typing import List, Tuple

import fitz  # PyMuPDF

from ..models.page import PageSignal
from ..utils.pdf_render import open_document

logger = logging.getLogger(__name__)


def page_text(page: "fitz.Page") -> str:
    """Text-layer tokens of a page joined by single spaces, lower-cased."""
    words = page.get_text("words")
    return " ".join(w[4] for w in words).lower()


def count_image_placements(page: "fitz.Page") -> int:
    """
    Count raster images painted on the page.

    Counts every placement (the same XObject drawn twice counts twice,
    inline images included). Vector paths are not counted.
    """
    return len(page.get_image_info())


def page_signal(page: "fitz.Page", page_number: int) -> PageSignal:
    text = page_text(page)
    return PageSignal(
        page_number=page_number,
        text=text,
        text_length=len(text),
        image_count=count_image_placements(page),
    )


class PageIntrospector:
    """
    Produces one PageSignal per readable page.

    Usage:
        introspector = PageIntrospector()
        signals, total_pages = introspector.analyze("package.pdf")
    """

    def analyze(self, pdf_path: str) -> Tuple[List[PageSignal], int]:
        """
        Open a PDF and collect signals for every page.

        Raises:
            DocumentOpenError: If the document cannot be opened
        """
        doc = open_document(pdf_path)
        try:
            return self.analyze_document(doc), doc.page_count
        finally:
            doc.close()

    def analyze_document(self, doc: "fitz.Document") -> List[PageSignal]:
        """Collect signals from an open document, skipping unreadable pages."""
        logger.info(
            "Analyzing %d pages for content types (position-independent)...",
            doc.page_count,
        )
        signals = []
        for page_idx in range(doc.page_count):
            try:
                page = doc.load_page(page_idx)
                signals.append(page_signal(page, page_idx + 1))
            except Exception as e:
                # A corrupt page must not abort the whole package
                logger.debug("Skipping unreadable page %d: %s", page_idx + 1, e)
        return signals
