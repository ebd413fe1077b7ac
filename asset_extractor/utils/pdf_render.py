"""
PDF Rendering Utilities

Rasterizes work-package pages to JPEG for storage, display and the
vision fallback. Uses PyMuPDF (fitz) for rendering and Pillow for
JPEG encoding.
"""

import base64
import io
import logging
import os
from typing import Optional

import fitz  # PyMuPDF
from PIL import Image

from ..config import Config, default_config
from ..errors import DocumentOpenError, PageRenderError

logger = logging.getLogger(__name__)


def open_document(pdf_path: str) -> "fitz.Document":
    """
    Open a PDF with PyMuPDF.

    Raises:
        DocumentOpenError: If the file is missing, malformed or not a PDF
    """
    try:
        doc = fitz.open(pdf_path)
    except Exception as e:
        raise DocumentOpenError(f"Cannot open PDF '{pdf_path}': {e}") from e

    if not doc.is_pdf:
        doc.close()
        raise DocumentOpenError(f"Not a PDF document: '{pdf_path}'")
    return doc


def page_in_range(doc: "fitz.Document", page_number: int) -> bool:
    """Whether a 1-based page number exists in the document."""
    return 1 <= page_number <= doc.page_count


def _jpeg_quality(quality: float) -> int:
    # Pillow takes 1-95; callers pass a 0-1 fraction
    return max(1, min(95, int(round(quality * 100))))


def render_page_image(doc: "fitz.Document", page_number: int, scale: float) -> Image.Image:
    """
    Rasterize one page to an RGB Pillow image on a white background.

    Raises:
        PageRenderError: If the page is out of range or fails to render
    """
    if not page_in_range(doc, page_number):
        raise PageRenderError(
            f"Page {page_number} out of range (PDF has {doc.page_count} pages)"
        )
    try:
        page = doc.load_page(page_number - 1)
        pix = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        return Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
    except Exception as e:
        raise PageRenderError(f"Failed to render page {page_number}: {e}") from e


def render_page_to_jpeg_bytes(
    doc: "fitz.Document",
    page_number: int,
    scale: float,
    quality: float,
) -> bytes:
    """Render one page and return the encoded JPEG bytes."""
    image = render_page_image(doc, page_number, scale)
    buf = io.BytesIO()
    image.save(buf, format="JPEG", quality=_jpeg_quality(quality))
    return buf.getvalue()


def render_page(
    doc: "fitz.Document",
    page_number: int,
    output_path: str,
    scale: float = 2.0,
    quality: float = 0.85,
) -> bool:
    """
    Render a page of an open document to a JPEG file.

    Args:
        doc: Open PyMuPDF document
        page_number: 1-based page number
        output_path: Destination .jpg path
        scale: Zoom factor (1.0 = 72 DPI)
        quality: JPEG quality as a 0-1 fraction

    Returns:
        True if the file was written. Out-of-range pages and render
        failures return False.
    """
    if not page_in_range(doc, page_number):
        logger.debug(
            "Skipping page %d: out of range (PDF has %d pages)",
            page_number,
            doc.page_count,
        )
        return False

    try:
        data = render_page_to_jpeg_bytes(doc, page_number, scale, quality)
        with open(output_path, "wb") as f:
            f.write(data)
    except (PageRenderError, OSError) as e:
        logger.error("Error rendering page %d: %s", page_number, e)
        return False

    logger.info("  Rendered page %d to %s", page_number, output_path)
    return True


def encode_page_preview(
    doc: "fitz.Document",
    page_number: int,
    config: Optional[Config] = None,
) -> str:
    """Render a small, low-quality JPEG of a page as base64 for the vision model."""
    cfg = config or default_config
    data = render_page_to_jpeg_bytes(
        doc, page_number, cfg.preview_scale, cfg.preview_quality
    )
    return base64.b64encode(data).decode("utf-8")


class PageRenderer:
    """
    Renders single pages of a PDF file to JPEG.

    Usage:
        renderer = PageRenderer()
        ok = renderer.render("package.pdf", 3, "out/page_3.jpg")
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config

    def render(
        self,
        pdf_path: str,
        page_number: int,
        output_path: str,
        scale: Optional[float] = None,
        quality: Optional[float] = None,
    ) -> bool:
        """Open the PDF, render one page and close it. Never raises for bad pages."""
        scale = self.config.final_scale if scale is None else scale
        quality = self.config.final_quality if quality is None else quality

        doc = open_document(pdf_path)
        try:
            return render_page(doc, page_number, output_path, scale, quality)
        finally:
            doc.close()


def ensure_dir(path: str) -> str:
    """Create a directory (and parents) if missing. Idempotent."""
    os.makedirs(path, exist_ok=True)
    return path
