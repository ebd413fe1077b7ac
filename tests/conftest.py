"""Shared fixtures: synthetic work-package PDFs and a stubbed vision model."""

import io
import textwrap
from typing import Dict, List, Optional

import fitz  # PyMuPDF
import pytest
from PIL import Image

from asset_extractor.models.classification import VisionLabel


def _png_bytes(color=(120, 160, 90)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (48, 32), color).save(buf, format="PNG")
    return buf.getvalue()


def build_pdf(path, pages: List[Dict]) -> str:
    """
    Write a PDF with one page per spec dict.

    Each dict may hold ``text`` (wrapped onto lines) and ``images``
    (number of raster images placed on the page).
    """
    doc = fitz.open()
    png = _png_bytes()
    for spec in pages:
        page = doc.new_page(width=612, height=792)
        y = 40
        for line in textwrap.wrap(spec.get("text", ""), width=90):
            page.insert_text((36, y), line, fontsize=6)
            y += 8
        for i in range(spec.get("images", 0)):
            top = 420 + (i % 4) * 80
            left = 36 + (i // 4) * 120
            page.insert_image(fitz.Rect(left, top, left + 100, top + 70), stream=png)
    doc.save(str(path))
    doc.close()
    return str(path)


@pytest.fixture
def make_pdf(tmp_path):
    counter = {"n": 0}

    def _make(pages: List[Dict], name: Optional[str] = None) -> str:
        counter["n"] += 1
        return build_pdf(tmp_path / (name or f"package_{counter['n']}.pdf"), pages)

    return _make


class StubVision:
    """Stands in for VisionClassifier; answers from a page -> label table."""

    def __init__(self, answers: Optional[Dict[int, object]] = None, default=None):
        self.answers = answers or {}
        self.default = default
        self.calls: List[int] = []

    async def classify_page(self, doc, page_number: int) -> Optional[VisionLabel]:
        self.calls.append(page_number)
        answer = self.answers.get(page_number, self.default)
        if isinstance(answer, Exception):
            raise answer
        return answer


@pytest.fixture
def stub_vision():
    return StubVision


def long_text(n_chars: int, seed: str = "narrative") -> str:
    """Filler prose of at least n_chars with no classifier keywords."""
    words = []
    length = 0
    i = 0
    while length < n_chars:
        word = f"{seed}{i % 10}"
        words.append(word)
        length += len(word) + 1
        i += 1
    return " ".join(words)


@pytest.fixture
def filler():
    return long_text
