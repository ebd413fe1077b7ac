"""
Capability probe for native PDF rendering.

PyMuPDF ships native code that fails to load in some deployment
environments. The probe runs once per process; callers receive the
resulting Capabilities value and must never assume rendering works.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Capabilities:
    """Optional native functionality available in this process."""
    rendering_available: bool
    reason: str = ""


def _probe() -> Capabilities:
    try:
        import fitz  # PyMuPDF
        from PIL import Image

        doc = fitz.open()
        try:
            page = doc.new_page(width=72, height=72)
            pix = page.get_pixmap(alpha=False)
            Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        finally:
            doc.close()
    except Exception as e:
        logger.warning("PDF extraction libraries not available: %s", e)
        logger.warning("PDF page extraction will be disabled")
        return Capabilities(rendering_available=False, reason=str(e))

    logger.info("PDF extraction libraries loaded successfully")
    return Capabilities(rendering_available=True)


@lru_cache(maxsize=1)
def probe_capabilities() -> Capabilities:
    """Probe once and reuse the result for the life of the process."""
    return _probe()
