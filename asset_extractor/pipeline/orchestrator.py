"""Main orchestrator for work-package asset extraction.

Ties the components together into the two operations the platform uses:
1. Classify pages by content (heuristic rules, vision fallback for
   ambiguous pages)
2. Extract assets: classify, cap each category, render the kept pages to
   JPEG under a per-job directory

Usage:
    from asset_extractor.pipeline import extract_all_assets

    result = await extract_all_assets("package.pdf", job_id="65f0c2", output_root="uploads")

    print(result.summary)
    for photo in result.photos:
        print(photo.path)

The engine is meant to run as a detached background task. Callers that
need a deadline wrap the call in ``asyncio.wait_for``; files rendered
before the timeout stay on disk.
"""

import logging
import os
from functools import lru_cache
from typing import Dict, Iterable, List, Optional

from ..classifier import HeuristicClassifier
from ..config import Config, default_config
from ..errors import DocumentOpenError
from ..extractors.vision_classifier import VisionClassifier
from ..models.asset import AssetRecord, ExtractionResult
from ..models.classification import (
    ClassificationResult,
    VisionLabel,
    resolve_vision_label,
)
from ..utils.capabilities import Capabilities, probe_capabilities

logger = logging.getLogger(__name__)

UNAVAILABLE_SUMMARY = "PDF extraction unavailable on this server"


def _preview(pages: List[int], limit: int = 10) -> str:
    shown = ", ".join(str(p) for p in pages[:limit])
    return shown + ("..." if len(pages) > limit else "")


class ExtractionOrchestrator:
    """
    Page classification and asset extraction for work-order PDFs.

    PyMuPDF-backed modules are imported only once the capability probe
    has confirmed rendering works.

    Usage:
        orchestrator = ExtractionOrchestrator(api_key="sk-...")

        if orchestrator.is_extraction_available():
            result = await orchestrator.extract_all_assets(pdf_path, job_id, "uploads")
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        capabilities: Optional[Capabilities] = None,
        vision: Optional[VisionClassifier] = None,
        api_key: Optional[str] = None,
    ):
        """
        Args:
            config: Configuration (uses default if None)
            capabilities: Result of the capability probe (probed once if None)
            vision: Vision fallback (built from api_key/config if None)
            api_key: OpenAI API key for the vision fallback
        """
        self.config = config or default_config
        self.capabilities = capabilities if capabilities is not None else probe_capabilities()
        self.vision = vision if vision is not None else VisionClassifier(
            api_key=api_key, config=self.config
        )
        self.classifier = HeuristicClassifier(self.config)

    def is_extraction_available(self) -> bool:
        """Whether PDF rendering works in this process."""
        return self.capabilities.rendering_available

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    async def _resolve_ambiguous(self, doc, page_number: int) -> Optional[VisionLabel]:
        if not self.config.use_vision:
            return None
        try:
            return await self.vision.classify_page(doc, page_number)
        except Exception as e:
            logger.warning("Vision fallback failed for page %d: %s", page_number, e)
            return None

    async def _classify_document(self, doc) -> ClassificationResult:
        """Classify every page of an open document, vision included."""
        from ..extractors.page_signals import PageIntrospector

        signals = PageIntrospector().analyze_document(doc)
        assignments = self.classifier.assign(signals)

        ambiguous = [s for s in signals if s.needs_vision]
        if ambiguous:
            logger.info("Resolving %d ambiguous page(s) with vision", len(ambiguous))
        for signal in ambiguous:
            label = await self._resolve_ambiguous(doc, signal.page_number)
            assignments[signal.page_number] = resolve_vision_label(label)

        result = ClassificationResult.from_assignments(assignments, doc.page_count)
        logger.info(
            "Page analysis complete: %d drawings, %d maps, %d photos, %d forms",
            len(result.drawings),
            len(result.maps),
            len(result.photos),
            len(result.forms),
        )
        return result

    async def analyze_pages_by_content(self, pdf_path: str) -> ClassificationResult:
        """
        Classify pages without capping or rendering.

        Returns an empty result if rendering is unavailable or the document
        cannot be opened.
        """
        if not self.is_extraction_available():
            logger.debug("PDF extraction not available - skipping page analysis")
            return ClassificationResult()

        from ..utils.pdf_render import open_document

        try:
            doc = open_document(pdf_path)
        except DocumentOpenError as e:
            logger.error("Error analyzing pages: %s", e)
            return ClassificationResult()

        try:
            return await self._classify_document(doc)
        finally:
            doc.close()

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def _render_pages(
        self,
        doc,
        page_numbers: Iterable[int],
        output_dir: str,
        prefix: str,
    ) -> List[AssetRecord]:
        from ..utils.pdf_render import ensure_dir, page_in_range, render_page

        page_numbers = list(page_numbers)
        if not page_numbers:
            return []

        logger.info("Converting %d pages to images (%s)...", len(page_numbers), prefix)
        ensure_dir(output_dir)

        records = []
        for page_number in page_numbers:
            if not page_in_range(doc, page_number):
                continue

            filename = f"{prefix}_page_{page_number}.jpg"
            output_path = os.path.join(output_dir, filename)
            ok = render_page(
                doc,
                page_number,
                output_path,
                scale=self.config.final_scale,
                quality=self.config.final_quality,
            )
            if ok:
                records.append(AssetRecord(
                    name=filename,
                    path=output_path,
                    page_number=page_number,
                    type=prefix,
                ))
        return records

    async def convert_pages_to_images(
        self,
        pdf_path: str,
        page_numbers: Iterable[int],
        output_dir: str,
        prefix: str = "page",
    ) -> List[AssetRecord]:
        """
        Render the given pages to ``{prefix}_page_{n}.jpg`` under output_dir.

        Out-of-range pages and pages that fail to render are left out of
        the returned list. Never raises for a bad document.
        """
        page_numbers = list(page_numbers or [])
        if not page_numbers:
            return []
        if not self.is_extraction_available():
            logger.warning("PDF extraction not available - skipping page conversion")
            return []

        from ..utils.pdf_render import open_document

        try:
            doc = open_document(pdf_path)
        except DocumentOpenError as e:
            logger.error("Error converting pages: %s", e)
            return []

        try:
            return self._render_pages(doc, page_numbers, output_dir, prefix)
        finally:
            doc.close()

    # ------------------------------------------------------------------
    # Full extraction
    # ------------------------------------------------------------------

    def job_dirs(self, job_id: str, output_root: str) -> Dict[str, str]:
        """Per-category output directories for a job, keyed by asset prefix."""
        job_dir = os.path.join(
            output_root, self.config.job_dir_template.format(job_id=job_id)
        )
        return {
            prefix: os.path.join(job_dir, subdir)
            for prefix, subdir in self.config.category_dirs.items()
        }

    async def extract_all_assets(
        self,
        pdf_path: str,
        job_id: str,
        output_root: str,
    ) -> ExtractionResult:
        """
        Extract photos, drawings and maps from a work-order PDF.

        Args:
            pdf_path: Path to the PDF package
            job_id: Job identifier, namespaces the output directory
            output_root: Root under which ``job_{job_id}/`` is created

        Returns:
            ExtractionResult. Failures yield empty lists and a summary
            describing what went wrong; nothing is raised.
        """
        result = ExtractionResult()

        if not self.is_extraction_available():
            logger.warning("PDF extraction not available - PyMuPDF not loaded")
            result.summary = UNAVAILABLE_SUMMARY
            return result

        from ..utils.pdf_render import open_document

        cfg = self.config
        try:
            logger.info("=== Starting asset extraction ===")
            logger.info("PDF: %s", pdf_path)
            logger.info("Job ID: %s", job_id)

            doc = open_document(pdf_path)
            try:
                analysis = await self._classify_document(doc)

                logger.info("Found pages:")
                logger.info("  Drawings: %s", _preview(analysis.drawings))
                logger.info("  Maps: %s", _preview(analysis.maps))
                logger.info("  Photos: %s", _preview(analysis.photos))

                dirs = self.job_dirs(job_id, output_root)
                result.drawings = self._render_pages(
                    doc, analysis.drawings[:cfg.max_drawings], dirs["drawing"], "drawing"
                )
                result.maps = self._render_pages(
                    doc, analysis.maps[:cfg.max_maps], dirs["map"], "map"
                )
                result.photos = self._render_pages(
                    doc, analysis.photos[:cfg.max_photos], dirs["photo"], "photo"
                )
            finally:
                doc.close()

            result.summary = (
                f"Extracted {len(result.drawings)} drawings, {len(result.maps)} maps, "
                f"{len(result.photos)} photos from {analysis.total_pages} pages"
            )
            logger.info("=== Extraction complete ===")
            logger.info(result.summary)

        except Exception as e:
            logger.error("Error in extract_all_assets: %s", e)
            result.summary = f"Error: {e}"

        return result

    async def extract_images_from_pdf(self, pdf_path: str, output_dir: str) -> List[AssetRecord]:
        """Render only the photo pages (capped) into a flat directory."""
        analysis = await self.analyze_pages_by_content(pdf_path)
        return await self.convert_pages_to_images(
            pdf_path, analysis.photos[:self.config.max_photos], output_dir, "photo"
        )


@lru_cache(maxsize=1)
def get_default_orchestrator() -> ExtractionOrchestrator:
    """Process-wide orchestrator built from default_config and OPENAI_API_KEY."""
    return ExtractionOrchestrator()


def is_extraction_available() -> bool:
    return get_default_orchestrator().is_extraction_available()


async def analyze_pages_by_content(pdf_path: str) -> ClassificationResult:
    return await get_default_orchestrator().analyze_pages_by_content(pdf_path)


async def convert_pages_to_images(
    pdf_path: str,
    page_numbers: Iterable[int],
    output_dir: str,
    prefix: str = "page",
) -> List[AssetRecord]:
    return await get_default_orchestrator().convert_pages_to_images(
        pdf_path, page_numbers, output_dir, prefix
    )


async def extract_all_assets(pdf_path: str, job_id: str, output_root: str) -> ExtractionResult:
    """
    Convenience function to run a full extraction with the default orchestrator.

    Example:
        result = asyncio.run(extract_all_assets("package.pdf", "42", "uploads"))
        print(result.summary)
    """
    return await get_default_orchestrator().extract_all_assets(pdf_path, job_id, output_root)


async def extract_images_from_pdf(pdf_path: str, output_dir: str) -> List[AssetRecord]:
    return await get_default_orchestrator().extract_images_from_pdf(pdf_path, output_dir)
