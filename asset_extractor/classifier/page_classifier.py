"""
Page Content Classifier

Assigns each page of a work-order package to a category from its text and
image signals alone. Page position is never used: utilities and job types
order their packages differently.

Rules are evaluated in priority order and the first match wins:
1. FORM: administrative documents (checklists, crew sheets, USA tickets...)
2. DRAWING: construction sketches with little body text
3. MAP: circuit map change sheets and titled maps
4. PHOTO: picture / field-notes vocabulary, watermark-only pages
5. AMBIGUOUS: image pages with short text, deferred to the vision model
6. PHOTO: image embedded in a text-heavy page
Anything else is OTHER and is not reported.
"""

import logging
import re
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from ..config import Config, default_config
from ..models.classification import ClassificationResult, PageCategory
from ..models.page import PageSignal

logger = logging.getLogger(__name__)


# Utility forms routinely name drawings and maps without being one,
# so these win over every other keyword.
FORM_PATTERN = re.compile(
    r"face sheet|crew material|equipment information|checklist|"
    r"feedback to estimating|tag sheet|totals as of|crew instruction|"
    r"sign.?off|progress billing|billing|paving form|environmental release|"
    r"best management|utility standard|no parking sign|tree trimming|"
    r"usa ticket|dig ticket|usa locate|tailboard|job hazard analysis",
    re.IGNORECASE,
)

# A phrase followed by a colon is a form field label ("Plan View: ____",
# "Diagrams:"), singular or plural.
DRAWING_PATTERN = re.compile(
    r"(?:pole sheet drawing|construction sketch|construction drawing|"
    r"plan view|schematic|diagram|top view.*?services|"
    r"include services with addresses)s?\b(?!\s*:)",
    re.IGNORECASE,
)

MAP_PATTERN = re.compile(
    r"circuit map change sheet|circuit map change|\bcmcs\b|\bcirmap\b|"
    r"(?:circuit|distribution|location|vicinity|area|parcel|plat) maps?\b(?!\s*:)",
    re.IGNORECASE,
)

PHOTO_PATTERN = re.compile(r"picture|full pole|photos?:|field photo", re.IGNORECASE)
FIELD_NOTES_PATTERN = re.compile(
    r"field notes|field date|confidential.*field", re.IGNORECASE
)
WATERMARK_PATTERN = re.compile(r"confidential", re.IGNORECASE)


Rule = Callable[[PageSignal, Config], bool]


def _is_form(signal: PageSignal, config: Config) -> bool:
    return bool(FORM_PATTERN.search(signal.text))


def _is_drawing(signal: PageSignal, config: Config) -> bool:
    # Real technical drawings carry little body text
    if signal.text_length >= config.drawing_max_text_length:
        return False
    return bool(DRAWING_PATTERN.search(signal.text))


def _is_map(signal: PageSignal, config: Config) -> bool:
    return bool(MAP_PATTERN.search(signal.text))


def _is_photo(signal: PageSignal, config: Config) -> bool:
    if PHOTO_PATTERN.search(signal.text) or FIELD_NOTES_PATTERN.search(signal.text):
        return True
    return (
        signal.text_length < config.watermark_max_chars
        and bool(WATERMARK_PATTERN.search(signal.text))
    )


def _is_image_only(signal: PageSignal, config: Config) -> bool:
    return signal.has_images and signal.text_length < config.image_only_max_chars


def _is_image_schematic(signal: PageSignal, config: Config) -> bool:
    return signal.has_images and signal.text_length < config.ambiguous_max_chars


def _is_image_in_text(signal: PageSignal, config: Config) -> bool:
    return signal.has_images and signal.text_length >= config.ambiguous_max_chars


# Ordered (name, predicate, category). First match wins.
PAGE_RULES: List[Tuple[str, Rule, PageCategory]] = [
    ("form", _is_form, PageCategory.FORM),
    ("drawing", _is_drawing, PageCategory.DRAWING),
    ("map", _is_map, PageCategory.MAP),
    ("photo", _is_photo, PageCategory.PHOTO),
    ("image_only", _is_image_only, PageCategory.AMBIGUOUS),
    ("image_schematic", _is_image_schematic, PageCategory.AMBIGUOUS),
    ("image_in_text", _is_image_in_text, PageCategory.PHOTO),
]


def match_rule(
    signal: PageSignal,
    config: Optional[Config] = None,
) -> Tuple[PageCategory, Optional[str]]:
    """
    Find the first rule a page matches.

    Args:
        signal: Page signals from the introspector
        config: Config override (uses default_config if None)

    Returns:
        Tuple of (category, rule name). Rule name is None for OTHER.
    """
    cfg = config or default_config
    for name, predicate, category in PAGE_RULES:
        if predicate(signal, cfg):
            return category, name
    return PageCategory.OTHER, None


def classify_page(signal: PageSignal, config: Optional[Config] = None) -> PageCategory:
    """Classify a single page. Returns AMBIGUOUS for vision-bound pages."""
    return match_rule(signal, config)[0]


class HeuristicClassifier:
    """
    Rule-based page classifier for a whole document.

    Usage:
        classifier = HeuristicClassifier()
        provisional, ambiguous = classifier.classify(signals, total_pages)
    """

    def __init__(self, config: Optional[Config] = None):
        self.config = config or default_config

    def assign(self, signals: Sequence[PageSignal]) -> Dict[int, PageCategory]:
        """
        Map every page to exactly one category.

        Sets ``needs_vision`` on the signals of ambiguous pages.
        """
        assignments: Dict[int, PageCategory] = {}
        for signal in signals:
            category, rule = match_rule(signal, self.config)
            signal.needs_vision = category is PageCategory.AMBIGUOUS
            assignments[signal.page_number] = category
            logger.debug(
                "Page %d: %s (rule=%s, %d chars, %d images)",
                signal.page_number,
                category.value,
                rule,
                signal.text_length,
                signal.image_count,
            )
        return assignments

    def classify(
        self,
        signals: Sequence[PageSignal],
        total_pages: int,
    ) -> Tuple[ClassificationResult, List[PageSignal]]:
        """
        Classify all pages.

        Args:
            signals: One PageSignal per readable page
            total_pages: Page count of the document

        Returns:
            Tuple of (provisional result without ambiguous pages,
            signals flagged needs_vision)
        """
        assignments = self.assign(signals)
        ambiguous = [s for s in signals if s.needs_vision]
        return ClassificationResult.from_assignments(assignments, total_pages), ambiguous
