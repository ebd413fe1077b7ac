"""Classification models for work-package pages."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Mapping, Optional


class PageCategory(Enum):
    """Category assigned to a single page."""

    DRAWING = "drawing"   # Construction sketch, pole sheet, plan view
    MAP = "map"           # Circuit / location map
    PHOTO = "photo"       # Site photograph
    FORM = "form"         # Administrative form, excluded from assets
    OTHER = "other"       # Nothing distinctive, not reported
    AMBIGUOUS = "ambiguous"  # Provisional: deferred to the vision model


class VisionLabel(Enum):
    """The single-word answers the vision model may give."""

    SKETCH = "SKETCH"
    MAP = "MAP"
    PHOTO = "PHOTO"
    FORM = "FORM"


# Where an ambiguous page lands once the vision model has answered.
# FORM, no answer and unrecognized answers all fall through to PHOTO.
VISION_LABEL_TO_CATEGORY = {
    VisionLabel.SKETCH: PageCategory.DRAWING,
    VisionLabel.MAP: PageCategory.MAP,
    VisionLabel.PHOTO: PageCategory.PHOTO,
}


def resolve_vision_label(label: Optional[VisionLabel]) -> PageCategory:
    """Map a vision answer to a final category, defaulting to PHOTO."""
    return VISION_LABEL_TO_CATEGORY.get(label, PageCategory.PHOTO)


@dataclass
class ClassificationResult:
    """
    Page numbers grouped by category for one document.

    Lists are deduplicated and ascending. Built from a single
    ``page_number -> PageCategory`` mapping, so a page appears in at
    most one list.

    Attributes:
        drawings: Pages holding construction drawings
        maps: Pages holding circuit or location maps
        photos: Pages holding site photographs
        forms: Administrative form pages (never extracted)
        total_pages: Number of pages in the document
    """

    drawings: List[int] = field(default_factory=list)
    maps: List[int] = field(default_factory=list)
    photos: List[int] = field(default_factory=list)
    forms: List[int] = field(default_factory=list)
    total_pages: int = 0

    @classmethod
    def from_assignments(
        cls,
        assignments: Mapping[int, PageCategory],
        total_pages: int,
    ) -> "ClassificationResult":
        """Group a page -> category mapping into sorted page lists."""
        grouped: Dict[PageCategory, List[int]] = {
            PageCategory.DRAWING: [],
            PageCategory.MAP: [],
            PageCategory.PHOTO: [],
            PageCategory.FORM: [],
        }
        for page_number in sorted(assignments):
            category = assignments[page_number]
            if category in grouped:
                grouped[category].append(page_number)

        return cls(
            drawings=grouped[PageCategory.DRAWING],
            maps=grouped[PageCategory.MAP],
            photos=grouped[PageCategory.PHOTO],
            forms=grouped[PageCategory.FORM],
            total_pages=total_pages,
        )

    def to_dict(self) -> Dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "drawings": list(self.drawings),
            "maps": list(self.maps),
            "photos": list(self.photos),
            "forms": list(self.forms),
            "totalPages": self.total_pages,
        }
