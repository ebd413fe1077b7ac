"""Asset models for rendered pages and extraction runs."""

import json
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class AssetRecord:
    """
    A page rendered to a standalone JPEG.

    Created by the orchestrator after a successful render. The caller owns
    the file at ``path``: it uploads it to blob storage and deletes it.

    Attributes:
        name: File name, e.g. ``photo_page_7.jpg``
        path: Full local path to the JPEG
        page_number: 1-based source page number
        type: Asset prefix (``photo``, ``drawing``, ``map`` or custom)
    """

    name: str
    path: str
    page_number: int
    type: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "path": self.path,
            "pageNumber": self.page_number,
            "type": self.type,
        }


@dataclass
class ExtractionResult:
    """
    Result of a full asset extraction run.

    Attributes:
        photos: Rendered photo pages
        drawings: Rendered drawing pages
        maps: Rendered map pages
        summary: Human-readable outcome, also carries error messages
    """

    photos: List[AssetRecord] = field(default_factory=list)
    drawings: List[AssetRecord] = field(default_factory=list)
    maps: List[AssetRecord] = field(default_factory=list)
    summary: str = ""

    @property
    def total_assets(self) -> int:
        return len(self.photos) + len(self.drawings) + len(self.maps)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "photos": [a.to_dict() for a in self.photos],
            "drawings": [a.to_dict() for a in self.drawings],
            "maps": [a.to_dict() for a in self.maps],
            "summary": self.summary,
        }

    def save(self, output_dir: str, filename: str = "extraction_manifest.json") -> str:
        """Write the result as a JSON manifest and return its path."""
        os.makedirs(output_dir, exist_ok=True)
        manifest_path = os.path.join(output_dir, filename)
        with open(manifest_path, "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)
        return manifest_path
