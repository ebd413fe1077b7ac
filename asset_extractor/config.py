"""
Configuration for the work-package asset extractor.

All settings centralized here. Override by creating a Config instance
with custom values.

Usage:
    from asset_extractor.config import Config, default_config

    # Use defaults
    print(default_config.final_scale)  # 2.0

    # Override for a run
    my_config = Config(max_photos=30, vision_model_id="gpt-4o")
"""

from dataclasses import dataclass, field
from typing import Dict, Optional


@dataclass
class Config:
    """
    Central configuration for the asset extraction engine.

    Create a new instance to override any setting.
    """

    # === Rendering ===
    # Preview renders are only sent to the vision model, keep them small.
    preview_scale: float = 1.0
    preview_quality: float = 0.7
    # Final renders are archived and shown to users.
    final_scale: float = 2.0
    final_quality: float = 0.85

    # === Per-category caps (applied at render time only) ===
    max_drawings: int = 5
    max_maps: int = 3
    max_photos: int = 15

    # === Heuristic thresholds (characters of extracted text) ===
    image_only_max_chars: int = 50
    # Circuit map change sheets carry several hundred to ~1500 chars of labels
    ambiguous_max_chars: int = 2000
    drawing_max_text_length: int = 1000
    watermark_max_chars: int = 20

    # === Vision fallback ===
    use_vision: bool = True
    vision_model_id: str = "gpt-4o-mini"
    vision_max_tokens: int = 5
    vision_temperature: float = 0.0
    vision_detail: str = "low"  # OpenAI image detail level ("low", "high", "auto")
    vision_timeout_seconds: float = 30.0
    vision_max_retries: int = 1
    vision_base_url: Optional[str] = None  # None uses OPENAI_BASE_URL or the public API
    api_key_env_var: str = "OPENAI_API_KEY"

    # === Output layout ===
    job_dir_template: str = "job_{job_id}"
    category_dirs: Dict[str, str] = field(
        default_factory=lambda: {
            "photo": "photos",
            "drawing": "drawings",
            "map": "maps",
        }
    )
    manifest_file: str = "extraction_manifest.json"


# Default configuration instance
default_config = Config()
