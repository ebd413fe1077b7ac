"""Vision fallback for pages the heuristic rules cannot settle.

Sends a small JPEG preview of one page to an OpenAI vision model and asks
for a single category word. The model may be slow, wrong or unavailable:
every failure returns None and the caller decides the default.

Usage:
    from asset_extractor.extractors.vision_classifier import VisionClassifier
    vision = VisionClassifier(api_key="sk-...")
    label = await vision.classify(image_b64)
"""

import logging
import os
import re
from typing import Any, Optional

from ..config import Config, default_config
from ..models.classification import VisionLabel
from .prompts import PAGE_CATEGORY_PROMPT, PAGE_CATEGORY_SYSTEM

logger = logging.getLogger(__name__)

_LABELS = {label.value: label for label in VisionLabel}


def parse_label(text: Optional[str]) -> Optional[VisionLabel]:
    """
    Parse the model reply into a VisionLabel.

    Surrounding whitespace, quotes and trailing punctuation are ignored.
    Anything other than exactly one known word returns None.
    """
    if not text:
        return None
    cleaned = text.strip().strip("\"'`").strip()
    cleaned = re.sub(r"[.!,;:]+$", "", cleaned).upper()
    return _LABELS.get(cleaned)


class VisionClassifier:
    """
    Classifies a page image with an OpenAI vision model.

    One page per call, no batching. Without an API key every call returns
    None and no request is made.

    Attributes:
        model_id: OpenAI model to use (default from config)
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        config: Optional[Config] = None,
        client: Any = None,
    ):
        """
        Args:
            api_key: OpenAI API key (or set OPENAI_API_KEY env var)
            config: Config override (uses default_config if None)
            client: Pre-built async client, mainly for tests
        """
        self.config = config or default_config
        self.api_key = api_key or os.environ.get(self.config.api_key_env_var)
        self.model_id = self.config.vision_model_id
        self._client = client

    @property
    def is_configured(self) -> bool:
        return self._client is not None or bool(self.api_key)

    def _new_client(self):
        """
        Build an async OpenAI client for the running event loop.

        The client's connection pool is bound to the loop it first runs on,
        so one is opened per call and closed before returning.
        """
        from openai import AsyncOpenAI
        return AsyncOpenAI(
            api_key=self.api_key,
            base_url=self.config.vision_base_url,
            timeout=self.config.vision_timeout_seconds,
            max_retries=self.config.vision_max_retries,
        )

    async def _complete(self, client, image_b64: str) -> Optional[str]:
        response = await client.chat.completions.create(
            model=self.model_id,
            messages=[
                {"role": "system", "content": PAGE_CATEGORY_SYSTEM},
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": PAGE_CATEGORY_PROMPT},
                        {
                            "type": "image_url",
                            "image_url": {
                                "url": f"data:image/jpeg;base64,{image_b64}",
                                "detail": self.config.vision_detail,
                            },
                        },
                    ],
                },
            ],
            max_tokens=self.config.vision_max_tokens,
            temperature=self.config.vision_temperature,
        )
        return response.choices[0].message.content

    async def classify(self, image_b64: str) -> Optional[VisionLabel]:
        """
        Classify one base64-encoded JPEG page image.

        Returns:
            The VisionLabel, or None on any failure or unrecognized reply
        """
        if not self.is_configured:
            logger.debug("No vision API key configured, skipping vision call")
            return None

        try:
            if self._client is not None:
                raw_text = await self._complete(self._client, image_b64)
            else:
                async with self._new_client() as client:
                    raw_text = await self._complete(client, image_b64)
        except Exception as e:
            logger.warning("Vision classification failed: %s", e)
            return None

        label = parse_label(raw_text)
        if label is None:
            logger.warning("Unrecognized vision label: %r", raw_text)
        return label

    async def classify_page(self, doc, page_number: int) -> Optional[VisionLabel]:
        """Render a low-cost preview of a page and classify it."""
        if not self.is_configured:
            return None

        from ..errors import PageRenderError
        from ..utils.pdf_render import encode_page_preview

        try:
            image_b64 = encode_page_preview(doc, page_number, self.config)
        except PageRenderError as e:
            logger.warning("Preview render failed for page %d: %s", page_number, e)
            return None

        label = await self.classify(image_b64)
        logger.info(
            "  Vision page %d: %s", page_number, label.value if label else "no label"
        )
        return label
