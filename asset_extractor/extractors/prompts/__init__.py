"""Prompts for the vision fallback."""

from .page_category import PAGE_CATEGORY_PROMPT, PAGE_CATEGORY_SYSTEM

__all__ = [
    "PAGE_CATEGORY_PROMPT",
    "PAGE_CATEGORY_SYSTEM",
]
