"""Page classification module for the asset extractor."""

from .page_classifier import (
    PAGE_RULES,
    HeuristicClassifier,
    classify_page,
    match_rule,
)

__all__ = [
    "PAGE_RULES",
    "HeuristicClassifier",
    "classify_page",
    "match_rule",
]
