"""
Keyword-based topic categorisation.
"""
from __future__ import annotations

import re
from typing import Dict, Optional

from tension_dashboard.core.lexicon import (
    DEFAULT_CATEGORY_KEYWORDS,
    SCORED_CATEGORIES,
    Category,
    CategoryLexicon,
)


def count_occurrences(keyword: str, text: str) -> int:
    """Non-overlapping occurrences of ``keyword`` inside already lower-cased ``text``."""
    if not keyword:
        return 0
    return len(re.findall(re.escape(keyword.lower()), text))


def score_categories(text: str, lexicon: Optional[CategoryLexicon] = None) -> Dict[Category, int]:
    """
    Count keyword hits per category.

    Args:
        text: Text to score
        lexicon: Category -> keywords table (defaults to the built-in one)

    Returns:
        Mapping of every scored category to its total hit count
    """
    keywords_by_category = lexicon if lexicon is not None else DEFAULT_CATEGORY_KEYWORDS
    text_lower = (text or "").lower()
    return {
        category: sum(
            count_occurrences(keyword, text_lower)
            for keyword in keywords_by_category.get(category, ())
        )
        for category in SCORED_CATEGORIES
    }


def categorize(text: str, lexicon: Optional[CategoryLexicon] = None) -> Category:
    """
    Pick the category with the most keyword hits.

    Ties go to the category declared first; text without any hit is OTHER.
    """
    best_category = Category.OTHER
    best_score = 0

    for category, score in score_categories(text, lexicon).items():
        if score > best_score:
            best_score = score
            best_category = category

    return best_category
