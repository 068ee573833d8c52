"""
High-priority flagging for alarming coverage.
"""
from __future__ import annotations

from typing import Iterable, Optional

from tension_dashboard.config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from tension_dashboard.core.lexicon import Category


def contains_any(text: str, keywords: Iterable[str]) -> bool:
    text_lower = (text or "").lower()
    return any(keyword.lower() in text_lower for keyword in keywords)


def is_priority(
    text: str,
    category: Category,
    sentiment_score: int,
    config: Optional[AnalysisConfig] = None,
) -> bool:
    """
    Flag an article as high priority.

    An article is priority when any of the following holds:
      - it is military coverage mentioning a high-priority keyword
      - it is diplomatic coverage with clearly negative sentiment
      - it mentions a high-priority keyword with strongly negative sentiment
    """
    config = config or DEFAULT_ANALYSIS_CONFIG
    thresholds = config.priority
    has_keyword = contains_any(text, config.priority_keywords)

    return (
        (category == Category.MILITARY and has_keyword)
        or (category == Category.DIPLOMATIC and sentiment_score < thresholds.diplomatic_sentiment)
        or (has_keyword and sentiment_score < thresholds.keyword_sentiment)
    )
