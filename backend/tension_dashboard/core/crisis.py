"""
Crisis level assessment over the recent window of negative coverage.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional, Sequence

from tension_dashboard.config import CrisisThresholds
from tension_dashboard.core.lexicon import Category, CrisisLevel
from tension_dashboard.models import AnnotatedArticle


def recent_articles(
    articles: Sequence[AnnotatedArticle],
    now: datetime,
    window_hours: int,
) -> list[AnnotatedArticle]:
    """Articles published less than ``window_hours`` before ``now`` (future dates included)."""
    window = timedelta(hours=window_hours)
    return [article for article in articles if now - article.published_at < window]


def assess_crisis_level(
    articles: Sequence[AnnotatedArticle],
    now: datetime,
    thresholds: Optional[CrisisThresholds] = None,
) -> CrisisLevel:
    """
    Grade recent negative military and diplomatic coverage into a severity level.

    Args:
        articles: Annotated articles
        now: Evaluation time
        thresholds: Window and count thresholds

    Returns:
        The first matching level, checked from SEVERE down to NORMAL
    """
    if not articles:
        return CrisisLevel.NORMAL

    t = thresholds or CrisisThresholds()
    recent = recent_articles(articles, now, t.window_hours)

    military = sum(
        1 for a in recent
        if a.category == Category.MILITARY and a.sentiment_score < t.negative_sentiment
    )
    diplomatic = sum(
        1 for a in recent
        if a.category == Category.DIPLOMATIC and a.sentiment_score < t.negative_sentiment
    )

    if military >= t.severe_military or military + diplomatic >= t.severe_combined:
        return CrisisLevel.SEVERE
    if military >= t.elevated_military or military + diplomatic >= t.elevated_combined:
        return CrisisLevel.ELEVATED
    if military >= t.moderate_military or diplomatic >= t.moderate_diplomatic:
        return CrisisLevel.MODERATE
    return CrisisLevel.NORMAL
