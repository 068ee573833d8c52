"""
Analytics summary derived from a set of annotated articles.

The summary is recomputed from scratch on every refresh; nothing here keeps
state between calls.
"""
from __future__ import annotations

import re
from collections import Counter
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from tension_dashboard.config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from tension_dashboard.core.crisis import assess_crisis_level
from tension_dashboard.core.lexicon import Category
from tension_dashboard.models import AnnotatedArticle
from tension_dashboard.schemas import (
    AnalyticsSummary,
    KeyInsights,
    RecentInsight,
    SentimentCounts,
    SignificantEvent,
    TimelinePoint,
    ToneInsight,
    TrendingKeyword,
)

_NUMERIC_RE = re.compile(r"^\d+$")


def count_categories(articles: Sequence[AnnotatedArticle]) -> Dict[str, int]:
    counts = {category.value: 0 for category in Category}
    for article in articles:
        counts[article.category.value] += 1
    return counts


def count_sentiments(articles: Sequence[AnnotatedArticle]) -> SentimentCounts:
    counts = SentimentCounts()
    for article in articles:
        if article.sentiment_score > 0:
            counts.positive += 1
        elif article.sentiment_score < 0:
            counts.negative += 1
        else:
            counts.neutral += 1
    return counts


def build_timeline(articles: Sequence[AnnotatedArticle]) -> List[TimelinePoint]:
    """
    Group articles by publication date.

    Returns:
        One point per distinct calendar date, ascending, with per-category counts
    """
    by_date: Dict[str, TimelinePoint] = {}
    for article in articles:
        date = article.published_at.strftime("%Y-%m-%d")
        point = by_date.setdefault(date, TimelinePoint(date=date))
        point.count += 1
        setattr(point, article.category.value, getattr(point, article.category.value) + 1)

    return [by_date[date] for date in sorted(by_date)]


def extract_keywords(text: str, stop_words: frozenset[str]) -> List[str]:
    """Whitespace tokens worth counting: longer than 3 chars, not stop words, not numbers."""
    return [
        word for word in text.lower().split()
        if len(word) > 3 and word not in stop_words and not _NUMERIC_RE.match(word)
    ]


def trending_keywords(
    articles: Sequence[AnnotatedArticle],
    stop_words: frozenset[str],
    limit: int = 10,
) -> List[TrendingKeyword]:
    counts: Counter[str] = Counter()
    for article in articles:
        counts.update(extract_keywords(article.text, stop_words))

    # sorted() is stable, so equal counts keep first-seen order
    ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
    return [TrendingKeyword(word=word, count=count) for word, count in ranked[:limit]]


def key_insights(articles: Sequence[AnnotatedArticle]) -> KeyInsights:
    """Most recent, most negative and most positive article; ties go to the earliest."""
    if not articles:
        return KeyInsights()

    most_recent = max(articles, key=lambda a: a.published_at)
    most_negative = min(articles, key=lambda a: a.sentiment_score)
    most_positive = max(articles, key=lambda a: a.sentiment_score)

    return KeyInsights(
        most_recent=RecentInsight(
            title=most_recent.title,
            date=most_recent.published_at,
            source=most_recent.source,
        ),
        most_negative=_tone_insight(most_negative),
        most_positive=_tone_insight(most_positive),
    )


def _tone_insight(article: AnnotatedArticle) -> ToneInsight:
    return ToneInsight(
        title=article.title,
        sentiment=article.sentiment_score,
        category=article.category,
        source=article.source,
    )


def significant_events(
    articles: Sequence[AnnotatedArticle],
    config: Optional[AnalysisConfig] = None,
) -> List[SignificantEvent]:
    """Strongly negative military or diplomatic coverage, in input order."""
    thresholds = (config or DEFAULT_ANALYSIS_CONFIG).significant_events
    events: List[SignificantEvent] = []

    for article in articles:
        military = (
            article.category == Category.MILITARY
            and article.sentiment_score < thresholds.military_sentiment
        )
        diplomatic = (
            article.category == Category.DIPLOMATIC
            and article.sentiment_score < thresholds.diplomatic_sentiment
        )
        if military or diplomatic:
            events.append(
                SignificantEvent(
                    title=article.title,
                    date=article.published_at,
                    category=article.category,
                    sentiment=article.sentiment_score,
                    source=article.source,
                    url=article.url,
                )
            )

    return events


def build_analytics(
    articles: Sequence[AnnotatedArticle],
    now: datetime,
    config: Optional[AnalysisConfig] = None,
) -> Optional[AnalyticsSummary]:
    """
    Compute the full analytics summary.

    Args:
        articles: Annotated articles
        now: Evaluation time, used for the crisis window and ``lastUpdated``
        config: Analysis configuration

    Returns:
        AnalyticsSummary, or None when there are no articles
    """
    if not articles:
        return None

    config = config or DEFAULT_ANALYSIS_CONFIG

    return AnalyticsSummary(
        categories=count_categories(articles),
        sentiment_counts=count_sentiments(articles),
        timeline_data=build_timeline(articles),
        trending_keywords=trending_keywords(articles, config.stop_words, config.trending_limit),
        key_insights=key_insights(articles),
        significant_events=significant_events(articles, config),
        crisis_level=assess_crisis_level(articles, now, config.crisis),
        last_updated=now,
    )
