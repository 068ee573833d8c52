"""
Article annotation: sentiment, category and priority for each fetched article.
"""
from __future__ import annotations

from typing import Callable, Iterable, List, Optional

from tension_dashboard.config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from tension_dashboard.core.categorizer import categorize
from tension_dashboard.core.priority import is_priority
from tension_dashboard.core.sentiment import analyze_sentiment
from tension_dashboard.models import AnnotatedArticle, RawArticle, SentimentResult

SentimentScorer = Callable[[str], SentimentResult]


def annotate_article(
    raw: RawArticle,
    config: Optional[AnalysisConfig] = None,
    scorer: SentimentScorer = analyze_sentiment,
) -> AnnotatedArticle:
    """
    Label a single provider article.

    Args:
        raw: Article as parsed from the provider
        config: Analysis configuration (lexicons and thresholds)
        scorer: Sentiment scorer, injectable for alternate lexicons

    Returns:
        AnnotatedArticle with missing text fields replaced by empty strings
    """
    config = config or DEFAULT_ANALYSIS_CONFIG

    title = raw.title or ""
    description = raw.description or ""
    text = f"{title} {description}"

    sentiment = scorer(text)
    category = categorize(text, config.category_keywords)

    return AnnotatedArticle(
        id=raw.id,
        title=title,
        description=description,
        content=raw.content or "",
        url=raw.url or "",
        image=raw.image or "",
        source=raw.source or "",
        published_at=raw.published_at,
        category=category,
        sentiment=sentiment,
        is_priority=is_priority(text, category, sentiment.score, config),
    )


def annotate_articles(
    raw_articles: Iterable[RawArticle],
    config: Optional[AnalysisConfig] = None,
    scorer: SentimentScorer = analyze_sentiment,
) -> List[AnnotatedArticle]:
    """Annotate every article, preserving input order and count."""
    return [annotate_article(raw, config, scorer) for raw in raw_articles]
