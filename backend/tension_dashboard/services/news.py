"""
News refresh pipeline: fetch, annotate, aggregate, cache.
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Callable, List, Optional, Protocol, Tuple

from tension_dashboard.config import DEFAULT_ANALYSIS_CONFIG, AnalysisConfig
from tension_dashboard.core.analytics import build_analytics
from tension_dashboard.core.annotator import SentimentScorer, annotate_articles
from tension_dashboard.core.sentiment import analyze_sentiment
from tension_dashboard.models import AnnotatedArticle, RawArticle
from tension_dashboard.schemas import Article, NewsResponse, SentimentDetail
from tension_dashboard.services.cache import CacheEntry, ResponseCache

logger = logging.getLogger(__name__)


class ArticleFetcher(Protocol):
    async def fetch(self, fetched_at: datetime) -> Tuple[List[RawArticle], int]:
        ...


def to_article_schema(article: AnnotatedArticle) -> Article:
    return Article(
        id=article.id,
        title=article.title,
        description=article.description,
        content=article.content,
        url=article.url,
        image=article.image,
        source=article.source,
        published_at=article.published_at,
        category=article.category,
        sentiment_score=article.sentiment_score,
        sentiment_detail=SentimentDetail(
            score=article.sentiment.score,
            comparative=article.sentiment.comparative,
            positive_terms=list(article.sentiment.positive),
            negative_terms=list(article.sentiment.negative),
        ),
        is_priority=article.is_priority,
    )


def build_news_response(
    raw_articles: List[RawArticle],
    now: datetime,
    skipped: int = 0,
    config: Optional[AnalysisConfig] = None,
    scorer: SentimentScorer = analyze_sentiment,
) -> NewsResponse:
    """
    Annotate fetched articles and compute analytics over them.

    Args:
        raw_articles: Articles as parsed from the provider
        now: Evaluation time
        skipped: Malformed provider entries already dropped
        config: Analysis configuration
        scorer: Sentiment scorer

    Returns:
        NewsResponse with analytics set to None when there are no articles
    """
    annotated = annotate_articles(raw_articles, config, scorer)
    analytics = build_analytics(annotated, now, config)

    return NewsResponse(
        articles=[to_article_schema(article) for article in annotated],
        analytics=analytics,
        skipped=skipped,
        cached_at=now,
    )


class NewsService:
    """Owns the fetcher and the response cache for the single fixed query."""

    def __init__(
        self,
        fetcher: ArticleFetcher,
        ttl_ms: int,
        config: Optional[AnalysisConfig] = None,
        cache: Optional[ResponseCache[NewsResponse]] = None,
        scorer: SentimentScorer = analyze_sentiment,
    ) -> None:
        self.fetcher = fetcher
        self.ttl_ms = ttl_ms
        self.config = config or DEFAULT_ANALYSIS_CONFIG
        self.cache: ResponseCache[NewsResponse] = cache or ResponseCache()
        self.scorer = scorer

    @property
    def last_refreshed(self) -> Optional[datetime]:
        entry = self.cache.entry
        return entry.fetched_at if entry else None

    async def refresh(self, now: datetime) -> NewsResponse:
        """Fetch and process articles, bypassing the cache."""
        raw_articles, skipped = await self.fetcher.fetch(now)
        if skipped:
            logger.warning("Skipped %d malformed articles from provider", skipped)

        response = build_news_response(raw_articles, now, skipped, self.config, self.scorer)
        priority = sum(1 for a in response.articles if a.is_priority)
        logger.info(
            "Processed %d articles (%d priority, crisis level %s)",
            len(response.articles),
            priority,
            response.analytics.crisis_level.value if response.analytics else "n/a",
        )
        return response

    async def get_news(self, now: datetime) -> CacheEntry[NewsResponse]:
        """Return the cached response, refreshing it when older than the TTL."""
        return await self.cache.get_or_refresh(self.ttl_ms, now, lambda: self.refresh(now))


async def run_periodic_refresh(
    service: NewsService,
    interval_seconds: float,
    clock: Callable[[], datetime],
) -> None:
    """
    Keep the cache warm by going through the normal cache path on a fixed interval.

    Failures are logged and the loop carries on; the previous entry stays cached.
    """
    while True:
        try:
            await service.get_news(clock())
        except Exception:
            logger.exception("Scheduled news refresh failed")
        await asyncio.sleep(interval_seconds)
