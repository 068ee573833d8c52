"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tension_dashboard.config import (
    CORS_ALLOW_ORIGINS,
    LOG_FORMAT,
    LOG_LEVEL,
    AnalysisConfig,
    load_analysis_config,
)
from tension_dashboard.core.lexicon import Category
from tension_dashboard.schemas import ErrorResponse, NewsResponse
from tension_dashboard.services.news import NewsService, run_periodic_refresh
from tension_dashboard.settings import Settings, settings
from tension_dashboard.sources.common import SourceUnavailableError
from tension_dashboard.sources.gnews import GNewsFetcher
from tension_dashboard.utils import now_utc

# Configure logging
logging.basicConfig(level=LOG_LEVEL, format=LOG_FORMAT)
logger = logging.getLogger("uvicorn")


def check_configuration(settings: Settings, analysis_config: AnalysisConfig) -> None:
    """
    Fail fast when the service cannot work at all.

    Raises:
        RuntimeError: If the API key is missing or a category has no keywords
    """
    if not settings.GNEWS_API_KEY:
        raise RuntimeError("GNEWS_API_KEY is not configured")

    empty = [
        category.value
        for category, keywords in analysis_config.category_keywords.items()
        if not keywords
    ]
    if not analysis_config.category_keywords or empty:
        raise RuntimeError(f"Category lexicon is missing keywords for: {', '.join(empty) or 'all'}")


def filter_articles(
    response: NewsResponse,
    category: Optional[Category] = None,
    search: Optional[str] = None,
    priority_only: bool = False,
) -> NewsResponse:
    """
    Narrow the article list for display. Analytics always cover the full set.

    Args:
        response: Cached response
        category: Keep only this category
        search: Case-insensitive match against title or description
        priority_only: Keep only priority articles

    Returns:
        A copy of the response with the filtered article list
    """
    if category is None and not search and not priority_only:
        return response

    needle = (search or "").strip().lower()
    articles = [
        article for article in response.articles
        if (category is None or article.category == category)
        and (not priority_only or article.is_priority)
        and (
            not needle
            or needle in article.title.lower()
            or needle in article.description.lower()
        )
    ]
    return response.model_copy(update={"articles": articles})


def build_news_service(settings: Settings) -> NewsService:
    analysis_config = load_analysis_config()
    fetcher = GNewsFetcher(
        api_key=settings.GNEWS_API_KEY,
        query=settings.NEWS_QUERY,
        language=settings.NEWS_LANGUAGE,
        max_articles=settings.NEWS_MAX_ARTICLES,
        timeout=settings.HTTP_TIMEOUT_SECONDS,
    )
    return NewsService(fetcher, ttl_ms=settings.CACHE_TTL_MS, config=analysis_config)


# Initialize FastAPI app
app = FastAPI(
    title="Border Tension News API",
    version="0.1.0",
    description="Categorised and sentiment-scored news coverage with crisis analytics"
)
app.state.news_service = build_news_service(settings)
app.state.refresh_task = None


@app.on_event("startup")
async def start_background_refresh():
    """Validate configuration and start the periodic cache refresh."""
    service: NewsService = app.state.news_service
    check_configuration(settings, service.config)

    if settings.REFRESH_INTERVAL_SECONDS > 0:
        logger.info("Refreshing news every %ds", settings.REFRESH_INTERVAL_SECONDS)
        app.state.refresh_task = asyncio.create_task(
            run_periodic_refresh(service, settings.REFRESH_INTERVAL_SECONDS, now_utc)
        )


@app.on_event("shutdown")
async def stop_background_refresh():
    task = app.state.refresh_task
    if task is not None:
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        app.state.refresh_task = None


# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    last_refreshed = app.state.news_service.last_refreshed
    return {
        "status": "ok",
        "as_of": now_utc().isoformat(),
        "service": "tension-dashboard-api",
        "last_refreshed": last_refreshed.isoformat() if last_refreshed else None,
    }


@app.get(
    "/api/news",
    response_model=NewsResponse,
    responses={502: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def get_news(
    category: Optional[Category] = Query(None, description="Only return articles in this category"),
    search: Optional[str] = Query(None, max_length=200, description="Match against title or description"),
    priority: bool = Query(False, description="Only return priority articles"),
):
    """
    Annotated articles for the configured query plus analytics.

    Served from the cache while it is younger than the configured TTL.
    """
    service: NewsService = app.state.news_service

    try:
        entry = await service.get_news(now_utc())
    except SourceUnavailableError as e:
        logger.error("Upstream news fetch failed: %s", e)
        return JSONResponse(
            status_code=502,
            content=ErrorResponse(error="Failed to fetch news data", detail=str(e)).model_dump(),
        )
    except Exception as e:
        logger.exception("Error processing news")
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error="Internal server error", detail=str(e)).model_dump(),
        )

    return filter_articles(entry.data, category, search, priority)


if __name__ == "__main__":
    # For development
    import uvicorn
    uvicorn.run("tension_dashboard.main:app", host="0.0.0.0", port=settings.PORT, reload=True)
