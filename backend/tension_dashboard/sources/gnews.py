"""
GNews search API fetcher.
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, List, Mapping, Optional, Tuple

import httpx

from tension_dashboard.config import GNEWS_SEARCH_URL, HTTP_HEADERS
from tension_dashboard.models import RawArticle
from tension_dashboard.sources.common import (
    SourceUnavailableError,
    extract_domain_from_url,
    make_news_id,
    parse_published_datetime,
)
from tension_dashboard.utils import normalize_text

logger = logging.getLogger(__name__)


def _optional_str(value: Any, field: str) -> Optional[str]:
    if value is not None and not isinstance(value, str):
        raise ValueError(f"{field} is not a string: {value!r}")
    return value


def parse_article(entry: Mapping[str, Any], fetched_at: datetime) -> RawArticle:
    """
    Convert one GNews article dict into a RawArticle.

    Args:
        entry: Article object from the ``articles`` array
        fetched_at: Used as the publication time when ``publishedAt`` is missing

    Raises:
        ValueError: If ``publishedAt`` is present but not a date, or a text
            field holds something other than a string
    """
    title = normalize_text(_optional_str(entry.get("title"), "title"))
    description = normalize_text(_optional_str(entry.get("description"), "description"))
    url = _optional_str(entry.get("url"), "url") or ""
    published_at = parse_published_datetime(
        _optional_str(entry.get("publishedAt"), "publishedAt"), default=fetched_at
    )

    source = entry.get("source")
    if not isinstance(source, Mapping):
        source = {}
    source_name = _optional_str(source.get("name"), "source.name")
    if not source_name:
        source_url = _optional_str(source.get("url"), "source.url")
        source_name = extract_domain_from_url(source_url or url)

    return RawArticle(
        id=make_news_id(url, title, published_at),
        published_at=published_at,
        title=title,
        description=description,
        content=_optional_str(entry.get("content"), "content"),
        url=url,
        image=_optional_str(entry.get("image"), "image"),
        source=source_name,
    )


def parse_articles(payload: Any, fetched_at: datetime) -> Tuple[List[RawArticle], int]:
    """
    Convert a GNews search response into RawArticles.

    Args:
        payload: Decoded JSON body
        fetched_at: Time of the fetch

    Returns:
        Tuple of (articles, number of malformed entries skipped)

    Raises:
        SourceUnavailableError: If the body has no ``articles`` list
    """
    entries = payload.get("articles") if isinstance(payload, Mapping) else None
    if not isinstance(entries, list):
        errors = payload.get("errors") if isinstance(payload, Mapping) else None
        raise SourceUnavailableError(f"Invalid API response: {errors or 'missing articles'}")

    articles: List[RawArticle] = []
    skipped = 0

    for entry in entries:
        if not isinstance(entry, Mapping):
            skipped += 1
            continue
        try:
            articles.append(parse_article(entry, fetched_at))
        except ValueError as e:
            logger.warning("Skipping malformed article: %s", e)
            skipped += 1

    return articles, skipped


class GNewsFetcher:
    """Fetches articles for a fixed query from the GNews search API."""

    BASE_URL = GNEWS_SEARCH_URL

    def __init__(
        self,
        api_key: str,
        query: str,
        language: str = "en",
        max_articles: int = 40,
        timeout: float = 15.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.api_key = api_key
        self.query = query
        self.language = language
        self.max_articles = max_articles
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, fetched_at: datetime) -> Tuple[List[RawArticle], int]:
        """
        Run the search request.

        Args:
            fetched_at: Time of the fetch, stamped on undated articles

        Returns:
            Tuple of (articles, number of malformed entries skipped)

        Raises:
            SourceUnavailableError: On transport errors, non-2xx responses or bad payloads
        """
        params = {
            "q": self.query,
            "lang": self.language,
            "max": self.max_articles,
            "token": self.api_key,
        }

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=HTTP_HEADERS,
                transport=self._transport,
            ) as client:
                r = await client.get(self.BASE_URL, params=params)
                r.raise_for_status()
                payload = r.json()
        except httpx.HTTPStatusError as e:
            raise SourceUnavailableError(
                f"GNews error {e.response.status_code}: {e.response.text[:200]}"
            ) from e
        except httpx.HTTPError as e:
            raise SourceUnavailableError(f"GNews request failed: {type(e).__name__}: {e}") from e
        except ValueError as e:
            raise SourceUnavailableError("GNews returned a non-JSON body") from e

        return parse_articles(payload, fetched_at)
