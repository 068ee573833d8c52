"""
Common utilities for news source fetchers.
"""
from __future__ import annotations

import hashlib
from datetime import datetime, timezone
from typing import Optional

from dateutil import parser as dateparser


class SourceUnavailableError(RuntimeError):
    """The upstream provider failed or returned an unusable payload. Retryable."""


def make_news_id(url: str, title: str, published_at: datetime) -> str:
    """
    Generate a deterministic unique ID for a news item.

    Args:
        url: News article URL
        title: News article title
        published_at: Publication timestamp

    Returns:
        16-character hexadecimal string ID
    """
    key = f"{url}|{title}|{published_at.isoformat()}".encode("utf-8", "ignore")
    return hashlib.blake2b(key, digest_size=8).hexdigest()


def parse_published_datetime(date_string: Optional[str], default: datetime) -> datetime:
    """
    Parse a date string, keeping the offset it was published with.

    Args:
        date_string: Date string in various formats, or None
        default: Returned when the input is None/empty

    Returns:
        Timezone-aware datetime. Naive strings are taken as UTC

    Raises:
        ValueError: If the string is not a recognisable date
    """
    if not date_string:
        return default

    try:
        parsed_date = dateparser.parse(date_string)
    except (ValueError, OverflowError, TypeError) as e:
        raise ValueError(f"Unparseable date: {date_string!r}") from e

    if parsed_date.tzinfo is None:
        return parsed_date.replace(tzinfo=timezone.utc)
    return parsed_date


def extract_domain_from_url(url: Optional[str]) -> str:
    """
    Extract domain from URL, handling common variations.

    Args:
        url: Full URL string

    Returns:
        Normalized domain name, empty string if there is no URL
    """
    if not url:
        return ""

    # Remove protocol and path
    domain = url.replace("https://", "").replace("http://", "").split("/")[0]

    # Remove www prefix
    if domain.startswith("www."):
        domain = domain[4:]

    return domain.lower()
