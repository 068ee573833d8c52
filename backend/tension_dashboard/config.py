"""
Application configuration with environment variable support.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Dict, Tuple

from tension_dashboard.core.lexicon import (
    DEFAULT_CATEGORY_KEYWORDS,
    DEFAULT_PRIORITY_KEYWORDS,
    DEFAULT_STOP_WORDS,
    Category,
    CategoryLexicon,
)


def _get_env_int(key: str, default: int) -> int:
    """Get integer value from environment variable with fallback."""
    try:
        return int(os.getenv(key, default))
    except (ValueError, TypeError):
        return default


def _get_env_list(key: str, default: list[str], separator: str = ",") -> list[str]:
    """Get list value from environment variable with fallback."""
    value = os.getenv(key)
    if not value:
        return default
    return [item.strip() for item in value.split(separator) if item.strip()]


def _get_env_keywords(key: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Keyword list override; keywords are matched lower-cased."""
    return tuple(item.lower() for item in _get_env_list(key, list(default)))


@dataclass(frozen=True)
class PriorityThresholds:
    # Sentiment must be strictly below these values
    diplomatic_sentiment: int = -2
    keyword_sentiment: int = -3


@dataclass(frozen=True)
class SignificantEventThresholds:
    military_sentiment: int = -3
    diplomatic_sentiment: int = -4


@dataclass(frozen=True)
class CrisisThresholds:
    """Counts are of recent articles with sentiment below ``negative_sentiment``."""

    window_hours: int = 48
    negative_sentiment: int = -2
    severe_military: int = 5
    severe_combined: int = 8
    elevated_military: int = 3
    elevated_combined: int = 5
    moderate_military: int = 1
    moderate_diplomatic: int = 2


@dataclass(frozen=True)
class AnalysisConfig:
    """Everything the annotation and analytics stages read from configuration."""

    category_keywords: CategoryLexicon = field(default_factory=lambda: dict(DEFAULT_CATEGORY_KEYWORDS))
    priority_keywords: Tuple[str, ...] = DEFAULT_PRIORITY_KEYWORDS
    stop_words: frozenset[str] = frozenset(DEFAULT_STOP_WORDS)
    priority: PriorityThresholds = field(default_factory=PriorityThresholds)
    significant_events: SignificantEventThresholds = field(default_factory=SignificantEventThresholds)
    crisis: CrisisThresholds = field(default_factory=CrisisThresholds)
    trending_limit: int = 10


def load_analysis_config() -> AnalysisConfig:
    """Build the analysis configuration, honouring keyword overrides from the environment."""
    category_keywords: Dict[Category, Tuple[str, ...]] = {
        category: _get_env_keywords(f"{category.value.upper()}_KEYWORDS", keywords)
        for category, keywords in DEFAULT_CATEGORY_KEYWORDS.items()
    }
    return AnalysisConfig(
        category_keywords=category_keywords,
        priority_keywords=_get_env_keywords("PRIORITY_KEYWORDS", DEFAULT_PRIORITY_KEYWORDS),
        stop_words=frozenset(_get_env_keywords("STOP_WORDS", DEFAULT_STOP_WORDS)),
        trending_limit=_get_env_int("TRENDING_LIMIT", 10),
    )


DEFAULT_ANALYSIS_CONFIG = AnalysisConfig()

# Upstream provider
GNEWS_SEARCH_URL: str = os.getenv("GNEWS_SEARCH_URL", "https://gnews.io/api/v4/search")

# HTTP Client Configuration
USER_AGENT = "tension-dashboard/0.1"
HTTP_HEADERS = {"User-Agent": USER_AGENT}

# CORS Configuration
CORS_ALLOW_ORIGINS: list[str] = _get_env_list("CORS_ALLOW_ORIGINS", ["*"])

# Logging Configuration
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT: str = os.getenv(
    "LOG_FORMAT",
    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
