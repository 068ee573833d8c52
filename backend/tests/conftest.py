from datetime import datetime, timedelta, timezone

import pytest

from tension_dashboard.core.lexicon import Category
from tension_dashboard.models import AnnotatedArticle, SentimentResult

NOW = datetime(2024, 1, 3, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def make_article():
    """Factory for annotated articles with just the fields a test cares about."""
    counter = {"n": 0}

    def _make(
        title="Untitled",
        description="",
        category=Category.OTHER,
        sentiment=0,
        published_at=None,
        hours_ago=1,
        source="Example News",
        url=None,
        is_priority=False,
    ):
        counter["n"] += 1
        n = counter["n"]
        return AnnotatedArticle(
            id=f"article-{n}",
            title=title,
            description=description,
            content="",
            url=url or f"https://example.com/{n}",
            image="",
            source=source,
            published_at=published_at or NOW - timedelta(hours=hours_ago),
            category=category,
            sentiment=SentimentResult(score=sentiment, comparative=0.0),
            is_priority=is_priority,
        )

    return _make
