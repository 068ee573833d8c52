from datetime import datetime, timedelta, timezone

from tension_dashboard.config import AnalysisConfig
from tension_dashboard.core.analytics import (
    build_analytics,
    build_timeline,
    count_categories,
    count_sentiments,
    extract_keywords,
    key_insights,
    significant_events,
    trending_keywords,
)
from tension_dashboard.core.lexicon import Category, CrisisLevel

STOP_WORDS = AnalysisConfig().stop_words


def on(day, hour=12):
    return datetime(2024, 1, day, hour, tzinfo=timezone.utc)


def test_empty_input_has_no_analytics(now):
    assert build_analytics([], now) is None


def test_categories_are_zero_filled(make_article):
    counts = count_categories([
        make_article(category=Category.MILITARY),
        make_article(category=Category.MILITARY),
        make_article(category=Category.SOCIAL),
    ])
    assert counts == {"military": 2, "diplomatic": 0, "economic": 0, "social": 1, "other": 0}


def test_sentiment_counts_partition_articles(make_article):
    articles = [make_article(sentiment=s) for s in (-5, -1, 0, 0, 2, 7)]
    counts = count_sentiments(articles)
    assert (counts.positive, counts.neutral, counts.negative) == (2, 2, 2)
    assert counts.positive + counts.neutral + counts.negative == len(articles)


def test_timeline_groups_by_date(make_article):
    articles = [
        make_article(published_at=on(2), category=Category.ECONOMIC),
        make_article(published_at=on(1, 9), category=Category.MILITARY),
        make_article(published_at=on(1, 18), category=Category.MILITARY),
    ]
    timeline = build_timeline(articles)
    assert [point.model_dump() for point in timeline] == [
        {"date": "2024-01-01", "count": 2, "military": 2, "diplomatic": 0,
         "economic": 0, "social": 0, "other": 0},
        {"date": "2024-01-02", "count": 1, "military": 0, "diplomatic": 0,
         "economic": 1, "social": 0, "other": 0},
    ]


def test_timeline_uses_the_published_local_date(make_article):
    ist = timezone(timedelta(hours=5, minutes=30))
    # 2024-01-01 20:30 UTC
    article = make_article(published_at=datetime(2024, 1, 2, 2, 0, tzinfo=ist))
    assert [point.date for point in build_timeline([article])] == ["2024-01-02"]


def test_keyword_extraction_rules():
    words = extract_keywords("The army and 2024 troops with talks: Army moved", STOP_WORDS)
    assert words == ["army", "troops", "talks:", "army", "moved"]


def test_trending_keywords_ranking(make_article):
    articles = [
        make_article(title="border talks", description="border talks border"),
        make_article(title="summit border", description="summit"),
        make_article(title="cricket"),
    ]
    trending = trending_keywords(articles, STOP_WORDS)
    assert [(k.word, k.count) for k in trending] == [
        ("border", 4), ("talks", 2), ("summit", 2), ("cricket", 1),
    ]


def test_trending_keywords_limit_and_order(make_article):
    words = [f"word{chr(97 + i)}" for i in range(15)]
    articles = [make_article(title=" ".join(words[:i + 1])) for i in range(15)]
    trending = trending_keywords(articles, STOP_WORDS)
    counts = [k.count for k in trending]
    assert len(trending) == 10
    assert counts == sorted(counts, reverse=True)
    assert trending[0].word == "worda"


def test_key_insights(make_article):
    first_low = make_article(title="first low", sentiment=-4, published_at=on(1))
    second_low = make_article(title="second low", sentiment=-4, published_at=on(2))
    high = make_article(title="high", sentiment=3, published_at=on(2), source="Dawn")
    insights = key_insights([first_low, second_low, high])

    assert insights.most_recent.title == "second low"
    assert insights.most_negative.title == "first low"
    assert insights.most_positive.title == "high"
    assert insights.most_positive.source == "Dawn"


def test_significant_events_thresholds(make_article):
    articles = [
        make_article(title="clash", category=Category.MILITARY, sentiment=-4),
        make_article(title="skirmish", category=Category.MILITARY, sentiment=-3),
        make_article(title="walkout", category=Category.DIPLOMATIC, sentiment=-5),
        make_article(title="spat", category=Category.DIPLOMATIC, sentiment=-4),
        make_article(title="crash", category=Category.ECONOMIC, sentiment=-10),
    ]
    events = significant_events(articles)
    assert [e.title for e in events] == ["clash", "walkout"]
    assert events[0].url == articles[0].url
    assert events[0].date == articles[0].published_at


def test_full_summary(make_article, now):
    articles = [
        make_article(title="troops attack border", category=Category.MILITARY, sentiment=-4),
        make_article(title="peace summit planned", category=Category.DIPLOMATIC, sentiment=2),
    ]
    summary = build_analytics(articles, now)

    assert summary.last_updated == now
    assert summary.crisis_level is CrisisLevel.MODERATE
    assert summary.categories["military"] == 1
    assert len(summary.significant_events) == 1
    assert summary.key_insights.most_negative.title == "troops attack border"

    data = summary.model_dump(by_alias=True, mode="json")
    assert set(data) == {
        "categories", "sentimentCounts", "timelineData", "trendingKeywords",
        "keyInsights", "significantEvents", "crisisLevel", "lastUpdated",
    }
    assert data["crisisLevel"] == "moderate"
    assert set(data["keyInsights"]) == {"mostRecent", "mostNegative", "mostPositive"}
