# tension_dashboard/schemas.py
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, Optional

from tension_dashboard.core.lexicon import Category, CrisisLevel


class CamelModel(BaseModel):
    # JSON uses camelCase keys (publishedAt, isPriority, ...)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SentimentDetail(CamelModel):
    score: int
    comparative: float
    positive_terms: list[str] = Field(default_factory=list)
    negative_terms: list[str] = Field(default_factory=list)


class Article(CamelModel):
    id: str
    title: str
    description: str = ""
    content: str = ""
    url: str = ""
    image: str = ""
    source: str = ""
    published_at: datetime
    category: Category
    sentiment_score: int
    sentiment_detail: SentimentDetail
    is_priority: bool


class SentimentCounts(CamelModel):
    positive: int = 0
    neutral: int = 0
    negative: int = 0


class TimelinePoint(CamelModel):
    date: str                                 # YYYY-MM-DD
    count: int = 0
    military: int = 0
    diplomatic: int = 0
    economic: int = 0
    social: int = 0
    other: int = 0


class TrendingKeyword(CamelModel):
    word: str
    count: int


class RecentInsight(CamelModel):
    title: str
    date: datetime
    source: str


class ToneInsight(CamelModel):
    title: str
    sentiment: int
    category: Category
    source: str


class KeyInsights(CamelModel):
    most_recent: Optional[RecentInsight] = None
    most_negative: Optional[ToneInsight] = None
    most_positive: Optional[ToneInsight] = None


class SignificantEvent(CamelModel):
    title: str
    date: datetime
    category: Category
    sentiment: int
    source: str
    url: str


class AnalyticsSummary(CamelModel):
    categories: Dict[str, int]
    sentiment_counts: SentimentCounts
    timeline_data: list[TimelinePoint]
    trending_keywords: list[TrendingKeyword]
    key_insights: KeyInsights
    significant_events: list[SignificantEvent]
    crisis_level: CrisisLevel
    last_updated: datetime


class NewsResponse(CamelModel):
    articles: list[Article]
    analytics: Optional[AnalyticsSummary] = None   # None when no articles came back
    skipped: int = 0                               # malformed provider entries dropped
    cached_at: Optional[datetime] = None


class ErrorResponse(BaseModel):
    error: str
    detail: str = ""
