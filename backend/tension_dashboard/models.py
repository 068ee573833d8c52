"""
File: tension_dashboard/models.py
Internal data structures used during fetching/annotation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from tension_dashboard.core.lexicon import Category


@dataclass(frozen=True)
class RawArticle:
    """Article as returned by the news provider.

    Text fields are untrusted and may be missing; they are normalised to empty
    strings by the annotator, never further downstream.
    """

    id: str
    published_at: datetime
    title: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    url: Optional[str] = None
    image: Optional[str] = None
    source: Optional[str] = None  # publisher name, e.g. "Dawn" or "The Hindu"


@dataclass(frozen=True)
class SentimentResult:
    score: int
    comparative: float
    positive: Tuple[str, ...] = ()
    negative: Tuple[str, ...] = ()


@dataclass(frozen=True)
class AnnotatedArticle:
    """Provider article plus the labels computed from its title and description."""

    id: str
    title: str
    description: str
    content: str
    url: str
    image: str
    source: str
    published_at: datetime
    category: Category
    sentiment: SentimentResult
    is_priority: bool

    @property
    def sentiment_score(self) -> int:
        return self.sentiment.score

    @property
    def text(self) -> str:
        return f"{self.title} {self.description}"


__all__ = ["AnnotatedArticle", "RawArticle", "SentimentResult"]
