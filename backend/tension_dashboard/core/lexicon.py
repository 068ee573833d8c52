"""
Static keyword tables and label enums used by the annotation pipeline.
"""
from __future__ import annotations

from enum import Enum
from typing import Dict, Tuple


class Category(str, Enum):
    """Dominant topic of an article. Declaration order is the tie-break order."""

    MILITARY = "military"
    DIPLOMATIC = "diplomatic"
    ECONOMIC = "economic"
    SOCIAL = "social"
    OTHER = "other"


# Categories that have keyword tables; OTHER is the fallback label
SCORED_CATEGORIES: Tuple[Category, ...] = (
    Category.MILITARY,
    Category.DIPLOMATIC,
    Category.ECONOMIC,
    Category.SOCIAL,
)


class CrisisLevel(str, Enum):
    """Four-tier severity over recent negative military/diplomatic coverage."""

    NORMAL = "normal"
    MODERATE = "moderate"
    ELEVATED = "elevated"
    SEVERE = "severe"

    @property
    def rank(self) -> int:
        return _CRISIS_RANKS[self]


_CRISIS_RANKS = {
    CrisisLevel.NORMAL: 0,
    CrisisLevel.MODERATE: 1,
    CrisisLevel.ELEVATED: 2,
    CrisisLevel.SEVERE: 3,
}


CategoryLexicon = Dict[Category, Tuple[str, ...]]

DEFAULT_CATEGORY_KEYWORDS: CategoryLexicon = {
    Category.MILITARY: (
        "military", "army", "defense", "weapons", "troops", "soldier",
        "war", "combat", "attack", "missile", "security force", "border",
        "terrorist", "airforce", "navy", "artillery", "ceasefire",
    ),
    Category.DIPLOMATIC: (
        "diplomatic", "talks", "embassy", "minister", "peace", "treaty",
        "negotiate", "relation", "dialogue", "summit", "delegation",
        "diplomat", "foreign", "agreement", "bilateral", "cooperation",
    ),
    Category.ECONOMIC: (
        "trade", "sanctions", "economy", "business", "market", "export",
        "import", "investment", "economic", "finance", "commerce",
        "tariff", "stock", "currency", "inflation", "gdp", "fiscal",
    ),
    Category.SOCIAL: (
        "cultural", "people", "society", "civilian", "humanitarian",
        "refugee", "education", "health", "religion", "festival",
        "tradition", "community", "social", "public", "citizen",
    ),
}

# Distinct from the category tables; drives the priority flag
DEFAULT_PRIORITY_KEYWORDS: Tuple[str, ...] = (
    "attack", "war", "missile", "conflict", "crisis", "military",
    "border", "violated", "threat", "army", "defense", "security",
    "nuclear", "weapon", "terrorism", "tension", "dispute",
)

DEFAULT_STOP_WORDS: Tuple[str, ...] = (
    "the", "and", "of", "in", "to", "a", "is", "for", "on", "with", "as", "at", "by",
    "that", "this", "from", "have", "has", "been", "were", "will", "would", "their",
    "they", "them", "there", "which", "what", "when", "where", "while", "after",
    "before", "about", "into", "over", "said", "says", "also", "more", "than",
    "amid", "some", "such", "other", "your", "just",
)


__all__ = [
    "Category",
    "CategoryLexicon",
    "CrisisLevel",
    "DEFAULT_CATEGORY_KEYWORDS",
    "DEFAULT_PRIORITY_KEYWORDS",
    "DEFAULT_STOP_WORDS",
    "SCORED_CATEGORIES",
]
