"""
AFINN-based lexical sentiment scoring.

Each word or phrase found in the AFINN word list contributes its integer
valence (-5..+5); the article score is the sum of those hits, so it is
unbounded in both directions.
"""
from __future__ import annotations

import re
from functools import lru_cache
from typing import List

from tension_dashboard.models import SentimentResult

_WORD_RE = re.compile(r"[a-z0-9']+")


@lru_cache(maxsize=1)
def _load_lexicon():
    """
    Load the AFINN scorer once per process.

    Raises:
        RuntimeError: If the afinn package is not installed
    """
    try:
        from afinn import Afinn
    except ImportError as e:
        raise RuntimeError(
            "Sentiment lexicon dependency is missing. Install afinn.\n"
            "Try: pip install afinn"
        ) from e

    return Afinn(language="en")


def tokenize(text: str) -> List[str]:
    return _WORD_RE.findall(text.lower())


def analyze_sentiment(text: str) -> SentimentResult:
    """
    Score a text blob against the AFINN lexicon.

    Args:
        text: Article text (title and description)

    Returns:
        SentimentResult with the summed score, the score per token and the
        positive/negative terms that matched, in order of appearance
    """
    tokens = tokenize(text or "")
    if not tokens:
        return SentimentResult(score=0, comparative=0.0)

    afinn = _load_lexicon()
    lowered = text.lower()

    score = 0
    positive: List[str] = []
    negative: List[str] = []
    for term in afinn.find_all(lowered):
        valence = int(afinn.score(term))
        score += valence
        if valence > 0:
            positive.append(term)
        elif valence < 0:
            negative.append(term)

    return SentimentResult(
        score=score,
        comparative=score / len(tokens),
        positive=tuple(positive),
        negative=tuple(negative),
    )
