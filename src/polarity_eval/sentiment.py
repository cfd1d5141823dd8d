"""Polarity scorers and the threshold classifier built on top of them."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from textblob import TextBlob
from vaderSentiment.vaderSentiment import SentimentIntensityAnalyzer

from .config import ClassifierConfig

logger = logging.getLogger(__name__)

__all__ = [
    "PolarityScore",
    "SentimentScorer",
    "VaderScorer",
    "TextBlobScorer",
    "ConstantScorer",
    "get_sentiment_scorer",
    "SentimentClassifier",
    "POSITIVE",
    "NEGATIVE",
]

POSITIVE = 1
NEGATIVE = 0


@dataclass(frozen=True)
class PolarityScore:
    compound: float
    positive: float = 0.0
    neutral: float = 0.0
    negative: float = 0.0


class SentimentScorer:
    """Base interface for polarity back-ends."""

    name = "base"

    def polarity_scores(self, text: str) -> PolarityScore:
        """Return a :class:`PolarityScore` for ``text``."""
        raise NotImplementedError


class VaderScorer(SentimentScorer):
    """Adapter around the VADER lexicon and rule based analyzer."""

    name = "vader"

    def __init__(self, analyzer: Optional[SentimentIntensityAnalyzer] = None) -> None:
        self.analyzer = analyzer or SentimentIntensityAnalyzer()

    def polarity_scores(self, text: str) -> PolarityScore:
        scores = self.analyzer.polarity_scores(text)
        return PolarityScore(
            compound=float(scores.get("compound", 0.0)),
            positive=float(scores.get("pos", 0.0)),
            neutral=float(scores.get("neu", 0.0)),
            negative=float(scores.get("neg", 0.0)),
        )


class TextBlobScorer(SentimentScorer):
    """Adapter around TextBlob's pattern based polarity."""

    name = "textblob"

    def polarity_scores(self, text: str) -> PolarityScore:
        if not text or not text.strip():
            return PolarityScore(compound=0.0, neutral=1.0)
        polarity = float(TextBlob(text).sentiment.polarity)
        polarity = max(min(polarity, 1.0), -1.0)
        return PolarityScore(
            compound=polarity,
            positive=max(polarity, 0.0),
            neutral=1.0 - abs(polarity),
            negative=max(-polarity, 0.0),
        )


class ConstantScorer(SentimentScorer):
    """Scorer that returns the same compound value for every input."""

    name = "constant"

    def __init__(self, compound: float = 0.0) -> None:
        self.compound = compound

    def polarity_scores(self, text: str) -> PolarityScore:
        return PolarityScore(compound=self.compound)


def get_sentiment_scorer(name: str) -> SentimentScorer:
    name = name.lower()
    if name == 'vader':
        return VaderScorer()
    elif name == 'textblob':
        return TextBlobScorer()
    else:
        raise ValueError(f"Unknown sentiment scorer: '{name}'. Available: 'vader', 'textblob'.")


class SentimentClassifier:
    """Turn a compound polarity score into a binary label.

    Scores at or above ``pos_threshold`` are positive, scores at or below
    ``neg_threshold`` are negative, and anything in between falls back to
    ``neutral_label`` (negative by default).
    """

    def __init__(self, scorer: SentimentScorer, config: Optional[ClassifierConfig] = None) -> None:
        self.scorer = scorer
        self.config = config or ClassifierConfig()
        self.config.validate()

    def label_for_score(self, compound: float) -> int:
        if compound >= self.config.pos_threshold:
            return POSITIVE
        if compound <= self.config.neg_threshold:
            return NEGATIVE
        logger.debug("Neutral compound %.4f mapped to label %d", compound, self.config.neutral_label)
        return self.config.neutral_label

    def score(self, text: str) -> PolarityScore:
        return self.scorer.polarity_scores(text)

    def classify(self, text: str) -> int:
        return self.label_for_score(self.score(text).compound)
