"""Lexicon based sentiment scoring evaluated against labelled text."""

from .config import (
    ClassifierConfig,
    DatasetConfig,
    EvaluationConfig,
    SanitizerConfig,
    get_config,
    get_preset,
)
from .dataset import DatasetError, Record, load_records
from .evaluate import EvaluationResult, Evaluator, run_evaluation
from .metrics import ConfusionMatrix, binary_summary
from .sanitizer import Sanitizer, parse_filters, sanitize
from .sentiment import (
    ConstantScorer,
    PolarityScore,
    SentimentClassifier,
    SentimentScorer,
    TextBlobScorer,
    VaderScorer,
    get_sentiment_scorer,
)

__version__ = "0.1.0"

__all__ = [
    "ClassifierConfig",
    "DatasetConfig",
    "EvaluationConfig",
    "SanitizerConfig",
    "get_config",
    "get_preset",
    "DatasetError",
    "Record",
    "load_records",
    "EvaluationResult",
    "Evaluator",
    "run_evaluation",
    "ConfusionMatrix",
    "binary_summary",
    "Sanitizer",
    "parse_filters",
    "sanitize",
    "PolarityScore",
    "SentimentScorer",
    "VaderScorer",
    "TextBlobScorer",
    "ConstantScorer",
    "SentimentClassifier",
    "get_sentiment_scorer",
]
