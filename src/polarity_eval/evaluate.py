"""Evaluation driver: load, sanitize, classify and accumulate metrics."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Tuple, Union

from tqdm import tqdm

from .config import EvaluationConfig
from .dataset import Record, load_records
from .metrics import BINARY_LABELS, ConfusionMatrix, binary_summary
from .sanitizer import Sanitizer
from .sentiment import SentimentClassifier, SentimentScorer, get_sentiment_scorer

logger = logging.getLogger(__name__)

__all__ = ["EvaluationResult", "Evaluator", "run_evaluation"]


@dataclass
class EvaluationResult:
    y_true: List[int]
    y_pred: List[int]
    matrix: ConfusionMatrix
    filters: List[str] = field(default_factory=list)

    def metrics(self) -> Dict[str, float]:
        """Derived metrics, in reporting order."""
        return binary_summary(self.matrix)


class Evaluator:
    """Score records with an injected scorer and fill a confusion matrix."""

    def __init__(self, config: Optional[EvaluationConfig] = None, scorer: Optional[SentimentScorer] = None) -> None:
        self.config = (config or EvaluationConfig()).validate()
        self.sanitizer = Sanitizer(self.config.sanitizer)
        self.classifier = SentimentClassifier(
            scorer or get_sentiment_scorer(self.config.scorer),
            self.config.classifier,
        )

    def predict(self, text: str) -> int:
        return self.classifier.classify(self.sanitizer(text).strip())

    def _score_chunk(self, records: Sequence[Record], progress: Optional[tqdm] = None) -> Tuple[List[int], ConfusionMatrix]:
        matrix = ConfusionMatrix(BINARY_LABELS)
        predictions = []
        for record in records:
            predicted = self.predict(record.text)
            matrix.observe(record.true_label, predicted)
            predictions.append(predicted)
            if progress is not None:
                progress.update(1)
        return predictions, matrix

    def evaluate_records(self, records: Sequence[Record]) -> EvaluationResult:
        y_true = [record.true_label for record in records]
        workers = min(self.config.max_workers, max(len(records), 1))

        with tqdm(total=len(records), desc="Scoring", unit="record", disable=not self.config.show_progress) as progress:
            if workers == 1:
                y_pred, matrix = self._score_chunk(records, progress)
            else:
                size = -(-len(records) // workers)
                chunks = [records[i:i + size] for i in range(0, len(records), size)]
                logger.info("Scoring %d records in %d chunks", len(records), len(chunks))
                with ThreadPoolExecutor(max_workers=workers) as executor:
                    partials = list(executor.map(lambda chunk: self._score_chunk(chunk, progress), chunks))
                y_pred = []
                matrix = ConfusionMatrix(BINARY_LABELS)
                for predictions, partial in partials:
                    y_pred.extend(predictions)
                    matrix.merge(partial)

        return EvaluationResult(y_true=y_true, y_pred=y_pred, matrix=matrix, filters=self.sanitizer.filters)

    def evaluate_file(self, path: Union[str, Path]) -> EvaluationResult:
        logger.info("Loading dataset: %s", path)
        records = load_records(path, self.config.dataset)

        logger.info(
            "Scoring %d records: scorer=%s, filters=%s",
            len(records),
            getattr(self.classifier.scorer, "name", type(self.classifier.scorer).__name__),
            self.sanitizer.filters or "none",
        )
        result = self.evaluate_records(records)
        logger.info("Evaluation complete: Acc=%.3f over %d records", result.matrix.accuracy(), result.matrix.total)
        return result


def run_evaluation(
    path: Union[str, Path],
    config: Optional[EvaluationConfig] = None,
    scorer: Optional[SentimentScorer] = None,
) -> EvaluationResult:
    """Evaluate the dataset at ``path``; see :class:`Evaluator`."""
    return Evaluator(config, scorer).evaluate_file(path)
