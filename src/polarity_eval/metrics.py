"""Incremental confusion matrix with per-class classification metrics."""

from __future__ import annotations

from collections import Counter
from typing import Dict, Hashable, Iterable, List, Sequence, Tuple

__all__ = ["ConfusionMatrix", "BINARY_LABELS", "METRIC_ORDER", "binary_summary"]

BINARY_LABELS: Tuple[int, ...] = (0, 1)


def _ratio(numerator: int, denominator: int) -> float:
    return numerator / denominator if denominator else 0.0


class ConfusionMatrix:
    """Counts of (true, predicted) label pairs over a fixed label set.

    Every query returns 0.0 when its denominator is zero, including
    ``accuracy`` on an empty matrix.
    """

    def __init__(self, labels: Sequence[Hashable] = BINARY_LABELS) -> None:
        if len(set(labels)) != len(labels):
            raise ValueError("labels must be unique")
        self.labels: Tuple[Hashable, ...] = tuple(labels)
        self._counts: Counter = Counter()

    @classmethod
    def from_pairs(
        cls,
        y_true: Iterable[Hashable],
        y_pred: Iterable[Hashable],
        labels: Sequence[Hashable] = BINARY_LABELS,
    ) -> "ConfusionMatrix":
        y_true, y_pred = list(y_true), list(y_pred)
        if len(y_true) != len(y_pred):
            raise ValueError(f"length mismatch: {len(y_true)} true vs {len(y_pred)} predicted labels")
        matrix = cls(labels)
        for actual, predicted in zip(y_true, y_pred):
            matrix.observe(actual, predicted)
        return matrix

    def _check(self, label: Hashable) -> None:
        if label not in self.labels:
            raise ValueError(f"label {label!r} is not one of {self.labels}")

    def observe(self, actual: Hashable, predicted: Hashable) -> None:
        self._check(actual)
        self._check(predicted)
        self._counts[(actual, predicted)] += 1

    def merge(self, other: "ConfusionMatrix") -> "ConfusionMatrix":
        """Add the counts of ``other`` into this matrix and return ``self``."""
        if other.labels != self.labels:
            raise ValueError("cannot merge matrices with different label sets")
        self._counts.update(other._counts)
        return self

    def count(self, actual: Hashable, predicted: Hashable) -> int:
        return self._counts[(actual, predicted)]

    @property
    def total(self) -> int:
        return sum(self._counts.values())

    def row(self, actual: Hashable) -> List[int]:
        """Counts for one true label, ordered by predicted label."""
        self._check(actual)
        return [self._counts[(actual, predicted)] for predicted in self.labels]

    def as_lists(self) -> List[List[int]]:
        return [self.row(label) for label in self.labels]

    def accuracy(self) -> float:
        correct = sum(self._counts[(label, label)] for label in self.labels)
        return _ratio(correct, self.total)

    def precision(self, label: Hashable) -> float:
        self._check(label)
        predicted = sum(self._counts[(actual, label)] for actual in self.labels)
        return _ratio(self._counts[(label, label)], predicted)

    def sensitivity(self, label: Hashable) -> float:
        self._check(label)
        actual = sum(self._counts[(label, predicted)] for predicted in self.labels)
        return _ratio(self._counts[(label, label)], actual)

    recall = sensitivity

    def f1(self, label: Hashable) -> float:
        precision = self.precision(label)
        sensitivity = self.sensitivity(label)
        if precision + sensitivity == 0:
            return 0.0
        return 2 * precision * sensitivity / (precision + sensitivity)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ConfusionMatrix):
            return NotImplemented
        return self.labels == other.labels and self.as_lists() == other.as_lists()

    def __repr__(self) -> str:
        return f"ConfusionMatrix(labels={self.labels!r}, rows={self.as_lists()!r})"


METRIC_ORDER = (
    "Accuracy",
    "Precision 1",
    "Precision 0",
    "Sensitivity 1",
    "Sensitivity 0",
    "F1 - 1",
    "F1 - 0",
)


def binary_summary(matrix: ConfusionMatrix) -> Dict[str, float]:
    """Accuracy plus per-class precision, sensitivity and F1, in ``METRIC_ORDER``."""
    return {
        "Accuracy": matrix.accuracy(),
        "Precision 1": matrix.precision(1),
        "Precision 0": matrix.precision(0),
        "Sensitivity 1": matrix.sensitivity(1),
        "Sensitivity 0": matrix.sensitivity(0),
        "F1 - 1": matrix.f1(1),
        "F1 - 0": matrix.f1(0),
    }
