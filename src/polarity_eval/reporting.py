"""Render evaluation metrics to stdout, JSON and images."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import seaborn as sns
from rich.console import Console
from rich.table import Table
from sklearn.metrics import classification_report

from .config import EvaluationConfig
from .evaluate import EvaluationResult
from .metrics import METRIC_ORDER, ConfusionMatrix, binary_summary

logger = logging.getLogger(__name__)


def metric_lines(matrix: ConfusionMatrix) -> List[str]:
    values = binary_summary(matrix)
    return [f"{name}: {values[name]:.3f}" for name in METRIC_ORDER]


def print_report(matrix: ConfusionMatrix) -> None:
    for line in metric_lines(matrix):
        print(line)


def render_matrix(matrix: ConfusionMatrix, console: Optional[Console] = None) -> Table:
    """Print the confusion matrix as a rich table (rows are gold labels)."""
    table = Table(title=f"Confusion matrix (N={matrix.total})")
    table.add_column("Gold \\ Pred", style="bold")
    for label in matrix.labels:
        table.add_column(str(label), justify="right")
    for label in matrix.labels:
        table.add_row(str(label), *(str(c) for c in matrix.row(label)))
    (console or Console()).print(table)
    return table


def _serialize_report(report: Dict[str, Any]) -> Dict[str, Any]:
    serializable = {}
    for label, metrics in report.items():
        if isinstance(metrics, dict):
            serializable[label] = {k: int(v) if k == 'support' else float(v) for k, v in metrics.items()}
        else:
            serializable[label] = float(metrics)
    return serializable


def build_metrics_payload(result: EvaluationResult, config: Optional[EvaluationConfig] = None) -> Dict[str, Any]:
    matrix = result.matrix
    report = classification_report(
        result.y_true,
        result.y_pred,
        labels=list(matrix.labels),
        output_dict=True,
        zero_division=0,
    ) if result.y_true else {}
    payload = {
        "records": matrix.total,
        "filters": list(result.filters),
        "metrics": binary_summary(matrix),
        "confusion_matrix": {"labels": list(matrix.labels), "matrix": matrix.as_lists()},
        "classification_report": _serialize_report(report),
    }
    if config is not None:
        payload["config"] = config.to_dict()
    return payload


def save_metrics_json(path: Path, result: EvaluationResult, config: Optional[EvaluationConfig] = None) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(build_metrics_payload(result, config), f, indent=2)
    logger.info("Saved metrics to %s", path)
    return path


def plot_confusion_matrix(matrix: ConfusionMatrix, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    labels = [str(label) for label in matrix.labels]
    plt.figure(figsize=(6, 5))
    sns.heatmap(matrix.as_lists(), annot=True, fmt="d", xticklabels=labels, yticklabels=labels, cmap="Blues")
    plt.ylabel("Gold")
    plt.xlabel("Predicted")
    plt.tight_layout()
    plt.savefig(path)
    plt.close()
    logger.info("Saved confusion matrix plot to %s", path)
    return path
