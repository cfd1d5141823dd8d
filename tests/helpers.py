import csv
import os
import tempfile

from polarity_eval.sentiment import PolarityScore, SentimentScorer


class KeywordScorer(SentimentScorer):
    """Looks texts up in a fixed table and remembers every text it saw."""

    name = "keyword"

    def __init__(self, table, default=0.0):
        self.table = dict(table)
        self.default = default
        self.seen = []

    def polarity_scores(self, text):
        self.seen.append(text)
        return PolarityScore(compound=self.table.get(text, self.default))


def write_csv(rows, directory=None):
    handle, path = tempfile.mkstemp(suffix=".csv", dir=directory)
    with os.fdopen(handle, "w", newline="", encoding="utf-8") as f:
        csv.writer(f).writerows(rows)
    return path


def write_text(content, directory=None):
    handle, path = tempfile.mkstemp(suffix=".csv", dir=directory)
    with os.fdopen(handle, "w", newline="", encoding="utf-8") as f:
        f.write(content)
    return path
