"""Named text filters applied to each record before sentiment scoring."""

from __future__ import annotations

import logging
import unicodedata
from typing import Callable, Dict, List, Optional, Sequence

from .config import SanitizerConfig

logger = logging.getLogger(__name__)

__all__ = [
    "PUNCTUATION_MARKS",
    "FILTERS",
    "Sanitizer",
    "lowercase",
    "normalize",
    "replace",
    "replace_all",
    "parse_filters",
    "sanitize",
]

# Applied in this order; "..." comes after "." so a leading period of an
# ellipsis is consumed first.
PUNCTUATION_MARKS = (".", ";", "...", ":", ",", "\"")

# Letters that carry no combining mark under NFD and need an explicit mapping.
_TRANSLITERATIONS = {
    "ø": "o", "Ø": "O",
    "ł": "l", "Ł": "L",
    "đ": "d", "Đ": "D",
    "ħ": "h", "Ħ": "H",
    "ı": "i",
    "ŧ": "t", "Ŧ": "T",
    "ß": "ss",
    "æ": "ae", "Æ": "AE",
    "œ": "oe", "Œ": "OE",
    "ð": "d", "Ð": "D",
    "þ": "th", "Þ": "TH",
}
_TRANSLATION_TABLE = str.maketrans(_TRANSLITERATIONS)


def lowercase(text: str) -> str:
    return text.lower()


def normalize(text: str) -> str:
    """Replace accented characters with their base letters (``café`` -> ``cafe``)."""
    if text.isascii():
        return text
    decomposed = unicodedata.normalize("NFD", text.translate(_TRANSLATION_TABLE))
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def replace(text: str) -> str:
    """Swap the first occurrence of each punctuation mark for a space.

    Only the first match per mark is replaced: ``"a.b.c"`` becomes ``"a b.c"``.
    """
    for mark in PUNCTUATION_MARKS:
        text = text.replace(mark, " ", 1)
    return text


def replace_all(text: str) -> str:
    """Swap every occurrence of each punctuation mark for a space."""
    for mark in PUNCTUATION_MARKS:
        text = text.replace(mark, " ")
    return text


FILTERS: Dict[str, Callable[[str], str]] = {
    "lowercase": lowercase,
    "normalize": normalize,
    "replace": replace,
}


def parse_filters(raw: Optional[str]) -> List[str]:
    """Split a comma separated CLI value into an ordered filter list."""
    if not raw:
        return []
    return raw.split(",")


def sanitize(text: str, filters: Sequence[str], replace_every: bool = False) -> str:
    """Run ``text`` through ``filters`` in order; unknown names are skipped."""
    if not filters:
        return text

    for name in filters:
        if name == "replace" and replace_every:
            text = replace_all(text)
            continue
        func = FILTERS.get(name)
        if func is None:
            logger.debug("Ignoring unknown filter %r", name)
            continue
        text = func(text)
    return text


class Sanitizer:
    """Callable bundling a :class:`SanitizerConfig`."""

    def __init__(self, config: Optional[SanitizerConfig] = None) -> None:
        self.config = config or SanitizerConfig()

    @property
    def filters(self) -> List[str]:
        return list(self.config.filters)

    def __call__(self, text: str) -> str:
        return sanitize(text, self.config.filters, replace_every=self.config.replace_all)
