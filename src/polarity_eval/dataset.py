"""Load labelled text records from a two-column delimited file."""

from __future__ import annotations

import csv
import logging
import re
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from .config import DatasetConfig

logger = logging.getLogger(__name__)

__all__ = ["Record", "DatasetError", "parse_label", "has_bare_quote", "load_records"]

INT_RE = re.compile(r"[+-]?[0-9]+")


class DatasetError(Exception):
    """Raised when a row cannot be turned into a record."""

    def __init__(self, message: str, line: Optional[int] = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


@dataclass(frozen=True)
class Record:
    true_label: int
    text: str


def parse_label(raw: str, strict: bool = False, line: Optional[int] = None) -> int:
    """Parse an integer label; anything unparseable becomes 0 unless ``strict``."""
    if INT_RE.fullmatch(raw):
        return int(raw)
    if strict:
        raise DatasetError(f"invalid label {raw!r}", line=line)
    logger.debug("Unparseable label %r on line %s, defaulting to 0", raw, line)
    return 0


def _track_lines(lines: Iterable[str], consumed: List[str]) -> Iterator[str]:
    for line in lines:
        consumed.append(line)
        yield line


def has_bare_quote(raw: str, delimiter: str = ",") -> bool:
    """True when a ``"`` appears in a field that is not itself quoted.

    The csv module accepts ``1,he said "hi"`` as a plain field even in strict
    mode; a quote is only legal as the first character of a field.
    """
    field_start = True
    quoted = in_quotes = False
    for ch in raw:
        if field_start:
            field_start = False
            quoted = in_quotes = ch == '"'
            if quoted:
                continue
        if quoted:
            if ch == '"':
                in_quotes = not in_quotes
            elif ch == delimiter and not in_quotes:
                field_start = True
        elif ch == '"':
            return True
        elif ch == delimiter:
            field_start = True
    return False


def load_records(path: Union[str, Path], config: Optional[DatasetConfig] = None) -> List[Record]:
    """Read every record from ``path`` in file order.

    ``OSError`` from opening the file propagates unchanged. Any structural
    problem in a row aborts the whole load with :class:`DatasetError`.
    """
    config = config or DatasetConfig()
    path = Path(path)
    records: List[Record] = []
    expected_fields: Optional[int] = None
    consumed: List[str] = []

    # Long reviews are valid rows; lift the 128 KiB default.
    csv.field_size_limit(sys.maxsize)

    with path.open("r", encoding=config.encoding, newline="") as handle:
        reader = csv.reader(_track_lines(handle, consumed), delimiter=config.delimiter, strict=True)
        while True:
            consumed.clear()
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as exc:
                raise DatasetError(str(exc), line=reader.line_num) from exc

            if not row:
                continue
            if has_bare_quote("".join(consumed), config.delimiter):
                raise DatasetError('bare " in non-quoted field', line=reader.line_num)
            if expected_fields is None:
                expected_fields = len(row)
            elif len(row) != expected_fields:
                raise DatasetError(
                    f"wrong number of fields: expected {expected_fields}, got {len(row)}",
                    line=reader.line_num,
                )
            if len(row) < 2:
                raise DatasetError("expected at least two columns (label, text)", line=reader.line_num)

            label = parse_label(row[0], strict=config.strict_labels, line=reader.line_num)
            records.append(Record(true_label=label, text=row[1]))

    logger.info("Loaded %d records from %s", len(records), path)
    return records
