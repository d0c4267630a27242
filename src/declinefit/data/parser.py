"""Parser for delimited production rate text.

Input Format
------------

One record per line: a date followed by a rate, separated by commas, tabs
or whitespace. An optional header line is skipped when it starts with
"date", "month" or "time" (case-insensitive).

Accepted date forms, tried in order:
    - YYYY-MM-DD or YYYY-MM
    - MM/DD/YYYY
    - YYYY/MM/DD or YYYY/MM

Lines with an unrecognized date, an unparsable rate or a negative rate are
dropped silently. Day-of-month is ignored when computing time offsets.

Example Input
-------------

```csv
Date,Rate
2020-01-01,1000
2020-02-01,950
2020-03-01,900
```
"""

from dataclasses import dataclass
from datetime import date
import logging
import math
import re

import numpy as np

from ..errors import ParseError

logger = logging.getLogger(__name__)

_HEADER_RE = re.compile(r"^(date|month|time)", re.IGNORECASE)
_FIELD_SPLIT_RE = re.compile(r"[,\s]+")

# (pattern, year group, month group, day group)
_DATE_PATTERNS = [
    (re.compile(r"^(\d{4})-(\d{1,2})(?:-(\d{1,2}))?$"), 1, 2, 3),
    (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), 3, 1, 2),
    (re.compile(r"^(\d{4})/(\d{1,2})(?:/(\d{1,2}))?$"), 1, 2, 3),
]


@dataclass(frozen=True)
class ProductionRecord:
    """Single production observation.

    Attributes:
        date: Calendar date of the observation
        rate: Production rate (non-negative)
    """
    date: date
    rate: float


@dataclass(frozen=True)
class ParsedProduction:
    """Time-ordered production series.

    Attributes:
        records: Records sorted ascending by date (duplicates kept)
        time: Whole months elapsed since the earliest record (time[0] == 0)
        rates: Rates in the same order as records
    """
    records: tuple[ProductionRecord, ...]
    time: np.ndarray
    rates: np.ndarray

    @property
    def n_records(self) -> int:
        return len(self.records)

    @property
    def first_date(self) -> date:
        return self.records[0].date

    @property
    def last_date(self) -> date:
        return self.records[-1].date

    @property
    def last_month(self) -> int:
        """Month offset of the last observation (default forecast start)."""
        return int(self.time[-1])


def parse_date(value: str) -> date | None:
    """Parse a date string in one of the supported formats.

    Args:
        value: Date text

    Returns:
        Parsed date, or None if no format matches or the date is invalid
    """
    for pattern, year_idx, month_idx, day_idx in _DATE_PATTERNS:
        match = pattern.match(value)
        if match is None:
            continue
        year = int(match.group(year_idx))
        month = int(match.group(month_idx))
        day = int(match.group(day_idx) or 1)
        try:
            return date(year, month, day)
        except ValueError:
            return None
    return None


def months_between(start: date, end: date) -> int:
    """Whole calendar months from start to end, ignoring day-of-month."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def _parse_line(line: str) -> ProductionRecord | None:
    parts = _FIELD_SPLIT_RE.split(line)
    if len(parts) < 2:
        return None

    record_date = parse_date(parts[0])
    if record_date is None:
        return None

    try:
        rate = float(parts[1])
    except ValueError:
        return None

    # Rejects NaN as well as negatives
    if not rate >= 0 or not math.isfinite(rate):
        return None

    return ProductionRecord(date=record_date, rate=rate)


def parse_production(text: str) -> ParsedProduction:
    """Parse delimited production text into a time-ordered series.

    Args:
        text: Raw text, one ``<date>,<rate>`` record per line

    Returns:
        ParsedProduction with records sorted by date

    Raises:
        ParseError: If no valid records are found
    """
    records = []
    discarded = 0

    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or _HEADER_RE.match(stripped):
            continue

        record = _parse_line(stripped)
        if record is None:
            discarded += 1
            continue
        records.append(record)

    if discarded:
        logger.debug(f"Discarded {discarded} unparsable line(s)")

    if not records:
        raise ParseError(
            "No valid production records found",
            suggestion="Expected lines like '2020-01-01,1000'",
        )

    # Stable sort: same-date records keep input order
    records.sort(key=lambda r: r.date)

    first_date = records[0].date
    time = np.array([months_between(first_date, r.date) for r in records], dtype=int)
    rates = np.array([r.rate for r in records], dtype=float)
    time.setflags(write=False)
    rates.setflags(write=False)

    return ParsedProduction(records=tuple(records), time=time, rates=rates)
