"""
Normalization of raw CSV rows into canonical meeting records.

A `RecordNormalizer` is built with a `ColumnMap` and turns each raw row into
exactly one `MeetingRecord`. It never raises on row content: missing or
unparseable values degrade to empty strings or sentinel values so that a
single malformed row can't abort a load.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from src.config import (
    ACTION_HEADER_PATTERN,
    DEFAULT_COLUMN_MAP,
    NO_INPUTS,
    NO_TOPIC,
    UNSPECIFIED_PROJECT,
    ColumnMap,
)

# Tried in order; slash dates are month-first like the Google Forms export.
# Zoned ISO timestamps come back as naive UTC.
DATE_PATTERNS: List[str] = [
    "%Y-%m-%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%dT%H:%M:%S",
    "%Y-%m-%dT%H:%M:%S.%f",
    "%Y-%m-%dT%H:%M:%S%z",
    "%Y-%m-%dT%H:%M:%S.%f%z",
    "%Y/%m/%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
    "%d %B %Y",
    "%d %b %Y",
    "%B %d, %Y",
    "%b %d, %Y",
    "%B %d %Y",
    "%b %d %Y",
]

_LIST_SPLIT = re.compile(r"[;\n]")
_ACTION_HEADER = re.compile(ACTION_HEADER_PATTERN, re.IGNORECASE)


@dataclass(frozen=True)
class MeetingRecord:
    meeting_id: str = ""
    date: Optional[datetime] = None
    date_label: str = ""
    student: str = ""
    project: str = UNSPECIFIED_PROJECT
    topic: str = NO_TOPIC
    subtopics: Tuple[str, ...] = ()
    my_inputs: str = NO_INPUTS
    link: str = ""
    action_items: Tuple[str, ...] = ()
    raw: Mapping[str, str] = field(default_factory=dict, compare=False, repr=False)

    @property
    def sort_key(self) -> Tuple[bool, datetime]:
        """Dated records before undated ones when sorted descending."""
        return (self.date is not None, self.date or datetime.min)


def split_list(text: Optional[str]) -> List[str]:
    """Split on semicolons or newlines, trim, and drop empties. Commas are kept."""
    if not text:
        return []
    return [piece.strip() for piece in _LIST_SPLIT.split(str(text)) if piece.strip()]


def parse_date(value: Optional[str]) -> Optional[datetime]:
    """Parse ``value`` against DATE_PATTERNS; None when no pattern matches."""
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    for fmt in DATE_PATTERNS:
        parsed = pd.to_datetime(text, format=fmt, errors="coerce")
        if pd.isna(parsed):
            continue
        if parsed.tzinfo is not None:
            parsed = parsed.tz_convert("UTC").tz_localize(None)
        return parsed.to_pydatetime()
    return None


def pick_column(raw: Mapping[str, str], preferred: Optional[str], pattern: re.Pattern) -> Optional[str]:
    """Exact header first, then the first header (in row order) matching ``pattern``."""
    if preferred and preferred in raw:
        return raw[preferred]
    for key in raw:
        if pattern.search(key):
            return raw[key]
    return None


def resolve_action_header(headers: Iterable[str], column_map: ColumnMap = DEFAULT_COLUMN_MAP) -> Optional[str]:
    """Header that `pick_column` would read action items from, for diagnostics."""
    headers = list(headers)
    if column_map.action_points in headers:
        return column_map.action_points
    return next((h for h in headers if _ACTION_HEADER.search(h)), None)


class RecordNormalizer:
    """Builds MeetingRecords from raw rows according to one column mapping."""

    def __init__(self, column_map: ColumnMap = DEFAULT_COLUMN_MAP) -> None:
        self.column_map = column_map

    def _value(self, raw: Mapping[str, str], header: Optional[str]) -> str:
        if not header:
            return ""
        value = raw.get(header)
        return "" if value is None else str(value)

    def normalize(self, raw: Mapping[str, str]) -> MeetingRecord:
        cm = self.column_map
        date_raw = self._value(raw, cm.date) or self._value(raw, cm.timestamp)
        date = parse_date(date_raw)
        action_raw = pick_column(raw, cm.action_points, _ACTION_HEADER) or ""

        return MeetingRecord(
            meeting_id=self._value(raw, cm.meeting_id),
            date=date,
            date_label=date.strftime("%Y-%m-%d") if date else date_raw,
            student=self._value(raw, cm.student),
            project=self._value(raw, cm.project) or UNSPECIFIED_PROJECT,
            topic=self._value(raw, cm.topic) or NO_TOPIC,
            subtopics=tuple(split_list(self._value(raw, cm.subtopics))),
            my_inputs=self._value(raw, cm.my_inputs) or NO_INPUTS,
            link=self._value(raw, cm.link),
            action_items=tuple(split_list(action_raw)),
            raw=dict(raw),
        )

    def normalize_all(self, rows: Iterable[Mapping[str, str]]) -> List[MeetingRecord]:
        return [self.normalize(row) for row in rows]


def normalize_record(raw: Mapping[str, str], column_map: ColumnMap = DEFAULT_COLUMN_MAP) -> MeetingRecord:
    return RecordNormalizer(column_map).normalize(raw)
