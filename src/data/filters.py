"""
Filter utilities that apply the sidebar filters to the meeting records.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple

from src.config import ALL_OPTION
from src.data.grouping import sort_by_date_desc
from src.data.records import MeetingRecord


@dataclass
class MeetingFilters:
    project: str = ALL_OPTION
    student: str = ALL_OPTION
    date_from: Optional[date] = None
    date_to: Optional[date] = None
    query: str = ""


DEFAULT_FILTERS = MeetingFilters()


def _haystack(record: MeetingRecord) -> str:
    parts = [
        record.student,
        record.project,
        record.topic,
        " ".join(record.subtopics),
        record.my_inputs,
    ]
    return " \n ".join(parts).lower()


def _as_day(value: Optional[date]) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    return value


def _matches(record: MeetingRecord, filters: MeetingFilters, query: str) -> bool:
    if filters.project != ALL_OPTION and record.project != filters.project:
        return False
    if filters.student != ALL_OPTION and record.student != filters.student:
        return False

    # Undated records are never excluded by the date bounds
    if record.date is not None:
        day = record.date.date()
        date_from = _as_day(filters.date_from)
        date_to = _as_day(filters.date_to)
        if date_from is not None and day < date_from:
            return False
        if date_to is not None and day > date_to:
            return False

    if query and query not in _haystack(record):
        return False
    return True


def apply_filters(records: Iterable[MeetingRecord], filters: MeetingFilters) -> List[MeetingRecord]:
    """
    Keep the records that satisfy every active filter, newest first.
    """
    query = (filters.query or "").strip().lower()
    kept = [r for r in records if _matches(r, filters, query)]
    return sort_by_date_desc(kept)


def distinct_options(records: Iterable[MeetingRecord]) -> Tuple[List[str], List[str]]:
    """Project and student selector options, each led by the ALL wildcard."""
    projects = set()
    students = set()
    for record in records:
        if record.project:
            projects.add(record.project)
        if record.student:
            students.add(record.student)
    return [ALL_OPTION] + sorted(projects), [ALL_OPTION] + sorted(students)


def is_default(filters: MeetingFilters) -> bool:
    return filters == DEFAULT_FILTERS


def serialize_filters(filters: MeetingFilters) -> Dict[str, Any]:
    """
    Convert the filters to a JSON-serialisable dictionary to be stored in
    session_state or written to the log.
    """
    return {
        "project": filters.project,
        "student": filters.student,
        "date_from": filters.date_from.isoformat() if filters.date_from else None,
        "date_to": filters.date_to.isoformat() if filters.date_to else None,
        "query": filters.query,
    }
