from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple

from src.config import UNSPECIFIED_PROJECT
from src.data.records import MeetingRecord


def sort_by_date_desc(records: Iterable[MeetingRecord]) -> List[MeetingRecord]:
    """Newest first; undated records last. Stable for equal dates."""
    # sorted(reverse=True) keeps the input order of equal keys
    return sorted(records, key=lambda r: r.sort_key, reverse=True)


def group_by_project(records: Iterable[MeetingRecord]) -> Dict[str, List[MeetingRecord]]:
    """Partition by project (first-seen order) and sort each partition by date."""
    groups: Dict[str, List[MeetingRecord]] = {}
    for record in records:
        groups.setdefault(record.project or UNSPECIFIED_PROJECT, []).append(record)
    return {project: sort_by_date_desc(items) for project, items in groups.items()}


@dataclass(frozen=True)
class ProjectSummary:
    project: str
    meetings: int
    latest_label: str
    students: Tuple[str, ...]


def project_summaries(groups: Dict[str, List[MeetingRecord]]) -> List[ProjectSummary]:
    summaries = []
    for project, items in groups.items():
        students = tuple(sorted({r.student for r in items if r.student}))
        latest = items[0].date_label if items else ""
        summaries.append(ProjectSummary(project, len(items), latest, students))
    return summaries
