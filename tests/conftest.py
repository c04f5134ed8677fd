from __future__ import annotations

from datetime import datetime
from typing import Dict, Optional

import pytest

from src.config import DEFAULT_COLUMN_MAP
from src.data.records import MeetingRecord

SAMPLE_CSV = (
    "Date of Meeting,Student Name (be consistent),Discussed Project Title  (be consistent),"
    "Meeting Topic,Subtopics / Agenda Items,Supervisor Inputs & Suggestions\n"
    "2025-01-10,Alice,ProjA,Kickoff,Scope; Timeline,Looks good\n"
    "2025-02-10,Alice,ProjA,Review,Data; Results,Needs more data\n"
)


@pytest.fixture
def sample_csv() -> str:
    return SAMPLE_CSV


@pytest.fixture
def form_row():
    """Build a raw row keyed by the default form headers."""

    def _build(**fields: str) -> Dict[str, str]:
        return {getattr(DEFAULT_COLUMN_MAP, name): value for name, value in fields.items()}

    return _build


@pytest.fixture
def make_record():
    def _build(
        project: str = "P1",
        student: str = "X",
        when: Optional[str] = None,
        topic: str = "Topic",
        **kwargs,
    ) -> MeetingRecord:
        date = datetime.fromisoformat(when) if when else None
        label = date.strftime("%Y-%m-%d") if date else ""
        return MeetingRecord(
            date=date,
            date_label=label,
            project=project,
            student=student,
            topic=topic,
            **kwargs,
        )

    return _build
