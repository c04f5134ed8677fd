from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from src.data.filters import MeetingFilters
from src.data.records import MeetingRecord


@dataclass
class PageContext:
    records: List[MeetingRecord]
    filters: MeetingFilters
    diagnostics: Dict[str, Any] = field(default_factory=dict)
