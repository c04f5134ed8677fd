"""
Load diagnostics: how well the source headers and values fit the column map.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Sequence

from src.config import UNSPECIFIED_PROJECT, ColumnMap
from src.data.records import MeetingRecord, resolve_action_header


def summarize_load(
    rows: Sequence[Mapping[str, str]],
    records: Sequence[MeetingRecord],
    column_map: ColumnMap,
) -> Dict[str, Any]:
    headers: List[str] = list(rows[0].keys()) if rows else []
    undated = [r for r in records if r.date is None]
    return {
        "raw_row_count": len(rows),
        "record_count": len(records),
        "dated_records": len(records) - len(undated),
        "undated_records": len(undated),
        "unparsed_date_labels": sorted({r.date_label for r in undated if r.date_label}),
        "unspecified_project_records": sum(1 for r in records if r.project == UNSPECIFIED_PROJECT),
        "source_columns": headers,
        "missing_columns": [h for h in column_map.headers() if h not in headers] if headers else [],
        "action_column": resolve_action_header(headers, column_map) if headers else None,
    }
