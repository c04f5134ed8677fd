"""
Tabular views of meeting records for tables, charts and CSV export.
"""

from __future__ import annotations

from typing import Iterable

import pandas as pd

from src.data.records import MeetingRecord

FRAME_COLUMNS = [
    "date",
    "date_label",
    "student",
    "project",
    "topic",
    "subtopics",
    "my_inputs",
    "action_items",
    "link",
    "meeting_id",
]


def records_to_frame(records: Iterable[MeetingRecord]) -> pd.DataFrame:
    rows = [
        {
            "date": r.date,
            "date_label": r.date_label,
            "student": r.student,
            "project": r.project,
            "topic": r.topic,
            "subtopics": "; ".join(r.subtopics),
            "my_inputs": r.my_inputs,
            "action_items": "; ".join(r.action_items),
            "link": r.link,
            "meeting_id": r.meeting_id,
        }
        for r in records
    ]
    df = pd.DataFrame(rows, columns=FRAME_COLUMNS)
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    return df


def meetings_per_month(df: pd.DataFrame) -> pd.DataFrame:
    """Count of dated meetings per calendar month, gaps filled with zero."""
    if df.empty or "date" not in df.columns:
        return pd.DataFrame(columns=["period", "meetings"])
    dated = df.dropna(subset=["date"])
    if dated.empty:
        return pd.DataFrame(columns=["period", "meetings"])
    counts = (
        dated.set_index("date")
        .sort_index()
        .resample("MS")
        .size()
        .reset_index(name="meetings")
        .rename(columns={"date": "period"})
    )
    return counts


def meetings_by(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """Meeting counts per value of ``column``, largest first."""
    if df.empty or column not in df.columns:
        return pd.DataFrame(columns=[column, "meetings"])
    return (
        df.groupby(column)
        .size()
        .reset_index(name="meetings")
        .sort_values(["meetings", column], ascending=[False, True])
        .reset_index(drop=True)
    )
