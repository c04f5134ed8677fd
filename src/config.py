"""
Application-wide configuration: column mapping, sentinels, tabs and settings lookup.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, List, Mapping, Optional

import streamlit as st

ALL_OPTION = "ALL"
UNSPECIFIED_PROJECT = "Unspecified Project"
NO_TOPIC = "(No topic)"
NO_INPUTS = "(No inputs)"

# Headers drift across deployments ("Action Items", "Action To-Dos", ...)
ACTION_HEADER_PATTERN = r"action\s*(points?|items?|to\s*-?\s*dos?|todos?)"


@dataclass(frozen=True)
class ColumnMap:
    """Maps each canonical record field to the CSV header that carries it."""

    timestamp: str = "Timestamp"
    date: str = "Date of Meeting"
    student: str = "Student Name (be consistent)"
    project: str = "Discussed Project Title  (be consistent)"
    topic: str = "Meeting Topic"
    subtopics: str = "Subtopics / Agenda Items"
    my_inputs: str = "Supervisor Inputs & Suggestions"
    link: str = "Link to Additional Materials (Optional)"
    action_points: str = "Action Points"
    meeting_id: Optional[str] = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], base: Optional["ColumnMap"] = None) -> "ColumnMap":
        """Override the named fields of ``base`` (defaults when omitted)."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise ValueError(f"Unknown column map keys: {', '.join(unknown)}")
        overrides = {k: (str(v) if v is not None else None) for k, v in mapping.items()}
        return replace(base or cls(), **overrides)

    def headers(self) -> List[str]:
        return [getattr(self, f.name) for f in fields(self) if getattr(self, f.name)]


DEFAULT_COLUMN_MAP = ColumnMap()


def column_map_from_json(text: str, source: str = "column map") -> ColumnMap:
    """Parse a JSON column map, either flat or nested under a "columns" key."""
    payload = json.loads(text)
    if isinstance(payload, dict) and isinstance(payload.get("columns"), dict):
        payload = payload["columns"]
    if not isinstance(payload, dict):
        raise ValueError(f"Column map must be a JSON object: {source}")
    return ColumnMap.from_mapping(payload)


def load_column_map(path: str | Path) -> ColumnMap:
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Column map file not found: {config_path}")
    return column_map_from_json(config_path.read_text(encoding="utf-8"), source=str(config_path))


@dataclass(frozen=True)
class TabConfig:
    key: str
    label: str


# Ordered tab definitions for the dashboard
TABS: List[TabConfig] = [
    TabConfig("records", "Records"),
    TabConfig("projects", "By Project"),
    TabConfig("overview", "Overview"),
    TabConfig("explorer", "Explorer"),
    TabConfig("data_quality", "Data Quality"),
]


def get_secret(name: str, default: str | None = None) -> str | None:
    """Try env first, then st.secrets (if available)."""
    val = os.getenv(name)
    if val:
        return val
    try:
        sec = getattr(st, "secrets", None)
        if sec:
            v = sec.get(name)  # type: ignore[index]
            return str(v) if v is not None else default
    except Exception:
        # st.secrets raises when no secrets.toml exists outside Streamlit Cloud
        pass
    return default


def resolve_column_map() -> ColumnMap:
    """Column map from COLUMN_MAP_JSON, else COLUMN_MAP_FILE, else the form defaults."""
    inline = get_secret("COLUMN_MAP_JSON")
    if inline:
        return column_map_from_json(inline, source="COLUMN_MAP_JSON")
    path = get_secret("COLUMN_MAP_FILE")
    if path:
        return load_column_map(path)
    return DEFAULT_COLUMN_MAP


def default_csv_url() -> str:
    return get_secret("DEFAULT_CSV_URL", "") or ""


def fetch_timeout() -> Optional[float]:
    raw = get_secret("FETCH_TIMEOUT_SECONDS")
    if not raw:
        return None
    return float(raw)
