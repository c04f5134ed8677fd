"""
Layout helpers for the Streamlit application (page setup, data source and filter sidebar).
"""

from __future__ import annotations

import logging
from typing import Any, Callable, List, MutableMapping, Optional

import gspread
import streamlit as st
from google.auth.exceptions import GoogleAuthError

from src.config import ALL_OPTION, default_csv_url, fetch_timeout
from src.data.filters import DEFAULT_FILTERS, MeetingFilters, distinct_options
from src.data.loader import (
    clear_sheet_cache,
    load_rows_from_sheet,
    load_rows_from_upload,
    load_rows_from_url,
    sheet_settings,
)
from src.data.parser import CsvLoadError, RawRow
from src.data.records import MeetingRecord

logger = logging.getLogger(__name__)

ROWS_KEY = "mr_raw_rows"
ERROR_KEY = "mr_load_error"
SOURCE_KEY = "mr_source_label"
AUTOLOADED_KEY = "mr_autoloaded"
URL_KEY = "mr_csv_url"
UPLOAD_KEY = "mr_upload"
FILTER_KEYS = [
    "mr_filter_project",
    "mr_filter_student",
    "mr_filter_date_from",
    "mr_filter_date_to",
    "mr_filter_query",
]


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="Supervisory Meeting Records",
        layout="wide",
        page_icon=":spiral_calendar_pad:",
    )


def current_rows() -> List[RawRow]:
    return st.session_state.get(ROWS_KEY, [])


def apply_load(
    loader: Callable[[], List[RawRow]],
    label: str,
    state: Optional[MutableMapping[str, Any]] = None,
) -> bool:
    """Replace the rows in ``state`` (session_state by default) only when the whole load succeeded."""
    state = st.session_state if state is None else state
    try:
        rows = loader()
    except CsvLoadError as exc:
        logger.warning("Load from %s failed, keeping %d previous rows: %s", label, len(state.get(ROWS_KEY, [])), exc)
        state[ERROR_KEY] = str(exc) or "Failed to load CSV"
        return False
    state[ROWS_KEY] = rows
    state[ERROR_KEY] = ""
    state[SOURCE_KEY] = label
    return True


def load_from_url(url: Optional[str] = None) -> None:
    target = (url if url is not None else st.session_state.get(URL_KEY, "")).strip()
    if not target:
        st.session_state[ERROR_KEY] = "Please enter a CSV URL."
        return
    apply_load(lambda: load_rows_from_url(target, timeout=fetch_timeout()), target)


def _load_from_upload() -> None:
    upload = st.session_state.get(UPLOAD_KEY)
    if upload is None:
        return
    apply_load(lambda: load_rows_from_upload(upload, name=upload.name), upload.name)


def _load_from_sheet() -> None:
    settings = sheet_settings()
    if settings is None:
        return
    spreadsheet_id, worksheet, creds = settings
    try:
        apply_load(lambda: load_rows_from_sheet(spreadsheet_id, worksheet, creds), f"sheet: {worksheet}")
    except (FileNotFoundError, gspread.exceptions.GSpreadException, GoogleAuthError) as exc:
        logger.warning("Private sheet load failed: %s", exc)
        st.session_state[ERROR_KEY] = f"Failed to read Google Sheet: {exc}"


def autoload_default_source() -> None:
    """Load DEFAULT_CSV_URL once per session, if configured."""
    if st.session_state.get(AUTOLOADED_KEY):
        return
    st.session_state[AUTOLOADED_KEY] = True
    url = default_csv_url()
    if url:
        with st.spinner("Loading meeting records…"):
            load_from_url(url)


def refresh_current_source() -> None:
    """Reload whatever the current rows came from (URL or private sheet)."""
    source = st.session_state.get(SOURCE_KEY, "")
    if source.startswith("sheet: "):
        clear_sheet_cache()
        _load_from_sheet()
    elif source.startswith(("http://", "https://")):
        load_from_url(source)


def sidebar_source_ui() -> None:
    st.sidebar.header("Data Source")
    if URL_KEY not in st.session_state:
        st.session_state[URL_KEY] = default_csv_url()
    st.sidebar.text_input(
        "CSV Source URL",
        key=URL_KEY,
        help="Published Google Sheet CSV link (File → Share → Publish to web → CSV).",
    )
    st.sidebar.button("Load", key="mr_load_url", on_click=load_from_url)
    st.sidebar.file_uploader(
        "Upload CSV",
        type=["csv"],
        key=UPLOAD_KEY,
        on_change=_load_from_upload,
    )
    if sheet_settings() is not None:
        st.sidebar.button("Load private sheet", key="mr_load_sheet", on_click=_load_from_sheet)

    error = st.session_state.get(ERROR_KEY)
    if error:
        st.sidebar.error(error)
    source = st.session_state.get(SOURCE_KEY)
    if source:
        st.sidebar.caption(f"Loaded {len(current_rows())} rows from {source}")


def _clear_state_prefixes(prefixes: List[str]) -> None:
    for prefix in prefixes:
        for key in list(st.session_state.keys()):
            if key.startswith(prefix):
                del st.session_state[key]


def _select_with_all(label: str, key: str, options: List[str]) -> str:
    # A reload can drop the previously selected value
    if st.session_state.get(key) not in options:
        st.session_state[key] = ALL_OPTION
    return st.sidebar.selectbox(label, options=options, key=key)


def sidebar_filters_ui(records: List[MeetingRecord], defaults: MeetingFilters = DEFAULT_FILTERS) -> MeetingFilters:
    """
    Render the sidebar filter controls and return the selected values.
    """
    st.sidebar.header("Filters")
    projects, students = distinct_options(records)

    project = _select_with_all("Project", "mr_filter_project", projects)
    student = _select_with_all("Student", "mr_filter_student", students)

    col_from, col_to = st.sidebar.columns(2)
    with col_from:
        date_from = st.date_input("From (date)", value=defaults.date_from, key="mr_filter_date_from")
    with col_to:
        date_to = st.date_input("To (date)", value=defaults.date_to, key="mr_filter_date_to")
    if date_from and date_to and date_from > date_to:
        st.sidebar.warning("From date is after To date; only undated meetings will match.")

    query = st.sidebar.text_input(
        "🔍 Search",
        value=defaults.query,
        placeholder="topic / agenda / inputs",
        key="mr_filter_query",
    )

    if st.sidebar.button("Reset Filters", key="mr_reset_filters", type="primary"):
        _clear_state_prefixes(FILTER_KEYS)
        st.rerun()

    return MeetingFilters(
        project=project or ALL_OPTION,
        student=student or ALL_OPTION,
        date_from=date_from or None,
        date_to=date_to or None,
        query=query or "",
    )
