"""
Loading raw rows from a published CSV URL, an uploaded file, or a private
Google Sheet read through a service account.

Every loader parses the full payload before returning, so callers can swap
the session's rows in one step and keep the previous rows on failure.
"""

from __future__ import annotations

import logging
import os
import time
from typing import BinaryIO, List, Optional, Tuple, Union

import gspread
import httpx
import streamlit as st
from google.oauth2.service_account import Credentials

from src.config import get_secret
from src.data.parser import CsvFetchError, CsvParseError, RawRow, parse_csv_text, rows_from_values

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache",
    "Pragma": "no-cache",
}


def cache_busted_url(url: str, now: Optional[float] = None) -> str:
    """Append a millisecond timestamp so caches between us and the sheet are bypassed."""
    bust = int((time.time() if now is None else now) * 1000)
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}t={bust}"


def fetch_csv_text(
    url: str,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
) -> str:
    """GET the CSV payload. Non-2xx responses and transport errors raise CsvFetchError."""
    url = (url or "").strip()
    if not url:
        raise CsvFetchError("Please enter a CSV URL.")

    target = cache_busted_url(url)
    kwargs = {"headers": NO_CACHE_HEADERS, "follow_redirects": True}
    if timeout is not None:
        kwargs["timeout"] = timeout
    try:
        if client is not None:
            resp = client.get(target, **kwargs)
        else:
            resp = httpx.get(target, **kwargs)
    except httpx.HTTPError as exc:
        logger.warning("CSV fetch failed for %s: %s", url, exc)
        raise CsvFetchError(str(exc) or "Failed to fetch CSV") from exc

    if not resp.is_success:
        logger.warning("CSV fetch for %s returned HTTP %s", url, resp.status_code)
        raise CsvFetchError(f"HTTP {resp.status_code}")
    return resp.text


def _log_loaded(source: str, rows: List[RawRow]) -> None:
    columns = list(rows[0].keys()) if rows else []
    logger.info("Loaded rows from %s: %d, columns: %s", source, len(rows), columns)


def load_rows_from_url(
    url: str,
    client: Optional[httpx.Client] = None,
    timeout: Optional[float] = None,
) -> List[RawRow]:
    text = fetch_csv_text(url, client=client, timeout=timeout)
    rows = parse_csv_text(text)
    _log_loaded(url, rows)
    return rows


def load_rows_from_upload(upload: Union[bytes, BinaryIO], name: str = "upload") -> List[RawRow]:
    """Parse an uploaded CSV (bytes or file-like, e.g. Streamlit's UploadedFile)."""
    data = upload if isinstance(upload, bytes) else upload.read()
    if isinstance(data, str):
        text = data
    else:
        try:
            text = data.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise CsvParseError(f"{name} is not UTF-8 encoded CSV") from exc
    rows = parse_csv_text(text)
    _log_loaded(name, rows)
    return rows


def sheet_settings() -> Optional[Tuple[str, str, str]]:
    """(spreadsheet_id, worksheet, credentials_file) when a private sheet is configured."""
    spreadsheet_id = get_secret("SPREADSHEET_ID")
    if not spreadsheet_id:
        return None
    worksheet = get_secret("WORKSHEET_NAME", "Form Responses 1") or "Form Responses 1"
    creds = get_secret("GOOGLE_APPLICATION_CREDENTIALS", "google-credentials.json") or ""
    return spreadsheet_id, worksheet, creds


def load_rows_from_sheet(spreadsheet_id: str, worksheet: str, service_account_file: str) -> List[RawRow]:
    """Resolve credentials, then read the worksheet through the cached implementation."""
    if not os.path.exists(service_account_file):
        raise FileNotFoundError(f"Service account file not found: {service_account_file}")
    return _load_sheet_impl(spreadsheet_id, worksheet, service_account_file)


@st.cache_data(show_spinner=False, ttl=600)
def _load_sheet_impl(spreadsheet_id: str, worksheet: str, service_account_file: str) -> List[RawRow]:
    """Cached by spreadsheet_id, worksheet and service_account_file."""
    credentials = Credentials.from_service_account_file(service_account_file, scopes=SCOPES)
    client = gspread.authorize(credentials)
    ws = client.open_by_key(spreadsheet_id).worksheet(worksheet)
    rows = rows_from_values(ws.get_all_values())
    _log_loaded(f"sheet {spreadsheet_id}/{worksheet}", rows)
    return rows


def clear_sheet_cache() -> None:
    _load_sheet_impl.clear()  # type: ignore[attr-defined]
