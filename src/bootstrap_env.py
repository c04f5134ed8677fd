"""
Bootstrap environment for Streamlit Cloud & local dev:
- Copy st.secrets into uppercase os.environ keys (nested tables -> PREFIX_CHILD)
- If GOOGLE_CREDENTIALS_JSON is provided in secrets, write it to a temp file and
  point GOOGLE_APPLICATION_CREDENTIALS at it (private sheet source only)
- Finally, load .env (without overriding existing env vars)
"""

from __future__ import annotations

import json
import os
import re
import tempfile
from typing import Any, Dict, Iterator, Tuple

import streamlit as st
from dotenv import load_dotenv

CREDENTIALS_FILE_NAME = "meeting-records-google-credentials.json"


def _env_key(key: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]", "_", key.upper())


def _walk_secrets(prefix: str, value: Any) -> Iterator[Tuple[str, str]]:
    if isinstance(value, dict):
        for child_key, child_value in value.items():
            yield from _walk_secrets(f"{prefix}_{child_key}", child_value)
    else:
        yield _env_key(prefix), str(value)


def _secrets_dict() -> Dict[str, Any]:
    try:
        secrets = getattr(st, "secrets", None)
        if not secrets:
            return {}
        return secrets.to_dict()  # type: ignore[attr-defined]
    except Exception:
        # No secrets.toml outside Streamlit Cloud
        return {}


def _secrets_to_env(secrets: Dict[str, Any]) -> None:
    for key, value in secrets.items():
        for env_key, env_value in _walk_secrets(key, value):
            os.environ.setdefault(env_key, env_value)


def _write_google_credentials(secrets: Dict[str, Any]) -> None:
    """Materialize inline service account JSON unless a usable file is already set."""
    existing = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    if existing and os.path.exists(existing):
        return
    creds = secrets.get("GOOGLE_CREDENTIALS_JSON")
    if not creds:
        return
    if isinstance(creds, dict):
        content = json.dumps(creds)
    else:
        content = str(creds)
        try:
            json.loads(content)
        except ValueError:
            return
    path = os.path.join(tempfile.gettempdir(), CREDENTIALS_FILE_NAME)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
    os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = path


def ensure_env() -> None:
    """Idempotent: safe to call inside and outside the Streamlit runtime."""
    secrets = _secrets_dict()
    _secrets_to_env(secrets)
    _write_google_credentials(secrets)
    load_dotenv()


# Execute on import for the Streamlit main process, but also allow explicit calls elsewhere.
ensure_env()
