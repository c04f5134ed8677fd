"""
Utility helpers for formatting counts, percentages and record fields.
"""

from __future__ import annotations

import html
from datetime import date
from typing import Iterable, Optional


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return "–"
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def format_percent(value: Optional[float], decimals: int = 1) -> str:
    if value is None:
        return "–"
    try:
        return f"{value:.{decimals}f}%"
    except (TypeError, ValueError):
        return "–"


def format_share(part: int, total: int, decimals: int = 1) -> str:
    if total <= 0:
        return "–"
    return format_percent(part / total * 100, decimals=decimals)


def format_day(value: Optional[date]) -> str:
    if value is None:
        return "–"
    return value.strftime("%d %b %Y")


def chips_html(items: Iterable[str]) -> str:
    """Agenda items as rounded inline badges (escaped)."""
    style = (
        "display:inline-block;border:1px solid #d0d0d0;border-radius:999px;"
        "padding:0 8px;margin:0 6px 4px 0;font-size:0.8rem;"
    )
    return "".join(f'<span style="{style}">{html.escape(item)}</span>' for item in items)
