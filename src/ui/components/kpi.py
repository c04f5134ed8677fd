from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Sequence, Union

import streamlit as st

from src.data.records import MeetingRecord
from src.ui.components.formatting import format_day, format_number, format_share

KpiValue = Union[int, float, date, None]


@dataclass
class KpiCard:
    label: str
    value: KpiValue = None
    value_display: Optional[str] = None
    decimals: int = 0
    # Reference day for date values; shown as "N days ago" under the value
    as_of: Optional[date] = None
    help_text: Optional[str] = None


def _format_value(card: KpiCard) -> str:
    if card.value_display is not None:
        return card.value_display
    if isinstance(card.value, date):
        return format_day(card.value)
    return format_number(card.value, decimals=card.decimals)


def _format_delta(card: KpiCard) -> Optional[str]:
    if card.as_of is None or not isinstance(card.value, date):
        return None
    day = card.value.date() if isinstance(card.value, datetime) else card.value
    days = (card.as_of - day).days
    if days == 0:
        return "today"
    if days < 0:
        return f"in {-days} day{'s' if days != -1 else ''}"
    return f"{days} day{'s' if days != 1 else ''} ago"


def meeting_cards(records: Sequence[MeetingRecord], today: Optional[date] = None) -> List[KpiCard]:
    """Headline cards for a set of meetings: counts, first/latest date, cadence."""
    today = today or date.today()
    days = sorted(r.date.date() for r in records if r.date is not None)
    with_actions = sum(1 for r in records if r.action_items)

    gap = None
    if len(days) > 1:
        gap = (days[-1] - days[0]).days / (len(days) - 1)

    return [
        KpiCard(label="Meetings", value=len(records)),
        KpiCard(label="Projects", value=len({r.project for r in records})),
        KpiCard(label="Students", value=len({r.student for r in records if r.student})),
        KpiCard(label="First Meeting", value=days[0] if days else None),
        KpiCard(label="Latest Meeting", value=days[-1] if days else None, as_of=today),
        KpiCard(
            label="Avg. Days Between Meetings",
            value=gap,
            decimals=1,
            help_text="Days from the first to the latest dated meeting, over the number of intervals.",
        ),
        KpiCard(
            label="With Action Points",
            value_display=format_share(with_actions, len(records)),
            help_text=f"{with_actions} of {len(records)} meetings list follow-ups.",
        ),
        KpiCard(label="Undated", value=len(records) - len(days)),
    ]


def render_kpi_cards(cards: Sequence[KpiCard], columns: int = 3) -> None:
    """
    Render KPI cards in a responsive grid using Streamlit columns.
    """
    cards = list(cards)
    if not cards:
        st.info("No metrics available for the current filters.")
        return

    columns = max(columns, 1)
    for idx in range(0, len(cards), columns):
        row_cards = cards[idx: idx + columns]
        cols = st.columns(len(row_cards))
        for col, card in zip(cols, row_cards):
            with col:
                st.metric(
                    label=card.label,
                    value=_format_value(card),
                    delta=_format_delta(card),
                    delta_color="off",
                )
                if card.help_text:
                    st.caption(card.help_text)
