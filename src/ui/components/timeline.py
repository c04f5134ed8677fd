"""
Meeting record cards and the per-project accordion timeline.
"""

from __future__ import annotations

from typing import Dict, List, Sequence

import streamlit as st

from src.config import UNSPECIFIED_PROJECT
from src.data.grouping import project_summaries
from src.data.records import MeetingRecord
from src.ui.components.formatting import chips_html


def _section_label(text: str) -> None:
    st.caption(text.upper())


def render_record_card(record: MeetingRecord) -> None:
    with st.container(border=True):
        header = " • ".join(
            [
                f"📅 **{record.date_label or '(no date)'}**",
                record.student or "(no student)",
                f"_{record.project or UNSPECIFIED_PROJECT}_",
            ]
        )
        st.markdown(header)

        _section_label("Meeting Topic")
        st.markdown(f"**{record.topic}**")

        if record.subtopics:
            _section_label("Agenda")
            st.markdown(chips_html(record.subtopics), unsafe_allow_html=True)

        if record.link:
            _section_label("External Materials")
            st.markdown(f"[{record.link}]({record.link})")

        _section_label("Supervisor's Inputs & Suggestions")
        st.write(record.my_inputs)

        if record.action_items:
            _section_label("Action Points")
            st.markdown("\n".join(f"- {item}" for item in record.action_items))


def render_record_list(records: Sequence[MeetingRecord]) -> None:
    if not records:
        st.info("No records to show. Load a CSV or adjust filters.")
        return
    for record in records:
        render_record_card(record)


def render_project_timeline(groups: Dict[str, List[MeetingRecord]], expanded: bool = True) -> None:
    """One expander per project, newest meeting first inside each."""
    if not groups:
        st.info("No records to show. Load a CSV or adjust filters.")
        return
    for summary in project_summaries(groups):
        subtitle = f"{summary.meetings} meeting{'s' if summary.meetings != 1 else ''}"
        if summary.latest_label:
            subtitle += f" · latest {summary.latest_label}"
        if summary.students:
            subtitle += " · " + ", ".join(summary.students)
        with st.expander(f"{summary.project} ({subtitle})", expanded=expanded):
            for record in groups[summary.project]:
                render_record_card(record)
