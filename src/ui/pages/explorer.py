from __future__ import annotations

from typing import List

import streamlit as st

from src.data.frames import FRAME_COLUMNS, records_to_frame
from src.data.records import MeetingRecord
from src.ui.components.tables import render_table
from src.ui.pages.context import PageContext

DEFAULT_COLUMNS = [
    "date_label",
    "student",
    "project",
    "topic",
    "subtopics",
    "action_items",
    "link",
]


def render(records: List[MeetingRecord], context: PageContext) -> None:
    st.subheader("Explorer")
    if not records:
        st.info("No meetings to explore.")
        return

    df = records_to_frame(records)
    selected_columns = st.multiselect(
        "Columns to display",
        options=[c for c in FRAME_COLUMNS if c != "date"],
        default=DEFAULT_COLUMNS,
        key="mr_explorer_columns",
    )
    if not selected_columns:
        st.info("Select at least one column.")
        return

    column_config = {
        "date_label": st.column_config.TextColumn("Date"),
        "my_inputs": st.column_config.TextColumn("Supervisor Inputs", width="large"),
        "action_items": st.column_config.TextColumn("Action Points"),
        "link": st.column_config.LinkColumn("Materials", display_text="Open"),
    }
    render_table(
        df[selected_columns],
        column_config=column_config,
        height=500,
        export_file_name="meeting_records_filtered.csv",
        export_df=df.drop(columns=["date"]),
    )
    st.caption("The download contains every column for the filtered meetings.")
