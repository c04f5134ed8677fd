from __future__ import annotations

from typing import List

import streamlit as st

from src.data.records import DATE_PATTERNS, MeetingRecord
from src.ui.components.kpi import KpiCard, render_kpi_cards
from src.ui.pages.context import PageContext


def render(records: List[MeetingRecord], context: PageContext) -> None:
    st.subheader("Data Quality")
    diagnostics = context.diagnostics
    if not diagnostics or not diagnostics.get("raw_row_count"):
        st.info("No diagnostics available yet. Load a CSV first.")
        return

    render_kpi_cards(
        [
            KpiCard(label="Rows Loaded", value=diagnostics["raw_row_count"]),
            KpiCard(label="Undated Meetings", value=diagnostics["undated_records"]),
            KpiCard(label="Unspecified Project", value=diagnostics["unspecified_project_records"]),
        ],
        columns=3,
    )

    missing = diagnostics.get("missing_columns") or []
    if missing:
        st.warning("Configured headers not found in the source: " + ", ".join(f"`{h}`" for h in missing))
    action_column = diagnostics.get("action_column")
    st.write(f"- **Action points column**: {f'`{action_column}`' if action_column else 'not found'}")

    unparsed = diagnostics.get("unparsed_date_labels") or []
    if unparsed:
        st.markdown("#### Unparsed Dates")
        st.write(", ".join(f"`{label}`" for label in unparsed))

    with st.expander("Source columns", expanded=False):
        for header in diagnostics.get("source_columns", []):
            st.write(f"- `{header}`")

    st.markdown("#### Definitions")
    st.write(
        """
        - **Date**: the meeting date column, falling back to the form timestamp when empty.
        - **Zoned timestamps**: ISO values with `Z` or an offset are shown in UTC.
        - **Undated**: neither column matched a known format; such meetings sort last and are
          never hidden by the date range filter.
        - **Unspecified Project**: rows with an empty project column, grouped together.
        - **Action points**: the configured column, or the first header that reads like
          "Action Items" / "Action To-Dos".
        """
    )
    st.caption("Accepted date formats: " + ", ".join(f"`{p}`" for p in DATE_PATTERNS))
