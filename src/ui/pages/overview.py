from __future__ import annotations

from typing import List

import streamlit as st

from src.data.frames import meetings_by, meetings_per_month, records_to_frame
from src.data.records import MeetingRecord
from src.ui.components.charts import bar_chart, render_plotly, timeline_scatter
from src.ui.components.kpi import meeting_cards, render_kpi_cards
from src.ui.pages.context import PageContext


def render(records: List[MeetingRecord], context: PageContext) -> None:
    st.subheader("Overview")
    if not records:
        st.info("No meetings available for the current filter selection.")
        return

    render_kpi_cards(meeting_cards(records), columns=4)

    df = records_to_frame(records)
    monthly = meetings_per_month(df)
    if not monthly.empty:
        render_plotly(bar_chart(monthly, x="period", y="meetings", title="Meetings per Month", yaxis_title="Meetings"))
    else:
        st.caption("No parseable meeting dates to chart.")

    per_project = meetings_by(df, "project")
    render_plotly(
        bar_chart(
            per_project,
            x="meetings",
            y="project",
            orientation="h",
            title="Meetings by Project",
            category_orders={"project": per_project["project"].tolist()},
            text_auto=True,
        )
    )

    dated = df.dropna(subset=["date"])
    if not dated.empty:
        fig = timeline_scatter(
            dated,
            x="date",
            y="project",
            color="student",
            hover_data=["topic", "date_label"],
            title="Meeting Timeline",
        )
        render_plotly(fig)
