from __future__ import annotations

from typing import List

import streamlit as st

from src.data.grouping import group_by_project
from src.data.records import MeetingRecord
from src.ui.components.timeline import render_project_timeline
from src.ui.pages.context import PageContext


def render(records: List[MeetingRecord], context: PageContext) -> None:
    st.subheader("Timeline by Project")
    groups = group_by_project(records)
    expand_all = st.toggle("Expand all projects", value=len(groups) <= 3, key="mr_projects_expand")
    render_project_timeline(groups, expanded=expand_all)
