from __future__ import annotations

from typing import List

import streamlit as st

from src.data.records import MeetingRecord
from src.ui.components.timeline import render_record_list
from src.ui.pages.context import PageContext


def render(records: List[MeetingRecord], context: PageContext) -> None:
    st.subheader("Records")
    render_record_list(records)
