"""
Reusable helper for rendering record tables with a CSV download.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import pandas as pd
import streamlit as st


def render_table(
    df: pd.DataFrame,
    column_config: Optional[Dict[str, Any]] = None,
    height: int = 400,
    show_index: bool = False,
    export_file_name: str = "export.csv",
    export_df: Optional[pd.DataFrame] = None,
) -> None:
    if df.empty:
        st.info("No rows to display.")
        return

    st.dataframe(
        df,
        use_container_width=True,
        height=height,
        hide_index=not show_index,
        column_config={k: v for k, v in (column_config or {}).items() if k in df.columns},
    )

    source = export_df if export_df is not None else df
    csv_bytes = source.to_csv(index=show_index).encode("utf-8")
    st.download_button(
        "Download CSV",
        data=csv_bytes,
        file_name=export_file_name,
        mime="text/csv",
    )
