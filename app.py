import src.bootstrap_env  # must be first to set env/secrets
import logging

import streamlit as st

from src.config import ALL_OPTION, TABS, get_secret, resolve_column_map
from src.data.filters import apply_filters, is_default, serialize_filters
from src.data.quality import summarize_load
from src.data.records import RecordNormalizer
from src.ui.components.formatting import format_number
from src.ui.layout import (
    autoload_default_source,
    current_rows,
    refresh_current_source,
    setup_page,
    sidebar_filters_ui,
    sidebar_source_ui,
)
from src.ui.pages import (
    overview,
    records as records_page,
    projects,
    explorer,
    data_quality,
)
from src.ui.pages.context import PageContext

logging.basicConfig(
    level=(get_secret("LOG_LEVEL", "INFO") or "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


PAGE_RENDERERS = {
    "records": records_page.render,
    "projects": projects.render,
    "overview": overview.render,
    "explorer": explorer.render,
    "data_quality": data_quality.render,
}


def _active_filter_summary(filters, total_rows: int) -> None:
    badges = []
    if filters.project != ALL_OPTION:
        badges.append(f"Project: {filters.project}")
    if filters.student != ALL_OPTION:
        badges.append(f"Student: {filters.student}")
    if filters.date_from or filters.date_to:
        start = filters.date_from.isoformat() if filters.date_from else "…"
        end = filters.date_to.isoformat() if filters.date_to else "…"
        badges.append(f"Dates: {start} – {end}")
    if filters.query.strip():
        badges.append(f'Search: "{filters.query.strip()}"')

    summary_text = "Active Filters: " + " | ".join(badges) if badges else "Active Filters: All meetings"
    st.markdown(f"**{summary_text}**")
    st.caption(f"Showing {format_number(total_rows, 0)} meetings after filters.")


def main() -> None:
    setup_page()
    st.title("Supervisory Meeting Records")

    autoload_default_source()
    sidebar_source_ui()
    if st.sidebar.button("🔄 Refresh Data"):
        refresh_current_source()
        st.rerun()

    try:
        column_map = resolve_column_map()
    except (OSError, ValueError) as exc:
        st.error(f"Invalid column map configuration: {exc}")
        return

    raw_rows = current_rows()
    records = RecordNormalizer(column_map).normalize_all(raw_rows)

    filters = sidebar_filters_ui(records)
    filtered = apply_filters(records, filters)
    st.session_state["mr_active_filters"] = serialize_filters(filters)
    if not is_default(filters):
        logger.debug("Filters %s kept %d of %d meetings", serialize_filters(filters), len(filtered), len(records))

    if not raw_rows:
        st.info("No records loaded yet. Paste a published CSV URL and click Load, or upload a CSV export.")
        return

    _active_filter_summary(filters, len(filtered))

    context = PageContext(
        records=records,
        filters=filters,
        diagnostics=summarize_load(raw_rows, records, column_map),
    )

    tab_labels = [tab.label for tab in TABS]
    streamlit_tabs = st.tabs(tab_labels)

    for streamlit_tab, tab_config in zip(streamlit_tabs, TABS):
        renderer = PAGE_RENDERERS.get(tab_config.key)
        if renderer is None:
            continue
        with streamlit_tab:
            renderer(filtered, context)


if __name__ == "__main__":
    main()
