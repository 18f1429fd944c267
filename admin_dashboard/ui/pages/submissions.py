from __future__ import annotations

import streamlit as st

from admin_dashboard.data.export import EXPORT_MIME, export_file_name, submissions_to_csv
from admin_dashboard.data.filters import DashboardView
from admin_dashboard.ui.components.formatting import format_number
from admin_dashboard.ui.components.tables import render_pagination, render_submissions_table
from admin_dashboard.ui.layout import on_next_page, on_previous_page
from admin_dashboard.ui.pages.context import PageContext


def _render_header(view: DashboardView, context: PageContext) -> None:
    col_total, col_export, _ = st.columns([1, 1, 3])
    with col_total:
        st.metric("Total", format_number(view.total_count, 0))
    with col_export:
        # Built from the full filtered set, not the visible page
        csv_text = submissions_to_csv(view.filtered, context.settings.timezone)
        st.download_button(
            "📊 Sheets로 내보내기 (CSV)",
            data=csv_text.encode("utf-8"),
            file_name=export_file_name(),
            mime=EXPORT_MIME,
            key="sd_export_csv",
        )


def render(view: DashboardView, context: PageContext) -> None:
    _render_header(view, context)

    if context.error:
        st.error(context.error, icon="⚠️")

    render_submissions_table(view.rows, context.settings.timezone)
    render_pagination(view, on_previous_page, on_next_page)
