"""
Reusable helpers for rendering the submissions table and its pagination.
"""

from __future__ import annotations

from typing import Callable

import pandas as pd
import streamlit as st

from admin_dashboard.config import DEFAULT_TIMEZONE
from admin_dashboard.data.filters import DashboardView
from admin_dashboard.ui.components.formatting import format_datetime_ko, type_label

TABLE_COLUMNS = ["날짜", "구분", "이메일 / 피드백", "기관명"]


def prepare_display(rows: pd.DataFrame, tz: str = DEFAULT_TIMEZONE) -> pd.DataFrame:
    if rows.empty:
        return pd.DataFrame(columns=TABLE_COLUMNS)
    date_col, type_col, text_col, org_col = TABLE_COLUMNS
    created = rows["created_at"].dt.tz_convert(tz)
    return pd.DataFrame(
        {
            date_col: [format_datetime_ko(ts, fallback="Invalid Date") for ts in created],
            type_col: [type_label(kind) for kind in rows["type"]],
            text_col: rows["display_text"].fillna("").tolist(),
            org_col: [org if isinstance(org, str) and org else "-" for org in rows["organization"]],
        },
        index=rows["id"].tolist(),
    )


def render_submissions_table(rows: pd.DataFrame, tz: str = DEFAULT_TIMEZONE, height: int = 740) -> None:
    if rows.empty:
        st.info("데이터가 없습니다.")
        return

    st.dataframe(
        prepare_display(rows, tz),
        use_container_width=True,
        height=height,
        hide_index=True,
        column_config={
            "이메일 / 피드백": st.column_config.TextColumn("이메일 / 피드백", width="large"),
        },
    )


def render_pagination(
    view: DashboardView,
    on_previous: Callable[[], None],
    on_next: Callable[[int], None],
) -> None:
    if view.total_pages <= 1:
        return

    col_prev, col_label, col_next = st.columns([1, 2, 1])
    with col_prev:
        st.button(
            "← 이전",
            key="sd_page_prev",
            disabled=view.current_page <= 1,
            on_click=on_previous,
        )
    with col_label:
        st.markdown(f"페이지 {view.current_page} / {view.total_pages}")
    with col_next:
        st.button(
            "다음 →",
            key="sd_page_next",
            disabled=view.current_page >= view.total_pages,
            on_click=on_next,
            args=(view.total_pages,),
        )
