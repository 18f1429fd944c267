"""
Layout helpers for the Streamlit application (page setup, sidebar controls)
and the session-state plumbing for the dashboard state.
"""

from __future__ import annotations

from typing import Callable, List

import streamlit as st

from admin_dashboard.config import SORT_LABELS, TYPE_FILTER_OPTIONS
from admin_dashboard.data.filters import (
    DEFAULT_STATE,
    DashboardState,
    clear_date_filter,
    go_to_next_page,
    go_to_previous_page,
    set_date_bound,
    set_type_filter,
    toggle_sort_order,
)
from admin_dashboard.ui.components.formatting import type_label

STATE_KEY = "sd_dashboard_state"
TYPE_FILTER_KEY = "sd_type_filter"
START_DATE_KEY = "sd_date_start"
END_DATE_KEY = "sd_date_end"


def setup_page() -> None:
    """Set Streamlit page configuration."""
    st.set_page_config(
        page_title="Admin Dashboard",
        layout="wide",
        page_icon=":clipboard:",
    )


def get_state() -> DashboardState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = DEFAULT_STATE
    return st.session_state[STATE_KEY]


def _update_state(transition: Callable[..., DashboardState], *args) -> None:
    st.session_state[STATE_KEY] = transition(get_state(), *args)


def reset_state() -> None:
    _clear_state_keys([STATE_KEY, TYPE_FILTER_KEY, START_DATE_KEY, END_DATE_KEY])


def _clear_state_keys(keys: List[str]) -> None:
    for key in keys:
        if key in st.session_state:
            del st.session_state[key]


# ---------- Widget callbacks ----------

def _on_type_change() -> None:
    _update_state(set_type_filter, st.session_state[TYPE_FILTER_KEY])


def _on_start_change() -> None:
    _update_state(set_date_bound, "start", st.session_state.get(START_DATE_KEY))


def _on_end_change() -> None:
    _update_state(set_date_bound, "end", st.session_state.get(END_DATE_KEY))


def _on_clear_dates() -> None:
    st.session_state[START_DATE_KEY] = None
    st.session_state[END_DATE_KEY] = None
    _update_state(clear_date_filter)


def _on_toggle_sort() -> None:
    _update_state(toggle_sort_order)


def on_previous_page() -> None:
    _update_state(go_to_previous_page)


def on_next_page(total_pages: int) -> None:
    _update_state(go_to_next_page, total_pages)


def sidebar_controls(state: DashboardState) -> None:
    """
    Render the sidebar filter controls. Each control writes back to the
    dashboard state through its callback, so the next rerun derives the
    view from the updated state.
    """
    st.sidebar.header("Filters")

    st.sidebar.radio(
        "구분",
        options=list(TYPE_FILTER_OPTIONS),
        index=list(TYPE_FILTER_OPTIONS).index(state.type_filter),
        format_func=type_label,
        horizontal=True,
        key=TYPE_FILTER_KEY,
        on_change=_on_type_change,
    )

    col_start, col_end = st.sidebar.columns(2)
    with col_start:
        st.date_input(
            "📅 Start",
            value=None,
            key=START_DATE_KEY,
            on_change=_on_start_change,
        )
    with col_end:
        st.date_input(
            "End",
            value=None,
            key=END_DATE_KEY,
            on_change=_on_end_change,
            help="Leave empty to show the start day only.",
        )
    if state.start_date or state.end_date:
        st.sidebar.button("✕ Clear dates", key="sd_clear_dates", on_click=_on_clear_dates)

    st.sidebar.divider()
    st.sidebar.button(
        f"정렬: {SORT_LABELS[state.sort_order]}",
        key="sd_toggle_sort",
        on_click=_on_toggle_sort,
    )
