import admin_dashboard.bootstrap_env  # must be first to set env/secrets/logging
import logging

import streamlit as st

from admin_dashboard.config import SORT_LABELS, TYPE_FILTER_ALL, load_settings
from admin_dashboard.data.filters import DashboardState, derive_view, serialize_state
from admin_dashboard.data.loader import FetchResult, load_submissions
from admin_dashboard.data.models import submissions_to_frame
from admin_dashboard.ui.components.formatting import format_number, type_label
from admin_dashboard.ui.layout import get_state, reset_state, setup_page, sidebar_controls
from admin_dashboard.ui.pages import submissions
from admin_dashboard.ui.pages.context import PageContext

logger = logging.getLogger("admin_dashboard.app")

FETCH_RESULT_KEY = "sd_fetch_result"


def _active_filter_summary(state: DashboardState, total_rows: int) -> None:
    badges = []
    if state.type_filter != TYPE_FILTER_ALL:
        badges.append(f"구분: {type_label(state.type_filter)}")
    if state.start_date:
        end = state.end_date or state.start_date
        badges.append(f"기간: {state.start_date.isoformat()} ~ {end.isoformat()}")
    badges.append(f"정렬: {SORT_LABELS[state.sort_order]}")

    st.markdown("**Active Filters: " + " | ".join(badges) + "**")
    st.caption(f"Showing {format_number(total_rows, 0)} submissions after filters.")


def _fetch_once(settings) -> FetchResult:
    # One fetch per browser session; Streamlit reruns must not hit the API again
    if FETCH_RESULT_KEY not in st.session_state:
        st.session_state[FETCH_RESULT_KEY] = load_submissions(settings)
    return st.session_state[FETCH_RESULT_KEY]


def main() -> None:
    setup_page()
    st.title("Admin Dashboard")
    st.caption("사용자 문의 및 피드백 내역")
    settings = load_settings()

    if st.sidebar.button("🔄 Refresh Data"):
        st.session_state.pop(FETCH_RESULT_KEY, None)
        reset_state()

    with st.spinner("Loading submissions..."):
        result = _fetch_once(settings)
    submissions_df = submissions_to_frame(result.data, settings.timezone)

    state = get_state()
    sidebar_controls(state)
    view = derive_view(submissions_df, state, settings.timezone, settings.page_size)
    logger.debug(f"Active filters: {serialize_state(state)}, {view.total_count} rows")

    _active_filter_summary(state, view.total_count)

    context = PageContext(
        submissions_df=submissions_df,
        state=state,
        settings=settings,
        error=result.error,
    )
    submissions.render(view, context)


if __name__ == "__main__":
    main()
