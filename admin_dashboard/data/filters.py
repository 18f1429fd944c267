"""
Dashboard state and the filter -> sort -> paginate derivation applied to the
submissions frame.

All functions here are pure: state transitions return a new ``DashboardState``
and ``derive_view`` recomputes the displayed rows from scratch.
"""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional, Tuple, Union

import pandas as pd

from admin_dashboard.config import (
    DEFAULT_TIMEZONE,
    PAGE_SIZE,
    SORT_ASC,
    SORT_DESC,
    TYPE_FILTER_ALL,
)

DateInput = Union[dt.date, str, None]

END_OF_DAY = dt.time(23, 59, 59, 999000)


@dataclass(frozen=True)
class DashboardState:
    type_filter: str = TYPE_FILTER_ALL
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    sort_order: str = SORT_DESC
    current_page: int = 1


DEFAULT_STATE = DashboardState()


@dataclass
class DashboardView:
    filtered: pd.DataFrame
    rows: pd.DataFrame
    total_count: int
    total_pages: int
    current_page: int


def _as_date(value: DateInput) -> Optional[dt.date]:
    """Return a datetime.date from a date, datetime or ISO string; None when unset."""
    if value is None or value == "":
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(str(value)[:10])


def date_window(
    start_date: DateInput,
    end_date: DateInput = None,
    tz: str = DEFAULT_TIMEZONE,
) -> Optional[Tuple[pd.Timestamp, pd.Timestamp]]:
    """Inclusive [start 00:00:00.000, end 23:59:59.999] window in ``tz``.

    Without a start date the date filter is off and None is returned. A
    missing end date makes the window cover the start day only.
    """
    start_day = _as_date(start_date)
    if start_day is None:
        return None
    end_day = _as_date(end_date) or start_day
    # A midnight skipped by DST starts at the first valid instant; a repeated
    # hour takes its earliest occurrence at the start and latest at the end.
    start = pd.Timestamp(dt.datetime.combine(start_day, dt.time.min)).tz_localize(
        tz, ambiguous=True, nonexistent="shift_forward"
    )
    end = pd.Timestamp(dt.datetime.combine(end_day, END_OF_DAY)).tz_localize(
        tz, ambiguous=False, nonexistent="shift_backward"
    )
    return start, end


def filter_by_type(df: pd.DataFrame, type_filter: str) -> pd.DataFrame:
    if type_filter == TYPE_FILTER_ALL or df.empty:
        return df
    return df[df["type"] == type_filter]


def filter_by_date(
    df: pd.DataFrame,
    start_date: DateInput,
    end_date: DateInput = None,
    tz: str = DEFAULT_TIMEZONE,
) -> pd.DataFrame:
    window = date_window(start_date, end_date, tz)
    if window is None or df.empty:
        return df
    start, end = window
    # NaT compares False, so unparseable timestamps drop out here
    mask = (df["created_at"] >= start) & (df["created_at"] <= end)
    return df[mask]


def sort_by_created_at(df: pd.DataFrame, sort_order: str = SORT_DESC) -> pd.DataFrame:
    """Oldest-first stable sort, reversed for newest-first.

    Unparseable timestamps count as the oldest rows.
    """
    if df.empty:
        return df
    ascending = df.sort_values("created_at", kind="mergesort", na_position="first")
    if sort_order == SORT_ASC:
        return ascending
    return ascending.iloc[::-1]


def total_pages_for(count: int, page_size: int = PAGE_SIZE) -> int:
    return max(1, math.ceil(count / page_size))


def paginate(df: pd.DataFrame, page: int, page_size: int = PAGE_SIZE) -> pd.DataFrame:
    offset = (page - 1) * page_size
    return df.iloc[offset:offset + page_size]


def apply_dashboard_filters(
    df: pd.DataFrame,
    state: DashboardState,
    tz: str = DEFAULT_TIMEZONE,
) -> pd.DataFrame:
    """Type filter, then date filter, then sort. No pagination."""
    filtered = filter_by_type(df, state.type_filter)
    filtered = filter_by_date(filtered, state.start_date, state.end_date, tz)
    filtered = sort_by_created_at(filtered, state.sort_order)
    if filtered is df:
        filtered = df.copy()
    filtered.attrs["applied_filters"] = serialize_state(state)
    return filtered


def derive_view(
    df: pd.DataFrame,
    state: DashboardState,
    tz: str = DEFAULT_TIMEZONE,
    page_size: int = PAGE_SIZE,
) -> DashboardView:
    filtered = apply_dashboard_filters(df, state, tz)
    return DashboardView(
        filtered=filtered,
        rows=paginate(filtered, state.current_page, page_size),
        total_count=len(filtered),
        total_pages=total_pages_for(len(filtered), page_size),
        current_page=state.current_page,
    )


# ---------- State transitions ----------

def set_type_filter(state: DashboardState, type_filter: str) -> DashboardState:
    return replace(state, type_filter=type_filter, current_page=1)


def set_date_bound(state: DashboardState, bound: str, value: DateInput) -> DashboardState:
    if bound == "start":
        return replace(state, start_date=_as_date(value), current_page=1)
    if bound == "end":
        return replace(state, end_date=_as_date(value), current_page=1)
    raise ValueError(f"Unknown date bound {bound!r}")


def clear_date_filter(state: DashboardState) -> DashboardState:
    return replace(state, start_date=None, end_date=None, current_page=1)


def toggle_sort_order(state: DashboardState) -> DashboardState:
    new_order = SORT_ASC if state.sort_order == SORT_DESC else SORT_DESC
    return replace(state, sort_order=new_order, current_page=1)


def go_to_previous_page(state: DashboardState) -> DashboardState:
    return replace(state, current_page=max(1, state.current_page - 1))


def go_to_next_page(state: DashboardState, total_pages: int) -> DashboardState:
    return replace(state, current_page=min(max(1, total_pages), state.current_page + 1))


def serialize_state(state: DashboardState) -> Dict[str, Any]:
    """
    Convert the DashboardState dataclass to a JSON-serialisable dictionary to be
    stored in session_state or used for logging/debugging.
    """
    return {
        "type_filter": state.type_filter,
        "date_range": tuple(
            v.isoformat() if v is not None else None for v in (state.start_date, state.end_date)
        ),
        "sort_order": state.sort_order,
        "current_page": state.current_page,
    }
