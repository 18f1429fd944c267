"""
CSV export of the filtered submissions.

The export covers the whole filtered and sorted set, not just the page on
screen. Every field is quoted and the text starts with a UTF-8 byte-order
mark so spreadsheet tools pick the right encoding for the Korean headers.
"""

from __future__ import annotations

import csv
import datetime as dt
from typing import List, Optional

import pandas as pd

from admin_dashboard.config import DEFAULT_TIMEZONE
from admin_dashboard.ui.components.formatting import format_datetime_ko, type_label

BOM = "\ufeff"
EXPORT_HEADERS: List[str] = ["날짜", "구분", "이메일/피드백", "기관명"]
EXPORT_MIME = "text/csv;charset=utf-8"


def _text_or_empty(value) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value)


def build_export_frame(filtered: pd.DataFrame, tz: str = DEFAULT_TIMEZONE) -> pd.DataFrame:
    if filtered.empty:
        return pd.DataFrame(columns=EXPORT_HEADERS)
    created = filtered["created_at"].dt.tz_convert(tz)
    date_col, type_col, text_col, org_col = EXPORT_HEADERS
    return pd.DataFrame(
        {
            date_col: [format_datetime_ko(ts) for ts in created],
            type_col: [type_label(kind) for kind in filtered["type"]],
            text_col: [_text_or_empty(v) for v in filtered["display_text"]],
            org_col: [_text_or_empty(v) for v in filtered["organization"]],
        }
    )


def submissions_to_csv(filtered: pd.DataFrame, tz: str = DEFAULT_TIMEZONE) -> str:
    export_df = build_export_frame(filtered, tz)
    body = export_df.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return BOM + body.rstrip("\n")


def export_file_name(today: Optional[dt.date] = None) -> str:
    today = today or dt.datetime.now(dt.timezone.utc).date()
    return f"submissions_{today.isoformat()}.csv"
