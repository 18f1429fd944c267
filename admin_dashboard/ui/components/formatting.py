"""
Utility helpers for formatting counts, timestamps and submission labels.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from admin_dashboard.config import TYPE_LABELS


def format_number(value: Optional[float], decimals: int = 0) -> str:
    if value is None:
        return "–"
    try:
        return f"{value:,.{decimals}f}"
    except (TypeError, ValueError):
        return "–"


def format_datetime_ko(value: Optional[pd.Timestamp], fallback: str = "") -> str:
    """Render a timestamp the way the ko-KR locale does: ``2024. 1. 5. 오후 3:04:05``."""
    if value is None or pd.isna(value):
        return fallback
    meridiem = "오전" if value.hour < 12 else "오후"
    hour = value.hour % 12 or 12
    return (
        f"{value.year}. {value.month}. {value.day}. "
        f"{meridiem} {hour}:{value.minute:02d}:{value.second:02d}"
    )


def type_label(kind: str) -> str:
    return TYPE_LABELS.get(kind, kind)
